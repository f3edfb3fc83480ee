"""
IResultStore - Port: where results and diagnostic snapshots go.
Modelled as a dataset (append-only rows) plus a key-value store.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

OUTPUT_KEY = "OUTPUT"
INPUT_KEY = "INPUT"


class IResultStore(ABC):
    """Port for persisting extraction output."""

    @abstractmethod
    async def push_row(self, row: dict) -> None:
        """Append one row to the output dataset."""
        pass

    @abstractmethod
    async def set_value(self, key: str, value: Any, content_type: str = "application/json") -> None:
        """Store a named value. Bytes are stored raw, anything else as JSON."""
        pass

    @abstractmethod
    async def get_value(self, key: str) -> Optional[Any]:
        """Read a named JSON value, or None if absent."""
        pass
