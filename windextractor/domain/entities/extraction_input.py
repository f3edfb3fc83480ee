"""
ExtractionInput - the configuration record a run is started with.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..exceptions import MissingInputError

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _coerce_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        return default
    return bool(value)


@dataclass(frozen=True)
class ExtractionInput:
    address: str
    debug_screenshots: bool = True

    @classmethod
    def create(cls, address: Optional[str], debug_screenshots: bool = True) -> "ExtractionInput":
        """Validate and build. A missing or blank address is fatal."""
        if not address or not str(address).strip():
            raise MissingInputError("Address is required")
        return cls(address=str(address).strip(), debug_screenshots=debug_screenshots)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ExtractionInput":
        """Build from an actor-style INPUT record: {address, debugScreenshots}."""
        data = data or {}
        return cls.create(
            address=data.get("address"),
            debug_screenshots=_coerce_bool(data.get("debugScreenshots"), default=True),
        )
