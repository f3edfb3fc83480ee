"""
LocalStorageAdapter - Implements IResultStore on the local filesystem.

Mirrors the actor storage layout so runs look the same locally and hosted:

  storage/
    datasets/default/000000001.json          one file per pushed row
    key_value_stores/default/OUTPUT.json     JSON values
    key_value_stores/default/step_01_....png binary values (screenshots)
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..domain.interfaces.i_result_store import IResultStore

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "application/json": ".json",
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "text/html": ".html",
    "text/plain": ".txt",
}


class LocalStorageAdapter(IResultStore):
    def __init__(self, storage_dir: str = "storage", dataset: str = "default", store: str = "default"):
        self.root = Path(storage_dir)
        self.dataset_dir = self.root / "datasets" / dataset
        self.kv_dir = self.root / "key_value_stores" / store

    def _next_row_path(self) -> Path:
        existing = [int(p.stem) for p in self.dataset_dir.glob("*.json") if p.stem.isdigit()]
        return self.dataset_dir / f"{max(existing, default=0) + 1:09d}.json"

    async def push_row(self, row: dict) -> None:
        self.dataset_dir.mkdir(parents=True, exist_ok=True)
        path = self._next_row_path()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(row, f, indent=2)
        logger.debug(f"[Store] Row written to {path}")

    async def set_value(self, key: str, value: Any, content_type: str = "application/json") -> None:
        self.kv_dir.mkdir(parents=True, exist_ok=True)
        # A key is stored once; drop a stale copy saved under another extension
        for stale in self.kv_dir.glob(f"{key}.*"):
            stale.unlink()

        ext = _EXTENSIONS.get(content_type, ".bin")
        path = self.kv_dir / f"{key}{ext}"
        if isinstance(value, (bytes, bytearray)):
            path.write_bytes(bytes(value))
        elif content_type == "application/json":
            with open(path, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2)
        else:
            path.write_text(str(value), encoding="utf-8")
        logger.debug(f"[Store] {key} written to {path}")

    async def get_value(self, key: str) -> Optional[Any]:
        path = self.kv_dir / f"{key}.json"
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
