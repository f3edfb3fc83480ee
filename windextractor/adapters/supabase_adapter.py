"""
SupabaseStorageAdapter - Implements IResultStore.
Dataset rows go to a PostgREST table; key-value entries (the OUTPUT record
and debug screenshots) go to a Supabase Storage bucket.
Uses the service role key (backend only).
"""

import json
import logging
from typing import Any, Optional

from supabase import Client, create_client

from ..domain.interfaces.i_result_store import IResultStore

logger = logging.getLogger(__name__)


def _result_to_row(record: dict) -> dict:
    """Map the camelCase output record onto snake_case columns."""
    return {
        "address": record.get("address"),
        "wind_speed": record.get("windSpeed"),
        "unit": record.get("unit"),
        "risk_category": record.get("riskCategory"),
        "source": record.get("source"),
        "extracted_at": record.get("timestamp"),
        "success": bool(record.get("success")),
        "error": record.get("error"),
    }


def _object_path(key: str, content_type: str) -> str:
    ext = {"image/png": "png", "application/json": "json"}.get(content_type, "bin")
    return f"{key}.{ext}"


class SupabaseStorageAdapter(IResultStore):
    def __init__(self, url: str, key: str, table: str = "wind_speed_results", bucket: str = "wind-speed-snapshots"):
        self.client: Client = create_client(url, key)
        self.table = table
        self.bucket = bucket

    async def push_row(self, row: dict) -> None:
        self.client.table(self.table).insert(_result_to_row(row)).execute()
        logger.debug(f"[Store] Row inserted into {self.table}")

    async def set_value(self, key: str, value: Any, content_type: str = "application/json") -> None:
        if isinstance(value, (bytes, bytearray)):
            payload = bytes(value)
        else:
            payload = json.dumps(value).encode("utf-8")
        path = _object_path(key, content_type)
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=payload,
            file_options={"content-type": content_type, "upsert": "true"},
        )
        logger.debug(f"[Store] {key} uploaded to {self.bucket}/{path}")

    async def get_value(self, key: str) -> Optional[Any]:
        try:
            data = self.client.storage.from_(self.bucket).download(_object_path(key, "application/json"))
        except Exception as e:
            logger.debug(f"[Store] {key} not found in {self.bucket}: {e}")
            return None
        return json.loads(data)
