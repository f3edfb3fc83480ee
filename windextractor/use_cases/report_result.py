"""
ReportResultUseCase - hands the finished record to storage.
One dataset row plus the OUTPUT snapshot in the key-value store.
"""

import json
import logging

from ..domain.entities.extraction_result import ExtractionResult
from ..domain.interfaces.i_result_store import OUTPUT_KEY, IResultStore

logger = logging.getLogger(__name__)


class ReportResultUseCase:
    def __init__(self, store: IResultStore):
        self.store = store

    async def execute(self, result: ExtractionResult) -> dict:
        record = result.to_dict()
        await self.store.push_row(record)
        logger.info("[Store] Result saved to dataset")
        await self.store.set_value(OUTPUT_KEY, record)
        logger.info(f"[Store] Result saved under key {OUTPUT_KEY}")
        logger.info(json.dumps(record, indent=2))
        return record
