"""
ExtractionResult Entity - the one record produced per invocation.
No framework dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..exceptions import ResultFinalizedError

DEFAULT_UNIT = "mph"
DEFAULT_RISK_CATEGORY = "II"
DEFAULT_SOURCE = "ASCE Hazard Tool"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class ExtractionResult:
    """
    Outcome of one wind speed lookup.

    Created at pipeline start with defaults, filled in as steps succeed or
    fail, then finalized exactly once. Once finalized it is read-only.
    """

    address: str
    wind_speed: Optional[str] = None
    unit: str = DEFAULT_UNIT
    risk_category: str = DEFAULT_RISK_CATEGORY
    source: str = DEFAULT_SOURCE
    timestamp: str = field(default_factory=_utc_now_iso)
    success: bool = False
    error: Optional[str] = None
    _finalized: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def start(cls, address: str) -> "ExtractionResult":
        """Factory for a fresh record at the start of a run."""
        return cls(address=address)

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def _check_open(self) -> None:
        if self._finalized:
            raise ResultFinalizedError("ExtractionResult is already finalized")

    def record_wind_speed(self, value: str) -> None:
        """Store the extracted value; clears any earlier error."""
        self._check_open()
        self.wind_speed = value
        self.success = True
        self.error = None

    def record_failure(self, error: str) -> None:
        """Mark the run as failed with a human-readable cause."""
        self._check_open()
        self.wind_speed = None
        self.success = False
        self.error = error or "Unknown error"

    def finalize(self) -> "ExtractionResult":
        """
        Close the record. A record that never saw a value nor an error is
        closed as a failure so that exactly one of windSpeed/error is set.
        """
        self._check_open()
        if not self.success and not self.error:
            self.error = "Extraction finished without a result"
        self._finalized = True
        return self

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "windSpeed": self.wind_speed,
            "unit": self.unit,
            "riskCategory": self.risk_category,
            "source": self.source,
            "timestamp": self.timestamp,
            "success": self.success,
            "error": self.error,
        }
