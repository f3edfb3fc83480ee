"""
Tests for the ExtractionResult entity.
Covers defaults, the success/failure invariant, finalization and serialization.
"""

import pytest

from windextractor.domain.entities.extraction_result import ExtractionResult
from windextractor.domain.exceptions import ResultFinalizedError
from tests.conftest import SAMPLE_ADDRESS, make_result


class TestDefaults:
    def test_start_echoes_address(self):
        result = ExtractionResult.start(SAMPLE_ADDRESS)
        assert result.address == SAMPLE_ADDRESS

    def test_fixed_labels(self):
        result = ExtractionResult.start(SAMPLE_ADDRESS)
        assert result.unit == "mph"
        assert result.risk_category == "II"
        assert result.source == "ASCE Hazard Tool"

    def test_starts_unsuccessful_without_value_or_error(self):
        result = ExtractionResult.start(SAMPLE_ADDRESS)
        assert result.success is False
        assert result.wind_speed is None
        assert result.error is None

    def test_timestamp_is_iso_utc(self):
        result = ExtractionResult.start(SAMPLE_ADDRESS)
        assert result.timestamp.endswith("Z")
        assert "T" in result.timestamp


class TestRecording:
    def test_record_wind_speed_marks_success(self):
        result = make_result()
        result.record_wind_speed("114")
        assert result.success is True
        assert result.wind_speed == "114"
        assert result.error is None

    def test_record_failure_sets_error(self):
        result = make_result()
        result.record_failure("boom")
        assert result.success is False
        assert result.error == "boom"

    def test_failure_after_value_clears_value(self):
        """Exactly one of windSpeed / error is ever set."""
        result = make_result()
        result.record_wind_speed("114")
        result.record_failure("later step blew up")
        assert result.wind_speed is None
        assert result.success is False

    def test_value_after_failure_clears_error(self):
        result = make_result()
        result.record_failure("first try")
        result.record_wind_speed("99")
        assert result.error is None
        assert result.success is True

    def test_empty_error_message_gets_placeholder(self):
        result = make_result()
        result.record_failure("")
        assert result.error


class TestFinalize:
    def test_finalize_marks_record_closed(self):
        result = make_result()
        result.record_wind_speed("114")
        assert result.finalize() is result
        assert result.is_finalized is True

    def test_finalize_without_outcome_records_error(self):
        result = make_result().finalize()
        assert result.success is False
        assert result.error

    @pytest.mark.parametrize("mutate", [
        lambda r: r.record_wind_speed("120"),
        lambda r: r.record_failure("nope"),
        lambda r: r.finalize(),
    ])
    def test_mutation_after_finalize_raises(self, mutate):
        result = make_result()
        result.record_wind_speed("114")
        result.finalize()
        with pytest.raises(ResultFinalizedError):
            mutate(result)


class TestToDict:
    def test_uses_camel_case_keys(self):
        result = make_result()
        result.record_wind_speed("114")
        assert result.to_dict() == {
            "address": SAMPLE_ADDRESS,
            "windSpeed": "114",
            "unit": "mph",
            "riskCategory": "II",
            "source": "ASCE Hazard Tool",
            "timestamp": "2025-12-19T12:00:00.000Z",
            "success": True,
            "error": None,
        }

    def test_does_not_leak_internal_flag(self):
        assert "_finalized" not in make_result().to_dict()
