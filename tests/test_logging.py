"""
Tests for the structured JSON logger
"""
import json
import logging

import pytest

from lode_zone.logging import LogEvent, StructuredLogger


@pytest.fixture
def logger():
    return StructuredLogger(component="test", logger_name="lode_zone.test_logging")


def _entries(caplog):
    return [json.loads(r.getMessage()) for r in caplog.records if r.name == "lode_zone.test_logging"]


class TestStructuredLogger:
    """Tests for the JSON entries emitted by StructuredLogger"""

    def test_entry_fields(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger="lode_zone.test_logging"):
            logger.info(
                event=LogEvent.REBALANCE_TRIGGERED,
                message="Rebalanced 1 zone(s)",
                metadata={'zones': ['center'], 'balance_score': 0.0769},
            )

        (entry,) = _entries(caplog)
        assert entry["component"] == "test"
        assert entry["level"] == "INFO"
        assert entry["event"] == "zone.rebalance.triggered"
        assert entry["metadata"] == {'zones': ['center'], 'balance_score': 0.0769}
        assert entry["timestamp"].endswith("+00:00")

    def test_debug_skipped_below_level(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger="lode_zone.test_logging"):
            logger.debug(event=LogEvent.UNKNOWN_ZONE_IGNORED, message="Ignoring usage")
        assert _entries(caplog) == []

    def test_debug_emitted_when_enabled(self, logger, caplog):
        logger.set_level(logging.DEBUG)
        with caplog.at_level(logging.DEBUG, logger="lode_zone.test_logging"):
            logger.debug(
                event=LogEvent.UNKNOWN_ZONE_IGNORED,
                message="Ignoring usage for unknown zone 'gone'",
                metadata={'zone_id': 'gone'},
            )
        assert [e["event"] for e in _entries(caplog)] == ["zone.unknown_ignored"]

    def test_error_carries_exception(self, logger, caplog):
        with caplog.at_level(logging.ERROR, logger="lode_zone.test_logging"):
            logger.error(
                event=LogEvent.INVALID_STATE,
                message="Zone selection attempted on an empty layout",
                exc_info=RuntimeError("no zones"),
            )
        (entry,) = _entries(caplog)
        assert entry["exception"] == {'type': 'RuntimeError', 'message': 'no zones'}

    def test_non_json_metadata_stringified(self, logger, caplog):
        with caplog.at_level(logging.INFO, logger="lode_zone.test_logging"):
            logger.info(
                event=LogEvent.MANAGER_DESTROYED,
                message="Zone manager destroyed",
                metadata={'final_stats': object()},
            )
        (entry,) = _entries(caplog)
        assert isinstance(entry["metadata"]["final_stats"], str)
