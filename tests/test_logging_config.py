"""Test logging setup and the structured adapter logger."""

import io
import logging

import pytest

from federated_search.utils.logging_config import QUIET_LOGGERS, StructuredLogger, setup_logging


class TestSetupLogging:
    """Test setup_logging."""

    def test_package_level_and_quiet_loggers(self):
        stream = io.StringIO()

        setup_logging(level="debug", include_timestamp=False, stream=stream)
        try:
            logging.getLogger("federated_search.core.engine").debug("fan-out started")

            assert logging.getLogger("federated_search").level == logging.DEBUG
            for name in QUIET_LOGGERS:
                assert logging.getLogger(name).level == logging.WARNING
            assert "federated_search.core.engine - DEBUG - fan-out started" in stream.getvalue()
        finally:
            setup_logging(level="WARNING")

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging(level="chatty")


class TestStructuredLogger:
    """Test bound context formatting."""

    def test_context_appended(self, caplog):
        log = StructuredLogger("federated_search.test").with_context(entity_type="event", attempt=2)

        with caplog.at_level(logging.ERROR, logger="federated_search.test"):
            log.error("Provider fetch failed: timeout")

        assert caplog.records[-1].getMessage() == "Provider fetch failed: timeout [entity_type=event attempt=2]"

    def test_with_context_leaves_parent_unchanged(self):
        parent = StructuredLogger("federated_search.test")
        child = parent.with_context(entity_type="faq")

        assert parent.context == {}
        assert child.context == {"entity_type": "faq"}
        assert child.logger is parent.logger
