"""Tests for the ServiceLogger wrapper and setup_logging.

This module verifies:
- structured messages are pretty-printed, pydantic models as JSON
- pprint=False falls back to str()
- transaction ids prefix every message of a bound logger
- level names, including the warn/fatal/panic aliases, are understood
- setup_logging configures a named logger once
"""

import logging
from io import StringIO

import pytest
from pydantic import BaseModel

from concordances.logging import ServiceLogger, parse_log_level, setup_logging


def capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger, stream


class TestServiceLogger:
    """Tests for ServiceLogger formatting and delegation."""

    def test_pprint_formats_dict(self) -> None:
        logger, stream = capture("test_pprint_dict")

        ServiceLogger(logger).info({"PORT": 8080, "LOG_LEVEL": {"app": "info"}})

        output = stream.getvalue()
        assert "'PORT': 8080" in output
        assert "{" in output

    def test_pprint_false_uses_str(self) -> None:
        logger, stream = capture("test_pprint_false")

        ServiceLogger(logger).info(["a", "b"], pprint=False)

        assert "['a', 'b']" in stream.getvalue()

    def test_pydantic_model_uses_model_dump_json(self) -> None:
        """Pydantic models are rendered as indented JSON."""
        logger, stream = capture("test_pydantic")

        class Request(BaseModel):
            authority: str
            values: list[str]

        ServiceLogger(logger).info(Request(authority="LEI", values=["X"]))

        output = stream.getvalue()
        assert '"authority": "LEI"' in output
        assert '"values"' in output

    def test_format_args_with_strings(self) -> None:
        logger, stream = capture("test_args")

        ServiceLogger(logger).info("Loaded %d concepts from %s", 6, "fixtures")

        assert "Loaded 6 concepts from fixtures" in stream.getvalue()

    def test_all_levels(self) -> None:
        logger, stream = capture("test_all_levels")
        log = ServiceLogger(logger)

        log.debug("d")
        log.info("i")
        log.warning("w")
        log.error("e")
        log.critical("c")

        output = stream.getvalue()
        for level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            assert level in output

    def test_disabled_level_is_skipped(self) -> None:
        logger, stream = capture("test_disabled")
        logger.setLevel(logging.WARNING)

        ServiceLogger(logger).info({"not": "shown"})

        assert stream.getvalue() == ""

    def test_exception_includes_traceback(self) -> None:
        logger, stream = capture("test_exception")

        try:
            raise ValueError("store unreachable")
        except ValueError:
            ServiceLogger(logger).exception("lookup failed")

        output = stream.getvalue()
        assert "lookup failed" in output
        assert "ValueError: store unreachable" in output

    def test_transaction_id_prefix(self) -> None:
        logger, stream = capture("test_tid")
        log = ServiceLogger(logger)

        log.with_transaction_id("tid_abc").info("handling request")
        log.info("no transaction")

        lines = stream.getvalue().splitlines()
        assert lines[0] == "INFO - transaction_id=tid_abc handling request"
        assert lines[1] == "INFO - no transaction"

    def test_transaction_id_is_not_a_format_string(self) -> None:
        logger, stream = capture("test_tid_percent")

        ServiceLogger(logger).with_transaction_id("tid_%s%d").info("request %s", "x")

        assert stream.getvalue().splitlines() == ["INFO - transaction_id=tid_%s%d request x"]

    def test_bound_logger_shares_underlying_logger(self) -> None:
        logger, _ = capture("test_shared")
        log = ServiceLogger(logger)
        assert log.with_transaction_id("tid_x")._logger is logger  # pylint: disable=protected-access

    def test_delegates_to_underlying_logger(self) -> None:
        logger = logging.getLogger("test_delegate")
        log = ServiceLogger(logger)

        log.setLevel(logging.WARNING)

        assert logger.level == logging.WARNING
        assert log.handlers == logger.handlers


class TestParseLogLevel:
    @pytest.mark.parametrize(
        "name,level",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warn", logging.WARNING),
            ("WARN", logging.WARNING),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("fatal", logging.CRITICAL),
            ("panic", logging.CRITICAL),
            (logging.DEBUG, logging.DEBUG),
        ],
    )
    def test_known_levels(self, name, level: int) -> None:
        assert parse_log_level(name) == level

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError, match="unknown log level"):
            parse_log_level("chatty")


class TestSetupLogging:
    def test_returns_service_logger(self) -> None:
        log = setup_logging("test-setup", "debug")
        assert isinstance(log, ServiceLogger)
        assert log.name == "test-setup"
        assert log.level == logging.DEBUG

    def test_does_not_duplicate_handlers(self) -> None:
        first = setup_logging("test-setup-once", "info")
        second = setup_logging("test-setup-once", "warn")

        assert first._logger is second._logger  # pylint: disable=protected-access
        assert len(second.handlers) == 1
        assert second.level == logging.WARNING
