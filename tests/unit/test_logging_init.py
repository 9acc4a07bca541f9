from __future__ import annotations

import logging
from io import StringIO

from lead_importer.logging.init import (
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    """Test that setup_logging creates a single stdout handler with labeled format."""
    logger = setup_logging()

    assert logger.name == "lead_importer"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()

    assert first is second
    assert len(second.handlers) == 1


def test_get_logger_returns_configured_logger():
    configured = setup_logging()

    assert get_logger() is configured


def test_labeled_formatter_prefixes():
    """Test INFO|WARN|ERROR|SUMMARY prefixes on a throwaway logger."""
    captured = StringIO()
    logger = logging.getLogger("test_lead_importer_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_log_summary_writes_summary_label(capsys):
    setup_logging()

    log_summary("rows=3 imported=1 duplicates=1 rejected=1 assignment=auto")

    out = capsys.readouterr().out
    assert "SUMMARY rows=3 imported=1 duplicates=1 rejected=1 assignment=auto" in out


def test_module_loggers_share_the_handler(capsys):
    setup_logging()

    logging.getLogger("lead_importer.services.operators").warning("operator list unavailable")

    assert "WARN operator list unavailable" in capsys.readouterr().out
