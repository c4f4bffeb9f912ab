from __future__ import annotations

import logging
from io import StringIO

from roster_import.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    enable_debug,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def test_setup_logging_configures_app_logger() -> None:
    logger = setup_logging(StringIO())
    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent() -> None:
    first = setup_logging(StringIO())
    second = setup_logging(StringIO())
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_labeled_prefixes_for_module_loggers() -> None:
    out = StringIO()
    setup_logging(out)
    module_logger = logging.getLogger("roster_import.services.batch")

    module_logger.info("importing parents.csv as parents")
    module_logger.warning("row 2 of parents.csv skipped")
    module_logger.error("file broken.xlsx could not be read")
    module_logger.debug("hidden at INFO")
    log_summary("files=1 created=2")

    assert out.getvalue().splitlines() == [
        "INFO importing parents.csv as parents",
        "WARN row 2 of parents.csv skipped",
        "ERROR file broken.xlsx could not be read",
        "SUMMARY files=1 created=2",
    ]


def test_enable_debug_lowers_levels() -> None:
    out = StringIO()
    logger = setup_logging(out)
    enable_debug()
    logger.debug("synthesized +254712345600")
    assert logger.level == logging.DEBUG
    assert "DEBUG synthesized +254712345600" in out.getvalue()


def test_reset_logging_detaches_handlers() -> None:
    logger = setup_logging(StringIO())
    reset_logging()
    assert logger.handlers == []
    assert logger.propagate is True
    assert logging.getLevelName(SUMMARY_LEVEL) == "SUMMARY"
