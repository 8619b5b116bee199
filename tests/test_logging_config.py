"""
Tests for engine logging setup.
"""

import logging

import pytest

from logging_config import (
    DEBUG_LOG_FILE,
    ENGINE_PACKAGES,
    MAIN_LOG_FILE,
    LogContext,
    configure_module_logger,
    setup_logging,
    setup_negotiation_logging,
    teardown_logging,
)


@pytest.fixture(autouse=True)
def clean_logging():
    yield
    teardown_logging()
    for name in ("negotiation.engine", "negotiation.negotiation_desk", "free_agency.fa_week_manager"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestSetupLogging:

    def test_handlers_attached_to_every_package(self):
        loggers = setup_logging(level="DEBUG", enable_console=True)

        assert [l.name for l in loggers] == list(ENGINE_PACKAGES)
        for logger in loggers:
            assert logger.level == logging.DEBUG
            assert len(logger.handlers) == 1

    def test_repeat_setup_does_not_duplicate(self):
        setup_logging(level="INFO")
        setup_logging(level="WARNING")
        assert len(logging.getLogger("cap_ledger").handlers) == 1
        assert logging.getLogger("cap_ledger").level == logging.WARNING

    def test_file_logging(self, tmp_path):
        setup_logging(level="DEBUG", log_dir=str(tmp_path), enable_console=False, enable_file=True)

        logging.getLogger("free_agency.fa_week_manager").debug("week processed")
        logging.getLogger("negotiation.engine").info("session opened")
        teardown_logging()

        main_log = (tmp_path / MAIN_LOG_FILE).read_text(encoding="utf-8")
        debug_log = (tmp_path / DEBUG_LOG_FILE).read_text(encoding="utf-8")

        assert "session opened" in main_log
        assert "week processed" not in main_log
        assert "week processed" in debug_log

    def test_teardown_removes_handlers(self):
        setup_logging()
        teardown_logging()
        for package in ENGINE_PACKAGES:
            assert logging.getLogger(package).handlers == []


class TestModuleLoggers:

    def test_configure_module_logger(self):
        logger = configure_module_logger("negotiation.engine", level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_setup_negotiation_logging(self):
        setup_negotiation_logging(level="WARNING")
        assert logging.getLogger("negotiation.negotiation_desk").level == logging.WARNING

    def test_log_context_restores_level(self):
        logger = logging.getLogger("free_agency.fa_week_manager")
        logger.setLevel(logging.INFO)

        with LogContext(logger, "DEBUG"):
            assert logger.level == logging.DEBUG

        assert logger.level == logging.INFO
