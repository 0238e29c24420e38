"""Tests for Settings validation and logging setup"""

import logging

import pytest
from pydantic import ValidationError

from activutils.core.config import Settings
from activutils.core.logging import LOGGER_NAME, setup_logging


@pytest.fixture
def package_logger():
    """Restore the package logger after setup_logging replaced its handlers"""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestSettings:
    def test_defaults(self) -> None:
        config = Settings(_env_file=None)
        assert config.UNIT_SYSTEM_KEY == "CurrentUnitSystem"
        assert config.LOCALE_DOMAIN == "activutils"
        assert config.is_sqlite

    def test_log_level_is_normalized(self) -> None:
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="chatty")

    def test_blank_overrides_are_none(self) -> None:
        config = Settings(LOCALE="  ", TIMEZONE="", LOG_FILE="")
        assert config.LOCALE is None
        assert config.TIMEZONE is None
        assert config.LOG_FILE is None

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("LOCALE", "de_DE")
        assert Settings().LOCALE == "de_DE"


class TestSetupLogging:
    def test_console_only_by_default(self, package_logger) -> None:
        logger = setup_logging(Settings(LOG_FILE=None, LOG_LEVEL="WARNING"))
        assert logger is package_logger
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_rotating_file_handler(self, package_logger, tmp_path) -> None:
        log_file = tmp_path / "logs" / "activutils.log"
        logger = setup_logging(Settings(LOG_FILE=str(log_file)))

        assert len(logger.handlers) == 2
        logging.getLogger("activutils.utils.date_helpers").warning("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text()
