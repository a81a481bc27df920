"""Tests for environment-driven settings and logging setup."""

import logging
import os

import pytest
from pydantic import ValidationError

from rubberduck import logging_config
from rubberduck.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip RUBBERDUCK_* variables so each test sees only what it sets."""
    for name in list(os.environ):
        if name.startswith("RUBBERDUCK_"):
            monkeypatch.delenv(name)


def _load(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


class TestSettings:
    def test_defaults(self):
        settings = _load()
        assert settings.log_level == "INFO"
        assert settings.adaptive_context is True
        assert settings.cors_origins == ["http://localhost:3000"]

    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("RUBBERDUCK_LOG_LEVEL", "debug")
        monkeypatch.setenv("RUBBERDUCK_ADAPTIVE_CONTEXT", "off")
        monkeypatch.setenv(
            "RUBBERDUCK_CORS_ORIGINS", "https://duck.example, http://localhost:5173,"
        )
        settings = _load()
        assert settings.log_level == "DEBUG"
        assert settings.adaptive_context is False
        assert settings.cors_origins == ["https://duck.example", "http://localhost:5173"]

    def test_unprefixed_variables_ignored(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert _load().log_level == "INFO"

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_truthy_flags(self, monkeypatch, raw: str):
        monkeypatch.setenv("RUBBERDUCK_ADAPTIVE_CONTEXT", raw)
        assert _load().adaptive_context is True

    def test_invalid_flag_rejected(self, monkeypatch):
        monkeypatch.setenv("RUBBERDUCK_ADAPTIVE_CONTEXT", "maybe")
        with pytest.raises(ValidationError, match="adaptive_context"):
            _load()

    def test_unknown_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("RUBBERDUCK_LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError, match="log_level"):
            _load()

    def test_cors_origins_accepts_list(self):
        assert _load(cors_origins=["https://a.example"]).cors_origins == ["https://a.example"]

    def test_reads_env_file_without_touching_environ(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "RUBBERDUCK_LOG_LEVEL=warning\nRUBBERDUCK_ADAPTIVE_CONTEXT=false\n"
        )
        settings = Settings(_env_file=env_file)
        assert settings.log_level == "WARNING"
        assert settings.adaptive_context is False
        assert "RUBBERDUCK_LOG_LEVEL" not in os.environ

    def test_environment_overrides_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("RUBBERDUCK_LOG_LEVEL=warning\n")
        monkeypatch.setenv("RUBBERDUCK_LOG_LEVEL", "error")
        assert Settings(_env_file=env_file).log_level == "ERROR"


class TestSetupLogging:
    @pytest.fixture
    def parent_logger(self, monkeypatch):
        monkeypatch.setattr(logging_config, "_logging_configured", False)
        logger = logging.getLogger("rubberduck")
        saved = (logger.level, logger.propagate, list(logger.handlers))
        yield logger
        logger.setLevel(saved[0])
        logger.propagate = saved[1]
        logger.handlers[:] = saved[2]

    def test_configures_parent_logger_once(self, parent_logger):
        handlers_before = len(parent_logger.handlers)
        logging_config.setup_logging("debug")
        logging_config.setup_logging("error")
        assert parent_logger.level == logging.DEBUG
        assert parent_logger.propagate is False
        assert len(parent_logger.handlers) == handlers_before + 1

    def test_unknown_level_raises(self, parent_logger):
        handlers_before = len(parent_logger.handlers)
        with pytest.raises(ValueError, match="Unknown log level"):
            logging_config.setup_logging("LOUD")
        assert len(parent_logger.handlers) == handlers_before
        assert logging_config._logging_configured is False
