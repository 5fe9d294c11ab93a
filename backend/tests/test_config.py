"""Tests for settings and logging setup."""

import logging

from config import Settings
from logging_config import setup_logging


class TestSettings:
    def test_key_list_skips_blanks(self):
        settings = Settings(gemini_api_key="a", gemini_api_key_2="", gemini_api_key_3="c")
        assert settings.gemini_api_keys == ["a", "c"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("AI_EVALUATION_ENABLED", "false")
        monkeypatch.setenv("AI_TIMEOUT_SECONDS", "12.5")
        settings = Settings()
        assert settings.ai_evaluation_enabled is False
        assert settings.ai_timeout_seconds == 12.5


class TestSetupLogging:
    def test_single_console_handler(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("debug")
            setup_logging("debug")
            assert len(root.handlers) == 1
            assert root.level == logging.DEBUG
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
