"""
Tests for warmer settings and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from lambda_warmer.core.config import WarmerSettings, get_settings
from lambda_warmer.core.logging_setup import configure_logging
from lambda_warmer.core.naming import NamingConvention
from lambda_warmer.warmer.function import WarmerFunction


class TestWarmerSettings:
    """Test WarmerSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LAMBDA_WARMER_DELAY_MS", raising=False)
        monkeypatch.delenv("LAMBDA_WARMER_NAMING", raising=False)

        settings = WarmerSettings(_env_file=None)

        assert settings.log_enabled is True
        assert settings.delay_ms == 75
        assert settings.delay == pytest.approx(0.075)
        assert settings.naming == NamingConvention.CAMEL
        assert settings.invoke_max_retries == 3
        assert settings.posthog_api_key is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("LAMBDA_WARMER_LOG_ENABLED", "false")
        monkeypatch.setenv("LAMBDA_WARMER_DELAY_MS", "250")
        monkeypatch.setenv("LAMBDA_WARMER_NAMING", "pascal")
        monkeypatch.setenv("LAMBDA_WARMER_AWS_REGION", "eu-central-1")

        settings = WarmerSettings(_env_file=None)

        assert settings.log_enabled is False
        assert settings.delay == pytest.approx(0.25)
        assert settings.naming == NamingConvention.PASCAL
        assert settings.aws_region == "eu-central-1"

    def test_naming_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("LAMBDA_WARMER_NAMING", "SNAKE")

        assert WarmerSettings(_env_file=None).naming == NamingConvention.SNAKE

    def test_invalid_naming_rejected(self):
        with pytest.raises(ValidationError):
            WarmerSettings(_env_file=None, naming="kebab")

    def test_negative_delay(self):
        assert WarmerSettings(_env_file=None, delay_ms=-10).delay == 0.0

    def test_get_settings_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestConfigureLogging:
    """Test configure_logging()."""

    @pytest.fixture(autouse=True)
    def restore_levels(self):
        root = logging.getLogger()
        package = logging.getLogger("lambda_warmer")
        root_level, package_level = root.level, package.level
        yield
        root.setLevel(root_level)
        package.setLevel(package_level)

    def test_level_applied(self):
        configure_logging(WarmerSettings(_env_file=None, log_level="debug"))

        assert logging.getLogger("lambda_warmer").level == logging.DEBUG
        assert logging.getLogger("lambda_warmer.warmer.dispatcher").isEnabledFor(logging.DEBUG)

    def test_unknown_level(self):
        configure_logging(WarmerSettings(_env_file=None, log_level="chatty"))

        assert logging.getLogger("lambda_warmer").level == logging.INFO

    def test_root_level_untouched(self):
        """Test the host application's root level survives."""
        logging.getLogger().setLevel(logging.WARNING)

        configure_logging(WarmerSettings(_env_file=None, log_level="debug"))

        assert logging.getLogger().level == logging.WARNING

    def test_function_keeps_root_level(self, handler, invoker):
        logging.getLogger().setLevel(logging.WARNING)

        WarmerFunction(handler, settings=WarmerSettings(_env_file=None, delay_ms=0), invoker=invoker)

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("lambda_warmer").level == logging.INFO
