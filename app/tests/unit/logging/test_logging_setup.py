"""Unit tests for transaction_retry.logging.setup."""

from unittest.mock import Mock

import pytest
import structlog

from transaction_retry.configuration import Settings
from transaction_retry.logging.setup import (
    _is_test_environment,
    configure_logging,
    get_module_logger,
)


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.is_production = False
    return settings


@pytest.mark.unit
class TestConfigureLogging:
    def test_detects_test_environment(self):
        assert _is_test_environment() is True

    def test_returns_bound_logger(self, mock_settings):
        logger = configure_logging(settings=mock_settings)

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")

    def test_accepts_overrides(self, mock_settings):
        logger = configure_logging(
            log_level="DEBUG", is_production=True, settings=mock_settings
        )
        assert logger is not None

    def test_configures_non_test_pipeline(self, mock_settings, monkeypatch):
        monkeypatch.setattr(
            "transaction_retry.logging.setup._is_test_environment", lambda: False
        )

        logger = configure_logging(settings=mock_settings)

        assert logger is not None

        monkeypatch.undo()
        configure_logging(settings=mock_settings)


@pytest.mark.unit
class TestGetModuleLogger:
    def test_binds_module_context(self):
        logger = get_module_logger()

        context = structlog.get_context(logger)
        assert context["component"] == "test_logging_setup"
        assert context["module_path"].endswith("test_logging_setup")
