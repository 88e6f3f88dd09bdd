"""Unit tests for infrastructure.logging.setup module."""

from unittest.mock import patch

import pytest

from infrastructure.logging import setup


@pytest.mark.unit
class TestConfigureLogging:
    def test_returns_logger_under_pytest(self):
        logger = setup.configure_logging()

        assert hasattr(logger, "info")

    def test_test_environment_is_detected(self):
        assert setup._is_test_environment() is True

    def test_does_not_read_settings_under_pytest(self):
        with patch.object(setup, "get_settings") as mock_get_settings:
            setup.configure_logging()

        mock_get_settings.assert_not_called()


@pytest.mark.unit
class TestModuleLoggers:
    def test_get_module_logger_binds_component(self):
        logger = setup.get_module_logger()

        assert "component" in logger._context
