import logging

import pytest
from unittest.mock import patch

from http_echo import __version__
from http_echo.core import Config, setup_logging


class TestConfig:
    def test_defaults(self):
        assert isinstance(Config.ECHO_HOST, str)
        assert Config.ECHO_VERSION

    def test_default_addr(self):
        with patch.object(Config, "ECHO_HOST", "localhost"), \
             patch.object(Config, "ECHO_PORT", "3000"):
            assert Config.default_addr() == "localhost:3000"

    def test_invalid_port(self):
        with patch.object(Config, "ECHO_PORT", "not-a-port"):
            with pytest.raises(ValueError, match="ECHO_PORT"):
                Config.get_port()

    def test_package_version(self):
        assert __version__ == "1.0.0"


def test_setup_logging_returns_logger():
    logger = setup_logging()
    assert isinstance(logger, logging.Logger)
