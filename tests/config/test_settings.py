"""
Tests for environment-driven settings.
"""

import os
from unittest.mock import patch

import pytest

from src.config.settings import Settings
from src.exceptions import ConfigurationError


class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self):
        """Test the working directory is the default allow-list."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()

        assert settings.allowed_directories == (os.path.abspath(os.getcwd()),)
        assert settings.log_level == "INFO"
        assert settings.port == 8000
        assert settings.reload is False

    def test_allowed_directories_list(self, tmp_path):
        """Test several directories are split on os.pathsep and made absolute."""
        first = tmp_path / "a"
        second = tmp_path / "b"
        raw = os.pathsep.join([str(first), str(second), ""])

        with patch.dict(os.environ, {"SURGICAL_FS_ALLOWED_DIRS": raw}, clear=True):
            settings = Settings()

        assert settings.allowed_directories == (str(first), str(second))

    def test_empty_allow_list_is_rejected(self):
        """Test an allow-list with no entries is a configuration error."""
        with patch.dict(os.environ, {"SURGICAL_FS_ALLOWED_DIRS": os.pathsep}, clear=True):
            with pytest.raises(ConfigurationError, match="lists no directories"):
                Settings()

    def test_log_level_is_validated(self):
        """Test unknown log levels are refused."""
        with patch.dict(os.environ, {"SURGICAL_FS_LOG_LEVEL": "chatty"}, clear=True):
            with pytest.raises(ConfigurationError, match="Unknown log level"):
                Settings()

    def test_log_level_is_normalized(self):
        """Test level names are case-insensitive."""
        with patch.dict(os.environ, {"SURGICAL_FS_LOG_LEVEL": "debug"}, clear=True):
            assert Settings().log_level == "DEBUG"

    def test_port_must_be_integer(self):
        """Test a non-numeric port is refused."""
        with patch.dict(os.environ, {"PORT": "eighty"}, clear=True):
            with pytest.raises(ConfigurationError, match="PORT"):
                Settings()
