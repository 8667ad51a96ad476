"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

from src.exceptions import ConfigurationError

# Load environment variables from .env file
_ = load_dotenv()

BACKUP_DIR_PREFIX = ".surgicalfs_backup_"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.allowed_directories: tuple[str, ...] = self._get_path_list_env(
            "SURGICAL_FS_ALLOWED_DIRS", os.getcwd()
        )
        self.log_level: str = self._get_log_level_env("SURGICAL_FS_LOG_LEVEL", "INFO")
        self.host: str = self._get_env("HOST", "127.0.0.1")
        self.port: int = self._get_int_env("PORT", 8000)
        self.reload: bool = self._get_env("RELOAD", "0") in {"1", "true", "True"}

    def _get_env(self, key: str, default: str) -> str:
        """Get an environment variable with a default value."""
        return os.getenv(key, default)

    def _get_int_env(self, key: str, default: int) -> int:
        """Get an integer environment variable, raise error if it is not one."""
        raw = self._get_env(key, str(default))
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"Environment variable {key} must be an integer, got {raw!r}")

    def _get_path_list_env(self, key: str, default: str) -> tuple[str, ...]:
        """Get an os.pathsep separated list of directories as absolute paths."""
        raw = self._get_env(key, default)
        entries = [p.strip() for p in raw.split(os.pathsep) if p.strip()]
        if not entries:
            raise ConfigurationError(f"Environment variable {key} lists no directories")
        return tuple(os.path.abspath(os.path.expanduser(p)) for p in entries)

    def _get_log_level_env(self, key: str, default: str) -> str:
        """Get a logging level name, raise error if it is not a known level."""
        level = self._get_env(key, default).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Unknown log level in {key}: {level}")
        return level


# Global settings instance
settings = Settings()
