"""
Pytest configuration and shared fixtures.
"""

import glob
import os
import tempfile
from unittest.mock import MagicMock

import pytest

from src.adapters.files.local_fs_adapter import LocalFileSystemAdapter
from src.adapters.transactions.backup_transaction import BackupTransaction
from src.config.settings import BACKUP_DIR_PREFIX
from src.container import DependencyContainer
from src.use_cases.edits.transactional_executor import TransactionalEditExecutor
from src.utils.workspace import PathValidator


@pytest.fixture
def temp_directory():
    """
    Create a temporary workspace with a few text files.

    Returns:
        Path to the temporary directory
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        with open(os.path.join(temp_dir, "app.py"), "w", newline="") as f:
            f.write("def main():\n    print('hello')\n    return 0\n")

        with open(os.path.join(temp_dir, "notes.txt"), "w", newline="") as f:
            f.write("".join(f"line {i}\n" for i in range(1, 11)))

        subdir = os.path.join(temp_dir, "pkg")
        os.makedirs(subdir)
        with open(os.path.join(subdir, "config.ini"), "w", newline="") as f:
            f.write("[server]\r\nport = 8000\r\nhost = localhost\r\n")

        yield temp_dir


@pytest.fixture
def mock_logger():
    """
    Create a mock logger for testing.

    Returns:
        Mock logger instance
    """
    return MagicMock()


@pytest.fixture
def file_repository(mock_logger):
    return LocalFileSystemAdapter(mock_logger)


@pytest.fixture
def executor(temp_directory, file_repository, mock_logger):
    """
    Create an executor restricted to the temporary workspace.

    Returns:
        TransactionalEditExecutor writing real backups under temp_directory
    """
    return TransactionalEditExecutor(
        PathValidator([temp_directory]),
        file_repository,
        lambda working_dir: BackupTransaction(working_dir, logger=mock_logger),
        logger=mock_logger,
    )


@pytest.fixture
def backup_dirs():
    """Return a function listing leftover backup directories in a workspace."""

    def _list(directory: str) -> list[str]:
        return glob.glob(os.path.join(directory, f"{BACKUP_DIR_PREFIX}*"))

    return _list


@pytest.fixture
def dependency_container(mock_logger):
    """
    Create a dependency container with mocked dependencies for testing.

    Returns:
        DependencyContainer instance with mocked logger
    """
    container = DependencyContainer()
    # Replace the logger with our mock
    container._logger = mock_logger
    return container


@pytest.fixture
def read_file():
    """Return a function reading a file exactly as stored (no newline translation)."""

    def _read(path: str) -> str:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    return _read
