"""
Local file system adapter implementation for text file access.
"""

import logging
import os

from typing_extensions import override

from src.exceptions import FileRepositoryError
from src.ports.files.file_repository_port import FileRepositoryPort

# Fixed encoding for every read and write; no byte-order mark is emitted.
ENCODING = "utf-8"


class LocalFileSystemAdapter(FileRepositoryPort):
    """Local file system implementation of the file repository port."""

    def __init__(self, logger: logging.Logger | None = None):
        """
        Initialize the adapter with an optional logger.

        Args:
            logger: Logger instance to use for logging. If None, a default logger will be created.
        """
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

    @override
    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    @override
    def read_text(self, path: str) -> str:
        """
        Read a whole file as UTF-8 text.

        Newline translation is disabled so that CRLF and CR endings reach the
        matching engine exactly as stored on disk.

        Args:
            path: Absolute path to the file to read

        Returns:
            The file content

        Raises:
            FileRepositoryError: If the file is missing, unreadable or not UTF-8
        """
        try:
            with open(path, "r", encoding=ENCODING, newline="") as f:
                return f.read()
        except FileNotFoundError:
            raise FileRepositoryError(f"File not found: {path}")
        except UnicodeDecodeError:
            raise FileRepositoryError(f"File is not valid UTF-8 text: {path}")
        except OSError as e:
            self._logger.error(f"Error reading {path}: {e}")
            raise FileRepositoryError(f"Failed to read {path}: {str(e)}")

    @override
    def write_text(self, path: str, content: str) -> None:
        """
        Overwrite a file with UTF-8 content.

        Args:
            path: Absolute path to the file to write
            content: Text content, written without newline translation

        Raises:
            FileRepositoryError: If writing fails
        """
        try:
            with open(path, "w", encoding=ENCODING, newline="") as f:
                f.write(content)
        except OSError as e:
            self._logger.error(f"Error writing {path}: {e}")
            raise FileRepositoryError(f"Failed to write {path}: {str(e)}")
