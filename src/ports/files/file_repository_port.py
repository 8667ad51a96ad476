"""
File repository port interface defining the contract for text file access.
"""

from abc import ABC, abstractmethod


class FileRepositoryPort(ABC):
    """Port interface for reading and writing UTF-8 text files."""

    @abstractmethod
    def is_file(self, path: str) -> bool:
        """
        Check whether a regular file exists at the given path.

        Args:
            path: Absolute path to check

        Returns:
            True if the path is an existing regular file
        """
        pass

    @abstractmethod
    def read_text(self, path: str) -> str:
        """
        Read a whole file as UTF-8 text, line endings preserved as stored.

        Args:
            path: Absolute path to the file to read

        Returns:
            The file content

        Raises:
            FileRepositoryError: If the file is missing, unreadable or not UTF-8
        """
        pass

    @abstractmethod
    def write_text(self, path: str, content: str) -> None:
        """
        Overwrite a file with UTF-8 content (no byte-order mark).

        Args:
            path: Absolute path to the file to write
            content: Text content, written without newline translation

        Raises:
            FileRepositoryError: If writing fails
        """
        pass
