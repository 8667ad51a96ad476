"""
Transaction port interface defining backup and rollback for one edit operation.
"""

from abc import ABC, abstractmethod

from src.entities.RestoreReport import RestoreReport


class TransactionPort(ABC):
    """
    Port interface for the backup state of a single edit operation.

    A transaction is consumed exactly once: either ``commit`` after every
    constituent edit succeeded, or ``restore_all`` to return every touched
    path to its pre-operation state. Implementations are context managers
    whose exit tears down backup storage, restoring first when an exception
    escapes a still active transaction.
    """

    @abstractmethod
    def snapshot(self, file_path: str, working_dir: str) -> bool:
        """
        Back up a file before its first mutation in this transaction.

        Args:
            file_path: Path of the file to protect
            working_dir: Root used to compute the backup-relative path

        Returns:
            False only if the backup could not be written
        """
        pass

    @abstractmethod
    def track_new_file(self, path: str) -> None:
        """Record a file created by the current operation."""
        pass

    @abstractmethod
    def track_new_directory(self, path: str) -> None:
        """Record a directory created by the current operation."""
        pass

    @abstractmethod
    def restore_all(self) -> RestoreReport:
        """
        Restore every snapshot and remove every tracked new path.

        Returns:
            Report of the restoration; never raises for per-item failures
        """
        pass

    @abstractmethod
    def commit(self) -> None:
        """Discard the backups after every edit succeeded."""
        pass

    @abstractmethod
    def discard(self) -> None:
        """Drop the backups of an operation that mutated nothing."""
        pass

    @property
    @abstractmethod
    def snapshot_count(self) -> int:
        """Number of files snapshotted so far."""
        pass

    def __enter__(self) -> "TransactionPort":
        return self

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None:
        pass
