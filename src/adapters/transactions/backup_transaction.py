"""
Backup-directory transaction adapter: snapshot files before an edit and
restore them if the edit does not complete.
"""

import logging
import os
import shutil
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from typing_extensions import override

from src.config.settings import BACKUP_DIR_PREFIX
from src.entities.RestoreReport import RestoreReport
from src.ports.transactions.transaction_port import TransactionPort

# Backups of files outside the working directory are mirrored under this name.
EXTERNAL_DIR = "_external"


class TransactionState(str, Enum):
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    DISCARDED = "discarded"


class BackupTransaction(TransactionPort):
    """
    Transaction whose snapshots live in a timestamped backup directory.

    The backup root is ``<working_dir>/.surgicalfs_backup_YYYYmmdd_HHMMSS``,
    fixed when the transaction is created and only materialized on the first
    snapshot. The instance is valid for one operation; leaving the ``with``
    block commits if nothing else consumed it, and always removes the backup
    root.
    """

    def __init__(
        self,
        working_dir: str,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the transaction.

        Args:
            working_dir: Allowed root the protected files live under
            logger: Logger instance to use for logging
            clock: Source of the creation timestamp
        """
        self._logger = logger or logging.getLogger(__name__)
        self.working_dir = os.path.abspath(working_dir)
        self.created_at = clock()
        self.backup_root = os.path.join(
            self.working_dir, f"{BACKUP_DIR_PREFIX}{self.created_at:%Y%m%d_%H%M%S}"
        )
        self._snapshots: dict[str, str] = {}
        self._created_files: set[str] = set()
        self._created_directories: set[str] = set()
        self._state = TransactionState.ACTIVE

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    @override
    def snapshot_count(self) -> int:
        return len(self._snapshots)

    @property
    def new_file_count(self) -> int:
        return len(self._created_files)

    @property
    def new_directory_count(self) -> int:
        return len(self._created_directories)

    def _backup_path_for(self, full_path: str, working_dir: str) -> str:
        base = os.path.abspath(working_dir)
        try:
            inside = os.path.commonpath([base, full_path]) == base
        except ValueError:
            inside = False
        if inside:
            relative = os.path.relpath(full_path, base)
        else:
            # Keep distinct external files apart instead of flattening to basenames
            drive, tail = os.path.splitdrive(full_path)
            relative = os.path.join(
                EXTERNAL_DIR, drive.replace(":", ""), tail.lstrip("\\/")
            )
        return os.path.join(self.backup_root, relative)

    @override
    def snapshot(self, file_path: str, working_dir: str) -> bool:
        """
        Copy a file's current bytes into the backup root.

        A missing file is trivially successful: there is nothing to back up
        and the caller tracks it with ``track_new_file`` instead. A file
        already snapshotted in this transaction is left untouched so the
        backup always holds the pre-operation content.

        Args:
            file_path: Absolute path, or path relative to ``working_dir``
            working_dir: Root used to mirror the backup path

        Returns:
            False only if the backup could not be written
        """
        full_path = os.path.abspath(
            file_path if os.path.isabs(file_path) else os.path.join(working_dir, file_path)
        )
        if full_path in self._snapshots:
            return True
        if not os.path.isfile(full_path):
            return True

        backup_path = self._backup_path_for(full_path, working_dir)
        try:
            os.makedirs(os.path.dirname(backup_path), exist_ok=True)
            shutil.copy2(full_path, backup_path)
        except OSError as e:
            self._logger.error(f"Backup failed for {full_path}: {e}")
            return False

        self._snapshots[full_path] = backup_path
        self._logger.debug(f"Snapshot {full_path} -> {backup_path}")
        return True

    @override
    def track_new_file(self, path: str) -> None:
        self._created_files.add(os.path.abspath(path))

    @override
    def track_new_directory(self, path: str) -> None:
        self._created_directories.add(os.path.abspath(path))

    @override
    def restore_all(self) -> RestoreReport:
        """
        Return every touched path to its pre-operation state.

        Every step is attempted even after a failure: snapshots are copied
        back (parents recreated), tracked new files deleted, then tracked new
        directories removed deepest first and only while still empty.

        Returns:
            RestoreReport with the restored paths and ordered failure descriptions
        """
        restored: list[str] = []
        failures: list[str] = []

        for original_path, backup_path in self._snapshots.items():
            try:
                if not os.path.isfile(backup_path):
                    raise FileNotFoundError(f"backup missing: {backup_path}")
                parent = os.path.dirname(original_path)
                if parent:
                    os.makedirs(parent, exist_ok=True)
                shutil.copy2(backup_path, original_path)
                restored.append(original_path)
            except OSError as e:
                failures.append(f"Failed to restore {original_path}: {e}")

        for file_path in sorted(self._created_files):
            try:
                if os.path.isfile(file_path):
                    os.remove(file_path)
            except OSError as e:
                failures.append(f"Failed to delete newly created file {file_path}: {e}")

        for dir_path in sorted(self._created_directories, key=len, reverse=True):
            try:
                if os.path.isdir(dir_path) and not os.listdir(dir_path):
                    os.rmdir(dir_path)
            except OSError as e:
                failures.append(
                    f"Failed to delete newly created directory {dir_path}: {e}"
                )

        self._state = TransactionState.ROLLED_BACK
        for failure in failures:
            self._logger.error(failure)
        self._logger.info(
            f"Rolled back {len(restored)}/{len(self._snapshots)} file(s) "
            f"with {len(failures)} failure(s)"
        )
        return RestoreReport(success=not failures, restored=restored, failures=failures)

    def _remove_backup_root(self) -> None:
        try:
            if os.path.isdir(self.backup_root):
                shutil.rmtree(self.backup_root)
        except OSError as e:
            # A leftover backup directory is tolerated
            self._logger.warning(f"Failed to cleanup backups {self.backup_root}: {e}")

    @override
    def commit(self) -> None:
        self._remove_backup_root()
        self._state = TransactionState.COMMITTED

    @override
    def discard(self) -> None:
        self._remove_backup_root()
        self._state = TransactionState.DISCARDED

    @override
    def __exit__(self, exc_type, exc, tb) -> None:
        if self._state is not TransactionState.ACTIVE:
            self._remove_backup_root()
        elif exc_type is not None:
            # Interrupted mid-edit, e.g. by KeyboardInterrupt
            self._logger.error(f"Transaction interrupted by {exc_type.__name__}, rolling back")
            self.restore_all()
            self._remove_backup_root()
        else:
            self.commit()
