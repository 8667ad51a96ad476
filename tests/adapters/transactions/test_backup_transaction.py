"""
Tests for the BackupTransaction adapter.
"""

import os
import tempfile
from datetime import datetime
from unittest.mock import patch

import pytest

from src.adapters.transactions.backup_transaction import (
    EXTERNAL_DIR,
    BackupTransaction,
    TransactionState,
)


def _write(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


class TestSnapshot:
    """Test cases for taking snapshots."""

    def test_backup_root_is_timestamped(self, temp_directory, mock_logger):
        """Test the backup root name comes from the creation time."""
        tx = BackupTransaction(
            temp_directory, mock_logger, clock=lambda: datetime(2024, 1, 2, 3, 4, 5)
        )

        assert tx.backup_root == os.path.join(
            temp_directory, ".surgicalfs_backup_20240102_030405"
        )
        # Nothing is created until the first snapshot
        assert not os.path.exists(tx.backup_root)

    def test_snapshot_mirrors_relative_path(self, temp_directory, mock_logger, read_file):
        """Test the backup copy lives at the file's path relative to the working dir."""
        target = os.path.join(temp_directory, "pkg", "config.ini")
        tx = BackupTransaction(temp_directory, mock_logger)

        assert tx.snapshot(target, temp_directory) is True

        backup = os.path.join(tx.backup_root, "pkg", "config.ini")
        assert os.path.isfile(backup)
        assert read_file(backup) == read_file(target)
        assert tx.snapshot_count == 1
        tx.commit()

    def test_snapshot_accepts_relative_path(self, temp_directory, mock_logger):
        """Test a path relative to the working directory is resolved."""
        tx = BackupTransaction(temp_directory, mock_logger)

        assert tx.snapshot("app.py", temp_directory) is True
        assert os.path.isfile(os.path.join(tx.backup_root, "app.py"))
        tx.commit()

    def test_snapshot_missing_file_is_trivially_successful(self, temp_directory, mock_logger):
        """Test nothing is backed up for a file that does not exist yet."""
        tx = BackupTransaction(temp_directory, mock_logger)

        assert tx.snapshot(os.path.join(temp_directory, "new.txt"), temp_directory)
        assert tx.snapshot_count == 0

    def test_snapshot_is_idempotent(self, temp_directory, mock_logger, read_file):
        """Test a second snapshot keeps the pre-operation content."""
        target = os.path.join(temp_directory, "app.py")
        original = read_file(target)
        tx = BackupTransaction(temp_directory, mock_logger)

        tx.snapshot(target, temp_directory)
        _write(target, "changed once\n")
        tx.snapshot(target, temp_directory)
        _write(target, "changed twice\n")
        tx.restore_all()

        assert read_file(target) == original
        assert tx.snapshot_count == 1

    def test_snapshot_failure_returns_false(self, temp_directory, mock_logger):
        """Test an I/O error during backup is reported, not raised."""
        tx = BackupTransaction(temp_directory, mock_logger)

        with patch(
            "src.adapters.transactions.backup_transaction.shutil.copy2",
            side_effect=OSError("Permission denied"),
        ):
            ok = tx.snapshot(os.path.join(temp_directory, "app.py"), temp_directory)

        assert ok is False
        assert tx.snapshot_count == 0
        mock_logger.error.assert_called_once()

    def test_external_file_is_mirrored_under_external_dir(self, temp_directory, mock_logger):
        """Test a file outside the working dir does not collide with inside files."""
        with tempfile.TemporaryDirectory() as other:
            outside = os.path.join(other, "app.py")
            _write(outside, "outside\n")
            tx = BackupTransaction(temp_directory, mock_logger)

            assert tx.snapshot(outside, temp_directory)

            external_root = os.path.join(tx.backup_root, EXTERNAL_DIR)
            copies = [
                os.path.join(dirpath, name)
                for dirpath, _, names in os.walk(external_root)
                for name in names
            ]
            assert len(copies) == 1
            assert copies[0].endswith("app.py")
            tx.commit()


class TestRestore:
    """Test cases for rollback."""

    def test_restore_all_restores_snapshots(self, temp_directory, mock_logger, read_file):
        """Test every snapshotted file returns to its original bytes."""
        first = os.path.join(temp_directory, "app.py")
        second = os.path.join(temp_directory, "pkg", "config.ini")
        originals = {first: read_file(first), second: read_file(second)}
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.snapshot(first, temp_directory)
        tx.snapshot(second, temp_directory)
        _write(first, "broken\n")
        _write(second, "broken\n")

        report = tx.restore_all()

        assert report.success is True
        assert sorted(report.restored) == sorted(originals)
        assert report.failures == []
        for path, content in originals.items():
            assert read_file(path) == content
        assert tx.state is TransactionState.ROLLED_BACK

    def test_restore_recreates_deleted_file(self, temp_directory, mock_logger, read_file):
        """Test parent directories are recreated when restoring."""
        target = os.path.join(temp_directory, "pkg", "config.ini")
        original = read_file(target)
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.snapshot(target, temp_directory)
        os.remove(target)
        os.rmdir(os.path.dirname(target))

        report = tx.restore_all()

        assert report.success
        assert read_file(target) == original

    def test_restore_removes_tracked_new_files_and_empty_dirs(self, temp_directory, mock_logger):
        """Test side effects created during the operation are undone."""
        outer = os.path.join(temp_directory, "gen")
        inner = os.path.join(outer, "deep")
        os.makedirs(inner)
        created = os.path.join(inner, "made.txt")
        _write(created, "new\n")
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.track_new_directory(outer)
        tx.track_new_directory(inner)
        tx.track_new_file(created)

        report = tx.restore_all()

        assert report.success
        assert not os.path.exists(created)
        assert not os.path.exists(inner)
        assert not os.path.exists(outer)
        assert tx.new_file_count == 1
        assert tx.new_directory_count == 2

    def test_restore_keeps_non_empty_tracked_directory(self, temp_directory, mock_logger):
        """Test a tracked directory holding untracked files is left in place."""
        directory = os.path.join(temp_directory, "gen")
        os.makedirs(directory)
        _write(os.path.join(directory, "keep.txt"), "keep\n")
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.track_new_directory(directory)

        report = tx.restore_all()

        assert report.success
        assert os.path.isdir(directory)

    def test_restore_is_best_effort(self, temp_directory, mock_logger, read_file):
        """Test a failed item does not stop the remaining restorations."""
        first = os.path.join(temp_directory, "app.py")
        second = os.path.join(temp_directory, "notes.txt")
        second_original = read_file(second)
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.snapshot(first, temp_directory)
        tx.snapshot(second, temp_directory)
        _write(first, "broken\n")
        _write(second, "broken\n")
        os.remove(os.path.join(tx.backup_root, "app.py"))

        report = tx.restore_all()

        assert report.success is False
        assert len(report.failures) == 1
        assert first in report.failures[0]
        assert report.restored == [second]
        assert read_file(second) == second_original
        mock_logger.error.assert_called()


class TestLifetime:
    """Test cases for commit, discard and the context manager."""

    def test_commit_removes_backup_root(self, temp_directory, mock_logger):
        """Test committing deletes every backup."""
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.snapshot(os.path.join(temp_directory, "app.py"), temp_directory)
        assert os.path.isdir(tx.backup_root)

        tx.commit()

        assert not os.path.exists(tx.backup_root)
        assert tx.state is TransactionState.COMMITTED

    def test_discard_removes_backup_root(self, temp_directory, mock_logger):
        """Test discarding deletes backups without committing."""
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.snapshot(os.path.join(temp_directory, "app.py"), temp_directory)

        tx.discard()

        assert not os.path.exists(tx.backup_root)
        assert tx.state is TransactionState.DISCARDED

    def test_context_exit_commits_active_transaction(self, temp_directory, mock_logger):
        """Test leaving the block cleans up even without an explicit commit."""
        with BackupTransaction(temp_directory, mock_logger) as tx:
            tx.snapshot(os.path.join(temp_directory, "app.py"), temp_directory)

        assert tx.state is TransactionState.COMMITTED
        assert not os.path.exists(tx.backup_root)

    def test_context_exit_after_rollback_removes_backups(self, temp_directory, mock_logger):
        """Test backups do not outlive a rolled back transaction."""
        with BackupTransaction(temp_directory, mock_logger) as tx:
            tx.snapshot(os.path.join(temp_directory, "app.py"), temp_directory)
            tx.restore_all()

        assert tx.state is TransactionState.ROLLED_BACK
        assert not os.path.exists(tx.backup_root)

    def test_cleanup_failure_is_only_logged(self, temp_directory, mock_logger):
        """Test a leftover backup directory does not raise."""
        tx = BackupTransaction(temp_directory, mock_logger)
        tx.snapshot(os.path.join(temp_directory, "app.py"), temp_directory)

        with patch(
            "src.adapters.transactions.backup_transaction.shutil.rmtree",
            side_effect=OSError("busy"),
        ):
            tx.commit()

        mock_logger.warning.assert_called_once()
        assert tx.state is TransactionState.COMMITTED

    def test_context_exit_on_interrupt_restores(self, temp_directory, mock_logger, read_file):
        """Test an exception escaping an active transaction restores before cleanup."""
        target = os.path.join(temp_directory, "app.py")
        original = read_file(target)

        with pytest.raises(KeyboardInterrupt):
            with BackupTransaction(temp_directory, mock_logger) as tx:
                tx.snapshot(target, temp_directory)
                _write(target, "half written")
                raise KeyboardInterrupt()

        assert read_file(target) == original
        assert tx.state is TransactionState.ROLLED_BACK
        assert not os.path.exists(tx.backup_root)
