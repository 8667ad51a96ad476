"""
Transactional edit executor: the snapshot -> mutate -> commit-or-rollback
sequence shared by every mutating edit operation.
"""

import logging
import os
from typing import Callable, Optional, Sequence

from src.entities.EditRequest import EditRequest
from src.entities.EditResult import EditResult, ErrorKind, PlannedEdit
from src.exceptions import AccessDeniedError
from src.ports.files.file_repository_port import FileRepositoryPort
from src.ports.transactions.transaction_port import TransactionPort
from src.utils.workspace import PathValidator

# Computes the new content of one file from its current content.
ContentPlanner = Callable[[str], PlannedEdit]
# Same, for one request of a batch.
BatchPlanner = Callable[[EditRequest, str], PlannedEdit]
TransactionFactory = Callable[[str], TransactionPort]


class TransactionalEditExecutor:
    """
    Run edits with all-or-nothing semantics.

    Pre-conditions (allowed path, existing file) are checked before any
    snapshot and reported as plain failures. Once a snapshot exists, any
    exception restores every snapshotted file and is reported as rolled back.
    """

    def __init__(
        self,
        path_validator: PathValidator,
        file_repository: FileRepositoryPort,
        transaction_factory: TransactionFactory,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the executor.

        Args:
            path_validator: Allow-list check, fixed at construction
            file_repository: Repository used to read and write file content
            transaction_factory: Builds a transaction for a working directory
            logger: Logger instance to use for logging
        """
        self._paths = path_validator
        self._files = file_repository
        self._logger = logger or logging.getLogger(__name__)
        self._transaction_factory = transaction_factory

    def resolve(self, path: str) -> tuple[str, str]:
        """
        Validate a path and find its working directory.

        Args:
            path: Path as given by the caller

        Returns:
            Tuple of (absolute path, working directory)

        Raises:
            AccessDeniedError: If the path is not allowed
        """
        abs_path = self._paths.validate(path)
        return abs_path, self._paths.working_directory_for(abs_path)

    def check_target(self, path: str) -> tuple[str, str] | EditResult:
        """Resolve an existing, allowed file or return the pre-condition failure."""
        try:
            abs_path, working_dir = self.resolve(path)
        except AccessDeniedError as e:
            self._logger.warning(f"Access denied: {e}")
            return EditResult.failure(ErrorKind.ACCESS_DENIED, f"Error: {e}")
        if not self._files.is_file(abs_path):
            return EditResult.failure(
                ErrorKind.FILE_NOT_FOUND, f"Error: File not found: {path}"
            )
        return abs_path, working_dir

    def _rollback(
        self,
        transaction: TransactionPort,
        error: Exception,
        message: str,
        details: Optional[dict[str, object]] = None,
    ) -> EditResult:
        report = transaction.restore_all()
        details = {**(details or {}), "restored": report.restored}
        if report.failures:
            details["restore_failures"] = report.failures
        self._logger.error(f"{message}: {error}")
        return EditResult.failure(
            ErrorKind.ROLLED_BACK,
            f"{message}: {error}",
            rolled_back=True,
            details=details,
        )

    def run_single(self, path: str, plan: ContentPlanner) -> EditResult:
        """
        Apply one computed edit to one file.

        Args:
            path: Target file path
            plan: Computes new content from the current content

        Returns:
            The planner's result on success or no-op, otherwise a failure
        """
        target = self.check_target(path)
        if isinstance(target, EditResult):
            return target
        abs_path, working_dir = target

        transaction = self._transaction_factory(working_dir)
        with transaction:
            try:
                if not transaction.snapshot(abs_path, working_dir):
                    transaction.discard()
                    return EditResult.failure(
                        ErrorKind.BACKUP_FAILED,
                        "Error: Failed to create backup before modification",
                    )

                content = self._files.read_text(abs_path)
                planned = plan(content)
                if not planned.writes:
                    transaction.discard()
                    return planned.result

                self._files.write_text(abs_path, planned.new_content)
                transaction.commit()
                self._logger.info(f"Edited {abs_path}: {planned.result.message}")
                return planned.result
            except Exception as e:
                if transaction.snapshot_count > 0:
                    return self._rollback(transaction, e, "Error (rolled back)")
                self._logger.error(f"Edit of {abs_path} failed: {e}")
                return EditResult.failure(ErrorKind.INTERNAL, f"Error: {e}")

    def run_batch(self, requests: Sequence[EditRequest], plan: BatchPlanner) -> EditResult:
        """
        Apply several edits as one transaction.

        Every path is validated before any snapshot, every file is snapshotted
        before any is mutated, and the first failed edit restores all of them.

        Args:
            requests: Ordered edits; the same file may appear more than once
            plan: Computes new content for one request from the file's current content

        Returns:
            Per-file report on success, otherwise the first failure
        """
        if not requests:
            return EditResult.failure(ErrorKind.INVALID_REQUEST, "Error: No edits provided")

        targets: list[str] = []
        for request in requests:
            target = self.check_target(request.path)
            if isinstance(target, EditResult):
                return target
            targets.append(target[0])

        working_dir = self._paths.working_directory_for(targets[0])
        transaction = self._transaction_factory(working_dir)
        current: Optional[tuple[int, EditRequest]] = None
        with transaction:
            try:
                for request, abs_path in zip(requests, targets):
                    if not transaction.snapshot(abs_path, working_dir):
                        transaction.discard()
                        return EditResult.failure(
                            ErrorKind.BACKUP_FAILED,
                            f"Error: Failed to create backup for {request.path}",
                        )

                applied: list[dict[str, object]] = []
                for index, (request, abs_path) in enumerate(zip(requests, targets), start=1):
                    current = (index, request)
                    content = self._files.read_text(abs_path)
                    planned = plan(request, content)
                    if not planned.writes:
                        report = transaction.restore_all()
                        self._logger.warning(
                            f"Batch failed on {request.path} (edit {index}), rolled back"
                        )
                        return EditResult.failure(
                            planned.result.kind or ErrorKind.NO_MATCH,
                            f"Batch failed on {request.path}: {planned.result.message}\n"
                            "All changes rolled back",
                            suggestion=planned.result.suggestion,
                            rolled_back=True,
                            details={
                                "failed_index": index,
                                "failed_path": request.path,
                                "restore_failures": report.failures,
                            },
                        )

                    self._files.write_text(abs_path, planned.new_content)
                    applied.append(
                        {
                            "path": request.path,
                            "name": os.path.basename(abs_path),
                            "strategy": planned.result.strategy,
                        }
                    )

                current = None
                transaction.commit()
            except Exception as e:
                if transaction.snapshot_count > 0:
                    if current is None:
                        return self._rollback(
                            transaction, e, "Batch failed, all changes rolled back"
                        )
                    index, request = current
                    return self._rollback(
                        transaction,
                        e,
                        f"Batch failed on {request.path}, all changes rolled back",
                        details={"failed_index": index, "failed_path": request.path},
                    )
                self._logger.error(f"Batch edit failed: {e}")
                return EditResult.failure(ErrorKind.INTERNAL, f"Error: {e}")

        lines = [f"Batch complete: {len(applied)} edits applied"]
        lines.extend(f"  {a['name']}: {a['strategy']}" for a in applied)
        self._logger.info(lines[0])
        return EditResult.success("\n".join(lines), details={"edits": applied})
