"""
Use case for applying a whitespace-tolerant find/replace to one file.
"""

import logging
from typing import Optional

from src.entities.EditResult import EditResult, ErrorKind, PlannedEdit
from src.use_cases.edits.matching_engine import find_and_replace
from src.use_cases.edits.transactional_executor import (
    ContentPlanner,
    TransactionalEditExecutor,
)


def plan_find_replace(find: str, replace: str) -> ContentPlanner:
    """Build a planner that runs the matching cascade on the current content."""

    def _plan(content: str) -> PlannedEdit:
        match = find_and_replace(content, find, replace)
        if not match.success:
            return PlannedEdit(
                EditResult.failure(
                    ErrorKind.NO_MATCH,
                    match.failure_reason,
                    suggestion=match.suggestion,
                )
            )
        strategy = match.strategy.value
        return PlannedEdit(
            EditResult.success(
                f"Success: Edit applied using '{strategy}' matching",
                strategy=strategy,
            ),
            new_content=match.new_content,
        )

    return _plan


class SurgicalEditUseCase:
    """Use case for a single-file find/replace with backup and rollback."""

    def __init__(
        self,
        executor: TransactionalEditExecutor,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            executor: Transactional executor running the edit
            logger: Logger instance to use for logging
        """
        self._executor = executor
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, path: str, find: str, replace: str) -> EditResult:
        """
        Replace ``find`` with ``replace`` in a file.

        Args:
            path: Path to the file to edit
            find: Text to find (whitespace-tolerant)
            replace: Replacement text, empty to delete

        Returns:
            EditResult naming the strategy that matched, or the failure with a suggestion
        """
        self._logger.info(f"Surgical edit requested for {path}")
        result = self._executor.run_single(path, plan_find_replace(find, replace))
        if not result.ok:
            self._logger.info(f"Surgical edit of {path} failed: {result.message}")
        return result
