"""
Use case for previewing a find/replace without writing it.
"""

import difflib
import logging
import os
from typing import Optional

from src.entities.EditResult import EditResult, ErrorKind
from src.exceptions import FileRepositoryError
from src.ports.files.file_repository_port import FileRepositoryPort
from src.use_cases.edits.matching_engine import find_and_replace
from src.use_cases.edits.transactional_executor import TransactionalEditExecutor


def render_preview(name: str, strategy: str, old: str, new: str) -> str:
    """
    Render a diff holding only the changed lines.

    Args:
        name: File name shown in the a/ and b/ headers
        strategy: Matching strategy that produced ``new``
        old: Content before the edit
        new: Content after the edit

    Returns:
        Diff text: strategy line, file headers, then the removed and added
        lines without @@ hunk markers
    """
    diff = list(
        difflib.unified_diff(
            old.split("\n"),
            new.split("\n"),
            fromfile=f"a/{name}",
            tofile=f"b/{name}",
            lineterm="",
            n=0,
        )
    )[2:]
    changed = [line for line in diff if not line.startswith("@@")]
    return "\n".join([f"Strategy: {strategy}", f"--- a/{name}", f"+++ b/{name}", *changed])


class PreviewEditUseCase:
    """Use case for showing what a surgical edit would change."""

    def __init__(
        self,
        executor: TransactionalEditExecutor,
        file_repository: FileRepositoryPort,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            executor: Executor used for path and existence checks only
            file_repository: Repository used to read the file
            logger: Logger instance to use for logging
        """
        self._executor = executor
        self._files = file_repository
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, path: str, find: str, replace: str) -> EditResult:
        """
        Compute the diff a surgical edit would apply. Never writes.

        Args:
            path: Path to the file
            find: Text to find
            replace: Replacement text

        Returns:
            EditResult whose message (and details['diff']) holds the diff
        """
        target = self._executor.check_target(path)
        if isinstance(target, EditResult):
            return target
        abs_path, _ = target

        try:
            content = self._files.read_text(abs_path)
        except FileRepositoryError as e:
            return EditResult.failure(ErrorKind.INTERNAL, f"Error: {e}")

        match = find_and_replace(content, find, replace)
        if not match.success:
            return EditResult.failure(
                ErrorKind.NO_MATCH, match.failure_reason, suggestion=match.suggestion
            )

        diff = render_preview(
            os.path.basename(abs_path), match.strategy.value, content, match.new_content
        )
        self._logger.info(f"Previewed edit of {abs_path} ({match.strategy.value})")
        return EditResult.success(diff, strategy=match.strategy.value, details={"diff": diff})
