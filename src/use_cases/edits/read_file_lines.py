"""
Use case for reading a file with line numbers.
"""

import logging
from typing import Optional

from src.entities.EditResult import EditResult, ErrorKind
from src.exceptions import FileRepositoryError
from src.ports.files.file_repository_port import FileRepositoryPort
from src.use_cases.edits.edit_lines import split_lines
from src.use_cases.edits.transactional_executor import TransactionalEditExecutor


def render_numbered(
    path: str, lines: list[str], start_line: int, end_line: Optional[int]
) -> tuple[str, int, int]:
    """
    Format a slice of lines with right-aligned line numbers.

    Out-of-range bounds are clamped; nothing here fails.

    Returns:
        Tuple of (listing, first shown line, last shown line)
    """
    total = len(lines)
    start = max(0, min(start_line - 1, total))
    end = max(start, min(end_line if end_line is not None else total, total))
    width = len(str(end))

    out = [f"File: {path} (lines {start + 1}-{end} of {total})", "=" * 50]
    for number in range(start + 1, end + 1):
        out.append(f"{number:>{width}} | {lines[number - 1]}")
    return "\n".join(out), start + 1, end


class ReadFileLinesUseCase:
    """Use case for reading a line range before editing it."""

    def __init__(
        self,
        executor: TransactionalEditExecutor,
        file_repository: FileRepositoryPort,
        logger: Optional[logging.Logger] = None,
    ):
        self._executor = executor
        self._files = file_repository
        self._logger = logger or logging.getLogger(__name__)

    def execute(
        self, path: str, start_line: Optional[int] = None, end_line: Optional[int] = None
    ) -> EditResult:
        """
        Read lines of a file with their numbers.

        Args:
            path: Path to the file
            start_line: First line to show (1-indexed), None for the first line
            end_line: Last line to show, None for the end of the file

        Returns:
            EditResult whose message is the numbered listing
        """
        target = self._executor.check_target(path)
        if isinstance(target, EditResult):
            return target
        abs_path, _ = target

        try:
            content = self._files.read_text(abs_path)
        except FileRepositoryError as e:
            self._logger.error(f"Failed to read {abs_path}: {e}")
            return EditResult.failure(ErrorKind.INTERNAL, f"Error: {e}")

        lines = split_lines(content)
        listing, first, last = render_numbered(path, lines, start_line or 1, end_line)
        self._logger.debug(f"Read lines {first}-{last} of {abs_path}")
        return EditResult.success(
            listing,
            details={"start_line": first, "end_line": last, "lines_total": len(lines)},
        )
