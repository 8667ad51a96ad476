"""
Use case for line-number based edits: replace, insert and delete line ranges.
"""

import logging
from typing import Optional

from src.entities.EditRequest import LineEditRequest
from src.entities.EditResult import EditResult, ErrorKind, PlannedEdit
from src.exceptions import InvalidLineRangeError
from src.use_cases.edits.matching_engine import normalize_line_endings
from src.use_cases.edits.transactional_executor import TransactionalEditExecutor


def split_lines(content: str) -> list[str]:
    """Split file content into lines the way it is written back (no terminators)."""
    if not content:
        return []
    lines = normalize_line_endings(content).split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def join_lines(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def split_new_text(text: str) -> list[str]:
    return normalize_line_endings(text or "").split("\n")


def validate_range(start_line: int, end_line: int) -> None:
    """
    Reject ranges that can be refused without reading the file.

    Raises:
        InvalidLineRangeError: If start_line < 1 or end_line < start_line
    """
    if start_line < 1:
        raise InvalidLineRangeError(f"start_line ({start_line}) must be >= 1")
    if end_line < start_line:
        raise InvalidLineRangeError(
            f"end_line ({end_line}) must be >= start_line ({start_line})"
        )


def _check_range(start_line: int, end_line: int) -> Optional[EditResult]:
    try:
        validate_range(start_line, end_line)
    except InvalidLineRangeError as e:
        return EditResult.failure(ErrorKind.INVALID_RANGE, f"Error: {e}")
    return None


def _beyond_end(start_line: int, total: int) -> PlannedEdit:
    return PlannedEdit(
        EditResult.failure(
            ErrorKind.INVALID_RANGE,
            f"Error: start_line ({start_line}) exceeds file length ({total} lines)",
        )
    )


class EditLinesUseCase:
    """Use case for line-range edits with backup and rollback."""

    def __init__(
        self,
        executor: TransactionalEditExecutor,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            executor: Transactional executor running the edits
            logger: Logger instance to use for logging
        """
        self._executor = executor
        self._logger = logger or logging.getLogger(__name__)

    def replace_lines(self, request: LineEditRequest) -> EditResult:
        """
        Replace lines ``start_line..end_line`` (1-indexed, inclusive) with new text.

        ``end_line`` past the end of the file is clamped; ``start_line`` past
        the end is an error.

        Args:
            request: Target path, range and replacement text

        Returns:
            EditResult with the number of lines replaced and inserted
        """
        invalid = _check_range(request.start_line, request.end_line)
        if invalid:
            return invalid

        def _plan(content: str) -> PlannedEdit:
            lines = split_lines(content)
            total = len(lines)
            if request.start_line > total:
                return _beyond_end(request.start_line, total)
            end = min(request.end_line, total)
            count = end - request.start_line + 1
            new_lines = split_new_text(request.text)
            lines[request.start_line - 1 : end] = new_lines
            return PlannedEdit(
                EditResult.success(
                    f"Success: Replaced lines {request.start_line}-{end} "
                    f"({count} lines) with {len(new_lines)} new lines",
                    details={
                        "start_line": request.start_line,
                        "end_line": end,
                        "lines_replaced": count,
                        "lines_inserted": len(new_lines),
                        "lines_total": len(lines),
                    },
                ),
                new_content=join_lines(lines),
            )

        self._logger.info(
            f"Replacing lines {request.start_line}-{request.end_line} in {request.path}"
        )
        return self._executor.run_single(request.path, _plan)

    def insert_lines(self, path: str, line_number: int, text: str) -> EditResult:
        """
        Insert text before a line without replacing anything.

        Args:
            path: Path to the file to edit
            line_number: 1-indexed line to insert before; 0 prepends, past the end appends
            text: Content to insert

        Returns:
            EditResult with the number of lines inserted and where
        """
        if line_number < 0:
            return EditResult.failure(
                ErrorKind.INVALID_RANGE, f"Error: line_number ({line_number}) must be >= 0"
            )

        def _plan(content: str) -> PlannedEdit:
            lines = split_lines(content)
            new_lines = split_new_text(text)
            if line_number == 0:
                lines[0:0] = new_lines
                position = "at beginning"
            elif line_number > len(lines):
                lines.extend(new_lines)
                position = "at end"
            else:
                lines[line_number - 1 : line_number - 1] = new_lines
                position = f"before line {line_number}"
            return PlannedEdit(
                EditResult.success(
                    f"Success: Inserted {len(new_lines)} lines {position}",
                    details={
                        "lines_inserted": len(new_lines),
                        "position": position,
                        "lines_total": len(lines),
                    },
                ),
                new_content=join_lines(lines),
            )

        self._logger.info(f"Inserting at line {line_number} in {path}")
        return self._executor.run_single(path, _plan)

    def delete_lines(self, path: str, start_line: int, end_line: int) -> EditResult:
        """
        Delete lines ``start_line..end_line`` (1-indexed, inclusive).

        Args:
            path: Path to the file to edit
            start_line: First line to delete
            end_line: Last line to delete, clamped to the file length

        Returns:
            EditResult with the number of lines removed
        """
        invalid = _check_range(start_line, end_line)
        if invalid:
            return invalid

        def _plan(content: str) -> PlannedEdit:
            lines = split_lines(content)
            total = len(lines)
            if start_line > total:
                return _beyond_end(start_line, total)
            end = min(end_line, total)
            count = end - start_line + 1
            del lines[start_line - 1 : end]
            return PlannedEdit(
                EditResult.success(
                    f"Success: Deleted lines {start_line}-{end} ({count} lines)",
                    details={
                        "start_line": start_line,
                        "end_line": end,
                        "lines_removed": count,
                        "lines_total": len(lines),
                    },
                ),
                new_content=join_lines(lines),
            )

        self._logger.info(f"Deleting lines {start_line}-{end_line} in {path}")
        return self._executor.run_single(path, _plan)
