"""
Tests for the numbered read use case.
"""

import os

import pytest

from src.entities.EditResult import ErrorKind
from src.use_cases.edits.read_file_lines import ReadFileLinesUseCase, render_numbered


@pytest.fixture
def read_lines(executor, file_repository, mock_logger):
    return ReadFileLinesUseCase(executor, file_repository, mock_logger)


class TestReadFileLinesUseCase:
    """Test cases for ReadFileLinesUseCase."""

    def test_read_whole_file(self, read_lines, temp_directory):
        """Test the default range covers the file with aligned numbers."""
        target = os.path.join(temp_directory, "notes.txt")

        result = read_lines.execute(target)

        lines = result.message.split("\n")
        assert result.ok
        assert lines[0] == f"File: {target} (lines 1-10 of 10)"
        assert lines[1] == "=" * 50
        assert lines[2] == " 1 | line 1"
        assert lines[-1] == "10 | line 10"
        assert len(lines) == 12

    def test_read_range(self, read_lines, temp_directory):
        """Test a sub-range is listed with its own number width."""
        target = os.path.join(temp_directory, "notes.txt")

        result = read_lines.execute(target, 3, 5)

        assert result.message.split("\n")[2:] == [
            "3 | line 3",
            "4 | line 4",
            "5 | line 5",
        ]
        assert result.details == {"start_line": 3, "end_line": 5, "lines_total": 10}

    def test_read_clamps_end(self, read_lines, temp_directory):
        """Test an end past the file is clamped."""
        target = os.path.join(temp_directory, "notes.txt")

        result = read_lines.execute(target, 8, 50)

        assert result.message.split("\n")[0].endswith("(lines 8-10 of 10)")
        assert len(result.message.split("\n")) == 5

    def test_read_crlf_file(self, read_lines, temp_directory):
        """Test CRLF terminators do not leak into the listing."""
        target = os.path.join(temp_directory, "pkg", "config.ini")

        result = read_lines.execute(target)

        assert "\r" not in result.message
        assert result.message.split("\n")[3] == "2 | port = 8000"

    def test_read_missing_file(self, read_lines, temp_directory):
        """Test a missing file is reported."""
        result = read_lines.execute(os.path.join(temp_directory, "nope.txt"))

        assert result.kind is ErrorKind.FILE_NOT_FOUND

    def test_read_never_creates_backups(self, read_lines, temp_directory, backup_dirs):
        """Test reading is free of side effects."""
        read_lines.execute(os.path.join(temp_directory, "app.py"))

        assert backup_dirs(temp_directory) == []


class TestRenderNumbered:
    """Test cases for the listing formatter."""

    def test_start_past_end_lists_nothing(self):
        """Test an out-of-range start yields only the header."""
        listing, first, last = render_numbered("f", ["a", "b"], 5, None)

        assert listing.split("\n") == ["File: f (lines 3-2 of 2)", "=" * 50]
        assert (first, last) == (3, 2)

    def test_empty_file(self):
        """Test an empty file renders an empty range."""
        listing, _, _ = render_numbered("f", [], 1, None)

        assert listing.split("\n")[0] == "File: f (lines 1-0 of 0)"
