"""
Tests for the atomic batch edit use case.
"""

import json
import os

import pytest

from src.entities.EditRequest import EditRequest
from src.entities.EditResult import ErrorKind
from src.exceptions import BatchRequestError
from src.use_cases.edits.batch_edit import BatchEditUseCase, parse_edits


@pytest.fixture
def batch_edit(executor, mock_logger):
    return BatchEditUseCase(executor, mock_logger)


@pytest.fixture
def three_files(temp_directory):
    paths = []
    for i in range(1, 4):
        path = os.path.join(temp_directory, f"mod{i}.py")
        with open(path, "w") as f:
            f.write(f"VALUE = {i}\nNAME = 'mod{i}'\n")
        paths.append(path)
    return paths


class TestBatchEditUseCase:
    """Test cases for BatchEditUseCase."""

    def test_all_edits_applied(self, batch_edit, three_files, read_file, backup_dirs, temp_directory):
        """Test every file is edited and the strategy reported per file."""
        requests = [EditRequest(p, "VALUE", "CONSTANT") for p in three_files]

        result = batch_edit.execute(requests)

        assert result.ok
        assert result.message.split("\n") == [
            "Batch complete: 3 edits applied",
            "  mod1.py: exact_match",
            "  mod2.py: exact_match",
            "  mod3.py: exact_match",
        ]
        for path in three_files:
            assert read_file(path).startswith("CONSTANT = ")
        assert backup_dirs(temp_directory) == []

    def test_second_edit_failing_restores_everything(
        self, batch_edit, three_files, read_file, backup_dirs, temp_directory
    ):
        """Test a batch whose middle edit misses leaves all files unchanged."""
        originals = [read_file(p) for p in three_files]
        requests = [
            EditRequest(three_files[0], "VALUE = 1", "VALUE = 10"),
            EditRequest(three_files[1], "NOT IN THE FILE", "x"),
            EditRequest(three_files[2], "VALUE = 3", "VALUE = 30"),
        ]

        result = batch_edit.execute(requests)

        assert not result.ok
        assert result.rolled_back is True
        assert result.message.startswith(f"Batch failed on {three_files[1]}: ")
        assert result.message.endswith("All changes rolled back")
        assert [read_file(p) for p in three_files] == originals
        assert backup_dirs(temp_directory) == []

    def test_whitespace_tolerance_applies_per_edit(self, batch_edit, temp_directory, read_file):
        """Test each edit reports the strategy that matched it."""
        app = os.path.join(temp_directory, "app.py")
        config = os.path.join(temp_directory, "pkg", "config.ini")
        requests = [
            EditRequest(app, "  print('hello')  ", "print('hi')"),
            EditRequest(config, "port = 8000\nhost", "port = 1\nhost"),
        ]

        result = batch_edit.execute(requests)

        assert [e["strategy"] for e in result.details["edits"]] == [
            "trimmed_whitespace",
            "line_ending_normalization",
        ]
        assert "print('hi')" in read_file(app)

    def test_execute_json(self, batch_edit, three_files, read_file):
        """Test a JSON array is decoded and applied."""
        payload = json.dumps([{"path": three_files[0], "find": "mod1", "replace": "first"}])

        result = batch_edit.execute_json(payload)

        assert result.ok
        assert "first" in read_file(three_files[0])

    @pytest.mark.parametrize(
        "payload",
        ["not json", "{}", "[]", '[{"find": "x"}]', '["just a string"]'],
    )
    def test_execute_json_rejects_malformed_input(self, batch_edit, payload):
        """Test bad payloads are invalid requests, not crashes."""
        result = batch_edit.execute_json(payload)

        assert result.kind is ErrorKind.INVALID_REQUEST
        assert result.rolled_back is False


class TestParseEdits:
    """Test cases for decoding batch payloads."""

    def test_replace_defaults_to_empty(self):
        """Test an omitted replace means delete."""
        edits = parse_edits('[{"path": "a.txt", "find": "x"}]')

        assert edits == [EditRequest("a.txt", "x", "")]

    def test_empty_list(self):
        """Test an empty array is refused."""
        with pytest.raises(BatchRequestError, match="No edits provided"):
            parse_edits("[]")
