"""
Tools "surgical.*" mapped to the edit use cases.
"""

import json
import logging
from typing import Any, Optional

from src.entities.EditRequest import LineEditRequest
from src.entities.EditResult import EditResult
from src.exceptions import ToolError
from src.ports.llm.tools_port import ToolsHandlerPort, ToolSpec
from src.use_cases.edits.batch_edit import BatchEditUseCase
from src.use_cases.edits.edit_lines import EditLinesUseCase
from src.use_cases.edits.preview_edit import PreviewEditUseCase
from src.use_cases.edits.read_file_lines import ReadFileLinesUseCase
from src.use_cases.edits.surgical_edit import SurgicalEditUseCase


def _required_str(arguments: dict[str, Any], key: str, allow_empty: bool = False) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or (not allow_empty and not value):
        raise ToolError(f"Field '{key}' (string) is required.")
    return value


def _required_int(arguments: dict[str, Any], key: str) -> int:
    value = arguments.get(key)
    if isinstance(value, bool) or value is None:
        raise ToolError(f"Field '{key}' (integer) is required.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ToolError(f"Field '{key}' must be an integer, got {value!r}")


def _optional_int(arguments: dict[str, Any], key: str) -> Optional[int]:
    if arguments.get(key) is None:
        return None
    return _required_int(arguments, key)


class EditToolsHandler(ToolsHandlerPort):
    """Handler for surgical edit tools that can be called by an LLM."""

    def __init__(
        self,
        surgical_edit_uc: SurgicalEditUseCase,
        preview_edit_uc: PreviewEditUseCase,
        edit_lines_uc: EditLinesUseCase,
        read_file_lines_uc: ReadFileLinesUseCase,
        batch_edit_uc: BatchEditUseCase,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the edit tools handler.

        Args:
            surgical_edit_uc: Use case for find/replace edits
            preview_edit_uc: Use case for previewing find/replace edits
            edit_lines_uc: Use case for line-range edits
            read_file_lines_uc: Use case for numbered reads
            batch_edit_uc: Use case for atomic multi-file edits
            logger: Logger instance to use for logging
        """
        self._surgical_edit_uc = surgical_edit_uc
        self._preview_edit_uc = preview_edit_uc
        self._edit_lines_uc = edit_lines_uc
        self._read_file_lines_uc = read_file_lines_uc
        self._batch_edit_uc = batch_edit_uc
        self._logger = logger or logging.getLogger(__name__)

    def available_tools(self) -> list[ToolSpec]:
        """
        Get a list of available edit tools.

        Returns:
            List of tool specifications for edit operations
        """
        return [
            {
                "name": "surgical.edit",
                "description": (
                    "Replace text in a file. Tolerates line-ending, indentation and "
                    "whitespace differences in 'find'. Backs up the file and rolls "
                    "back on failure."
                ),
                "parameters": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string", "description": "File path"},
                        "find": {"type": "string", "description": "Text to find"},
                        "replace": {
                            "type": "string",
                            "description": "Replacement text (empty to delete)",
                        },
                    },
                    "required": ["path", "find", "replace"],
                    "additionalProperties": False,
                },
            },
            {
                "name": "surgical.preview",
                "description": "Show the diff a surgical.edit would apply, without writing.",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string"},
                        "find": {"type": "string"},
                        "replace": {"type": "string"},
                    },
                    "required": ["path", "find", "replace"],
                    "additionalProperties": False,
                },
            },
            {
                "name": "surgical.edit_lines",
                "description": "Replace lines start_line..end_line (1-indexed, inclusive) with new text.",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string"},
                        "start_line": {"type": "integer", "minimum": 1},
                        "end_line": {"type": "integer", "minimum": 1},
                        "new_text": {
                            "type": "string",
                            "description": "Replacement lines, separated by \\n",
                        },
                    },
                    "required": ["path", "start_line", "end_line", "new_text"],
                    "additionalProperties": False,
                },
            },
            {
                "name": "surgical.insert_lines",
                "description": (
                    "Insert text before a line. 0 inserts at the beginning, a number "
                    "past the end appends."
                ),
                "parameters": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string"},
                        "line_number": {"type": "integer", "minimum": 0},
                        "text": {"type": "string"},
                    },
                    "required": ["path", "line_number", "text"],
                    "additionalProperties": False,
                },
            },
            {
                "name": "surgical.delete_lines",
                "description": "Delete lines start_line..end_line (1-indexed, inclusive).",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string"},
                        "start_line": {"type": "integer", "minimum": 1},
                        "end_line": {"type": "integer", "minimum": 1},
                    },
                    "required": ["path", "start_line", "end_line"],
                    "additionalProperties": False,
                },
            },
            {
                "name": "surgical.read_lines",
                "description": "Read a file with line numbers, to pick a range before editing it.",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "path": {"type": "string"},
                        "start_line": {
                            "type": "integer",
                            "description": "First line (default 1)",
                        },
                        "end_line": {
                            "type": "integer",
                            "description": "Last line (default: end of file)",
                        },
                    },
                    "required": ["path"],
                    "additionalProperties": False,
                },
            },
            {
                "name": "surgical.batch_edit",
                "description": (
                    "Apply several find/replace edits atomically: either all succeed "
                    "or every file is restored."
                ),
                "parameters": {
                    "type": "object",
                    "properties": {
                        "edits": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "path": {"type": "string"},
                                    "find": {"type": "string"},
                                    "replace": {"type": "string"},
                                },
                                "required": ["path", "find"],
                            },
                            "description": "Edits applied in order",
                        },
                    },
                    "required": ["edits"],
                    "additionalProperties": False,
                },
            },
        ]

    def _run(self, name: str, arguments: dict[str, Any]) -> EditResult:
        if name == "surgical.edit":
            return self._surgical_edit_uc.execute(
                _required_str(arguments, "path"),
                _required_str(arguments, "find", allow_empty=True),
                _required_str(arguments, "replace", allow_empty=True),
            )

        if name == "surgical.preview":
            return self._preview_edit_uc.execute(
                _required_str(arguments, "path"),
                _required_str(arguments, "find", allow_empty=True),
                _required_str(arguments, "replace", allow_empty=True),
            )

        if name == "surgical.edit_lines":
            request = LineEditRequest(
                path=_required_str(arguments, "path"),
                start_line=_required_int(arguments, "start_line"),
                end_line=_required_int(arguments, "end_line"),
                text=_required_str(arguments, "new_text", allow_empty=True),
            )
            return self._edit_lines_uc.replace_lines(request)

        if name == "surgical.insert_lines":
            return self._edit_lines_uc.insert_lines(
                _required_str(arguments, "path"),
                _required_int(arguments, "line_number"),
                _required_str(arguments, "text", allow_empty=True),
            )

        if name == "surgical.delete_lines":
            return self._edit_lines_uc.delete_lines(
                _required_str(arguments, "path"),
                _required_int(arguments, "start_line"),
                _required_int(arguments, "end_line"),
            )

        if name == "surgical.read_lines":
            return self._read_file_lines_uc.execute(
                _required_str(arguments, "path"),
                _optional_int(arguments, "start_line"),
                _optional_int(arguments, "end_line"),
            )

        if name == "surgical.batch_edit":
            edits = arguments.get("edits")
            # Accept an already-encoded array as well as a decoded one
            edits_json = edits if isinstance(edits, str) else json.dumps(edits)
            return self._batch_edit_uc.execute_json(edits_json)

        # Signal to the caller that this handler doesn't handle the tool
        raise ValueError(f"Unknown tool: {name}")

    def dispatch(self, name: str, arguments: dict[str, Any]) -> str:
        """
        Dispatch a tool invocation to the appropriate use case.

        Args:
            name: Name of the tool to invoke
            arguments: Arguments to pass to the tool

        Returns:
            JSON text of the structured edit result

        Raises:
            ValueError: If the tool name is unknown
            ToolError: If the arguments are missing or have the wrong type
        """
        self._logger.info(f"Executing {name} tool")
        try:
            result = self._run(name, arguments or {})
        except (ValueError, ToolError):
            raise
        except Exception as e:
            self._logger.error(f"Error dispatching tool {name}: {e}")
            raise ToolError(f"Failed to execute tool {name}: {str(e)}")
        return json.dumps(result.to_dict(), ensure_ascii=False)
