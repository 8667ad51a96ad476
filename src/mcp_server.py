"""MCP stdio server exposing the surgical edit operations.

Every tool returns the structured edit result as a dict. Logs go to stderr:
stdout carries the JSON-RPC stream.
"""

import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from src.config.settings import settings
from src.container import container
from src.entities.EditRequest import LineEditRequest
from src.entities.EditResult import EditResult, ErrorKind

logger = logging.getLogger(__name__)

mcp = FastMCP("surgical-fs")


@mcp.tool()
def surgical_edit(path: str, find: str, replace: str) -> dict:
    """Replace text in a file, tolerating line-ending, indentation and whitespace
    differences in `find`. The file is backed up first and restored on failure."""
    return container.get_surgical_edit_use_case().execute(path, find, replace).to_dict()


@mcp.tool()
def preview_edit(path: str, find: str, replace: str) -> dict:
    """Show the diff surgical_edit would apply, without modifying the file."""
    return container.get_preview_edit_use_case().execute(path, find, replace).to_dict()


@mcp.tool()
def edit_lines(path: str, start_line: int, end_line: int, new_text: str) -> dict:
    """Replace lines start_line..end_line (1-indexed, inclusive) with new_text."""
    try:
        request = LineEditRequest(path, start_line, end_line, new_text)
    except ValueError as e:
        return EditResult.failure(ErrorKind.INVALID_REQUEST, f"Error: {e}").to_dict()
    return container.get_edit_lines_use_case().replace_lines(request).to_dict()


@mcp.tool()
def insert_lines(path: str, line_number: int, text: str) -> dict:
    """Insert text before line_number. 0 inserts at the beginning, past the end appends."""
    return container.get_edit_lines_use_case().insert_lines(path, line_number, text).to_dict()


@mcp.tool()
def delete_lines(path: str, start_line: int, end_line: int) -> dict:
    """Delete lines start_line..end_line (1-indexed, inclusive)."""
    return (
        container.get_edit_lines_use_case()
        .delete_lines(path, start_line, end_line)
        .to_dict()
    )


@mcp.tool()
def read_file_lines(
    path: str, start_line: Optional[int] = None, end_line: Optional[int] = None
) -> dict:
    """Read a file with line numbers, to choose a range before editing it."""
    return (
        container.get_read_file_lines_use_case()
        .execute(path, start_line, end_line)
        .to_dict()
    )


@mcp.tool()
def batch_edit(edits_json: str) -> dict:
    """Apply several edits atomically. `edits_json` is a JSON array of
    {"path", "find", "replace"} objects; if any edit fails, every file is restored."""
    return container.get_batch_edit_use_case().execute_json(edits_json).to_dict()


def main():
    """Run the MCP server."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger.info(
        f"Starting surgical-fs MCP server, allowed directories: "
        f"{', '.join(settings.allowed_directories)}"
    )
    mcp.run()


if __name__ == "__main__":
    main()
