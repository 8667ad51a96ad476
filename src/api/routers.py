"""
FastAPI router definitions for the API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from src.api.dependencies import (
    get_batch_edit_uc,
    get_edit_lines_uc,
    get_preview_edit_uc,
    get_read_file_lines_uc,
    get_surgical_edit_uc,
)
from src.api.schemas import (
    BatchEditRequest,
    DeleteLinesRequest,
    EditResponse,
    ErrorResponse,
    FindReplaceRequest,
    InsertLinesRequest,
    ReplaceLinesRequest,
)
from src.entities.EditRequest import EditRequest, LineEditRequest
from src.entities.EditResult import EditResult, ErrorKind

router = APIRouter()

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.ACCESS_DENIED: 403,
    ErrorKind.FILE_NOT_FOUND: 404,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.INVALID_RANGE: 400,
    ErrorKind.NO_MATCH: 422,
    ErrorKind.BACKUP_FAILED: 500,
    ErrorKind.ROLLED_BACK: 500,
    ErrorKind.INTERNAL: 500,
}

ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in sorted(set(STATUS_BY_KIND.values()))
}


def _invalid_request(message: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=EditResult.failure(ErrorKind.INVALID_REQUEST, message).to_dict(),
    )


def _respond(result: EditResult) -> EditResponse:
    """
    Turn an edit result into a response, raising for failures.

    Raises:
        HTTPException: With the structured result as detail when the edit failed
    """
    if not result.ok:
        status_code = STATUS_BY_KIND.get(result.kind, 500) if result.kind else 500
        raise HTTPException(status_code=status_code, detail=result.to_dict())
    return EditResponse.from_result(result)


@router.post("/edits/find-replace", response_model=EditResponse, responses=ERROR_RESPONSES)
def find_replace(body: FindReplaceRequest):
    """
    Apply a whitespace-tolerant find/replace to one file.

    Args:
        body: Request body with path, find and replace

    Returns:
        EditResponse: Outcome naming the matching strategy used

    Raises:
        HTTPException: If the edit failed or was rolled back
    """
    return _respond(get_surgical_edit_uc().execute(body.path, body.find, body.replace))


@router.post("/edits/preview", response_model=EditResponse, responses=ERROR_RESPONSES)
def preview(body: FindReplaceRequest):
    """
    Show the diff a find/replace would produce, without writing.

    Returns:
        EditResponse: Outcome whose message holds the diff
    """
    return _respond(get_preview_edit_uc().execute(body.path, body.find, body.replace))


@router.post("/edits/lines/replace", response_model=EditResponse, responses=ERROR_RESPONSES)
def replace_lines(body: ReplaceLinesRequest):
    """
    Replace a 1-indexed, inclusive line range.

    Raises:
        HTTPException: If the range is invalid or the edit failed
    """
    try:
        request = LineEditRequest(
            path=body.path,
            start_line=body.start_line,
            end_line=body.end_line,
            text=body.new_text,
        )
    except ValueError as e:
        raise _invalid_request(f"Error: {e}")
    return _respond(get_edit_lines_uc().replace_lines(request))


@router.post("/edits/lines/insert", response_model=EditResponse, responses=ERROR_RESPONSES)
def insert_lines(body: InsertLinesRequest):
    """Insert lines before a line number (0 prepends, past the end appends)."""
    return _respond(
        get_edit_lines_uc().insert_lines(body.path, body.line_number, body.text)
    )


@router.post("/edits/lines/delete", response_model=EditResponse, responses=ERROR_RESPONSES)
def delete_lines(body: DeleteLinesRequest):
    """Delete a 1-indexed, inclusive line range."""
    return _respond(
        get_edit_lines_uc().delete_lines(body.path, body.start_line, body.end_line)
    )


@router.get("/files/lines", response_model=EditResponse, responses=ERROR_RESPONSES)
def read_lines(
    path: str = Query(..., description="Path of the file to read"),
    start_line: Optional[int] = Query(None, description="First line (default 1)"),
    end_line: Optional[int] = Query(None, description="Last line (default: end of file)"),
):
    """
    Read a file with line numbers.

    Args:
        path: Path of the file to read
        start_line: First line to show
        end_line: Last line to show

    Returns:
        EditResponse: Outcome whose message is the numbered listing
    """
    return _respond(get_read_file_lines_uc().execute(path, start_line, end_line))


@router.post("/edits/batch", response_model=EditResponse, responses=ERROR_RESPONSES)
def batch_edit(body: BatchEditRequest):
    """
    Apply several find/replace edits atomically.

    Raises:
        HTTPException: If any edit failed; every file is then restored
    """
    if not body.edits:
        raise _invalid_request("Error: No edits provided")
    try:
        requests = [
            EditRequest(path=e.path, find=e.find, replace=e.replace) for e in body.edits
        ]
    except ValueError as e:
        raise _invalid_request(f"Error: {e}")
    return _respond(get_batch_edit_uc().execute(requests))
