"""
Pydantic models for API requests and responses.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class FindReplaceRequest(BaseModel):
    """Schema for a find/replace edit or preview."""

    path: str = Field(..., description="Path of the file to edit")
    find: str = Field(..., description="Text to find (whitespace-tolerant)")
    replace: str = Field("", description="Replacement text, empty to delete")


class ReplaceLinesRequest(BaseModel):
    """Schema for replacing a line range."""

    path: str = Field(..., description="Path of the file to edit")
    start_line: int = Field(..., description="First line to replace (1-indexed)")
    end_line: int = Field(..., description="Last line to replace (inclusive)")
    new_text: str = Field("", description="Replacement lines, separated by \\n")


class InsertLinesRequest(BaseModel):
    """Schema for inserting lines."""

    path: str = Field(..., description="Path of the file to edit")
    line_number: int = Field(
        ..., description="Insert before this line; 0 prepends, past the end appends"
    )
    text: str = Field(..., description="Lines to insert, separated by \\n")


class DeleteLinesRequest(BaseModel):
    """Schema for deleting a line range."""

    path: str = Field(..., description="Path of the file to edit")
    start_line: int = Field(..., description="First line to delete (1-indexed)")
    end_line: int = Field(..., description="Last line to delete (inclusive)")


class BatchEditItem(BaseModel):
    """Schema for one edit of a batch."""

    path: str = Field(..., description="Path of the file to edit")
    find: str = Field(..., description="Text to find")
    replace: str = Field("", description="Replacement text")


class BatchEditRequest(BaseModel):
    """Schema for an atomic multi-file edit."""

    edits: List[BatchEditItem] = Field(..., description="Edits applied in order")


class EditResponse(BaseModel):
    """Schema for the outcome of an edit operation."""

    status: str = Field(..., description="'ok' or 'error'")
    message: str = Field(..., description="Human-readable outcome")
    kind: Optional[str] = Field(None, description="Failure category")
    strategy: Optional[str] = Field(None, description="Matching strategy used")
    suggestion: Optional[str] = Field(None, description="Hint when nothing matched")
    rolled_back: bool = Field(False, description="Whether files were restored")
    details: dict[str, Any] = Field(default_factory=dict, description="Extra data")

    @classmethod
    def from_result(cls, result):
        """Create an EditResponse schema from an EditResult entity."""
        return cls(**result.to_dict())


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: EditResponse = Field(..., description="Structured failure")
