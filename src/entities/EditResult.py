"""
Edit result domain entity returned by every edit operation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers."""

    ACCESS_DENIED = "access_denied"
    FILE_NOT_FOUND = "file_not_found"
    INVALID_REQUEST = "invalid_request"
    INVALID_RANGE = "invalid_range"
    BACKUP_FAILED = "backup_failed"
    NO_MATCH = "no_match"
    ROLLED_BACK = "rolled_back"
    INTERNAL = "internal"


@dataclass(frozen=True)
class EditResult:
    """
    Structured outcome of an edit operation.

    Failures are values, not exceptions: ``kind`` names the category and
    ``message`` the human-readable detail. ``rolled_back`` is only True when
    a transaction restored files after a partial mutation.
    """

    ok: bool
    message: str
    kind: Optional[ErrorKind] = None
    strategy: Optional[str] = None
    suggestion: Optional[str] = None
    rolled_back: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        message: str,
        strategy: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> "EditResult":
        """Create a success result."""
        return cls(ok=True, message=message, strategy=strategy, details=details or {})

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        suggestion: Optional[str] = None,
        rolled_back: bool = False,
        details: Optional[dict[str, Any]] = None,
    ) -> "EditResult":
        """Create a failure result."""
        return cls(
            ok=False,
            message=message,
            kind=kind,
            suggestion=suggestion,
            rolled_back=rolled_back,
            details=details or {},
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Returns a plain dict with enum values converted to strings.
        """
        return {
            "status": "ok" if self.ok else "error",
            "message": self.message,
            "kind": self.kind.value if self.kind else None,
            "strategy": self.strategy,
            "suggestion": self.suggestion,
            "rolled_back": self.rolled_back,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class PlannedEdit:
    """
    New content computed for a file, or the reason none was computed.

    ``new_content`` is None when nothing must be written; ``result`` is then a
    failure that is returned to the caller untouched.
    """

    result: EditResult
    new_content: Optional[str] = None

    @property
    def writes(self) -> bool:
        return self.new_content is not None
