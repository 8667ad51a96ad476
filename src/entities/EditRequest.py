"""
Edit request domain entities.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EditRequest:
    """A find/replace edit targeting one file."""

    path: str
    find: str
    replace: str

    def __post_init__(self):
        if not self.path or not isinstance(self.path, str):
            raise ValueError("Edit path must be a non-empty string")
        if not isinstance(self.find, str) or not isinstance(self.replace, str):
            raise ValueError("Edit 'find' and 'replace' must be strings")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditRequest":
        """
        Build an EditRequest from a decoded JSON object.

        Args:
            data: Mapping with 'path', 'find' and optional 'replace' keys

        Returns:
            The EditRequest

        Raises:
            ValueError: If the mapping is not a valid edit
        """
        if not isinstance(data, dict):
            raise ValueError("Each edit must be an object with path/find/replace")
        return cls(
            path=data.get("path") or "",
            find=data.get("find", ""),
            replace=data.get("replace", ""),
        )


@dataclass(frozen=True)
class LineEditRequest:
    """A line-range edit (1-indexed, inclusive) targeting one file."""

    path: str
    start_line: int
    end_line: int
    text: str = ""

    def __post_init__(self):
        if not self.path or not isinstance(self.path, str):
            raise ValueError("Edit path must be a non-empty string")
