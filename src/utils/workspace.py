from __future__ import annotations

import os
import re
from typing import Iterable, Tuple

from src.exceptions import AccessDeniedError

"""Allow-list utilities to constrain file access.

The allowed directories come from configuration (SURGICAL_FS_ALLOWED_DIRS)
and are fixed when a PathValidator is built.
"""

_SEGMENT_SPLIT = re.compile(r"[\\/]+")


def normalize_dir(path: str) -> str:
    s = os.path.expanduser(str(path or "").strip())
    if not os.path.isabs(s):
        s = os.path.abspath(os.path.join(os.getcwd(), s))
    return os.path.abspath(s)


def normalize_file(path: str) -> str:
    return normalize_dir(path)


def has_parent_traversal(path: str) -> bool:
    """True if any segment of the raw path is '..'."""
    return ".." in _SEGMENT_SPLIT.split(str(path or ""))


def is_within(root: str, abs_path: str) -> bool:
    try:
        return os.path.commonpath([root, abs_path]) == root
    except ValueError:
        # different drives
        return False


class PathValidator:
    """Validate paths against an immutable allow-list of directories."""

    def __init__(self, allowed_directories: Iterable[str]):
        roots = tuple(normalize_dir(d) for d in allowed_directories if str(d).strip())
        if not roots:
            raise ValueError("At least one allowed directory is required")
        self._allowed: Tuple[str, ...] = roots

    @property
    def allowed_directories(self) -> Tuple[str, ...]:
        return self._allowed

    def is_allowed(self, path: str) -> bool:
        if not path or has_parent_traversal(path):
            return False
        abs_path = normalize_file(path)
        return any(is_within(root, abs_path) for root in self._allowed)

    def validate(self, path: str) -> str:
        """
        Return the absolute path if it is allowed.

        Raises:
            AccessDeniedError: If the path contains a '..' segment or resolves
                outside every allowed directory
        """
        if not self.is_allowed(path):
            raise AccessDeniedError(
                f"Path '{path}' is outside allowed directories. "
                f"Allowed: {', '.join(self._allowed)}"
            )
        return normalize_file(path)

    def working_directory_for(self, abs_path: str) -> str:
        """The allowed root containing abs_path (the deepest one if nested)."""
        matches = [root for root in self._allowed if is_within(root, abs_path)]
        if matches:
            return max(matches, key=len)
        return os.path.dirname(abs_path) or abs_path
