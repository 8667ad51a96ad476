"""
Rollback report domain entity.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RestoreReport:
    """Result of restoring a transaction: success flag plus ordered per-item failures."""

    success: bool
    restored: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
