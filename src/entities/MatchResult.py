"""
Match result domain entity produced by the matching engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MatchOutcome(str, Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"


class MatchStrategy(str, Enum):
    """Matching strategies, in the order the cascade tries them."""

    EXACT_MATCH = "exact_match"
    LINE_ENDING_NORMALIZATION = "line_ending_normalization"
    TRIMMED_WHITESPACE = "trimmed_whitespace"
    TAB_NORMALIZATION = "tab_normalization"
    FUZZY_WHITESPACE = "fuzzy_whitespace"
    PARTIAL_LINE_MATCH = "partial_line_match"


@dataclass(frozen=True)
class MatchResult:
    """
    Outcome of a find/replace attempt.

    On success only ``strategy`` and ``new_content`` are meaningful; on
    NOT_FOUND only ``failure_reason`` and ``suggestion`` are.
    """

    outcome: MatchOutcome
    strategy: Optional[MatchStrategy] = None
    new_content: str = ""
    failure_reason: str = ""
    suggestion: str = ""

    @classmethod
    def found(cls, strategy: MatchStrategy, new_content: str) -> "MatchResult":
        return cls(MatchOutcome.SUCCESS, strategy=strategy, new_content=new_content)

    @classmethod
    def not_found(cls, reason: str, suggestion: str) -> "MatchResult":
        return cls(MatchOutcome.NOT_FOUND, failure_reason=reason, suggestion=suggestion)

    @property
    def success(self) -> bool:
        return self.outcome is MatchOutcome.SUCCESS
