"""
Whitespace-tolerant find/replace.

Strategies run in a fixed order, from strictest to most lenient, and the
first one that finds an occurrence wins:

1. exact match
2. line-ending normalization (CRLF/CR -> LF)
3. trimmed whitespace
4. tab normalization (tab -> four spaces)
5. fuzzy whitespace (line-by-line, runs of whitespace collapsed)
6. partial line match (single-line find only)

Strategies 2-6 return the LF-normalized file, and strategy 4 returns it with
every tab expanded: the rewrite is not scoped to the matched region.
"""

import re

from src.entities.MatchResult import MatchResult, MatchStrategy

NOT_FOUND_REASON = "Text not found in file"
TAB_WIDTH = "    "

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", text)


def suggest_fix(find: str) -> str:
    """Pick one remediation hint for a find text that did not match."""
    if '"' in find:
        return "Check quotes and formatting - FIND text must match exactly"
    if len(find) < 5:
        return "Try using a longer, more unique text pattern to find"
    if "\n" in find:
        return "For multi-line FIND, ensure line breaks and indentation match exactly"
    return "Check that the FIND text matches exactly (case-sensitive)"


def _fuzzy_line_match(content: str, find: str, replace: str) -> str | None:
    content_lines = content.split("\n")
    find_lines = find.split("\n")
    wanted = [collapse_whitespace(line.strip()) for line in find_lines]
    window = len(find_lines)

    for i in range(len(content_lines) - window + 1):
        if all(
            collapse_whitespace(content_lines[i + j].strip()) == wanted[j]
            for j in range(window)
        ):
            new_lines = content_lines[:i] + replace.split("\n") + content_lines[i + window :]
            return "\n".join(new_lines)
    return None


def _partial_line_match(content: str, trimmed_find: str, replace: str) -> str | None:
    lines = content.split("\n")
    for i, line in enumerate(lines):
        stripped = line.strip()
        if trimmed_find in stripped:
            # The whole trimmed line is swapped, surrounding indentation kept
            start = line.find(stripped)
            lines[i] = line[:start] + replace.strip() + line[start + len(stripped) :]
            return "\n".join(lines)
    return None


def _cascade(content: str, find: str, replace: str) -> MatchResult:
    if find in content:
        return MatchResult.found(MatchStrategy.EXACT_MATCH, content.replace(find, replace))

    normalized_content = normalize_line_endings(content)
    normalized_find = normalize_line_endings(find)
    if normalized_find in normalized_content:
        return MatchResult.found(
            MatchStrategy.LINE_ENDING_NORMALIZATION,
            normalized_content.replace(normalized_find, replace),
        )

    trimmed_find = find.strip()
    if trimmed_find and trimmed_find in normalized_content:
        return MatchResult.found(
            MatchStrategy.TRIMMED_WHITESPACE,
            normalized_content.replace(trimmed_find, replace.strip()),
        )

    tab_content = normalized_content.replace("\t", TAB_WIDTH)
    tab_find = normalized_find.replace("\t", TAB_WIDTH)
    if tab_find in tab_content:
        return MatchResult.found(
            MatchStrategy.TAB_NORMALIZATION, tab_content.replace(tab_find, replace)
        )

    if collapse_whitespace(trimmed_find) in collapse_whitespace(normalized_content):
        new_content = _fuzzy_line_match(normalized_content, normalized_find, replace)
        if new_content is not None:
            return MatchResult.found(MatchStrategy.FUZZY_WHITESPACE, new_content)

    # Only reachable for a whitespace-only find: any other trimmed find found
    # inside a line was already matched by the trimmed strategy
    if "\n" not in normalized_find:
        new_content = _partial_line_match(normalized_content, trimmed_find, replace)
        if new_content is not None:
            return MatchResult.found(MatchStrategy.PARTIAL_LINE_MATCH, new_content)

    return MatchResult.not_found(NOT_FOUND_REASON, suggest_fix(find))


def find_and_replace(content: str, find: str, replace: str) -> MatchResult:
    """
    Apply ``find`` -> ``replace`` to ``content`` using the first strategy that matches.

    Pure function: no I/O, and every failure (including bad input) comes back
    as a NOT_FOUND result with a reason and a suggestion.

    Args:
        content: Current file content
        find: Text to look for
        replace: Replacement text (may be empty to delete)

    Returns:
        MatchResult tagged with the winning strategy, or NOT_FOUND
    """
    try:
        if not isinstance(content, str) or not isinstance(find, str):
            raise TypeError("content and find must be strings")
        if not isinstance(replace, str):
            raise TypeError("replace must be a string")
        if find == "":
            raise ValueError("FIND text is empty")
        return _cascade(content, find, replace)
    except Exception as e:
        return MatchResult.not_found(
            f"Update error: {e}",
            suggest_fix(find) if isinstance(find, str) else "Check the edit arguments and try again",
        )
