"""Lexical angle-bracket matching for type argument and type parameter lists.

Type argument lists are not always represented as their own tree nodes, so the
collector locates ``<...>`` spans by scanning the raw text. Both scanners
return ``NOT_FOUND`` instead of raising; callers drop the candidate.
"""

from __future__ import annotations


NOT_FOUND = -1


def find_opening_bracket(text: str, before_pos: int) -> int:
    """Scan backwards from ``before_pos`` to the nearest ``<``."""
    pos = min(before_pos, len(text) - 1)
    while pos > 0 and text[pos] != "<":
        pos -= 1
    if pos >= 0 and text[pos] == "<":
        return pos
    return NOT_FOUND


def find_matching_close_bracket(text: str, open_pos: int) -> int:
    """Find the ``>`` closing the ``<`` at ``open_pos``, honouring nesting."""
    depth = 1
    pos = open_pos + 1
    while pos < len(text) and depth > 0:
        ch = text[pos]
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        pos += 1
    return pos - 1 if depth == 0 else NOT_FOUND


def find_type_argument_range(text: str, first_argument_start: int) -> tuple[int, int] | None:
    """Half-open range of the ``<...>`` list whose first entry starts at the given offset."""
    open_pos = find_opening_bracket(text, first_argument_start - 1)
    if open_pos == NOT_FOUND:
        return None
    close_pos = find_matching_close_bracket(text, open_pos)
    if close_pos == NOT_FOUND:
        return None
    return open_pos, close_pos + 1
