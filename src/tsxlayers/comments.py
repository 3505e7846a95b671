"""Comment/trivia scanner.

Comments are trivia attached to tokens rather than syntax nodes of their own,
so the collector never sees them. This pass walks every node, anonymous
tokens included, and reports the comments in each node's leading trivia and
the trailing comments on the same line after it. All comments are base layer.
"""

from __future__ import annotations

from tree_sitter import Node

from tsxlayers.syntax import ParsedSource
from tsxlayers.types import CandidateRegion, make_candidate


def collect_comment_regions(parsed: ParsedSource) -> list[CandidateRegion]:
    """Return one javascript candidate per distinct comment reachable from trivia."""
    seen: set[tuple[int, int]] = set()
    regions: list[CandidateRegion] = []

    def emit(start: int, end: int) -> None:
        if (start, end) in seen:
            return
        seen.add((start, end))
        candidate = make_candidate(start, end, "javascript")
        if candidate is not None:
            regions.append(candidate)

    stack: list[Node] = [parsed.root]
    while stack:
        node = stack.pop()
        full_start = parsed.full_start(node)
        if full_start < parsed.start(node):
            for comment in parsed.leading_comment_ranges(full_start):
                emit(comment.start, comment.end)
        for comment in parsed.trailing_comment_ranges(parsed.end(node)):
            emit(comment.start, comment.end)
        stack.extend(reversed(parsed.all_children(node)))

    # end-of-file trivia: no later token owns these comments
    for comment in parsed.leading_comment_ranges(parsed.last_token_end):
        emit(comment.start, comment.end)

    return regions
