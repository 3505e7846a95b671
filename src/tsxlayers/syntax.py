"""TSX parsing collaborator built on tree-sitter.

Wraps a tree-sitter tree with the accessors the classifier needs, all in
character offsets:

- ``start`` / ``end`` of a node (text span, excluding leading trivia)
- ``full_start`` of a node (end of the previous token, i.e. including trivia)
- child enumeration without comment extras
- leading / trailing comment ranges keyed by offset

tree-sitter is error tolerant: malformed input yields ``ERROR`` and missing
nodes rather than an exception.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from tsxlayers.source_text import SourceText, build_source_text


TSX_LANGUAGE = Language(tstypescript.language_tsx())

COMMENT_NODE_TYPES: frozenset[str] = frozenset({"comment", "html_comment", "hash_bang_line"})


@dataclass(frozen=True, slots=True)
class CommentRange:
    """A comment in trivia, in character offsets."""

    start: int
    end: int
    is_line_comment: bool

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError(f"comment end must be > start, got {self.end} <= {self.start}")


class ParsedSource:
    """A parsed TSX document with character-offset node accessors."""

    __slots__ = ("source", "tree", "comments", "error_count", "_comment_starts", "_token_ends")

    def __init__(self, source: SourceText, tree: Tree) -> None:
        self.source = source
        self.tree = tree
        comments: list[CommentRange] = []
        token_ends: list[int] = []
        error_count = 0

        stack: list[Node] = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            if node.type in COMMENT_NODE_TYPES:
                start = self.start(node)
                end = self.end(node)
                if start < end:
                    text = self.source.text[start:end]
                    comments.append(
                        CommentRange(
                            start=start,
                            end=end,
                            is_line_comment=not text.startswith("/*"),
                        ),
                    )
                continue
            if node.child_count == 0:
                token_ends.append(self.end(node))
                continue
            stack.extend(node.children)

        comments.sort(key=lambda row: (row.start, row.end))
        token_ends.sort()
        self.comments = tuple(comments)
        self.error_count = error_count
        self._comment_starts = [row.start for row in self.comments]
        self._token_ends = token_ends

    @property
    def text(self) -> str:
        return self.source.text

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def last_token_end(self) -> int:
        """End of the final non-comment token, or 0 for a token-free document."""
        return self._token_ends[-1] if self._token_ends else 0

    def start(self, node: Node) -> int:
        return self.source.char_offset(node.start_byte)

    def end(self, node: Node) -> int:
        return self.source.char_offset(node.end_byte)

    def full_start(self, node: Node) -> int:
        """Start including leading trivia: end of the previous token, or 0."""
        start = self.start(node)
        idx = bisect.bisect_right(self._token_ends, start) - 1
        if idx < 0:
            return 0
        return self._token_ends[idx]

    def node_text(self, node: Node) -> str:
        return self.source.text[self.start(node):self.end(node)]

    def children(self, node: Node) -> list[Node]:
        """Named children, without comment extras."""
        return [child for child in node.named_children if child.type not in COMMENT_NODE_TYPES]

    def all_children(self, node: Node) -> list[Node]:
        """Named and anonymous children, without comment extras."""
        return [child for child in node.children if child.type not in COMMENT_NODE_TYPES]

    def token(self, node: Node, token_type: str) -> Node | None:
        """First direct anonymous child with the given token type (e.g. ``"?"``)."""
        for child in node.children:
            if not child.is_named and child.type == token_type:
                return child
        return None

    def tokens(self, node: Node, token_types: frozenset[str]) -> list[Node]:
        return [child for child in node.children if child.type in token_types]

    def leading_comment_ranges(self, pos: int) -> list[CommentRange]:
        """Comments in the trivia run that begins at ``pos``."""
        return self._comment_run(pos, stop_at_newline=False)

    def trailing_comment_ranges(self, pos: int) -> list[CommentRange]:
        """Comments after ``pos`` on the same line."""
        return self._comment_run(pos, stop_at_newline=True)

    def _comment_run(self, pos: int, *, stop_at_newline: bool) -> list[CommentRange]:
        out: list[CommentRange] = []
        text = self.source.text
        cursor = pos
        idx = bisect.bisect_left(self._comment_starts, pos)
        while idx < len(self.comments):
            comment = self.comments[idx]
            gap = text[cursor:comment.start]
            if gap.strip():
                break
            if stop_at_newline and "\n" in gap:
                break
            out.append(comment)
            cursor = comment.end
            idx += 1
            if stop_at_newline and comment.is_line_comment:
                break
        return out


def parse_tsx(text: str) -> ParsedSource:
    """Parse ``text`` as TSX. A fresh parser is created per call."""

    source = build_source_text(text)
    parser = Parser(TSX_LANGUAGE)
    tree = parser.parse(source.encoded)
    return ParsedSource(source, tree)
