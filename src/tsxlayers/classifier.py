"""Public entry points: classify a TSX document into syntax layers.

Pipeline::

    parse_tsx -> collect_regions -> collect_comment_regions -> resolve_overlaps

Each call owns its parse tree and traversal context, so concurrent calls on
different documents share no mutable state.
"""

from __future__ import annotations

import logging
from time import perf_counter

from tsxlayers.collector import collect_regions
from tsxlayers.comments import collect_comment_regions
from tsxlayers.resolver import layer_coverage, resolve_overlaps
from tsxlayers.syntax import parse_tsx
from tsxlayers.types import ClassificationResult, ClassifiedRegion, TraversalContext
from tsxlayers.vocabulary import DEFAULT_VOCABULARY, LibraryVocabulary

log = logging.getLogger(__name__)


def _empty_result(text_length: int, started: float) -> ClassificationResult:
    return ClassificationResult(
        regions=(),
        text_length=text_length,
        layer_coverage=layer_coverage(()),
        diagnostics={
            "candidate_count": 0,
            "comment_count": 0,
            "parse_error_count": 0,
            "enum_names": [],
            "runtime_ms": round((perf_counter() - started) * 1000, 3),
        },
    )


def classify_document_with_diagnostics(
    text: str,
    *,
    vocabulary: LibraryVocabulary = DEFAULT_VOCABULARY,
) -> ClassificationResult:
    """Classify ``text`` and report candidate counts, parse errors and runtime."""

    if not isinstance(text, str):
        raise TypeError(f"text must be str, got {type(text).__name__}")

    started = perf_counter()
    if not text.strip():
        return _empty_result(len(text), started)

    parsed = parse_tsx(text)
    context = TraversalContext()
    candidates = collect_regions(parsed, context, vocabulary)
    comment_candidates = collect_comment_regions(parsed)
    regions = resolve_overlaps([*candidates, *comment_candidates], len(text))

    duration_ms = round((perf_counter() - started) * 1000, 3)
    diagnostics: dict[str, object] = {
        "candidate_count": len(candidates),
        "comment_count": len(comment_candidates),
        "parse_error_count": parsed.error_count,
        "enum_names": sorted(context.enum_names),
        "runtime_ms": duration_ms,
    }
    if parsed.error_count:
        log.debug("parse produced %d error node(s); classifying recovered tree", parsed.error_count)
    log.debug(
        "classified %d chars: %d candidates, %d regions in %.3f ms",
        len(text), len(candidates) + len(comment_candidates), len(regions), duration_ms,
    )
    return ClassificationResult(
        regions=tuple(regions),
        text_length=len(text),
        layer_coverage=layer_coverage(regions),
        diagnostics=diagnostics,
    )


def classify_document(
    text: str,
    *,
    vocabulary: LibraryVocabulary = DEFAULT_VOCABULARY,
) -> list[ClassifiedRegion]:
    """Sorted, non-overlapping, maximally merged layer regions for ``text``.

    Uncovered characters (whitespace between constructs, unclassified tokens)
    are gaps: no region is emitted for them.
    """

    return list(classify_document_with_diagnostics(text, vocabulary=vocabulary).regions)
