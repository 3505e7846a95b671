"""Overlap resolver: per-position priority sweep over candidate regions.

Every character position remembers the best layer claimed so far. A candidate
overwrites a position only with strictly higher priority, so among equal
priorities the first emitted candidate wins. Adjacent equal-layer positions
are then merged into maximal runs; positions nobody claimed stay gaps.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable

from tsxlayers.types import (
    ALL_LAYERS,
    CandidateRegion,
    ClassifiedRegion,
    SyntaxLayer,
)


def resolve_overlaps(
    candidates: Iterable[CandidateRegion],
    text_length: int,
) -> list[ClassifiedRegion]:
    """Resolve candidates into a sorted, non-overlapping, maximally merged list."""
    if text_length <= 0:
        return []

    layer_at_pos: list[SyntaxLayer | None] = [None] * text_length
    priority_at_pos = [0] * text_length

    for candidate in candidates:
        end = min(candidate.end, text_length)
        priority = candidate.priority
        layer = candidate.layer
        for pos in range(candidate.start, end):
            if priority > priority_at_pos[pos]:
                priority_at_pos[pos] = priority
                layer_at_pos[pos] = layer

    regions: list[ClassifiedRegion] = []
    run_layer: SyntaxLayer | None = None
    run_start = 0
    for pos, layer in enumerate(layer_at_pos):
        if layer == run_layer:
            continue
        if run_layer is not None:
            regions.append(ClassifiedRegion(start=run_start, end=pos, layer=run_layer))
        run_layer = layer
        run_start = pos
    if run_layer is not None:
        regions.append(ClassifiedRegion(start=run_start, end=text_length, layer=run_layer))
    return regions


def layer_coverage(regions: Iterable[ClassifiedRegion]) -> dict[SyntaxLayer, int]:
    """Characters covered per layer (every layer present, zero when absent)."""
    coverage: dict[SyntaxLayer, int] = {layer: 0 for layer in ALL_LAYERS}
    for region in regions:
        coverage[region.layer] += region.end - region.start
    return coverage


def layer_at(regions: list[ClassifiedRegion], pos: int) -> SyntaxLayer | None:
    """Layer at a character offset, or None inside a gap. ``regions`` must be resolved output."""
    idx = bisect.bisect_right([region.start for region in regions], pos) - 1
    if idx < 0:
        return None
    region = regions[idx]
    if region.start <= pos < region.end:
        return region.layer
    return None
