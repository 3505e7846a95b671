"""Core types for layer classification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, TypeAlias


SyntaxLayer: TypeAlias = Literal["javascript", "typescript", "jsx", "react"]

# Higher number wins when candidate regions overlap.
LAYER_PRIORITY: dict[SyntaxLayer, int] = {
    "javascript": 1,
    "jsx": 2,
    "typescript": 3,
    "react": 4,
}

ALL_LAYERS: tuple[SyntaxLayer, ...] = ("javascript", "typescript", "jsx", "react")


@dataclass(frozen=True, slots=True)
class CandidateRegion:
    """Provisional, possibly overlapping layer assignment."""

    start: int
    end: int
    layer: SyntaxLayer
    priority: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end <= self.start:
            raise ValueError(
                f"end must be > start, got {self.end} <= {self.start}",
            )
        if self.layer not in LAYER_PRIORITY:
            raise ValueError(f"unknown layer {self.layer!r}")


@dataclass(frozen=True, slots=True)
class ClassifiedRegion:
    """Final, merged layer assignment in the output partition."""

    start: int
    end: int
    layer: SyntaxLayer

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be >= 0, got {self.start}")
        if self.end <= self.start:
            raise ValueError(
                f"end must be > start, got {self.end} <= {self.start}",
            )
        if self.layer not in LAYER_PRIORITY:
            raise ValueError(f"unknown layer {self.layer!r}")


@dataclass(slots=True)
class TraversalContext:
    """Document-scoped state threaded through one classification call."""

    enum_names: set[str] = field(default_factory=set)


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    """Classified regions plus run diagnostics."""

    regions: tuple[ClassifiedRegion, ...]
    text_length: int
    layer_coverage: dict[SyntaxLayer, int]
    diagnostics: dict[str, object]


def make_candidate(start: int, end: int, layer: SyntaxLayer) -> CandidateRegion | None:
    """Build a candidate, or return None for an empty span."""
    if start < 0 or start >= end:
        return None
    return CandidateRegion(start=start, end=end, layer=layer, priority=LAYER_PRIORITY[layer])


def regions_to_dict(regions: list[ClassifiedRegion] | tuple[ClassifiedRegion, ...]) -> list[dict[str, object]]:
    """Serialize regions for deterministic snapshots."""

    return [
        {"start": region.start, "end": region.end, "layer": region.layer}
        for region in regions
    ]


def result_to_dict(result: ClassificationResult) -> dict[str, object]:
    """Serialize a classification result to a JSON-safe dict."""

    return {
        "text_length": result.text_length,
        "regions": regions_to_dict(result.regions),
        "layer_coverage": {layer: result.layer_coverage.get(layer, 0) for layer in ALL_LAYERS},
        "diagnostics": dict(sorted(result.diagnostics.items())),
    }
