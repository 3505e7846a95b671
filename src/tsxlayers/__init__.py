"""TSX syntax layer classification: javascript, typescript, jsx and react regions."""

from tsxlayers.batch import iter_source_files, run_batch_classification
from tsxlayers.brackets import (
    find_matching_close_bracket,
    find_opening_bracket,
    find_type_argument_range,
)
from tsxlayers.classifier import classify_document, classify_document_with_diagnostics
from tsxlayers.collector import RegionCollector, collect_regions
from tsxlayers.comments import collect_comment_regions
from tsxlayers.resolver import layer_at, layer_coverage, resolve_overlaps
from tsxlayers.syntax import ParsedSource, parse_tsx
from tsxlayers.types import (
    LAYER_PRIORITY,
    CandidateRegion,
    ClassificationResult,
    ClassifiedRegion,
    SyntaxLayer,
    TraversalContext,
    regions_to_dict,
    result_to_dict,
)
from tsxlayers.vocabulary import (
    DEFAULT_VOCABULARY,
    LibraryVocabulary,
    load_vocabulary,
    vocabulary_from_dict,
)

__all__ = [
    "CandidateRegion",
    "ClassificationResult",
    "ClassifiedRegion",
    "DEFAULT_VOCABULARY",
    "LAYER_PRIORITY",
    "LibraryVocabulary",
    "ParsedSource",
    "RegionCollector",
    "SyntaxLayer",
    "TraversalContext",
    "classify_document",
    "classify_document_with_diagnostics",
    "collect_comment_regions",
    "collect_regions",
    "find_matching_close_bracket",
    "find_opening_bracket",
    "find_type_argument_range",
    "iter_source_files",
    "layer_at",
    "layer_coverage",
    "load_vocabulary",
    "parse_tsx",
    "regions_to_dict",
    "resolve_overlaps",
    "result_to_dict",
    "run_batch_classification",
    "vocabulary_from_dict",
]
