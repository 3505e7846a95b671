"""Batch classification over files and directory trees."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any

from tsxlayers.classifier import classify_document_with_diagnostics
from tsxlayers.io_utils import save_jsonl
from tsxlayers.types import ALL_LAYERS, result_to_dict
from tsxlayers.vocabulary import DEFAULT_VOCABULARY, LibraryVocabulary


DEFAULT_SUFFIXES: tuple[str, ...] = (".tsx", ".jsx")


def _sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()


def iter_source_files(
    paths: list[Path],
    *,
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES,
) -> list[Path]:
    """Expand files and directories into a sorted, de-duplicated file list.

    Explicit file arguments are kept regardless of suffix; directories are
    searched recursively for files whose suffix is in ``suffixes``.
    """

    wanted = {suffix.lower() for suffix in suffixes}
    found: set[Path] = set()
    for path in paths:
        if path.is_dir():
            for candidate in path.rglob("*"):
                if candidate.is_file() and candidate.suffix.lower() in wanted:
                    found.add(candidate)
        elif path.is_file():
            found.add(path)
    return sorted(found)


def run_batch_classification(
    paths: list[Path],
    *,
    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES,
    vocabulary: LibraryVocabulary = DEFAULT_VOCABULARY,
    limit: int | None = None,
    sidecar_out: Path | None = None,
    overwrite_sidecar: bool = False,
) -> dict[str, Any]:
    """Classify every matching file and optionally persist a per-file JSONL sidecar."""

    files = iter_source_files(paths, suffixes=suffixes)
    if limit is not None and limit >= 0:
        files = files[:limit]

    sidecar_records: list[dict[str, Any]] = []
    skipped: list[dict[str, str]] = []
    layer_totals: dict[str, int] = {layer: 0 for layer in ALL_LAYERS}
    total_chars = 0
    total_regions = 0
    parse_error_files = 0
    processed = 0

    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            skipped.append({"path": str(path), "reason": f"{type(exc).__name__}: {exc}"})
            continue

        result = classify_document_with_diagnostics(text, vocabulary=vocabulary)
        processed += 1
        total_chars += result.text_length
        total_regions += len(result.regions)
        for layer, count in result.layer_coverage.items():
            layer_totals[layer] += count
        if int(result.diagnostics.get("parse_error_count", 0) or 0) > 0:
            parse_error_files += 1

        sidecar_records.append(
            {
                "path": str(path),
                "text_sha256": _sha256_text(text),
                **result_to_dict(result),
            },
        )

    covered = sum(layer_totals.values())
    report: dict[str, Any] = {
        "inputs": [str(path) for path in paths],
        "suffixes": list(suffixes),
        "processed_files": processed,
        "skipped_files": skipped,
        "parse_error_files": parse_error_files,
        "total_chars": total_chars,
        "total_regions": total_regions,
        "layer_coverage": layer_totals,
        "covered_ratio": round(covered / total_chars, 6) if total_chars else 0.0,
        "sidecar_records": len(sidecar_records),
    }

    if sidecar_out is not None:
        save_jsonl(sidecar_records, sidecar_out, append=not overwrite_sidecar)
        report["sidecar_path"] = str(sidecar_out)

    return report
