#!/usr/bin/env python3
"""Classify TSX/JSX files into javascript/typescript/jsx/react layer regions.

Usage:
    python3 scripts/classify_layers.py src/components/Button.tsx --regions
    python3 scripts/classify_layers.py src/ --sidecar-out artifacts/layers.jsonl \
        --report-out artifacts/layers_report.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tsxlayers.batch import DEFAULT_SUFFIXES, run_batch_classification
from tsxlayers.classifier import classify_document_with_diagnostics
from tsxlayers.io_utils import dumps_pretty, save_json
from tsxlayers.types import result_to_dict
from tsxlayers.vocabulary import DEFAULT_VOCABULARY, load_vocabulary

log = logging.getLogger("classify_layers")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="TSX syntax layer classifier")
    parser.add_argument("paths", nargs="+", type=Path, help="Files or directories to classify")
    parser.add_argument(
        "--suffix",
        action="append",
        default=None,
        help="File suffix to include when walking directories (repeatable; default .tsx and .jsx)",
    )
    parser.add_argument("--vocabulary", type=Path, default=None, help="JSON vocabulary override")
    parser.add_argument("--limit", type=int, default=None)
    parser.add_argument("--regions", action="store_true", help="Print regions for a single file")
    parser.add_argument("--sidecar-out", type=Path, default=None)
    parser.add_argument("--report-out", type=Path, default=None)
    parser.add_argument("--overwrite-sidecar", action="store_true")
    parser.add_argument("--json", action="store_true", help="Print the full report")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    missing = [str(path) for path in args.paths if not path.exists()]
    if missing:
        print(f"Error: input path(s) not found: {', '.join(missing)}", file=sys.stderr)
        return 1

    vocabulary = DEFAULT_VOCABULARY
    if args.vocabulary is not None:
        try:
            vocabulary = load_vocabulary(args.vocabulary)
        except (OSError, ValueError) as exc:
            print(f"Error: cannot load vocabulary {args.vocabulary}: {exc}", file=sys.stderr)
            return 1
        log.info("Loaded vocabulary override from %s", args.vocabulary)

    if args.regions:
        if len(args.paths) != 1 or not args.paths[0].is_file():
            print("Error: --regions takes exactly one file", file=sys.stderr)
            return 1
        try:
            text = args.paths[0].read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error: cannot read {args.paths[0]}: {exc}", file=sys.stderr)
            return 1
        result = classify_document_with_diagnostics(text, vocabulary=vocabulary)
        log.info("%s: %d regions", args.paths[0], len(result.regions))
        print(dumps_pretty({"path": str(args.paths[0]), **result_to_dict(result)}))
        return 0

    suffixes = tuple(args.suffix) if args.suffix else DEFAULT_SUFFIXES
    report = run_batch_classification(
        args.paths,
        suffixes=suffixes,
        vocabulary=vocabulary,
        limit=args.limit,
        sidecar_out=args.sidecar_out,
        overwrite_sidecar=args.overwrite_sidecar,
    )
    for row in report["skipped_files"]:
        log.warning("Skipped %s (%s)", row["path"], row["reason"])
    log.info(
        "Classified %d file(s), %d chars, %d regions",
        report["processed_files"], report["total_chars"], report["total_regions"],
    )

    if args.report_out is not None:
        save_json(report, args.report_out)
        report["report_out"] = str(args.report_out)

    if args.json:
        print(dumps_pretty(report))
    else:
        print(
            dumps_pretty(
                {
                    "processed_files": report["processed_files"],
                    "skipped_files": len(report["skipped_files"]),
                    "layer_coverage": report["layer_coverage"],
                    "covered_ratio": report["covered_ratio"],
                    "sidecar_path": report.get("sidecar_path"),
                    "report_out": report.get("report_out"),
                },
            ),
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
