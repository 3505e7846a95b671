"""I/O utilities for JSON and JSONL reports, backed by orjson."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson


def load_json(path: Path) -> Any:
    """Load JSON from a file."""
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON with sorted keys."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts) + b"\n")


def save_jsonl(records: list[dict[str, Any]], path: Path, *, append: bool = False) -> None:
    """Write dicts as JSON Lines, optionally appending to an existing file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        if not append:
            path.write_bytes(b"")
        return
    payload = b"\n".join(orjson.dumps(r) for r in records) + b"\n"
    mode = "ab" if append else "wb"
    with path.open(mode) as f:
        f.write(payload)


def dumps_pretty(obj: Any) -> str:
    """Render JSON for stdout."""
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
