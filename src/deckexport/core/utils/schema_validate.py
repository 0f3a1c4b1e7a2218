from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft202012Validator

SCHEMA_DIR = Path(__file__).resolve().parents[1] / "schemas"
DECK_SCHEMA = SCHEMA_DIR / "deck.schema.json"


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def format_error_path(parts: Any) -> str:
    path = "$"
    for p in parts:
        path += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return path


def validate_instance(schema: Any, instance: Any) -> list[str]:
    """Validate an already-loaded instance. Empty list means valid."""
    v = Draft202012Validator(schema)
    errors = sorted(v.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    return [f"- {format_error_path(e.path)}: {e.message}" for e in errors]

