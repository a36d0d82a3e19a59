"""Deterministic canonicalization helpers for SeqDiffKit values."""

from __future__ import annotations

import json
import math
from typing import Any


def canonicalize(value: Any) -> Any:
    """Normalize values to a deterministic JSON-compatible representation.

    Raises:
        ValueError: If the value holds NaN or infinity.
        TypeError: If the value holds an object JSON cannot express.
    """
    if isinstance(value, dict):
        return {
            str(key): canonicalize(value[key])
            for key in sorted(value.keys(), key=lambda raw: str(raw))
        }

    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]

    if isinstance(value, str):
        return value.replace("\r\n", "\n").replace("\r", "\n")

    if isinstance(value, bool) or value is None:
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError("NaN and infinity are not supported in canonical JSON")
        return float(f"{value:.12g}")

    raise TypeError(f"Unsupported value type for canonical JSON: {type(value).__name__}")


def canonical_json(value: Any) -> str:
    """Serialize a value to stable canonical JSON."""
    return json.dumps(
        canonicalize(value),
        ensure_ascii=True,
        separators=(",", ":"),
        sort_keys=True,
    )


def format_value(value: Any) -> str:
    """Render a value for diff output.

    JSON-expressible values render as canonical JSON; anything else falls
    back to ``repr``.
    """
    try:
        return canonical_json(value)
    except (TypeError, ValueError):
        return repr(value)
