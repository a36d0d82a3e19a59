"""Core deterministic primitives for SeqDiffKit."""

from seqdiffpack.core.canonical import canonical_json, canonicalize, format_value

__all__ = [
    "canonicalize",
    "canonical_json",
    "format_value",
]
