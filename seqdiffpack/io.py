"""Read comparison input sequences from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from seqdiffpack.compare.config import InputFormat, normalize_input_format
from seqdiffpack.compare.exceptions import SequenceFormatError

_log = logging.getLogger(__name__)

_log_debug = _log.debug


def read_sequence(path: str | Path, *, input_format: InputFormat | str = "json") -> list[Any]:
    """Read a sequence from ``path``.

    ``json`` files must hold a top-level array. ``lines`` files yield one
    element per text line, without line terminators.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        SequenceFormatError: If the file content is not a sequence.
    """
    sequence_path = Path(path)
    fmt = normalize_input_format(input_format)
    text = sequence_path.read_text(encoding="utf-8")

    if fmt == "lines":
        sequence: list[Any] = text.splitlines()
    else:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as error:
            raise SequenceFormatError(
                f"Invalid JSON sequence ({sequence_path}): {error}"
            ) from error
        if not isinstance(raw, list):
            raise SequenceFormatError(
                f"JSON sequence must be a top-level array ({sequence_path}), "
                f"got {type(raw).__name__}."
            )
        sequence = raw

    _log_debug("Read %d elements from %s (%s)", len(sequence), sequence_path, fmt)
    return sequence
