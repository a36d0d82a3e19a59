"""Key expressions used to pair structured elements."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import re
from typing import Any, Union

from seqdiffpack.compare.exceptions import ComparisonConfigError

KeySegment = Union[str, int]

_PATH_RE = re.compile(r"(?:[A-Za-z_][\w-]*|\[\d+\])(?:\.[A-Za-z_][\w-]*|\[\d+\])*")
_TOKEN_RE = re.compile(r"(?P<name>[A-Za-z_][\w-]*)|\[(?P<index>\d+)\]")

_MISSING = object()


@dataclass(frozen=True, slots=True)
class KeyExpression:
    """Parsed key expression: one or more field paths forming a composite key."""

    source: str
    paths: tuple[tuple[KeySegment, ...], ...]

    def evaluate(self, element: Any) -> tuple[Any, ...] | None:
        """Return the key of ``element``, or ``None`` when any part is absent."""
        values: list[Any] = []
        for path in self.paths:
            value = element
            for segment in path:
                value = _lookup(value, segment)
                if value is _MISSING:
                    return None
            values.append(value)
        return tuple(values)

    def __str__(self) -> str:
        return self.source


def parse_key_expression(text: str) -> KeyExpression:
    """Parse ``text`` such as ``id``, ``meta.name``, ``items[0].sku`` or ``id, version``.

    Raises:
        ComparisonConfigError: If the expression is not a string or is malformed.
    """
    if not isinstance(text, str):
        raise ComparisonConfigError(
            f"Key expression must be a string, got {type(text).__name__}."
        )

    source = text.strip()
    if not source:
        raise ComparisonConfigError("Key expression must be non-empty.")

    paths: list[tuple[KeySegment, ...]] = []
    for raw_path in source.split(","):
        path_text = raw_path.strip()
        if not _PATH_RE.fullmatch(path_text):
            raise ComparisonConfigError(
                f"Invalid key expression '{source}': cannot parse field path '{path_text}'."
            )
        segments: list[KeySegment] = []
        for match in _TOKEN_RE.finditer(path_text):
            if match.group("name") is not None:
                segments.append(match.group("name"))
            else:
                segments.append(int(match.group("index")))
        paths.append(tuple(segments))

    return KeyExpression(source=source, paths=tuple(paths))


def _lookup(value: Any, segment: KeySegment) -> Any:
    if isinstance(segment, int):
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if segment < len(value):
                return value[segment]
        return _MISSING

    if isinstance(value, Mapping):
        if segment in value:
            return value[segment]
        return _MISSING

    return getattr(value, segment, _MISSING)
