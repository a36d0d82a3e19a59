"""Pluggable comparison models for sequence diffs."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
import logging
from typing import Any, Protocol, runtime_checkable

from seqdiffpack.compare.exceptions import ComparisonConfigError
from seqdiffpack.compare.keys import KeyExpression, parse_key_expression

_log = logging.getLogger(__name__)

_log_debug = _log.debug

CorrespondFn = Callable[[Any, Any], bool]

_PATH_BOUNDARIES = (".", "[", "/")


@runtime_checkable
class ComparisonModel(Protocol):
    """Capabilities the array comparator needs from an element type.

    ``equal`` must imply ``correspond``.
    """

    def equal(self, a: Any, b: Any) -> bool: ...

    def correspond(self, a: Any, b: Any) -> bool: ...

    def sub_path(self, sequence: Sequence[Any], index: int) -> str: ...

    def add_key_expression(self, locator: str, key_expression: str) -> None: ...


def index_sub_path(sequence: Sequence[Any], index: int) -> str:
    return f"[{index}]"


def prefix_correspondence(length: int = 1) -> CorrespondFn:
    """Pair strings that share their first ``length`` characters."""
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ComparisonConfigError(
            f"Correspondence prefix length must be a positive integer, got {length!r}."
        )

    def _correspond(a: Any, b: Any) -> bool:
        if not isinstance(a, str) or not isinstance(b, str):
            return False
        if len(a) < length or len(b) < length:
            return False
        return a[:length] == b[:length]

    return _correspond


@dataclass(frozen=True, slots=True)
class ScalarComparisonModel:
    """Equality-based model for scalar elements such as strings and numbers."""

    correspond_by: CorrespondFn | None = None

    def equal(self, a: Any, b: Any) -> bool:
        return a == b

    def correspond(self, a: Any, b: Any) -> bool:
        if self.equal(a, b):
            return True
        if self.correspond_by is None:
            return False
        return bool(self.correspond_by(a, b))

    def sub_path(self, sequence: Sequence[Any], index: int) -> str:
        return index_sub_path(sequence, index)

    def add_key_expression(self, locator: str, key_expression: str) -> None:
        raise ComparisonConfigError(
            "Scalar comparison model does not support key expressions "
            f"(locator={locator!r}, expression={key_expression!r})."
        )


@dataclass(slots=True)
class KeyedComparisonModel:
    """Model for structured elements paired by registered key expressions.

    Expressions are registered per locator prefix and shared by every model
    derived through ``at``. Register them before comparisons start.
    """

    path: str = ""
    _expressions: dict[str, KeyExpression] = field(default_factory=dict, repr=False)

    def add_key_expression(self, locator: str, key_expression: str) -> None:
        if not isinstance(locator, str):
            raise ComparisonConfigError(
                f"Key expression locator must be a string, got {type(locator).__name__}."
            )
        if locator != locator.strip():
            raise ComparisonConfigError(
                f"Key expression locator must not have surrounding whitespace: {locator!r}."
            )
        expression = parse_key_expression(key_expression)
        self._expressions[locator] = expression
        _log_debug("Registered key expression '%s' for locator '%s'", expression, locator)

    def at(self, path: str) -> "KeyedComparisonModel":
        """Return a model bound to ``path`` that shares this model's key expressions."""
        return KeyedComparisonModel(path=path, _expressions=self._expressions)

    def key_expression_for(self, path: str | None = None) -> KeyExpression | None:
        """Return the expression registered for the longest locator prefix of ``path``."""
        target = self.path if path is None else path
        best: str | None = None
        for prefix in self._expressions:
            if not _is_path_prefix(prefix, target):
                continue
            if best is None or len(prefix) > len(best):
                best = prefix
        return self._expressions[best] if best is not None else None

    def key_expressions(self) -> dict[str, str]:
        return {locator: str(expr) for locator, expr in sorted(self._expressions.items())}

    def equal(self, a: Any, b: Any) -> bool:
        return a == b

    def correspond(self, a: Any, b: Any) -> bool:
        if self.equal(a, b):
            return True
        expression = self.key_expression_for()
        if expression is None:
            return False
        left_key = expression.evaluate(a)
        if left_key is None:
            return False
        right_key = expression.evaluate(b)
        return right_key is not None and left_key == right_key

    def sub_path(self, sequence: Sequence[Any], index: int) -> str:
        return index_sub_path(sequence, index)


def _is_path_prefix(prefix: str, path: str) -> bool:
    if not prefix:
        return True
    if not path.startswith(prefix):
        return False
    if len(path) == len(prefix):
        return True
    return path[len(prefix)] in _PATH_BOUNDARIES
