"""Data models for sequence diff records and comparison results."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Literal

from seqdiffpack.core.canonical import format_value

DiffKind = Literal["missing", "unexpected", "moved", "different"]

DIFF_KINDS: tuple[DiffKind, ...] = ("missing", "unexpected", "moved", "different")

ValueFormatter = Callable[[Any], str]


@dataclass(frozen=True, slots=True)
class DiffDetail:
    """A single classified difference between two sequences.

    ``expected`` and ``expected_locator`` describe the left side, ``actual``
    and ``actual_locator`` the right side. Sides that do not apply to the
    diff kind are ``None``.
    """

    kind: DiffKind
    category: str
    expected: Any = None
    actual: Any = None
    expected_locator: str | None = None
    actual_locator: str | None = None
    formatter: ValueFormatter = field(default=format_value, compare=False, repr=False)

    def __str__(self) -> str:
        fmt = self.formatter
        if self.kind == "missing":
            return f"Missing {self.category} {fmt(self.expected)} at {self.expected_locator}"
        if self.kind == "unexpected":
            return f"Unexpected {self.category} {fmt(self.actual)} at {self.actual_locator}"
        if self.kind == "moved":
            return (
                f"Moved {self.category} {fmt(self.expected)} "
                f"from {self.expected_locator} to {self.actual_locator}"
            )
        return (
            f"Different {self.category} at {self.expected_locator}: "
            f"expected {fmt(self.expected)} but found {fmt(self.actual)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "category": self.category,
            "expected": self.formatter(self.expected) if self.expected_locator else None,
            "actual": self.formatter(self.actual) if self.actual_locator else None,
            "expected_locator": self.expected_locator,
            "actual_locator": self.actual_locator,
            "message": str(self),
        }


@dataclass(frozen=True, slots=True)
class ArrayComparisonResult:
    """Ordered diffs of two sequences, in discovery order."""

    diffs: tuple[DiffDetail, ...] = ()
    base_path: str = ""
    total_left: int = 0
    total_right: int = 0

    @property
    def identical(self) -> bool:
        return not self.diffs

    def __iter__(self) -> Iterator[DiffDetail]:
        return iter(self.diffs)

    def __len__(self) -> int:
        return len(self.diffs)

    def of_kind(self, kind: DiffKind) -> list[DiffDetail]:
        return [diff for diff in self.diffs if diff.kind == kind]

    def summary(self) -> dict[str, int]:
        counts = {kind: 0 for kind in DIFF_KINDS}
        for diff in self.diffs:
            counts[diff.kind] += 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_path": self.base_path,
            "total_left": self.total_left,
            "total_right": self.total_right,
            "identical": self.identical,
            "summary": self.summary(),
            "diffs": [diff.to_dict() for diff in self.diffs],
        }
