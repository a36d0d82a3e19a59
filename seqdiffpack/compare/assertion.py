"""Assertion helpers comparing produced diffs with expected diffs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from seqdiffpack.compare.comparison_model import ComparisonModel
from seqdiffpack.compare.engine import DEFAULT_CATEGORY, compare_arrays
from seqdiffpack.compare.factory import DiffFactory
from seqdiffpack.compare.models import ArrayComparisonResult, DiffDetail


@dataclass(slots=True)
class DiffAssertionResult:
    """Outcome of checking a comparison result against expected diffs."""

    result: ArrayComparisonResult
    expected: tuple[DiffDetail, ...]
    passed: bool
    mismatch_index: int | None = None
    surplus: list[DiffDetail] = field(default_factory=list)
    absent: list[DiffDetail] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": "pass" if self.passed else "fail",
            "exit_code": self.exit_code,
            "mismatch_index": self.mismatch_index,
            "expected_count": len(self.expected),
            "actual_count": len(self.result.diffs),
            "surplus": [diff.to_dict() for diff in self.surplus],
            "absent": [diff.to_dict() for diff in self.absent],
            "comparison": self.result.to_dict(),
        }


def assert_diffs(
    result: ArrayComparisonResult,
    expected: Iterable[DiffDetail] = (),
) -> DiffAssertionResult:
    """Check that ``result`` holds exactly ``expected``, in order.

    ``surplus`` lists produced diffs that were not expected and ``absent``
    lists expected diffs that were not produced; both ignore order. A
    reordering alone fails with a ``mismatch_index`` and empty lists.
    """
    expected_diffs = tuple(expected)
    actual_diffs = result.diffs

    mismatch_index: int | None = None
    for index in range(max(len(actual_diffs), len(expected_diffs))):
        if index >= len(actual_diffs) or index >= len(expected_diffs):
            mismatch_index = index
            break
        if actual_diffs[index] != expected_diffs[index]:
            mismatch_index = index
            break

    remaining = list(expected_diffs)
    surplus: list[DiffDetail] = []
    for diff in actual_diffs:
        if diff in remaining:
            remaining.remove(diff)
        else:
            surplus.append(diff)

    return DiffAssertionResult(
        result=result,
        expected=expected_diffs,
        passed=mismatch_index is None,
        mismatch_index=mismatch_index,
        surplus=surplus,
        absent=remaining,
    )


def assert_sequences(
    left: Sequence[Any],
    right: Sequence[Any],
    model: ComparisonModel,
    *,
    expected: Iterable[DiffDetail] = (),
    base_path: str = "",
    diff_factory: DiffFactory | None = None,
    category: str = DEFAULT_CATEGORY,
) -> DiffAssertionResult:
    """Compare ``left`` with ``right`` and check the diffs against ``expected``."""
    result = compare_arrays(
        left,
        right,
        model,
        base_path,
        diff_factory,
        category=category,
    )
    return assert_diffs(result, expected)
