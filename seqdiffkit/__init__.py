"""Stable public API surface for SeqDiffKit.

This module is the supported import path for library users.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from seqdiffpack.compare import (
    ArrayComparisonResult,
    ComparisonConfig,
    ComparisonConfigError,
    ComparisonError,
    ComparisonInputError,
    ComparisonModel,
    DiffAssertionResult,
    DiffDetail,
    DiffFactory,
    KeyedComparisonModel,
    ScalarComparisonModel,
    assert_sequences as _assert_sequences,
    build_comparison_model,
    compare_arrays,
    load_comparison_config,
)
from seqdiffpack.compare.engine import DEFAULT_CATEGORY
from seqdiffpack.io import read_sequence

__version__ = "0.1.0"


def compare(
    left: Sequence[Any],
    right: Sequence[Any],
    *,
    model: ComparisonModel | None = None,
    base_path: str = "",
    diff_factory: DiffFactory | None = None,
    category: str = DEFAULT_CATEGORY,
) -> ArrayComparisonResult:
    """Compare two sequences and return their classified differences.

    Args:
        left: Expected sequence.
        right: Actual sequence.
        model: Comparison model. Defaults to plain equality with no
            correspondence beyond equality.
        base_path: Prefix for every reported locator.
        diff_factory: Builder for diff records.
        category: Label for compared elements in diff messages.

    Returns:
        Comparison result with diffs in discovery order.

    Raises:
        ComparisonInputError: If either input is ``None`` or not a sequence.
    """
    return compare_arrays(
        left,
        right,
        model if model is not None else ScalarComparisonModel(),
        base_path,
        diff_factory,
        category=category,
    )


def compare_files(
    left: str | Path,
    right: str | Path,
    *,
    config: ComparisonConfig | str | Path | None = None,
) -> ArrayComparisonResult:
    """Compare sequences stored in two files.

    Args:
        left: Expected sequence file.
        right: Actual sequence file.
        config: Comparison config, or a path to a JSON config file.

    Returns:
        Comparison result with diffs in discovery order.
    """
    if config is None:
        resolved = ComparisonConfig()
    elif isinstance(config, ComparisonConfig):
        resolved = config
    else:
        resolved = load_comparison_config(config)

    model = build_comparison_model(resolved)
    return compare_arrays(
        read_sequence(left, input_format=resolved.input_format),
        read_sequence(right, input_format=resolved.input_format),
        model,
        resolved.base_path,
        category=resolved.category,
    )


def assert_sequences(
    left: Sequence[Any],
    right: Sequence[Any],
    *,
    expected: Iterable[DiffDetail] = (),
    model: ComparisonModel | None = None,
    base_path: str = "",
    diff_factory: DiffFactory | None = None,
    category: str = DEFAULT_CATEGORY,
) -> DiffAssertionResult:
    """Compare two sequences and check the diffs against ``expected``.

    Args:
        left: Expected sequence.
        right: Actual sequence.
        expected: Diffs that must be produced, in order. Empty means the
            sequences must be identical.
        model: Comparison model. Defaults to plain equality.
        base_path: Prefix for every reported locator.
        diff_factory: Builder for diff records.
        category: Label for compared elements in diff messages.

    Returns:
        Assertion result with pass/fail and the comparison payload.
    """
    return _assert_sequences(
        left,
        right,
        model if model is not None else ScalarComparisonModel(),
        expected=expected,
        base_path=base_path,
        diff_factory=diff_factory,
        category=category,
    )


__all__ = [
    "__version__",
    "ArrayComparisonResult",
    "ComparisonConfig",
    "ComparisonConfigError",
    "ComparisonError",
    "ComparisonInputError",
    "DiffAssertionResult",
    "DiffDetail",
    "DiffFactory",
    "KeyedComparisonModel",
    "ScalarComparisonModel",
    "compare",
    "compare_files",
    "assert_sequences",
]
