"""CLI-friendly rendering for comparison results."""

from __future__ import annotations

from seqdiffpack.compare.assertion import DiffAssertionResult
from seqdiffpack.compare.models import ArrayComparisonResult


def render_diff_summary(result: ArrayComparisonResult) -> str:
    summary = result.summary()
    base = f"path={result.base_path} " if result.base_path else ""
    return (
        f"{base}left={result.total_left} right={result.total_right} "
        f"identical={result.identical} missing={summary['missing']} "
        f"unexpected={summary['unexpected']} moved={summary['moved']} "
        f"different={summary['different']}"
    )


def render_diffs(result: ArrayComparisonResult, *, max_diffs: int = 8) -> str:
    if result.identical:
        return "no differences detected"

    limit = max(1, max_diffs)
    lines = [f"differences: {len(result.diffs)}"]
    for diff in result.diffs[:limit]:
        lines.append(f"  {diff}")
    remaining = len(result.diffs) - limit
    if remaining > 0:
        lines.append(f"  ... {remaining} additional difference(s) omitted")
    return "\n".join(lines)


def render_assertion_failure(assertion: DiffAssertionResult, *, max_diffs: int = 8) -> str:
    if assertion.passed:
        return ""

    limit = max(1, max_diffs)
    lines = [f"diff assertion failed at position {assertion.mismatch_index}"]
    if assertion.surplus:
        lines.append("not expected:")
        lines.extend(f"  {diff}" for diff in assertion.surplus[:limit])
    if assertion.absent:
        lines.append("expected but not found:")
        lines.extend(f"  {diff}" for diff in assertion.absent[:limit])
    if not assertion.surplus and not assertion.absent:
        lines.append("diffs match but appear in a different order")
    return "\n".join(lines)
