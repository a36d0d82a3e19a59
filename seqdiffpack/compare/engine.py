"""Array comparison engine with anchor, correspondence and move detection."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Any

from seqdiffpack.compare.comparison_model import ComparisonModel, KeyedComparisonModel
from seqdiffpack.compare.exceptions import ComparisonInputError
from seqdiffpack.compare.factory import DEFAULT_DIFF_FACTORY, DiffFactory
from seqdiffpack.compare.models import ArrayComparisonResult, DiffDetail

_log = logging.getLogger(__name__)

_log_debug = _log.debug

DEFAULT_CATEGORY = "list element"


@dataclass(frozen=True, slots=True)
class _Pair:
    left: int
    right: int
    exact: bool


def compare_arrays(
    left: Sequence[Any],
    right: Sequence[Any],
    model: ComparisonModel,
    base_path: str = "",
    diff_factory: DiffFactory | None = None,
    *,
    category: str = DEFAULT_CATEGORY,
) -> ArrayComparisonResult:
    """Compare two sequences and classify their differences.

    Elements are first anchored on the longest common subsequence under
    ``model.equal``. Leftover elements are paired greedily in left order,
    each with the first free right element that ``model.correspond`` accepts.
    Matched pairs that cross the longest order-preserving chain of matches
    are reported as moved; matched pairs that are not equal are reported as
    different; anything left unmatched is missing (left) or unexpected
    (right).

    A ``KeyedComparisonModel`` is rebound to ``base_path`` so key
    expressions registered for that locator apply.

    Diffs are ordered by left position. An unexpected element is reported
    just before the next chain pair that follows it in ``right``.

    Args:
        left: Expected sequence.
        right: Actual sequence.
        model: Equality, correspondence and locator capabilities.
        base_path: Prefix for every locator, for nesting under a larger path.
        diff_factory: Builder for diff records. Defaults to ``DiffFactory()``.
        category: Label for what is being compared.

    Returns:
        Comparison result with diffs in discovery order.

    Raises:
        ComparisonInputError: If ``left`` or ``right`` is not a sequence.
    """
    _require_sequence(left, "left")
    _require_sequence(right, "right")
    factory = diff_factory if diff_factory is not None else DEFAULT_DIFF_FACTORY
    if base_path and isinstance(model, KeyedComparisonModel):
        model = model.at(base_path)

    _log_debug(
        "Comparing %d left and %d right elements at '%s'",
        len(left),
        len(right),
        base_path,
    )

    equal_matrix = [[bool(model.equal(a, b)) for b in right] for a in left]
    anchors = _anchor_pairs(equal_matrix, len(left), len(right))
    _log_debug("Anchored %d element pairs", len(anchors))

    pairs = _pair_leftovers(left, right, model, equal_matrix, anchors)
    _log_debug("Paired %d leftover elements", len(pairs) - len(anchors))

    chain = _ordering_chain(pairs)

    diffs = _emit_diffs(
        left,
        right,
        model,
        factory,
        pairs=pairs,
        chain=chain,
        base_path=base_path,
        category=category,
    )
    result = ArrayComparisonResult(
        diffs=tuple(diffs),
        base_path=base_path,
        total_left=len(left),
        total_right=len(right),
    )
    _log_debug("Found %d diffs at '%s': %s", len(diffs), base_path, result.summary())
    return result


def _require_sequence(value: Any, side: str) -> None:
    if value is None:
        raise ComparisonInputError(f"{side} sequence must not be None")
    if not isinstance(value, Sequence):
        raise ComparisonInputError(
            f"{side} must be a sequence, got {type(value).__name__}"
        )


def _anchor_pairs(
    equal_matrix: list[list[bool]],
    left_count: int,
    right_count: int,
) -> list[tuple[int, int]]:
    # lengths[i][j] is the LCS length of left[i:] and right[j:].
    lengths = [[0] * (right_count + 1) for _ in range(left_count + 1)]
    for i in range(left_count - 1, -1, -1):
        row = lengths[i]
        below = lengths[i + 1]
        equal_row = equal_matrix[i]
        for j in range(right_count - 1, -1, -1):
            if equal_row[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])

    anchors: list[tuple[int, int]] = []
    i = j = 0
    while i < left_count and j < right_count:
        if equal_matrix[i][j]:
            anchors.append((i, j))
            i += 1
            j += 1
        elif lengths[i + 1][j] >= lengths[i][j + 1]:
            i += 1
        else:
            j += 1
    return anchors


def _pair_leftovers(
    left: Sequence[Any],
    right: Sequence[Any],
    model: ComparisonModel,
    equal_matrix: list[list[bool]],
    anchors: list[tuple[int, int]],
) -> list[_Pair]:
    pairs = [_Pair(i, j, exact=True) for i, j in anchors]
    left_taken = [False] * len(left)
    right_taken = [False] * len(right)
    for i, j in anchors:
        left_taken[i] = True
        right_taken[j] = True

    for i in range(len(left)):
        if left_taken[i]:
            continue
        for j in range(len(right)):
            if not right_taken[j] and model.correspond(left[i], right[j]):
                right_taken[j] = True
                pairs.append(_Pair(i, j, exact=equal_matrix[i][j]))
                break

    pairs.sort(key=lambda pair: pair.left)
    return pairs


def _ordering_chain(pairs: list[_Pair]) -> set[int]:
    """Return indexes into ``pairs`` (sorted by left) of the reference ordering.

    The chain is the longest run of pairs increasing on both sides. Ties go
    to the smallest total displacement, then to the chain ending earlier in
    ``right``.
    """
    if not pairs:
        return set()

    lengths = [1] * len(pairs)
    displacements = [abs(pair.left - pair.right) for pair in pairs]
    previous = [-1] * len(pairs)

    for k, pair in enumerate(pairs):
        own_displacement = abs(pair.left - pair.right)
        for p in range(k):
            if pairs[p].right >= pair.right:
                continue
            length = lengths[p] + 1
            displacement = displacements[p] + own_displacement
            if length > lengths[k] or (length == lengths[k] and displacement < displacements[k]):
                lengths[k] = length
                displacements[k] = displacement
                previous[k] = p

    end = min(
        range(len(pairs)),
        key=lambda k: (-lengths[k], displacements[k], pairs[k].right),
    )
    chain: set[int] = set()
    while end != -1:
        chain.add(end)
        end = previous[end]
    return chain


def _emit_diffs(
    left: Sequence[Any],
    right: Sequence[Any],
    model: ComparisonModel,
    factory: DiffFactory,
    *,
    pairs: list[_Pair],
    chain: set[int],
    base_path: str,
    category: str,
) -> list[DiffDetail]:
    chain_pairs = [pairs[k] for k in sorted(chain)]
    chain_rights = [pair.right for pair in chain_pairs]

    by_left = {pair.left: (pair, k in chain) for k, pair in enumerate(pairs)}
    matched_right = {pair.right for pair in pairs}

    unexpected_before: dict[int, list[int]] = {}
    trailing: list[int] = []
    for j in range(len(right)):
        if j in matched_right:
            continue
        position = bisect_right(chain_rights, j)
        if position < len(chain_pairs):
            unexpected_before.setdefault(chain_pairs[position].left, []).append(j)
        else:
            trailing.append(j)

    def _locate(sequence: Sequence[Any], index: int) -> str:
        return base_path + model.sub_path(sequence, index)

    diffs: list[DiffDetail] = []
    for i in range(len(left)):
        for j in unexpected_before.get(i, ()):
            diffs.append(factory.unexpected(right[j], category, _locate(right, j)))

        entry = by_left.get(i)
        if entry is None:
            diffs.append(factory.missing(left[i], category, _locate(left, i)))
            continue

        pair, in_order = entry
        if not in_order:
            diffs.append(
                factory.moved(
                    left[i],
                    category,
                    _locate(left, i),
                    _locate(right, pair.right),
                )
            )
        if not pair.exact:
            diffs.append(
                factory.different(left[i], right[pair.right], category, _locate(left, i))
            )

    for j in trailing:
        diffs.append(factory.unexpected(right[j], category, _locate(right, j)))

    return diffs
