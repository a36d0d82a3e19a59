"""Sequence comparison subsystem for SeqDiffKit."""

from seqdiffpack.compare.assertion import DiffAssertionResult, assert_diffs, assert_sequences
from seqdiffpack.compare.comparison_model import (
    ComparisonModel,
    KeyedComparisonModel,
    ScalarComparisonModel,
    prefix_correspondence,
)
from seqdiffpack.compare.config import (
    CONFIG_ENV_VAR,
    ComparisonConfig,
    build_comparison_model,
    comparison_config_from_mapping,
    load_comparison_config,
)
from seqdiffpack.compare.engine import DEFAULT_CATEGORY, compare_arrays
from seqdiffpack.compare.exceptions import (
    ComparisonConfigError,
    ComparisonError,
    ComparisonInputError,
    SequenceFormatError,
)
from seqdiffpack.compare.factory import DiffFactory
from seqdiffpack.compare.formatting import (
    render_assertion_failure,
    render_diff_summary,
    render_diffs,
)
from seqdiffpack.compare.keys import KeyExpression, parse_key_expression
from seqdiffpack.compare.models import DIFF_KINDS, ArrayComparisonResult, DiffDetail, DiffKind

__all__ = [
    "ArrayComparisonResult",
    "CONFIG_ENV_VAR",
    "ComparisonConfig",
    "ComparisonConfigError",
    "ComparisonError",
    "ComparisonInputError",
    "ComparisonModel",
    "DEFAULT_CATEGORY",
    "DIFF_KINDS",
    "DiffAssertionResult",
    "DiffDetail",
    "DiffFactory",
    "DiffKind",
    "KeyExpression",
    "KeyedComparisonModel",
    "ScalarComparisonModel",
    "SequenceFormatError",
    "assert_diffs",
    "assert_sequences",
    "build_comparison_model",
    "compare_arrays",
    "comparison_config_from_mapping",
    "load_comparison_config",
    "parse_key_expression",
    "prefix_correspondence",
    "render_assertion_failure",
    "render_diff_summary",
    "render_diffs",
]
