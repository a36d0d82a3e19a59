import inspect
from pathlib import Path

import pytest

import seqdiffkit

EXAMPLES = Path(__file__).resolve().parents[1] / "examples" / "sequences"


def test_public_api_symbol_list_is_explicit_and_stable() -> None:
    assert seqdiffkit.__all__ == [
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


def test_public_api_function_signatures() -> None:
    expected_parameter_order = {
        "compare": ("left", "right", "model", "base_path", "diff_factory", "category"),
        "compare_files": ("left", "right", "config"),
        "assert_sequences": (
            "left",
            "right",
            "expected",
            "model",
            "base_path",
            "diff_factory",
            "category",
        ),
    }

    for name, expected_order in expected_parameter_order.items():
        signature = inspect.signature(getattr(seqdiffkit, name))
        assert tuple(signature.parameters) == expected_order
        for parameter in list(signature.parameters.values())[2:]:
            assert parameter.kind is inspect.Parameter.KEYWORD_ONLY


def test_public_compare_defaults_to_scalar_model() -> None:
    result = seqdiffkit.compare(["A", "B", "C"], ["A", "C", "B"])

    assert [str(diff) for diff in result] == ['Moved list element "B" from [1] to [2]']


def test_public_compare_files_with_config_path() -> None:
    result = seqdiffkit.compare_files(
        EXAMPLES / "orders_left.json",
        EXAMPLES / "orders_right.json",
        config=EXAMPLES / "orders_config.json",
    )

    assert result.base_path == "orders"
    assert result.summary() == {"missing": 0, "unexpected": 0, "moved": 1, "different": 1}
    assert str(result.diffs[0]).startswith("Moved order line ")


def test_public_compare_files_with_config_object() -> None:
    config = seqdiffkit.ComparisonConfig(input_format="lines")

    result = seqdiffkit.compare_files(
        EXAMPLES / "words_left.txt",
        EXAMPLES / "words_right.txt",
        config=config,
    )

    assert [diff.kind for diff in result] == ["moved", "unexpected"]


def test_public_assert_sequences() -> None:
    factory = seqdiffkit.DiffFactory()

    passed = seqdiffkit.assert_sequences(
        ["A", "B"],
        ["A"],
        expected=[factory.missing("B", "list element", "[1]")],
    )
    failed = seqdiffkit.assert_sequences(["A", "B"], ["A"])

    assert passed.passed is True
    assert failed.passed is False
    assert failed.exit_code == 1


def test_public_errors_share_a_base() -> None:
    assert issubclass(seqdiffkit.ComparisonInputError, seqdiffkit.ComparisonError)
    assert issubclass(seqdiffkit.ComparisonConfigError, seqdiffkit.ComparisonError)

    with pytest.raises(seqdiffkit.ComparisonInputError):
        seqdiffkit.compare(None, [])  # type: ignore[arg-type]


def test_public_assert_sequences_uses_category() -> None:
    factory = seqdiffkit.DiffFactory()

    result = seqdiffkit.assert_sequences(
        ["A", "B"],
        ["A"],
        expected=[factory.missing("B", "row", "[1]")],
        category="row",
    )

    assert result.passed is True
    assert str(result.result.diffs[0]) == 'Missing row "B" at [1]'


def test_public_compare_applies_keys_registered_for_base_path() -> None:
    model = seqdiffkit.KeyedComparisonModel()
    model.add_key_expression("orders", "id")

    result = seqdiffkit.compare(
        [{"id": 1, "qty": 1}],
        [{"id": 1, "qty": 2}],
        model=model,
        base_path="orders",
    )

    assert [(diff.kind, diff.expected_locator) for diff in result] == [
        ("different", "orders[0]")
    ]
