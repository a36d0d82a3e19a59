from types import SimpleNamespace

import pytest

from seqdiffpack.compare import ComparisonConfigError, parse_key_expression


def test_parse_single_field() -> None:
    expression = parse_key_expression("id")

    assert expression.paths == (("id",),)
    assert str(expression) == "id"


def test_parse_nested_and_indexed_paths() -> None:
    expression = parse_key_expression(" meta.name, items[0].sku ")

    assert expression.source == "meta.name, items[0].sku"
    assert expression.paths == (("meta", "name"), ("items", 0, "sku"))


def test_evaluate_mapping_and_attribute_elements() -> None:
    expression = parse_key_expression("meta.name, items[1]")

    assert expression.evaluate({"meta": {"name": "a"}, "items": [10, 20]}) == ("a", 20)
    assert expression.evaluate(
        SimpleNamespace(meta=SimpleNamespace(name="b"), items=(1, 2))
    ) == ("b", 2)


def test_evaluate_returns_none_when_any_part_is_absent() -> None:
    expression = parse_key_expression("id, items[2]")

    assert expression.evaluate({"items": [1, 2, 3]}) is None
    assert expression.evaluate({"id": 1, "items": [1]}) is None
    assert expression.evaluate({"id": 1, "items": "abc"}) is None
    assert expression.evaluate(42) is None


def test_evaluate_keeps_explicit_none_values() -> None:
    expression = parse_key_expression("id")

    assert expression.evaluate({"id": None}) == (None,)


@pytest.mark.parametrize(
    "text",
    ["", "   ", "a..b", "1abc", "id,", "a.[0]", "items[x]", "a b"],
)
def test_malformed_expressions_are_rejected(text: str) -> None:
    with pytest.raises(ComparisonConfigError):
        parse_key_expression(text)


def test_non_string_expression_is_rejected() -> None:
    with pytest.raises(ComparisonConfigError, match="must be a string"):
        parse_key_expression(5)  # type: ignore[arg-type]
