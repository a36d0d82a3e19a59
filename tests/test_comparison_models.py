import pytest

from seqdiffpack.compare import (
    ComparisonConfigError,
    ComparisonModel,
    KeyedComparisonModel,
    ScalarComparisonModel,
    prefix_correspondence,
)


def test_models_satisfy_protocol() -> None:
    assert isinstance(ScalarComparisonModel(), ComparisonModel)
    assert isinstance(KeyedComparisonModel(), ComparisonModel)


def test_scalar_model_uses_equality_for_correspondence() -> None:
    model = ScalarComparisonModel()

    assert model.equal(1, 1) is True
    assert model.equal(1, 2) is False
    assert model.correspond("a", "a") is True
    assert model.correspond("a", "ab") is False
    assert model.sub_path(["x", "y"], 1) == "[1]"


def test_scalar_model_with_prefix_correspondence() -> None:
    model = ScalarComparisonModel(correspond_by=prefix_correspondence(2))

    assert model.correspond("abc", "abd") is True
    assert model.correspond("abc", "axc") is False
    assert model.correspond("a", "a") is True
    assert model.correspond("a", "ab") is False
    assert model.correspond(12, 13) is False


@pytest.mark.parametrize("length", [0, -1, True, "2"])
def test_prefix_correspondence_rejects_invalid_length(length: object) -> None:
    with pytest.raises(ComparisonConfigError, match="positive integer"):
        prefix_correspondence(length)  # type: ignore[arg-type]


def test_scalar_model_rejects_key_expressions() -> None:
    with pytest.raises(ComparisonConfigError, match="does not support key expressions"):
        ScalarComparisonModel().add_key_expression("", "id")


def test_keyed_model_corresponds_on_matching_keys() -> None:
    model = KeyedComparisonModel()
    model.add_key_expression("", "id")

    assert model.correspond({"id": 1, "v": "a"}, {"id": 1, "v": "b"}) is True
    assert model.correspond({"id": 1}, {"id": 2}) is False
    assert model.correspond({"id": 1}, {"name": "x"}) is False
    assert model.correspond({"name": "x"}, {"name": "x"}) is True


def test_keyed_model_without_expression_uses_equality() -> None:
    model = KeyedComparisonModel()

    assert model.correspond({"id": 1}, {"id": 1}) is True
    assert model.correspond({"id": 1, "v": 1}, {"id": 1, "v": 2}) is False


def test_keyed_model_picks_longest_locator_prefix() -> None:
    model = KeyedComparisonModel()
    model.add_key_expression("", "id")
    model.add_key_expression("orders", "sku")
    model.add_key_expression("orders[0].lines", "line_no")

    assert str(model.key_expression_for("orders")) == "sku"
    assert str(model.key_expression_for("orders[3]")) == "sku"
    assert str(model.key_expression_for("orders[0].lines")) == "line_no"
    assert str(model.key_expression_for("ordersx")) == "id"
    assert str(model.key_expression_for("customers")) == "id"


def test_keyed_model_at_shares_registry() -> None:
    root = KeyedComparisonModel()
    nested = root.at("orders")
    root.add_key_expression("orders", "sku")

    assert nested.path == "orders"
    assert nested.correspond({"sku": "a", "qty": 1}, {"sku": "a", "qty": 2}) is True
    assert root.correspond({"sku": "a", "qty": 1}, {"sku": "a", "qty": 2}) is False


def test_keyed_model_lists_expressions_sorted_by_locator() -> None:
    model = KeyedComparisonModel()
    model.add_key_expression("orders", "sku")
    model.add_key_expression("", "id")
    model.add_key_expression("orders", "sku, version")

    assert model.key_expressions() == {"": "id", "orders": "sku, version"}


@pytest.mark.parametrize(
    ("locator", "expression", "message"),
    [
        (" orders", "id", "surrounding whitespace"),
        (None, "id", "locator must be a string"),
        ("orders", "", "must be non-empty"),
        ("orders", "a..b", "cannot parse field path"),
    ],
)
def test_keyed_model_rejects_invalid_registration(
    locator: object,
    expression: str,
    message: str,
) -> None:
    model = KeyedComparisonModel()

    with pytest.raises(ComparisonConfigError, match=message):
        model.add_key_expression(locator, expression)  # type: ignore[arg-type]

    assert model.key_expressions() == {}
