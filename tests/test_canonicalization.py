import pytest

from seqdiffpack.core.canonical import canonical_json, canonicalize, format_value


def test_equivalent_inputs_canonicalize_to_same_json() -> None:
    left = {
        "prompt": "line one\r\nline two",
        "metadata": {
            "labels": ("alpha", "beta"),
            "unknown": {"b": 2, "a": 1},
        },
    }

    right = {
        "metadata": {
            "unknown": {"a": 1, "b": 2},
            "labels": ["alpha", "beta"],
        },
        "prompt": "line one\nline two",
    }

    assert canonical_json(left) == canonical_json(right)


def test_sequence_order_is_preserved() -> None:
    assert canonical_json(["b", "a"]) != canonical_json(["a", "b"])


def test_non_string_keys_are_stringified() -> None:
    assert canonicalize({2: "b", 1: "a"}) == {"1": "a", "2": "b"}


def test_float_precision_is_stable() -> None:
    assert canonical_json(0.1 + 0.2) == "0.3"


def test_non_finite_and_unknown_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        canonicalize(float("inf"))
    with pytest.raises(TypeError):
        canonicalize({1, 2})


def test_format_value_falls_back_to_repr() -> None:
    assert format_value({"b": [1, None], "a": True}) == '{"a":true,"b":[1,null]}'
    assert format_value("é") == '"\\u00e9"'
    assert format_value({1, 2}) == repr({1, 2})
