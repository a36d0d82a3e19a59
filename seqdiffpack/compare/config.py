"""Comparison configuration loading and model construction."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
import json
import logging
from pathlib import Path
from typing import Any, Literal

from seqdiffpack.compare.comparison_model import (
    ComparisonModel,
    KeyedComparisonModel,
    ScalarComparisonModel,
    prefix_correspondence,
)
from seqdiffpack.compare.engine import DEFAULT_CATEGORY
from seqdiffpack.compare.exceptions import ComparisonConfigError
from seqdiffpack.compare.keys import parse_key_expression

_log = logging.getLogger(__name__)

_log_debug = _log.debug

InputFormat = Literal["json", "lines"]

INPUT_FORMATS: tuple[str, ...] = ("json", "lines")
CONFIG_VERSION = 1
CONFIG_ENV_VAR = "SEQDIFF_CONFIG"


@dataclass(frozen=True, slots=True)
class ComparisonConfig:
    """Settings that select and configure a comparison model."""

    category: str = DEFAULT_CATEGORY
    base_path: str = ""
    key_expressions: tuple[tuple[str, str], ...] = ()
    correspond_prefix_length: int | None = None
    input_format: InputFormat = "json"

    def with_overrides(
        self,
        *,
        category: str | None = None,
        base_path: str | None = None,
        key_expressions: Iterable[tuple[str, str]] = (),
        correspond_prefix_length: int | None = None,
        input_format: str | None = None,
    ) -> "ComparisonConfig":
        """Return a copy with explicitly given values layered on top."""
        merged = dict(self.key_expressions)
        for locator, expression in key_expressions:
            merged[locator] = expression
        return replace(
            self,
            category=category if category is not None else self.category,
            base_path=base_path if base_path is not None else self.base_path,
            key_expressions=tuple(merged.items()),
            correspond_prefix_length=(
                correspond_prefix_length
                if correspond_prefix_length is not None
                else self.correspond_prefix_length
            ),
            input_format=normalize_input_format(input_format or self.input_format),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": CONFIG_VERSION,
            "category": self.category,
            "base_path": self.base_path,
            "key_expressions": dict(self.key_expressions),
            "correspond_prefix_length": self.correspond_prefix_length,
            "input_format": self.input_format,
        }


DEFAULT_COMPARISON_CONFIG = ComparisonConfig()


def normalize_input_format(value: str) -> InputFormat:
    normalized = str(value).strip().lower()
    if normalized == "json":
        return "json"
    if normalized == "lines":
        return "lines"
    raise ComparisonConfigError(
        f"Unsupported input format: {value}. Supported values: json, lines."
    )


def comparison_config_from_mapping(
    config: Mapping[str, Any],
    *,
    base_config: ComparisonConfig = DEFAULT_COMPARISON_CONFIG,
) -> ComparisonConfig:
    """Create a comparison config from a config mapping."""
    supported_keys = {
        "version",
        "category",
        "base_path",
        "key_expressions",
        "correspond_prefix_length",
        "input_format",
    }
    unknown = sorted(set(config.keys()) - supported_keys)
    if unknown:
        raise ComparisonConfigError("Unsupported comparison config keys: " + ", ".join(unknown))

    version = config.get("version", CONFIG_VERSION)
    if version != CONFIG_VERSION:
        raise ComparisonConfigError(
            f"Unsupported comparison config version: {version!r} (expected {CONFIG_VERSION})."
        )

    category = config.get("category", base_config.category)
    if not isinstance(category, str) or not category.strip():
        raise ComparisonConfigError("comparison config key 'category' must be a non-empty string.")

    base_path = config.get("base_path", base_config.base_path)
    if not isinstance(base_path, str):
        raise ComparisonConfigError("comparison config key 'base_path' must be a string.")

    prefix_length = config.get("correspond_prefix_length", base_config.correspond_prefix_length)
    if prefix_length is not None and (
        isinstance(prefix_length, bool) or not isinstance(prefix_length, int) or prefix_length < 1
    ):
        raise ComparisonConfigError(
            "comparison config key 'correspond_prefix_length' must be a positive integer."
        )

    input_format = config.get("input_format", base_config.input_format)
    if not isinstance(input_format, str):
        raise ComparisonConfigError("comparison config key 'input_format' must be a string.")

    return ComparisonConfig(
        category=category,
        base_path=base_path,
        key_expressions=_read_key_expressions(config, base_config=base_config),
        correspond_prefix_length=prefix_length,
        input_format=normalize_input_format(input_format),
    )


def load_comparison_config(
    path: str | Path,
    *,
    base_config: ComparisonConfig = DEFAULT_COMPARISON_CONFIG,
) -> ComparisonConfig:
    """Load comparison config from JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise ComparisonConfigError(
            f"Invalid comparison config JSON ({config_path}): {error}"
        ) from error

    if not isinstance(raw, dict):
        raise ComparisonConfigError(f"Comparison config must be a JSON object ({config_path}).")

    config = comparison_config_from_mapping(raw, base_config=base_config)
    _log_debug("Loaded comparison config from %s: %s", config_path, config)
    return config


def build_comparison_model(config: ComparisonConfig) -> ComparisonModel:
    """Build the comparison model described by ``config``."""
    if config.key_expressions and config.correspond_prefix_length is not None:
        raise ComparisonConfigError(
            "key expressions and correspond_prefix_length cannot be combined."
        )

    if config.key_expressions:
        model = KeyedComparisonModel(path=config.base_path)
        for locator, expression in config.key_expressions:
            model.add_key_expression(locator, expression)
        return model

    if config.correspond_prefix_length is not None:
        return ScalarComparisonModel(
            correspond_by=prefix_correspondence(config.correspond_prefix_length)
        )
    return ScalarComparisonModel()


def parse_key_assignment(raw: str) -> tuple[str, str]:
    """Split ``LOCATOR=EXPR`` into its locator and key expression."""
    locator, sep, expression = raw.partition("=")
    if not sep:
        raise ComparisonConfigError(
            f"Invalid key assignment '{raw}': expected LOCATOR=EXPRESSION."
        )
    parse_key_expression(expression)
    return locator.strip(), expression.strip()


def _read_key_expressions(
    config: Mapping[str, Any],
    *,
    base_config: ComparisonConfig,
) -> tuple[tuple[str, str], ...]:
    raw = config.get("key_expressions")
    if raw is None:
        return base_config.key_expressions
    if isinstance(raw, str):
        raw = {"": raw}
    if not isinstance(raw, dict):
        raise ComparisonConfigError(
            "comparison config key 'key_expressions' must be a string or an object "
            "mapping locators to expressions."
        )

    expressions: list[tuple[str, str]] = []
    for locator, expression in raw.items():
        if not isinstance(expression, str):
            raise ComparisonConfigError(
                f"comparison config key expression for locator '{locator}' must be a string."
            )
        parse_key_expression(expression)
        expressions.append((locator, expression.strip()))
    return tuple(expressions)
