"""Constructors for the four diff kinds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from seqdiffpack.compare.models import DiffDetail, ValueFormatter
from seqdiffpack.core.canonical import format_value


@dataclass(frozen=True, slots=True)
class DiffFactory:
    """Builds ``DiffDetail`` records that render values with ``formatter``."""

    formatter: ValueFormatter = format_value

    def missing(self, value: Any, category: str, locator: str) -> DiffDetail:
        """Value present on the left, absent on the right."""
        return DiffDetail(
            kind="missing",
            category=category,
            expected=value,
            expected_locator=locator,
            formatter=self.formatter,
        )

    def unexpected(self, value: Any, category: str, locator: str) -> DiffDetail:
        """Value present on the right, absent on the left."""
        return DiffDetail(
            kind="unexpected",
            category=category,
            actual=value,
            actual_locator=locator,
            formatter=self.formatter,
        )

    def moved(
        self,
        value: Any,
        category: str,
        from_locator: str,
        to_locator: str,
    ) -> DiffDetail:
        """Value matched on both sides but out of order."""
        return DiffDetail(
            kind="moved",
            category=category,
            expected=value,
            actual=value,
            expected_locator=from_locator,
            actual_locator=to_locator,
            formatter=self.formatter,
        )

    def different(
        self,
        old_value: Any,
        new_value: Any,
        category: str,
        locator: str,
    ) -> DiffDetail:
        """Matched pair whose values are not equal."""
        return DiffDetail(
            kind="different",
            category=category,
            expected=old_value,
            actual=new_value,
            expected_locator=locator,
            actual_locator=locator,
            formatter=self.formatter,
        )


DEFAULT_DIFF_FACTORY = DiffFactory()
