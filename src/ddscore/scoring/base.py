"""Shared building blocks for category scorers."""

from __future__ import annotations

import logging
from typing import Protocol, TypeVar, runtime_checkable

from ddscore.errors import InvalidEnumerationError
from ddscore.models import Category, CategoryResult, Component, RuleEnum, ScoringInput

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=RuleEnum)


@runtime_checkable
class CategoryScorer(Protocol):
    category: Category

    def components(self, data: ScoringInput) -> list[Component]:
        """Score every component of the category. Must not mutate data."""
        ...


def choice(
    name: str,
    label: str,
    raw: object,
    enum_cls: type[E],
    points: dict[E, float],
) -> Component:
    """Award points for an enumerated value; unrecognized values score 0."""
    max_value = max(points.values())
    try:
        member = enum_cls.parse(raw, field=name)
    except InvalidEnumerationError as exc:
        logger.warning("%s: scoring %s at 0", exc, name)
        return Component(
            name=name,
            awarded_value=0,
            max_value=max_value,
            rationale=f"{label}: unrecognized value {raw!r}",
        )
    return Component(
        name=name,
        awarded_value=points[member],
        max_value=max_value,
        rationale=f"{label} is '{member.value}'",
    )


def flag(name: str, raw: bool | None, max_value: float, yes: str, no: str) -> Component:
    """Full points for an explicit True, nothing otherwise."""
    if raw is True:
        return Component(name=name, awarded_value=max_value, max_value=max_value, rationale=yes)
    return Component(name=name, awarded_value=0, max_value=max_value, rationale=no)


def build_result(category: Category, weight: float, components: list[Component]) -> CategoryResult:
    raw = sum(c.awarded_value for c in components)
    max_raw = sum(c.max_value for c in components)
    percentage = min(max(raw / max_raw * 100.0, 0.0), 100.0)
    return CategoryResult(
        category=category,
        weight=weight,
        raw_score=raw,
        max_raw_score=max_raw,
        percentage=percentage,
        contribution=percentage * weight,
        components=components,
    )
