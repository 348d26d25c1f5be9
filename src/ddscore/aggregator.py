"""Combine category results into a global score, risk level and report."""

from __future__ import annotations

import math

from pydantic import BaseModel

from ddscore.config import ScoringConfig
from ddscore.models import (
    CalculationDetails,
    Category,
    CategoryResult,
    CategoryScores,
    RiskLevel,
)

# Inclusive lower bounds, most favorable first
RISK_THRESHOLDS = [
    (85.0, RiskLevel.LOW),
    (70.0, RiskLevel.MEDIUM),
    (50.0, RiskLevel.HIGH),
]

RECOMMENDATIONS = {
    Category.SECURITY: (
        "Schedule regular penetration tests, enforce MFA or SSO and automate patching."
    ),
    Category.RESILIENCE: (
        "Verify off-site backups, test restorations and renegotiate the SLA."
    ),
    Category.OBSERVABILITY: (
        "Centralize logs and improve performance monitoring and alerting."
    ),
    Category.ARCHITECTURE: (
        "Plan for horizontal scalability and reduce known technical debt."
    ),
    Category.COMPLIANCE: (
        "Prioritize key hosting certifications (ISO 27001, HDS) and protect sensitive data."
    ),
}


class Aggregate(BaseModel):
    """Outcome of combining the five category results."""

    scores: CategoryScores
    global_score: float
    risk_level: RiskLevel
    details: CalculationDetails
    report: str
    notes: str


def risk_level(global_score: float) -> RiskLevel:
    for threshold, level in RISK_THRESHOLDS:
        if global_score >= threshold:
            return level
    return RiskLevel.CRITICAL


def aggregate(results: list[CategoryResult], config: ScoringConfig | None = None) -> Aggregate:
    """Weight and combine exactly one result per category, in any order."""
    config = config or ScoringConfig()
    by_category = {r.category: r for r in results}
    if len(results) != len(Category) or set(by_category) != set(Category):
        got = sorted(r.category.value for r in results)
        raise ValueError(f"expected one result per category, got {got}")

    ordered = [by_category[c] for c in Category]
    total = math.fsum(r.contribution for r in ordered)
    global_score = round(min(max(total, 0.0), 100.0), config.precision)
    level = risk_level(global_score)

    scores = CategoryScores(
        **{r.category.value: round(r.percentage, config.precision) for r in ordered}
    )
    details = CalculationDetails(
        categories=ordered,
        weights={r.category: r.weight for r in ordered},
        global_score=global_score,
        risk_level=level,
    )
    return Aggregate(
        scores=scores,
        global_score=global_score,
        risk_level=level,
        details=details,
        report=render_report(details, config),
        notes=recommendations(ordered, config.recommendation_threshold),
    )


def recommendations(results: list[CategoryResult], threshold: float) -> str:
    notes = [
        f"{RECOMMENDATIONS[r.category]} ({r.category.label} < {threshold:g}%)"
        for r in results
        if r.percentage < threshold
    ]
    return " ".join(notes)


def render_report(details: CalculationDetails, config: ScoringConfig) -> str:
    """Plain-text explanation of where each point was earned or lost."""
    p = config.precision
    lines = [
        f"Global score: {details.global_score:.{p}f}/100, risk level {details.risk_level.value}.",
    ]
    for r in details.categories:
        lines.append("")
        lines.append(
            f"{r.category.label} (weight {r.weight:.0%}): {r.raw_score:g}/{r.max_raw_score:g} "
            f"points = {r.percentage:.{p}f}%, contributing {r.contribution:.{p}f} "
            f"of {r.weight * 100:.{p}f}."
        )
        lines.append("  Lowest-scoring components:")
        for c in r.weakest(config.report_components):
            lines.append(f"  - {c.name} {c.awarded_value:g}/{c.max_value:g}: {c.rationale}")
    return "\n".join(lines)
