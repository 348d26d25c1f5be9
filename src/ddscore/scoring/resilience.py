"""Resilience category: redundancy, backups, recovery and service levels."""

from __future__ import annotations

import logging
import re

from ddscore.gate import resolve
from ddscore.models import (
    Category,
    Component,
    DisasterRecoveryPlan,
    Redundancy,
    RestorationTestFrequency,
    ScoringInput,
)
from ddscore.scoring.base import choice, flag

logger = logging.getLogger(__name__)

REDUNDANCY_POINTS = {
    Redundancy.NONE: 0,
    Redundancy.MINIMAL: 2,
    Redundancy.GEO_REDUNDANT: 5,
    Redundancy.HIGH: 5,
}

RESTORATION_POINTS = {
    RestorationTestFrequency.NEVER: 0,
    RestorationTestFrequency.ANNUAL: 2,
    RestorationTestFrequency.QUARTERLY: 3,
}

DRP_POINTS = {
    DisasterRecoveryPlan.NONE: 0,
    DisasterRecoveryPlan.DOCUMENTED: 2,
    DisasterRecoveryPlan.TESTED: 3,
}

MAX_RTO_HOURS = 24.0
MAX_RPO_HOURS = 4.0

# (minimum availability %, points), best first
SLA_TIERS = [(99.9, 3), (99.5, 2), (99.0, 1)]
SLA_MAX = 3

_SLA_RE = re.compile(r"(?<![\d.,])(\d{1,3}(?:[.,]\d+)?)(?!\d)")


def parse_sla(raw: object) -> float | None:
    """Extract the availability percentage from values like '99.9%' or '99,5 %'."""
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
    elif isinstance(raw, str) and (match := _SLA_RE.search(raw)):
        value = float(match.group(1).replace(",", "."))
    else:
        return None
    return value if 0.0 <= value <= 100.0 else None


def _against(label: str, hours: float | None, limit: float) -> tuple[bool, str]:
    if hours is None:
        return False, f"{label} unknown"
    if hours <= limit:
        return True, f"{label} {hours:g}h <= {limit:g}h"
    return False, f"{label} {hours:g}h > {limit:g}h"


def _objectives(data: ScoringInput) -> Component:
    backup = resolve(data.environment, "backup")
    if resolve(backup, "exists") is not True:
        return Component(
            name="recovery_objectives", awarded_value=0, max_value=4,
            rationale="no backup, RTO/RPO cannot be met",
        )
    rto_ok, rto_text = _against("RTO", backup.rto, MAX_RTO_HOURS)
    rpo_ok, rpo_text = _against("RPO", backup.rpo, MAX_RPO_HOURS)
    awarded = {2: 4, 1: 2, 0: 0}[rto_ok + rpo_ok]
    return Component(
        name="recovery_objectives", awarded_value=awarded, max_value=4,
        rationale=f"{rto_text}, {rpo_text}",
    )


def _restoration(data: ScoringInput) -> Component:
    backup = resolve(data.environment, "backup")
    if resolve(backup, "exists") is not True:
        return Component(
            name="restoration_tests", awarded_value=0, max_value=3,
            rationale="no backup to restore",
        )
    return choice(
        "restoration_tests", "restoration tests",
        backup.restoration_test_frequency, RestorationTestFrequency, RESTORATION_POINTS,
    )


def _sla(data: ScoringInput) -> Component:
    raw = resolve(data.environment, "sla_offered")
    value = parse_sla(raw)
    if value is None:
        logger.warning("sla_offered: unrecognized value %r, scoring sla at 0", raw)
        return Component(
            name="sla", awarded_value=0, max_value=SLA_MAX,
            rationale=f"SLA: unrecognized value {raw!r}",
        )
    for threshold, points in SLA_TIERS:
        if value >= threshold:
            return Component(
                name="sla", awarded_value=points, max_value=SLA_MAX,
                rationale=f"SLA {raw!s} >= {threshold}%",
            )
    return Component(
        name="sla", awarded_value=0, max_value=SLA_MAX,
        rationale=f"SLA {raw!s} below {SLA_TIERS[-1][0]}%",
    )


class ResilienceScorer:
    category = Category.RESILIENCE

    def components(self, data: ScoringInput) -> list[Component]:
        env = data.environment
        return [
            choice(
                "redundancy", "redundancy", resolve(env, "redundancy"),
                Redundancy, REDUNDANCY_POINTS,
            ),
            flag(
                "backup", resolve(env, "backup.exists"), 2,
                yes="backups in place", no="no backup",
            ),
            _objectives(data),
            _restoration(data),
            _sla(data),
            choice(
                "disaster_recovery_plan", "disaster recovery plan",
                resolve(env, "disaster_recovery_plan"), DisasterRecoveryPlan, DRP_POINTS,
            ),
        ]
