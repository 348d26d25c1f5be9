"""Observability category: monitoring coverage, tooling and incident recovery."""

from __future__ import annotations

import logging

from ddscore.errors import InvalidEnumerationError
from ddscore.gate import resolve
from ddscore.models import Category, Component, MonitoringStatus, MonitoringTool, ScoringInput
from ddscore.scoring.base import choice

logger = logging.getLogger(__name__)

STATUS_POINTS = {
    MonitoringStatus.NO: 0,
    MonitoringStatus.PARTIAL: 2,
    MonitoringStatus.YES: 5,
}

CAPABILITIES = ("metrics", "logs", "dashboards")

# Capabilities covered by the tool set -> points
TOOLING_POINTS = {0: 0, 1: 2, 2: 3, 3: 5}

# (maximum MTTR in hours, points), best first
MTTR_TIERS = [(1.0, 3), (24.0, 2), (72.0, 1)]
MTTR_MAX = 3


def _tooling(data: ScoringInput) -> Component:
    raw_tools = resolve(data.monitoring, "tools") or []
    covered: set[str] = set()
    recognized: list[str] = []
    unrecognized: list[str] = []
    for raw in raw_tools:
        try:
            tool = MonitoringTool.parse(raw, field="tools")
        except InvalidEnumerationError as exc:
            logger.warning("%s: ignored for tooling", exc)
            unrecognized.append(repr(raw))
            continue
        recognized.append(tool.value)
        covered |= tool.capabilities

    awarded = TOOLING_POINTS[len(covered)]
    parts = []
    if recognized:
        missing = [c for c in CAPABILITIES if c not in covered]
        parts.append(
            f"{', '.join(recognized)} cover {len(covered)}/{len(CAPABILITIES)} capabilities"
            + (f" (missing {', '.join(missing)})" if missing else "")
        )
    else:
        parts.append("no recognized monitoring tool")
    if unrecognized:
        parts.append(f"unrecognized value {', '.join(unrecognized)}")
    return Component(
        name="tooling", awarded_value=awarded, max_value=max(TOOLING_POINTS.values()),
        rationale="; ".join(parts),
    )


def _incident_recovery(data: ScoringInput) -> Component:
    mttr = resolve(data.development_metrics, "mttr_hours")
    if not isinstance(mttr, (int, float)) or mttr < 0:
        return Component(
            name="incident_recovery", awarded_value=0, max_value=MTTR_MAX,
            rationale=f"MTTR: unrecognized value {mttr!r}",
        )
    for limit, points in MTTR_TIERS:
        if mttr <= limit:
            return Component(
                name="incident_recovery", awarded_value=points, max_value=MTTR_MAX,
                rationale=f"MTTR {mttr:g}h <= {limit:g}h",
            )
    return Component(
        name="incident_recovery", awarded_value=0, max_value=MTTR_MAX,
        rationale=f"MTTR {mttr:g}h > {MTTR_TIERS[-1][0]:g}h",
    )


class ObservabilityScorer:
    category = Category.OBSERVABILITY

    def components(self, data: ScoringInput) -> list[Component]:
        mon = data.monitoring
        return [
            choice(
                "performance_monitoring", "performance monitoring",
                resolve(mon, "perf_monitoring"), MonitoringStatus, STATUS_POINTS,
            ),
            choice(
                "log_centralization", "log centralization",
                resolve(mon, "log_centralization"), MonitoringStatus, STATUS_POINTS,
            ),
            _tooling(data),
            _incident_recovery(data),
        ]
