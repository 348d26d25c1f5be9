"""Completeness gate: refuse to score when mandatory inputs are absent."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel

from ddscore.models import (
    Blocked,
    Category,
    MissingField,
    Ready,
    Readiness,
    ScoringInput,
)

logger = logging.getLogger(__name__)

# Record group name -> attribute of ScoringInput holding it
GROUPS: dict[str, str] = {
    "Environment": "environment",
    "SecurityProfile": "security_profile",
    "MonitoringObservability": "monitoring",
    "CodeBase": "codebase",
    "DevelopmentMetrics": "development_metrics",
}


def _backup_exists(data: ScoringInput) -> bool:
    env = data.environment
    return bool(env and env.backup and env.backup.exists is True)


# (group, path, condition). A conditional field is only required when its
# condition holds for the input.
Requirement = tuple[str, str, Callable[[ScoringInput], bool] | None]

REQUIRED_FIELDS: dict[Category, list[Requirement]] = {
    Category.SECURITY: [
        ("SecurityProfile", "auth", None),
        ("SecurityProfile", "encryption.in_transit", None),
        ("SecurityProfile", "encryption.at_rest", None),
        ("SecurityProfile", "patching", None),
        ("SecurityProfile", "pentest_freq", None),
        ("SecurityProfile", "vuln_mgmt", None),
        ("SecurityProfile", "centralized_monitoring", None),
        ("SecurityProfile", "access_control", None),
    ],
    Category.RESILIENCE: [
        ("Environment", "redundancy", None),
        ("Environment", "backup.exists", None),
        ("Environment", "backup.rto", _backup_exists),
        ("Environment", "backup.rpo", _backup_exists),
        ("Environment", "backup.restoration_test_frequency", _backup_exists),
        ("Environment", "sla_offered", None),
        ("Environment", "disaster_recovery_plan", None),
    ],
    Category.OBSERVABILITY: [
        ("MonitoringObservability", "perf_monitoring", None),
        ("MonitoringObservability", "log_centralization", None),
        ("MonitoringObservability", "tools", None),
        ("DevelopmentMetrics", "mttr_hours", None),
    ],
    Category.ARCHITECTURE: [
        ("Environment", "deployment_type", None),
        ("Environment", "virtualization", None),
        ("Environment", "db_scaling_mechanism", None),
        ("CodeBase", "documentation_level", None),
        ("CodeBase", "technical_debt_known", None),
        ("DevelopmentMetrics", "devops_automation_level", None),
    ],
    Category.COMPLIANCE: [
        ("Environment", "data_types", None),
        ("SecurityProfile", "auth", None),
        ("SecurityProfile", "encryption.in_transit", None),
        ("SecurityProfile", "encryption.at_rest", None),
    ],
}


def is_present(value: object) -> bool:
    """False and 0 are answers; None, blank strings and collections of blanks are not."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set)):
        return any(is_present(item) for item in value)
    if isinstance(value, dict):
        return len(value) > 0
    return True


def resolve(record: BaseModel | None, path: str) -> object:
    """Follow a dotted attribute path, returning None at the first gap."""
    value: object = record
    for part in path.split("."):
        if value is None:
            return None
        value = getattr(value, part, None)
    return value


def check_readiness(data: ScoringInput) -> Readiness:
    """Check every required field of every category in one pass."""
    needed_by: dict[tuple[str, str], list[Category]] = {}

    for category, requirements in REQUIRED_FIELDS.items():
        for group, path, condition in requirements:
            if condition is not None and not condition(data):
                continue
            record = getattr(data, GROUPS[group])
            if not is_present(resolve(record, path)):
                needed_by.setdefault((group, path), []).append(category)

    if needed_by:
        logger.info(
            "Scoring blocked for %s/%s: %d missing field(s)",
            data.solution_id, data.env_id, len(needed_by),
        )
        return Blocked(
            solution_id=data.solution_id,
            env_id=data.env_id,
            missing=[
                MissingField(group=group, path=path, categories=categories)
                for (group, path), categories in needed_by.items()
            ],
        )
    return Ready(input=data)
