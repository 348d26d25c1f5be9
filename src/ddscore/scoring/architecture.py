"""Architecture category: topology, scaling, code health and delivery."""

from __future__ import annotations

from ddscore.gate import resolve
from ddscore.models import (
    AutomationLevel,
    Category,
    Component,
    DbScaling,
    DeploymentType,
    DocumentationLevel,
    ScoringInput,
    TechnicalDebt,
    Virtualization,
)
from ddscore.scoring.base import choice

DEPLOYMENT_POINTS = {
    DeploymentType.MONOLITH: 1,
    DeploymentType.HYBRID: 3,
    DeploymentType.MICROSERVICES: 4,
}

VIRTUALIZATION_POINTS = {
    Virtualization.PHYSICAL: 0,
    Virtualization.VM: 1,
    Virtualization.CONTAINER: 2,
    Virtualization.K8S: 3,
}

DB_SCALING_POINTS = {
    DbScaling.UNSUPPORTED: 0,
    DbScaling.VERTICAL: 2,
    DbScaling.HORIZONTAL: 4,
}

# TBD and N/A are recognized answers that earn nothing until assessed
DOCUMENTATION_POINTS = {
    DocumentationLevel.NONE: 0,
    DocumentationLevel.LOW: 1,
    DocumentationLevel.MEDIUM: 2,
    DocumentationLevel.HIGH: 3,
    DocumentationLevel.TBD: 0,
    DocumentationLevel.NOT_APPLICABLE: 0,
}

DEBT_POINTS = {
    TechnicalDebt.HIGH: 0,
    TechnicalDebt.MEDIUM: 1,
    TechnicalDebt.LOW: 2,
    TechnicalDebt.NONE: 2,
}

AUTOMATION_POINTS = {
    AutomationLevel.NONE: 0,
    AutomationLevel.MANUAL: 0,
    AutomationLevel.PARTIAL_CI: 1,
    AutomationLevel.FULL_CI_CD: 2,
}


class ArchitectureScorer:
    category = Category.ARCHITECTURE

    def components(self, data: ScoringInput) -> list[Component]:
        env = data.environment
        code = data.codebase
        return [
            choice(
                "deployment_type", "deployment topology",
                resolve(env, "deployment_type"), DeploymentType, DEPLOYMENT_POINTS,
            ),
            choice(
                "virtualization", "virtualization",
                resolve(env, "virtualization"), Virtualization, VIRTUALIZATION_POINTS,
            ),
            choice(
                "db_scaling", "database scaling",
                resolve(env, "db_scaling_mechanism"), DbScaling, DB_SCALING_POINTS,
            ),
            choice(
                "documentation", "documentation level",
                resolve(code, "documentation_level"), DocumentationLevel, DOCUMENTATION_POINTS,
            ),
            choice(
                "technical_debt", "known technical debt",
                resolve(code, "technical_debt_known"), TechnicalDebt, DEBT_POINTS,
            ),
            choice(
                "delivery_automation", "delivery automation",
                resolve(data.development_metrics, "devops_automation_level"),
                AutomationLevel, AUTOMATION_POINTS,
            ),
        ]
