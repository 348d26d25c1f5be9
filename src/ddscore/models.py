"""Data models for profile records, scoring results and snapshots."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ddscore.errors import InvalidEnumerationError, MissingDataError


def _normalize(value: str) -> str:
    return " ".join(value.replace("_", " ").replace("-", " ").split()).casefold()


class RuleEnum(StrEnum):
    """Closed set of values recognized by a scoring rule table."""

    @property
    def aliases(self) -> tuple[str, ...]:
        return ()

    @classmethod
    def parse(cls, value: object, field: str = "") -> RuleEnum:
        """Map a raw stored value onto a member, case and separator insensitive."""
        if isinstance(value, str):
            key = _normalize(value)
            for member in cls:
                if key == _normalize(member.value) or key in (
                    _normalize(a) for a in member.aliases
                ):
                    return member
        raise InvalidEnumerationError(field or cls.__name__, value)


class Category(StrEnum):
    SECURITY = "security"
    RESILIENCE = "resilience"
    OBSERVABILITY = "observability"
    ARCHITECTURE = "architecture"
    COMPLIANCE = "compliance"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class RiskLevel(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        """Favorability, higher is better."""
        return {
            RiskLevel.CRITICAL: 0,
            RiskLevel.HIGH: 1,
            RiskLevel.MEDIUM: 2,
            RiskLevel.LOW: 3,
        }[self]


class CollectionType(StrEnum):
    SNAPSHOT = "snapshot"
    DD = "DD"


# Rule enumerations


class AuthType(RuleEnum):
    NONE = "None"
    PASSWORDS = "Passwords"
    MFA = "MFA"
    SSO = "SSO"

    @property
    def aliases(self) -> tuple[str, ...]:
        return {
            AuthType.NONE: ("no auth",),
            AuthType.PASSWORDS: ("password",),
            AuthType.MFA: ("2fa",),
            AuthType.SSO: (),
        }[self]


class PatchingLevel(RuleEnum):
    AD_HOC = "ad_hoc"
    SCHEDULED = "scheduled"
    AUTOMATED = "automated"


class PentestFrequency(RuleEnum):
    NEVER = "never"
    ANNUAL = "annual"
    QUARTERLY = "quarterly"

    @property
    def aliases(self) -> tuple[str, ...]:
        return {
            PentestFrequency.NEVER: (),
            PentestFrequency.ANNUAL: ("yearly",),
            PentestFrequency.QUARTERLY: (),
        }[self]


class VulnManagement(RuleEnum):
    NONE = "none"
    MANUAL = "manual"
    AUTOMATED = "automated"


class AccessControl(RuleEnum):
    NONE = "none"
    BASIC = "basic"
    RBAC = "RBAC"
    PAM = "PAM"


class Redundancy(RuleEnum):
    NONE = "none"
    MINIMAL = "minimal"
    GEO_REDUNDANT = "geo-redundant"
    HIGH = "high"


class RestorationTestFrequency(RuleEnum):
    NEVER = "never"
    ANNUAL = "annual"
    QUARTERLY = "quarterly"


class DisasterRecoveryPlan(RuleEnum):
    NONE = "None"
    DOCUMENTED = "Documented"
    TESTED = "Tested"


class MonitoringStatus(RuleEnum):
    NO = "No"
    PARTIAL = "Partial"
    YES = "Yes"


class MonitoringTool(RuleEnum):
    PROMETHEUS = "Prometheus"
    GRAFANA = "Grafana"
    ELK_STACK = "ELK Stack"
    DATADOG = "Datadog"
    SPLUNK = "Splunk"
    NEW_RELIC = "New Relic"
    ZABBIX = "Zabbix"
    GRAYLOG = "Graylog"
    OTHER = "Other"

    @property
    def aliases(self) -> tuple[str, ...]:
        return {MonitoringTool.ELK_STACK: ("ELK", "Elastic")}.get(self, ())

    @property
    def capabilities(self) -> frozenset[str]:
        return {
            MonitoringTool.PROMETHEUS: frozenset({"metrics"}),
            MonitoringTool.GRAFANA: frozenset({"dashboards"}),
            MonitoringTool.ELK_STACK: frozenset({"logs", "dashboards"}),
            MonitoringTool.DATADOG: frozenset({"metrics", "logs", "dashboards"}),
            MonitoringTool.SPLUNK: frozenset({"logs", "dashboards"}),
            MonitoringTool.NEW_RELIC: frozenset({"metrics", "dashboards"}),
            MonitoringTool.ZABBIX: frozenset({"metrics"}),
            MonitoringTool.GRAYLOG: frozenset({"logs"}),
            MonitoringTool.OTHER: frozenset(),
        }[self]


class DeploymentType(RuleEnum):
    MONOLITH = "monolith"
    HYBRID = "hybrid"
    MICROSERVICES = "microservices"


class Virtualization(RuleEnum):
    PHYSICAL = "physical"
    VM = "VM"
    CONTAINER = "container"
    K8S = "k8s"

    @property
    def aliases(self) -> tuple[str, ...]:
        return {
            Virtualization.PHYSICAL: ("bare metal",),
            Virtualization.VM: ("virtual machine",),
            Virtualization.CONTAINER: ("docker",),
            Virtualization.K8S: ("kubernetes",),
        }[self]


class DbScaling(RuleEnum):
    UNSUPPORTED = "Not supported"
    VERTICAL = "Vertical"
    HORIZONTAL = "Horizontal"

    @property
    def aliases(self) -> tuple[str, ...]:
        # Values entered through the French data-collection forms
        return {
            DbScaling.UNSUPPORTED: ("Non supportée", "none"),
            DbScaling.VERTICAL: ("Verticale",),
            DbScaling.HORIZONTAL: ("Horizontale",),
        }[self]


class DocumentationLevel(RuleEnum):
    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    TBD = "TBD"
    NOT_APPLICABLE = "N/A"


class TechnicalDebt(RuleEnum):
    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AutomationLevel(RuleEnum):
    NONE = "None"
    MANUAL = "Manual"
    PARTIAL_CI = "Partial CI"
    FULL_CI_CD = "Full CI/CD"

    @property
    def aliases(self) -> tuple[str, ...]:
        return {AutomationLevel.FULL_CI_CD: ("CI/CD", "Full CICD")}.get(self, ())


class DataType(RuleEnum):
    PERSONAL = "Personal"
    SENSITIVE = "Sensitive"
    HEALTH = "Health"
    FINANCIAL = "Financial"
    SYNTHETIC = "Synthetic"

    @property
    def is_sensitive(self) -> bool:
        return self is not DataType.SYNTHETIC


# Input records


class Record(BaseModel):
    """Base for collected profile records; unknown fields are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Backup(Record):
    exists: bool | None = None
    schedule: str | None = None
    rto: float | None = Field(
        default=None,
        validation_alias=AliasChoices("rto", "rto_hours"),
        description="Recovery Time Objective in hours",
    )
    rpo: float | None = Field(
        default=None,
        validation_alias=AliasChoices("rpo", "rpo_hours"),
        description="Recovery Point Objective in hours",
    )
    restoration_test_frequency: str | None = None


class Environment(Record):
    env_id: str | None = Field(default=None, alias="envId")
    solution_id: str | None = Field(default=None, alias="solutionId")
    hosting_id: str | None = Field(default=None, alias="hostingId")
    env_type: str | None = None
    data_types: list[str] | None = None
    redundancy: str | None = None
    backup: Backup | None = None
    disaster_recovery_plan: str | None = None
    deployment_type: str | None = None
    virtualization: str | None = None
    db_scaling_mechanism: str | None = None
    sla_offered: str | None = None
    tech_stack: list[str] | None = None
    network_security_mechanisms: list[str] | None = None


class Encryption(Record):
    in_transit: bool | None = None
    at_rest: bool | None = None
    details: str | None = None


class SecurityProfile(Record):
    sec_id: str | None = Field(default=None, alias="secId")
    env_id: str | None = Field(default=None, alias="envId")
    auth: str | None = None
    encryption: Encryption | None = None
    patching: str | None = None
    pentest_freq: str | None = None
    vuln_mgmt: str | None = None
    access_control: str | None = None
    centralized_monitoring: bool | None = None


class MonitoringObservability(Record):
    mon_id: str | None = Field(default=None, alias="monId")
    env_id: str | None = Field(default=None, alias="envId")
    perf_monitoring: str | None = None
    log_centralization: str | None = None
    tools: list[str] | None = None
    alerting_strategy: str | None = None


class CodeBase(Record):
    codebase_id: str | None = Field(default=None, alias="codebaseId")
    solution_id: str | None = Field(default=None, alias="solutionId")
    repo_location: str | None = None
    documentation_level: str | None = None
    technical_debt_known: str | None = None
    version_control_tool: str | None = None
    code_review_process: str | None = None
    third_party_dependencies: list[str] | None = None


class DevelopmentMetrics(Record):
    metrics_id: str | None = Field(default=None, alias="metricsId")
    solution_id: str | None = Field(default=None, alias="solutionId")
    sdlc_process: str | None = None
    devops_automation_level: str | None = None
    planned_vs_unplanned_ratio: float | None = None
    lead_time_for_changes_days: float | None = None
    mttr_hours: float | None = None
    internal_vs_external_bug_ratio: float | None = None


class Hosting(Record):
    hosting_id: str | None = Field(default=None, alias="hostingId")
    provider: str | None = None
    region: str | None = None
    tier: str | None = None
    certifications: list[str] | None = None


class ScoringInput(BaseModel):
    """Everything collected for one (solution, environment) pair."""

    model_config = ConfigDict(frozen=True)

    solution_id: str
    env_id: str
    environment: Environment | None = None
    security_profile: SecurityProfile | None = None
    monitoring: MonitoringObservability | None = None
    codebase: CodeBase | None = None
    development_metrics: DevelopmentMetrics | None = None
    hosting: Hosting | None = None


# Results


class Component(BaseModel):
    """One scoring decision inside a category."""

    model_config = ConfigDict(frozen=True)

    name: str
    awarded_value: float = Field(ge=0.0)
    max_value: float = Field(gt=0.0)
    rationale: str

    @property
    def ratio(self) -> float:
        return self.awarded_value / self.max_value


class CategoryResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Category
    weight: float = Field(ge=0.0, le=1.0)
    raw_score: float = Field(ge=0.0)
    max_raw_score: float = Field(gt=0.0)
    percentage: float = Field(ge=0.0, le=100.0)
    contribution: float = Field(ge=0.0, le=100.0)
    components: tuple[Component, ...]

    def weakest(self, count: int) -> list[Component]:
        """Components with the lowest awarded/max ratio, declaration order on ties."""
        return sorted(self.components, key=lambda c: c.ratio)[:count]


class CategoryScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    security: float = Field(ge=0.0, le=100.0)
    resilience: float = Field(ge=0.0, le=100.0)
    observability: float = Field(ge=0.0, le=100.0)
    architecture: float = Field(ge=0.0, le=100.0)
    compliance: float = Field(ge=0.0, le=100.0)


class CalculationDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: tuple[CategoryResult, ...]
    weights: dict[Category, float]
    global_score: float = Field(ge=0.0, le=100.0)
    risk_level: RiskLevel


class ScoringSnapshot(BaseModel):
    """Immutable record of one scoring run."""

    model_config = ConfigDict(frozen=True)

    score_id: str
    solution_id: str
    env_id: str
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    collection_type: CollectionType = CollectionType.SNAPSHOT
    scores: CategoryScores
    global_score: float = Field(ge=0.0, le=100.0)
    risk_level: RiskLevel
    notes: str = ""
    calculation_details: CalculationDetails
    calculation_report: str = ""


class MissingField(BaseModel):
    """A required input that was absent when readiness was checked."""

    model_config = ConfigDict(frozen=True)

    group: str = Field(description="Record the field belongs to, e.g. SecurityProfile")
    path: str = Field(description="Dotted path inside the record")
    categories: tuple[Category, ...] = Field(default_factory=tuple)

    @property
    def identifier(self) -> str:
        return f"{self.group}.{self.path}"

    @property
    def label(self) -> str:
        needed_by = ", ".join(c.label for c in self.categories)
        return f"{self.group} > {self.path.replace('.', ' > ')} (needed by {needed_by})"


class Ready(BaseModel):
    status: Literal["ready"] = "ready"
    input: ScoringInput


class Blocked(BaseModel):
    status: Literal["blocked"] = "blocked"
    solution_id: str
    env_id: str
    missing: list[MissingField]

    @property
    def identifiers(self) -> list[str]:
        return [m.identifier for m in self.missing]

    def raise_for_status(self) -> None:
        raise MissingDataError(self.solution_id, self.env_id, self.identifiers)


Readiness = Ready | Blocked
