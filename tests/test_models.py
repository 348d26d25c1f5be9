"""Tests for Pydantic models and rule enumerations."""

import pytest
from pydantic import ValidationError

from ddscore.errors import InvalidEnumerationError, MissingDataError
from ddscore.models import (
    AuthType,
    Backup,
    Blocked,
    Category,
    Component,
    DbScaling,
    Environment,
    MissingField,
    MonitoringTool,
    RiskLevel,
    Virtualization,
)


def test_rule_enum_parse_is_case_and_separator_insensitive():
    assert AuthType.parse("sso") is AuthType.SSO
    assert AuthType.parse(" MFA ") is AuthType.MFA
    assert Virtualization.parse("K8S") is Virtualization.K8S
    assert MonitoringTool.parse("elk-stack") is MonitoringTool.ELK_STACK


def test_rule_enum_aliases():
    assert DbScaling.parse("Horizontale") is DbScaling.HORIZONTAL
    assert DbScaling.parse("Verticale") is DbScaling.VERTICAL
    assert DbScaling.parse("Non supportée") is DbScaling.UNSUPPORTED
    assert Virtualization.parse("Kubernetes") is Virtualization.K8S


def test_rule_enum_unrecognized_raises():
    with pytest.raises(InvalidEnumerationError) as exc_info:
        AuthType.parse("Kerberos", field="auth")
    assert exc_info.value.field == "auth"
    assert exc_info.value.value == "Kerberos"
    assert "'Kerberos'" in str(exc_info.value)

    with pytest.raises(InvalidEnumerationError):
        AuthType.parse(None)


def test_monitoring_tool_capabilities():
    assert MonitoringTool.DATADOG.capabilities == {"metrics", "logs", "dashboards"}
    assert MonitoringTool.OTHER.capabilities == frozenset()


def test_record_accepts_camel_case_ids_and_hour_aliases():
    env = Environment.model_validate({"envId": "e1", "solutionId": "s1", "unknown": 1})
    assert env.env_id == "e1"
    assert env.solution_id == "s1"

    backup = Backup.model_validate({"exists": True, "rto_hours": 12, "rpo_hours": 2})
    assert backup.rto == 12.0
    assert backup.rpo == 2.0


def test_risk_level_rank_orders_favorability():
    ranks = [RiskLevel.CRITICAL, RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW]
    assert [r.rank for r in ranks] == [0, 1, 2, 3]


def test_component_ratio_and_bounds():
    c = Component(name="auth", awarded_value=2, max_value=5, rationale="x")
    assert c.ratio == 0.4
    with pytest.raises(ValidationError):
        Component(name="auth", awarded_value=-1, max_value=5, rationale="x")


def test_missing_field_identifier_and_label():
    m = MissingField(
        group="SecurityProfile",
        path="encryption.at_rest",
        categories=[Category.SECURITY, Category.COMPLIANCE],
    )
    assert m.identifier == "SecurityProfile.encryption.at_rest"
    assert "Security, Compliance" in m.label


def test_blocked_raise_for_status():
    blocked = Blocked(
        solution_id="s1",
        env_id="e1",
        missing=[MissingField(group="Environment", path="redundancy")],
    )
    with pytest.raises(MissingDataError) as exc_info:
        blocked.raise_for_status()
    assert exc_info.value.missing == ["Environment.redundancy"]
