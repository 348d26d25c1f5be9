"""Shared profile fixtures: a well-run, fully documented production environment."""

import copy

import pytest

from ddscore.models import (
    CodeBase,
    DevelopmentMetrics,
    Environment,
    Hosting,
    MonitoringObservability,
    ScoringInput,
    SecurityProfile,
)

RECORDS = {
    "environment": {
        "envId": "env-1",
        "solutionId": "sol-1",
        "hostingId": "host-1",
        "env_type": "production",
        "data_types": ["Personal"],
        "redundancy": "high",
        "backup": {
            "exists": True,
            "schedule": "daily",
            "rto": 2,
            "rpo": 1,
            "restoration_test_frequency": "quarterly",
        },
        "disaster_recovery_plan": "Tested",
        "deployment_type": "microservices",
        "virtualization": "k8s",
        "db_scaling_mechanism": "Horizontal",
        "sla_offered": "99.9%",
    },
    "security_profile": {
        "secId": "sec-1",
        "envId": "env-1",
        "auth": "SSO",
        "encryption": {"in_transit": True, "at_rest": True},
        "patching": "automated",
        "pentest_freq": "quarterly",
        "vuln_mgmt": "automated",
        "access_control": "PAM",
        "centralized_monitoring": True,
    },
    "monitoring": {
        "monId": "mon-1",
        "envId": "env-1",
        "perf_monitoring": "Yes",
        "log_centralization": "Yes",
        "tools": ["Prometheus", "Grafana", "ELK Stack"],
    },
    "codebase": {
        "codebaseId": "cb-1",
        "solutionId": "sol-1",
        "repo_location": "gitlab.example.com/acme/app",
        "documentation_level": "High",
        "technical_debt_known": "Low",
        "version_control_tool": "git",
        "third_party_dependencies": ["django", "celery", "postgresql"],
    },
    "development_metrics": {
        "metricsId": "dm-1",
        "solutionId": "sol-1",
        "sdlc_process": "Scrum",
        "devops_automation_level": "Full CI/CD",
        "planned_vs_unplanned_ratio": 0.85,
        "lead_time_for_changes_days": 2,
        "mttr_hours": 0.5,
        "internal_vs_external_bug_ratio": 0.7,
    },
    "hosting": {
        "hostingId": "host-1",
        "provider": "OVH",
        "region": "France",
        "tier": "cloud",
        "certifications": ["ISO 27001", "HDS"],
    },
}

MODELS = {
    "environment": Environment,
    "security_profile": SecurityProfile,
    "monitoring": MonitoringObservability,
    "codebase": CodeBase,
    "development_metrics": DevelopmentMetrics,
    "hosting": Hosting,
}

# Security collapses; every other record is left as in RECORDS
WEAK_SECURITY = {
    "auth": "None",
    "encryption": {"in_transit": False, "at_rest": False},
    "patching": "ad_hoc",
    "pentest_freq": "never",
}


def raw_records(**overrides):
    """RECORDS with per-record field overrides; a record set to None is dropped."""
    raw = copy.deepcopy(RECORDS)
    for name, fields in overrides.items():
        raw[name] = None if fields is None else {**raw[name], **fields}
    return raw


@pytest.fixture
def make_input():
    def factory(**overrides) -> ScoringInput:
        raw = raw_records(**overrides)
        return ScoringInput(
            solution_id="sol-1",
            env_id="env-1",
            **{
                name: None if raw[name] is None else model.model_validate(raw[name])
                for name, model in MODELS.items()
            },
        )

    return factory


@pytest.fixture
def dataset():
    def factory(**overrides) -> dict:
        raw = raw_records(**overrides)
        collections = {
            "environment": "environments",
            "security_profile": "security_profiles",
            "monitoring": "monitoring",
            "codebase": "codebases",
            "development_metrics": "development_metrics",
            "hosting": "hostings",
        }
        return {
            collection: [raw[name]] if raw[name] is not None else []
            for name, collection in collections.items()
        }

    return factory


@pytest.fixture
def weak_security():
    return dict(WEAK_SECURITY)
