"""Tests for the completeness gate."""

from ddscore.gate import check_readiness, is_present
from ddscore.models import Blocked, Category, Ready

SECURITY_FIELDS = {
    "SecurityProfile.auth",
    "SecurityProfile.encryption.in_transit",
    "SecurityProfile.encryption.at_rest",
    "SecurityProfile.patching",
    "SecurityProfile.pentest_freq",
    "SecurityProfile.vuln_mgmt",
    "SecurityProfile.centralized_monitoring",
    "SecurityProfile.access_control",
}


def test_is_present():
    assert is_present(False) is True
    assert is_present(0) is True
    assert is_present("none") is True
    assert is_present(None) is False
    assert is_present("") is False
    assert is_present("   ") is False
    assert is_present([]) is False
    assert is_present({}) is False


def test_complete_input_is_ready(make_input):
    data = make_input()
    readiness = check_readiness(data)
    assert isinstance(readiness, Ready)
    assert readiness.status == "ready"
    assert readiness.input == data


def test_absent_security_profile_reports_all_its_fields(make_input):
    readiness = check_readiness(make_input(security_profile=None))
    assert isinstance(readiness, Blocked)
    assert set(readiness.identifiers) == SECURITY_FIELDS
    assert len(readiness.identifiers) == len(SECURITY_FIELDS)


def test_shared_field_reported_once_with_every_category(make_input):
    readiness = check_readiness(make_input(security_profile=None))
    auth = next(m for m in readiness.missing if m.identifier == "SecurityProfile.auth")
    assert auth.categories == (Category.SECURITY, Category.COMPLIANCE)


def test_false_and_zero_are_present(make_input):
    data = make_input(
        security_profile={
            "centralized_monitoring": False,
            "encryption": {"in_transit": False, "at_rest": False},
        },
        development_metrics={"mttr_hours": 0},
    )
    assert isinstance(check_readiness(data), Ready)


def test_empty_values_are_missing(make_input):
    data = make_input(
        security_profile={"access_control": ""},
        environment={"data_types": []},
        monitoring={"tools": []},
    )
    readiness = check_readiness(data)
    assert isinstance(readiness, Blocked)
    assert set(readiness.identifiers) == {
        "SecurityProfile.access_control",
        "Environment.data_types",
        "MonitoringObservability.tools",
    }


def test_collections_of_blanks_are_missing(make_input):
    data = make_input(environment={"data_types": ["", " "]}, monitoring={"tools": [" "]})
    readiness = check_readiness(data)
    assert isinstance(readiness, Blocked)
    assert set(readiness.identifiers) == {
        "Environment.data_types",
        "MonitoringObservability.tools",
    }


def test_collection_with_one_answer_is_present():
    assert is_present(["", "Personal"])
    assert not is_present(["", "  "])


def test_all_gaps_reported_in_one_pass(make_input):
    readiness = check_readiness(
        make_input(environment=None, monitoring=None, codebase=None, development_metrics=None)
    )
    groups = {m.group for m in readiness.missing}
    assert groups == {"Environment", "MonitoringObservability", "CodeBase", "DevelopmentMetrics"}
    assert "Environment.backup.exists" in readiness.identifiers
    # Conditional backup details only apply once a backup is known to exist
    assert "Environment.backup.rto" not in readiness.identifiers


def test_backup_details_required_when_backup_exists(make_input):
    data = make_input(environment={"backup": {"exists": True}})
    readiness = check_readiness(data)
    assert set(readiness.identifiers) == {
        "Environment.backup.rto",
        "Environment.backup.rpo",
        "Environment.backup.restoration_test_frequency",
    }


def test_backup_details_not_required_without_backup(make_input):
    data = make_input(environment={"backup": {"exists": False}})
    assert isinstance(check_readiness(data), Ready)


def test_supplying_missing_fields_unblocks(make_input):
    assert isinstance(check_readiness(make_input(codebase={"documentation_level": None})), Blocked)
    assert isinstance(check_readiness(make_input(codebase={"documentation_level": "Low"})), Ready)


def test_gate_does_not_invent_defaults(make_input):
    data = make_input(environment={"sla_offered": None})
    check_readiness(data)
    assert data.environment.sla_offered is None
