"""Security category: authentication, encryption, patching, testing and access."""

from __future__ import annotations

from ddscore.gate import resolve
from ddscore.models import (
    AccessControl,
    AuthType,
    Category,
    Component,
    PatchingLevel,
    PentestFrequency,
    ScoringInput,
    VulnManagement,
)
from ddscore.scoring.base import choice, flag

AUTH_POINTS = {
    AuthType.NONE: 0,
    AuthType.PASSWORDS: 2,
    AuthType.MFA: 4,
    AuthType.SSO: 5,
}

PATCHING_POINTS = {
    PatchingLevel.AD_HOC: 0,
    PatchingLevel.SCHEDULED: 2,
    PatchingLevel.AUTOMATED: 4,
}

PENTEST_POINTS = {
    PentestFrequency.NEVER: 0,
    PentestFrequency.ANNUAL: 2,
    PentestFrequency.QUARTERLY: 4,
}

VULN_MGMT_POINTS = {
    VulnManagement.NONE: 0,
    VulnManagement.MANUAL: 1,
    VulnManagement.AUTOMATED: 2,
}

ACCESS_CONTROL_POINTS = {
    AccessControl.NONE: 0,
    AccessControl.BASIC: 1,
    AccessControl.RBAC: 2,
    AccessControl.PAM: 3,
}


class SecurityScorer:
    category = Category.SECURITY

    def components(self, data: ScoringInput) -> list[Component]:
        sp = data.security_profile
        return [
            choice("authentication", "authentication", resolve(sp, "auth"), AuthType, AUTH_POINTS),
            flag(
                "encryption_in_transit", resolve(sp, "encryption.in_transit"), 3,
                yes="data encrypted in transit", no="no encryption in transit",
            ),
            flag(
                "encryption_at_rest", resolve(sp, "encryption.at_rest"), 3,
                yes="data encrypted at rest", no="no encryption at rest",
            ),
            choice(
                "patching", "patching", resolve(sp, "patching"), PatchingLevel, PATCHING_POINTS
            ),
            choice(
                "pentest_frequency", "penetration testing",
                resolve(sp, "pentest_freq"), PentestFrequency, PENTEST_POINTS,
            ),
            choice(
                "vulnerability_management", "vulnerability management",
                resolve(sp, "vuln_mgmt"), VulnManagement, VULN_MGMT_POINTS,
            ),
            flag(
                "centralized_monitoring", resolve(sp, "centralized_monitoring"), 2,
                yes="security events centrally monitored",
                no="no centralized security monitoring",
            ),
            choice(
                "access_control", "access control",
                resolve(sp, "access_control"), AccessControl, ACCESS_CONTROL_POINTS,
            ),
        ]
