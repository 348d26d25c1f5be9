"""Compliance category: data protection, certifications, data residency, IP."""

from __future__ import annotations

import logging
import re

from ddscore.errors import InvalidEnumerationError
from ddscore.gate import resolve
from ddscore.models import AuthType, Category, Component, DataType, ScoringInput

logger = logging.getLogger(__name__)

# Normalized certification name -> points
CERTIFICATION_POINTS = {
    "iso27001": 3,
    "hds": 3,
    "soc2": 2,
    "nf525": 1,
}
CERTIFICATIONS_MAX = 6

ACCESS_POINTS = {
    AuthType.NONE: 0,
    AuthType.PASSWORDS: 2,
    AuthType.MFA: 4,
    AuthType.SSO: 4,
}

EEA_WORDS = frozenset({
    "europe", "austria", "belgium", "bulgaria", "croatia", "cyprus", "czech", "denmark",
    "estonia", "finland", "france", "germany", "greece", "hungary", "ireland", "italy",
    "latvia", "lithuania", "luxembourg", "malta", "netherlands", "poland", "portugal",
    "romania", "slovakia", "slovenia", "spain", "sweden", "iceland", "liechtenstein",
    "norway", "czechia", "eu", "eea",
})


def _normalize_cert(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.casefold())


def in_eea(region: str) -> bool:
    """Whole-word match of EU/EEA markers and member state names."""
    words = re.findall(r"[a-z]+", region.casefold())
    if "northern ireland" in " ".join(words):
        return False
    return any(word in EEA_WORDS for word in words)


def _data_types(data: ScoringInput) -> tuple[list[DataType], list[str]]:
    parsed: list[DataType] = []
    unrecognized: list[str] = []
    for raw in resolve(data.environment, "data_types") or []:
        try:
            parsed.append(DataType.parse(raw, field="data_types"))
        except InvalidEnumerationError as exc:
            logger.warning("%s: treating data exposure as unprotected", exc)
            unrecognized.append(repr(raw))
    return parsed, unrecognized


class ComplianceScorer:
    category = Category.COMPLIANCE

    def components(self, data: ScoringInput) -> list[Component]:
        types, unrecognized = _data_types(data)
        sensitive = [t.value for t in types if t.is_sensitive]
        return [
            self._encryption(data, sensitive, unrecognized),
            self._access(data, sensitive, unrecognized),
            self._certifications(data),
            self._region(data, sensitive),
            self._inventory(data),
        ]

    def _encryption(
        self, data: ScoringInput, sensitive: list[str], unrecognized: list[str]
    ) -> Component:
        name, max_value = "sensitive_data_encryption", 6
        if unrecognized:
            return Component(
                name=name, awarded_value=0, max_value=max_value,
                rationale=f"data types: unrecognized value {', '.join(unrecognized)}",
            )
        if not sensitive:
            return Component(
                name=name, awarded_value=max_value, max_value=max_value,
                rationale="no sensitive data types processed",
            )
        in_transit = resolve(data.security_profile, "encryption.in_transit") is True
        at_rest = resolve(data.security_profile, "encryption.at_rest") is True
        kinds = "/".join(sensitive)
        if in_transit and at_rest:
            return Component(
                name=name, awarded_value=max_value, max_value=max_value,
                rationale=f"{kinds} data encrypted in transit and at rest",
            )
        if in_transit or at_rest:
            gap = "at rest" if in_transit else "in transit"
            return Component(
                name=name, awarded_value=3, max_value=max_value,
                rationale=f"{kinds} data not encrypted {gap}",
            )
        return Component(
            name=name, awarded_value=0, max_value=max_value,
            rationale=f"{kinds} data stored and transferred without encryption",
        )

    def _access(
        self, data: ScoringInput, sensitive: list[str], unrecognized: list[str]
    ) -> Component:
        name, max_value = "sensitive_data_access", max(ACCESS_POINTS.values())
        if unrecognized:
            return Component(
                name=name, awarded_value=0, max_value=max_value,
                rationale=f"data types: unrecognized value {', '.join(unrecognized)}",
            )
        if not sensitive:
            return Component(
                name=name, awarded_value=max_value, max_value=max_value,
                rationale="no sensitive data types processed",
            )
        raw = resolve(data.security_profile, "auth")
        try:
            auth = AuthType.parse(raw, field="auth")
        except InvalidEnumerationError as exc:
            logger.warning("%s: scoring %s at 0", exc, name)
            return Component(
                name=name, awarded_value=0, max_value=max_value,
                rationale=f"authentication: unrecognized value {raw!r}",
            )
        return Component(
            name=name, awarded_value=ACCESS_POINTS[auth], max_value=max_value,
            rationale=f"{'/'.join(sensitive)} data behind '{auth.value}' authentication",
        )

    def _certifications(self, data: ScoringInput) -> Component:
        name = "hosting_certifications"
        if data.hosting is None:
            return Component(
                name=name, awarded_value=0, max_value=CERTIFICATIONS_MAX,
                rationale="no hosting record linked to the environment",
            )
        held = data.hosting.certifications or []
        counted = [c for c in held if _normalize_cert(c) in CERTIFICATION_POINTS]
        if not counted:
            listed = f" (listed: {', '.join(held)})" if held else ""
            return Component(
                name=name, awarded_value=0, max_value=CERTIFICATIONS_MAX,
                rationale=f"no recognized hosting certification{listed}",
            )
        points = sum(CERTIFICATION_POINTS[key] for key in {_normalize_cert(c) for c in counted})
        return Component(
            name=name, awarded_value=min(points, CERTIFICATIONS_MAX),
            max_value=CERTIFICATIONS_MAX,
            rationale=f"hosting certified {', '.join(counted)}",
        )

    def _region(self, data: ScoringInput, sensitive: list[str]) -> Component:
        name, max_value = "hosting_region", 2
        if not sensitive:
            return Component(
                name=name, awarded_value=max_value, max_value=max_value,
                rationale="no personal data processed, residency unconstrained",
            )
        region = resolve(data.hosting, "region")
        if not isinstance(region, str) or not region.strip():
            return Component(
                name=name, awarded_value=0, max_value=max_value,
                rationale="hosting region not recorded",
            )
        if in_eea(region):
            return Component(
                name=name, awarded_value=max_value, max_value=max_value,
                rationale=f"personal data hosted in '{region}' (EEA)",
            )
        return Component(
            name=name, awarded_value=0, max_value=max_value,
            rationale=f"personal data hosted in '{region}', outside the EEA",
        )

    def _inventory(self, data: ScoringInput) -> Component:
        deps = resolve(data.codebase, "third_party_dependencies") or []
        if deps:
            return Component(
                name="dependency_inventory", awarded_value=2, max_value=2,
                rationale=f"{len(deps)} third-party dependencies inventoried",
            )
        return Component(
            name="dependency_inventory", awarded_value=0, max_value=2,
            rationale="no third-party dependency inventory",
        )
