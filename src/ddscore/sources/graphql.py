"""Profile records fetched from the data platform's GraphQL API."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from ddscore.errors import SourceError
from ddscore.models import (
    CodeBase,
    DevelopmentMetrics,
    Environment,
    Hosting,
    MonitoringObservability,
    ScoringInput,
    SecurityProfile,
)

SOLUTION_QUERY = """
query ScoringProfiles($solutionId: ID!) {
  getSolution(solutionId: $solutionId) {
    codebase {
      codebaseId solutionId repo_location documentation_level code_review_process
      version_control_tool technical_debt_known third_party_dependencies
    }
    developmentMetrics {
      metricsId solutionId sdlc_process devops_automation_level planned_vs_unplanned_ratio
      lead_time_for_changes_days mttr_hours internal_vs_external_bug_ratio
    }
    environments {
      envId solutionId env_type deployment_type tech_stack data_types redundancy
      backup { exists schedule rto_hours rpo_hours restoration_test_frequency }
      network_security_mechanisms db_scaling_mechanism disaster_recovery_plan sla_offered
      hosting { hostingId provider region tier certifications }
      securityProfile {
        secId envId auth encryption { in_transit at_rest details }
        patching pentest_freq vuln_mgmt access_control centralized_monitoring
      }
      monitoringObservability {
        monId envId perf_monitoring log_centralization tools
      }
    }
  }
}
"""


class GraphQLSource:
    name = "graphql"

    def __init__(
        self,
        url: str,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.token = token
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, solution_id: str, env_id: str) -> ScoringInput:
        solution = await self._query_solution(solution_id)
        if solution is None:
            return ScoringInput(solution_id=solution_id, env_id=env_id)

        env_raw = next(
            (e for e in solution.get("environments") or [] if str(e.get("envId")) == env_id),
            None,
        )
        env_raw = env_raw or {}
        try:
            return ScoringInput(
                solution_id=solution_id,
                env_id=env_id,
                environment=Environment.model_validate(env_raw) if env_raw else None,
                security_profile=_optional(SecurityProfile, env_raw.get("securityProfile")),
                monitoring=_optional(
                    MonitoringObservability, env_raw.get("monitoringObservability")
                ),
                codebase=_optional(CodeBase, solution.get("codebase")),
                development_metrics=_optional(
                    DevelopmentMetrics, solution.get("developmentMetrics")
                ),
                hosting=_optional(Hosting, env_raw.get("hosting")),
            )
        except ValidationError as exc:
            raise SourceError(f"malformed profile data for {solution_id}/{env_id}: {exc}") from exc

    async def _query_solution(self, solution_id: str) -> dict[str, Any] | None:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        payload = {"query": SOLUTION_QUERY, "variables": {"solutionId": solution_id}}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.post(self.url, json=payload, headers=headers)
                resp.raise_for_status()
                body = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise SourceError(f"GraphQL request to {self.url} failed: {exc}") from exc

        if body.get("errors"):
            messages = "; ".join(e.get("message", "?") for e in body["errors"])
            raise SourceError(f"GraphQL errors for solution {solution_id}: {messages}")
        return (body.get("data") or {}).get("getSolution")


def _optional(model: type, raw: dict[str, Any] | None) -> Any:
    return model.model_validate(raw) if raw else None
