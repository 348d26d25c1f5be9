"""Profile records held in a JSON document or an in-memory mapping."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

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

M = TypeVar("M", bound=BaseModel)

COLLECTIONS = (
    "environments",
    "security_profiles",
    "monitoring",
    "codebases",
    "development_metrics",
    "hostings",
)


def _key(record: dict[str, Any], snake: str, camel: str) -> Any:
    value = record.get(snake, record.get(camel))
    return str(value) if value is not None else None


class DatasetSource:
    """Looks records up by id in a dataset shaped like::

        {"environments": [...], "security_profiles": [...], "monitoring": [...],
         "codebases": [...], "development_metrics": [...], "hostings": [...]}
    """

    name = "dataset"

    def __init__(self, dataset: dict[str, list[dict[str, Any]]]) -> None:
        self.dataset = {name: list(dataset.get(name, [])) for name in COLLECTIONS}

    @classmethod
    def from_file(cls, path: Path | str) -> DatasetSource:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SourceError(f"cannot read dataset {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise SourceError(f"dataset {path} must be a JSON object")
        return cls(data)

    def _find(
        self, collection: str, snake: str, camel: str, value: str | None
    ) -> dict[str, Any] | None:
        if value is None:
            return None
        for record in self.dataset[collection]:
            if _key(record, snake, camel) == value:
                return record
        return None

    async def fetch(self, solution_id: str, env_id: str) -> ScoringInput:
        env_raw = self._find("environments", "env_id", "envId", env_id)
        owner = _key(env_raw, "solution_id", "solutionId") if env_raw else None
        if owner is not None and owner != solution_id:
            # Environment belongs to another solution
            env_raw = None
        environment = _validate(Environment, env_raw)
        hosting_id = environment.hosting_id if environment else None

        return ScoringInput(
            solution_id=solution_id,
            env_id=env_id,
            environment=environment,
            security_profile=_validate(
                SecurityProfile, self._find("security_profiles", "env_id", "envId", env_id)
            ),
            monitoring=_validate(
                MonitoringObservability, self._find("monitoring", "env_id", "envId", env_id)
            ),
            codebase=_validate(
                CodeBase, self._find("codebases", "solution_id", "solutionId", solution_id)
            ),
            development_metrics=_validate(
                DevelopmentMetrics,
                self._find("development_metrics", "solution_id", "solutionId", solution_id),
            ),
            hosting=_validate(
                Hosting, self._find("hostings", "hosting_id", "hostingId", hosting_id)
            ),
        )


def _validate(model: type[M], raw: dict[str, Any] | None) -> M | None:
    if raw is None:
        return None
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise SourceError(f"malformed {model.__name__} record: {exc}") from exc
