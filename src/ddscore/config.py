"""TOML configuration loader."""

from __future__ import annotations

import math
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from ddscore.models import Category

DEFAULT_CONFIG_PATHS = [
    Path("ddscore.toml"),
    Path.home() / ".config" / "ddscore" / "config.toml",
    Path("/etc/ddscore/config.toml"),
]


class CategoryWeights(BaseModel):
    """Share of each category in the global score. Must sum to 1.0."""

    security: float = Field(default=0.30, ge=0.0, le=1.0)
    resilience: float = Field(default=0.20, ge=0.0, le=1.0)
    observability: float = Field(default=0.15, ge=0.0, le=1.0)
    architecture: float = Field(default=0.15, ge=0.0, le=1.0)
    compliance: float = Field(default=0.20, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_total(self) -> CategoryWeights:
        total = math.fsum(self.as_dict().values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"category weights must sum to 1.0, got {total}")
        return self

    def as_dict(self) -> dict[Category, float]:
        return {category: getattr(self, category.value) for category in Category}

    def of(self, category: Category) -> float:
        return getattr(self, category.value)


class ScoringConfig(BaseModel):
    """Configuration for scoring runs."""

    weights: CategoryWeights = Field(default_factory=CategoryWeights)
    precision: int = Field(default=1, ge=0, le=4, description="Decimals kept on scores")
    report_components: int = Field(
        default=3, ge=1, le=3, description="Weakest components listed per category in reports"
    )
    recommendation_threshold: float = Field(
        default=50.0, ge=0.0, le=100.0,
        description="Categories below this percentage get a recommendation note",
    )

    # Collaborators
    data_file: str | None = Field(default=None, description="JSON dataset of profile records")
    graphql_url: str | None = Field(default=None, description="Data platform GraphQL endpoint")
    graphql_token: str | None = Field(default=None, description="Bearer token for the endpoint")
    http_timeout: float = Field(default=30.0, gt=0.0)
    store_path: str = Field(default="snapshots.jsonl", description="Append-only snapshot log")


def load_config(config_path: Path | None = None) -> ScoringConfig:
    """Load config from TOML file, falling back to defaults."""
    if config_path and config_path.exists():
        return _parse_toml(config_path)

    for path in DEFAULT_CONFIG_PATHS:
        if path.exists():
            return _parse_toml(path)

    return ScoringConfig()


def _parse_toml(path: Path) -> ScoringConfig:
    data = tomllib.loads(path.read_text())
    scoring_data = data.get("scoring", {})
    return ScoringConfig(**scoring_data)
