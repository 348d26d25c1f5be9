"""Category scorer registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ddscore.models import Category, CategoryResult, ScoringInput
from ddscore.scoring.architecture import ArchitectureScorer
from ddscore.scoring.base import build_result
from ddscore.scoring.compliance import ComplianceScorer
from ddscore.scoring.observability import ObservabilityScorer
from ddscore.scoring.resilience import ResilienceScorer
from ddscore.scoring.security import SecurityScorer

if TYPE_CHECKING:
    from ddscore.config import CategoryWeights
    from ddscore.scoring.base import CategoryScorer

SCORER_CLASSES: dict[Category, type] = {
    Category.SECURITY: SecurityScorer,
    Category.RESILIENCE: ResilienceScorer,
    Category.OBSERVABILITY: ObservabilityScorer,
    Category.ARCHITECTURE: ArchitectureScorer,
    Category.COMPLIANCE: ComplianceScorer,
}


def get_scorer(category: Category) -> CategoryScorer:
    cls = SCORER_CLASSES[category]
    return cls()


def score_category(
    category: Category, data: ScoringInput, weights: CategoryWeights
) -> CategoryResult:
    scorer = get_scorer(category)
    return build_result(category, weights.of(category), scorer.components(data))


def score_all(data: ScoringInput, weights: CategoryWeights) -> list[CategoryResult]:
    """Run every category scorer. Each is independent of the others."""
    return [score_category(category, data, weights) for category in SCORER_CLASSES]
