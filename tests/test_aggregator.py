"""Tests for aggregation, risk levels and reports."""

import math

import pytest

from ddscore.aggregator import aggregate, recommendations, risk_level
from ddscore.config import CategoryWeights, ScoringConfig
from ddscore.models import Category, RiskLevel
from ddscore.scoring import score_all

CONFIG = ScoringConfig()


def _aggregate(data, config=CONFIG):
    return aggregate(score_all(data, config.weights), config)


def test_default_weights_sum_to_one():
    weights = CONFIG.weights.as_dict()
    assert math.fsum(weights.values()) == 1.0
    assert weights[Category.SECURITY] == 0.30
    assert weights[Category.COMPLIANCE] == 0.20


@pytest.mark.parametrize(
    ("score", "level"),
    [
        (100.0, RiskLevel.LOW),
        (85.0, RiskLevel.LOW),
        (84.9, RiskLevel.MEDIUM),
        (70.0, RiskLevel.MEDIUM),
        (69.9, RiskLevel.HIGH),
        (50.0, RiskLevel.HIGH),
        (49.9, RiskLevel.CRITICAL),
        (0.0, RiskLevel.CRITICAL),
    ],
)
def test_risk_thresholds(score, level):
    assert risk_level(score) is level


def test_risk_level_is_monotonic():
    ranks = [risk_level(i / 10).rank for i in range(0, 1001)]
    assert ranks == sorted(ranks)


def test_strong_profile_is_low_risk(make_input):
    result = _aggregate(make_input())
    assert result.global_score == 100.0
    assert result.global_score >= 85
    assert result.risk_level is RiskLevel.LOW
    assert result.scores.security >= 75
    assert result.notes == ""


def test_catastrophic_security_is_not_masked(make_input, weak_security):
    result = _aggregate(make_input(security_profile=weak_security))
    # 30% x 26.9 + 20 + 15 + 15 + 20% x 50 (unencrypted personal data, no auth)
    assert result.scores.security == 26.9
    assert result.scores.compliance == 50.0
    assert result.global_score == 68.1
    assert result.risk_level is RiskLevel.HIGH
    assert "Security < 50%" in result.notes
    assert "Compliance" not in result.notes


def test_global_score_is_sum_of_contributions(make_input, weak_security):
    result = _aggregate(make_input(security_profile=weak_security))
    total = math.fsum(c.contribution for c in result.details.categories)
    assert result.global_score == round(total, 1)
    assert result.details.global_score == result.global_score
    assert result.details.risk_level is result.risk_level


def test_details_are_in_canonical_order_whatever_the_input_order(make_input, weak_security):
    results = score_all(make_input(security_profile=weak_security), CONFIG.weights)
    forward = aggregate(results, CONFIG)
    backward = aggregate(list(reversed(results)), CONFIG)
    assert [c.category for c in backward.details.categories] == list(Category)
    assert forward == backward


def test_requires_one_result_per_category(make_input):
    results = score_all(make_input(), CONFIG.weights)
    with pytest.raises(ValueError):
        aggregate(results[:4], CONFIG)
    with pytest.raises(ValueError):
        aggregate(results[:4] + [results[0]], CONFIG)


def test_precision_is_configurable(make_input, weak_security):
    config = ScoringConfig(precision=0)
    result = _aggregate(make_input(security_profile=weak_security), config)
    assert result.global_score == 68.0
    assert result.scores.security == 27.0


def test_custom_weights_change_the_balance(make_input, weak_security):
    config = ScoringConfig(
        weights=CategoryWeights(
            security=0.7, resilience=0.075, observability=0.075, architecture=0.075,
            compliance=0.075,
        )
    )
    result = _aggregate(make_input(security_profile=weak_security), config)
    assert result.risk_level is RiskLevel.CRITICAL
    assert result.details.weights[Category.SECURITY] == 0.7


def test_report_explains_the_weakest_components(make_input, weak_security):
    result = _aggregate(make_input(security_profile=weak_security))
    report = result.report
    assert report.startswith("Global score: 68.1/100, risk level High.")
    assert "Security (weight 30%): 7/26 points = 26.9%, contributing 8.1 of 30.0." in report
    assert "- authentication 0/5: authentication is 'None'" in report
    assert "- encryption_in_transit 0/3: no encryption in transit" in report
    for category in Category:
        assert category.label in report


def test_report_component_count(make_input):
    config = ScoringConfig(report_components=1)
    report = _aggregate(make_input(), config).report
    assert report.count("\n  - ") == len(Category)


def test_recommendations_threshold(make_input, weak_security):
    results = score_all(make_input(security_profile=weak_security), CONFIG.weights)
    assert recommendations(results, 0.0) == ""
    assert "Compliance < 60%" in recommendations(results, 60.0)


def test_scoring_is_idempotent(make_input, weak_security):
    first = _aggregate(make_input(security_profile=weak_security))
    second = _aggregate(make_input(security_profile=weak_security))
    assert first == second


def test_calculation_details_are_immutable(make_input):
    details = _aggregate(make_input()).details
    assert isinstance(details.categories, tuple)
    assert isinstance(details.categories[0].components, tuple)
    with pytest.raises(AttributeError):
        details.categories[0].components.append(details.categories[0].components[0])
