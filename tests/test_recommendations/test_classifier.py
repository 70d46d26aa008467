"""
Tests for deal_advisor/recommendations/classifier.py.

What we test
------------
classify_deal():
  - Rules applied in order; first match wins.
  - High risk blocks STRONG_GO but not GO.
  - Monotonic: raising the score never downgrades the tier.
classify_scenario():
  - Exclusive IRR thresholds 25 / 15 / 5; non-converged -> RECONSIDER.
classify_partnership():
  - Inclusive thresholds 80 / 65.
"""

from __future__ import annotations

import pytest

from deal_advisor.recommendations.classifier import (
    classify_deal,
    classify_partnership,
    classify_scenario,
)
from deal_advisor.taxonomy.deal_taxonomy import RiskLevel
from deal_advisor.taxonomy.recommendation_taxonomy import (
    PartnershipVerdict,
    RecommendationTier,
    ScenarioVerdict,
)


class TestClassifyDeal:
    @pytest.mark.parametrize(
        "score, risk, flags, expected",
        [
            (80, RiskLevel.LOW, 3, RecommendationTier.STRONG_GO),
            (80, RiskLevel.MEDIUM, 0, RecommendationTier.STRONG_GO),
            (85, RiskLevel.HIGH, 0, RecommendationTier.GO),
            (85, RiskLevel.HIGH, 1, RecommendationTier.CONSIDER),
            (70, RiskLevel.LOW, 0, RecommendationTier.GO),
            (70, RiskLevel.LOW, 1, RecommendationTier.CONSIDER),
            (60, RiskLevel.MEDIUM, 1, RecommendationTier.CONSIDER),
            (60, RiskLevel.MEDIUM, 2, RecommendationTier.PASS),
            (59, RiskLevel.LOW, 0, RecommendationTier.PASS),
            (0, RiskLevel.LOW, 0, RecommendationTier.PASS),
        ],
    )
    def test_rules(self, score, risk, flags, expected):
        assert classify_deal(score, risk, flags) is expected

    @pytest.mark.parametrize("risk", list(RiskLevel))
    @pytest.mark.parametrize("flags", [0, 1, 2, 4])
    def test_monotonic_in_score(self, risk, flags):
        ranks = [classify_deal(score, risk, flags).rank for score in range(0, 101)]
        assert ranks == sorted(ranks)

    def test_negative_flag_count_rejected(self):
        with pytest.raises(ValueError, match="red_flag_count"):
            classify_deal(90, RiskLevel.LOW, -1)


class TestClassifyScenario:
    @pytest.mark.parametrize(
        "irr, expected",
        [
            (115.3, ScenarioVerdict.STRONG_GO),
            (25.01, ScenarioVerdict.STRONG_GO),
            (25.0, ScenarioVerdict.GO_WITH_CONDITIONS),
            (15.0, ScenarioVerdict.PROCEED_CAUTIOUSLY),
            (5.0, ScenarioVerdict.RECONSIDER),
            (-40.0, ScenarioVerdict.RECONSIDER),
        ],
    )
    def test_thresholds(self, irr, expected):
        assert classify_scenario(irr) is expected

    def test_not_converged_always_reconsider(self):
        assert classify_scenario(500.0, converged=False) is ScenarioVerdict.RECONSIDER


class TestClassifyPartnership:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (100, PartnershipVerdict.STRONG_GO),
            (80, PartnershipVerdict.STRONG_GO),
            (79.9, PartnershipVerdict.PROCEED_WITH_CAUTION),
            (65, PartnershipVerdict.PROCEED_WITH_CAUTION),
            (64, PartnershipVerdict.HARD_PASS),
        ],
    )
    def test_thresholds(self, score, expected):
        assert classify_partnership(score) is expected
