"""Tests for recommendation taxonomy enums — ranks, labels, guidance."""

from __future__ import annotations

from deal_advisor.taxonomy.recommendation_taxonomy import (
    PartnershipVerdict,
    RecommendationTier,
    ScenarioVerdict,
)


class TestRecommendationTier:
    def test_declared_strongest_first(self):
        ranks = [m.rank for m in RecommendationTier]
        assert ranks == sorted(ranks, reverse=True)

    def test_all_ranks_unique(self):
        assert len({m.rank for m in RecommendationTier}) == len(RecommendationTier)

    def test_label(self):
        assert RecommendationTier.STRONG_GO.label == "STRONG GO"
        assert RecommendationTier.PASS.label == "PASS"


class TestScenarioVerdict:
    def test_every_verdict_has_guidance(self):
        for verdict in ScenarioVerdict:
            assert verdict.guidance

    def test_rank_order(self):
        assert ScenarioVerdict.STRONG_GO.rank > ScenarioVerdict.GO_WITH_CONDITIONS.rank
        assert ScenarioVerdict.PROCEED_CAUTIOUSLY.rank > ScenarioVerdict.RECONSIDER.rank

    def test_label(self):
        assert ScenarioVerdict.GO_WITH_CONDITIONS.label == "GO WITH CONDITIONS"


class TestPartnershipVerdict:
    def test_three_verdicts(self):
        assert len(PartnershipVerdict) == 3

    def test_rank_order(self):
        assert (
            PartnershipVerdict.STRONG_GO.rank
            > PartnershipVerdict.PROCEED_WITH_CAUTION.rank
            > PartnershipVerdict.HARD_PASS.rank
        )
