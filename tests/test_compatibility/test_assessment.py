"""Tests for deal_advisor.compatibility.assessment — weighted partner fit."""

from __future__ import annotations

import pytest

from deal_advisor.compatibility.assessment import assess_partnership, weighted_score
from deal_advisor.models.compatibility import CompatibilityDimension
from deal_advisor.taxonomy.recommendation_taxonomy import PartnershipVerdict


def _dims(*pairs: tuple[float, float]) -> list[CompatibilityDimension]:
    return [
        CompatibilityDimension(name=f"dim{i}", weight=w, score=s)
        for i, (w, s) in enumerate(pairs)
    ]


@pytest.fixture
def seed_dimensions() -> list[CompatibilityDimension]:
    return [
        CompatibilityDimension(name="Strategic Alignment", weight=25, score=85),
        CompatibilityDimension(name="Financial Stability", weight=20, score=90),
        CompatibilityDimension(
            name="Operational Compatibility",
            weight=20,
            score=72,
            red_flags=("Different decision speeds", "Legacy system dependencies"),
        ),
        CompatibilityDimension(
            name="Cultural & Values Fit",
            weight=20,
            score=78,
            red_flags=("Different communication styles",),
        ),
        CompatibilityDimension(name="Legal & Regulatory", weight=15, score=88),
    ]


class TestWeightedScore:
    def test_seed_dimensions(self, seed_dimensions):
        # 21.25 + 18 + 14.4 + 15.6 + 13.2 = 82.45
        assert weighted_score(seed_dimensions) == 82

    def test_rounds_half_up(self):
        assert weighted_score(_dims((50, 65), (50, 66))) == 66

    def test_bad_weights_rejected(self):
        with pytest.raises(ValueError, match="must sum to 100"):
            weighted_score(_dims((50, 80), (40, 80)))


class TestAssessPartnership:
    def test_seed_assessment(self, seed_dimensions):
        result = assess_partnership(
            seed_dimensions,
            synergies=["Combined market reach into 15 new territories"],
            next_steps=["Draft MOU with key terms"],
        )
        assert result.overall_score == 82
        assert result.verdict is PartnershipVerdict.STRONG_GO
        assert result.synergies == ("Combined market reach into 15 new territories",)
        assert result.next_steps == ("Draft MOU with key terms",)

    def test_risks_default_to_red_flags(self, seed_dimensions):
        result = assess_partnership(seed_dimensions)
        assert result.risks == (
            "Different decision speeds",
            "Legacy system dependencies",
            "Different communication styles",
        )

    def test_explicit_risks_win(self, seed_dimensions):
        result = assess_partnership(seed_dimensions, risks=["Currency exposure"])
        assert result.risks == ("Currency exposure",)

    @pytest.mark.parametrize(
        "score, verdict",
        [
            (80, PartnershipVerdict.STRONG_GO),
            (79, PartnershipVerdict.PROCEED_WITH_CAUTION),
            (65, PartnershipVerdict.PROCEED_WITH_CAUTION),
            (64, PartnershipVerdict.HARD_PASS),
        ],
    )
    def test_verdict_thresholds(self, score, verdict):
        assert assess_partnership(_dims((100, score))).verdict is verdict

    def test_weights_not_summing_rejected(self):
        with pytest.raises(ValueError, match="must sum to 100"):
            assess_partnership(_dims((25, 90), (25, 90), (25, 90), (15, 90)))
