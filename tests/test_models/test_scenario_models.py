"""Tests for scenario models — domain bounds and copy-on-write updates."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from deal_advisor.models.scenario import (
    NamedScenario,
    ScenarioAssumptions,
    ScenarioResult,
    SensitivityDelta,
)
from deal_advisor.taxonomy.deal_taxonomy import RiskLevel
from deal_advisor.taxonomy.recommendation_taxonomy import ScenarioVerdict


class TestScenarioAssumptions:
    def test_bounds_inclusive(self):
        a = ScenarioAssumptions(revenue_growth=0.6, operating_margin=0.5, capital_investment=0)
        assert a.risk_level is RiskLevel.MEDIUM

    @pytest.mark.parametrize("growth", [-0.01, 0.61])
    def test_growth_out_of_domain(self, growth):
        with pytest.raises(ValidationError, match="revenue_growth must be in"):
            ScenarioAssumptions(revenue_growth=growth, operating_margin=0.2, capital_investment=1)

    @pytest.mark.parametrize("margin", [-0.1, 0.51])
    def test_margin_out_of_domain(self, margin):
        with pytest.raises(ValidationError, match="operating_margin must be in"):
            ScenarioAssumptions(revenue_growth=0.2, operating_margin=margin, capital_investment=1)

    def test_negative_capital(self):
        with pytest.raises(ValidationError, match="capital_investment must be non-negative"):
            ScenarioAssumptions(revenue_growth=0.2, operating_margin=0.2, capital_investment=-1)

    @pytest.mark.parametrize("capital", [float("inf"), float("nan")])
    def test_non_finite_capital_rejected(self, capital):
        with pytest.raises(ValidationError):
            ScenarioAssumptions(revenue_growth=0.2, operating_margin=0.2, capital_investment=capital)

    def test_non_finite_growth_rejected(self):
        with pytest.raises(ValidationError):
            ScenarioAssumptions(revenue_growth=float("nan"), operating_margin=0.2, capital_investment=1)

    def test_with_updates_is_copy_on_write(self, realistic):
        updated = realistic.with_updates(revenue_growth=0.3)
        assert updated.revenue_growth == 0.3
        assert realistic.revenue_growth == 0.25
        assert updated is not realistic

    def test_with_updates_validates(self, realistic):
        with pytest.raises(ValidationError):
            realistic.with_updates(operating_margin=0.9)

    def test_frozen(self, realistic):
        with pytest.raises(ValidationError):
            realistic.revenue_growth = 0.5


class TestNamedScenario:
    def test_key_stripped(self, realistic):
        scenario = NamedScenario(key=" realistic ", name="Realistic", assumptions=realistic)
        assert scenario.key == "realistic"

    def test_blank_key_rejected(self, realistic):
        with pytest.raises(ValidationError, match="key must not be empty"):
            NamedScenario(key="  ", name="Realistic", assumptions=realistic)


class TestScenarioResult:
    def _result(self, **overrides) -> ScenarioResult:
        fields = dict(
            year1_revenue=1, year3_revenue=1, year5_revenue=1,
            year1_profit=0, year3_profit=0, year5_profit=0,
            cumulative_profit=-5, irr=0.0, risk_score=50,
            verdict=ScenarioVerdict.RECONSIDER,
        )
        fields.update(overrides)
        return ScenarioResult(**fields)

    def test_negative_cumulative_profit_allowed(self):
        assert self._result().cumulative_profit == -5

    def test_payback_defaults_to_none(self):
        assert self._result().payback_period is None

    def test_risk_score_bounds(self):
        with pytest.raises(ValidationError, match="risk_score must be in"):
            self._result(risk_score=120)

    def test_negative_revenue_rejected(self):
        with pytest.raises(ValidationError, match="revenue must be non-negative"):
            self._result(year3_revenue=-1)


class TestSensitivityDelta:
    def test_max_abs_delta(self):
        delta = SensitivityDelta(
            variable="capital_investment", baseline_profit=1.0, plus_delta=-300.0, minus_delta=200.0
        )
        assert delta.max_abs_delta == 300.0
