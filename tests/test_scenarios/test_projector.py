"""
Tests for deal_advisor/scenarios/projector.py.

What we test
------------
project_figures():
  - Realistic defaults reproduce the known year 1/3/5 revenues and profits.
  - Cumulative profit is the 5-point weighted approximation net of capital.
  - Cash-flow series repeats years 3 and 5.
  - Monotonic in growth; invalid inputs rejected.
payback_period():
  - capital / year-1 profit, 1 decimal; zero capital -> 0; no profit -> None.
evaluate_scenario():
  - Rounded ScenarioResult with IRR, verdict and risk score.
  - Zero margin degrades to payback None and a non-converged IRR.
"""

from __future__ import annotations

import pytest

from deal_advisor.scenarios.irr import IRRSettings
from deal_advisor.scenarios.projector import (
    RISK_SCORES,
    evaluate_scenario,
    payback_period,
    project,
    project_figures,
    risk_score,
)
from deal_advisor.taxonomy.deal_taxonomy import RiskLevel
from deal_advisor.taxonomy.recommendation_taxonomy import ScenarioVerdict

BASELINE = 10_000_000.0


class TestProjectFigures:
    def test_realistic_revenues(self, realistic):
        fig = project(realistic, BASELINE)
        assert fig.year1_revenue == pytest.approx(11_250_000)
        assert fig.year3_revenue == pytest.approx(19_531_250)
        assert fig.year5_revenue == pytest.approx(30_517_578.125)

    def test_realistic_profits(self, realistic):
        fig = project(realistic, BASELINE)
        assert fig.year1_profit == pytest.approx(2_475_000)
        assert fig.year3_profit == pytest.approx(4_296_875)
        assert fig.year5_profit == pytest.approx(6_713_867.1875)

    def test_cumulative_profit_formula(self, realistic):
        fig = project(realistic, BASELINE)
        expected = fig.year1_profit + 2 * fig.year3_profit + 2 * fig.year5_profit - 3_000_000
        assert fig.cumulative_profit == pytest.approx(expected)
        assert fig.cumulative_profit == pytest.approx(21_496_484.375)

    def test_cash_flows_repeat_sampled_years(self, realistic):
        fig = project(realistic, BASELINE)
        y1, y3a, y3b, y5a, y5b = fig.cash_flows
        assert y1 == fig.year1_profit
        assert y3a == y3b == fig.year3_profit
        assert y5a == y5b == fig.year5_profit

    def test_zero_growth_flat(self):
        fig = project_figures(BASELINE, 0.0, 0.2, 0.0)
        assert fig.year1_revenue == fig.year3_revenue == fig.year5_revenue == BASELINE

    def test_monotonic_in_growth(self):
        year5 = [
            project_figures(BASELINE, g / 100, 0.2, 1_000_000).year5_revenue
            for g in range(0, 61, 5)
        ]
        assert year5 == sorted(year5)

    def test_negative_cumulative_when_capital_dominates(self):
        fig = project_figures(1_000_000, 0.0, 0.01, 5_000_000)
        assert fig.cumulative_profit < 0

    def test_negative_baseline_rejected(self):
        with pytest.raises(ValueError, match="baseline_revenue"):
            project_figures(-1, 0.1, 0.1, 0)

    def test_negative_capital_rejected(self):
        with pytest.raises(ValueError, match="capital_investment"):
            project_figures(BASELINE, 0.1, 0.1, -1)

    def test_growth_below_minus_100_rejected(self):
        with pytest.raises(ValueError, match="revenue_growth"):
            project_figures(BASELINE, -1.0, 0.1, 0)

    def test_out_of_slider_range_allowed(self):
        fig = project_figures(BASELINE, 0.66, 0.55, 0)
        assert fig.year5_revenue > 0

    @pytest.mark.parametrize(
        "args, field",
        [
            ((float("nan"), 0.1, 0.1, 0), "baseline_revenue"),
            ((float("inf"), 0.1, 0.1, 0), "baseline_revenue"),
            ((BASELINE, float("nan"), 0.1, 0), "revenue_growth"),
            ((BASELINE, 0.1, float("inf"), 0), "operating_margin"),
            ((BASELINE, 0.1, 0.1, float("inf")), "capital_investment"),
        ],
    )
    def test_non_finite_inputs_rejected(self, args, field):
        with pytest.raises(ValueError, match=f"{field} must be finite"):
            project_figures(*args)


class TestPaybackPeriod:
    def test_realistic(self):
        assert payback_period(3_000_000, 2_475_000) == 1.2

    def test_zero_capital(self):
        assert payback_period(0, 2_475_000) == 0.0

    def test_zero_profit_undefined(self):
        assert payback_period(3_000_000, 0.0) is None

    def test_negative_profit_undefined(self):
        assert payback_period(3_000_000, -10.0) is None

    def test_tiny_profit_floor(self):
        assert payback_period(10, 0.5) == 10.0


class TestRiskScore:
    def test_table(self):
        assert risk_score(RiskLevel.HIGH) == 75
        assert risk_score(RiskLevel.MEDIUM) == 50
        assert risk_score(RiskLevel.LOW) == 25

    def test_every_level_mapped(self):
        assert set(RISK_SCORES) == set(RiskLevel)


class TestEvaluateScenario:
    def test_realistic_result(self, realistic):
        result = evaluate_scenario(realistic, BASELINE, name="Realistic")
        assert result.scenario_name == "Realistic"
        assert result.year1_revenue == 11_250_000
        assert result.year3_revenue == 19_531_250
        assert result.year5_revenue == 30_517_578
        assert result.year5_profit == 6_713_867
        assert result.cumulative_profit == 21_496_484
        assert result.payback_period == 1.2
        assert result.risk_score == 50
        assert result.irr_converged
        assert 100.0 < result.irr < 130.0
        assert result.verdict is ScenarioVerdict.STRONG_GO

    def test_worst_case_result(self, worst_case):
        result = evaluate_scenario(worst_case, BASELINE)
        assert result.cumulative_profit == 4_998_080
        assert result.payback_period == 1.4
        assert result.risk_score == 25
        assert result.scenario_name is None

    def test_best_case_payback(self, best_case):
        result = evaluate_scenario(best_case, BASELINE)
        assert result.payback_period == 1.2
        assert result.risk_score == 75

    def test_irr_rounded_to_two_decimals(self, realistic):
        result = evaluate_scenario(realistic, BASELINE)
        assert result.irr == round(result.irr, 2)

    def test_zero_margin_degrades_gracefully(self, realistic):
        flat = realistic.with_updates(operating_margin=0.0)
        result = evaluate_scenario(flat, BASELINE)
        assert result.payback_period is None
        assert result.irr_converged is False
        assert result.verdict is ScenarioVerdict.RECONSIDER
        assert result.cumulative_profit == -3_000_000

    def test_zero_capital_not_converged(self, realistic):
        free = realistic.with_updates(capital_investment=0)
        result = evaluate_scenario(free, BASELINE)
        assert result.payback_period == 0.0
        assert result.irr_converged is False

    def test_legacy_method_selectable(self, realistic):
        result = evaluate_scenario(realistic, BASELINE, irr_settings=IRRSettings(method="legacy"))
        assert result.year5_revenue == 30_517_578

    def test_assumptions_not_mutated(self, realistic):
        before = realistic.model_dump()
        evaluate_scenario(realistic, BASELINE)
        assert realistic.model_dump() == before

    def test_idempotent(self, realistic):
        assert evaluate_scenario(realistic, BASELINE) == evaluate_scenario(realistic, BASELINE)

    @pytest.mark.parametrize("baseline", [float("nan"), float("inf")])
    def test_non_finite_baseline_rejected(self, realistic, baseline):
        with pytest.raises(ValueError, match="baseline_revenue must be finite"):
            evaluate_scenario(realistic, baseline)
