"""
Scenario projection: compounding revenue/profit over a 5-year horizon, plus
full ScenarioResult evaluation (IRR, payback, risk score, verdict).

Projection formulas
-------------------
    year1_revenue = baseline * (1 + growth * 0.5)   # half-year approximation
    year3_revenue = baseline * (1 + growth) ** 3
    year5_revenue = baseline * (1 + growth) ** 5
    profit_y      = revenue_y * margin

Cumulative profit (approximation, NOT an NPV)
---------------------------------------------
    cumulative = year1_profit + 2 * year3_profit + 2 * year5_profit - capital
Only years 1, 3 and 5 are sampled; years 2 and 4 are assumed equal to years
3 and 5. The IRR cash-flow series inherits the same shortcut:
``[y1, y3, y3, y5, y5]``. Both are kept so figures match earlier releases;
they overstate early-year profit under growth.

Payback period
--------------
    capital / max(year1_profit, 1)  rounded to 1 decimal
Zero capital -> 0.0. Year-1 profit <= 0 (e.g. zero margin) -> ``None``,
meaning payback is undefined and should be shown as N/A.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from deal_advisor.models.scenario import ScenarioAssumptions, ScenarioResult
from deal_advisor.recommendations.classifier import classify_scenario
from deal_advisor.scenarios.irr import IRRSettings, solve_irr
from deal_advisor.taxonomy.deal_taxonomy import RiskLevel
from deal_advisor.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

YEAR1_GROWTH_FACTOR = 0.5
PAYBACK_PROFIT_FLOOR = 1.0

RISK_SCORES: dict[RiskLevel, int] = {
    RiskLevel.HIGH:   75,
    RiskLevel.MEDIUM: 50,
    RiskLevel.LOW:    25,
}


@dataclass(frozen=True)
class YearlyProjection:
    """Unrounded sampled figures for one scenario.

    Attributes:
        year1_revenue / year3_revenue / year5_revenue: Sampled revenues.
        year1_profit / year3_profit / year5_profit:    Sampled profits.
        capital_investment: Up-front outlay (t=0).
    """

    year1_revenue:      float
    year3_revenue:      float
    year5_revenue:      float
    year1_profit:       float
    year3_profit:       float
    year5_profit:       float
    capital_investment: float

    @property
    def cumulative_profit(self) -> float:
        """5-point weighted approximation of 5-year profit, net of capital."""
        return (
            self.year1_profit
            + 2.0 * self.year3_profit
            + 2.0 * self.year5_profit
            - self.capital_investment
        )

    @property
    def cash_flows(self) -> tuple[float, float, float, float, float]:
        """IRR cash-flow series; years 2 and 4 repeat years 3 and 5."""
        return (
            self.year1_profit,
            self.year3_profit,
            self.year3_profit,
            self.year5_profit,
            self.year5_profit,
        )


def project_figures(
    baseline_revenue:   float,
    revenue_growth:     float,
    operating_margin:   float,
    capital_investment: float,
) -> YearlyProjection:
    """Project sampled revenue and profit from raw numeric assumptions.

    Accepts values outside the interactive slider bounds so sensitivity
    perturbations can be evaluated; only physically meaningless inputs are
    rejected.

    Raises:
        ValueError: On non-finite inputs, negative baseline revenue or capital,
            or growth <= -100%.
    """
    for label, value in (
        ("baseline_revenue", baseline_revenue),
        ("revenue_growth", revenue_growth),
        ("operating_margin", operating_margin),
        ("capital_investment", capital_investment),
    ):
        if not math.isfinite(value):
            raise ValueError(f"{label} must be finite, got {value}.")
    if baseline_revenue < 0:
        raise ValueError(f"baseline_revenue must be non-negative, got {baseline_revenue}.")
    if capital_investment < 0:
        raise ValueError(f"capital_investment must be non-negative, got {capital_investment}.")
    if revenue_growth <= -1.0:
        raise ValueError(f"revenue_growth must be > -1.0, got {revenue_growth}.")

    year1_revenue = baseline_revenue * (1.0 + revenue_growth * YEAR1_GROWTH_FACTOR)
    year3_revenue = baseline_revenue * (1.0 + revenue_growth) ** 3
    year5_revenue = baseline_revenue * (1.0 + revenue_growth) ** 5

    return YearlyProjection(
        year1_revenue=year1_revenue,
        year3_revenue=year3_revenue,
        year5_revenue=year5_revenue,
        year1_profit=year1_revenue * operating_margin,
        year3_profit=year3_revenue * operating_margin,
        year5_profit=year5_revenue * operating_margin,
        capital_investment=capital_investment,
    )


def project(assumptions: ScenarioAssumptions, baseline_revenue: float) -> YearlyProjection:
    """Project sampled figures for validated scenario assumptions."""
    return project_figures(
        baseline_revenue,
        assumptions.revenue_growth,
        assumptions.operating_margin,
        assumptions.capital_investment,
    )


def payback_period(capital_investment: float, year1_profit: float) -> float | None:
    """Years to recover capital from year-1 profit; ``None`` when undefined."""
    if capital_investment <= 0:
        return 0.0
    if year1_profit <= 0:
        return None
    return round_half_up(capital_investment / max(year1_profit, PAYBACK_PROFIT_FLOOR), 1)


def risk_score(risk_level: RiskLevel) -> int:
    return RISK_SCORES[risk_level]


def evaluate_scenario(
    assumptions:      ScenarioAssumptions,
    baseline_revenue: float,
    name:             str | None = None,
    irr_settings:     IRRSettings | None = None,
) -> ScenarioResult:
    """Compute the full ScenarioResult for one set of assumptions.

    Pure function: ``assumptions`` is not modified and no state is kept
    between calls.

    Args:
        assumptions:      Validated scenario assumptions.
        baseline_revenue: Revenue shared by all scenarios being compared.
        name:             Optional scenario display name.
        irr_settings:     IRR solver selection; bisection by default.

    Returns:
        Rounded ``ScenarioResult``.
    """
    figures = project(assumptions, baseline_revenue)
    irr = solve_irr(figures.capital_investment, figures.cash_flows, irr_settings)
    if not irr.converged:
        logger.info("IRR did not converge for scenario %s", name or "<unnamed>")

    return ScenarioResult(
        scenario_name=name,
        year1_revenue=int(round_half_up(figures.year1_revenue)),
        year3_revenue=int(round_half_up(figures.year3_revenue)),
        year5_revenue=int(round_half_up(figures.year5_revenue)),
        year1_profit=int(round_half_up(figures.year1_profit)),
        year3_profit=int(round_half_up(figures.year3_profit)),
        year5_profit=int(round_half_up(figures.year5_profit)),
        cumulative_profit=int(round_half_up(figures.cumulative_profit)),
        irr=irr.rate_pct,
        irr_converged=irr.converged,
        payback_period=payback_period(figures.capital_investment, figures.year1_profit),
        risk_score=risk_score(assumptions.risk_level),
        verdict=classify_scenario(irr.rate_pct, irr.converged),
    )
