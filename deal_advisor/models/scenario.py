"""
Financial scenario models.

``ScenarioAssumptions`` are the slider-driven inputs of one named scenario.
They are frozen: an interactive edit produces a new instance through
``with_updates(**changes)`` (re-validated), so results computed from the old
instance are never silently invalidated.

``ScenarioResult`` is a pure function of assumptions + the shared baseline
revenue. It is recomputed on every assumption change and never cached.

``SensitivityDelta`` reports how cumulative profit moves when one assumption
is scaled up and down by the sensitivity step (default ±10%).

Domain bounds
-------------
  revenue_growth     [0.0, 0.6]   fractional annual growth
  operating_margin   [0.0, 0.5]   fractional margin
  capital_investment >= 0         currency units
Values outside these bounds, infinities and NaN are rejected at construction.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from deal_advisor.taxonomy.deal_taxonomy import RiskLevel
from deal_advisor.taxonomy.recommendation_taxonomy import ScenarioVerdict

GROWTH_BOUNDS: tuple[float, float] = (0.0, 0.6)
MARGIN_BOUNDS: tuple[float, float] = (0.0, 0.5)


class ScenarioAssumptions(BaseModel):
    """Inputs of one projected scenario.

    Attributes:
        revenue_growth: Annual revenue growth rate, e.g. ``0.25`` for 25%.
        operating_margin: Operating margin, e.g. ``0.22`` for 22%.
        capital_investment: Up-front capital outlay at t=0.
        risk_level: Declared risk label; drives the scenario risk score.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    revenue_growth: float
    operating_margin: float
    capital_investment: float
    risk_level: RiskLevel = RiskLevel.MEDIUM

    @field_validator("risk_level", mode="before")
    @classmethod
    def parse_risk_level(cls, v: Any) -> Any:
        return RiskLevel(v) if isinstance(v, str) else v

    @field_validator("revenue_growth")
    @classmethod
    def validate_growth(cls, v: float) -> float:
        lo, hi = GROWTH_BOUNDS
        if not lo <= v <= hi:
            raise ValueError(f"revenue_growth must be in [{lo}, {hi}], got {v}.")
        return v

    @field_validator("operating_margin")
    @classmethod
    def validate_margin(cls, v: float) -> float:
        lo, hi = MARGIN_BOUNDS
        if not lo <= v <= hi:
            raise ValueError(f"operating_margin must be in [{lo}, {hi}], got {v}.")
        return v

    @field_validator("capital_investment")
    @classmethod
    def validate_capital(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"capital_investment must be non-negative, got {v}.")
        return v

    def with_updates(self, **changes: Any) -> "ScenarioAssumptions":
        """Return a new validated instance with ``changes`` applied."""
        return ScenarioAssumptions.model_validate({**self.model_dump(), **changes})


class NamedScenario(BaseModel):
    """A scenario as listed in a scenario book.

    Attributes:
        key: Stable slug, e.g. ``"realistic"``.
        name: Display name, e.g. ``"Realistic"``.
        description: One-line narrative of the scenario.
        assumptions: Current assumptions for this scenario.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    description: str = ""
    assumptions: ScenarioAssumptions

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("key must not be empty.")
        return v.strip()


class ScenarioResult(BaseModel):
    """Projected outcome of one scenario.

    Currency figures are rounded to whole units; ``irr`` to 2 decimals and
    ``payback_period`` to 1 decimal.

    Attributes:
        scenario_name: Display name of the scenario, if known.
        year1_revenue / year3_revenue / year5_revenue: Sampled revenues.
        year1_profit / year3_profit / year5_profit: Sampled profits.
        cumulative_profit: 5-year weighted approximation, net of capital.
            May be negative (net loss).
        irr: Internal rate of return in percent (best estimate).
        irr_converged: ``False`` when the IRR solver did not converge;
            ``irr`` is then only an estimate and should be shown as N/A.
        payback_period: Years to recover capital, or ``None`` when year-1
            profit is not positive (payback undefined).
        risk_score: 75 / 50 / 25 for High / Medium / Low risk labels.
        verdict: Decision-support verdict keyed off IRR.
    """

    model_config = ConfigDict(frozen=True)

    scenario_name: Optional[str] = None
    year1_revenue: int
    year3_revenue: int
    year5_revenue: int
    year1_profit: int
    year3_profit: int
    year5_profit: int
    cumulative_profit: int
    irr: float
    irr_converged: bool = True
    payback_period: Optional[float] = None
    risk_score: int
    verdict: ScenarioVerdict

    @field_validator("risk_score")
    @classmethod
    def validate_risk_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"risk_score must be in [0, 100], got {v}.")
        return v

    @field_validator("year1_revenue", "year3_revenue", "year5_revenue")
    @classmethod
    def validate_revenue(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"revenue must be non-negative, got {v}.")
        return v


class SensitivityDelta(BaseModel):
    """Cumulative-profit response to a ±step change in one assumption.

    Attributes:
        variable: Assumption name, e.g. ``"revenue_growth"``.
        baseline_profit: Cumulative profit with unchanged assumptions.
        plus_delta: Change in cumulative profit when the variable is scaled up.
        minus_delta: Change in cumulative profit when the variable is scaled down.
    """

    model_config = ConfigDict(frozen=True)

    variable: str
    baseline_profit: float
    plus_delta: float
    minus_delta: float

    @property
    def max_abs_delta(self) -> float:
        return max(abs(self.plus_delta), abs(self.minus_delta))
