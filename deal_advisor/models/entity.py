"""
Entity profile model — the "who is deciding" side of every compatibility score.

``EntityProfile`` is built from form input and re-built on every form edit:
the model is frozen, so an edit goes through ``with_updates(**changes)``,
which returns a new, re-validated profile and leaves the original untouched.

Numeric fields are finite and non-negative; enum fields parse leniently (see
``deal_advisor.taxonomy.deal_taxonomy``).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from deal_advisor.taxonomy.deal_taxonomy import CompanyStage, RiskLevel


class EntityProfile(BaseModel):
    """The organisation evaluating opportunities.

    Attributes:
        name: Display name of the entity.
        industry: Industry label; compared for exact equality with the
            opportunity's industry.
        country: Home country of the entity.
        stage: Maturity stage of the entity.
        revenue: Annual revenue in currency units, or ``None`` if undisclosed.
        investment_capacity: Capital the entity can commit to one deal.
        risk_tolerance: Declared appetite for risk.
        geographic_preferences: Region or country names the entity targets.
        strategic_focus: Focus-area labels (e.g. ``"Market Expansion"``).
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = "Entity"
    industry: str
    country: str
    stage: CompanyStage
    revenue: Optional[float] = None
    investment_capacity: float
    risk_tolerance: RiskLevel
    geographic_preferences: tuple[str, ...] = ()
    strategic_focus: tuple[str, ...] = ()

    @field_validator("stage", mode="before")
    @classmethod
    def parse_stage(cls, v: Any) -> Any:
        return CompanyStage(v) if isinstance(v, str) else v

    @field_validator("risk_tolerance", mode="before")
    @classmethod
    def parse_risk_tolerance(cls, v: Any) -> Any:
        return RiskLevel(v) if isinstance(v, str) else v

    @field_validator("investment_capacity")
    @classmethod
    def validate_capacity(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"investment_capacity must be non-negative, got {v}.")
        return v

    @field_validator("revenue")
    @classmethod
    def validate_revenue(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError(f"revenue must be non-negative, got {v}.")
        return v

    @field_validator("geographic_preferences", "strategic_focus")
    @classmethod
    def strip_blank_terms(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(term.strip() for term in v if term and term.strip())

    def with_updates(self, **changes: Any) -> "EntityProfile":
        """Return a new validated profile with ``changes`` applied."""
        return EntityProfile.model_validate({**self.model_dump(), **changes})
