"""
Opportunity model — a listed deal or partner that entities are scored against.

Opportunities are immutable once listed; many are scored against a single
``EntityProfile``. ``type`` and ``description`` are free text and feed the
fuzzy strategic matcher; ``timeline`` is free text and only inspected for
long-horizon markers ("24", "36").

The JSON/CSV field name ``type`` maps to the ``deal_type`` attribute so the
builtin is not shadowed; both names are accepted on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from deal_advisor.taxonomy.deal_taxonomy import CompanyStage, RiskLevel


class Opportunity(BaseModel):
    """A deal or partnership candidate.

    Attributes:
        id: Stable identifier, e.g. ``"d1"``.
        name: Display name.
        deal_type: Deal structure, e.g. ``"Equity Investment"``, ``"Partnership"``.
        description: Free-text summary used for strategic matching.
        country: Country where the opportunity is located.
        industry: Industry label.
        stage: Maturity stage of the business behind the opportunity.
        value: Capital required, in currency units.
        risk_level: Declared risk exposure.
        roi: Expected return on investment, in percent (``35`` = 35%).
        timeline: Free-text horizon, e.g. ``"18-24 months"``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    id: str
    name: str
    deal_type: str = Field(alias="type")
    description: str = ""
    country: str
    industry: str
    stage: CompanyStage
    value: float
    risk_level: RiskLevel
    roi: float = 0.0
    timeline: str = ""

    @field_validator("stage", mode="before")
    @classmethod
    def parse_stage(cls, v: Any) -> Any:
        return CompanyStage(v) if isinstance(v, str) else v

    @field_validator("risk_level", mode="before")
    @classmethod
    def parse_risk_level(cls, v: Any) -> Any:
        return RiskLevel(v) if isinstance(v, str) else v

    @field_validator("value")
    @classmethod
    def validate_value(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"value must be non-negative, got {v}.")
        return v
