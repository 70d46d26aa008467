"""
Compatibility output models.

``CompatibilityDimension`` is one weighted axis of a fit score (financial,
strategic, risk, geographic, ...) with its qualitative green/red flags.

``CompatibilityResult`` is the scored fit between one entity profile and one
opportunity. It is a derived value: never persisted on its own, recomputed
whenever either input changes.

``PartnershipAssessment`` is the output of a weighted multi-dimension
partner assessment, where the caller supplies the dimensions and their
weights must sum to 100.

All models are frozen.
"""

from __future__ import annotations

from typing import Sequence

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from deal_advisor.models.opportunity import Opportunity
from deal_advisor.taxonomy.recommendation_taxonomy import (
    PartnershipVerdict,
    RecommendationTier,
)

WEIGHT_TOTAL = 100.0
WEIGHT_TOLERANCE = 1e-6


class CompatibilityDimension(BaseModel):
    """One scored axis of a compatibility assessment.

    Attributes:
        name: Dimension label, e.g. ``"Financial Alignment"``.
        weight: Share of the overall score in percent (0–100).
        score: Dimension score in [0, 100].
        green_flags: Qualitative positives supporting this dimension.
        red_flags: Qualitative concerns raised on this dimension.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str
    weight: float
    score: float
    green_flags: tuple[str, ...] = ()
    red_flags: tuple[str, ...] = ()

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if not 0.0 <= v <= WEIGHT_TOTAL:
            raise ValueError(f"weight must be in [0, 100], got {v}.")
        return v

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"score must be in [0, 100], got {v}.")
        return v


class CompatibilityResult(BaseModel):
    """Scored fit between an entity profile and one opportunity.

    The four weighted dimensions (financial, strategic, risk, geographic)
    carry weights 25/25/25/15. ``industry_bonus`` is added on top of the
    weighted terms, and the sum is renormalised by 1.15, so the dimension
    weights of a deal score total 90, not 100.

    Attributes:
        opportunity: The opportunity that was scored.
        overall_score: Integer fit score in [0, 100].
        tier: Go/No-Go recommendation tier.
        dimensions: Ordered dimension breakdown.
        industry_bonus: 20 when industries match exactly, else 0.
        synergies: Reasoning strings for dimensions above their thresholds.
        risks: Red flags; their count feeds the tier decision.
    """

    model_config = ConfigDict(frozen=True)

    opportunity: Opportunity
    overall_score: int
    tier: RecommendationTier
    dimensions: tuple[CompatibilityDimension, ...]
    industry_bonus: float = 0.0
    synergies: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()

    @field_validator("overall_score")
    @classmethod
    def validate_overall_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"overall_score must be in [0, 100], got {v}.")
        return v

    @property
    def red_flag_count(self) -> int:
        return len(self.risks)

    def dimension(self, name: str) -> CompatibilityDimension:
        """Return the dimension called ``name``.

        Raises:
            KeyError: If no dimension has that name.
        """
        for dim in self.dimensions:
            if dim.name == name:
                return dim
        raise KeyError(name)


class PartnershipAssessment(BaseModel):
    """Weighted multi-dimension partner assessment.

    Attributes:
        overall_score: ``round(sum(score * weight / 100))`` in [0, 100].
        verdict: Partnership verdict derived from ``overall_score``.
        dimensions: The weighted dimensions; weights sum to 100.
        synergies: Expected upside of the partnership.
        risks: Known concerns.
        next_steps: Suggested follow-up actions.
    """

    model_config = ConfigDict(frozen=True)

    overall_score: int
    verdict: PartnershipVerdict
    dimensions: tuple[CompatibilityDimension, ...]
    synergies: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    next_steps: tuple[str, ...] = ()

    @model_validator(mode="after")
    def validate_weights_sum(self) -> "PartnershipAssessment":
        validate_dimension_weights(self.dimensions)
        return self


def validate_dimension_weights(dimensions: Sequence[CompatibilityDimension]) -> None:
    """Raise ``ValueError`` unless the dimension weights sum to 100.

    Args:
        dimensions: Dimensions of one weighted assessment.

    Raises:
        ValueError: If ``dimensions`` is empty or the weights do not total 100.
    """
    if not dimensions:
        raise ValueError("At least one dimension is required.")
    total = sum(d.weight for d in dimensions)
    if abs(total - WEIGHT_TOTAL) > WEIGHT_TOLERANCE:
        raise ValueError(
            f"Dimension weights must sum to 100, got {total:g} "
            f"({', '.join(f'{d.name}={d.weight:g}' for d in dimensions)})."
        )
