"""
Weighted partnership assessment.

Unlike the deal scorer, which derives its dimensions from an entity profile,
this assessment takes caller-supplied dimensions (strategic alignment,
financial stability, operational compatibility, cultural fit, legal and
regulatory, ...) whose weights must total 100::

    overall = round(sum(score * weight / 100))

and maps the result to a ``PartnershipVerdict`` (>= 80 STRONG_GO,
>= 65 PROCEED_WITH_CAUTION, else HARD_PASS).
"""

from __future__ import annotations

from typing import Iterable, Sequence

from deal_advisor.models.compatibility import (
    CompatibilityDimension,
    PartnershipAssessment,
    validate_dimension_weights,
)
from deal_advisor.recommendations.classifier import classify_partnership
from deal_advisor.utils.numeric import clamp, round_half_up


def weighted_score(dimensions: Sequence[CompatibilityDimension]) -> int:
    """Return the weighted overall score of ``dimensions``.

    Raises:
        ValueError: If the weights do not sum to 100.
    """
    validate_dimension_weights(dimensions)
    total = sum(d.score * d.weight / 100.0 for d in dimensions)
    return int(clamp(round_half_up(total), 0.0, 100.0))


def assess_partnership(
    dimensions: Sequence[CompatibilityDimension],
    synergies:  Iterable[str] = (),
    risks:      Iterable[str] = (),
    next_steps: Iterable[str] = (),
) -> PartnershipAssessment:
    """Score a partner across weighted dimensions.

    Risks default to the red flags raised on the dimensions when none are
    given explicitly.

    Args:
        dimensions: Weighted dimensions; weights must sum to 100.
        synergies:  Expected upside of the partnership.
        risks:      Known concerns.
        next_steps: Suggested follow-up actions.

    Returns:
        ``PartnershipAssessment`` with score and verdict.

    Raises:
        ValueError: If the weights do not sum to 100.
    """
    overall = weighted_score(dimensions)
    risk_list = tuple(risks) or tuple(flag for d in dimensions for flag in d.red_flags)
    return PartnershipAssessment(
        overall_score=overall,
        verdict=classify_partnership(overall),
        dimensions=tuple(dimensions),
        synergies=tuple(synergies),
        risks=risk_list,
        next_steps=tuple(next_steps),
    )
