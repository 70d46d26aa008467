"""
Recommendation classifier: maps continuous scores plus qualitative flags to
discrete verdicts. Shared by the compatibility scorer, the scenario
projector and the weighted partnership assessment.

Deal tier (evaluated in order, first match wins)
------------------------------------------------
    1. STRONG_GO : score >= 80  AND  opportunity risk != High
    2. GO        : score >= 70  AND  zero red flags
    3. CONSIDER  : score >= 60  AND  at most one red flag
    4. PASS      : everything else

For fixed (risk, red-flag count) the tier never drops as the score rises:
every rule is a lower bound on the score.

Scenario verdict (IRR in percent)
---------------------------------
    IRR > 25 -> STRONG_GO
    IRR > 15 -> GO_WITH_CONDITIONS
    IRR > 5  -> PROCEED_CAUTIOUSLY
    else     -> RECONSIDER
A non-converged IRR is not trusted and always yields RECONSIDER.

Partnership verdict
-------------------
    score >= 80 -> STRONG_GO
    score >= 65 -> PROCEED_WITH_CAUTION
    else        -> HARD_PASS
"""

from __future__ import annotations

from deal_advisor.taxonomy.deal_taxonomy import RiskLevel
from deal_advisor.taxonomy.recommendation_taxonomy import (
    PartnershipVerdict,
    RecommendationTier,
    ScenarioVerdict,
)

STRONG_GO_MIN_SCORE = 80
GO_MIN_SCORE = 70
CONSIDER_MIN_SCORE = 60
CONSIDER_MAX_RED_FLAGS = 1

# (exclusive lower bound on IRR %, verdict), strongest first
_SCENARIO_IRR_THRESHOLDS: tuple[tuple[float, ScenarioVerdict], ...] = (
    (25.0, ScenarioVerdict.STRONG_GO),
    (15.0, ScenarioVerdict.GO_WITH_CONDITIONS),
    (5.0,  ScenarioVerdict.PROCEED_CAUTIOUSLY),
)

PARTNERSHIP_STRONG_GO_MIN = 80
PARTNERSHIP_CAUTION_MIN = 65


def classify_deal(
    score:          float,
    risk_level:     RiskLevel,
    red_flag_count: int,
) -> RecommendationTier:
    """Return the recommendation tier for one compatibility result.

    Args:
        score:          Overall compatibility score (0–100).
        risk_level:     The opportunity's declared risk level.
        red_flag_count: Number of red flags raised for the pair.

    Returns:
        The first matching ``RecommendationTier``.
    """
    if red_flag_count < 0:
        raise ValueError(f"red_flag_count must be non-negative, got {red_flag_count}.")
    if score >= STRONG_GO_MIN_SCORE and risk_level != RiskLevel.HIGH:
        return RecommendationTier.STRONG_GO
    if score >= GO_MIN_SCORE and red_flag_count == 0:
        return RecommendationTier.GO
    if score >= CONSIDER_MIN_SCORE and red_flag_count <= CONSIDER_MAX_RED_FLAGS:
        return RecommendationTier.CONSIDER
    return RecommendationTier.PASS


def classify_scenario(irr_pct: float, converged: bool = True) -> ScenarioVerdict:
    """Return the decision-support verdict for a scenario's IRR (percent)."""
    if not converged:
        return ScenarioVerdict.RECONSIDER
    for threshold, verdict in _SCENARIO_IRR_THRESHOLDS:
        if irr_pct > threshold:
            return verdict
    return ScenarioVerdict.RECONSIDER


def classify_partnership(score: float) -> PartnershipVerdict:
    """Return the verdict for a weighted partnership assessment score."""
    if score >= PARTNERSHIP_STRONG_GO_MIN:
        return PartnershipVerdict.STRONG_GO
    if score >= PARTNERSHIP_CAUTION_MIN:
        return PartnershipVerdict.PROCEED_WITH_CAUTION
    return PartnershipVerdict.HARD_PASS
