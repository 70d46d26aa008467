"""
Compatibility scoring: converts an (EntityProfile, Opportunity) pair into a
CompatibilityResult with dimension breakdown, reasoning, red flags and tier.

Score formula
-------------
    overall = round(
        ( financial  * 0.25
        + strategic  * 0.25
        + risk       * 0.25
        + geographic * 0.15
        + industry_bonus ) / 1.15
    )
The industry bonus sits outside the weighted terms; dividing by 1.15
renormalises the sum. The result is clamped to [0, 100] (the formula itself
tops out near 96).

Component explanations
----------------------
financial (0–100):
    Symmetric penalty on deviation of deal value from investment capacity.
    Formula: max(0, 100 - |value - capacity| / capacity * 50).
    Zero capacity -> 0.

strategic (0–100):
    +40 if any strategic-focus term occurs in the description or deal type
    (case-insensitive), then +30 for a partnership deal type, else +20.
    Capped at 100.

risk (20–100):
    Table lookup keyed by (entity tolerance, opportunity risk). Same level
    scores 100. Mismatches are asymmetric: a cautious entity facing high
    risk (20) scores lower than a risk-hungry entity facing low risk (40).

geographic (30 or 100):
    100 when any geographic preference and the opportunity country contain
    one another (case-insensitive), else 30.

industry_bonus (0 or 20):
    20 when industries match exactly.

Reasoning / red flags
---------------------
Reasoning is emitted for strategic > 70, financial > 80, roi > 25%,
geographic > 80 and an exact stage match. Red flags are raised when the deal
value exceeds 1.5x capacity, a High-risk deal meets Low tolerance, the
timeline mentions 24 or 36 (months), or strategic < 40. The red-flag count
feeds ``classify_deal``.
"""

from __future__ import annotations

from dataclasses import dataclass

from deal_advisor.compatibility.matching import any_mutual_match, any_term_in, contains_term
from deal_advisor.models.compatibility import CompatibilityDimension, CompatibilityResult
from deal_advisor.models.entity import EntityProfile
from deal_advisor.models.opportunity import Opportunity
from deal_advisor.recommendations.classifier import classify_deal
from deal_advisor.taxonomy.deal_taxonomy import RiskLevel
from deal_advisor.utils.numeric import clamp, round_half_up

FINANCIAL = "Financial Alignment"
STRATEGIC = "Strategic Alignment"
RISK = "Risk Alignment"
GEOGRAPHIC = "Geographic Alignment"

# Dimension name -> weight in percent of the weighted terms
DIMENSION_WEIGHTS: dict[str, float] = {
    FINANCIAL:  25.0,
    STRATEGIC:  25.0,
    RISK:       25.0,
    GEOGRAPHIC: 15.0,
}
RENORMALISATION_DIVISOR = 1.15
INDUSTRY_BONUS = 20.0

# (entity risk tolerance) -> (opportunity risk level) -> alignment score
RISK_ALIGNMENT: dict[RiskLevel, dict[RiskLevel, float]] = {
    RiskLevel.LOW:    {RiskLevel.LOW: 100.0, RiskLevel.MEDIUM: 50.0,  RiskLevel.HIGH: 20.0},
    RiskLevel.MEDIUM: {RiskLevel.LOW: 70.0,  RiskLevel.MEDIUM: 100.0, RiskLevel.HIGH: 60.0},
    RiskLevel.HIGH:   {RiskLevel.LOW: 40.0,  RiskLevel.MEDIUM: 70.0,  RiskLevel.HIGH: 100.0},
}

STRATEGIC_FOCUS_POINTS = 40.0
PARTNERSHIP_TYPE_POINTS = 30.0
OTHER_TYPE_POINTS = 20.0
GEO_MATCH_SCORE = 100.0
GEO_MISS_SCORE = 30.0

# Reasoning / red-flag thresholds
STRONG_STRATEGIC = 70.0
STRONG_FINANCIAL = 80.0
HIGH_ROI_PCT = 25.0
STRONG_GEOGRAPHIC = 80.0
CAPACITY_OVERRUN_RATIO = 1.5
WEAK_STRATEGIC = 40.0
LONG_TIMELINE_MARKERS: tuple[str, ...] = ("24", "36")


@dataclass(frozen=True)
class AlignmentComponents:
    """Raw dimension scores for one entity/opportunity pair.

    Attributes:
        financial:      0–100, deviation of deal value from capacity.
        strategic:      0–100, focus-term and deal-type match.
        risk:           20–100, tolerance vs exposure table lookup.
        geographic:     30 or 100, preference vs country match.
        industry_bonus: 0 or 20, exact industry match.
    """

    financial:      float
    strategic:      float
    risk:           float
    geographic:     float
    industry_bonus: float

    @property
    def total(self) -> float:
        """Renormalised weighted total before rounding."""
        weighted = (
            self.financial    * DIMENSION_WEIGHTS[FINANCIAL]  / 100.0
            + self.strategic  * DIMENSION_WEIGHTS[STRATEGIC]  / 100.0
            + self.risk       * DIMENSION_WEIGHTS[RISK]       / 100.0
            + self.geographic * DIMENSION_WEIGHTS[GEOGRAPHIC] / 100.0
            + self.industry_bonus
        )
        return weighted / RENORMALISATION_DIVISOR

    @property
    def overall_score(self) -> int:
        """Rounded total, clamped to [0, 100]."""
        return int(clamp(round_half_up(self.total), 0.0, 100.0))


# ── Dimension scores ──────────────────────────────────────────────────────────

def financial_alignment(value: float, capacity: float) -> float:
    """Score how well a deal's size fits the entity's investment capacity."""
    if capacity <= 0:
        return 0.0
    return max(0.0, 100.0 - abs(value - capacity) / capacity * 50.0)


def strategic_alignment(
    strategic_focus: tuple[str, ...] | list[str],
    description:     str,
    deal_type:       str,
) -> float:
    """Score focus-term overlap plus the partnership-type bonus."""
    focus_points = (
        STRATEGIC_FOCUS_POINTS if any_term_in(strategic_focus, description, deal_type) else 0.0
    )
    type_points = (
        PARTNERSHIP_TYPE_POINTS if contains_term(deal_type, "partnership") else OTHER_TYPE_POINTS
    )
    return min(100.0, focus_points + type_points)


def risk_alignment(tolerance: RiskLevel, risk_level: RiskLevel) -> float:
    return RISK_ALIGNMENT[tolerance][risk_level]


def geographic_alignment(preferences: tuple[str, ...] | list[str], country: str) -> float:
    return GEO_MATCH_SCORE if any_mutual_match(preferences, country) else GEO_MISS_SCORE


def industry_bonus(entity_industry: str, opportunity_industry: str) -> float:
    return INDUSTRY_BONUS if entity_industry == opportunity_industry else 0.0


def compute_alignment(entity: EntityProfile, opportunity: Opportunity) -> AlignmentComponents:
    """Compute all raw dimension scores for one pair."""
    return AlignmentComponents(
        financial=financial_alignment(opportunity.value, entity.investment_capacity),
        strategic=strategic_alignment(
            entity.strategic_focus, opportunity.description, opportunity.deal_type
        ),
        risk=risk_alignment(entity.risk_tolerance, opportunity.risk_level),
        geographic=geographic_alignment(entity.geographic_preferences, opportunity.country),
        industry_bonus=industry_bonus(entity.industry, opportunity.industry),
    )


# ── Reasoning and red flags ───────────────────────────────────────────────────


# Each entry is (dimension name, text), in display order.
Annotated = list[tuple[str, str]]


def build_reasoning(
    components:  AlignmentComponents,
    entity:      EntityProfile,
    opportunity: Opportunity,
) -> Annotated:
    """Return reasoning strings tagged with the dimension they support."""
    reasons: Annotated = []

    if components.strategic > STRONG_STRATEGIC:
        reasons.append((
            STRATEGIC,
            f"Strategic alignment strong: matches {', '.join(entity.strategic_focus)}",
        ))
    if components.financial > STRONG_FINANCIAL:
        reasons.append((FINANCIAL, "Investment size well-suited to your capacity"))
    if opportunity.roi > HIGH_ROI_PCT:
        reasons.append((FINANCIAL, f"High ROI potential at {opportunity.roi:g}%"))
    if components.geographic > STRONG_GEOGRAPHIC:
        reasons.append((GEOGRAPHIC, "Geographic preference match"))
    if opportunity.stage == entity.stage:
        reasons.append((STRATEGIC, "Maturity stage alignment"))

    return reasons


def build_red_flags(
    components:  AlignmentComponents,
    entity:      EntityProfile,
    opportunity: Opportunity,
) -> Annotated:
    """Return red flags tagged with the dimension they weigh on."""
    flags: Annotated = []

    if opportunity.value > entity.investment_capacity * CAPACITY_OVERRUN_RATIO:
        flags.append((FINANCIAL, "Investment exceeds typical capacity"))
    if opportunity.risk_level == RiskLevel.HIGH and entity.risk_tolerance == RiskLevel.LOW:
        flags.append((RISK, "Risk level higher than tolerance"))
    if any(marker in opportunity.timeline for marker in LONG_TIMELINE_MARKERS):
        flags.append((FINANCIAL, "Long timeline may impact liquidity"))
    if components.strategic < WEAK_STRATEGIC:
        flags.append((STRATEGIC, "Weak strategic alignment with stated focus"))

    return flags


# ── Result assembly ───────────────────────────────────────────────────────────

def score_opportunity(entity: EntityProfile, opportunity: Opportunity) -> CompatibilityResult:
    """Score one opportunity against an entity profile.

    Pure function: neither argument is modified, and identical inputs
    always yield an identical result.

    Args:
        entity:      The evaluating entity.
        opportunity: The candidate deal or partner.

    Returns:
        Fully populated ``CompatibilityResult``.
    """
    components = compute_alignment(entity, opportunity)
    reasons = build_reasoning(components, entity, opportunity)
    flags = build_red_flags(components, entity, opportunity)

    scores = {
        FINANCIAL:  components.financial,
        STRATEGIC:  components.strategic,
        RISK:       components.risk,
        GEOGRAPHIC: components.geographic,
    }
    dimensions = tuple(
        CompatibilityDimension(
            name=name,
            weight=weight,
            score=round(scores[name], 2),
            green_flags=tuple(text for dim, text in reasons if dim == name),
            red_flags=tuple(text for dim, text in flags if dim == name),
        )
        for name, weight in DIMENSION_WEIGHTS.items()
    )

    risks = tuple(text for _, text in flags)
    overall = components.overall_score

    return CompatibilityResult(
        opportunity=opportunity,
        overall_score=overall,
        tier=classify_deal(overall, opportunity.risk_level, len(risks)),
        dimensions=dimensions,
        industry_bonus=components.industry_bonus,
        synergies=tuple(text for _, text in reasons),
        risks=risks,
    )
