"""
Recommendation taxonomy: the discrete outcomes the decision engine emits.

Three independent verdict scales exist because three different questions
are being answered:
  - ``RecommendationTier``  — should *this entity* pursue *this opportunity*?
  - ``ScenarioVerdict``     — is *this financial scenario* worth committing to?
  - ``PartnershipVerdict``  — does a weighted partner assessment clear the bar?

Each enum declares its members from strongest to weakest and exposes a
``rank`` (higher = stronger) so callers can compare tiers without relying
on declaration order, plus a display ``label``.

This module has NO imports from any other ``deal_advisor`` package.
"""

from enum import StrEnum


class RecommendationTier(StrEnum):
    """Go/No-Go tier for an entity/opportunity compatibility result."""

    STRONG_GO = "STRONG_GO"
    """High fit and the opportunity is not high-risk."""

    GO = "GO"
    """Good fit with no red flags."""

    CONSIDER = "CONSIDER"
    """Acceptable fit with at most one red flag."""

    PASS = "PASS"
    """Weak fit or too many red flags."""

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class ScenarioVerdict(StrEnum):
    """Decision-support verdict for a projected scenario, keyed off IRR."""

    STRONG_GO = "STRONG_GO"
    GO_WITH_CONDITIONS = "GO_WITH_CONDITIONS"
    PROCEED_CAUTIOUSLY = "PROCEED_CAUTIOUSLY"
    RECONSIDER = "RECONSIDER"

    @property
    def rank(self) -> int:
        return _SCENARIO_RANK[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @property
    def guidance(self) -> str:
        """One-line next step shown alongside the verdict."""
        return _SCENARIO_GUIDANCE[self]


class PartnershipVerdict(StrEnum):
    """Verdict for a weighted multi-dimension partnership assessment."""

    STRONG_GO = "STRONG_GO"
    PROCEED_WITH_CAUTION = "PROCEED_WITH_CAUTION"
    HARD_PASS = "HARD_PASS"

    @property
    def rank(self) -> int:
        return _PARTNERSHIP_RANK[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


_TIER_RANK: dict[RecommendationTier, int] = {
    RecommendationTier.STRONG_GO: 3,
    RecommendationTier.GO:        2,
    RecommendationTier.CONSIDER:  1,
    RecommendationTier.PASS:      0,
}

_SCENARIO_RANK: dict[ScenarioVerdict, int] = {
    ScenarioVerdict.STRONG_GO:          3,
    ScenarioVerdict.GO_WITH_CONDITIONS: 2,
    ScenarioVerdict.PROCEED_CAUTIOUSLY: 1,
    ScenarioVerdict.RECONSIDER:         0,
}

_SCENARIO_GUIDANCE: dict[ScenarioVerdict, str] = {
    ScenarioVerdict.STRONG_GO:          "proceed immediately",
    ScenarioVerdict.GO_WITH_CONDITIONS: "proceed with risk mitigation",
    ScenarioVerdict.PROCEED_CAUTIOUSLY: "seek further market validation",
    ScenarioVerdict.RECONSIDER:         "revisit assumptions before committing",
}

_PARTNERSHIP_RANK: dict[PartnershipVerdict, int] = {
    PartnershipVerdict.STRONG_GO:            2,
    PartnershipVerdict.PROCEED_WITH_CAUTION: 1,
    PartnershipVerdict.HARD_PASS:            0,
}
