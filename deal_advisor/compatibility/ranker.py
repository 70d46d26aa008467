"""
Compatibility ranker: scores a list of opportunities against one entity and
orders the results for display.

Usage flow
----------
1. score_opportunities(entity, opportunities)
   -> list[CompatibilityResult]  (ranked, best first)

2. group_by_tier(results)
   -> dict[RecommendationTier, list[CompatibilityResult]]  (rank order kept)

3. top_n(results, n=3)
   -> list[CompatibilityResult]

Ordering
--------
Results are sorted by ``overall_score`` descending. Python's sort is stable,
so opportunities with equal scores keep their input order.
"""

from __future__ import annotations

import logging
from typing import Iterable

from deal_advisor.compatibility.scorer import score_opportunity
from deal_advisor.models.compatibility import CompatibilityResult
from deal_advisor.models.entity import EntityProfile
from deal_advisor.models.opportunity import Opportunity
from deal_advisor.taxonomy.recommendation_taxonomy import RecommendationTier

logger = logging.getLogger(__name__)


def rank_results(results: Iterable[CompatibilityResult]) -> list[CompatibilityResult]:
    """Return ``results`` sorted by overall score descending (stable)."""
    return sorted(results, key=lambda r: -r.overall_score)


def score_opportunities(
    entity:        EntityProfile,
    opportunities: Iterable[Opportunity],
) -> list[CompatibilityResult]:
    """Score every opportunity against ``entity`` and rank the results.

    Args:
        entity:        The evaluating entity profile.
        opportunities: Candidate opportunities, in listing order.

    Returns:
        Ranked ``CompatibilityResult`` list (best first; ties keep input order).
    """
    results = [score_opportunity(entity, opp) for opp in opportunities]
    ranked = rank_results(results)
    logger.debug(
        "Scored %d opportunities for %s; best=%s",
        len(ranked), entity.name, ranked[0].overall_score if ranked else None,
    )
    return ranked


def group_by_tier(
    results: Iterable[CompatibilityResult],
) -> dict[RecommendationTier, list[CompatibilityResult]]:
    """Bucket results by tier, strongest tier first; empty tiers included."""
    grouped: dict[RecommendationTier, list[CompatibilityResult]] = {
        tier: [] for tier in sorted(RecommendationTier, key=lambda t: -t.rank)
    }
    for result in results:
        grouped[result.tier].append(result)
    return grouped


def top_n(results: list[CompatibilityResult], n: int = 3) -> list[CompatibilityResult]:
    """Return the first ``n`` results of an already ranked list."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}.")
    return results[:n]
