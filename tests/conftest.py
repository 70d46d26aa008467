"""
Shared pytest fixtures for the deal-advisor test suite.

Provides:
  - ``entity``: the default "Your Corporation" profile (Technology, United
    States, Growth, 10M capacity, Medium risk tolerance).
  - ``make_opportunity``: factory for ``Opportunity`` objects with sensible
    defaults, overridable per field.
  - ``seed_opportunities``: the eight listed seed deals (d1..d8).
  - ``realistic`` / ``worst_case`` / ``best_case``: default scenario assumptions.
  - ``seeds_dir``: path to ``config/seeds``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from deal_advisor.models.entity import EntityProfile
from deal_advisor.models.opportunity import Opportunity
from deal_advisor.models.scenario import ScenarioAssumptions
from deal_advisor.taxonomy.deal_taxonomy import CompanyStage, RiskLevel

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def seeds_dir() -> Path:
    return PROJECT_ROOT / "config" / "seeds"


# ── Entity / opportunity factories ────────────────────────────────────────────

@pytest.fixture
def entity() -> EntityProfile:
    """The default entity profile used throughout the compatibility tests."""
    return EntityProfile(
        name="Your Corporation",
        industry="Technology",
        country="United States",
        stage=CompanyStage.GROWTH,
        revenue=50_000_000,
        investment_capacity=10_000_000,
        risk_tolerance=RiskLevel.MEDIUM,
        geographic_preferences=("Southeast Asia", "Europe", "Latin America"),
        strategic_focus=("Market Expansion", "Technology Acquisition", "Partnership"),
    )


@pytest.fixture
def make_opportunity() -> Callable[..., Opportunity]:
    """Return a factory building an ``Opportunity`` with overridable fields."""

    def _make(**overrides: Any) -> Opportunity:
        fields: dict[str, Any] = {
            "id": "opp-1",
            "name": "Test Opportunity",
            "type": "Equity Investment",
            "description": "Generic opportunity",
            "country": "Canada",
            "industry": "Retail",
            "stage": "Growth",
            "value": 10_000_000,
            "risk_level": "Medium",
            "roi": 10,
            "timeline": "12 months",
        }
        fields.update(overrides)
        return Opportunity.model_validate(fields)

    return _make


@pytest.fixture
def seed_opportunities(seeds_dir: Path) -> list[Opportunity]:
    """The eight seed deals, in listing order."""
    with open(seeds_dir / "opportunities.json", encoding="utf-8") as f:
        return [Opportunity.model_validate(item) for item in json.load(f)]


@pytest.fixture
def seed_by_id(seed_opportunities: list[Opportunity]) -> dict[str, Opportunity]:
    return {opp.id: opp for opp in seed_opportunities}


# ── Scenario assumptions ──────────────────────────────────────────────────────

@pytest.fixture
def realistic() -> ScenarioAssumptions:
    return ScenarioAssumptions(
        revenue_growth=0.25,
        operating_margin=0.22,
        capital_investment=3_000_000,
        risk_level=RiskLevel.MEDIUM,
    )


@pytest.fixture
def worst_case() -> ScenarioAssumptions:
    return ScenarioAssumptions(
        revenue_growth=0.08,
        operating_margin=0.10,
        capital_investment=1_500_000,
        risk_level=RiskLevel.LOW,
    )


@pytest.fixture
def best_case() -> ScenarioAssumptions:
    return ScenarioAssumptions(
        revenue_growth=0.45,
        operating_margin=0.35,
        capital_investment=5_000_000,
        risk_level=RiskLevel.HIGH,
    )
