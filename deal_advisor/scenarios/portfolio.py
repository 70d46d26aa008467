"""
ScenarioBook: an explicitly owned collection of named scenarios.

Scenarios are keyed by slug (``best_case``, ``realistic``, ``worst_case``)
and kept in insertion order. Edits never mutate an existing
``ScenarioAssumptions``: ``update()`` builds a new validated instance,
swaps it into the book and returns it, so any ``ScenarioResult`` computed
earlier stays consistent with the assumptions it was computed from.

Usage
-----
    book = default_scenario_book()
    book.update("realistic", revenue_growth=0.30)
    results = book.evaluate_all(10_000_000)
    rows = book.comparison_rows(10_000_000)
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from deal_advisor.models.scenario import NamedScenario, ScenarioAssumptions, ScenarioResult
from deal_advisor.scenarios.irr import IRRSettings
from deal_advisor.scenarios.projector import evaluate_scenario
from deal_advisor.taxonomy.deal_taxonomy import RiskLevel

logger = logging.getLogger(__name__)

DEFAULT_BASELINE_REVENUE = 10_000_000.0

DEFAULT_SCENARIOS: tuple[NamedScenario, ...] = (
    NamedScenario(
        key="best_case",
        name="Best Case",
        description="Aggressive expansion with rapid market penetration",
        assumptions=ScenarioAssumptions(
            revenue_growth=0.45,
            operating_margin=0.35,
            capital_investment=5_000_000,
            risk_level=RiskLevel.HIGH,
        ),
    ),
    NamedScenario(
        key="realistic",
        name="Realistic",
        description="Balanced growth with moderate expansion",
        assumptions=ScenarioAssumptions(
            revenue_growth=0.25,
            operating_margin=0.22,
            capital_investment=3_000_000,
            risk_level=RiskLevel.MEDIUM,
        ),
    ),
    NamedScenario(
        key="worst_case",
        name="Worst Case",
        description="Conservative scenario with market challenges",
        assumptions=ScenarioAssumptions(
            revenue_growth=0.08,
            operating_margin=0.10,
            capital_investment=1_500_000,
            risk_level=RiskLevel.LOW,
        ),
    ),
)

COMPARISON_METRICS: tuple[tuple[str, str], ...] = (
    ("Year 1 Revenue",          "year1_revenue"),
    ("Year 3 Revenue",          "year3_revenue"),
    ("Year 5 Revenue",          "year5_revenue"),
    ("Cumulative Profit",       "cumulative_profit"),
    ("IRR (%)",                 "irr"),
    ("Payback Period (years)",  "payback_period"),
    ("Risk Score",              "risk_score"),
)


class ScenarioBook:
    """Ordered, slug-keyed collection of named scenarios."""

    def __init__(self, scenarios: Iterable[NamedScenario] = ()) -> None:
        self._scenarios: dict[str, NamedScenario] = {}
        names: set[str] = set()
        for scenario in scenarios:
            if scenario.key in self._scenarios:
                raise ValueError(f"Duplicate scenario key '{scenario.key}'.")
            # display names key the comparison columns
            if scenario.name in names:
                raise ValueError(f"Duplicate scenario name '{scenario.name}'.")
            names.add(scenario.name)
            self._scenarios[scenario.key] = scenario

    def __len__(self) -> int:
        return len(self._scenarios)

    def __iter__(self) -> Iterator[NamedScenario]:
        return iter(self._scenarios.values())

    def __contains__(self, key: object) -> bool:
        return key in self._scenarios

    def keys(self) -> list[str]:
        return list(self._scenarios)

    def get(self, key: str) -> NamedScenario:
        """Return the scenario stored under ``key``.

        Raises:
            KeyError: If ``key`` is not in the book.
        """
        try:
            return self._scenarios[key]
        except KeyError:
            raise KeyError(
                f"Unknown scenario '{key}'; available: {self.keys()}"
            ) from None

    def update(self, key: str, **changes: Any) -> ScenarioAssumptions:
        """Replace the assumptions of ``key`` with a validated copy.

        Returns:
            The new ``ScenarioAssumptions``; the previous instance is
            left untouched.

        Raises:
            KeyError:                 If ``key`` is not in the book.
            pydantic.ValidationError: If a changed value is out of bounds.
        """
        current = self.get(key)
        updated = current.assumptions.with_updates(**changes)
        self._scenarios[key] = current.model_copy(update={"assumptions": updated})
        logger.debug("Scenario %s updated: %s", key, changes)
        return updated

    def evaluate(
        self,
        key:              str,
        baseline_revenue: float = DEFAULT_BASELINE_REVENUE,
        irr_settings:     IRRSettings | None = None,
    ) -> ScenarioResult:
        scenario = self.get(key)
        return evaluate_scenario(
            scenario.assumptions, baseline_revenue, name=scenario.name, irr_settings=irr_settings
        )

    def evaluate_all(
        self,
        baseline_revenue: float = DEFAULT_BASELINE_REVENUE,
        irr_settings:     IRRSettings | None = None,
    ) -> list[ScenarioResult]:
        """Evaluate every scenario in book order against the shared baseline."""
        return [self.evaluate(key, baseline_revenue, irr_settings) for key in self._scenarios]

    def comparison_rows(
        self,
        baseline_revenue: float = DEFAULT_BASELINE_REVENUE,
        irr_settings:     IRRSettings | None = None,
    ) -> list[dict[str, Any]]:
        """Metric-by-scenario rows: ``{"Metric": ..., <scenario name>: value, ...}``.

        Unavailable values (payback undefined, IRR not converged) are ``None``.
        """
        results = self.evaluate_all(baseline_revenue, irr_settings)
        rows: list[dict[str, Any]] = []
        for label, attr in COMPARISON_METRICS:
            row: dict[str, Any] = {"Metric": label}
            for result in results:
                value = getattr(result, attr)
                if attr == "irr" and not result.irr_converged:
                    value = None
                row[result.scenario_name] = value
            rows.append(row)
        return rows


def default_scenario_book() -> ScenarioBook:
    """Return a fresh book holding the three default scenarios."""
    return ScenarioBook(DEFAULT_SCENARIOS)
