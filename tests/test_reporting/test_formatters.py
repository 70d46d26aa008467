"""Tests for deal_advisor.reporting.formatters."""

from __future__ import annotations

import pytest

from deal_advisor.compatibility.assessment import assess_partnership
from deal_advisor.compatibility.ranker import score_opportunities
from deal_advisor.ingestion.loaders import load_partnership_brief
from deal_advisor.models.scenario import SensitivityDelta
from deal_advisor.reporting.formatters import (
    NA,
    format_currency,
    format_irr,
    format_partnership_assessment,
    format_payback,
    format_recommendation_table,
    format_scenario_comparison,
    format_sensitivity_table,
)
from deal_advisor.scenarios.irr import IRRSettings
from deal_advisor.scenarios.portfolio import default_scenario_book
from deal_advisor.scenarios.projector import evaluate_scenario


# ── Scalar helpers ────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "value, expected",
    [
        (1_234_567.8, "$1,234,568"),
        (0, "$0"),
        (-1_234, "-$1,234"),
    ],
)
def test_format_currency(value, expected) -> None:
    assert format_currency(value) == expected


def test_format_irr_and_payback(realistic) -> None:
    result = evaluate_scenario(realistic, 10_000_000)
    assert format_irr(result).endswith("%")
    assert format_payback(result) == "1.2 yrs"


def test_unavailable_values_shown_as_na(realistic) -> None:
    flat = realistic.with_updates(operating_margin=0.0)
    result = evaluate_scenario(flat, 10_000_000)
    assert format_irr(result) == NA
    assert format_payback(result) == NA


# ── format_recommendation_table ───────────────────────────────────────────────


def test_recommendation_table(entity, seed_opportunities, seed_by_id) -> None:
    results = score_opportunities(entity, seed_opportunities)
    out = format_recommendation_table(results, entity)
    assert "=== Deal Recommendations ===" in out
    assert "Your Corporation" in out
    assert "$10,000,000" in out
    # best deal listed first
    first_row = next(line for line in out.splitlines() if line.strip().startswith("1 "))
    assert seed_by_id["d5"].name[:30] in first_row


def test_recommendation_table_reasons_toggle(entity, make_opportunity) -> None:
    opp = make_opportunity(timeline="24-36 months")
    results = score_opportunities(entity, [opp])
    with_reasons = format_recommendation_table(results, entity, show_reasons=True)
    without = format_recommendation_table(results, entity, show_reasons=False)
    assert "- Long timeline" in with_reasons
    assert "- Long timeline" not in without


def test_recommendation_table_empty(entity) -> None:
    out = format_recommendation_table([], entity)
    assert "(no opportunities to score)" in out


# ── format_scenario_comparison ────────────────────────────────────────────────


def test_scenario_comparison() -> None:
    results = default_scenario_book().evaluate_all(10_000_000)
    out = format_scenario_comparison(results, 10_000_000)
    assert "=== Scenario Comparison ===" in out
    assert "Baseline revenue: $10,000,000" in out
    for name in ("Best Case", "Realistic", "Worst Case"):
        assert name in out
    assert "$21,496,484" in out
    assert results[1].verdict.guidance in out


def test_scenario_comparison_not_converged_irr() -> None:
    results = default_scenario_book().evaluate_all(
        10_000_000, IRRSettings(lower_bound=0.0, upper_bound=0.5)
    )
    out = format_scenario_comparison(results, 10_000_000)
    irr_line = next(line for line in out.splitlines() if line.strip().startswith("IRR"))
    assert irr_line.count(NA) == 3


def test_scenario_comparison_empty() -> None:
    assert "(no scenarios defined)" in format_scenario_comparison([], 10_000_000)


# ── format_sensitivity_table ──────────────────────────────────────────────────


def test_sensitivity_table() -> None:
    deltas = [
        SensitivityDelta(
            variable="capital_investment",
            baseline_profit=21_496_484.375,
            plus_delta=-300_000.0,
            minus_delta=300_000.0,
        )
    ]
    out = format_sensitivity_table(deltas, "Realistic", 0.10)
    assert "=== Sensitivity Analysis: Realistic (±10%) ===" in out
    assert "Baseline cumulative profit: $21,496,484" in out
    assert "-$300,000" in out
    assert "+$300,000" in out


def test_sensitivity_table_empty() -> None:
    out = format_sensitivity_table([], "Realistic", 0.10)
    assert "(no variables analysed)" in out


# ── format_partnership_assessment ─────────────────────────────────────────────


def test_partnership_assessment(seeds_dir) -> None:
    brief = load_partnership_brief(seeds_dir / "partnership_dimensions.json")
    assessment = assess_partnership(brief.dimensions, brief.synergies, brief.risks, brief.next_steps)
    out = format_partnership_assessment(assessment)
    assert "Overall score: 82/100  Verdict: STRONG GO" in out
    assert "Legal & Regulatory" in out
    assert "  Synergies:" in out
    assert "    - Draft MOU with key terms" in out


def test_partnership_assessment_omits_empty_sections(seeds_dir) -> None:
    brief = load_partnership_brief(seeds_dir / "partnership_dimensions.json")
    assessment = assess_partnership(brief.dimensions)
    out = format_partnership_assessment(assessment)
    assert "Synergies:" not in out
    assert "Next steps:" not in out
    # risks fall back to the dimension red flags
    assert "    - Different communication styles" in out
