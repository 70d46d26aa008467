"""
ASCII terminal formatters for CLI commands.

All formatters accept result models and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Unavailable values
------------------
A payback period of ``None`` (year-1 profit not positive) and an IRR whose
solver did not converge are both shown as ``N/A`` rather than as a number.
"""

from __future__ import annotations

from typing import Sequence

from deal_advisor.models.compatibility import CompatibilityResult, PartnershipAssessment
from deal_advisor.models.entity import EntityProfile
from deal_advisor.models.scenario import ScenarioResult, SensitivityDelta

NA = "N/A"


def format_currency(value: float) -> str:
    """``1234567.8`` -> ``"$1,234,568"``; negatives as ``"-$1,234"``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_irr(result: ScenarioResult) -> str:
    return f"{result.irr:.2f}%" if result.irr_converged else NA


def format_payback(result: ScenarioResult) -> str:
    return NA if result.payback_period is None else f"{result.payback_period:.1f} yrs"


# ── Deal recommendations ──────────────────────────────────────────────────────


def format_recommendation_table(
    results: Sequence[CompatibilityResult],
    entity:  EntityProfile,
    show_reasons: bool = True,
) -> str:
    """Format ranked compatibility results, best first.

    Layout::

        Rank  Opportunity                 Country         Score  Tier       Flags
        ----------------------------------------------------------------------
           1  Singapore FinTech Partner   Singapore          66  CONSIDER       0
                + Investment size well-suited to your capacity
                - Long timeline may impact liquidity
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Deal Recommendations ===")
    lines.append(f"  Entity:   {entity.name} ({entity.industry}, {entity.country})")
    lines.append(
        f"  Capacity: {format_currency(entity.investment_capacity)}  "
        f"Risk tolerance: {entity.risk_tolerance.value}"
    )

    if not results:
        lines.append("")
        lines.append("  (no opportunities to score)")
        return "\n".join(lines)

    lines.append("")
    header = (
        f"  {'Rank':>4}  {'Opportunity':<30}  {'Country':<15}  "
        f"{'Score':>5}  {'Tier':<10}  {'Flags':>5}"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, r in enumerate(results, start=1):
        opp = r.opportunity
        lines.append(
            f"  {rank:>4}  {opp.name[:30]:<30}  {opp.country[:15]:<15}  "
            f"{r.overall_score:>5}  {r.tier.label:<10}  {r.red_flag_count:>5}"
        )
        if show_reasons:
            for reason in r.synergies:
                lines.append(f"          + {reason}")
            for flag in r.risks:
                lines.append(f"          - {flag}")

    return "\n".join(lines)


# ── Scenarios ─────────────────────────────────────────────────────────────────


def format_scenario_comparison(
    results: Sequence[ScenarioResult],
    baseline_revenue: float,
) -> str:
    """Side-by-side metric table, one column per scenario."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Scenario Comparison ===")
    lines.append(f"  Baseline revenue: {format_currency(baseline_revenue)}")

    if not results:
        lines.append("")
        lines.append("  (no scenarios defined)")
        return "\n".join(lines)

    names = [(r.scenario_name or f"#{i + 1}")[:16] for i, r in enumerate(results)]
    metrics: list[tuple[str, list[str]]] = [
        ("Year 1 Revenue",    [format_currency(r.year1_revenue) for r in results]),
        ("Year 3 Revenue",    [format_currency(r.year3_revenue) for r in results]),
        ("Year 5 Revenue",    [format_currency(r.year5_revenue) for r in results]),
        ("Year 5 Profit",     [format_currency(r.year5_profit) for r in results]),
        ("Cumulative Profit", [format_currency(r.cumulative_profit) for r in results]),
        ("IRR",               [format_irr(r) for r in results]),
        ("Payback Period",    [format_payback(r) for r in results]),
        ("Risk Score",        [str(r.risk_score) for r in results]),
        ("Verdict",           [r.verdict.label for r in results]),
    ]

    lines.append("")
    header = f"  {'Metric':<18}" + "".join(f"  {n:>18}" for n in names)
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for label, values in metrics:
        lines.append(f"  {label:<18}" + "".join(f"  {v:>18}" for v in values))

    lines.append("")
    for r, name in zip(results, names):
        lines.append(f"  {name}: {r.verdict.label} -- {r.verdict.guidance}")

    return "\n".join(lines)


def format_sensitivity_table(
    deltas: Sequence[SensitivityDelta],
    scenario_name: str,
    step: float,
) -> str:
    """Format sensitivity deltas (caller decides the order)."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Sensitivity Analysis: {scenario_name} (±{step:.0%}) ===")

    if not deltas:
        lines.append("")
        lines.append("  (no variables analysed)")
        return "\n".join(lines)

    lines.append(f"  Baseline cumulative profit: {format_currency(deltas[0].baseline_profit)}")
    lines.append("")
    header = f"  {'Variable':<20}  {'+' + format(step, '.0%'):>16}  {'-' + format(step, '.0%'):>16}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for d in deltas:
        lines.append(
            f"  {d.variable:<20}  {_signed_currency(d.plus_delta):>16}  "
            f"{_signed_currency(d.minus_delta):>16}"
        )
    return "\n".join(lines)


# ── Partnership ───────────────────────────────────────────────────────────────


def format_partnership_assessment(assessment: PartnershipAssessment) -> str:
    """Dimension breakdown followed by synergies, risks and next steps."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Partnership Assessment ===")
    lines.append(
        f"  Overall score: {assessment.overall_score}/100  "
        f"Verdict: {assessment.verdict.label}"
    )
    lines.append("")
    header = f"  {'Dimension':<32}  {'Weight':>6}  {'Score':>6}  {'Weighted':>8}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for dim in assessment.dimensions:
        lines.append(
            f"  {dim.name[:32]:<32}  {dim.weight:>5.0f}%  {dim.score:>6.0f}  "
            f"{dim.score * dim.weight / 100.0:>8.1f}"
        )

    for title, items in (
        ("Synergies", assessment.synergies),
        ("Risks", assessment.risks),
        ("Next steps", assessment.next_steps),
    ):
        if items:
            lines.append("")
            lines.append(f"  {title}:")
            lines.extend(f"    - {item}" for item in items)

    return "\n".join(lines)


def _signed_currency(value: float) -> str:
    return ("+" if value >= 0 else "") + format_currency(value)
