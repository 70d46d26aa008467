"""
deal-advisor — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate input files.
  4. Run the pure scoring / projection computation.
  5. Print an ASCII report to stdout (and optionally export it).

Install and run::

    pip install -e .
    deal-advisor --help
    deal-advisor validate-config
    deal-advisor score-deals --top 5
    deal-advisor project-scenarios --adjust realistic:revenue_growth=0.3
    deal-advisor sensitivity --scenario best_case --export data/outputs/sens.csv
    deal-advisor assess-partnership
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

app = typer.Typer(
    name="deal-advisor",
    help="Deal compatibility scoring and multi-scenario financial projections.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from deal_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config; ``debug = true`` forces DEBUG level."""
    from deal_advisor.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _fail(message: str) -> NoReturn:
    typer.echo(f"[ERROR] {message}", err=True)
    raise typer.Exit(code=1)


def _export(rows: list[dict], export_path: Optional[str]) -> None:
    """Write ``rows`` as JSON when the path ends in ``.json``, else CSV."""
    if not export_path:
        return
    from deal_advisor.reporting.export import export_to_csv, export_to_json

    path = Path(export_path)
    if path.suffix.lower() == ".json":
        export_to_json(rows, path)
    else:
        export_to_csv(rows, path)
    typer.echo(f"[OK] Exported {len(rows)} row(s) to {path}")


def _parse_adjustment(text: str) -> tuple[str, str, Any]:
    """``"realistic:revenue_growth=0.3"`` -> ``("realistic", "revenue_growth", 0.3)``."""
    key, sep, assignment = text.partition(":")
    field, eq, value = assignment.partition("=")
    if not sep or not eq or not key.strip() or not field.strip():
        raise ValueError(
            f"Invalid adjustment '{text}'; expected SCENARIO:FIELD=VALUE "
            "(e.g. realistic:revenue_growth=0.3)."
        )
    field = field.strip()
    if field == "risk_level":
        return key.strip(), field, value.strip()
    return key.strip(), field, float(value)


def _load_book(scenarios_file: Optional[str], config):
    from deal_advisor.ingestion.loaders import load_scenario_book
    from deal_advisor.scenarios.portfolio import default_scenario_book

    if scenarios_file:
        return load_scenario_book(Path(scenarios_file))
    default_path = Path(config.data.scenarios_file)
    if default_path.exists():
        return load_scenario_book(default_path)
    return default_scenario_book()


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Baseline revenue:   {config.scenarios.baseline_revenue:,.0f}")
    typer.echo(f"  IRR method:         {config.scenarios.irr_method}")
    typer.echo(
        f"  IRR bracket:        [{config.scenarios.irr_lower_bound}, "
        f"{config.scenarios.irr_upper_bound}]"
    )
    typer.echo(f"  Sensitivity step:   {config.scenarios.sensitivity_step:.0%}")
    typer.echo(f"  Reference scenario: {config.scenarios.reference_scenario}")
    typer.echo(f"  Top N deals:        {config.compatibility.top_n}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("score-deals")
def score_deals(
    entity_file: Optional[str] = typer.Option(
        None, "--entity", "-e",
        help="Entity profile JSON. Defaults to config.data.entity_profile_file.",
    ),
    opportunities_file: Optional[str] = typer.Option(
        None, "--opportunities", "-o",
        help="Opportunities file (.json or .csv). Defaults to config.data.opportunities_file.",
    ),
    top: Optional[int] = typer.Option(
        None, "--top",
        help="Show only the N best matches (default: config.compatibility.top_n; 0 = all).",
    ),
    export_path: Optional[str] = typer.Option(
        None, "--export",
        help="Write the full ranked list to CSV (or JSON for a .json path).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Score every opportunity against the entity profile and rank them.

    Tiers: STRONG GO (score >= 80, not high risk), GO (>= 70, no red flags),
    CONSIDER (>= 60, at most one red flag), otherwise PASS.
    """
    from deal_advisor.compatibility.ranker import group_by_tier, score_opportunities, top_n
    from deal_advisor.ingestion.loaders import load_entity_profile, load_opportunities
    from deal_advisor.reporting.export import flatten_compatibility_results_for_export
    from deal_advisor.reporting.formatters import format_recommendation_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        entity = load_entity_profile(Path(entity_file or config.data.entity_profile_file))
        opportunities = load_opportunities(
            Path(opportunities_file or config.data.opportunities_file)
        )
        n = config.compatibility.top_n if top is None else top
        ranked = score_opportunities(entity, opportunities)
        shown = top_n(ranked, n) if n > 0 else ranked
    except (FileNotFoundError, ValueError) as exc:
        _fail(str(exc))

    typer.echo(format_recommendation_table(shown, entity, config.compatibility.show_reasons))
    typer.echo("")
    counts = ", ".join(
        f"{tier.label}: {len(results)}" for tier, results in group_by_tier(ranked).items()
    )
    typer.echo(f"  Scored {len(ranked)} opportunities ({counts})")

    _export(flatten_compatibility_results_for_export(ranked), export_path)


@app.command("project-scenarios")
def project_scenarios(
    scenarios_file: Optional[str] = typer.Option(
        None, "--scenarios", "-s",
        help="Scenario book JSON. Defaults to config.data.scenarios_file, "
             "or the built-in Best/Realistic/Worst book.",
    ),
    baseline: Optional[float] = typer.Option(
        None, "--baseline",
        help="Baseline revenue shared by all scenarios (default: config).",
    ),
    irr_method: Optional[str] = typer.Option(
        None, "--irr-method",
        help="IRR solver: 'bisection' (default) or 'legacy'.",
    ),
    adjustments: Optional[list[str]] = typer.Option(
        None, "--adjust", "-a",
        help="Edit an assumption before projecting, e.g. realistic:revenue_growth=0.3. Repeatable.",
    ),
    export_path: Optional[str] = typer.Option(
        None, "--export",
        help="Write the metric-by-scenario comparison to CSV (or JSON).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Project every scenario over 5 years and compare IRR, payback and risk.

    An IRR that does not converge and an undefined payback period are shown
    as N/A.
    """
    from dataclasses import replace

    from deal_advisor.reporting.formatters import format_scenario_comparison

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    baseline_revenue = config.scenarios.baseline_revenue if baseline is None else baseline
    settings = config.scenarios.irr_settings()
    if irr_method:
        if irr_method not in ("bisection", "legacy"):
            _fail(f"Unknown IRR method '{irr_method}'; use 'bisection' or 'legacy'.")
        settings = replace(settings, method=irr_method)

    try:
        book = _load_book(scenarios_file, config)
        for adjustment in adjustments or []:
            key, field, value = _parse_adjustment(adjustment)
            book.update(key, **{field: value})
        results = book.evaluate_all(baseline_revenue, settings)
        rows = book.comparison_rows(baseline_revenue, settings) if export_path else []
    except (FileNotFoundError, ValueError, KeyError) as exc:
        _fail(str(exc))

    typer.echo(format_scenario_comparison(results, baseline_revenue))
    _export(rows, export_path)


@app.command("sensitivity")
def sensitivity(
    scenarios_file: Optional[str] = typer.Option(
        None, "--scenarios", "-s",
        help="Scenario book JSON (default: config / built-in book).",
    ),
    scenario_key: Optional[str] = typer.Option(
        None, "--scenario",
        help="Reference scenario key (default: config.scenarios.reference_scenario).",
    ),
    step: Optional[float] = typer.Option(
        None, "--step",
        help="Relative perturbation, e.g. 0.1 for ±10% (default: config).",
    ),
    baseline: Optional[float] = typer.Option(None, "--baseline", help="Baseline revenue."),
    export_path: Optional[str] = typer.Option(
        None, "--export",
        help="Write the deltas to CSV (or JSON).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Show how cumulative profit reacts to ±step changes in each assumption.

    Variables are listed by largest absolute swing first.
    """
    from deal_advisor.reporting.export import flatten_sensitivity_for_export
    from deal_advisor.reporting.formatters import format_sensitivity_table
    from deal_advisor.scenarios.sensitivity import analyze_sensitivity, rank_sensitivities

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    key = scenario_key or config.scenarios.reference_scenario
    step_value = config.scenarios.sensitivity_step if step is None else step
    baseline_revenue = config.scenarios.baseline_revenue if baseline is None else baseline

    try:
        scenario = _load_book(scenarios_file, config).get(key)
        deltas = rank_sensitivities(
            analyze_sensitivity(scenario.assumptions, baseline_revenue, step=step_value)
        )
    except (FileNotFoundError, ValueError, KeyError) as exc:
        _fail(str(exc))

    typer.echo(format_sensitivity_table(deltas, scenario.name, step_value))
    _export(flatten_sensitivity_for_export(deltas), export_path)


@app.command("assess-partnership")
def assess_partnership_cmd(
    input_file: Optional[str] = typer.Option(
        None, "--input", "-i",
        help="Partnership dimensions JSON. Defaults to config.data.partnership_file.",
    ),
    export_path: Optional[str] = typer.Option(
        None, "--export",
        help="Write the dimension breakdown to CSV (or JSON).",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Score a partner across weighted dimensions (weights must sum to 100).

    Verdicts: STRONG GO (>= 80), PROCEED WITH CAUTION (>= 65), HARD PASS.
    """
    from deal_advisor.compatibility.assessment import assess_partnership
    from deal_advisor.ingestion.loaders import load_partnership_brief
    from deal_advisor.reporting.export import flatten_partnership_for_export
    from deal_advisor.reporting.formatters import format_partnership_assessment

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        brief = load_partnership_brief(Path(input_file or config.data.partnership_file))
        assessment = assess_partnership(
            brief.dimensions,
            synergies=brief.synergies,
            risks=brief.risks,
            next_steps=brief.next_steps,
        )
    except (FileNotFoundError, ValueError) as exc:
        _fail(str(exc))

    typer.echo(format_partnership_assessment(assessment))
    _export(flatten_partnership_for_export(assessment), export_path)


if __name__ == "__main__":
    app()
