"""
Export helpers for spreadsheets and manual analysis.

All writers create missing parent directories and return the written
``Path``. They accept generic ``list[dict]`` data to stay decoupled from
specific result shapes.

CSV exports are flat (no nested values) so they open directly in Excel or
any CSV reader. The ``flatten_*_for_export()`` adapters convert result
models into such rows. Column order and number formatting are display
concerns; values are exported raw (no currency symbols, no thousands
separators).
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable

from deal_advisor.models.compatibility import CompatibilityResult, PartnershipAssessment
from deal_advisor.models.scenario import ScenarioResult, SensitivityDelta


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order. If None, the union of record keys in
                    first-seen order.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(dict.fromkeys(k for r in records for k in r))
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_compatibility_results_for_export(
    results: Iterable[CompatibilityResult],
) -> list[dict]:
    """One row per scored opportunity, in the given (ranked) order.

    Each row contains ``rank``, the opportunity identity fields,
    ``overall_score``, ``tier``, ``industry_bonus``, one ``dim_<name>``
    column per dimension (lower-cased, spaces to underscores), and the
    synergies / risks joined with ``"; "``.
    """
    rows: list[dict] = []
    for rank, result in enumerate(results, start=1):
        opp = result.opportunity
        row: dict = {
            "rank":           rank,
            "opportunity_id": opp.id,
            "name":           opp.name,
            "type":           opp.deal_type,
            "country":        opp.country,
            "industry":       opp.industry,
            "value":          opp.value,
            "risk_level":     opp.risk_level.value,
            "roi":            opp.roi,
            "overall_score":  result.overall_score,
            "tier":           result.tier.value,
            "industry_bonus": result.industry_bonus,
        }
        for dim in result.dimensions:
            row[_dimension_column(dim.name)] = dim.score
        row["synergies"] = "; ".join(result.synergies)
        row["risks"] = "; ".join(result.risks)
        rows.append(row)
    return rows


def flatten_scenario_results_for_export(results: Iterable[ScenarioResult]) -> list[dict]:
    """One row per scenario with every ScenarioResult field.

    ``irr`` is left empty when the solver did not converge; ``payback_period``
    is left empty when undefined.
    """
    rows: list[dict] = []
    for r in results:
        rows.append(
            {
                "scenario":          r.scenario_name or "",
                "year1_revenue":     r.year1_revenue,
                "year3_revenue":     r.year3_revenue,
                "year5_revenue":     r.year5_revenue,
                "year1_profit":      r.year1_profit,
                "year3_profit":      r.year3_profit,
                "year5_profit":      r.year5_profit,
                "cumulative_profit": r.cumulative_profit,
                "irr_pct":           r.irr if r.irr_converged else "",
                "irr_converged":     r.irr_converged,
                "payback_years":     "" if r.payback_period is None else r.payback_period,
                "risk_score":        r.risk_score,
                "verdict":           r.verdict.value,
            }
        )
    return rows


def flatten_sensitivity_for_export(deltas: Iterable[SensitivityDelta]) -> list[dict]:
    """One row per perturbed variable."""
    return [
        {
            "variable":        d.variable,
            "baseline_profit": round(d.baseline_profit, 2),
            "plus_delta":      round(d.plus_delta, 2),
            "minus_delta":     round(d.minus_delta, 2),
            "max_abs_delta":   round(d.max_abs_delta, 2),
        }
        for d in deltas
    ]


def flatten_partnership_for_export(assessment: PartnershipAssessment) -> list[dict]:
    """One row per dimension, with the overall score and verdict repeated."""
    return [
        {
            "dimension":     dim.name,
            "weight":        dim.weight,
            "score":         dim.score,
            "weighted":      round(dim.score * dim.weight / 100.0, 2),
            "green_flags":   "; ".join(dim.green_flags),
            "red_flags":     "; ".join(dim.red_flags),
            "overall_score": assessment.overall_score,
            "verdict":       assessment.verdict.value,
        }
        for dim in assessment.dimensions
    ]


def _dimension_column(name: str) -> str:
    return "dim_" + "_".join(name.lower().split())
