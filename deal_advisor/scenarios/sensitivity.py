"""
Sensitivity analysis: how much does cumulative profit move when one
assumption is scaled up or down by ``step`` (default 10%)?

For each variable in ``variables``:
    plus  = cumulative_profit(variable * (1 + step)) - baseline
    minus = cumulative_profit(variable * (1 - step)) - baseline

Deltas are raw currency amounts computed from unrounded projections.
Perturbed values are evaluated through ``project_figures`` directly, so a
scaled-up assumption may lie outside the interactive slider bounds (e.g.
growth 0.6 * 1.1 = 0.66). Display normalisation (bar widths etc.) is left
to the caller; ``rank_sensitivities`` gives the display order.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from deal_advisor.models.scenario import ScenarioAssumptions, SensitivityDelta
from deal_advisor.scenarios.projector import project_figures

SENSITIVITY_VARIABLES: tuple[str, ...] = (
    "revenue_growth",
    "operating_margin",
    "capital_investment",
)

DEFAULT_STEP = 0.10


def _cumulative_profit(values: dict[str, float], baseline_revenue: float) -> float:
    return project_figures(
        baseline_revenue,
        values["revenue_growth"],
        values["operating_margin"],
        values["capital_investment"],
    ).cumulative_profit


def analyze_sensitivity(
    assumptions:      ScenarioAssumptions,
    baseline_revenue: float,
    step:             float = DEFAULT_STEP,
    variables:        Sequence[str] = SENSITIVITY_VARIABLES,
) -> list[SensitivityDelta]:
    """Compute ±``step`` cumulative-profit deltas for each variable.

    Args:
        assumptions:      Reference scenario; not modified.
        baseline_revenue: Shared baseline revenue.
        step:             Relative perturbation, strictly between 0 and 1.
        variables:        Assumption names to perturb, in output order.

    Returns:
        One ``SensitivityDelta`` per variable, in ``variables`` order.

    Raises:
        ValueError: If ``step`` is out of range or a variable is unknown.
    """
    if not 0.0 < step < 1.0:
        raise ValueError(f"step must be in (0, 1), got {step}.")
    unknown = [v for v in variables if v not in SENSITIVITY_VARIABLES]
    if unknown:
        raise ValueError(
            f"Unknown sensitivity variable(s) {unknown}; "
            f"expected one of {list(SENSITIVITY_VARIABLES)}."
        )

    base_values = {name: float(getattr(assumptions, name)) for name in SENSITIVITY_VARIABLES}
    baseline = _cumulative_profit(base_values, baseline_revenue)

    deltas: list[SensitivityDelta] = []
    for variable in variables:
        up = {**base_values, variable: base_values[variable] * (1.0 + step)}
        down = {**base_values, variable: base_values[variable] * (1.0 - step)}
        deltas.append(
            SensitivityDelta(
                variable=variable,
                baseline_profit=baseline,
                plus_delta=_cumulative_profit(up, baseline_revenue) - baseline,
                minus_delta=_cumulative_profit(down, baseline_revenue) - baseline,
            )
        )
    return deltas


def rank_sensitivities(deltas: Iterable[SensitivityDelta]) -> list[SensitivityDelta]:
    """Order deltas by largest absolute swing first (stable on ties)."""
    return sorted(deltas, key=lambda d: -d.max_abs_delta)
