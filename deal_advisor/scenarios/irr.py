"""
Internal rate of return (IRR) solvers.

NPV convention
--------------
    NPV(r) = -investment + sum(cash_flows[j] / (1 + r) ** (j + 1))
The investment is paid at t=0; cash flow ``j`` arrives at the end of year
``j + 1``.

Solvers
-------
bisection (default)
    Bracketed bisection over ``[lower_bound, upper_bound]`` (default
    -99% .. 1000%). Converges whenever NPV changes sign inside the bracket.
    If it does not (e.g. zero investment, or no positive cash flow), the
    bound with the smaller |NPV| is returned as the best estimate with
    ``converged=False``.

legacy
    Reproduces the fixed-step search of earlier releases:
    start at 10%, stop when |NPV| < 1000, otherwise
    ``rate -= NPV / 1_000_000``, at most 100 iterations. This is not a
    Newton step (no derivative) and frequently fails to converge for
    realistic inputs. Arithmetic blow-ups (rate hitting exactly -100%,
    float overflow) end the search with ``converged=False``.

Neither solver raises on non-convergence; callers inspect ``converged``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Literal, Sequence

from deal_advisor.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

IRRMethod = Literal["bisection", "legacy"]

LEGACY_GUESS = 0.10
LEGACY_MAX_ITERATIONS = 100
LEGACY_NPV_TOLERANCE = 1000.0
LEGACY_STEP_SCALE = 1_000_000.0


@dataclass(frozen=True)
class IRRSettings:
    """Solver selection and bisection parameters.

    ``max_iterations`` and ``tolerance`` (bracket half-width, as a rate)
    apply to bisection only; the legacy solver always uses its fixed
    constants.
    """

    method:         IRRMethod = "bisection"
    lower_bound:    float = -0.99
    upper_bound:    float = 10.0
    max_iterations: int = 200
    tolerance:      float = 1e-7


@dataclass(frozen=True)
class IRRResult:
    """Outcome of an IRR search.

    Attributes:
        rate:       Best estimate as a fraction (``0.15`` = 15%).
        converged:  ``False`` when ``rate`` is only a best effort.
        iterations: Iterations performed.
        method:     Solver that produced the estimate.
    """

    rate:       float
    converged:  bool
    iterations: int
    method:     IRRMethod

    @property
    def rate_pct(self) -> float:
        """Rate in percent, rounded to 2 decimals."""
        return round_half_up(self.rate * 100.0, 2)


def npv(rate: float, investment: float, cash_flows: Sequence[float]) -> float:
    """Net present value of ``cash_flows`` at ``rate`` net of ``investment``."""
    total = -investment
    for j, flow in enumerate(cash_flows):
        total += flow / (1.0 + rate) ** (j + 1)
    return total


def solve_irr_bisection(
    investment:     float,
    cash_flows:     Sequence[float],
    lower_bound:    float = -0.99,
    upper_bound:    float = 10.0,
    max_iterations: int = 200,
    tolerance:      float = 1e-7,
) -> IRRResult:
    """Find the IRR by bisection inside ``[lower_bound, upper_bound]``.

    Raises:
        ValueError: If the bracket is invalid (``lower_bound <= -1`` or
            ``upper_bound <= lower_bound``).
    """
    if lower_bound <= -1.0 or upper_bound <= lower_bound:
        raise ValueError(
            f"Invalid IRR bracket [{lower_bound}, {upper_bound}]; "
            "need -1 < lower_bound < upper_bound."
        )

    lo, hi = lower_bound, upper_bound
    f_lo = npv(lo, investment, cash_flows)
    f_hi = npv(hi, investment, cash_flows)

    if f_lo == 0.0:
        return IRRResult(lo, True, 0, "bisection")
    if f_hi == 0.0:
        return IRRResult(hi, True, 0, "bisection")
    if (f_lo < 0) == (f_hi < 0):
        best = lo if abs(f_lo) <= abs(f_hi) else hi
        logger.warning(
            "IRR not bracketed in [%.2f, %.2f] (NPV %.2f / %.2f); returning bound %.2f",
            lo, hi, f_lo, f_hi, best,
        )
        return IRRResult(best, False, 0, "bisection")

    for i in range(1, max_iterations + 1):
        mid = (lo + hi) / 2.0
        f_mid = npv(mid, investment, cash_flows)
        if f_mid == 0.0 or (hi - lo) / 2.0 < tolerance:
            return IRRResult(mid, True, i, "bisection")
        if (f_mid < 0) == (f_lo < 0):
            lo, f_lo = mid, f_mid
        else:
            hi = mid

    logger.warning("IRR bisection hit max_iterations=%d", max_iterations)
    return IRRResult((lo + hi) / 2.0, False, max_iterations, "bisection")


def solve_irr_legacy(
    investment:     float,
    cash_flows:     Sequence[float],
    max_iterations: int = LEGACY_MAX_ITERATIONS,
) -> IRRResult:
    """Fixed-step IRR search matching earlier releases."""
    rate = LEGACY_GUESS
    for i in range(max_iterations):
        try:
            value = npv(rate, investment, cash_flows)
        except (ZeroDivisionError, OverflowError):
            logger.warning("Legacy IRR search blew up at rate=%r after %d iterations", rate, i)
            return IRRResult(rate, False, i, "legacy")
        if not math.isfinite(value):
            logger.warning("Legacy IRR search produced non-finite NPV at rate=%r", rate)
            return IRRResult(rate, False, i, "legacy")
        if abs(value) < LEGACY_NPV_TOLERANCE:
            return IRRResult(rate, True, i, "legacy")
        next_rate = rate - value / LEGACY_STEP_SCALE
        if not math.isfinite(next_rate):
            logger.warning("Legacy IRR search diverged after %d iterations", i + 1)
            return IRRResult(rate, False, i + 1, "legacy")
        rate = next_rate

    logger.warning("Legacy IRR search did not converge in %d iterations", max_iterations)
    return IRRResult(rate, False, max_iterations, "legacy")


def solve_irr(
    investment: float,
    cash_flows: Sequence[float],
    settings:   IRRSettings | None = None,
) -> IRRResult:
    """Solve for IRR with the method named in ``settings`` (default bisection)."""
    settings = settings or IRRSettings()
    if settings.method == "legacy":
        return solve_irr_legacy(investment, cash_flows)
    if settings.method == "bisection":
        return solve_irr_bisection(
            investment,
            cash_flows,
            lower_bound=settings.lower_bound,
            upper_bound=settings.upper_bound,
            max_iterations=settings.max_iterations,
            tolerance=settings.tolerance,
        )
    raise ValueError(f"Unknown IRR method '{settings.method}'.")
