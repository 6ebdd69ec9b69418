"""sharper.inversion

Confidence-curve inversion.

Given a CDF-like function ``eval_cdf(rho)`` that is monotone non-increasing in
a non-centrality parameter ``rho``, find the ``rho`` at which it equals a target
probability. Raising the non-centrality moves mass to the right, so the
probability of falling below a fixed observed statistic drops; this is what
makes confidence bounds on the non-centrality well defined.

The search runs in two bounded phases:

1. Bracket: the upper end is pushed right (step doubling each time) until
   ``eval_cdf(upper) < target``; unless a ``floor`` is given, the lower end is
   pushed left until ``eval_cdf(lower) > target``.
2. Solve: :func:`scipy.optimize.brentq` on the bracket.

With a ``floor`` (e.g. zero for a maximal Sharpe ratio, whose non-centrality is
non-negative) a root below the floor is reported as the floor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from scipy import optimize

from sharper.errors import ConvergenceError, InvalidArgumentError
from sharper.utils.config import DEFAULT_SEARCH, SearchConfig
from sharper.utils.log import get_logger

logger = get_logger(__name__)

__all__ = [
    "ConfidenceInterval",
    "check_probability",
    "resolve_levels",
    "expand_bracket",
    "invert_cdf",
]


@dataclass(frozen=True)
class ConfidenceInterval:
    """Bounds with the tail probabilities they were computed at."""

    lower: float
    upper: float
    level_lo: float
    level_hi: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lower, self.upper)

    def labels(self) -> Tuple[str, str]:
        return (f"{100 * self.level_lo:g} %", f"{100 * self.level_hi:g} %")

    def contains(self, x: float) -> bool:
        return self.lower <= x <= self.upper


def check_probability(p: float, name: str = "p") -> float:
    p = float(p)
    if not (0.0 < p < 1.0):
        raise InvalidArgumentError(f"{name} must be in (0,1), got {p!r}")
    return p


def resolve_levels(
    level: float = 0.95,
    level_lo: Optional[float] = None,
    level_hi: Optional[float] = None,
) -> Tuple[float, float]:
    """Lower/upper tail probabilities; symmetric around ``level`` by default."""

    level = check_probability(level, "level")
    lo = (1.0 - level) / 2.0 if level_lo is None else check_probability(level_lo, "level_lo")
    hi = 1.0 - lo if level_hi is None else check_probability(level_hi, "level_hi")
    if lo >= hi:
        raise InvalidArgumentError(f"need level_lo < level_hi, got {lo!r} >= {hi!r}")
    return lo, hi


def _evaluate(fn: Callable[[float], float], x: float) -> float:
    v = float(fn(x))
    if np.isnan(v):
        raise ConvergenceError(f"CDF evaluated to NaN at rho={x!r}")
    return v


def expand_bracket(
    f: Callable[[float], float],
    lower: float,
    upper: float,
    *,
    floor: Optional[float] = None,
    search: SearchConfig = DEFAULT_SEARCH,
) -> Tuple[float, float, float, float]:
    """Grow ``[lower, upper]`` until the decreasing ``f`` changes sign.

    Returns ``(lower, upper, f(lower), f(upper))`` with ``f(lower) >= 0`` and
    ``f(upper) <= 0``. When ``floor`` is set, ``lower`` is the floor and
    ``f(lower)`` may be negative (the caller clamps).
    """

    if floor is not None:
        lower = float(floor)
        upper = max(float(upper), lower)
    if upper <= lower:
        upper = lower + 1.0

    step = max(upper - lower, 1.0)
    f_hi = _evaluate(f, upper)
    n = 0
    while f_hi > 0.0:
        n += 1
        if n > search.max_doublings:
            raise ConvergenceError(
                f"upper bracket expansion exceeded {search.max_doublings} doublings (upper={upper!r})"
            )
        lower_cand = upper
        upper = upper + step
        step *= 2.0
        f_hi = _evaluate(f, upper)
        if floor is None:
            # The previous upper end already has f > 0; it is a valid lower end.
            lower = lower_cand
    f_lo = _evaluate(f, lower)

    if floor is None:
        step = max(upper - lower, 1.0)
        n = 0
        while f_lo < 0.0:
            n += 1
            if n > search.max_doublings:
                raise ConvergenceError(
                    f"lower bracket expansion exceeded {search.max_doublings} doublings (lower={lower!r})"
                )
            upper, f_hi = lower, f_lo
            lower = lower - step
            step *= 2.0
            f_lo = _evaluate(f, lower)

    logger.debug("bracket", lower=lower, upper=upper, f_lower=f_lo, f_upper=f_hi)
    return lower, upper, f_lo, f_hi


def invert_cdf(
    target: float,
    eval_cdf: Callable[[float], float],
    lower: float,
    upper: float,
    *,
    floor: Optional[float] = None,
    search: Optional[SearchConfig] = None,
) -> float:
    """Solve ``eval_cdf(rho) == target`` for a non-increasing ``eval_cdf``.

    Parameters
    ----------
    target:
        Probability in (0, 1).
    eval_cdf:
        Monotone non-increasing function of the parameter.
    lower, upper:
        Initial bracket hints; both are expanded as needed.
    floor:
        Smallest admissible parameter value. Roots below it are clamped.
    search:
        Caps and tolerances; defaults to :class:`SearchConfig`.

    Returns
    -------
    float

    Raises
    ------
    InvalidArgumentError
        If ``target`` is outside (0, 1). Such a target is a bad argument, not
        a search that failed to converge.
    ConvergenceError
        If the bracket cannot be expanded within ``search.max_doublings`` or
        the root finder does not converge.
    """

    target = check_probability(target, "target")
    cfg = search or DEFAULT_SEARCH

    def f(rho: float) -> float:
        return eval_cdf(rho) - target

    lo, hi, f_lo, f_hi = expand_bracket(f, float(lower), float(upper), floor=floor, search=cfg)
    if floor is not None and f_lo <= 0.0:
        return float(floor)
    if f_hi == 0.0:
        return float(hi)
    if f_lo == 0.0:
        return float(lo)

    try:
        root, info = optimize.brentq(
            f, lo, hi, xtol=cfg.xtol, rtol=cfg.rtol, maxiter=cfg.maxiter, full_output=True, disp=False
        )
    except (RuntimeError, ValueError) as exc:
        raise ConvergenceError(f"root finding failed on [{lo!r}, {hi!r}] for target={target!r}: {exc}") from exc
    if not info.converged:
        raise ConvergenceError(
            f"root finding did not converge in {cfg.maxiter} iterations on [{lo!r}, {hi!r}] "
            f"for target={target!r}"
        )
    logger.debug("inverted", target=target, root=root, iterations=info.iterations)
    return float(root)
