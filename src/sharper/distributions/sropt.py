"""sharper.distributions.sropt

Distribution of the maximal (optimal-portfolio) Sharpe ratio.

With ``df2`` observations on ``df1`` assets, the sample Markowitz portfolio has
Sharpe ratio

    z* = annualize(sqrt(T2 / df2), ope) - drag

where ``T2`` is Hotelling's statistic with non-centrality
``delta2 = df2 * deannualize(zeta_s, ope)^2`` and ``zeta_s`` is the population
maximal signal-noise ratio, quoted per sqrt epoch.

:func:`qco_sropt` inverts the CDF in ``zeta_s`` ("confidence quantile"), and
:func:`sropt_confint` builds a confidence interval from two such inversions.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from sharper.distributions.hotelling import check_hotelling_df, dT2, pT2, qT2, rT2
from sharper.errors import DomainError
from sharper.inversion import ConfidenceInterval, check_probability, invert_cdf, resolve_levels
from sharper.units import annualize, deannualize
from sharper.utils.config import SearchConfig
from sharper.utils.seed import SeedLike

ArrayLike = Union[float, np.ndarray]

__all__ = [
    "sropt_ncp",
    "dsropt",
    "psropt",
    "qsropt",
    "rsropt",
    "qco_sropt",
    "sropt_confint",
]


def sropt_ncp(zeta_s: ArrayLike, df2: int, ope: float = 1.0) -> ArrayLike:
    """Hotelling non-centrality of a population maximal SNR ``zeta_s``."""

    z = np.asarray(zeta_s, dtype=float)
    if np.any(z < 0):
        raise DomainError(f"zeta_s must be non-negative, got {zeta_s!r}")
    out = df2 * np.square(np.asarray(deannualize(z, ope), dtype=float))
    if np.ndim(zeta_s) == 0:
        return float(out)
    return out


def _to_T2(x: ArrayLike, df2: int, ope: float, drag: float) -> Tuple[np.ndarray, np.ndarray]:
    zs = np.asarray(deannualize(np.asarray(x, dtype=float) + drag, ope), dtype=float)
    return zs, df2 * np.square(zs)


def _shape(out, *inputs) -> ArrayLike:
    if all(np.ndim(x) == 0 for x in inputs):
        return float(np.asarray(out).item())
    return out


def dsropt(x: ArrayLike, df1: int, df2: int, zeta_s: ArrayLike = 0.0, ope: float = 1.0, drag: float = 0.0) -> ArrayLike:
    check_hotelling_df(df1, df2)
    zs, T2 = _to_T2(x, df2, ope, drag)
    delta2 = sropt_ncp(zeta_s, df2, ope)
    # dT2/dx = 2 * df2 * zs / sqrt(ope)
    jac = 2.0 * df2 * zs / np.sqrt(ope)
    dens = np.asarray(dT2(T2, df1, df2, delta2), dtype=float) * jac
    out = np.where(zs >= 0, dens, 0.0)
    return _shape(out, x, zeta_s)


def psropt(
    q: ArrayLike,
    df1: int,
    df2: int,
    zeta_s: ArrayLike = 0.0,
    ope: float = 1.0,
    drag: float = 0.0,
    *,
    lower_tail: bool = True,
) -> ArrayLike:
    """CDF of the maximal Sharpe ratio; non-increasing in ``zeta_s``."""

    check_hotelling_df(df1, df2)
    zs, T2 = _to_T2(q, df2, ope, drag)
    delta2 = sropt_ncp(zeta_s, df2, ope)
    p = np.asarray(pT2(T2, df1, df2, delta2, lower_tail=lower_tail), dtype=float)
    # Below zero (after drag) there is no mass.
    below = 0.0 if lower_tail else 1.0
    out = np.where(zs >= 0, p, below)
    return _shape(out, q, zeta_s)


def qsropt(
    p: ArrayLike,
    df1: int,
    df2: int,
    zeta_s: ArrayLike = 0.0,
    ope: float = 1.0,
    drag: float = 0.0,
    *,
    lower_tail: bool = True,
) -> ArrayLike:
    check_hotelling_df(df1, df2)
    delta2 = sropt_ncp(zeta_s, df2, ope)
    T2 = np.asarray(qT2(p, df1, df2, delta2, lower_tail=lower_tail), dtype=float)
    out = np.asarray(annualize(np.sqrt(np.maximum(T2, 0.0) / df2), ope), dtype=float) - drag
    return _shape(out, p, zeta_s)


def rsropt(
    n: int,
    df1: int,
    df2: int,
    zeta_s: float = 0.0,
    ope: float = 1.0,
    drag: float = 0.0,
    *,
    rng: SeedLike = None,
) -> np.ndarray:
    delta2 = sropt_ncp(zeta_s, df2, ope)
    T2 = rT2(n, df1, df2, delta2, rng=rng)
    return np.asarray(annualize(np.sqrt(np.maximum(T2, 0.0) / df2), ope), dtype=float) - drag


def qco_sropt(
    p: float,
    df1: int,
    df2: int,
    z_s: float,
    ope: float = 1.0,
    drag: float = 0.0,
    *,
    lower_tail: bool = True,
    ub: Optional[float] = None,
    search: Optional[SearchConfig] = None,
) -> float:
    """Confidence quantile of the population maximal SNR.

    Finds ``zeta_s >= 0`` with ``P(z* > z_s | zeta_s) = p`` (``lower_tail``)
    or ``P(z* <= z_s | zeta_s) = p`` otherwise. When the equation has no
    non-negative solution the result is 0. ``ub`` seeds the upper end of the
    search; when omitted it is found by doubling.
    """

    check_hotelling_df(df1, df2)
    p = check_probability(p)
    target = 1.0 - p if lower_tail else p

    def cdf(zeta: float) -> float:
        return float(psropt(z_s, df1, df2, max(zeta, 0.0), ope, drag, lower_tail=True))

    if ub is None:
        # One standard error of sqrt(T2/df2) under the null is about 1/sqrt(df2).
        scale = float(annualize(1.0 / np.sqrt(df2), ope))
        upper = max(float(z_s) + float(drag), 0.0) + 4.0 * scale
    else:
        upper = max(float(ub), 0.0)
    return invert_cdf(target, cdf, 0.0, upper, floor=0.0, search=search)


def sropt_confint(
    z_s: float,
    df1: int,
    df2: int,
    level: float = 0.95,
    ope: float = 1.0,
    drag: float = 0.0,
    *,
    level_lo: Optional[float] = None,
    level_hi: Optional[float] = None,
    search: Optional[SearchConfig] = None,
) -> ConfidenceInterval:
    """Confidence interval on the population maximal SNR.

    The upper bound is found first and seeds the search for the lower bound,
    which lies in ``[0, upper]``. Both bounds are then quoted net of ``drag``,
    like the statistic itself.
    """

    lo_p, hi_p = resolve_levels(level, level_lo, level_hi)
    upper = qco_sropt(hi_p, df1, df2, z_s, ope, drag, lower_tail=True, search=search)
    lower = qco_sropt(lo_p, df1, df2, z_s, ope, drag, lower_tail=True, ub=upper, search=search)
    return ConfidenceInterval(lower=lower - drag, upper=upper - drag, level_lo=lo_p, level_hi=hi_p)
