"""sharper.distributions.lambdap

The lambda-prime distribution.

For an observed t-statistic ``t`` with ``df`` degrees of freedom,

    lambda' = Z + t * sqrt(V / df),    Z ~ N(0, 1), V ~ chi2(df)

is the confidence distribution of the t non-centrality parameter:

    P(lambda' <= q) = P(nct(df, q) > t).

Its quantiles are therefore confidence bounds on the non-centrality, which is
how the "exact" Sharpe ratio interval is built.

References
----------
Lecoutre, B. "Two useful distributions for Bayesian predictive procedures
under normal models." Journal of Statistical Planning and Inference 79
(1999): 93-105.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np
from scipy import stats

from sharper.errors import DomainError
from sharper.inversion import check_probability, invert_cdf
from sharper.utils.config import SearchConfig
from sharper.utils.seed import SeedLike, as_generator

ArrayLike = Union[float, np.ndarray]

__all__ = ["plambdap", "qlambdap", "rlambdap"]


def _check_df(df: float) -> None:
    if not df > 0:
        raise DomainError(f"df must be positive, got {df!r}")


def plambdap(q: ArrayLike, df: float, tstat: float, *, lower_tail: bool = True) -> ArrayLike:
    """CDF of lambda-prime; non-decreasing in ``q``."""

    _check_df(df)
    qq = np.asarray(q, dtype=float)
    out = stats.nct.sf(tstat, df, qq) if lower_tail else stats.nct.cdf(tstat, df, qq)
    if np.ndim(q) == 0:
        return float(np.asarray(out).item())
    return out


def _qlambdap_single(p: float, df: float, tstat: float, lower_tail: bool, search: Optional[SearchConfig]) -> float:
    p = check_probability(p)
    # P(lambda' <= q) = 1 - nct.cdf(t; df, q), and nct.cdf(t; df, q) is
    # non-increasing in q: solve nct.cdf(t; df, q) = 1 - p.
    target = 1.0 - p if lower_tail else p
    spread = 4.0 * float(np.sqrt(1.0 + tstat * tstat / (2.0 * df)))
    return invert_cdf(
        target,
        lambda q: stats.nct.cdf(tstat, df, q),
        tstat - spread,
        tstat + spread,
        search=search,
    )


def qlambdap(
    p: ArrayLike,
    df: float,
    tstat: float,
    *,
    lower_tail: bool = True,
    search: Optional[SearchConfig] = None,
) -> ArrayLike:
    """Quantile of lambda-prime, by inversion of the non-central t CDF in its
    non-centrality parameter."""

    _check_df(df)
    tstat = float(tstat)
    if np.ndim(p) == 0:
        return _qlambdap_single(float(p), df, tstat, lower_tail, search)
    pp = np.asarray(p, dtype=float)
    out = np.array([_qlambdap_single(float(x), df, tstat, lower_tail, search) for x in pp.ravel()])
    return out.reshape(pp.shape)


def rlambdap(n: int, df: float, tstat: float, *, rng: SeedLike = None) -> np.ndarray:
    """Draw ``n`` lambda-prime variates."""

    _check_df(df)
    gen = as_generator(rng)
    z = gen.standard_normal(int(n))
    v = gen.chisquare(df, int(n))
    return z + float(tstat) * np.sqrt(v / df)
