"""sharper.stats.tstat

Standard errors and confidence intervals for the non-centrality parameter of
an observed t-statistic. The Sharpe ratio code converts to t units, calls into
this module and converts back.

Methods
-------
- ``"t"`` / ``"Lo"``: Johnson & Welch normal approximation,
  ``se = sqrt(1 + t^2 / (2 df))``.
- ``"exact"``: plug-in exact variance of the non-central t,
  ``df (1 + d^2) / (df - 2) - t^2`` with ``d = t / c_n``.

References
----------
Johnson, N. L., and Welch, B. L. "Applications of the non-central
t-distribution." Biometrika 31 (1940): 362-389.

Walck, C. "Hand-book on statistical distributions for experimentalists."
(1996), sections 33.3 and 33.5.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from scipy import special, stats

from sharper.distributions.lambdap import qlambdap
from sharper.errors import DomainError, InvalidArgumentError
from sharper.inversion import resolve_levels
from sharper.utils.config import SearchConfig

__all__ = ["t_bias", "t_se", "t_confint"]


def t_bias(df: float) -> float:
    """``c_n`` with ``E[t] = c_n * delta`` for a non-central t on ``df`` d.o.f."""

    if df <= 1:
        raise DomainError(f"the mean of a t variate needs df > 1, got {df!r}")
    # sqrt(df/2) * Gamma((df-1)/2) / Gamma(df/2), on the log scale for large df
    return float(np.sqrt(df / 2.0) * np.exp(special.gammaln((df - 1.0) / 2.0) - special.gammaln(df / 2.0)))


def _se_normal(tstat: float, df: float) -> float:
    return float(np.sqrt(1.0 + tstat**2 / (2.0 * df)))


def _se_exact(tstat: float, df: float) -> float:
    if df <= 2:
        raise DomainError(f"the variance of a t variate needs df > 2, got {df!r}")
    cn = t_bias(df)
    dn = tstat / cn
    var = (1.0 + dn**2) * (df / (df - 2.0)) - tstat**2
    return float(np.sqrt(max(var, 0.0)))


def t_se(tstat: float, df: float, method: str = "t") -> float:
    """Standard error of an observed t-statistic."""

    if df <= 0:
        raise DomainError(f"df must be positive, got {df!r}")
    if method in ("t", "Lo"):
        return _se_normal(tstat, df)
    if method == "exact":
        return _se_exact(tstat, df)
    raise InvalidArgumentError(f"unknown standard error method: {method!r}")


def t_confint(
    tstat: float,
    df: float,
    level: float = 0.95,
    method: str = "exact",
    *,
    level_lo: Optional[float] = None,
    level_hi: Optional[float] = None,
    search: Optional[SearchConfig] = None,
) -> Tuple[float, float]:
    """Confidence bounds on the non-centrality of an observed t-statistic.

    Returns ``(lower, upper)`` in t units.
    """

    lo_p, hi_p = resolve_levels(level, level_lo, level_hi)
    if df <= 0:
        raise DomainError(f"df must be positive, got {df!r}")

    if method == "exact":
        lower = qlambdap(lo_p, df, tstat, search=search)
        upper = qlambdap(hi_p, df, tstat, search=search)
        return float(lower), float(upper)

    zalp = stats.norm.ppf([lo_p, hi_p])
    if method == "t":
        se = t_se(tstat, df, "t")
        midp = tstat
    elif method == "Z":
        se = t_se(tstat, df, "t")
        midp = tstat * (1.0 - 1.0 / (4.0 * df))
    elif method == "F":
        se = t_se(tstat, df, "exact")
        midp = tstat / t_bias(df)
    else:
        raise InvalidArgumentError(f"unknown confidence interval method: {method!r}")
    ci = midp + zalp * se
    return float(ci[0]), float(ci[1])
