"""sharper.distributions.rescaled_t

Rescaled non-central t distribution.

A Sharpe ratio is a rescaled t-statistic. If ``T`` follows a non-central t
with ``df`` degrees of freedom and non-centrality ``rho / K``, then

    Z = K * T

has density ``f_T(z/K; df, rho/K) / K`` and CDF ``F_T(z/K; df, rho/K)``. For
the Sharpe ratio of ``n`` i.i.d. normal returns quoted per sqrt epoch,
``df = n - 1``, ``K = sqrt(ope / n)`` and ``rho`` is the annualized
signal-noise ratio.

Functions follow the d/p/q/r naming convention and broadcast over their
vector arguments; scalar inputs return a float.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from scipy import stats

from sharper.errors import DomainError
from sharper.utils.seed import SeedLike, as_generator

ArrayLike = Union[float, np.ndarray]

__all__ = [
    "LambdaPrimeParams",
    "drt",
    "prt",
    "qrt",
    "rrt",
    "sr_rescale",
    "dsr",
    "psr",
    "qsr",
    "rsr",
]


@dataclass(frozen=True)
class LambdaPrimeParams:
    """Parameters of the rescaled non-central t."""

    df: float
    K: float
    rho: float = 0.0

    def __post_init__(self) -> None:
        _check_params(self.df, self.K, self.rho)

    @property
    def ncp(self) -> float:
        return float(self.rho) / float(self.K)


def _check_params(df, K, rho) -> np.ndarray:
    if not np.all(np.asarray(df, dtype=float) > 0):
        raise DomainError(f"df must be positive, got {df!r}")
    K_arr = np.asarray(K, dtype=float)
    if not np.all(np.isfinite(K_arr)) or not np.all(K_arr > 0):
        raise DomainError(f"K must be positive and finite, got {K!r}")
    ncp = np.asarray(rho, dtype=float) / K_arr
    if not np.all(np.isfinite(ncp)):
        raise DomainError(f"rho/K must be finite, got rho={rho!r}, K={K!r}")
    return ncp


def _scalar_or_array(out: np.ndarray, *inputs) -> ArrayLike:
    if all(np.ndim(x) == 0 for x in inputs):
        return float(np.asarray(out).item())
    return out


def drt(z: ArrayLike, df: float, K: float, rho: ArrayLike = 0.0) -> ArrayLike:
    """Density of ``Z = K * T``."""

    ncp = _check_params(df, K, rho)
    zz = np.asarray(z, dtype=float)
    out = stats.nct.pdf(zz / K, df, ncp) / K
    return _scalar_or_array(out, z, rho)


def prt(z: ArrayLike, df: float, K: float, rho: ArrayLike = 0.0, *, lower_tail: bool = True) -> ArrayLike:
    """CDF of ``Z = K * T`` (or the upper tail).

    For fixed ``z`` the lower-tail CDF is non-increasing in ``rho``.
    """

    ncp = _check_params(df, K, rho)
    zz = np.asarray(z, dtype=float) / K
    out = stats.nct.cdf(zz, df, ncp) if lower_tail else stats.nct.sf(zz, df, ncp)
    return _scalar_or_array(out, z, rho)


def qrt(p: ArrayLike, df: float, K: float, rho: ArrayLike = 0.0, *, lower_tail: bool = True) -> ArrayLike:
    """Quantile of ``Z = K * T``, via the non-central t quantile."""

    ncp = _check_params(df, K, rho)
    pp = np.asarray(p, dtype=float)
    if np.any((pp < 0) | (pp > 1)):
        raise DomainError(f"probabilities must be in [0,1], got {p!r}")
    out = stats.nct.ppf(pp, df, ncp) if lower_tail else stats.nct.isf(pp, df, ncp)
    return _scalar_or_array(K * out, p, rho)


def rrt(
    n: int,
    df: float,
    K: float,
    rho: ArrayLike = 0.0,
    *,
    rng: SeedLike = None,
) -> np.ndarray:
    """Draw ``n`` independent variates of ``Z = K * T``."""

    if int(n) < 0:
        raise DomainError(f"n must be non-negative, got {n!r}")
    ncp = _check_params(df, K, rho)
    gen = as_generator(rng)
    t = stats.nct.rvs(df, ncp, size=int(n), random_state=gen)
    return K * np.asarray(t, dtype=float)


# ---------------------------------------------------------------------------
# Sharpe ratio parametrisation
# ---------------------------------------------------------------------------


def sr_rescale(df: float, ope: float = 1.0) -> float:
    """``K`` for the Sharpe ratio of ``df + 1`` observations quoted per sqrt epoch."""

    if df <= 0:
        raise DomainError(f"df must be positive, got {df!r}")
    if ope <= 0:
        raise DomainError(f"ope must be positive, got {ope!r}")
    return float(np.sqrt(ope / (df + 1.0)))


def dsr(x: ArrayLike, df: float, zeta: ArrayLike = 0.0, ope: float = 1.0) -> ArrayLike:
    """Density of the Sharpe ratio given annualized signal-noise ratio ``zeta``."""

    return drt(x, df, sr_rescale(df, ope), zeta)


def psr(
    q: ArrayLike, df: float, zeta: ArrayLike = 0.0, ope: float = 1.0, *, lower_tail: bool = True
) -> ArrayLike:
    return prt(q, df, sr_rescale(df, ope), zeta, lower_tail=lower_tail)


def qsr(
    p: ArrayLike, df: float, zeta: ArrayLike = 0.0, ope: float = 1.0, *, lower_tail: bool = True
) -> ArrayLike:
    return qrt(p, df, sr_rescale(df, ope), zeta, lower_tail=lower_tail)


def rsr(n: int, df: float, zeta: float = 0.0, ope: float = 1.0, *, rng: Optional[SeedLike] = None) -> np.ndarray:
    return rrt(n, df, sr_rescale(df, ope), zeta, rng=rng)
