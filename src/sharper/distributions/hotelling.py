"""sharper.distributions.hotelling

Hotelling T2 distribution via its F relation.

For ``df2`` observations of a ``df1``-variate normal,

    F = T2 * (df2 - df1) / (df1 * (df2 - 1)) ~ F(df1, df2 - df1, delta2)

where the non-centrality ``delta2 = df2 * mu' Sigma^-1 mu``. The Hotelling
non-centrality and the F non-centrality coincide, so the same estimators serve
both (see :mod:`sharper.stats.ncp`).
"""

from __future__ import annotations

from typing import Union

import numpy as np
from scipy import stats

from sharper.errors import DomainError
from sharper.units import F_to_T2, T2_to_F
from sharper.utils.seed import SeedLike, as_generator

ArrayLike = Union[float, np.ndarray]

__all__ = ["check_hotelling_df", "dT2", "pT2", "qT2", "rT2"]


def check_hotelling_df(df1: int, df2: int) -> None:
    if df1 < 1:
        raise DomainError(f"df1 must be a positive integer, got {df1!r}")
    if df2 <= df1:
        raise DomainError(f"df2 must exceed df1, got df1={df1!r}, df2={df2!r}")


def _check_ncp(delta2) -> np.ndarray:
    d = np.asarray(delta2, dtype=float)
    if np.any(d < 0) or not np.all(np.isfinite(d)):
        raise DomainError(f"delta2 must be non-negative and finite, got {delta2!r}")
    return d


def _shape(out: np.ndarray, *inputs) -> ArrayLike:
    if all(np.ndim(x) == 0 for x in inputs):
        return float(np.asarray(out).item())
    return out


def _fscale(df1: int, df2: int) -> float:
    # F = T2 * scale
    return (df2 - df1) / (df1 * (df2 - 1.0))


def dT2(x: ArrayLike, df1: int, df2: int, delta2: ArrayLike = 0.0) -> ArrayLike:
    check_hotelling_df(df1, df2)
    d = _check_ncp(delta2)
    c = _fscale(df1, df2)
    xx = np.asarray(x, dtype=float)
    out = stats.ncf.pdf(xx * c, df1, df2 - df1, d) * c
    return _shape(out, x, delta2)


def pT2(x: ArrayLike, df1: int, df2: int, delta2: ArrayLike = 0.0, *, lower_tail: bool = True) -> ArrayLike:
    """CDF of Hotelling T2; for fixed ``x`` non-increasing in ``delta2``."""

    check_hotelling_df(df1, df2)
    d = _check_ncp(delta2)
    fx = np.asarray(T2_to_F(np.asarray(x, dtype=float), df1, df2), dtype=float)
    out = stats.ncf.cdf(fx, df1, df2 - df1, d) if lower_tail else stats.ncf.sf(fx, df1, df2 - df1, d)
    return _shape(out, x, delta2)


def qT2(p: ArrayLike, df1: int, df2: int, delta2: ArrayLike = 0.0, *, lower_tail: bool = True) -> ArrayLike:
    check_hotelling_df(df1, df2)
    d = _check_ncp(delta2)
    pp = np.asarray(p, dtype=float)
    if np.any((pp < 0) | (pp > 1)):
        raise DomainError(f"probabilities must be in [0,1], got {p!r}")
    fq = stats.ncf.ppf(pp, df1, df2 - df1, d) if lower_tail else stats.ncf.isf(pp, df1, df2 - df1, d)
    out = F_to_T2(np.asarray(fq, dtype=float), df1, df2)
    return _shape(out, p, delta2)


def rT2(n: int, df1: int, df2: int, delta2: ArrayLike = 0.0, *, rng: SeedLike = None) -> np.ndarray:
    check_hotelling_df(df1, df2)
    d = _check_ncp(delta2)
    gen = as_generator(rng)
    fs = stats.ncf.rvs(df1, df2 - df1, d, size=int(n), random_state=gen)
    return np.asarray(F_to_T2(np.asarray(fs, dtype=float), df1, df2), dtype=float)
