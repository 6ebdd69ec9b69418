"""sharper.stats.ncp

Point estimates of the non-centrality parameter of an F, Hotelling T2 or
maximal-Sharpe statistic.

Let ``Fs`` follow a non-central F with ``df1, df2`` degrees of freedom and
non-centrality ``delta2``. Three estimators are provided:

- ``unbiased``: ``Fs * (df2 - 2) * df1 / df2 - df1``. Unbiased, may be negative.
- ``MLE``: maximiser of the non-central F log-density over ``delta2 >= 0``.
  Zero whenever ``Fs <= 1`` (Spruill 1986, Thm 3.1).
- ``KRS``: the Kubokawa-Robert-Saleh shrinkage estimator, never negative.

A Hotelling T2 is an F up to scaling with the same non-centrality, and a
maximal Sharpe ratio is a Hotelling T2 up to a square root and rescaling, so
:func:`t2_inference` and :func:`sropt_inference` convert and delegate.

All estimators work elementwise over array inputs; there is no state shared
between elements.

References
----------
Kubokawa, T., C. P. Robert, and A. K. Saleh. "Estimation of noncentrality
parameters." Canadian Journal of Statistics 21, no. 1 (1993): 45-57.

Spruill, M. C. "Computation of the maximum likelihood estimate of a
noncentrality parameter." Journal of Multivariate Analysis 18, no. 2 (1986):
216-224.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Union

import numpy as np
from scipy import optimize, stats

from sharper.errors import ConvergenceError, DomainError, InvalidArgumentError
from sharper.units import T2_to_F, annualize, signed_sqrt, sropt_to_T2
from sharper.utils.config import DEFAULT_SEARCH, NCPType, SearchConfig
from sharper.utils.log import get_logger

logger = get_logger(__name__)

ArrayLike = Union[float, np.ndarray]

__all__ = [
    "NCPType",
    "f_ncp_unbiased",
    "f_ncp_mle",
    "f_ncp_krs",
    "f_inference",
    "t2_inference",
    "sropt_inference",
]


def _check_f_df(df1, df2) -> None:
    if np.any(np.asarray(df1, dtype=float) <= 0) or np.any(np.asarray(df2, dtype=float) <= 0):
        raise DomainError(f"F degrees of freedom must be positive, got df1={df1!r}, df2={df2!r}")


def _shape(out: np.ndarray, *inputs) -> ArrayLike:
    if all(np.ndim(x) == 0 for x in inputs):
        return float(np.asarray(out).item())
    return out


def f_ncp_unbiased(Fs: ArrayLike, df1: ArrayLike, df2: ArrayLike) -> ArrayLike:
    _check_f_df(df1, df2)
    F = np.asarray(Fs, dtype=float)
    d1 = np.asarray(df1, dtype=float)
    d2 = np.asarray(df2, dtype=float)
    out = F * (d2 - 2.0) * d1 / d2 - d1
    return _shape(out, Fs, df1, df2)


def f_ncp_krs(Fs: ArrayLike, df1: ArrayLike, df2: ArrayLike) -> ArrayLike:
    _check_f_df(df1, df2)
    F = np.asarray(Fs, dtype=float)
    d1 = np.asarray(df1, dtype=float)
    d2 = np.asarray(df2, dtype=float)
    xbs = F * (d1 / d2)
    delta0 = (d2 - 2.0) * xbs - d1
    phi2 = 2.0 * xbs * (d2 - 2.0) / (d1 + 2.0)
    out = np.maximum(delta0, phi2)
    return _shape(out, Fs, df1, df2)


def _f_ncp_mle_single(
    Fs: float,
    df1: float,
    df2: float,
    search: SearchConfig,
    ub: Optional[float] = None,
    lb: float = 0.0,
) -> float:
    if not np.isfinite(Fs):
        raise DomainError(f"F statistic must be finite, got {Fs!r}")
    if Fs <= 1.0:
        return 0.0

    def loglik(z: float) -> float:
        return float(stats.ncf.logpdf(Fs, df1, df2, z))

    if ub is None:
        # start near the moment estimate; the density underflows far from it
        ub = max(1.0, float(f_ncp_unbiased(Fs, df1, df2)))
        cur = loglik(ub)
        if not np.isfinite(cur):
            raise ConvergenceError(
                f"MLE log-likelihood is not finite at {ub!r} (Fs={Fs!r}, df1={df1!r}, df2={df2!r})"
            )
        prev = -np.inf
        n = 0
        while prev < cur:
            n += 1
            if n > search.max_doublings:
                raise ConvergenceError(
                    f"MLE upper bound search exceeded {search.max_doublings} doublings "
                    f"(Fs={Fs!r}, df1={df1!r}, df2={df2!r})"
                )
            prev = cur
            ub = 2.0 * ub
            cur = loglik(ub)
        # after two or more doublings the maximum lies in [ub/4, ub]
        lb = ub / 4.0 if n >= 2 else lb

    res = optimize.minimize_scalar(
        lambda z: -loglik(z),
        bounds=(lb, ub),
        method="bounded",
        options={"xatol": search.mle_xatol, "maxiter": search.mle_maxiter},
    )
    if not res.success:
        raise ConvergenceError(
            f"MLE maximisation failed on [{lb!r}, {ub!r}] (Fs={Fs!r}, df1={df1!r}, df2={df2!r}): {res.message}"
        )
    logger.debug("ncp_mle", Fs=Fs, lb=lb, ub=ub, ncp=float(res.x), nfev=int(res.nfev))
    return max(float(res.x), 0.0)


def f_ncp_mle(
    Fs: ArrayLike,
    df1: ArrayLike,
    df2: ArrayLike,
    *,
    ub: Optional[float] = None,
    lb: float = 0.0,
    search: Optional[SearchConfig] = None,
) -> ArrayLike:
    """Maximum likelihood estimate of the F non-centrality, elementwise."""

    _check_f_df(df1, df2)
    cfg = search or DEFAULT_SEARCH
    F, d1, d2 = np.broadcast_arrays(
        np.asarray(Fs, dtype=float), np.asarray(df1, dtype=float), np.asarray(df2, dtype=float)
    )
    out = np.empty(F.shape, dtype=float)
    for idx in np.ndindex(F.shape):
        out[idx] = _f_ncp_mle_single(float(F[idx]), float(d1[idx]), float(d2[idx]), cfg, ub=ub, lb=lb)
    return _shape(out, Fs, df1, df2)


_ESTIMATORS: Dict[str, Callable[..., ArrayLike]] = {
    "unbiased": f_ncp_unbiased,
    "MLE": f_ncp_mle,
    "KRS": f_ncp_krs,
}


def f_inference(
    Fs: ArrayLike,
    df1: ArrayLike,
    df2: ArrayLike,
    type: NCPType = "KRS",
    *,
    search: Optional[SearchConfig] = None,
) -> ArrayLike:
    """Estimate the non-centrality of an observed F statistic."""

    if type not in _ESTIMATORS:
        raise InvalidArgumentError(f"unknown estimator type: {type!r}; expected one of {sorted(_ESTIMATORS)}")
    if type == "MLE":
        return f_ncp_mle(Fs, df1, df2, search=search)
    return _ESTIMATORS[type](Fs, df1, df2)


def t2_inference(
    T2: ArrayLike,
    df1: int,
    df2: int,
    type: NCPType = "KRS",
    *,
    search: Optional[SearchConfig] = None,
) -> ArrayLike:
    """Estimate the non-centrality of a Hotelling T2 on ``df1`` assets and
    ``df2`` observations."""

    Fs = T2_to_F(T2, df1, df2)
    return f_inference(Fs, df1, df2 - df1, type, search=search)


def sropt_inference(
    z_s: ArrayLike,
    df1: int,
    df2: int,
    ope: float = 1.0,
    drag: float = 0.0,
    type: NCPType = "KRS",
    *,
    search: Optional[SearchConfig] = None,
) -> ArrayLike:
    """Estimate the population maximal SNR from observed ``sropt`` values.

    Values below ``-drag`` are clamped to a zero T2. The Hotelling
    non-centrality estimate is mapped back through a signed square root, so a
    negative ``unbiased`` estimate gives a negative SNR rather than NaN.
    """

    T2 = np.asarray(sropt_to_T2(np.asarray(z_s, dtype=float), df2, ope=ope, drag=drag), dtype=float)
    ncp = np.asarray(t2_inference(T2, df1, df2, type, search=search), dtype=float)
    zeta = np.asarray(signed_sqrt(ncp / df2), dtype=float)
    out = np.asarray(annualize(zeta, ope), dtype=float) - drag
    return _shape(out, z_s)
