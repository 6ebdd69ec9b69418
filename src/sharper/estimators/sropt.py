"""sharper.estimators.sropt

The maximal Sharpe ratio of a set of assets.

Given ``n`` observations on ``q`` assets, the sample Markowitz portfolio
``w = Sigma^-1 mu`` attains the largest in-sample Sharpe ratio. Its square is
Hotelling's ``T2 / n``:

    T2     = n * mu' Sigma^-1 mu
    sropt  = annualize(sqrt(T2 / n), ope) - drag

The statistic has ``df1 = q`` and ``df2 = n``. Inference on the population
maximal signal-noise ratio goes through the Hotelling distribution
(:mod:`sharper.distributions.sropt`) and the non-centrality estimators
(:mod:`sharper.stats.ncp`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional, Tuple, Union

import numpy as np
import pandas as pd

from sharper.distributions.hotelling import check_hotelling_df, pT2
from sharper.distributions.sropt import dsropt, psropt, sropt_confint, sropt_ncp
from sharper.errors import DomainError, InvalidArgumentError
from sharper.inversion import ConfidenceInterval
from sharper.stats.ncp import NCPType, sropt_inference
from sharper.units import T2_to_sropt, deannualize, infer_ope
from sharper.utils.config import SearchConfig
from sharper.utils.log import get_logger

logger = get_logger(__name__)

__all__ = [
    "Markowitz",
    "markowitz",
    "hotelling",
    "OptimalSharpeStatistic",
    "SroptTestResult",
    "sropt_from_returns",
    "as_sropt",
    "sropt_test",
]


@dataclass(frozen=True)
class Markowitz:
    """Sample Markowitz portfolio.

    Attributes
    ----------
    w:
        Unnormalised weights ``Sigma^-1 mu``.
    mu:
        Sample mean of each asset.
    Sigma:
        Sample covariance (``ddof=1``).
    df1:
        Number of assets.
    df2:
        Number of observations used.
    """

    w: np.ndarray
    mu: np.ndarray
    Sigma: np.ndarray
    df1: int
    df2: int


def _as_matrix(X: Any) -> np.ndarray:
    arr = np.asarray(X, dtype=float)
    if arr.ndim == 1:
        arr = arr[:, None]
    if arr.ndim != 2:
        raise InvalidArgumentError(f"returns must be a 2-dimensional matrix, got shape {arr.shape}")
    return arr


def markowitz(X: Any) -> Markowitz:
    """Markowitz portfolio of the rows of ``X`` without any NaN."""

    arr = _as_matrix(X)
    arr = arr[~np.isnan(arr).any(axis=1)]
    n, q = arr.shape
    if n <= q:
        raise InvalidArgumentError(f"need more observations than assets, got n={n}, q={q}")
    mu = arr.mean(axis=0)
    Sigma = np.atleast_2d(np.cov(arr, rowvar=False, ddof=1))
    try:
        w = np.linalg.solve(Sigma, mu)
    except np.linalg.LinAlgError as exc:
        raise DomainError(f"sample covariance is singular: {exc}") from exc
    return Markowitz(w=w, mu=mu, Sigma=Sigma, df1=int(q), df2=int(n))


def hotelling(X: Any) -> Tuple[Markowitz, float]:
    """Markowitz portfolio and Hotelling's ``T2 = n * mu' Sigma^-1 mu``."""

    mp = markowitz(X)
    T2 = float(mp.df2 * (mp.mu @ mp.w))
    return mp, T2


@dataclass(frozen=True)
class OptimalSharpeStatistic:
    """An observed maximal Sharpe ratio.

    ``value`` is quoted per sqrt epoch and net of ``drag``. ``T2`` caches the
    Hotelling statistic it came from, when known.
    """

    value: float
    df1: int
    df2: int
    drag: float = 0.0
    ope: float = 1.0
    epoch: str = "yr"
    T2: Optional[float] = None

    def __post_init__(self) -> None:
        check_hotelling_df(self.df1, self.df2)
        if not self.ope > 0:
            raise DomainError(f"ope must be positive, got {self.ope!r}")

    def to_T2(self) -> float:
        """The Hotelling statistic.

        Without a cached ``T2`` it is rebuilt from ``value``. The intermediate
        ``deannualize(value + drag)`` is a square root and cannot be negative,
        so a negative intermediate is clamped to zero.
        """

        if self.T2 is not None:
            return float(self.T2)
        zs = float(deannualize(self.value + self.drag, self.ope))
        if zs < 0:
            logger.warning("sropt_clamped_to_zero", value=self.value, drag=self.drag, ope=self.ope, intermediate=zs)
            zs = 0.0
        return float(self.df2 * zs * zs)

    def confint(
        self,
        level: float = 0.95,
        *,
        level_lo: Optional[float] = None,
        level_hi: Optional[float] = None,
        search: Optional[SearchConfig] = None,
    ) -> ConfidenceInterval:
        """Confidence interval on the population maximal SNR, net of drag."""

        return sropt_confint(
            self.value,
            self.df1,
            self.df2,
            level,
            self.ope,
            self.drag,
            level_lo=level_lo,
            level_hi=level_hi,
            search=search,
        )

    def inference(self, type: NCPType = "KRS", *, search: Optional[SearchConfig] = None) -> float:
        """Point estimate of the population maximal SNR.

        Uses the cached ``T2`` when present, which is exact even when the
        quoted value was clamped.
        """

        z_s = T2_to_sropt(self.to_T2(), self.df2, ope=self.ope, drag=self.drag)
        return float(sropt_inference(z_s, self.df1, self.df2, self.ope, self.drag, type, search=search))

    def cdf(self, zeta_s: float = 0.0, *, lower_tail: bool = True) -> float:
        return float(psropt(self.value, self.df1, self.df2, zeta_s, self.ope, self.drag, lower_tail=lower_tail))

    def density(self, zeta_s: float = 0.0) -> float:
        return float(dsropt(self.value, self.df1, self.df2, zeta_s, self.ope, self.drag))


def sropt_from_returns(
    X: Union[np.ndarray, pd.DataFrame],
    *,
    drag: float = 0.0,
    ope: Optional[float] = None,
    epoch: str = "yr",
) -> OptimalSharpeStatistic:
    """Maximal Sharpe ratio of a matrix of returns (rows are observations).

    A DataFrame on a DatetimeIndex has its ``ope`` inferred when not given.
    """

    if ope is None:
        if isinstance(X, pd.DataFrame) and isinstance(X.index, pd.DatetimeIndex):
            ope = infer_ope(X.index)
        else:
            ope = 1.0
    mp, T2 = hotelling(X)
    value = float(T2_to_sropt(T2, mp.df2, ope=ope, drag=drag))
    logger.debug("sropt", df1=mp.df1, df2=mp.df2, T2=T2, value=value)
    return OptimalSharpeStatistic(
        value=value,
        df1=mp.df1,
        df2=mp.df2,
        drag=float(drag),
        ope=float(ope),
        epoch=epoch,
        T2=T2,
    )


def as_sropt(
    x: Any,
    *,
    drag: float = 0.0,
    ope: Optional[float] = None,
    epoch: str = "yr",
) -> OptimalSharpeStatistic:
    """Build an :class:`OptimalSharpeStatistic` from returns or pass one through."""

    if isinstance(x, OptimalSharpeStatistic):
        return x
    return sropt_from_returns(x, drag=drag, ope=ope, epoch=epoch)


@dataclass(frozen=True)
class SroptTestResult:
    statistic: float
    T2: float
    df1: int
    df2: int
    p_value: float
    null_value: float
    alternative: Literal["greater"] = "greater"


def sropt_test(x: OptimalSharpeStatistic, zeta_s: float = 0.0) -> SroptTestResult:
    """Test ``H0: zeta_s == null`` against ``zeta_s > null``.

    With ``zeta_s == 0`` this is Hotelling's test that all means are zero.
    """

    delta2 = sropt_ncp(zeta_s, x.df2, x.ope)
    T2 = x.to_T2()
    p = float(pT2(T2, x.df1, x.df2, delta2, lower_tail=False))
    return SroptTestResult(
        statistic=float(x.value),
        T2=T2,
        df1=int(x.df1),
        df2=int(x.df2),
        p_value=p,
        null_value=float(zeta_s),
    )
