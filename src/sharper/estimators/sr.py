"""sharper.estimators.sr

The Sharpe ratio as a statistic.

The Sharpe ratio is a rescaled t-statistic:

    SR = t * rescale * sqrt(ope)

where ``t = (mu_hat - c0) / sigma_hat / rescale`` follows a non-central t with
``df`` degrees of freedom and non-centrality ``(mu - c0) / (sigma * rescale)``.
For a plain sample of ``n`` returns ``df = n - 1`` and ``rescale = 1/sqrt(n)``;
for the intercept of a linear regression ``rescale`` is the square root of the
intercept entry of ``(X'X)^-1``.

Inference (standard errors, confidence intervals, tests) converts to t units,
works there, and converts back.

References
----------
Sharpe, William F. "Mutual fund performance." Journal of Business (1966):
119-138.

Lo, Andrew W. "The statistics of Sharpe ratios." Financial Analysts Journal 58,
no. 4 (2002): 36-52.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal, Optional, Union

import numpy as np
import pandas as pd
import statsmodels.api as sm

from sharper.distributions.rescaled_t import drt, prt
from sharper.errors import DomainError, InvalidArgumentError
from sharper.estimators.inputs import (
    FittedModelSummary,
    RawSample,
    SRSource,
    TimeIndexedSeries,
    summarize_model,
)
from sharper.inversion import ConfidenceInterval, resolve_levels
from sharper.stats.tstat import t_confint, t_se
from sharper.units import compute_sr, infer_ope, sr_to_t, t_to_sr
from sharper.utils.config import CIMethod, SearchConfig, SEMethod

Alternative = Literal["two.sided", "greater", "less"]

__all__ = [
    "SharpeStatistic",
    "SRTestResult",
    "sr_from_sample",
    "sr_from_model",
    "sr_from_series",
    "fit_sr_model",
    "as_sr",
    "reannualize",
    "sr_test",
]


@dataclass(frozen=True)
class SharpeStatistic:
    """An observed Sharpe ratio with everything needed for inference.

    Attributes
    ----------
    value:
        The Sharpe ratio, quoted per sqrt epoch.
    df:
        Degrees of freedom of the latent t-statistic.
    c0:
        Risk-free (or disastrous) rate, in per-observation return units.
    ope:
        Observations per epoch.
    rescale:
        Ratio of the Sharpe ratio (per observation) to its t-statistic.
    epoch:
        Label of the epoch, e.g. ``"yr"``.
    """

    value: float
    df: int
    c0: float = 0.0
    ope: float = 1.0
    rescale: float = float("nan")
    epoch: str = "yr"

    def __post_init__(self) -> None:
        if self.df <= 0:
            raise DomainError(f"df must be positive, got {self.df!r}")
        if not self.ope > 0:
            raise DomainError(f"ope must be positive, got {self.ope!r}")
        if np.isnan(self.rescale):
            object.__setattr__(self, "rescale", float(np.sqrt(1.0 / (self.df + 1.0))))
        if not (self.rescale > 0 and np.isfinite(self.rescale)):
            raise DomainError(f"rescale must be positive and finite, got {self.rescale!r}")

    # -- unit conversions -------------------------------------------------

    def to_t(self) -> float:
        """The latent t-statistic."""
        return float(sr_to_t(self.value, self.rescale, self.ope))

    def _from_t(self, t):
        return t_to_sr(t, self.rescale, self.ope)

    @property
    def K(self) -> float:
        """Rescaling between the t-statistic and the quoted Sharpe ratio."""
        return float(self.rescale * np.sqrt(self.ope))

    # -- inference --------------------------------------------------------

    def se(self, method: SEMethod = "t") -> float:
        """Standard error of the Sharpe ratio.

        ``"t"`` (alias ``"Lo"``) uses the Johnson-Welch normal approximation;
        ``"exact"`` the exact variance of the non-central t, which needs
        ``df > 2``.
        """
        return float(self._from_t(t_se(self.to_t(), self.df, method)))

    def confint(
        self,
        level: float = 0.95,
        method: CIMethod = "exact",
        *,
        level_lo: Optional[float] = None,
        level_hi: Optional[float] = None,
        search: Optional[SearchConfig] = None,
    ) -> ConfidenceInterval:
        """Confidence interval on the population signal-noise ratio."""

        lo_p, hi_p = resolve_levels(level, level_lo, level_hi)
        lo, hi = t_confint(self.to_t(), self.df, level, method, level_lo=lo_p, level_hi=hi_p, search=search)
        return ConfidenceInterval(
            lower=float(self._from_t(lo)),
            upper=float(self._from_t(hi)),
            level_lo=lo_p,
            level_hi=hi_p,
        )

    def cdf(self, zeta: float = 0.0, *, lower_tail: bool = True) -> float:
        """Probability of a Sharpe ratio at most ``value`` given SNR ``zeta``."""
        return float(prt(self.value, self.df, self.K, zeta, lower_tail=lower_tail))

    def density(self, zeta: float = 0.0) -> float:
        return float(drt(self.value, self.df, self.K, zeta))

    def reannualize(self, ope: Optional[float] = None, epoch: Optional[str] = None) -> "SharpeStatistic":
        return reannualize(self, ope=ope, epoch=epoch)


def reannualize(x: SharpeStatistic, *, ope: Optional[float] = None, epoch: Optional[str] = None) -> SharpeStatistic:
    """Change the annualization of a Sharpe ratio, holding its t-statistic fixed.

    Returns an updated copy.
    """

    if not isinstance(x, SharpeStatistic):
        raise TypeError("must give a SharpeStatistic")
    out = x
    if ope is not None:
        if not ope > 0:
            raise DomainError(f"ope must be positive, got {ope!r}")
        out = replace(out, value=float(out.value * np.sqrt(ope / out.ope)), ope=float(ope))
    if epoch is not None:
        out = replace(out, epoch=str(epoch))
    return out


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def sr_from_sample(
    x: Union[RawSample, Any],
    *,
    c0: float = 0.0,
    ope: float = 1.0,
    na_rm: bool = False,
    epoch: str = "yr",
) -> SharpeStatistic:
    """Sharpe ratio of a sample of returns (Bessel-corrected deviation)."""

    sample = x if isinstance(x, RawSample) else RawSample.of(x, na_rm=na_rm)
    v = sample.values
    if sample.na_rm:
        v = v[~np.isnan(v)]
    elif np.isnan(v).any():
        raise InvalidArgumentError("sample contains NaN; pass na_rm=True to drop them")
    n = int(v.size)
    if n < 2:
        raise InvalidArgumentError(f"need at least 2 observations, got {n}")
    mu = float(np.mean(v))
    sigma = float(np.std(v, ddof=1))
    return SharpeStatistic(
        value=compute_sr(mu, c0, sigma, ope),
        df=n - 1,
        c0=float(c0),
        ope=float(ope),
        rescale=float(1.0 / np.sqrt(n)),
        epoch=epoch,
    )


def sr_from_model(
    model: Union[FittedModelSummary, Any],
    *,
    c0: float = 0.0,
    ope: float = 1.0,
    epoch: str = "yr",
    term: Union[int, str] = 0,
) -> SharpeStatistic:
    """Sharpe ratio of the intercept of a fitted linear model.

    ``model`` is a :class:`FittedModelSummary` or statsmodels regression
    results (``params``, ``bse``, ``df_resid``, ``scale``).
    """

    summary = model if isinstance(model, FittedModelSummary) else summarize_model(model, term=term)
    return SharpeStatistic(
        value=compute_sr(summary.intercept, c0, summary.sigma, ope),
        df=summary.df_resid,
        c0=float(c0),
        ope=float(ope),
        rescale=summary.rescale,
        epoch=epoch,
    )


def sr_from_series(
    x: Union[TimeIndexedSeries, pd.Series],
    *,
    c0: float = 0.0,
    ope: Optional[float] = None,
    na_rm: bool = False,
    epoch: str = "yr",
) -> SharpeStatistic:
    """Sharpe ratio of a time-indexed return series.

    When ``ope`` is not given it is inferred as 365.25 over the mean spacing
    of the index in days, i.e. the sampling rate per year.
    """

    ts = x if isinstance(x, TimeIndexedSeries) else TimeIndexedSeries(x)
    if ope is None:
        ope = infer_ope(ts.series.index)
    return sr_from_sample(ts.series.to_numpy(dtype=float), c0=c0, ope=ope, na_rm=na_rm, epoch=epoch)


def fit_sr_model(
    returns: Union[pd.Series, np.ndarray],
    factors: Union[pd.DataFrame, np.ndarray],
    *,
    c0: float = 0.0,
    ope: float = 1.0,
    epoch: str = "yr",
) -> SharpeStatistic:
    """Regress returns on factors with OLS and take the Sharpe ratio of the
    intercept term, i.e. of the returns not explained by the factors."""

    y = np.asarray(returns, dtype=float)
    X = sm.add_constant(np.asarray(factors, dtype=float), has_constant="add")
    if X.shape[0] != y.shape[0]:
        raise InvalidArgumentError(f"returns and factors differ in length: {y.shape[0]} vs {X.shape[0]}")
    res = sm.OLS(y, X, missing="drop").fit()
    return sr_from_model(res, c0=c0, ope=ope, epoch=epoch, term=0)


def as_sr(
    x: Union[SRSource, pd.Series, np.ndarray, Any],
    *,
    c0: float = 0.0,
    ope: Optional[float] = None,
    na_rm: bool = False,
    epoch: str = "yr",
) -> SharpeStatistic:
    """Build a :class:`SharpeStatistic` from any supported source."""

    if isinstance(x, FittedModelSummary) or hasattr(x, "bse"):
        return sr_from_model(x, c0=c0, ope=1.0 if ope is None else ope, epoch=epoch)
    if isinstance(x, TimeIndexedSeries) or (
        isinstance(x, pd.Series) and isinstance(x.index, pd.DatetimeIndex)
    ):
        return sr_from_series(x, c0=c0, ope=ope, na_rm=na_rm, epoch=epoch)
    if isinstance(x, pd.Series):
        x = x.to_numpy(dtype=float)
    return sr_from_sample(x, c0=c0, ope=1.0 if ope is None else ope, na_rm=na_rm, epoch=epoch)


# ---------------------------------------------------------------------------
# Hypothesis test
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SRTestResult:
    statistic: float
    t_stat: float
    df: int
    p_value: float
    alternative: Alternative
    null_value: float
    se: float


def sr_test(x: SharpeStatistic, zeta: float = 0.0, alternative: Alternative = "two.sided") -> SRTestResult:
    """Test ``H0: SNR == zeta`` against ``alternative``.

    Under the null the statistic follows the rescaled non-central t with
    non-centrality ``zeta``; with ``zeta == 0`` this is the central t test on
    the latent t-statistic.
    """

    if alternative not in ("two.sided", "greater", "less"):
        raise InvalidArgumentError(f"unknown alternative: {alternative!r}")
    lower = float(prt(x.value, x.df, x.K, zeta, lower_tail=True))
    upper = float(prt(x.value, x.df, x.K, zeta, lower_tail=False))
    if alternative == "greater":
        p = upper
    elif alternative == "less":
        p = lower
    else:
        p = min(1.0, 2.0 * min(lower, upper))
    return SRTestResult(
        statistic=float(x.value),
        t_stat=x.to_t(),
        df=int(x.df),
        p_value=float(p),
        alternative=alternative,
        null_value=float(zeta),
        se=x.se("t"),
    )
