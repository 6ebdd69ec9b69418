"""sharper.estimators.inputs

Constructor inputs for :class:`~sharper.estimators.sr.SharpeStatistic`.

A Sharpe ratio can be built from three kinds of source; each is a small frozen
record with a dedicated factory in :mod:`sharper.estimators.sr`:

- :class:`RawSample` - a plain vector of returns.
- :class:`FittedModelSummary` - the intercept of a fitted linear regression,
  its standard error, the residual standard deviation and residual degrees of
  freedom.
- :class:`TimeIndexedSeries` - returns with timestamps, used to infer the
  number of observations per epoch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import numpy as np
import pandas as pd

from sharper.errors import DomainError, InvalidArgumentError

__all__ = [
    "RawSample",
    "FittedModelSummary",
    "TimeIndexedSeries",
    "SRSource",
    "summarize_model",
]


@dataclass(frozen=True)
class RawSample:
    values: np.ndarray
    na_rm: bool = False

    @classmethod
    def of(cls, x: Any, *, na_rm: bool = False) -> "RawSample":
        arr = np.asarray(x, dtype=float)
        if arr.ndim != 1:
            raise InvalidArgumentError(f"a return sample must be 1-dimensional, got shape {arr.shape}")
        return cls(values=arr, na_rm=na_rm)


@dataclass(frozen=True)
class FittedModelSummary:
    """What a fitted regression must expose to yield a Sharpe ratio."""

    intercept: float
    intercept_se: float
    sigma: float
    df_resid: int

    def __post_init__(self) -> None:
        if not (self.sigma > 0 and np.isfinite(self.sigma)):
            raise DomainError(f"residual sigma must be positive, got {self.sigma!r}")
        if not (self.intercept_se > 0 and np.isfinite(self.intercept_se)):
            raise DomainError(f"intercept standard error must be positive, got {self.intercept_se!r}")
        if self.df_resid < 1:
            raise DomainError(f"residual degrees of freedom must be positive, got {self.df_resid!r}")

    @property
    def rescale(self) -> float:
        # sqrt of the intercept entry of (X'X)^-1
        return float(self.intercept_se / self.sigma)


@dataclass(frozen=True)
class TimeIndexedSeries:
    series: pd.Series

    def __post_init__(self) -> None:
        if not isinstance(self.series, pd.Series):
            raise TypeError("series must be a pandas Series")
        if not isinstance(self.series.index, pd.DatetimeIndex):
            raise TypeError("series must have a DatetimeIndex")
        if self.series.index.has_duplicates:
            raise InvalidArgumentError("series index has duplicates")
        if not self.series.index.is_monotonic_increasing:
            raise InvalidArgumentError("series index must be monotonic increasing")


SRSource = Union[RawSample, FittedModelSummary, TimeIndexedSeries]


def summarize_model(results: Any, *, term: Union[int, str] = 0) -> FittedModelSummary:
    """Extract a :class:`FittedModelSummary` from statsmodels regression results.

    ``term`` selects the intercept, by position or by name (``"const"`` when
    the design was built with :func:`statsmodels.api.add_constant` on a
    DataFrame).
    """

    for attr in ("params", "bse", "df_resid", "scale"):
        if not hasattr(results, attr):
            raise TypeError(f"fitted model must expose {attr!r}")
    params = results.params
    bse = results.bse
    if isinstance(term, str):
        if not isinstance(params, pd.Series):
            raise InvalidArgumentError("named terms need a model fit on a DataFrame")
        intercept = float(params[term])
        se = float(bse[term])
    else:
        intercept = float(np.asarray(params)[term])
        se = float(np.asarray(bse)[term])
    return FittedModelSummary(
        intercept=intercept,
        intercept_se=se,
        sigma=float(np.sqrt(results.scale)),
        df_resid=int(round(float(results.df_resid))),
    )
