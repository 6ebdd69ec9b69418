"""sharper.units

Pure unit conversions between the statistics handled in this package.

Sharpe-type statistics are quoted "per square root epoch": a per-observation
statistic is annualized by multiplying by sqrt(ope), where ope is the number of
observations per epoch.

    sr      = t * rescale * sqrt(ope)
    sropt   = annualize(sqrt(T2 / df2), ope) - drag
    F       = T2 * (df2 - df1) / (df1 * (df2 - 1))

Every function takes its parameters explicitly and accepts scalars or arrays.
"""

from __future__ import annotations

from typing import Union

import numpy as np
import pandas as pd

from sharper.errors import DomainError, InvalidArgumentError

ArrayLike = Union[float, np.ndarray]

DAYS_PER_YEAR = 365.25

__all__ = [
    "DAYS_PER_YEAR",
    "annualize",
    "deannualize",
    "compute_sr",
    "sr_to_t",
    "t_to_sr",
    "sropt_to_T2",
    "T2_to_sropt",
    "T2_to_F",
    "F_to_T2",
    "signed_sqrt",
    "infer_ope",
]


def _out(x: np.ndarray, like) -> ArrayLike:
    if np.ndim(like) == 0:
        return float(np.asarray(x).item())
    return x


def _check_ope(ope: float) -> None:
    if not np.all(np.asarray(ope, dtype=float) > 0):
        raise DomainError(f"ope must be positive, got {ope!r}")


def annualize(x: ArrayLike, ope: float) -> ArrayLike:
    _check_ope(ope)
    return _out(np.asarray(x, dtype=float) * np.sqrt(ope), x)


def deannualize(x: ArrayLike, ope: float) -> ArrayLike:
    _check_ope(ope)
    return _out(np.asarray(x, dtype=float) / np.sqrt(ope), x)


def compute_sr(mu: float, c0: float, sigma: float, ope: float = 1.0) -> float:
    """Annualized Sharpe ratio (mu - c0) / sigma * sqrt(ope)."""

    if not np.isfinite(sigma) or sigma <= 0:
        raise DomainError(f"sigma must be positive and finite, got {sigma!r}")
    return float(annualize((mu - c0) / sigma, ope))


def sr_to_t(sr: ArrayLike, rescale: float, ope: float) -> ArrayLike:
    """Latent t-statistic of a Sharpe ratio."""

    _check_ope(ope)
    if rescale <= 0:
        raise DomainError(f"rescale must be positive, got {rescale!r}")
    return _out(np.asarray(sr, dtype=float) / (rescale * np.sqrt(ope)), sr)


def t_to_sr(t: ArrayLike, rescale: float, ope: float) -> ArrayLike:
    _check_ope(ope)
    if rescale <= 0:
        raise DomainError(f"rescale must be positive, got {rescale!r}")
    return _out(np.asarray(t, dtype=float) * (rescale * np.sqrt(ope)), t)


def sropt_to_T2(z_s: ArrayLike, df2: int, *, ope: float = 1.0, drag: float = 0.0) -> ArrayLike:
    """Hotelling T2 implied by an (annualized, dragged) sropt value.

    The value is un-dragged and deannualized first. That intermediate is a
    square root, so a negative one is clamped to zero.
    """

    x = np.maximum(np.asarray(deannualize(np.asarray(z_s, dtype=float) + drag, ope), dtype=float), 0.0)
    return _out(df2 * np.square(x), z_s)


def T2_to_sropt(T2: ArrayLike, df2: int, *, ope: float = 1.0, drag: float = 0.0) -> ArrayLike:
    """sropt value of a Hotelling T2; negative T2 is floored at zero."""

    z = np.sqrt(np.maximum(np.asarray(T2, dtype=float), 0.0) / df2)
    return _out(annualize(z, ope) - drag, T2)


def T2_to_F(T2: ArrayLike, df1: int, df2: int) -> ArrayLike:
    if df2 <= df1:
        raise InvalidArgumentError(f"need df2 > df1, got df1={df1}, df2={df2}")
    return _out(np.asarray(T2, dtype=float) * (df2 - df1) / (df1 * (df2 - 1.0)), T2)


def F_to_T2(F: ArrayLike, df1: int, df2: int) -> ArrayLike:
    if df2 <= df1:
        raise InvalidArgumentError(f"need df2 > df1, got df1={df1}, df2={df2}")
    return _out(np.asarray(F, dtype=float) * (df1 * (df2 - 1.0)) / (df2 - df1), F)


def signed_sqrt(x: ArrayLike) -> ArrayLike:
    """sign(x) * sqrt(|x|); keeps negative non-centrality estimates negative."""

    a = np.asarray(x, dtype=float)
    return _out(np.sign(a) * np.sqrt(np.abs(a)), x)


def infer_ope(index: pd.DatetimeIndex) -> float:
    """Observations per year implied by the mean spacing of a DatetimeIndex."""

    if not isinstance(index, pd.DatetimeIndex):
        raise TypeError("index must be a DatetimeIndex")
    if len(index) < 2:
        raise InvalidArgumentError("need at least 2 timestamps to infer ope")
    span_days = (index[-1] - index[0]) / pd.Timedelta(days=1)
    days_per_row = span_days / (len(index) - 1)
    if not np.isfinite(days_per_row) or days_per_row <= 0:
        raise InvalidArgumentError("timestamps must be increasing to infer ope")
    return DAYS_PER_YEAR / float(days_per_row)
