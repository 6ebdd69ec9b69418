"""Sharpe ratio statistics and their constructors."""

from .inputs import FittedModelSummary, RawSample, SRSource, TimeIndexedSeries, summarize_model
from .sr import (
    SharpeStatistic,
    SRTestResult,
    as_sr,
    fit_sr_model,
    reannualize,
    sr_from_model,
    sr_from_sample,
    sr_from_series,
    sr_test,
)
from .sropt import (
    Markowitz,
    OptimalSharpeStatistic,
    SroptTestResult,
    as_sropt,
    hotelling,
    markowitz,
    sropt_from_returns,
    sropt_test,
)

__all__ = [
    # inputs
    "RawSample",
    "FittedModelSummary",
    "TimeIndexedSeries",
    "SRSource",
    "summarize_model",
    # sr
    "SharpeStatistic",
    "SRTestResult",
    "sr_from_sample",
    "sr_from_model",
    "sr_from_series",
    "fit_sr_model",
    "as_sr",
    "reannualize",
    "sr_test",
    # sropt
    "Markowitz",
    "OptimalSharpeStatistic",
    "SroptTestResult",
    "markowitz",
    "hotelling",
    "sropt_from_returns",
    "as_sropt",
    "sropt_test",
]
