"""Inference on Sharpe-ratio-type statistics.

The package is organized into submodules:
- sharper.units: annualization and conversions between SR, t, T2 and F
- sharper.distributions: rescaled non-central t, lambda-prime, Hotelling T2
  and maximal Sharpe ratio distributions (d/p/q/r functions)
- sharper.inversion: confidence-curve inversion by bracketing and root finding
- sharper.stats: t-statistic standard errors/intervals, non-centrality estimators
- sharper.estimators: SharpeStatistic and OptimalSharpeStatistic with constructors
- sharper.reporting: coefficient tables
- sharper.utils: config, IO, seeds, logging

Report generation runs through scripts/sr_report.py.
"""

from .errors import ConvergenceError, DomainError, InvalidArgumentError, SharpeRError
from .estimators import (
    OptimalSharpeStatistic,
    SharpeStatistic,
    as_sr,
    as_sropt,
    sr_test,
    sropt_test,
)
from .inversion import ConfidenceInterval
from .utils.config import SharpeRConfig

__all__ = [
    "SharpeRConfig",
    "SharpeStatistic",
    "OptimalSharpeStatistic",
    "ConfidenceInterval",
    "as_sr",
    "as_sropt",
    "sr_test",
    "sropt_test",
    "SharpeRError",
    "DomainError",
    "InvalidArgumentError",
    "ConvergenceError",
]
