"""sharper.reporting.tables

Coefficient tables for Sharpe-type statistics.

Each statistic becomes one row, in the layout of a regression coefficient
table: the estimate quoted per sqrt epoch, its standard error, the underlying
test statistic and its upper-tail p-value. Optional confidence bounds are
appended as two extra columns labelled by their tail probabilities.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from sharper.estimators.sr import SharpeStatistic, sr_test
from sharper.estimators.sropt import OptimalSharpeStatistic, sropt_test
from sharper.utils.config import CIMethod, SearchConfig, SEMethod

__all__ = [
    "dict_table",
    "sr_table",
    "sropt_table",
]


def dict_table(rows: Iterable[Mapping[str, Any]], *, index_col: Optional[str] = None) -> pd.DataFrame:
    """Convert an iterable of dict-like rows into a DataFrame.

    Parameters
    ----------
    rows:
        Iterable of dict-like objects.
    index_col:
        If provided and present in each row, sets that key as index.
    """

    df = pd.DataFrame(list(rows))
    if index_col is not None and index_col in df.columns:
        df = df.set_index(index_col)
    return df


def _epoch_label(prefix: str, epochs: Iterable[str]) -> str:
    labels = sorted(set(epochs))
    epoch = labels[0] if len(labels) == 1 else "epoch"
    return f"{prefix}/sqrt({epoch})"


def sr_table(
    stats: Mapping[str, SharpeStatistic],
    *,
    se_method: SEMethod = "t",
    level: Optional[float] = None,
    ci_method: CIMethod = "exact",
    search: Optional[SearchConfig] = None,
) -> pd.DataFrame:
    """Coefficient table for several Sharpe ratios.

    Parameters
    ----------
    stats:
        Mapping name -> statistic.
    se_method:
        Standard error method, see :meth:`SharpeStatistic.se`.
    level:
        When given, append confidence bounds at this level.
    ci_method:
        Confidence interval method, see :meth:`SharpeStatistic.confint`.

    Returns
    -------
    pd.DataFrame
        One row per statistic, indexed by name.
    """

    value_col = _epoch_label("SR", (s.epoch for s in stats.values()))
    rows = []
    for name, s in stats.items():
        test = sr_test(s, alternative="greater")
        row = {
            "name": name,
            value_col: s.value,
            "Std. Error": s.se(se_method),
            "t value": test.t_stat,
            "Pr(>t)": test.p_value,
            "df": s.df,
        }
        if level is not None:
            ci = s.confint(level, ci_method, search=search)
            lo_label, hi_label = ci.labels()
            row[lo_label] = ci.lower
            row[hi_label] = ci.upper
        rows.append(row)
    return dict_table(rows, index_col="name")


def sropt_table(
    stats: Mapping[str, OptimalSharpeStatistic],
    *,
    level: Optional[float] = None,
    inference_type: Optional[str] = None,
    search: Optional[SearchConfig] = None,
) -> pd.DataFrame:
    """Coefficient table for several maximal Sharpe ratios.

    ``inference_type`` adds a column with the non-centrality based point
    estimate of the population maximal SNR.
    """

    value_col = _epoch_label("SR", (s.epoch for s in stats.values()))
    rows = []
    for name, s in stats.items():
        test = sropt_test(s)
        row = {
            "name": name,
            value_col: s.value,
            "T2": test.T2,
            "Pr(>T2)": test.p_value,
            "df1": s.df1,
            "df2": s.df2,
        }
        if inference_type is not None:
            row[f"zeta.{inference_type}"] = s.inference(inference_type, search=search)
        if level is not None:
            ci = s.confint(level, search=search)
            lo_label, hi_label = ci.labels()
            row[lo_label] = ci.lower
            row[hi_label] = ci.upper
        rows.append(row)
    return dict_table(rows, index_col="name")
