"""Tests for the maximal Sharpe ratio statistic.

Plan:
- Markowitz/Hotelling computations against direct linear algebra.
- Null scenario: 6000 x 6 returns with zero means.
- Sticky zero when rebuilding T2 from a dragged value.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from structlog.testing import capture_logs

from sharper.distributions.sropt import psropt
from sharper.errors import DomainError, InvalidArgumentError
from sharper.estimators.sropt import (
    OptimalSharpeStatistic,
    as_sropt,
    hotelling,
    markowitz,
    sropt_from_returns,
    sropt_test,
)


def _mk_panel(n: int, q: int, seed: int, mean: float = 0.0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.normal(mean, 0.01, size=(n, q))


def test_markowitz_matches_linear_algebra() -> None:
    X = _mk_panel(300, 4, seed=0, mean=0.001)
    mp = markowitz(X)
    mu = X.mean(axis=0)
    Sigma = np.cov(X, rowvar=False)
    assert mp.df1 == 4
    assert mp.df2 == 300
    assert np.allclose(mp.w, np.linalg.solve(Sigma, mu))

    _, T2 = hotelling(X)
    assert T2 == pytest.approx(300 * mu @ np.linalg.solve(Sigma, mu))


def test_markowitz_drops_rows_with_nan() -> None:
    X = _mk_panel(100, 3, seed=1)
    X[[2, 40], 1] = np.nan
    assert markowitz(X).df2 == 98


def test_markowitz_errors() -> None:
    with pytest.raises(InvalidArgumentError):
        markowitz(np.zeros((3, 5)))
    with pytest.raises(InvalidArgumentError):
        markowitz(np.zeros((4, 3, 2)))
    with pytest.raises(DomainError):
        markowitz(np.ones((20, 2)))


def test_null_scenario() -> None:
    X = _mk_panel(6000, 6, seed=6000)
    s = sropt_from_returns(X, ope=253.0)

    assert s.df1 == 6
    assert s.df2 == 6000
    assert s.value == pytest.approx(np.sqrt(s.T2 / 6000.0) * np.sqrt(253.0))
    assert abs(s.inference("unbiased")) < 1.0
    assert s.inference("MLE") >= 0.0
    assert s.inference("KRS") >= 0.0


def test_signal_scenario() -> None:
    X = _mk_panel(4000, 3, seed=3, mean=0.001)
    s = sropt_from_returns(X)
    ci = s.confint(0.95)
    assert 0.0 < ci.lower < ci.upper
    # the bounds solve the confidence equations
    assert psropt(s.value, 3, 4000, ci.upper) == pytest.approx(0.025, abs=1e-8)
    assert psropt(s.value, 3, 4000, ci.lower) == pytest.approx(0.975, abs=1e-8)
    assert sropt_test(s).p_value < 1e-6
    # shrinkage estimate below the biased sample value
    assert 0.0 < s.inference("KRS") < s.value


def test_null_confint_and_test() -> None:
    s = sropt_from_returns(_mk_panel(500, 5, seed=4))
    ci = s.confint(0.90)
    assert 0.0 <= ci.lower <= ci.upper
    p = sropt_test(s).p_value
    assert 0.0 < p < 1.0


def test_to_T2_cached_and_rebuilt() -> None:
    s = sropt_from_returns(_mk_panel(200, 2, seed=5), ope=12.0, drag=0.05)
    rebuilt = OptimalSharpeStatistic(value=s.value, df1=s.df1, df2=s.df2, drag=s.drag, ope=s.ope)
    assert rebuilt.to_T2() == pytest.approx(s.to_T2(), rel=1e-10)

    plain = OptimalSharpeStatistic(value=0.3, df1=3, df2=100, drag=0.2)
    assert plain.to_T2() == pytest.approx(100 * 0.5**2)


def test_sticky_zero_warns() -> None:
    s = OptimalSharpeStatistic(value=-0.5, df1=3, df2=100, drag=0.2)
    with capture_logs() as logs:
        assert s.to_T2() == 0.0
    assert any(e["event"] == "sropt_clamped_to_zero" and e["log_level"] == "warning" for e in logs)
    assert s.inference("KRS") == pytest.approx(-0.2)


def test_mle_inference_on_a_large_statistic() -> None:
    # T2 = 1000 * 10 = 10000
    s = OptimalSharpeStatistic(value=float(np.sqrt(10.0)), df1=2, df2=1000)
    ci = s.confint(0.95)
    mle = s.inference("MLE")
    assert ci.contains(mle)
    assert mle == pytest.approx(s.inference("KRS"), rel=0.02)


def test_dataframe_with_dates_infers_ope() -> None:
    idx = pd.date_range("2020-01-01", periods=400, freq="D")
    df = pd.DataFrame(_mk_panel(400, 3, seed=7), index=idx, columns=["a", "b", "c"])
    s = sropt_from_returns(df)
    assert s.ope == pytest.approx(365.25)
    assert sropt_from_returns(df, ope=252.0).ope == 252.0
    assert as_sropt(s) is s
    assert as_sropt(df.to_numpy()).ope == 1.0


def test_invalid_statistic() -> None:
    with pytest.raises(DomainError):
        OptimalSharpeStatistic(value=1.0, df1=5, df2=5)
    with pytest.raises(DomainError):
        OptimalSharpeStatistic(value=1.0, df1=2, df2=50, ope=0.0)
