"""Tests for the Hotelling T2 and maximal Sharpe ratio distributions."""

from __future__ import annotations

import numpy as np
import pytest
from scipy import integrate, stats

from sharper.distributions.hotelling import dT2, pT2, qT2, rT2
from sharper.distributions.sropt import (
    dsropt,
    psropt,
    qco_sropt,
    qsropt,
    rsropt,
    sropt_confint,
    sropt_ncp,
)
from sharper.errors import DomainError


def test_one_asset_T2_is_squared_t() -> None:
    n = 30
    x = np.array([0.5, 2.0, 6.0])
    expected = 1.0 - 2.0 * stats.t.sf(np.sqrt(x), n - 1)
    assert np.allclose(pT2(x, 1, n), expected, atol=1e-8)


def test_T2_quantile_round_trip() -> None:
    p = np.array([0.05, 0.5, 0.95])
    q = qT2(p, 3, 40, 2.5)
    assert np.allclose(pT2(q, 3, 40, 2.5), p, atol=1e-8)
    assert qT2(0.2, 3, 40, lower_tail=False) == pytest.approx(qT2(0.8, 3, 40))


def test_T2_density_integrates_to_one() -> None:
    total, _ = integrate.quad(lambda x: dT2(x, 3, 40, 2.0), 0.0, np.inf)
    assert total == pytest.approx(1.0, abs=1e-6)


def test_T2_cdf_non_increasing_in_ncp() -> None:
    d = np.linspace(0.0, 20.0, 41)
    p = pT2(8.0, 4, 60, d)
    assert np.all(np.diff(p) <= 1e-12)


def test_T2_sampling_matches_cdf() -> None:
    x = rT2(50_000, 3, 40, 2.0, rng=np.random.default_rng(5))
    res = stats.kstest(x, lambda q: pT2(q, 3, 40, 2.0))
    assert res.pvalue > 1e-3


@pytest.mark.parametrize("df1,df2", [(0, 10), (5, 5), (6, 3)])
def test_hotelling_df_checked(df1: int, df2: int) -> None:
    with pytest.raises(DomainError):
        pT2(1.0, df1, df2)


def test_T2_rejects_negative_ncp() -> None:
    with pytest.raises(DomainError):
        pT2(1.0, 2, 10, -1.0)


def test_sropt_ncp() -> None:
    assert sropt_ncp(2.0, 1000, ope=250.0) == pytest.approx(1000 * 4.0 / 250.0)
    with pytest.raises(DomainError):
        sropt_ncp(-0.1, 100)


def test_sropt_density_integrates_to_one() -> None:
    total, _ = integrate.quad(lambda x: dsropt(x, 3, 50, 0.5), 0.0, np.inf)
    assert total == pytest.approx(1.0, abs=1e-6)


def test_sropt_cdf_properties() -> None:
    zeta = np.linspace(0.0, 2.0, 21)
    p = psropt(0.8, 4, 100, zeta, ope=4.0)
    assert np.all(np.diff(p) <= 1e-12)
    # no mass below -drag
    assert psropt(-0.3, 4, 100, 0.5, drag=0.2) == 0.0
    assert psropt(-0.3, 4, 100, 0.5, drag=0.2, lower_tail=False) == 1.0


def test_sropt_quantile_round_trip() -> None:
    p = np.array([0.1, 0.5, 0.9])
    q = qsropt(p, 4, 100, 0.7, ope=4.0, drag=0.05)
    assert np.allclose(psropt(q, 4, 100, 0.7, ope=4.0, drag=0.05), p, atol=1e-8)


def test_sropt_sampling_matches_cdf() -> None:
    x = rsropt(50_000, 4, 100, 0.7, ope=4.0, rng=9)
    res = stats.kstest(x, lambda q: psropt(q, 4, 100, 0.7, ope=4.0))
    assert res.pvalue > 1e-3


def test_confidence_quantile_solves_cdf() -> None:
    z_s, df1, df2, ope = 1.5, 4, 400, 4.0
    for p in (0.025, 0.5, 0.975):
        zeta = qco_sropt(p, df1, df2, z_s, ope)
        assert zeta >= 0.0
        assert psropt(z_s, df1, df2, zeta, ope) == pytest.approx(1.0 - p, abs=1e-8)


def test_confidence_quantile_clamps_at_zero() -> None:
    assert qco_sropt(0.975, 4, 400, 0.0) == 0.0


def test_sropt_confint() -> None:
    ci = sropt_confint(1.5, 4, 400, 0.95, ope=4.0)
    assert 0.0 <= ci.lower < ci.upper
    assert ci.upper == pytest.approx(qco_sropt(0.975, 4, 400, 1.5, 4.0), abs=1e-9)
    assert ci.lower == pytest.approx(qco_sropt(0.025, 4, 400, 1.5, 4.0), abs=1e-9)

    dragged = sropt_confint(1.5 - 0.2, 4, 400, 0.95, ope=4.0, drag=0.2)
    assert dragged.lower == pytest.approx(ci.lower - 0.2, abs=1e-9)
    assert dragged.upper == pytest.approx(ci.upper - 0.2, abs=1e-9)
