"""Tests for the rescaled non-central t distribution.

Checks monotonicity of the CDF, the quantile/CDF round trip and agreement
between sampled variates and the analytic CDF.
"""

from __future__ import annotations

import numpy as np
import pytest
from scipy import stats

from sharper.distributions.rescaled_t import (
    LambdaPrimeParams,
    drt,
    prt,
    psr,
    qrt,
    qsr,
    rrt,
    rsr,
    sr_rescale,
)
from sharper.errors import DomainError


@pytest.mark.parametrize("df,K,rho", [(5.0, 0.5, 0.0), (30.0, 0.2, 0.4), (500.0, 1.0, -1.5)])
def test_cdf_non_decreasing_in_z(df: float, K: float, rho: float) -> None:
    z = np.linspace(-5.0, 5.0, 401)
    p = prt(z, df, K, rho)
    assert np.all(np.diff(p) >= -1e-12)
    assert p[0] < 0.5 < p[-1]


def test_cdf_non_increasing_in_rho() -> None:
    rho = np.linspace(-2.0, 2.0, 201)
    p = prt(0.3, 40.0, 0.25, rho)
    assert p.shape == rho.shape
    assert np.all(np.diff(p) <= 1e-12)


@pytest.mark.parametrize("df", [5.0, 50.0, 500.0])
@pytest.mark.parametrize("K,rho", [(0.1, 0.0), (0.5, 0.5), (1.0, -1.0)])
def test_quantile_cdf_round_trip(df: float, K: float, rho: float) -> None:
    p = np.array([0.001, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 0.999])
    q = qrt(p, df, K, rho)
    assert np.all(np.diff(q) > 0)
    assert np.allclose(prt(q, df, K, rho), p, rtol=0.0, atol=1e-8)


def test_upper_tail_complements_lower_tail() -> None:
    z = np.array([-1.0, 0.0, 0.7])
    lo = prt(z, 12.0, 0.4, 0.3)
    hi = prt(z, 12.0, 0.4, 0.3, lower_tail=False)
    assert np.allclose(lo + hi, 1.0)
    assert qrt(0.2, 12.0, 0.4, 0.3, lower_tail=False) == pytest.approx(qrt(0.8, 12.0, 0.4, 0.3))


def test_density_is_rescaled_nct_density() -> None:
    z = np.array([-0.5, 0.1, 0.9])
    expected = stats.nct.pdf(z / 0.3, 20.0, 0.6 / 0.3) / 0.3
    assert np.allclose(drt(z, 20.0, 0.3, 0.6), expected)


def test_sampling_matches_cdf() -> None:
    rng = np.random.default_rng(12345)
    x = rrt(100_000, 10.0, 0.5, 0.25, rng=rng)
    assert x.shape == (100_000,)
    res = stats.kstest(x, lambda z: prt(z, 10.0, 0.5, 0.25))
    assert res.statistic < 0.01
    assert res.pvalue > 1e-3


def test_rrt_is_reproducible_with_seed() -> None:
    a = rrt(50, 8.0, 0.3, 0.1, rng=7)
    b = rrt(50, 8.0, 0.3, 0.1, rng=np.random.default_rng(7))
    assert np.array_equal(a, b)


@pytest.mark.parametrize("df,K,rho", [(0.0, 1.0, 0.0), (-1.0, 1.0, 0.0), (5.0, 0.0, 0.0), (5.0, np.inf, 0.0), (5.0, 1.0, np.inf)])
def test_invalid_parameters(df: float, K: float, rho: float) -> None:
    with pytest.raises(DomainError):
        prt(0.0, df, K, rho)
    with pytest.raises(DomainError):
        LambdaPrimeParams(df=df, K=K, rho=rho)


def test_quantile_rejects_bad_probabilities() -> None:
    with pytest.raises(DomainError):
        qrt(1.5, 10.0, 1.0)


def test_params_ncp() -> None:
    assert LambdaPrimeParams(df=10.0, K=0.5, rho=0.2).ncp == pytest.approx(0.4)


def test_sr_wrappers_use_sample_rescaling() -> None:
    df, ope, zeta = 251.0, 252.0, 0.8
    K = sr_rescale(df, ope)
    assert K == pytest.approx(1.0)
    assert psr(0.5, df, zeta, ope) == pytest.approx(prt(0.5, df, K, zeta))
    assert qsr(0.3, df, zeta, ope) == pytest.approx(qrt(0.3, df, K, zeta))


def test_rsr_centred_near_zeta() -> None:
    x = rsr(20_000, 999.0, zeta=1.0, ope=1000.0, rng=3)
    # sd of the SR here is about sqrt(1 + 1/2000) ~ 1; mean bias is tiny
    assert abs(float(np.mean(x)) - 1.0) < 0.05
