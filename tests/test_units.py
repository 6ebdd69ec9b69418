"""Tests for the unit conversions.

These are pure functions; the checks are exact identities and the
``infer_ope`` calendar arithmetic.
"""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from sharper.errors import DomainError, InvalidArgumentError
from sharper.units import (
    F_to_T2,
    T2_to_F,
    T2_to_sropt,
    annualize,
    compute_sr,
    deannualize,
    infer_ope,
    signed_sqrt,
    sr_to_t,
    sropt_to_T2,
    t_to_sr,
)


def test_annualize_deannualize_are_inverse() -> None:
    x = np.array([-0.3, 0.0, 0.05, 1.2])
    out = deannualize(annualize(x, 252.0), 252.0)
    assert np.allclose(out, x, rtol=1e-14, atol=0.0)
    assert annualize(0.1, 4.0) == pytest.approx(0.2)


def test_scalar_in_float_out() -> None:
    assert isinstance(annualize(0.1, 12.0), float)
    assert isinstance(signed_sqrt(4.0), float)


@pytest.mark.parametrize("ope", [0.0, -1.0])
def test_non_positive_ope_rejected(ope: float) -> None:
    with pytest.raises(DomainError):
        annualize(1.0, ope)
    with pytest.raises(DomainError):
        deannualize(1.0, ope)


def test_compute_sr() -> None:
    assert compute_sr(0.02, 0.01, 0.05, ope=4.0) == pytest.approx(0.4)
    with pytest.raises(DomainError):
        compute_sr(0.02, 0.0, 0.0)


def test_sr_t_round_trip() -> None:
    rescale = 1.0 / np.sqrt(500.0)
    sr = 0.75
    t = sr_to_t(sr, rescale, 252.0)
    assert t == pytest.approx(sr / (rescale * np.sqrt(252.0)))
    assert t_to_sr(t, rescale, 252.0) == pytest.approx(sr, rel=1e-14)


def test_T2_F_round_trip() -> None:
    T2 = np.array([0.0, 1.0, 12.5])
    F = T2_to_F(T2, 3, 60)
    assert np.allclose(F, T2 * 57.0 / (3.0 * 59.0))
    assert np.allclose(F_to_T2(F, 3, 60), T2)
    with pytest.raises(InvalidArgumentError):
        T2_to_F(1.0, 5, 5)


def test_T2_sropt_conversions() -> None:
    z = T2_to_sropt(25.0, 100, ope=4.0, drag=0.1)
    assert z == pytest.approx(np.sqrt(0.25) * 2.0 - 0.1)
    assert sropt_to_T2(z, 100, ope=4.0, drag=0.1) == pytest.approx(25.0)
    # negative T2 is floored, leaving only the drag
    assert T2_to_sropt(-3.0, 100, drag=0.1) == pytest.approx(-0.1)
    # below -drag the undragged value is clamped, not squared
    assert sropt_to_T2(-0.5, 100, drag=0.2) == 0.0
    assert np.allclose(sropt_to_T2(np.array([-0.5, 0.8]), 100, drag=0.2), [0.0, 100.0])


def test_signed_sqrt_keeps_sign() -> None:
    out = signed_sqrt(np.array([-4.0, 0.0, 9.0]))
    assert np.array_equal(out, np.array([-2.0, 0.0, 3.0]))


def test_infer_ope_daily_and_weekly() -> None:
    daily = pd.date_range("2020-01-01", periods=367, freq="D")
    assert infer_ope(daily) == pytest.approx(365.25)

    weekly = pd.date_range("2020-01-05", periods=105, freq="W")
    assert infer_ope(weekly) == pytest.approx(365.25 / 7.0)


def test_infer_ope_rejects_bad_indexes() -> None:
    with pytest.raises(TypeError):
        infer_ope(pd.RangeIndex(10))
    with pytest.raises(InvalidArgumentError):
        infer_ope(pd.DatetimeIndex(["2020-01-01"]))
    with pytest.raises(InvalidArgumentError):
        infer_ope(pd.DatetimeIndex(["2020-01-03", "2020-01-01"]))
