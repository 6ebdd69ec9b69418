"""Tests for confidence-curve inversion.

The CDFs used here are shifted normals, so the exact roots are known.
"""

from __future__ import annotations

import numpy as np
import pytest
from scipy import stats

from sharper.errors import ConvergenceError, InvalidArgumentError
from sharper.inversion import ConfidenceInterval, expand_bracket, invert_cdf, resolve_levels
from sharper.utils.config import SearchConfig


def _shifted(obs: float):
    # P(X <= obs) for X ~ N(rho, 1); non-increasing in rho
    return lambda rho: float(stats.norm.cdf(obs - rho))


@pytest.mark.parametrize("lower,upper", [(-1.0, 1.0), (10.0, 11.0), (-50.0, -49.0)])
@pytest.mark.parametrize("target", [0.01, 0.3, 0.5, 0.975])
def test_round_trip(lower: float, upper: float, target: float) -> None:
    f = _shifted(1.0)
    root = invert_cdf(target, f, lower, upper)
    assert f(root) == pytest.approx(target, abs=1e-10)
    assert root == pytest.approx(1.0 - stats.norm.ppf(target), abs=1e-8)


def test_floor_clamps_roots_below_it() -> None:
    # root would be at -2
    assert invert_cdf(0.5, _shifted(-2.0), 0.0, 1.0, floor=0.0) == 0.0


def test_floor_keeps_roots_above_it() -> None:
    assert invert_cdf(0.5, _shifted(2.0), 0.0, 0.5, floor=0.0) == pytest.approx(2.0, abs=1e-9)


def test_bracket_expansion_cap() -> None:
    with pytest.raises(ConvergenceError):
        invert_cdf(0.5, _shifted(1000.0), 0.0, 1.0, search=SearchConfig(max_doublings=2))


def test_nan_cdf_raises() -> None:
    with pytest.raises(ConvergenceError):
        invert_cdf(0.5, lambda rho: float("nan"), 0.0, 1.0)


@pytest.mark.parametrize("target", [0.0, 1.0, -0.2, 1.3])
def test_target_outside_unit_interval(target: float) -> None:
    with pytest.raises(InvalidArgumentError):
        invert_cdf(target, _shifted(0.0), -1.0, 1.0)


def test_expand_bracket_straddles_root() -> None:
    f = lambda rho: _shifted(3.0)(rho) - 0.5  # noqa: E731
    lo, hi, f_lo, f_hi = expand_bracket(f, -10.0, -9.0, search=SearchConfig())
    assert lo < 3.0 < hi
    assert f_lo >= 0.0 >= f_hi


def test_resolve_levels() -> None:
    lo, hi = resolve_levels(0.95)
    assert lo == pytest.approx(0.025)
    assert hi == pytest.approx(0.975)
    assert resolve_levels(level_lo=0.01, level_hi=0.9) == (0.01, 0.9)
    with pytest.raises(InvalidArgumentError):
        resolve_levels(1.5)
    with pytest.raises(InvalidArgumentError):
        resolve_levels(level_lo=0.6, level_hi=0.4)


def test_confidence_interval_labels() -> None:
    lo, hi = resolve_levels(0.95)
    ci = ConfidenceInterval(lower=-0.1, upper=0.4, level_lo=lo, level_hi=hi)
    assert ci.labels() == ("2.5 %", "97.5 %")
    assert ci.as_tuple() == (-0.1, 0.4)
    assert ci.contains(0.0)
    assert not ci.contains(np.float64(0.5))
