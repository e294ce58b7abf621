"""Tests for dnorm / pnorm / qnorm and the Normal family."""

import math

import pytest
import numpy as np

try:
    from scipy import special
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False

from rmath import InvalidParameter
from rmath.rng import MersenneTwister
from rmath.rng.normal import Inversion, BoxMuller
from rmath.distributions import Normal, dnorm, pnorm, qnorm, pnorm_both
from rmath.math import pnorm_kernel, qnorm_kernel, dnorm_kernel

requires_scipy = pytest.mark.skipif(not SCIPY_AVAILABLE, reason="scipy not installed")


# =============================================================================
# pnorm
# =============================================================================

class TestPnorm:
    """Cody's algorithm for the normal CDF."""

    def test_center(self):
        assert pnorm(0.0) == 0.5
        assert pnorm(0.0, lower_tail=False) == 0.5

    def test_known_value(self):
        assert pnorm(1.96) == pytest.approx(0.9750021048517795, rel=1e-15)

    @requires_scipy
    def test_matches_scipy(self):
        x = np.linspace(-37.0, 8.0, 4001)
        np.testing.assert_allclose(pnorm(x), special.ndtr(x), rtol=1e-12)

    @requires_scipy
    def test_upper_tail_matches_scipy(self):
        x = np.linspace(-8.0, 37.0, 4001)
        np.testing.assert_allclose(pnorm(x, lower_tail=False), special.ndtr(-x), rtol=1e-12)

    @requires_scipy
    def test_log_scale_far_tail(self):
        x = np.array([-40.0, -100.0, -1000.0])
        np.testing.assert_allclose(pnorm(x, log_p=True), special.log_ndtr(x), rtol=1e-10)

    def test_tails_sum_to_one(self):
        for x in np.linspace(-10.0, 10.0, 801):
            cum, ccum = pnorm_both(x)
            assert abs(cum + ccum - 1.0) < 1e-12

    def test_monotone(self):
        p = pnorm(np.linspace(-40.0, 40.0, 10001))
        assert np.all(np.diff(p) >= 0.0)

    def test_location_scale(self):
        assert pnorm(7.0, mean=5.0, sd=2.0) == pnorm(1.0)

    def test_infinities(self):
        assert pnorm(math.inf) == 1.0
        assert pnorm(-math.inf) == 0.0
        assert pnorm(-math.inf, log_p=True) == -math.inf
        assert math.isnan(pnorm(math.inf, mean=math.inf))

    def test_nan_propagates(self):
        assert math.isnan(pnorm(math.nan))
        assert math.isnan(pnorm(1.0, mean=math.nan))

    def test_zero_sd_is_a_step(self):
        assert pnorm(0.9, mean=1.0, sd=0.0) == 0.0
        assert pnorm(1.0, mean=1.0, sd=0.0) == 1.0

    def test_negative_sd(self):
        with pytest.raises(InvalidParameter):
            pnorm(0.0, sd=-1.0)

    def test_pnorm_both_single_tail(self):
        cum, _ = pnorm_both(-3.0, 0)
        _, ccum = pnorm_both(3.0, 1)
        assert cum == pytest.approx(ccum, rel=1e-15)

    def test_pnorm_both_bad_tail(self):
        with pytest.raises(InvalidParameter):
            pnorm_both(0.0, 3)

    def test_kernel_matches_wrapper(self):
        assert pnorm_kernel(-1.5, 0.0, 1.0, True, False) == pnorm(-1.5)


# =============================================================================
# qnorm
# =============================================================================

class TestQnorm:
    """Wichura's AS241."""

    def test_known_value(self):
        assert qnorm(0.975) == pytest.approx(1.959963984540054, rel=1e-15)
        assert qnorm(0.5) == 0.0

    @requires_scipy
    def test_matches_scipy(self):
        p = np.concatenate([np.logspace(-300, -1, 600), np.linspace(0.1, 0.9, 401)])
        np.testing.assert_allclose(qnorm(p), special.ndtri(p), rtol=1e-12)

    def test_inverts_pnorm(self):
        x = np.linspace(-8.0, 5.0, 131)
        np.testing.assert_allclose(qnorm(pnorm(x)), x, atol=1e-9)

    def test_boundaries(self):
        assert qnorm(0.0) == -math.inf
        assert qnorm(1.0) == math.inf
        assert qnorm(0.0, lower_tail=False) == math.inf
        assert math.isnan(qnorm(1.5))
        assert math.isnan(qnorm(-0.1))

    def test_log_scale_boundaries(self):
        assert qnorm(0.0, log_p=True) == math.inf
        assert qnorm(-math.inf, log_p=True) == -math.inf
        assert math.isnan(qnorm(0.5, log_p=True))

    def test_log_scale(self):
        assert qnorm(math.log(0.975), log_p=True) == pytest.approx(1.959963984540054, rel=1e-13)

    def test_log_scale_beyond_double_range(self):
        """exp(-1000) underflows, its quantile does not."""
        x = qnorm(-1000.0, log_p=True)
        assert -46.0 < x < -43.0

    def test_upper_tail(self):
        assert qnorm(0.025, lower_tail=False) == pytest.approx(qnorm(0.975), rel=1e-14)

    def test_zero_sd(self):
        assert qnorm(0.3, mean=2.0, sd=0.0) == 2.0

    def test_location_scale(self):
        assert qnorm(0.975, mean=10.0, sd=3.0) == pytest.approx(10.0 + 3.0 * 1.959963984540054)

    def test_nan_propagates(self):
        assert math.isnan(qnorm(math.nan))
        assert math.isnan(qnorm_kernel(0.5, math.nan, 1.0, True, False))


# =============================================================================
# dnorm
# =============================================================================

class TestDnorm:
    """Normal density."""

    def test_peak(self):
        assert dnorm(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi), rel=1e-15)

    def test_log(self):
        assert dnorm(1.0, log=True) == pytest.approx(-(0.5 * math.log(2.0 * math.pi) + 0.5), rel=1e-15)

    def test_far_tail_accuracy(self):
        expected = math.exp(-450.0) / math.sqrt(2.0 * math.pi)
        assert dnorm(30.0) == pytest.approx(expected, rel=1e-12)

    def test_underflow(self):
        assert dnorm(40.0) == 0.0
        assert dnorm(40.0, log=True) == pytest.approx(-(0.5 * math.log(2.0 * math.pi) + 800.0))

    def test_scale(self):
        assert dnorm(3.0, mean=1.0, sd=2.0) == pytest.approx(dnorm(1.0) / 2.0, rel=1e-15)

    def test_symmetric(self):
        x = np.linspace(0.0, 10.0, 51)
        np.testing.assert_array_equal(dnorm(x), dnorm(-x))

    def test_zero_sd(self):
        assert dnorm(1.0, mean=1.0, sd=0.0) == math.inf
        assert dnorm(1.5, mean=1.0, sd=0.0) == 0.0

    def test_infinite_sd(self):
        assert dnorm(1.0, sd=math.inf) == 0.0

    def test_negative_sd(self):
        with pytest.raises(InvalidParameter):
            dnorm(0.0, sd=[1.0, -2.0])

    def test_kernel_matches_wrapper(self):
        assert dnorm_kernel(0.7, 0.0, 1.0, False) == dnorm(0.7)


# =============================================================================
# Recycling
# =============================================================================

class TestVectorizedArguments:
    """Argument recycling and return types."""

    def test_scalar_returns_float(self):
        assert isinstance(pnorm(1.0), float)
        assert isinstance(qnorm(0.2), float)
        assert isinstance(dnorm(0.2), float)

    def test_array_returns_array(self):
        out = pnorm([0.0, 1.0, 2.0])
        assert isinstance(out, np.ndarray)
        assert out.shape == (3,)

    def test_recycles_to_longest(self):
        out = dnorm(0.0, mean=[0.0, 1.0, 2.0, 3.0], sd=[1.0, 2.0])
        expected = [dnorm(0.0, 0.0, 1.0), dnorm(0.0, 1.0, 2.0), dnorm(0.0, 2.0, 1.0), dnorm(0.0, 3.0, 2.0)]
        np.testing.assert_allclose(out, expected, rtol=1e-15)

    def test_empty_argument(self):
        assert pnorm([]).shape == (0,)


# =============================================================================
# Normal family
# =============================================================================

class TestNormalFamily:
    """rnorm and the bound d/p/q methods."""

    def test_rnorm_matches_r(self):
        """set.seed(1); rnorm(3)"""
        family = Normal(Inversion(MersenneTwister(1)))
        np.testing.assert_allclose(
            family.rnorm(3), [-0.6264538107, 0.1836433242, -0.8356286124], atol=1e-9,
        )

    def test_location_scale(self):
        a = Normal(Inversion(MersenneTwister(4))).rnorm(5)
        b = Normal(Inversion(MersenneTwister(4))).rnorm(5, mean=10.0, sd=3.0)
        np.testing.assert_allclose(b, 10.0 + 3.0 * a, rtol=1e-14)

    def test_recycled_parameters(self):
        x = Normal(Inversion(MersenneTwister(4))).rnorm(6, mean=[0.0, 100.0], sd=1.0)
        assert np.all(x[1::2] > 90.0)
        assert np.all(x[0::2] < 10.0)

    def test_zero_sd_returns_mean_without_drawing(self):
        rng = MersenneTwister(4)
        family = Normal(Inversion(rng))
        before = rng.seed
        np.testing.assert_array_equal(family.rnorm(3, mean=2.5, sd=0.0), [2.5, 2.5, 2.5])
        assert rng.seed == before

    def test_infinite_mean(self):
        x = Normal(Inversion(MersenneTwister(4))).rnorm(2, mean=[math.inf, -math.inf])
        np.testing.assert_array_equal(x, [math.inf, -math.inf])

    def test_mixed_path_consumes_same_stream(self):
        """A zero-sd element in the loop path draws nothing."""
        a = Normal(Inversion(MersenneTwister(6))).rnorm(3, sd=[1.0, 0.0, 1.0])
        b = Normal(Inversion(MersenneTwister(6))).rnorm(2)
        assert a[1] == 0.0
        np.testing.assert_array_equal(a[[0, 2]], b)

    def test_n_as_sequence(self):
        assert Normal(Inversion(MersenneTwister(1))).rnorm([5, 6, 7, 8]).shape == (4,)

    def test_n_zero(self):
        assert Normal(Inversion(MersenneTwister(1))).rnorm(0).shape == (0,)

    def test_invalid_parameters(self):
        rng = MersenneTwister(4)
        family = Normal(Inversion(rng))
        before = rng.seed
        with pytest.raises(InvalidParameter):
            family.rnorm(3, sd=[1.0, -1.0])
        with pytest.raises(InvalidParameter):
            family.rnorm(3, mean=math.nan)
        with pytest.raises(InvalidParameter):
            family.rnorm(3, sd=math.inf)
        with pytest.raises(InvalidParameter):
            family.rnorm(-1)
        assert rng.seed == before

    def test_any_generator(self):
        family = Normal(BoxMuller(MersenneTwister(2)))
        x = family.rnorm(20_000)
        assert abs(x.mean()) < 0.04

    def test_accepts_bare_engine(self):
        family = Normal(MersenneTwister(1))
        assert isinstance(family.normal, Inversion)
        np.testing.assert_allclose(family.rnorm(1), [-0.6264538107], atol=1e-9)

    def test_rejects_other_sources(self):
        with pytest.raises(TypeError):
            Normal("Inversion")

    def test_bound_functions(self):
        family = Normal(MersenneTwister(1))
        assert family.pnorm(1.96) == pnorm(1.96)
        assert family.qnorm(0.3) == qnorm(0.3)
        assert family.dnorm(0.3) == dnorm(0.3)
