"""Tests for the gamma sampler and the Gamma family."""

import math

import pytest
import numpy as np

from rmath import InvalidParameter, InternalError, configure
from rmath.rng import MersenneTwister
from rmath.rng.normal import Inversion
from rmath.distributions import Gamma, GammaSampler, GammaCache


def _gamma(seed=42):
    return Gamma(Inversion(MersenneTwister(seed)))


# =============================================================================
# Moments
# =============================================================================

class TestGammaMoments:
    """Sample moments against the closed forms."""

    def test_gd_path(self, big_sample):
        """a >= 1 goes through GD."""
        x = _gamma().rgamma(big_sample, shape=5.0)
        assert np.all(x > 0)
        assert abs(x.mean() - 5.0) / 5.0 < 0.02
        assert abs(x.var() - 5.0) / 5.0 < 0.05

    def test_gs_path(self, big_sample):
        """a < 1 goes through GS."""
        x = _gamma().rgamma(big_sample, shape=0.5)
        assert np.all(x >= 0)
        assert abs(x.mean() - 0.5) / 0.5 < 0.03

    def test_large_shape(self):
        x = _gamma().rgamma(20_000, shape=200.0)
        assert abs(x.mean() - 200.0) / 200.0 < 0.01

    def test_scale(self):
        x = _gamma().rgamma(50_000, shape=2.0, scale=3.0)
        assert abs(x.mean() - 6.0) / 6.0 < 0.02

    def test_rate(self):
        x = _gamma().rgamma(50_000, shape=2.0, rate=2.0)
        assert abs(x.mean() - 1.0) < 0.02

    def test_shape_one_is_exponential(self):
        x = _gamma().rgamma(50_000, shape=1.0)
        assert abs(x.mean() - 1.0) < 0.02
        assert abs(x.var() - 1.0) < 0.05

    def test_rchisq(self):
        x = _gamma().rchisq(50_000, df=4.0)
        assert abs(x.mean() - 4.0) / 4.0 < 0.02
        assert abs(x.var() - 8.0) / 8.0 < 0.06


# =============================================================================
# Parameters
# =============================================================================

class TestGammaParameters:
    """Validation, recycling and degenerate cases."""

    def test_zero_scale(self):
        np.testing.assert_array_equal(_gamma().rgamma(3, shape=2.0, scale=0.0), [0.0, 0.0, 0.0])

    def test_infinite_rate(self):
        np.testing.assert_array_equal(_gamma().rgamma(2, shape=2.0, rate=math.inf), [0.0, 0.0])

    @pytest.mark.parametrize("shape", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_shape(self, shape):
        with pytest.raises(InvalidParameter):
            _gamma().rgamma(3, shape=shape)

    def test_negative_scale(self):
        with pytest.raises(InvalidParameter):
            _gamma().rgamma(3, shape=1.0, scale=-1.0)

    def test_rate_and_scale_must_agree(self):
        family = _gamma()
        assert family.rgamma(2, shape=2.0, rate=2.0, scale=0.5).shape == (2,)
        with pytest.raises(InvalidParameter):
            family.rgamma(2, shape=2.0, rate=2.0, scale=3.0)

    def test_invalid_df(self):
        with pytest.raises(InvalidParameter):
            _gamma().rchisq(3, df=0.0)

    def test_no_draws_on_error(self):
        rng = MersenneTwister(1)
        family = Gamma(Inversion(rng))
        before = rng.seed
        with pytest.raises(InvalidParameter):
            family.rgamma(4, shape=[1.0, 2.0, -3.0])
        assert rng.seed == before

    def test_recycled_shapes(self):
        x = _gamma().rgamma(6, shape=[0.5, 500.0])
        assert np.all(x[1::2] > 300.0)
        assert np.all(x[0::2] < 20.0)

    def test_reproducible(self):
        np.testing.assert_array_equal(
            _gamma(9).rgamma(100, shape=[0.3, 3.0, 30.0]),
            _gamma(9).rgamma(100, shape=[0.3, 3.0, 30.0]),
        )


# =============================================================================
# Sampler cache
# =============================================================================

class TestGammaSampler:
    """GD constants are keyed on the shape."""

    def test_no_cache_before_gd(self):
        sampler = GammaSampler(Inversion(MersenneTwister(1)))
        assert sampler.constants() is None
        sampler.sample(0.7)
        assert sampler.constants() is None

    def test_cache_follows_last_shape(self):
        sampler = GammaSampler(Inversion(MersenneTwister(1)))
        sampler.sample(3.0)
        first = sampler.constants()
        assert first.a == 3.0
        sampler.sample(7.0)
        assert sampler.constants().a == 7.0
        sampler.sample(3.0)
        assert sampler.constants() == first
        assert sampler.constants() == GammaCache.compute(3.0)

    def test_constant_branches(self):
        assert GammaCache.compute(2.0).si == 1.235
        assert GammaCache.compute(13.0).b == pytest.approx(1.654 + 0.0076 * 12.5)
        assert GammaCache.compute(20.0).b == 1.77

    def test_reseed_clears_cache(self):
        rng = MersenneTwister(1)
        sampler = GammaSampler(Inversion(rng))
        sampler.sample(4.0)
        rng.init(1)
        assert sampler.constants() is None

    def test_constants_is_a_copy(self):
        sampler = GammaSampler(Inversion(MersenneTwister(1)))
        sampler.sample(4.0)
        assert sampler.constants() is not sampler.constants()

    def test_direct_validation(self):
        sampler = GammaSampler(Inversion(MersenneTwister(1)))
        with pytest.raises(InvalidParameter):
            sampler.sample(math.nan)
        with pytest.raises(InvalidParameter):
            sampler.sample(2.0, scale=math.inf)

    def test_rejection_guard(self):
        """A cap of one attempt per loop trips on the first rejection."""
        configure(max_rejections=1)
        sampler = GammaSampler(Inversion(MersenneTwister(3)))
        with pytest.raises(InternalError):
            for _ in range(2000):
                sampler.sample(0.5)
