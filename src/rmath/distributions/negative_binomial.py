"""Negative Binomial Distribution.

Drawn as a gamma-Poisson mixture: lambda ~ Gamma(size, (1 - prob) / prob),
then X ~ Poisson(lambda). The ``mu`` parametrization uses the gamma scale
mu / size. There an infinite ``size`` is the Poisson limit and is replaced
by DBL_MAX / 2 so the gamma draw stays finite. The ``prob`` form has no
such limit, so an infinite ``size`` is rejected unless ``prob == 1``.
"""

import math
from typing import Optional

import numpy as np

from ..rng.normal import IRNGNormal
from ._family import Family, require
from .gamma import GammaSampler
from .poisson import PoissonSampler

__all__ = ['NegativeBinomial']

_HALF_DBL_MAX = 1.7976931348623157e308 / 2.0


class NegativeBinomial(Family):
    """Negative binomial family sharing one generator between its gamma
    and Poisson stages."""

    def __init__(self, normal: Optional[IRNGNormal] = None):
        super().__init__(normal)
        self._gamma = GammaSampler(self._normal)
        self._poisson = PoissonSampler(self._normal)

    @staticmethod
    def _check_prob(size: np.ndarray, prob: np.ndarray) -> None:
        require(~np.isnan(size) & (size > 0), "size must be positive")
        require(np.isfinite(prob) & (prob > 0) & (prob <= 1), "prob must lie in (0, 1]")
        # the mean size * (1 - prob) / prob diverges
        require(np.isfinite(size) | (prob == 1), "size must be finite unless prob == 1")

    @staticmethod
    def _check_mu(size: np.ndarray, mu: np.ndarray) -> None:
        require(~np.isnan(size) & (size > 0), "size must be positive")
        require(np.isfinite(mu) & (mu >= 0), "mu must be finite and non-negative")

    def _draw_prob(self, size: float, prob: float) -> float:
        if prob == 1.0:
            return 0.0
        return self._poisson.sample(self._gamma.sample(size, (1.0 - prob) / prob))

    def _draw_mu(self, size: float, mu: float) -> float:
        if mu == 0.0:
            return 0.0
        if math.isinf(size):
            size = _HALF_DBL_MAX
        return self._poisson.sample(self._gamma.sample(size, mu / size))

    def rnbinom(self, n, size, prob) -> np.ndarray:
        """Failures before the ``size``-th success, success probability ``prob``."""
        return self._generate(n, self._draw_prob, self._check_prob, size=size, prob=prob)

    def rnbinom_mu(self, n, size, mu) -> np.ndarray:
        """Same distribution parametrized by its mean ``mu``."""
        return self._generate(n, self._draw_mu, self._check_mu, size=size, mu=mu)
