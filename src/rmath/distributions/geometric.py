"""Geometric Distribution.

Failures before the first success: a Poisson deviate whose mean is an
exponential with scale (1 - p) / p (Devroye 1986, ch. 10, example 1.5).
"""

from typing import Optional

import numpy as np

from ..rng.normal import IRNGNormal
from ._family import Family, require
from .exponential import exp_rand
from .poisson import PoissonSampler

__all__ = ['Geometric']


class Geometric(Family):

    def __init__(self, normal: Optional[IRNGNormal] = None):
        super().__init__(normal)
        self._poisson = PoissonSampler(self._normal)

    @staticmethod
    def _check(prob: np.ndarray) -> None:
        require(np.isfinite(prob) & (prob > 0) & (prob <= 1), "prob must lie in (0, 1]")

    def _draw(self, prob: float) -> float:
        return self._poisson.sample(exp_rand(self._normal) * ((1.0 - prob) / prob))

    def rgeom(self, n, prob) -> np.ndarray:
        return self._generate(n, self._draw, self._check, prob=prob)
