"""Exponential Distribution.

``exp_rand`` is the standard exponential generator shared by the gamma,
Poisson and geometric samplers: Ahrens & Dieter (1972) algorithm SA,
which needs no logarithm. The integer part comes from counting leading
halvings of one uniform; the fraction from a short minimum-of-uniforms
run.

Reference:
    Ahrens, J.H. and Dieter, U. (1972). Computer methods for sampling
    from the exponential and normal distributions.
    Comm. ACM 15, 873-882.
"""

import math
import numpy as np

from ._family import Family, require

__all__ = ['exp_rand', 'Exponential']

# _Q[k-1] = sum(log(2)^j / j!, j = 1..k); _Q[15] is 1 to double precision
_Q = (
    0.6931471805599453,
    0.9333736875190459,
    0.9888777961838675,
    0.9984959252914960040,
    0.9998292811061389,
    0.9999833164100727,
    0.9999985508530855,
    0.9999998906925558,
    0.9999999924734159,
    0.9999999995283275,
    0.9999999999728814,
    0.9999999999985598,
    0.9999999999999289,
    0.9999999999999968,
    0.9999999999999999,
    1.0000000000000000,
)


def exp_rand(source) -> float:
    """One Exp(1) deviate from ``source`` (anything with ``internal_unif_rand``)."""
    unif = source.internal_unif_rand
    a = 0.0
    u = unif()
    while u <= 0.0 or u >= 1.0:
        u = unif()
    while True:
        u += u
        if u > 1.0:
            break
        a += _Q[0]
    u -= 1.0

    if u <= _Q[0]:
        return a + u

    i = 0
    ustar = unif()
    umin = ustar
    while True:
        ustar = unif()
        if umin > ustar:
            umin = ustar
        i += 1
        if u <= _Q[i]:
            break
    return a + umin * _Q[0]


class Exponential(Family):
    """Exponential distribution with rate ``rate`` (mean ``1 / rate``)."""

    def _draw(self, rate: float) -> float:
        if math.isinf(rate):
            return 0.0
        return exp_rand(self._normal) / rate

    @staticmethod
    def _check(rate: np.ndarray) -> None:
        require(~np.isnan(rate) & (rate > 0), "rate must be positive")

    def rexp(self, n, rate=1.0) -> np.ndarray:
        """Draw ``n`` exponential deviates.

        Example:
            >>> Exponential(normal).rexp(3, rate=[1.0, 2.0])
        """
        return self._generate(n, self._draw, self._check, rate=rate)
