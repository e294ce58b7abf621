"""Beta Distribution Sampler (Cheng 1978).

With a = min(shape1, shape2) and b = max(shape1, shape2):

    a <= 1: algorithm BC, two-piece rejection on a log-logistic proposal
    a > 1:  algorithm BB, log-logistic proposal with a fast squeeze

Both write the candidate as w = AA * exp(v), v = beta * log(u1 / (1 - u1)),
clamped to DBL_MAX so a huge v cannot produce inf / inf.

Reference:
    Cheng, R.C.H. (1978). Generating beta variates with nonintegral shape
    parameters. Comm. ACM 21, 317-322.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from .._errors import InvalidParameter
from .._guard import attempts, exhausted
from ..optim import get_logger
from ..rng.normal import IRNGNormal
from ._family import Family, as_normal, require

__all__ = ['BetaCache', 'BetaSampler', 'Beta']

_log = get_logger(__name__)

_DBL_MAX = 1.7976931348623157e308
# DBL_MAX_EXP * ln 2 = log(DBL_MAX)
_EXPMAX = 1024 * math.log(2.0)

_LOG4 = 1.3862944
_BB_SQUEEZE = 2.609438  # 1 + log(5)


@dataclass(frozen=True)
class BetaCache:
    """Cheng constants keyed by the call's ``(aa, bb)``.

    BC fills ``beta, delta, k1, k2``; BB fills ``beta, gamma``. The unused
    fields are 0.
    """

    aa: float
    bb: float
    beta: float = 0.0
    gamma: float = 0.0
    delta: float = 0.0
    k1: float = 0.0
    k2: float = 0.0

    @classmethod
    def compute(cls, aa: float, bb: float) -> 'BetaCache':
        a = min(aa, bb)
        b = max(aa, bb)
        alpha = a + b
        if a <= 1.0:
            beta = 1.0 / a
            delta = 1.0 + b - a
            k1 = delta * (0.0138889 + 0.0416667 * a) / (b * beta - 0.777778)
            k2 = 0.25 + (0.5 + 0.25 / delta) * a
            return cls(aa=aa, bb=bb, beta=beta, delta=delta, k1=k1, k2=k2)
        beta = math.sqrt((alpha - 2.0) / (2.0 * a * b - alpha))
        gamma = a + 1.0 / beta
        return cls(aa=aa, bb=bb, beta=beta, gamma=gamma)


def _v_w(beta: float, u1: float, scale: float) -> Tuple[float, float]:
    v = beta * math.log(u1 / (1.0 - u1))
    if v <= _EXPMAX:
        w = scale * math.exp(v)
        if math.isinf(w):
            w = _DBL_MAX
    else:
        w = _DBL_MAX
    return v, w


class BetaSampler:
    """Single beta deviates with a per-instance constant cache."""

    def __init__(self, normal: Optional[IRNGNormal] = None):
        self._normal = as_normal(normal)
        self._cache: Optional[BetaCache] = None
        self._normal.rng.attach(self)

    @property
    def normal(self) -> IRNGNormal:
        return self._normal

    def constants(self) -> Optional[BetaCache]:
        return None if self._cache is None else replace(self._cache)

    def invalidate(self) -> None:
        self._cache = None

    def _constants(self, aa: float, bb: float) -> BetaCache:
        k = self._cache
        if k is None or k.aa != aa or k.bb != bb:
            _log.debug("beta: recomputing constants for (%r, %r)", aa, bb)
            k = self._cache = BetaCache.compute(aa, bb)
        return k

    def sample(self, aa: float, bb: float) -> float:
        """One deviate with shapes ``aa`` and ``bb``."""
        for name, value in (('shape1', aa), ('shape2', bb)):
            if not math.isfinite(value) or value <= 0.0:
                raise InvalidParameter(f"beta: {name} must be finite and positive, got {value!r}")
        k = self._constants(aa, bb)
        a = min(aa, bb)
        b = max(aa, bb)
        if a <= 1.0:
            return self._bc(k, aa, a, b)
        return self._bb(k, aa, a, b)

    def _bc(self, k: BetaCache, aa: float, a: float, b: float) -> float:
        unif = self._normal.internal_unif_rand
        alpha = a + b
        for _ in attempts():
            u1 = unif()
            u2 = unif()
            if u1 < 0.5:
                y = u1 * u2
                z = u1 * y
                if 0.25 * u2 + z - y >= k.k1:
                    continue
            else:
                z = u1 * u1 * u2
                if z <= 0.25:
                    v, w = _v_w(k.beta, u1, b)
                    break
                if z >= k.k2:
                    continue
            v, w = _v_w(k.beta, u1, b)
            if alpha * (math.log(alpha / (a + w)) + v) - _LOG4 >= math.log(z):
                break
        else:
            raise exhausted("beta BC", shape1=aa, shape2=k.bb)
        return a / (a + w) if aa == a else w / (a + w)

    def _bb(self, k: BetaCache, aa: float, a: float, b: float) -> float:
        unif = self._normal.internal_unif_rand
        alpha = a + b
        for _ in attempts():
            u1 = unif()
            u2 = unif()
            v, w = _v_w(k.beta, u1, a)
            z = u1 * u1 * u2
            r = k.gamma * v - _LOG4
            s = a + r - w
            if s + _BB_SQUEEZE >= 5.0 * z:
                break
            t = math.log(z)
            if s > t:
                break
            if r + alpha * math.log(alpha / (b + w)) >= t:
                break
        else:
            raise exhausted("beta BB", shape1=aa, shape2=k.bb)
        return b / (b + w) if aa != a else w / (b + w)


class Beta(Family):
    """Beta distribution family."""

    def __init__(self, normal: Optional[IRNGNormal] = None):
        super().__init__(normal)
        self._sampler = BetaSampler(self._normal)

    @property
    def sampler(self) -> BetaSampler:
        return self._sampler

    @staticmethod
    def _check(shape1: np.ndarray, shape2: np.ndarray) -> None:
        require(np.isfinite(shape1) & (shape1 > 0), "shape1 must be finite and positive")
        require(np.isfinite(shape2) & (shape2 > 0), "shape2 must be finite and positive")

    def rbeta(self, n, shape1, shape2) -> np.ndarray:
        """Draw ``n`` beta deviates on [0, 1]."""
        return self._generate(n, self._sampler.sample, self._check, shape1=shape1, shape2=shape2)
