"""Gamma Distribution Sampler.

Two rejection algorithms selected by the shape ``a``:

    a < 1:  GS (Ahrens & Dieter 1974), a mixture of a power density on
            [0, 1] and an exponential tail, each accepted against one
            standard exponential.
    a >= 1: GD (Ahrens & Dieter 1982), a transformed normal deviate with
            immediate, squeeze and quotient acceptance, falling back to a
            double-exponential hat.

GD needs seven constants derived from ``a``. They live in ``GammaCache``
and are recomputed only when ``a`` differs from the cached key.

References:
    Ahrens, J.H. and Dieter, U. (1974). Computer methods for sampling from
    gamma, beta, poisson and binomial distributions. Computing 12, 223-246.

    Ahrens, J.H. and Dieter, U. (1982). Generating gamma variates by a
    modified rejection technique. Comm. ACM 25, 47-54.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .._errors import InvalidParameter
from .._guard import attempts, exhausted
from ..optim import get_logger
from ..rng.normal import IRNGNormal
from ._family import Family, as_normal, require
from .exponential import exp_rand

__all__ = ['GammaCache', 'GammaSampler', 'Gamma']

_log = get_logger(__name__)

_SQRT32 = 5.656854
_EXP_M1 = 0.36787944117144233  # exp(-1)

# q0 = sum q_k * a^(-k)
_Q1 = 0.04166669
_Q2 = 0.02083148
_Q3 = 0.00801191
_Q4 = 0.00144121
_Q5 = -7.388e-5
_Q6 = 2.4511e-4
_Q7 = 2.424e-4

# series for log(1 + v) - v + v^2 / 2 ...
_A1 = 0.3333333
_A2 = -0.250003
_A3 = 0.2000062
_A4 = -0.1662921
_A5 = 0.1423657
_A6 = -0.1367177
_A7 = 0.1233795

# rejection threshold tau(1) for the double-exponential sample
_TAU = -0.71874483771719


@dataclass(frozen=True)
class GammaCache:
    """GD constants for shape ``a``."""

    a: float
    s2: float
    s: float
    d: float
    q0: float
    b: float
    si: float
    c: float

    @classmethod
    def compute(cls, a: float) -> 'GammaCache':
        s2 = a - 0.5
        s = math.sqrt(s2)
        d = _SQRT32 - s * 12.0

        r = 1.0 / a
        q0 = ((((((_Q7 * r + _Q6) * r + _Q5) * r + _Q4) * r + _Q3) * r
               + _Q2) * r + _Q1) * r

        # b, si and c were fitted numerically per range of a
        if a <= 3.686:
            b = 0.463 + s + 0.178 * s2
            si = 1.235
            c = 0.195 / s - 0.079 + 0.16 * s
        elif a <= 13.022:
            b = 1.654 + 0.0076 * s2
            si = 1.68 / s + 0.275
            c = 0.062 / s + 0.024
        else:
            b = 1.77
            si = 0.75
            c = 0.1515 / s
        return cls(a=a, s2=s2, s=s, d=d, q0=q0, b=b, si=si, c=c)


def _quotient(k: GammaCache, t: float) -> float:
    """log of the ratio between the gamma density and the normal proposal."""
    v = t / (k.s + k.s)
    if abs(v) <= 0.25:
        return k.q0 + 0.5 * t * t * ((((((_A7 * v + _A6) * v + _A5) * v + _A4) * v
                                       + _A3) * v + _A2) * v + _A1) * v
    return k.q0 - k.s * t + 0.25 * t * t + (k.s2 + k.s2) * math.log(1.0 + v)


class GammaSampler:
    """Single gamma deviates with a per-instance GD constant cache.

    Args:
        normal: Normal generator supplying both normal and uniform draws.
    """

    def __init__(self, normal: Optional[IRNGNormal] = None):
        self._normal = as_normal(normal)
        self._cache: Optional[GammaCache] = None
        self._normal.rng.attach(self)

    @property
    def normal(self) -> IRNGNormal:
        return self._normal

    def constants(self) -> Optional[GammaCache]:
        """The cached GD constants, or ``None`` before the first a >= 1 draw."""
        return None if self._cache is None else replace(self._cache)

    def invalidate(self) -> None:
        self._cache = None

    def _constants(self, a: float) -> GammaCache:
        if self._cache is None or self._cache.a != a:
            _log.debug("gamma: recomputing GD constants for a=%r", a)
            self._cache = GammaCache.compute(a)
        return self._cache

    def sample(self, a: float, scale: float = 1.0) -> float:
        """One deviate with shape ``a`` and scale ``scale``."""
        if math.isnan(a) or math.isnan(scale):
            raise InvalidParameter(f"gamma: NaN parameter (a={a!r}, scale={scale!r})")
        if not math.isfinite(a) or a <= 0.0:
            raise InvalidParameter(f"gamma: shape must be finite and positive, got {a!r}")
        if not math.isfinite(scale) or scale < 0.0:
            raise InvalidParameter(f"gamma: scale must be finite and non-negative, got {scale!r}")
        if scale == 0.0:
            return 0.0
        if a < 1.0:
            return scale * self._gs(a)
        return scale * self._gd(a)

    def _gs(self, a: float) -> float:
        unif = self._normal.internal_unif_rand
        e = 1.0 + _EXP_M1 * a
        for _ in attempts():
            p = e * unif()
            if p >= 1.0:
                x = -math.log((e - p) / a)
                if exp_rand(self._normal) >= (1.0 - a) * math.log(x):
                    return x
            else:
                x = math.exp(math.log(p) / a)
                if exp_rand(self._normal) >= x:
                    return x
        raise exhausted("gamma GS", a=a)

    def _gd(self, a: float) -> float:
        k = self._constants(a)
        unif = self._normal.internal_unif_rand

        # immediate acceptance
        t = self._normal.internal_norm_rand()
        x = k.s + 0.5 * t
        ret = x * x
        if t >= 0.0:
            return ret

        # squeeze acceptance
        u = unif()
        if k.d * u <= t * t * t:
            return ret

        # quotient acceptance, only for positive x
        if x > 0.0:
            q = _quotient(k, t)
            if math.log(1.0 - u) <= q:
                return ret

        # double-exponential hat
        for _ in attempts():
            e = exp_rand(self._normal)
            u = unif()
            u = u + u - 1.0
            if u < 0.0:
                t = k.b - k.si * e
            else:
                t = k.b + k.si * e
            if t >= _TAU:
                q = _quotient(k, t)
                if q > 0.0:
                    w = math.expm1(q)
                    if k.c * abs(u) <= w * math.exp(e - 0.5 * t * t):
                        x = k.s + 0.5 * t
                        return x * x
        raise exhausted("gamma GD", a=a)


class Gamma(Family):
    """Gamma distribution family (``rgamma``, ``rchisq``)."""

    def __init__(self, normal: Optional[IRNGNormal] = None):
        super().__init__(normal)
        self._sampler = GammaSampler(self._normal)

    @property
    def sampler(self) -> GammaSampler:
        return self._sampler

    @staticmethod
    def _check(shape: np.ndarray, scale: np.ndarray) -> None:
        require(np.isfinite(shape) & (shape > 0), "shape must be finite and positive")
        require(np.isfinite(scale) & (scale >= 0), "scale must be finite and non-negative")

    def rgamma(self, n, shape, rate=1.0, scale=None) -> np.ndarray:
        """Draw ``n`` gamma deviates.

        Args:
            n: Count, or a sequence whose length is the count
            shape: Shape parameter(s), recycled
            rate: Rate parameter(s); ignored when ``scale`` is given
            scale: Scale parameter(s); must agree with ``rate`` if both set

        Returns:
            float64 array of length ``n``
        """
        if scale is None:
            with np.errstate(divide="ignore"):
                scale = 1.0 / np.asarray(rate, dtype=np.float64)
        elif not np.all(np.asarray(rate) == 1.0):
            both = np.asarray(rate, dtype=np.float64) * np.asarray(scale, dtype=np.float64)
            if np.any(np.abs(both - 1.0) >= 1e-15):
                raise InvalidParameter("specify 'rate' or 'scale' but not both")
        return self._generate(n, self._sampler.sample, self._check, shape=shape, scale=scale)

    def rchisq(self, n, df) -> np.ndarray:
        """Draw ``n`` chi-squared deviates with ``df`` degrees of freedom."""
        df = np.asarray(df, dtype=np.float64)
        require(np.isfinite(df) & (df > 0), "df must be finite and positive")
        return self._generate(n, self._sampler.sample, self._check, shape=df / 2.0, scale=2.0)
