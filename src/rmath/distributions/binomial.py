"""Binomial Distribution Sampler (Kachitvichyanukul & Schmeiser 1988).

Sampling uses p' = min(p, 1 - p) and reflects the result when p > 1/2.

    n * p' < 30:  inversion by sequential search from 0, restarted after
                  110 terms
    otherwise:    BTPE. A triangle over the mode, two parallelograms and
                  two exponential tails form the hat; the acceptance test
                  uses the explicit probability ratio near the mode or far
                  in the tails, and squeezes plus a Stirling expansion in
                  between.

Reference:
    Kachitvichyanukul, V. and Schmeiser, B.W. (1988). Binomial random
    variate generation. Comm. ACM 31, 216-222.
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .._errors import InvalidParameter
from .._guard import attempts, exhausted
from ..optim import get_logger
from ..rng import IRNG
from ._family import Family, as_normal, require

__all__ = ['BinomialCache', 'BinomialSampler', 'Binomial']

_log = get_logger(__name__)

_INT_MAX = 2147483647


@dataclass(frozen=True)
class BinomialCache:
    """Constants for ``(n, pp)``. BTPE fields are 0 in the inversion regime."""

    n: int
    pp: float
    p: float
    q: float
    mean: float
    r: float
    g: float
    qn: float = 0.0
    m: int = 0
    fm: float = 0.0
    npq: float = 0.0
    p1: float = 0.0
    p2: float = 0.0
    p3: float = 0.0
    p4: float = 0.0
    xm: float = 0.0
    xl: float = 0.0
    xr: float = 0.0
    c: float = 0.0
    xll: float = 0.0
    xlr: float = 0.0

    @property
    def inversion(self) -> bool:
        return self.mean < 30.0

    @classmethod
    def compute(cls, n: int, pp: float) -> 'BinomialCache':
        p = min(pp, 1.0 - pp)
        q = 1.0 - p
        np_ = n * p
        r = p / q
        g = r * (n + 1)
        base = dict(n=n, pp=pp, p=p, q=q, mean=np_, r=r, g=g)
        if np_ < 30.0:
            return cls(qn=q ** n, **base)

        fm = np_ + p
        m = int(fm)
        npq = np_ * q
        p1 = int(2.195 * math.sqrt(npq) - 4.6 * q) + 0.5
        xm = m + 0.5
        xl = xm - p1
        xr = xm + p1
        c = 0.134 + 20.5 / (15.3 + m)
        al = (fm - xl) / (fm - xl * p)
        xll = al * (1.0 + 0.5 * al)
        al = (xr - fm) / (xr * q)
        xlr = al * (1.0 + 0.5 * al)
        p2 = p1 * (1.0 + c + c)
        p3 = p2 + c / xll
        p4 = p3 + c / xlr
        return cls(
            m=m, fm=fm, npq=npq, p1=p1, p2=p2, p3=p3, p4=p4,
            xm=xm, xl=xl, xr=xr, c=c, xll=xll, xlr=xlr, **base
        )


def _stirling(x: float) -> float:
    x2 = x * x
    return (13860.0 - (462.0 - (132.0 - (99.0 - 140.0 / x2) / x2) / x2) / x2) / x / 166320.0


class BinomialSampler:
    """Single binomial deviates with a per-instance constant cache.

    Args:
        source: Uniform engine or normal generator; only uniforms are used.
    """

    def __init__(self, source=None):
        self._normal = as_normal(source)
        self._cache: Optional[BinomialCache] = None
        self._normal.rng.attach(self)

    @property
    def rng(self) -> IRNG:
        return self._normal.rng

    def constants(self) -> Optional[BinomialCache]:
        return None if self._cache is None else replace(self._cache)

    def invalidate(self) -> None:
        self._cache = None

    def _constants(self, n: int, pp: float) -> BinomialCache:
        k = self._cache
        if k is None or k.n != n or k.pp != pp:
            _log.debug("binomial: recomputing constants for n=%d, p=%r", n, pp)
            k = self._cache = BinomialCache.compute(n, pp)
        return k

    def sample(self, n: float, pp: float) -> float:
        """One deviate: successes in ``n`` trials with probability ``pp``."""
        if not math.isfinite(n) or n != math.floor(n) or n < 0:
            raise InvalidParameter(f"binomial: size must be a non-negative integer, got {n!r}")
        if n >= _INT_MAX:
            raise InvalidParameter(f"binomial: size must be below 2^31 - 1, got {n!r}")
        if not math.isfinite(pp) or pp < 0.0 or pp > 1.0:
            raise InvalidParameter(f"binomial: prob must lie in [0, 1], got {pp!r}")
        n = int(n)
        if n == 0 or pp == 0.0:
            return 0.0
        if pp == 1.0:
            return float(n)

        k = self._constants(n, pp)
        if k.inversion:
            ix = self._inversion(k)
        else:
            ix = self._btpe(k)
        if pp > 0.5:
            ix = n - ix
        return float(ix)

    def _inversion(self, k: BinomialCache) -> int:
        unif = self._normal.internal_unif_rand
        for _ in attempts():
            ix = 0
            f = k.qn
            u = unif()
            while True:
                if u < f:
                    return ix
                if ix > 110:
                    break
                u -= f
                ix += 1
                f *= (k.g / ix - k.r)
        raise exhausted("binomial inversion", n=k.n, p=k.pp)

    def _btpe(self, k: BinomialCache) -> int:
        unif = self._normal.internal_unif_rand
        n = k.n
        m = k.m
        for _ in attempts():
            u = unif() * k.p4
            v = unif()

            # triangular region
            if u <= k.p1:
                return int(k.xm - k.p1 * v + u)

            if u <= k.p2:
                # parallelogram
                x = k.xl + (u - k.p1) / k.c
                v = v * k.c + 1.0 - abs(k.xm - x) / k.p1
                if v > 1.0 or v <= 0.0:
                    continue
                ix = int(x)
            elif u > k.p3:
                # right tail
                ix = int(k.xr - math.log(v) / k.xlr)
                if ix > n:
                    continue
                v = v * (u - k.p3) * k.xlr
            else:
                # left tail
                ix = int(k.xl + math.log(v) / k.xll)
                if ix < 0:
                    continue
                v = v * (u - k.p2) * k.xll

            d = abs(ix - m)
            if d <= 20 or d >= k.npq / 2 - 1:
                # explicit evaluation of f(ix) / f(m)
                f = 1.0
                if m < ix:
                    for i in range(m + 1, ix + 1):
                        f *= (k.g / i - k.r)
                elif m > ix:
                    for i in range(ix + 1, m + 1):
                        f /= (k.g / i - k.r)
                if v <= f:
                    return ix
                continue

            # squeeze on log f
            amaxp = (d / k.npq) * ((d * (d / 3.0 + 0.625) + 0.1666666666666) / k.npq + 0.5)
            ynorm = -d * d / (2.0 * k.npq)
            alv = math.log(v)
            if alv < ynorm - amaxp:
                return ix
            if alv <= ynorm + amaxp:
                # de Moivre / Stirling to machine accuracy
                x1 = ix + 1
                f1 = k.fm + 1.0
                z = n + 1 - k.fm
                w = n - ix + 1.0
                bound = (k.xm * math.log(f1 / x1)
                         + (n - m + 0.5) * math.log(z / w)
                         + (ix - m) * math.log(w * k.p / (x1 * k.q))
                         + _stirling(f1) + _stirling(z) + _stirling(x1) + _stirling(w))
                if alv <= bound:
                    return ix
        raise exhausted("binomial BTPE", n=n, p=k.pp)


class Binomial(Family):
    """Binomial distribution family.

    Args:
        rng: Uniform engine or normal generator to draw from.
    """

    def __init__(self, rng=None):
        super().__init__(as_normal(rng))
        self._sampler = BinomialSampler(self._normal)

    @property
    def sampler(self) -> BinomialSampler:
        return self._sampler

    @staticmethod
    def _check(size: np.ndarray, prob: np.ndarray) -> None:
        require(np.isfinite(size) & (size >= 0) & (size == np.floor(size)) & (size < _INT_MAX),
                "size must be a non-negative integer below 2^31 - 1")
        require(np.isfinite(prob) & (prob >= 0) & (prob <= 1), "prob must lie in [0, 1]")

    def rbinom(self, n, size, prob) -> np.ndarray:
        """Draw ``n`` binomial deviates (integral floats in [0, size])."""
        return self._generate(n, self._sampler.sample, self._check, size=size, prob=prob)
