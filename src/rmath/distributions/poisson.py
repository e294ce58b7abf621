"""Poisson Distribution Sampler (Ahrens & Dieter 1982).

    mu < 10:  table lookup / inversion. Cumulative probabilities pp[k] for
              k <= 35 are built lazily, only as far as draws have needed,
              and kept while ``mu`` is unchanged.
    mu >= 10: algorithm PD. A normal deviate gives an immediate or squeeze
              acceptance most of the time; otherwise the candidate is
              tested against Hermite-corrected discrete normal
              probabilities (quotient test), or redrawn from a
              double-exponential hat.

Reference:
    Ahrens, J.H. and Dieter, U. (1982). Computer generation of Poisson
    deviates from modified normal distributions.
    ACM Trans. Math. Software 8, 163-179.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

import numpy as np

from .._errors import InvalidParameter
from .._guard import attempts, exhausted
from ..optim import get_logger
from ..rng.normal import IRNGNormal
from ._family import Family, as_normal, require
from .exponential import exp_rand

__all__ = ['PoissonTable', 'PoissonConstants', 'PoissonSampler', 'Poisson']

_log = get_logger(__name__)

_1_SQRT_2PI = 0.398942280401432677939946059934
_ONE_7 = 0.1428571428571428571
_ONE_12 = 0.0833333333333333333
_ONE_24 = 0.0416666666666666667

# log(1 + v) series used by the px approximation
_A0 = -0.5
_A1 = 0.3333333
_A2 = -0.2500068
_A3 = 0.2000118
_A4 = -0.1661269
_A5 = 0.1421878
_A6 = -0.1384794
_A7 = 0.1250060

_FACT = (1.0, 1.0, 2.0, 6.0, 24.0, 120.0, 720.0, 5040.0, 40320.0, 362880.0)

_TABLE_SIZE = 36


@dataclass
class PoissonTable:
    """Inversion state for mu < 10.

    ``pp[1..l]`` are valid cumulative probabilities; ``p`` and ``q`` are
    the last term and the running sum, ready to extend the table.
    """

    mu: float
    m: int
    p0: float
    l: int = 0
    p: float = 0.0
    q: float = 0.0
    pp: np.ndarray = field(default_factory=lambda: np.zeros(_TABLE_SIZE))

    @classmethod
    def start(cls, mu: float) -> 'PoissonTable':
        p0 = math.exp(-mu)
        return cls(mu=mu, m=max(1, int(mu)), p0=p0, p=p0, q=p0)


@dataclass(frozen=True)
class PoissonConstants:
    """PD constants for mu >= 10."""

    mu: float
    s: float
    d: float
    big_l: float
    omega: float
    b1: float
    b2: float
    c3: float
    c2: float
    c1: float
    c0: float
    c: float

    @classmethod
    def compute(cls, mu: float) -> 'PoissonConstants':
        s = math.sqrt(mu)
        b1 = _ONE_24 / mu
        b2 = 0.3 * b1 * b1
        c3 = _ONE_7 * b1 * b2
        return cls(
            mu=mu,
            s=s,
            d=6.0 * mu * mu,
            # upper bound on the mode region where pk > fk
            big_l=math.floor(mu - 1.1484),
            omega=_1_SQRT_2PI / s,
            b1=b1,
            b2=b2,
            c3=c3,
            c2=b2 - 15.0 * c3,
            c1=b1 - 6.0 * b2 + 45.0 * c3,
            c0=1.0 - b1 + 3.0 * b2 - 15.0 * c3,
            # makes the hat a majorant
            c=0.1069 / mu,
        )


def _step_f(k: PoissonConstants, mu: float, pois: float, difmuk: float) -> Tuple[float, float, float, float]:
    """px, py (Poisson) and fx, fy (discrete normal) at ``pois``."""
    if pois < 10:
        px = -mu
        py = mu ** pois / _FACT[int(pois)]
    else:
        fk = pois
        dl = _ONE_12 / fk
        dl = dl * (1.0 - 4.8 * dl * dl)
        v = difmuk / fk
        if abs(v) <= 0.25:
            px = fk * v * v * (((((((_A7 * v + _A6) * v + _A5) * v + _A4)
                                  * v + _A3) * v + _A2) * v + _A1) * v + _A0) - dl
        else:
            px = fk * math.log(1.0 + v) - difmuk - dl
        py = _1_SQRT_2PI / math.sqrt(fk)
    x = (0.5 - difmuk) / k.s
    xx = x * x
    fx = -0.5 * xx
    fy = k.omega * (((k.c3 * xx + k.c2) * xx + k.c1) * xx + k.c0)
    return px, py, fx, fy


class PoissonSampler:
    """Single Poisson deviates with per-instance caches for both regimes."""

    def __init__(self, normal: Optional[IRNGNormal] = None):
        self._normal = as_normal(normal)
        self._table: Optional[PoissonTable] = None
        self._constants: Optional[PoissonConstants] = None
        self._normal.rng.attach(self)

    @property
    def normal(self) -> IRNGNormal:
        return self._normal

    def constants(self) -> Tuple[Optional[PoissonTable], Optional[PoissonConstants]]:
        """Copies of the inversion table and the PD constants."""
        table = None
        if self._table is not None:
            table = replace(self._table, pp=self._table.pp.copy())
        return table, self._constants

    def invalidate(self) -> None:
        self._table = None
        self._constants = None

    def sample(self, mu: float) -> float:
        """One deviate with mean ``mu``; ``mu == 0`` gives 0."""
        if not math.isfinite(mu) or mu < 0.0:
            raise InvalidParameter(f"poisson: mu must be finite and non-negative, got {mu!r}")
        if mu == 0.0:
            return 0.0
        if mu < 10.0:
            return self._inversion(mu)
        return self._pd(mu)

    def _inversion(self, mu: float) -> float:
        t = self._table
        if t is None or t.mu != mu:
            _log.debug("poisson: new inversion table for mu=%r", mu)
            t = self._table = PoissonTable.start(mu)
        unif = self._normal.internal_unif_rand
        pp = t.pp

        for _ in attempts():
            u = unif()
            if u <= t.p0:
                return 0.0

            # search the part of the table already built
            if t.l > 0:
                j = min(t.l, t.m) if u > 0.458 else 1
                for k in range(j, t.l + 1):
                    if u <= pp[k]:
                        return float(k)
                if t.l == _TABLE_SIZE - 1:
                    continue

            # extend the table
            t.l += 1
            for k in range(t.l, _TABLE_SIZE):
                t.p *= mu / k
                t.q += t.p
                pp[k] = t.q
                if u <= t.q:
                    t.l = k
                    return float(k)
            t.l = _TABLE_SIZE - 1
        raise exhausted("poisson inversion", mu=mu)

    def _pd(self, mu: float) -> float:
        k = self._constants
        if k is None or k.mu != mu:
            _log.debug("poisson: recomputing PD constants for mu=%r", mu)
            k = self._constants = PoissonConstants.compute(mu)
        unif = self._normal.internal_unif_rand

        # normal sample
        g = mu + k.s * self._normal.internal_norm_rand()
        if g >= 0.0:
            pois = math.floor(g)
            # immediate acceptance
            if pois >= k.big_l:
                return float(pois)
            # squeeze acceptance
            difmuk = mu - pois
            u = unif()
            if k.d * u >= difmuk * difmuk * difmuk:
                return float(pois)
            # quotient acceptance
            px, py, fx, fy = _step_f(k, mu, pois, difmuk)
            if fy - u * fy <= py * math.exp(px - fx):
                return float(pois)

        # double-exponential hat
        for _ in attempts():
            e = exp_rand(self._normal)
            u = 2.0 * unif() - 1.0
            t = 1.8 + (e if u >= 0.0 else -e)
            # for t <= -0.6744, pk < fk for all mu >= 10
            if t > -0.6744:
                pois = math.floor(mu + k.s * t)
                difmuk = mu - pois
                px, py, fx, fy = _step_f(k, mu, pois, difmuk)
                if k.c * abs(u) <= py * math.exp(px + e) - fy * math.exp(fx + e):
                    return float(pois)
        raise exhausted("poisson PD", mu=mu)


class Poisson(Family):
    """Poisson distribution family."""

    def __init__(self, normal: Optional[IRNGNormal] = None):
        super().__init__(normal)
        self._sampler = PoissonSampler(self._normal)

    @property
    def sampler(self) -> PoissonSampler:
        return self._sampler

    @staticmethod
    def _check(lambda_: np.ndarray) -> None:
        require(np.isfinite(lambda_) & (lambda_ >= 0), "lambda must be finite and non-negative")

    def rpois(self, n, lambda_) -> np.ndarray:
        """Draw ``n`` Poisson deviates (non-negative integral floats)."""
        return self._generate(n, self._sampler.sample, self._check, lambda_=lambda_)
