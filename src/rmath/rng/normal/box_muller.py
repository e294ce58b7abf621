"""Box-Muller (1958) polar transform.

Each pair of uniforms yields two deviates; the second is kept and returned
by the next call. Re-seeding the engine discards the kept value, so the
stream after a re-seed depends on the seed alone.
"""

import math

from ...optim import get_logger
from .._types import N01Kind
from ._inormal import IRNGNormal

__all__ = ['BoxMuller']

_log = get_logger(__name__)

_DBL_MIN = 2.2250738585072014e-308


class BoxMuller(IRNGNormal):

    kind = N01Kind.BOX_MULLER

    def __init__(self, rng=None):
        self._keep = 0.0
        super().__init__(rng)

    def invalidate(self) -> None:
        if self._keep != 0.0:
            _log.debug("%s: discarding kept deviate", self.name)
        self._keep = 0.0

    def internal_norm_rand(self) -> float:
        if self._keep != 0.0:
            s = self._keep
            self._keep = 0.0
            return s
        theta = 2.0 * math.pi * self.internal_unif_rand()
        # R is never exactly zero
        r = math.sqrt(-2.0 * math.log(self.internal_unif_rand())) + 10.0 * _DBL_MIN
        self._keep = r * math.sin(theta)
        return r * math.cos(theta)
