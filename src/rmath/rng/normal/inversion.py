"""Normal deviates by inversion of the quantile function.

Two uniforms give a 2^27-refined argument, ``u = floor(2^27 * U1) + U2``,
which is passed to ``qnorm(u / 2^27)``. A single 32-bit uniform would
leave visible gaps in the far tails.
"""

import numpy as np

from ...math import qnorm_kernel, qnorm_array
from .._types import N01Kind
from ._inormal import IRNGNormal

__all__ = ['Inversion']

BIG = 134217728.0  # 2^27


class Inversion(IRNGNormal):

    kind = N01Kind.INVERSION

    def internal_norm_rand(self) -> float:
        u = self.internal_unif_rand()
        u = int(BIG * u) + self.internal_unif_rand()
        return qnorm_kernel(u / BIG, 0.0, 1.0, True, False)

    def norm_rand(self, n: int = 1) -> np.ndarray:
        n = int(n) if n >= 1 else 1
        u = self._rng.unif_rand(2 * n)
        arg = (np.floor(BIG * u[0::2]) + u[1::2]) / BIG
        out = np.empty(n, dtype=np.float64)
        qnorm_array(arg, np.zeros(n), np.ones(n), True, False, out)
        return out
