"""Matsumoto & Nishimura (1998) MT19937 with R's seeding.

The seed vector is 625 words: the output position ``mti`` followed by the
624-word table. Twisting and tempering run in Numba kernels; bulk requests
fill the output array without returning to Python per draw.
"""

from typing import List

import numpy as np

from .._errors import InvalidSeed
from ..optim import get_logger
from ._irng import IRNG, fixup, MASK32
from ._kernels import mt_genrand, mt_fill
from ._types import RNGKind

__all__ = ['MersenneTwister']

_log = get_logger(__name__)

_N = 624


class MersenneTwister(IRNG):

    kind = RNGKind.MERSENNE_TWISTER
    n_seed = _N + 1

    def _init_state(self, scrambled: int) -> None:
        state = np.empty(self.n_seed, dtype=np.int64)
        seed = scrambled
        for j in range(self.n_seed):
            seed = (69069 * seed + 1) & MASK32
            state[j] = seed
        # word 0 only fills the slot for historical consistency
        state[0] = _N
        self._state = state

    def _get_seed(self) -> np.ndarray:
        return self._state

    def _set_seed(self, words: List[int]) -> None:
        state = np.asarray(words, dtype=np.int64)
        if not state[1:].any():
            raise InvalidSeed(f"{self.name}: the 624-word table is all zero")
        if state[0] <= 0:
            _log.debug("%s: position %d reset to %d", self.name, state[0], _N)
            state[0] = _N
        self._state = state

    def internal_unif_rand(self) -> float:
        return fixup(mt_genrand(self._state))

    def unif_rand(self, n: int = 1) -> np.ndarray:
        n = int(n) if n >= 1 else 1
        out = np.empty(n, dtype=np.float64)
        mt_fill(self._state, out)
        return out
