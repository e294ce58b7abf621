"""Knuth's lagged Fibonacci generator from TAOCP vol. 2.

Two kinds share the recurrence ``x[j] = x[j-100] - x[j-37] mod 2^30`` and
differ only in how an integer seed expands into the 100-word lag table:
``KnuthTAOCP`` uses the 1997 ``ran_start``, ``KnuthTAOCP2002`` the 2002
revision (which also runs ten warm-up cycles).

The seed vector is 101 words: the lag table followed by the position of
the next output. The table is consumed one word per draw and refilled
with a 1009-word ``ran_array`` cycle when exhausted.
"""

from abc import abstractmethod
from typing import List

import numpy as np

from .._errors import InvalidSeed
from ..optim import get_logger
from ._irng import IRNG
from ._kernels import (
    KK, MM, QUALITY,
    ran_start_1997, ran_start_2002, kt_next, kt_fill,
)
from ._types import RNGKind

__all__ = ['KnuthTAOCP', 'KnuthTAOCP2002']

_log = get_logger(__name__)

# largest prime below 2^30 - 2
_SEED_MODULUS = 1073741821


class _KnuthBase(IRNG):

    n_seed = KK + 1

    @abstractmethod
    def _ran_start(self, seed: int, ran_x: np.ndarray) -> None:
        """Fill the 100-word lag table from a seed below 2^30 - 2."""

    def _init_state(self, scrambled: int) -> None:
        self._buf = np.zeros(QUALITY, dtype=np.int64)
        state = np.zeros(self.n_seed, dtype=np.int64)
        self._ran_start(scrambled % _SEED_MODULUS, state[:KK])
        state[KK] = KK
        self._state = state

    def _get_seed(self) -> np.ndarray:
        return self._state

    def _set_seed(self, words: List[int]) -> None:
        state = np.asarray(words, dtype=np.int64)
        table = state[:KK]
        if not table.any():
            raise InvalidSeed(f"{self.name}: the lag table is all zero")
        if (table >= MM).any():
            raise InvalidSeed(f"{self.name}: lag table words must be below 2^30")
        if state[KK] <= 0 or state[KK] > KK:
            _log.debug("%s: position %d reset to %d", self.name, state[KK], KK)
            state[KK] = KK
        self._buf = np.zeros(QUALITY, dtype=np.int64)
        self._state = state

    def internal_unif_rand(self) -> float:
        return kt_next(self._state, self._buf)

    def unif_rand(self, n: int = 1) -> np.ndarray:
        n = int(n) if n >= 1 else 1
        out = np.empty(n, dtype=np.float64)
        kt_fill(self._state, self._buf, out)
        return out


class KnuthTAOCP(_KnuthBase):

    kind = RNGKind.KNUTH_TAOCP

    def _ran_start(self, seed: int, ran_x: np.ndarray) -> None:
        ran_start_1997(seed, ran_x)


class KnuthTAOCP2002(_KnuthBase):

    kind = RNGKind.KNUTH_TAOCP2002

    def _ran_start(self, seed: int, ran_x: np.ndarray) -> None:
        ran_start_2002(seed, ran_x)
