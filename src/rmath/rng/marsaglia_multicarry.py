"""Marsaglia's multiply-with-carry pair (Marsaglia 1997), as shipped in R."""

from typing import List

from ..optim import get_logger
from ._irng import IRNG, fixup, MASK32, I2_32M1
from ._types import RNGKind

__all__ = ['MarsagliaMultiCarry']

_log = get_logger(__name__)


class MarsagliaMultiCarry(IRNG):

    kind = RNGKind.MARSAGLIA_MULTICARRY
    n_seed = 2

    def _init_state(self, scrambled: int) -> None:
        seed = scrambled
        words = []
        for _ in range(self.n_seed):
            seed = (69069 * seed + 1) & MASK32
            words.append(seed)
        self._set_seed(words)

    def _get_seed(self) -> List[int]:
        return [self._i1, self._i2]

    def _set_seed(self, words: List[int]) -> None:
        i1, i2 = words
        # a zero word never leaves zero
        if i1 == 0 or i2 == 0:
            _log.debug("%s: zero seed word replaced by 1", self.name)
        self._i1 = i1 or 1
        self._i2 = i2 or 1

    def internal_unif_rand(self) -> float:
        self._i1 = (36969 * (self._i1 & 0xFFFF) + (self._i1 >> 16)) & MASK32
        self._i2 = (18000 * (self._i2 & 0xFFFF) + (self._i2 >> 16)) & MASK32
        word = ((self._i1 << 16) & MASK32) ^ (self._i2 & 0xFFFF)
        return fixup(word * I2_32M1)
