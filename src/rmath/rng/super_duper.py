"""Marsaglia's Super-Duper: a Tausworthe shift register XORed with a
69069 congruential generator (Reeds et al. 1984 variant)."""

from typing import List

from ._irng import IRNG, fixup, MASK32, I2_32M1
from ._types import RNGKind

__all__ = ['SuperDuper']


class SuperDuper(IRNG):

    kind = RNGKind.SUPER_DUPER
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
        self._i1 = i1 or 1
        # congruential part must be odd
        self._i2 = i2 | 1

    def internal_unif_rand(self) -> float:
        i1 = self._i1
        i1 ^= (i1 >> 15) & 0o377777
        i1 ^= (i1 << 17) & MASK32
        self._i1 = i1
        self._i2 = (self._i2 * 69069) & MASK32
        return fixup((self._i1 ^ self._i2) * I2_32M1)
