"""Wichmann-Hill (1982): three small congruential generators whose
fractions are summed modulo 1."""

from typing import List

from ._irng import IRNG, fixup, MASK32
from ._types import RNGKind

__all__ = ['WichmannHill']

_MODULI = (30269, 30307, 30323)


class WichmannHill(IRNG):

    kind = RNGKind.WICHMANN_HILL
    n_seed = 3

    def _init_state(self, scrambled: int) -> None:
        seed = scrambled
        words = []
        for _ in range(self.n_seed):
            seed = (69069 * seed + 1) & MASK32
            words.append(seed)
        self._set_seed(words)

    def _get_seed(self) -> List[int]:
        return list(self._i)

    def _set_seed(self, words: List[int]) -> None:
        # map values equal to 0 mod modulus to 1
        self._i = [(w % m) or 1 for w, m in zip(words, _MODULI)]

    def internal_unif_rand(self) -> float:
        i1, i2, i3 = self._i
        i1 = i1 * 171 % 30269
        i2 = i2 * 172 % 30307
        i3 = i3 * 170 % 30323
        self._i = [i1, i2, i3]
        value = i1 / 30269.0 + i2 / 30307.0 + i3 / 30323.0
        return fixup(value - int(value))
