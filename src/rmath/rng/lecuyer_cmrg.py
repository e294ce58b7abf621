"""L'Ecuyer (1999) combined multiple-recursive generator MRG32k3a.

State is two triples: the first in ``[0, m1)``, the second in ``[0, m2)``,
neither all zero.
"""

from typing import List

from .._errors import InvalidSeed
from ._irng import IRNG, MASK32
from ._types import RNGKind

__all__ = ['LecuyerCMRG']

M1 = 4294967087
M2 = 4294944443

_NORMC = 2.328306549295727688e-10
_A12 = 1403580
_A13N = 810728
_A21 = 527612
_A23N = 1370589


class LecuyerCMRG(IRNG):

    kind = RNGKind.LECUYER_CMRG
    n_seed = 6

    def _init_state(self, scrambled: int) -> None:
        seed = scrambled
        words = []
        for _ in range(self.n_seed):
            seed = (69069 * seed + 1) & MASK32
            while seed >= M2:
                seed = (69069 * seed + 1) & MASK32
            words.append(seed)
        self._set_seed(words)

    def _get_seed(self) -> List[int]:
        return list(self._s)

    def _set_seed(self, words: List[int]) -> None:
        first, second = words[:3], words[3:]
        if not any(first) or any(w >= M1 for w in first):
            raise InvalidSeed(
                f"{self.name}: first three words must be in [0, {M1}) and not all zero"
            )
        if not any(second) or any(w >= M2 for w in second):
            raise InvalidSeed(
                f"{self.name}: last three words must be in [0, {M2}) and not all zero"
            )
        self._s = list(words)

    def internal_unif_rand(self) -> float:
        s = self._s

        p1 = (_A12 * s[1] - _A13N * s[0]) % M1
        s[0], s[1], s[2] = s[1], s[2], p1

        p2 = (_A21 * s[5] - _A23N * s[3]) % M2
        s[3], s[4], s[5] = s[4], s[5], p2

        return ((p1 - p2) if p1 > p2 else (p1 - p2 + M1)) * _NORMC
