"""Engine and normal-generator selectors."""

from enum import IntEnum
from typing import Union

from .._errors import InvalidParameter

__all__ = ['RNGKind', 'N01Kind']


def _normalize(name: str) -> str:
    return ''.join(ch for ch in name.upper() if ch.isalnum())


class _Kind(IntEnum):

    @property
    def label(self) -> str:
        return self._labels()[self]

    @classmethod
    def _labels(cls) -> dict:
        raise NotImplementedError

    @classmethod
    def parse(cls, value: Union['_Kind', int, str]):
        """Accept a member, its integer code, its enum name or its R name.

        Matching on names ignores case and punctuation, so "Mersenne-Twister",
        "mersenne_twister" and "MERSENNE_TWISTER" are the same kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = _normalize(value)
            for member in cls:
                if key in (_normalize(member.name), _normalize(member.label)):
                    return member
            raise InvalidParameter(f"unknown {cls.__name__}: {value!r}")
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidParameter(f"unknown {cls.__name__}: {value!r}") from exc


class RNGKind(_Kind):
    """Uniform engine algorithms, numbered as in R's ``RNGkind``."""

    WICHMANN_HILL = 0
    MARSAGLIA_MULTICARRY = 1
    SUPER_DUPER = 2
    MERSENNE_TWISTER = 3
    KNUTH_TAOCP = 4
    KNUTH_TAOCP2002 = 5
    LECUYER_CMRG = 6

    @classmethod
    def _labels(cls) -> dict:
        return _RNG_LABELS


class N01Kind(_Kind):
    """Standard normal generators, numbered as in R's ``RNGkind``."""

    AHRENS_DIETER = 1
    BOX_MULLER = 2
    INVERSION = 4
    KINDERMAN_RAMAGE = 5

    @classmethod
    def _labels(cls) -> dict:
        return _N01_LABELS


_RNG_LABELS = {
    RNGKind.WICHMANN_HILL: 'Wichmann-Hill',
    RNGKind.MARSAGLIA_MULTICARRY: 'Marsaglia-Multicarry',
    RNGKind.SUPER_DUPER: 'Super-Duper',
    RNGKind.MERSENNE_TWISTER: 'Mersenne-Twister',
    RNGKind.KNUTH_TAOCP: 'Knuth-TAOCP',
    RNGKind.KNUTH_TAOCP2002: 'Knuth-TAOCP-2002',
    RNGKind.LECUYER_CMRG: "L'Ecuyer-CMRG",
}

_N01_LABELS = {
    N01Kind.AHRENS_DIETER: 'Ahrens-Dieter',
    N01Kind.BOX_MULLER: 'Box-Muller',
    N01Kind.INVERSION: 'Inversion',
    N01Kind.KINDERMAN_RAMAGE: 'Kinderman-Ramage',
}
