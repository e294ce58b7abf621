"""Uniform Random Number Engines.

Seven deterministic engines, bit-compatible with R's ``RNGkind``. All of
them share the ``IRNG`` contract: integer seeding through R's scrambling,
a readable and writable ``seed`` vector, and draws strictly inside (0, 1).

Engines:
    - WichmannHill
    - MarsagliaMultiCarry
    - SuperDuper
    - MersenneTwister (default)
    - KnuthTAOCP / KnuthTAOCP2002
    - LecuyerCMRG

Normal generators built on these engines live in ``rmath.rng.normal``.
"""

from typing import Optional, Union

from ._types import RNGKind, N01Kind
from ._irng import IRNG, fixup, scramble, timeseed
from .wichmann_hill import WichmannHill
from .marsaglia_multicarry import MarsagliaMultiCarry
from .super_duper import SuperDuper
from .mersenne_twister import MersenneTwister
from .knuth_taocp import KnuthTAOCP, KnuthTAOCP2002
from .lecuyer_cmrg import LecuyerCMRG

__all__ = [
    'RNGKind',
    'N01Kind',
    'IRNG',
    'fixup',
    'scramble',
    'timeseed',
    'WichmannHill',
    'MarsagliaMultiCarry',
    'SuperDuper',
    'MersenneTwister',
    'KnuthTAOCP',
    'KnuthTAOCP2002',
    'LecuyerCMRG',
    'ENGINES',
    'create_rng',
]

ENGINES = {
    RNGKind.WICHMANN_HILL: WichmannHill,
    RNGKind.MARSAGLIA_MULTICARRY: MarsagliaMultiCarry,
    RNGKind.SUPER_DUPER: SuperDuper,
    RNGKind.MERSENNE_TWISTER: MersenneTwister,
    RNGKind.KNUTH_TAOCP: KnuthTAOCP,
    RNGKind.KNUTH_TAOCP2002: KnuthTAOCP2002,
    RNGKind.LECUYER_CMRG: LecuyerCMRG,
}


def create_rng(
    kind: Optional[Union[RNGKind, str, int]] = None,
    seed: Optional[int] = None,
) -> IRNG:
    """Build an engine of ``kind`` (default: the configured one).

    Example:
        >>> rng = create_rng("Wichmann-Hill", seed=1)
        >>> rng.name
        'Wichmann-Hill'
    """
    if kind is None:
        from .. import _config
        kind = _config.get_config().rng_kind
    return ENGINES[RNGKind.parse(kind)](seed)
