"""Standard Normal Deviate Generators.

Each generator binds one uniform engine. Selecting a generator by kind:

    from rmath.rng import MersenneTwister
    from rmath.rng.normal import create_normal

    gen = create_normal('Ahrens-Dieter', MersenneTwister(42))
    gen.norm_rand(5)
"""

from typing import Optional, Union

from .._irng import IRNG
from .._types import N01Kind
from ._inormal import IRNGNormal
from .inversion import Inversion
from .ahrens_dieter import AhrensDieter
from .box_muller import BoxMuller
from .kinderman_ramage import KindermanRamage

__all__ = [
    'IRNGNormal',
    'Inversion',
    'AhrensDieter',
    'BoxMuller',
    'KindermanRamage',
    'NORMAL_GENERATORS',
    'create_normal',
]

NORMAL_GENERATORS = {
    N01Kind.INVERSION: Inversion,
    N01Kind.AHRENS_DIETER: AhrensDieter,
    N01Kind.BOX_MULLER: BoxMuller,
    N01Kind.KINDERMAN_RAMAGE: KindermanRamage,
}


def create_normal(
    kind: Optional[Union[N01Kind, str, int]] = None,
    rng: Optional[IRNG] = None,
) -> IRNGNormal:
    """Build a normal generator of ``kind`` (default: the configured one)."""
    if kind is None:
        from ... import _config
        kind = _config.get_config().normal_kind
    return NORMAL_GENERATORS[N01Kind.parse(kind)](rng)
