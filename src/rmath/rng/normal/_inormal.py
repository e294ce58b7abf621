"""Standard normal generator contract.

A normal generator binds one uniform engine to one algorithm. Every
uniform it consumes comes from that engine, so re-seeding the engine
replays the whole downstream stream.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

import numpy as np

from ...optim import get_logger
from .._irng import IRNG
from .._types import N01Kind

__all__ = ['IRNGNormal']

_log = get_logger(__name__)


class IRNGNormal(ABC):
    """Base class for the normal deviate generators.

    Args:
        rng: Uniform engine to draw from. ``None`` builds the configured
            default engine with a clock-derived seed.
    """

    kind: N01Kind

    def __init__(self, rng: Optional[IRNG] = None):
        if rng is None:
            from .. import create_rng
            rng = create_rng()
        self._rng = rng
        rng.attach(self)

    @property
    def rng(self) -> IRNG:
        return self._rng

    @property
    def name(self) -> str:
        return self.kind.label

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.name!r} rng={self._rng.name!r}>"

    def invalidate(self) -> None:
        """Drop state derived from the engine's previous stream."""

    @abstractmethod
    def internal_norm_rand(self) -> float:
        """Return one N(0, 1) deviate."""

    def norm_rand(self, n: int = 1) -> np.ndarray:
        """Return ``n`` deviates; ``n < 1`` is treated as 1."""
        n = int(n) if n >= 1 else 1
        out = np.empty(n, dtype=np.float64)
        for i in range(n):
            out[i] = self.internal_norm_rand()
        return out

    def __iter__(self) -> Iterator[float]:
        while True:
            yield self.internal_norm_rand()

    def unif_rand(self, n: int = 1) -> np.ndarray:
        return self._rng.unif_rand(n)

    def internal_unif_rand(self) -> float:
        return self._rng.internal_unif_rand()
