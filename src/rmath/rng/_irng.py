"""Uniform engine contract.

Every engine owns a fixed-length vector of unsigned 32-bit words. Integer
seeds go through R's initial scrambling (50 rounds of the 69069 LCG) before
the engine expands them into its own state, so a given seed produces the
same stream as ``set.seed(seed)`` does in R for the same kind.

Objects whose cached state depends on the stream (normal generators that
keep a spare deviate, samplers with derived constants) ``attach`` to the
engine. Re-seeding calls their ``invalidate()`` directly, before returning.
"""

import os
import time
import weakref
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import numpy as np

from .._errors import InvalidSeed
from ..optim import get_logger
from ._types import RNGKind

__all__ = [
    'IRNG',
    'fixup',
    'timeseed',
    'scramble',
    'MASK32',
    'I2_32M1',
]

_log = get_logger(__name__)

MASK32 = 0xFFFFFFFF

# 1 / (2^32 - 1)
I2_32M1 = 2.328306437080797e-10


def fixup(x: float) -> float:
    """Keep a draw strictly inside (0, 1)."""
    if x <= 0.0:
        return 0.5 * I2_32M1
    if 1.0 - x <= 0.0:
        return 1.0 - 0.5 * I2_32M1
    return x


def timeseed() -> int:
    """Seed derived from the clock and the process id, as R does on startup."""
    now = time.time_ns() // 1000
    return ((now & MASK32) ^ (os.getpid() << 16)) & MASK32


def scramble(seed: int) -> int:
    """R's initial scrambling of a user seed."""
    seed &= MASK32
    for _ in range(50):
        seed = (69069 * seed + 1) & MASK32
    return seed


def _as_word(value) -> int:
    try:
        word = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidSeed(f"seed words must be integers, got {value!r}") from exc
    if word != value:
        raise InvalidSeed(f"seed words must be integers, got {value!r}")
    if not -(1 << 31) <= word <= MASK32:
        raise InvalidSeed(f"seed word {word} is outside the 32-bit range")
    return word & MASK32


class IRNG(ABC):
    """Base class for the uniform engines.

    Subclasses set ``kind`` and ``n_seed`` and implement ``_init_state``,
    ``_get_seed``, ``_set_seed`` and ``internal_unif_rand``.
    """

    kind: RNGKind
    n_seed: int

    def __init__(self, seed: Optional[int] = None):
        self._dependents = weakref.WeakSet()
        self.init(timeseed() if seed is None else seed)

    @property
    def name(self) -> str:
        return self.kind.label

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.name!r}>"

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def init(self, seed: int) -> None:
        """Re-seed from an integer and invalidate every attached dependent."""
        try:
            seed = int(seed)
        except (TypeError, ValueError) as exc:
            raise InvalidSeed(f"seed must be an integer, got {seed!r}") from exc
        self._init_state(scramble(seed))
        _log.debug("%s seeded with %d", self.name, seed)
        self._invalidate_dependents()

    @property
    def seed(self) -> List[int]:
        """The full state as unsigned 32-bit words."""
        return [int(w) for w in self._get_seed()]

    @seed.setter
    def seed(self, words: Sequence[int]) -> None:
        words = [_as_word(w) for w in np.ravel(np.asarray(words, dtype=object))]
        if len(words) != self.n_seed:
            raise InvalidSeed(
                f"{self.name} needs {self.n_seed} seed words, got {len(words)}"
            )
        self._set_seed(words)
        self._invalidate_dependents()

    @abstractmethod
    def _init_state(self, scrambled: int) -> None:
        """Expand a scrambled seed into the full state."""

    @abstractmethod
    def _get_seed(self) -> Sequence[int]:
        """Return the state vector."""

    @abstractmethod
    def _set_seed(self, words: List[int]) -> None:
        """Install a validated state vector, applying the kind's fix-up."""

    # ------------------------------------------------------------------
    # Dependents
    # ------------------------------------------------------------------

    def attach(self, dependent) -> None:
        """Register an object whose ``invalidate()`` runs on every re-seed."""
        self._dependents.add(dependent)

    def _invalidate_dependents(self) -> None:
        for dependent in list(self._dependents):
            dependent.invalidate()

    # ------------------------------------------------------------------
    # Draws
    # ------------------------------------------------------------------

    @abstractmethod
    def internal_unif_rand(self) -> float:
        """Advance one step and return a draw in (0, 1)."""

    def unif_rand(self, n: int = 1) -> np.ndarray:
        """Return ``n`` draws; ``n < 1`` is treated as 1."""
        n = int(n) if n >= 1 else 1
        out = np.empty(n, dtype=np.float64)
        for i in range(n):
            out[i] = self.internal_unif_rand()
        return out
