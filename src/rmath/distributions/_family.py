"""Shared plumbing for the distribution families.

A family owns one normal generator (and through it one uniform engine)
and turns per-element sampler calls into vectorized ``r*`` functions.
"""

from typing import Callable, Optional

import numpy as np

from .._errors import InvalidParameter
from .._recycle import sample_count, recycle
from ..rng import IRNG
from ..rng.normal import IRNGNormal, create_normal

__all__ = ['Family', 'as_normal', 'require']


def as_normal(source=None) -> IRNGNormal:
    """Accept a normal generator, a bare engine, or ``None`` (defaults)."""
    if source is None:
        return create_normal()
    if isinstance(source, IRNGNormal):
        return source
    if isinstance(source, IRNG):
        return create_normal(rng=source)
    raise TypeError(
        f"expected a normal generator or a uniform engine, got {type(source).__name__}"
    )


def require(ok: np.ndarray, message: str) -> None:
    """Raise ``InvalidParameter`` unless every element of ``ok`` holds."""
    if not np.all(ok):
        raise InvalidParameter(message)


class Family:
    """Base class: holds the generator and runs the recycling loop."""

    def __init__(self, normal: Optional[IRNGNormal] = None):
        self._normal = as_normal(normal)

    @property
    def normal(self) -> IRNGNormal:
        return self._normal

    @property
    def rng(self) -> IRNG:
        return self._normal.rng

    def __repr__(self) -> str:
        return f"<{type(self).__name__} normal={self._normal.name!r} rng={self.rng.name!r}>"

    def _generate(self, n, draw: Callable[..., float], check: Callable[..., None], **params) -> np.ndarray:
        """Recycle ``params`` to the sample count, validate, then draw.

        ``check`` sees the whole recycled arrays, so an invalid element is
        reported before any uniform is consumed.
        """
        count = sample_count(n)
        out = np.empty(count, dtype=np.float64)
        if count == 0:
            return out
        arrays = recycle(count, **params)
        check(*arrays)
        for i in range(count):
            out[i] = draw(*(a[i] for a in arrays))
        return out
