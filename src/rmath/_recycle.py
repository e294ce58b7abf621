"""Sample counts and parameter recycling for the vectorized generators.

``n`` follows R: an integer is the count, a sequence of length > 1
contributes its length. Parameters are recycled cyclically to the count,
so ``rgamma(5, shape=[1, 2])`` uses shapes 1, 2, 1, 2, 1.
"""

from typing import Tuple

import numpy as np

from ._errors import InvalidParameter

__all__ = ['sample_count', 'recycle']


def sample_count(n) -> int:
    if np.ndim(n) > 0:
        size = np.size(n)
        if size != 1:
            return size
        n = np.ravel(n)[0]
    try:
        count = int(n)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidParameter(f"invalid sample count {n!r}") from exc
    if count != n or count < 0:
        raise InvalidParameter(f"sample count must be a non-negative integer, got {n!r}")
    return count


def recycle(count: int, **params) -> Tuple[np.ndarray, ...]:
    """Return each parameter as a float64 array of length ``count``."""
    out = []
    for name, value in params.items():
        arr = np.ravel(np.asarray(value, dtype=np.float64))
        if arr.size == 0:
            raise InvalidParameter(f"{name} must not be empty")
        out.append(np.resize(arr, count))
    return tuple(out)
