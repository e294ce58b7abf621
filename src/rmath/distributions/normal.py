"""Normal Distribution.

Vectorized density, CDF and quantile over the Numba kernels in
``rmath.math``, plus the ``Normal`` family for random deviates.

Arguments are recycled to the longest one. When every argument is a
scalar the result is a Python float, otherwise a float64 array.

Functions:
    - dnorm(x, mean, sd, log)
    - pnorm(q, mean, sd, lower_tail, log_p)
    - qnorm(p, mean, sd, lower_tail, log_p)
    - pnorm_both(x, i_tail, log_p): both tails of N(0, 1) in one pass
"""

from typing import Tuple, Union

import numpy as np

from .._errors import InvalidParameter
from .._recycle import sample_count, recycle
from ..math import dnorm_array, pnorm_array, qnorm_array
from ..math import pnorm_both as _pnorm_both
from ._family import Family, require

__all__ = ['dnorm', 'pnorm', 'qnorm', 'pnorm_both', 'Normal']

ArrayLike = Union[float, np.ndarray]


def _prepare(sd, **params):
    values = {k: np.asarray(v, dtype=np.float64) for k, v in params.items()}
    values['sd'] = np.asarray(sd, dtype=np.float64)
    if np.any(values['sd'] < 0):
        raise InvalidParameter("sd must be non-negative")
    scalar = all(v.ndim == 0 for v in values.values())
    count = 0 if any(v.size == 0 for v in values.values()) else max(v.size for v in values.values())
    if count == 0:
        return scalar, 0, ()
    return scalar, count, recycle(count, **values)


def _finish(out: np.ndarray, scalar: bool) -> ArrayLike:
    return float(out[0]) if scalar else out


def pnorm_both(x: float, i_tail: int = 2, log_p: bool = False) -> Tuple[float, float]:
    """Both tail probabilities of N(0, 1) at a standardized ``x``.

    Args:
        x: Standardized value
        i_tail: 0 = lower only, 1 = upper only, 2 = both
        log_p: Return natural logs

    Returns:
        (P[X <= x], P[X > x]). Only the requested tails are guaranteed.
    """
    if i_tail not in (0, 1, 2):
        raise InvalidParameter(f"i_tail must be 0, 1 or 2, got {i_tail!r}")
    return _pnorm_both(float(x), int(i_tail), bool(log_p))


def dnorm(x, mean=0.0, sd=1.0, log: bool = False) -> ArrayLike:
    """Density of N(mean, sd)."""
    scalar, count, arrays = _prepare(sd, x=x, mean=mean)
    out = np.empty(count, dtype=np.float64)
    if count:
        x_, mean_, sd_ = arrays
        dnorm_array(x_, mean_, sd_, bool(log), out)
    return _finish(out, scalar)


def pnorm(q, mean=0.0, sd=1.0, lower_tail: bool = True, log_p: bool = False) -> ArrayLike:
    """Distribution function of N(mean, sd).

    Example:
        >>> pnorm(1.96)
        0.9750021048517795
    """
    scalar, count, arrays = _prepare(sd, q=q, mean=mean)
    out = np.empty(count, dtype=np.float64)
    if count:
        q_, mean_, sd_ = arrays
        pnorm_array(q_, mean_, sd_, bool(lower_tail), bool(log_p), out)
    return _finish(out, scalar)


def qnorm(p, mean=0.0, sd=1.0, lower_tail: bool = True, log_p: bool = False) -> ArrayLike:
    """Quantile function of N(mean, sd); probabilities outside [0, 1] give NaN."""
    scalar, count, arrays = _prepare(sd, p=p, mean=mean)
    out = np.empty(count, dtype=np.float64)
    if count:
        p_, mean_, sd_ = arrays
        qnorm_array(p_, mean_, sd_, bool(lower_tail), bool(log_p), out)
    return _finish(out, scalar)


class Normal(Family):
    """Normal distribution family.

    Example:
        >>> from rmath.rng import MersenneTwister
        >>> from rmath.rng.normal import Inversion
        >>> Normal(Inversion(MersenneTwister(1))).rnorm(3)
        array([-0.62645381,  0.18364332, -0.83562861])
    """

    @staticmethod
    def _check(mean: np.ndarray, sd: np.ndarray) -> None:
        require(~np.isnan(mean), "mean must not be NaN")
        require(np.isfinite(sd) & (sd >= 0), "sd must be finite and non-negative")

    def _draw(self, mean: float, sd: float) -> float:
        if sd == 0.0 or not np.isfinite(mean):
            return mean
        return mean + sd * self._normal.internal_norm_rand()

    def rnorm(self, n, mean=0.0, sd=1.0) -> np.ndarray:
        """Draw ``n`` normal deviates."""
        count = sample_count(n)
        if count == 0:
            return np.empty(0, dtype=np.float64)
        mean_, sd_ = recycle(count, mean=mean, sd=sd)
        self._check(mean_, sd_)
        if np.all(np.isfinite(mean_) & (sd_ > 0)):
            # every element consumes one deviate, so draw them in bulk
            return mean_ + sd_ * self._normal.norm_rand(count)
        out = np.empty(count, dtype=np.float64)
        for i in range(count):
            out[i] = self._draw(mean_[i], sd_[i])
        return out

    def dnorm(self, x, mean=0.0, sd=1.0, log: bool = False) -> ArrayLike:
        return dnorm(x, mean, sd, log)

    def pnorm(self, q, mean=0.0, sd=1.0, lower_tail: bool = True, log_p: bool = False) -> ArrayLike:
        return pnorm(q, mean, sd, lower_tail, log_p)

    def qnorm(self, p, mean=0.0, sd=1.0, lower_tail: bool = True, log_p: bool = False) -> ArrayLike:
        return qnorm(p, mean, sd, lower_tail, log_p)
