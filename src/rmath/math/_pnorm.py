"""Normal Distribution CDF (Cody 1993).

Rational Chebyshev approximations from W. J. Cody, "Algorithm 715:
SPECFUN", ACM TOMS 19 (1993), in the form used by R's ``pnorm_both``.

Regions by y = |x|:
    - y <= 0.67448975 (qnorm(3/4)): central approximation, both tails as
      0.5 +/- x * R(x^2)
    - y <= sqrt(32): moderate tail, exp(-x^2/2) * R(y), split exponent
    - up to about 37.5 (8.29 on the far side): asymptotic tail in 1/x^2
    - beyond: exact 0 / 1 (or their logs)

The tail that is small is always computed directly; the other is its
complement, so no probability near 0 is formed by cancellation.

Functions:
    - pnorm_both: (lower, upper) for a standardized value
    - pnorm_kernel: Scalar pnorm with location/scale
    - pnorm_array: Vectorized pnorm into an output array
"""

import math
import numpy as np

from ..optim import optimized_jit, inline_jit

__all__ = [
    'pnorm_both',
    'pnorm_kernel',
    'pnorm_array',
]

# Tail selectors
LOWER = 0
UPPER = 1
BOTH = 2

_SQRT_32 = 5.656854249492380195206754896838
_1_SQRT_2PI = 0.398942280401432677939946059934
_SIXTEN = 16.0
_DBL_EPSILON = 2.220446049250313e-16

# central region
_A0 = 2.2352520354606839287
_A1 = 161.02823106855587881
_A2 = 1067.6894854603709582
_A3 = 18154.981253343561249
_A4 = 0.065682337918207449113

_B0 = 47.20258190468824187
_B1 = 976.09855173777669322
_B2 = 10260.932208618978205
_B3 = 45507.789335026729956

# moderate tail
_C = np.array([
    0.39894151208813466764,
    8.8831497943883759412,
    93.506656132177855979,
    597.27027639480026226,
    2494.5375852903726711,
    6848.1904505362823326,
    11602.651437647350124,
    9842.7148383839780218,
    1.0765576773720192317e-8,
])

_D = np.array([
    22.266688044328115691,
    235.38790178262499861,
    1519.377599407554805,
    6485.558298266760755,
    18615.571640885098091,
    34900.952721145977266,
    38912.003286093271411,
    19685.429676859990727,
])

# asymptotic tail
_P = np.array([
    0.21589853405795699,
    0.1274011611602473639,
    0.022235277870649807,
    0.001421619193227893466,
    2.9112874951168792e-5,
    0.02307344176494017303,
])

_Q = np.array([
    1.28426009614491121,
    0.468238212480865118,
    0.0659881378689285515,
    0.00378239633202758244,
    7.29751555083966205e-5,
])


@inline_jit
def _split_exp(v: float, temp: float, log_p: bool, want_other: bool) -> tuple:
    """exp(-v^2/2) * temp with v^2 split as xsq^2 + del to keep precision.

    Returns (small, other): the tail beyond |v| and its complement.
    """
    xsq = math.copysign(float(math.floor(abs(v) * _SIXTEN)), v) / _SIXTEN
    dl = (v - xsq) * (v + xsq)
    if log_p:
        small = (-xsq * xsq * 0.5) - dl * 0.5 + math.log(temp)
        other = 0.0
        if want_other:
            other = math.log1p(-math.exp(-xsq * xsq * 0.5) * math.exp(-dl * 0.5) * temp)
        return small, other
    small = math.exp(-xsq * xsq * 0.5) * math.exp(-dl * 0.5) * temp
    return small, 1.0 - small


@optimized_jit
def pnorm_both(x: float, i_tail: int = BOTH, log_p: bool = False) -> tuple:
    """Lower and upper tail probabilities of N(0, 1) at ``x``.

    Args:
        x: Standardized value
        i_tail: 0 = lower only, 1 = upper only, 2 = both
        log_p: Return natural logs of the probabilities

    Returns:
        (cum, ccum): P[X <= x] and P[X > x]. Tails not requested by
        ``i_tail`` are still filled in the central and moderate regions
        but are only guaranteed accurate when requested.
    """
    if math.isnan(x):
        return math.nan, math.nan

    eps = _DBL_EPSILON * 0.5
    lower = i_tail != UPPER
    upper = i_tail != LOWER

    y = abs(x)
    if y <= 0.67448975:
        if y > eps:
            xsq = x * x
            xnum = _A4 * xsq
            xden = xsq
            xnum = (xnum + _A0) * xsq
            xden = (xden + _B0) * xsq
            xnum = (xnum + _A1) * xsq
            xden = (xden + _B1) * xsq
            xnum = (xnum + _A2) * xsq
            xden = (xden + _B2) * xsq
        else:
            xnum = 0.0
            xden = 0.0
        temp = x * (xnum + _A3) / (xden + _B3)
        cum = 0.5 + temp
        ccum = 0.5 - temp
        if log_p:
            cum = math.log(cum)
            ccum = math.log(ccum)
        return cum, ccum

    if y <= _SQRT_32:
        xnum = _C[8] * y
        xden = y
        for i in range(7):
            xnum = (xnum + _C[i]) * y
            xden = (xden + _D[i]) * y
        temp = (xnum + _C[7]) / (xden + _D[7])

        want_other = (lower and x > 0.0) or (upper and x <= 0.0)
        small, other = _split_exp(y, temp, log_p, want_other)
        if x > 0.0:
            return other, small
        return small, other

    if ((log_p and y < 1e170)
            or (lower and -37.5193 < x and x < 8.2924)
            or (upper and -8.2924 < x and x < 37.5193)):
        xsq = 1.0 / (x * x)
        xnum = _P[5] * xsq
        xden = xsq
        for i in range(4):
            xnum = (xnum + _P[i]) * xsq
            xden = (xden + _Q[i]) * xsq
        temp = xsq * (xnum + _P[4]) / (xden + _Q[4])
        temp = (_1_SQRT_2PI - temp) / y

        want_other = (lower and x > 0.0) or (upper and x <= 0.0)
        small, other = _split_exp(x, temp, log_p, want_other)
        if x > 0.0:
            return other, small
        return small, other

    # probabilities are 0 / 1 to double precision
    zero = -math.inf if log_p else 0.0
    one = 0.0 if log_p else 1.0
    if x > 0.0:
        return one, zero
    return zero, one


@optimized_jit
def pnorm_kernel(q: float, mu: float, sigma: float, lower_tail: bool, log_p: bool) -> float:
    """P[X <= q] (or P[X > q]) for X ~ N(mu, sigma); ``sigma >= 0``."""
    if math.isnan(q) or math.isnan(mu) or math.isnan(sigma):
        return q + mu + sigma
    if not math.isfinite(q) and mu == q:
        return math.nan

    zero = -math.inf if log_p else 0.0
    one = 0.0 if log_p else 1.0
    if sigma == 0.0:
        if q < mu:
            return zero if lower_tail else one
        return one if lower_tail else zero

    z = (q - mu) / sigma
    if not math.isfinite(z):
        if q < mu:
            return zero if lower_tail else one
        return one if lower_tail else zero

    cum, ccum = pnorm_both(z, LOWER if lower_tail else UPPER, log_p)
    return cum if lower_tail else ccum


@optimized_jit
def pnorm_array(
    q: np.ndarray,
    mu: np.ndarray,
    sigma: np.ndarray,
    lower_tail: bool,
    log_p: bool,
    out: np.ndarray
) -> None:
    """Vectorized ``pnorm_kernel`` over equally sized 1-d arrays."""
    for i in range(len(out)):
        out[i] = pnorm_kernel(q[i], mu[i], sigma[i], lower_tail, log_p)
