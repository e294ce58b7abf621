"""Normal Distribution Density.

Beyond |z| = 5 the exponent is split as z = x1 + x2 with x1 on a 2^-16
grid, so exp(-z^2/2) keeps full relative accuracy down to the underflow
boundary.
"""

import math
import numpy as np

from ..optim import optimized_jit

__all__ = [
    'dnorm_kernel',
    'dnorm_array',
]

_LN_SQRT_2PI = 0.918938533204672741780329736406
_1_SQRT_2PI = 0.398942280401432677939946059934
_TWO_SQRT_DBL_MAX = 2.0 * math.sqrt(1.7976931348623157e308)
# sqrt(-2 * ln 2 * (DBL_MIN_EXP + 1 - DBL_MANT_DIG))
_UNDERFLOW = 38.56804181549334


@optimized_jit
def dnorm_kernel(x: float, mu: float, sigma: float, give_log: bool) -> float:
    """Density of N(mu, sigma) at ``x``."""
    if math.isnan(x) or math.isnan(mu) or math.isnan(sigma):
        return x + mu + sigma
    zero = -math.inf if give_log else 0.0
    if sigma < 0.0:
        return math.nan
    if not math.isfinite(sigma):
        return zero
    if not math.isfinite(x) and mu == x:
        return math.nan
    if sigma == 0.0:
        return math.inf if x == mu else zero

    z = (x - mu) / sigma
    if not math.isfinite(z):
        return zero
    z = abs(z)
    if z >= _TWO_SQRT_DBL_MAX:
        return zero
    if give_log:
        return -(_LN_SQRT_2PI + 0.5 * z * z + math.log(sigma))
    if z < 5.0:
        return _1_SQRT_2PI * math.exp(-0.5 * z * z) / sigma

    if z > _UNDERFLOW:
        return 0.0
    x1 = float(round(z * 65536.0)) / 65536.0
    x2 = z - x1
    return _1_SQRT_2PI / sigma * (math.exp(-0.5 * x1 * x1) * math.exp((-0.5 * x2 - x1) * x2))


@optimized_jit
def dnorm_array(
    x: np.ndarray,
    mu: np.ndarray,
    sigma: np.ndarray,
    give_log: bool,
    out: np.ndarray
) -> None:
    for i in range(len(out)):
        out[i] = dnorm_kernel(x[i], mu[i], sigma[i], give_log)
