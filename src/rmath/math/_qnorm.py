"""Normal Distribution Quantile (Wichura 1988, AS241 PPND16).

Three rational approximations in ``q = p - 0.5``:
    - |q| <= 0.425: central, in r = 0.180625 - q^2
    - otherwise r = sqrt(-log(min(p, 1 - p))):
        r <= 5  -> intermediate, in r - 1.6
        r > 5   -> far tail, in r - 5

Accurate to about 1 part in 10^16. On the log scale the tail branch takes
-log directly from the argument, so probabilities far below DBL_MIN are
still inverted.
"""

import math
import numpy as np

from ..optim import optimized_jit

__all__ = [
    'qnorm_kernel',
    'qnorm_array',
]


@optimized_jit
def qnorm_kernel(p: float, mu: float, sigma: float, lower_tail: bool, log_p: bool) -> float:
    """x such that P[X <= x] = p (or P[X > x] = p) for X ~ N(mu, sigma)."""
    if math.isnan(p) or math.isnan(mu) or math.isnan(sigma):
        return p + mu + sigma

    # boundaries of the probability scale
    if log_p:
        if p > 0.0:
            return math.nan
        if p == 0.0:
            return math.inf if lower_tail else -math.inf
        if p == -math.inf:
            return -math.inf if lower_tail else math.inf
    else:
        if p < 0.0 or p > 1.0:
            return math.nan
        if p == 0.0:
            return -math.inf if lower_tail else math.inf
        if p == 1.0:
            return math.inf if lower_tail else -math.inf

    if sigma < 0.0:
        return math.nan
    if sigma == 0.0:
        return mu

    # lower-tail probability on the natural scale
    if log_p:
        p_ = math.exp(p) if lower_tail else -math.expm1(p)
    else:
        p_ = p if lower_tail else 0.5 - p + 0.5
    q = p_ - 0.5

    if abs(q) <= 0.425:
        r = 0.180625 - q * q
        val = (q * (((((((r * 2509.0809287301226727
                          + 33430.575583588128105) * r + 67265.770927008700853) * r
                        + 45921.953931549871457) * r + 13731.693765509461125) * r
                      + 1971.5909503065514427) * r + 133.14166789178437745) * r
                    + 3.387132872796366608)
               / (((((((r * 5226.495278852545925
                        + 28729.085735721942674) * r + 39307.89580009271061) * r
                      + 21213.794301586595867) * r + 5394.1960214247511077) * r
                    + 687.1870074920579083) * r + 42.313330701600911252) * r + 1.0))
        return mu + sigma * val

    # r = min(p, 1 - p) < 0.075
    if q > 0.0:
        if log_p:
            r = -math.expm1(p) if lower_tail else math.exp(p)
        else:
            r = 0.5 - p + 0.5 if lower_tail else p
    else:
        r = p_

    if log_p and ((lower_tail and q <= 0.0) or (not lower_tail and q > 0.0)):
        r = math.sqrt(-p)
    else:
        r = math.sqrt(-math.log(r))

    if r <= 5.0:
        r -= 1.6
        val = ((((((((r * 7.7454501427834140764e-4
                      + 0.0227238449892691845833) * r + 0.24178072517745061177) * r
                    + 1.27045825245236838258) * r + 3.64784832476320460504) * r
                  + 5.7694972214606914055) * r + 4.6303378461565452959) * r
                + 1.42343711074968357734)
               / (((((((r * 1.05075007164441684324e-9
                        + 5.475938084995344946e-4) * r + 0.0151986665636164571966) * r
                      + 0.14810397642748007459) * r + 0.68976733498510000455) * r
                    + 1.6763848301838038494) * r + 2.05319162663775882187) * r + 1.0))
    else:
        r -= 5.0
        val = ((((((((r * 2.01033439929228813265e-7
                      + 2.71155556874348757815e-5) * r + 0.0012426609473880784386) * r
                    + 0.026532189526576123093) * r + 0.29656057182850489123) * r
                  + 1.7848265399172913358) * r + 5.4637849111641143699) * r
                + 6.6579046435011037772)
               / (((((((r * 2.04426310338993978564e-15
                        + 1.4215117583164458887e-7) * r + 1.8463183175100546818e-5) * r
                      + 7.868691311456132591e-4) * r + 0.0148753612908506148525) * r
                    + 0.13692988092273580531) * r + 0.59983220655588793769) * r + 1.0))

    if q < 0.0:
        val = -val
    return mu + sigma * val


@optimized_jit
def qnorm_array(
    p: np.ndarray,
    mu: np.ndarray,
    sigma: np.ndarray,
    lower_tail: bool,
    log_p: bool,
    out: np.ndarray
) -> None:
    for i in range(len(out)):
        out[i] = qnorm_kernel(p[i], mu[i], sigma[i], lower_tail, log_p)
