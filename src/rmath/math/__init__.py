"""Normal Distribution Kernels.

Numba-compiled density, CDF and quantile of the normal distribution.
These sit below the engines and the distribution families: the Inversion
normal generator calls ``qnorm_kernel`` directly.

Submodules:
    _pnorm: Cody (1993) CDF, both tails in one pass
    _qnorm: Wichura (1988) AS241 quantile
    _dnorm: density with underflow-safe exponent splitting
"""

from ._pnorm import (
    pnorm_both,
    pnorm_kernel,
    pnorm_array,
    LOWER,
    UPPER,
    BOTH,
)

from ._qnorm import (
    qnorm_kernel,
    qnorm_array,
)

from ._dnorm import (
    dnorm_kernel,
    dnorm_array,
)

__all__ = [
    'pnorm_both',
    'pnorm_kernel',
    'pnorm_array',
    'qnorm_kernel',
    'qnorm_array',
    'dnorm_kernel',
    'dnorm_array',
    'LOWER',
    'UPPER',
    'BOTH',
]
