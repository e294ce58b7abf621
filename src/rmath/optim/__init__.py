"""rmath Optimization Toolkit.

Numba JIT decorator used by the numeric kernels, plus the logging switches
shared by the whole package.

Quick Start:
    from rmath.optim import optimized_jit, disable_logging

    @optimized_jit
    def temper(y):
        y ^= y >> 11
        return y

    disable_logging()

Available Components:

    JIT Decorators:
        - optimized_jit: @njit with nogil, no boundscheck, strict IEEE math
        - inline_jit: Shorthand for @optimized_jit(inline='always')

    Logging:
        - get_logger(name): Child of the 'rmath' logger
        - enable_logging(level): Attach a stream handler
        - disable_logging(): Silence the 'rmath' logger tree
"""

from ._jit import (
    optimized_jit,
    inline_jit,
)

from ._logging import (
    get_logger,
    enable_logging,
    disable_logging,
)

__all__ = [
    # JIT Decorators
    'optimized_jit',
    'inline_jit',

    # Logging
    'get_logger',
    'enable_logging',
    'disable_logging',
]
