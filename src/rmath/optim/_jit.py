"""JIT Decorator for rmath Numeric Kernels.

This module wraps Numba's @njit with the defaults every rmath kernel
compiles with:

1. nopython mode, GIL released
2. no bounds checking (kernels index fixed-size state tables)
3. strict IEEE arithmetic: fastmath is OFF because the normal CDF and
   quantile kernels return NaN/inf on purpose and the engines depend on
   exact integer recurrences

Usage:
    from rmath.optim import optimized_jit

    @optimized_jit
    def step(state):
        ...

    @optimized_jit(cache=True)
    def fill(state, out):
        ...

Note:
    The returned object is the plain Numba Dispatcher, so decorated kernels
    can call each other from compiled code.
"""

from typing import Callable, Optional, Any, Dict, Union

from numba import njit
from numba.core.dispatcher import Dispatcher

from ._logging import get_logger


__all__ = [
    'optimized_jit',
    'inline_jit',
]

_log = get_logger(__name__)


def optimized_jit(
    func: Optional[Callable] = None,
    *,
    # Numba options (passed through)
    nogil: bool = True,
    cache: bool = False,
    fastmath: bool = False,
    locals: Optional[Dict] = None,
    boundscheck: bool = False,
    **numba_options: Any
) -> Union[Callable, Dispatcher]:
    """Compile a kernel with rmath's Numba defaults.

    Args:
        func: Function to compile (when used without parentheses)
        nogil: Release GIL during execution (default: True)
        cache: Cache compiled function to disk (default: False)
        fastmath: Enable fast math optimizations (default: False)
        locals: Dictionary of local variable types
        boundscheck: Enable array bounds checking (default: False)
        **numba_options: Additional Numba options

    Returns:
        Numba Dispatcher wrapping the function

    Example:
        @optimized_jit
        def twist(mt):
            ...

        @optimized_jit(inline='always')
        def fixup(x):
            ...
    """
    numba_opts = {
        'nogil': nogil,
        'cache': cache,
        'fastmath': fastmath,
        'boundscheck': boundscheck,
        **numba_options
    }
    if locals is not None:
        numba_opts['locals'] = locals

    def decorator(fn: Callable) -> Dispatcher:
        _log.debug("registering kernel %s.%s with %s",
                   fn.__module__, fn.__qualname__, numba_opts)
        return njit(**numba_opts)(fn)

    # Handle both @optimized_jit and @optimized_jit()
    if func is not None:
        return decorator(func)
    return decorator


def inline_jit(func: Optional[Callable] = None, **kwargs) -> Union[Callable, Dispatcher]:
    """Shorthand for @optimized_jit(inline='always').

    For small helpers called from other kernels.
    """
    return optimized_jit(func, inline='always', **kwargs)
