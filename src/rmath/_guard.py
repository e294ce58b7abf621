"""Bounded rejection loops.

Every accept/reject loop in the library iterates over ``attempts()`` and,
if it falls through, raises the error built by ``exhausted()``. The bound
comes from ``Config.max_rejections`` at the time the loop starts.
"""

from . import _config
from ._errors import InternalError
from .optim import get_logger

__all__ = ['attempts', 'exhausted']

_log = get_logger(__name__)


def attempts() -> range:
    return range(_config.get_config().max_rejections)


def exhausted(where: str, **params) -> InternalError:
    """Log and return the error for a loop that never accepted."""
    limit = _config.get_config().max_rejections
    detail = ", ".join(f"{k}={v!r}" for k, v in params.items())
    msg = f"{where}: no candidate accepted after {limit} attempts"
    if detail:
        msg = f"{msg} ({detail})"
    _log.error(msg)
    return InternalError(msg)
