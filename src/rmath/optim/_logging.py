"""Logging switches for rmath.

All modules log through children of the ``rmath`` logger. The library
installs only a ``NullHandler``; applications opt in with
``enable_logging`` and test suites silence everything with
``disable_logging``.
"""

import logging
from typing import Optional, Union

__all__ = [
    'get_logger',
    'enable_logging',
    'disable_logging',
]

ROOT_LOGGER = 'rmath'

_root = logging.getLogger(ROOT_LOGGER)
_root.addHandler(logging.NullHandler())

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Return the child logger for a module.

    ``get_logger(__name__)`` from ``rmath.rng.mersenne_twister`` gives the
    ``rmath.rng.mersenne_twister`` logger; foreign names are re-rooted
    under ``rmath``.
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')


def enable_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the ``rmath`` logger.

    Calling it again only changes the level.
    """
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(
            logging.Formatter('[%(name)s] %(levelname)s: %(message)s')
        )
        _root.addHandler(_handler)
    _root.setLevel(level)
    return _root


def disable_logging() -> None:
    """Silence every rmath logger, including the rejection guard errors."""
    global _handler
    if _handler is not None:
        _root.removeHandler(_handler)
        _handler = None
    _root.setLevel(logging.CRITICAL + 1)
