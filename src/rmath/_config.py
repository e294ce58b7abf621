"""Runtime configuration.

A single mutable ``Config`` instance holds the defaults used when callers
do not pass an engine or normal generator explicitly, and the guard
applied to every rejection loop.

Environment overrides are read once, at import:

    RMATH_MAX_REJECTIONS   positive integer
    RMATH_RNG_KIND         engine name, e.g. "Mersenne-Twister" or "LECUYER_CMRG"
    RMATH_NORMAL_KIND      normal generator name, e.g. "Inversion"
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Any

from ._errors import InvalidParameter
from .rng._types import RNGKind, N01Kind

__all__ = [
    'Config',
    'get_config',
    'configure',
    'reset_config',
]


@dataclass(frozen=True)
class Config:
    """Library-wide defaults."""

    max_rejections: int = 1_000_000
    rng_kind: RNGKind = RNGKind.MERSENNE_TWISTER
    normal_kind: N01Kind = N01Kind.INVERSION


def _validate(cfg: Config) -> Config:
    if isinstance(cfg.max_rejections, bool) or not isinstance(cfg.max_rejections, int):
        raise InvalidParameter(
            f"max_rejections must be an integer, got {cfg.max_rejections!r}"
        )
    if cfg.max_rejections < 1:
        raise InvalidParameter(
            f"max_rejections must be positive, got {cfg.max_rejections}"
        )
    return replace(
        cfg,
        rng_kind=RNGKind.parse(cfg.rng_kind),
        normal_kind=N01Kind.parse(cfg.normal_kind),
    )


def _from_environ() -> Config:
    changes = {}
    raw = os.environ.get('RMATH_MAX_REJECTIONS')
    if raw:
        try:
            changes['max_rejections'] = int(raw, 0)
        except ValueError as exc:
            raise InvalidParameter(
                f"RMATH_MAX_REJECTIONS must be an integer, got {raw!r}"
            ) from exc
    raw = os.environ.get('RMATH_RNG_KIND')
    if raw:
        changes['rng_kind'] = raw
    raw = os.environ.get('RMATH_NORMAL_KIND')
    if raw:
        changes['normal_kind'] = raw
    return _validate(Config(**changes))


_config = _from_environ()


def get_config() -> Config:
    """Return the active configuration."""
    return _config


def configure(**changes: Any) -> Config:
    """Update selected fields and return the new configuration.

    Example:
        configure(rng_kind='Wichmann-Hill', max_rejections=10_000)
    """
    global _config
    known = {f.name for f in fields(Config)}
    unknown = set(changes) - known
    if unknown:
        raise InvalidParameter(f"unknown configuration keys: {sorted(unknown)}")
    _config = _validate(replace(_config, **changes))
    return _config


def reset_config() -> Config:
    """Restore the defaults (environment overrides included)."""
    global _config
    _config = _from_environ()
    return _config
