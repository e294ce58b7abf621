"""Error taxonomy shared by the engines and samplers."""

__all__ = [
    'RmathError',
    'InvalidParameter',
    'InvalidSeed',
    'InternalError',
]


class RmathError(Exception):
    """Base class for every error raised by rmath."""


class InvalidParameter(RmathError, ValueError):
    """A distribution parameter is non-finite, negative or out of domain.

    Raised before any uniform draw is consumed.
    """


class InvalidSeed(RmathError, ValueError):
    """A seed vector has the wrong length, holds words outside the unsigned
    32-bit range, or describes a state the engine's fix-up cannot repair."""


class InternalError(RmathError, RuntimeError):
    """A rejection loop exceeded ``Config.max_rejections`` attempts.

    Valid parameters accept with probability 1, so this signals a defect
    in the sampler or in how its parameters were derived.
    """
