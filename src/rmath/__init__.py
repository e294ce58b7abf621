"""rmath: R's random variate generators and normal distribution in Python.

Bit-compatible uniform engines, the four normal generators, rejection
samplers for the gamma, beta, Poisson and binomial families, and the normal
density / CDF / quantile, compiled with Numba where it matters.

Quick Start:
    from rmath import MersenneTwister, Inversion, Gamma

    rng = MersenneTwister(42)
    gamma = Gamma(Inversion(rng))
    gamma.rgamma(5, shape=2.5)

    rng.init(42)          # replays the same stream

Subpackages:
    rng: Uniform engines
    rng.normal: Normal deviate generators
    distributions: Families and samplers
    math: Numba kernels for dnorm / pnorm / qnorm
    optim: JIT decorator and logging switches
"""

from ._errors import RmathError, InvalidParameter, InvalidSeed, InternalError
from ._config import Config, get_config, configure, reset_config

from .rng import (
    RNGKind,
    N01Kind,
    IRNG,
    WichmannHill,
    MarsagliaMultiCarry,
    SuperDuper,
    MersenneTwister,
    KnuthTAOCP,
    KnuthTAOCP2002,
    LecuyerCMRG,
    create_rng,
)

from .rng.normal import (
    IRNGNormal,
    Inversion,
    AhrensDieter,
    BoxMuller,
    KindermanRamage,
    create_normal,
)

from .distributions import (
    dnorm,
    pnorm,
    qnorm,
    pnorm_both,
    exp_rand,
    Normal,
    Exponential,
    Gamma,
    Beta,
    Poisson,
    Binomial,
    NegativeBinomial,
    Geometric,
    GammaSampler,
    BetaSampler,
    PoissonSampler,
    BinomialSampler,
)

__version__ = '0.1.0'

__all__ = [
    # Errors
    'RmathError',
    'InvalidParameter',
    'InvalidSeed',
    'InternalError',

    # Configuration
    'Config',
    'get_config',
    'configure',
    'reset_config',

    # Engines
    'RNGKind',
    'N01Kind',
    'IRNG',
    'WichmannHill',
    'MarsagliaMultiCarry',
    'SuperDuper',
    'MersenneTwister',
    'KnuthTAOCP',
    'KnuthTAOCP2002',
    'LecuyerCMRG',
    'create_rng',

    # Normal generators
    'IRNGNormal',
    'Inversion',
    'AhrensDieter',
    'BoxMuller',
    'KindermanRamage',
    'create_normal',

    # Distributions
    'dnorm',
    'pnorm',
    'qnorm',
    'pnorm_both',
    'exp_rand',
    'Normal',
    'Exponential',
    'Gamma',
    'Beta',
    'Poisson',
    'Binomial',
    'NegativeBinomial',
    'Geometric',
    'GammaSampler',
    'BetaSampler',
    'PoissonSampler',
    'BinomialSampler',
]
