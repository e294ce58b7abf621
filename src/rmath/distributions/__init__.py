"""Distribution Families and Rejection Samplers.

Each family owns a normal generator (and through it a uniform engine) and
exposes R-style vectorized generators. The samplers underneath draw one
deviate at a time and cache the constants derived from their parameters.

Families:
    Normal: rnorm, dnorm, pnorm, qnorm
    Exponential: rexp
    Gamma: rgamma, rchisq
    Beta: rbeta
    Poisson: rpois
    Binomial: rbinom
    NegativeBinomial: rnbinom, rnbinom_mu
    Geometric: rgeom

Samplers:
    GammaSampler, BetaSampler, PoissonSampler, BinomialSampler
"""

from .normal import (
    dnorm,
    pnorm,
    qnorm,
    pnorm_both,
    Normal,
)

from .exponential import exp_rand, Exponential

from .gamma import GammaCache, GammaSampler, Gamma
from .beta import BetaCache, BetaSampler, Beta
from .poisson import PoissonTable, PoissonConstants, PoissonSampler, Poisson
from .binomial import BinomialCache, BinomialSampler, Binomial
from .negative_binomial import NegativeBinomial
from .geometric import Geometric

__all__ = [
    # Normal
    'dnorm',
    'pnorm',
    'qnorm',
    'pnorm_both',
    'Normal',

    # Continuous
    'exp_rand',
    'Exponential',
    'GammaCache',
    'GammaSampler',
    'Gamma',
    'BetaCache',
    'BetaSampler',
    'Beta',

    # Discrete
    'PoissonTable',
    'PoissonConstants',
    'PoissonSampler',
    'Poisson',
    'BinomialCache',
    'BinomialSampler',
    'Binomial',
    'NegativeBinomial',
    'Geometric',
]
