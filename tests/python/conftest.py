"""Pytest configuration for rmath tests."""

import sys
import os

# Add src to path so the rmath package can be imported without installing
_src = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'src'))
if _src not in sys.path:
    sys.path.insert(0, _src)

import pytest

from rmath.optim import disable_logging
from rmath._config import reset_config

disable_logging()

# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "numba: tests requiring Numba")
    config.addinivalue_line("markers", "slow: slow tests")


# =============================================================================
# Fixtures - Configuration
# =============================================================================

@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts from the default configuration."""
    reset_config()
    yield
    reset_config()


# =============================================================================
# Fixtures - Engines and generators
# =============================================================================

@pytest.fixture
def mt():
    """Mersenne-Twister seeded like ``set.seed(42)``."""
    from rmath.rng import MersenneTwister
    return MersenneTwister(42)


@pytest.fixture(params=[
    'Wichmann-Hill',
    'Marsaglia-Multicarry',
    'Super-Duper',
    'Mersenne-Twister',
    'Knuth-TAOCP',
    'Knuth-TAOCP-2002',
    "L'Ecuyer-CMRG",
])
def engine(request):
    """Each of the seven engines, seeded with 1234."""
    from rmath.rng import create_rng
    return create_rng(request.param, seed=1234)


@pytest.fixture
def inversion(mt):
    """Inversion normal generator on the seeded Mersenne-Twister."""
    from rmath.rng.normal import Inversion
    return Inversion(mt)


@pytest.fixture
def big_sample():
    """Sample size for moment checks."""
    return 100_000

