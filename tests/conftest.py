import numpy as np
import pytest

from mcmc_summary.logger import set_level

set_level("DEBUG")


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def mixed_draws(rng):
    """Well mixed draws of shape (iteration, chain) = (500, 4)."""
    ar = np.zeros((500, 4))
    noise = rng.normal(size=(500, 4))
    for t in range(1, 500):
        ar[t] = 0.5 * ar[t - 1] + noise[t]
    return ar
