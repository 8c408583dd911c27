"""Global configuration for pytest"""

import numpy as np
import pytest


@pytest.fixture(autouse=True)
def predictable_random_numbers():
    """Seed numpy's RNG, so that randomized tests are reproducible."""
    np.random.seed(0)


@pytest.fixture(autouse=True, scope="session")
def numerical_exceptions():
    """Turn numpy float errors (e.g. division by zero) into exceptions.

    Degenerate geometry must be detected explicitly, never produce nan.
    """
    np.seterr(all="raise")
