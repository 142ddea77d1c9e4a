"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np


@pytest.fixture
def xor_inputs():
    """XOR inputs, one row per case."""
    return np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])


@pytest.fixture
def xor_outputs():
    """XOR expected outputs."""
    return np.array([[0.0], [1.0], [1.0], [0.0]])


@pytest.fixture
def xor_config():
    """Configuration for a small XOR run."""
    from evonet.run.config import Config

    config = Config()
    config.population_size        = 20
    config.topology               = [2, 3, 1]
    config.activation             = 'sigmoid'
    config.selection              = 'elitist'
    config.recombination          = 'random'
    config.mutation               = 'all_but_best_two'
    config.max_number_generations = 15
    return config
