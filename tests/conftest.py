"""Pytest configuration and shared fixtures."""

import pytest
import random
import sys
import numpy as np
from pathlib import Path

# Add the source directory and the project root (for the examples) to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))
sys.path.insert(0, str(root_dir / "src"))


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Seed the shared random generators so every test is reproducible."""
    np.random.seed(42)
    random.seed(42)
    yield
    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def sample_config():
    """Provide a small configuration for testing."""
    from evonet.run.config import Config

    config = Config()
    config.population_size        = 6
    config.topology               = [2, 2, 1]
    config.activation             = 'sigmoid'
    config.selection              = 'elitist'
    config.recombination          = 'random'
    config.mutation               = 'all_but_best_two'
    config.max_number_generations = 3
    return config


@pytest.fixture
def make_population():
    """Factory creating a population of genotypes with the given evaluations."""
    from evonet.genotype import Genotype

    def _make(evaluations, parameter_count=2):
        population = []
        for i, evaluation in enumerate(evaluations):
            genotype = Genotype([float(i)] * parameter_count)
            genotype.evaluation = evaluation
            population.append(genotype)
        return population

    return _make
