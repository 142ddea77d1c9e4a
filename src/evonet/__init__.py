"""
evonet - neuroevolution of fixed-topology feed-forward networks.

This package evolves the weights of small feed-forward neural networks with a
generational genetic algorithm. The algorithm is decoupled from any particular
task: it hands each population to an evaluation environment and resumes when
the environment reports that every genotype has been scored.

Main components:
- genotype:    Genotype, the evolvable parameter vector and its file format
- phenotype:   NeuralLayer, NeuralNetwork and Agent (genotype decoded into a network)
- pool:        GeneticAlgorithm engine and pluggable genetic operators
- run:         Trial, Experiment, Config and run statistics
- activations: Saturating activation functions

Example:
    >>> from evonet import Config, Trial
    >>> config = Config("config.ini")
    >>> class MyTrial(Trial):
    ...     def _evaluate_agent(self, agent):
    ...         # Let agent.network act on the task, return its score
    ...         pass
    >>> trial = MyTrial(config)
    >>> trial.run()
"""

__version__ = "0.1.0"

from evonet.exceptions             import (AlgorithmStateError, ConfigurationError, EvonetError,
                                           FitnessCalculationError, GenotypeFormatError,
                                           PopulationSizeError, PreconditionError)
from evonet.genotype               import Genotype
from evonet.phenotype              import Agent, NeuralLayer, NeuralNetwork
from evonet.pool.genetic_algorithm import AlgorithmState, GeneticAlgorithm
from evonet.run.config             import Config
from evonet.run.experiment         import Experiment
from evonet.run.statistics         import StatisticsRecorder
from evonet.run.trial              import Trial

__all__ = [
    "Agent",
    "AlgorithmState",
    "AlgorithmStateError",
    "Config",
    "ConfigurationError",
    "EvonetError",
    "Experiment",
    "FitnessCalculationError",
    "GeneticAlgorithm",
    "Genotype",
    "GenotypeFormatError",
    "NeuralLayer",
    "NeuralNetwork",
    "PopulationSizeError",
    "PreconditionError",
    "StatisticsRecorder",
    "Trial",
]
