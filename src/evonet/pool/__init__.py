"""
Pool Package

This package implements the population-level machinery of the genetic algorithm:
the generational engine and the genetic operators it is configured with.

Modules:
    genetic_algorithm: GeneticAlgorithm engine and its AlgorithmState
    operators:         Operator strategy interfaces and concrete strategies

Exported Classes:
    AlgorithmState:   States of the generational protocol
    GeneticAlgorithm: The generational engine
"""

from evonet.pool.genetic_algorithm import AlgorithmState, GeneticAlgorithm
from evonet.pool.operators import (
    AsyncEvaluation,
    CrossoverRecombination,
    ElitistSelection,
    EvaluationOperator,
    FitnessCalculation,
    GenerationLimit,
    InitialisationOperator,
    MeanNormalisedFitness,
    MutateAll,
    MutateAllButBestTwo,
    MutationOperator,
    RandomInitialisation,
    RandomRecombination,
    RecombinationOperator,
    RemainderStochasticSampling,
    SelectionOperator,
    TerminationCriterion,
    complete_crossover,
    mutate_genotype
)

__all__ = ['AlgorithmState',
           'GeneticAlgorithm',
           'AsyncEvaluation',
           'CrossoverRecombination',
           'ElitistSelection',
           'EvaluationOperator',
           'FitnessCalculation',
           'GenerationLimit',
           'InitialisationOperator',
           'MeanNormalisedFitness',
           'MutateAll',
           'MutateAllButBestTwo',
           'MutationOperator',
           'RandomInitialisation',
           'RandomRecombination',
           'RecombinationOperator',
           'RemainderStochasticSampling',
           'SelectionOperator',
           'TerminationCriterion',
           'complete_crossover',
           'mutate_genotype']
