"""
Genetic Operators Module

This module defines one strategy interface per family of genetic operators, and
the concrete strategies shipped with the library. The GeneticAlgorithm calls its
operators as plain callables, so a strategy may equally be any function with the
matching signature; the abstract classes below document those signatures.

All strategies draw their random numbers from the global 'numpy.random'
generator, so seeding it makes a run reproducible.

Strategy interfaces:
    InitialisationOperator: (population) -> None
    EvaluationOperator:     (population) -> None
    FitnessCalculation:     (population) -> None
    SelectionOperator:      (population) -> intermediate population
    RecombinationOperator:  (intermediate population, size) -> new population
    MutationOperator:       (new population) -> None
    TerminationCriterion:   (population) -> bool

Concrete strategies:
    RandomInitialisation:        Uniform random parameters
    AsyncEvaluation:             No-op dispatch (evaluation driven externally)
    MeanNormalisedFitness:       fitness = evaluation / mean evaluation
    ElitistSelection:            Keep the best N genotypes
    RemainderStochasticSampling: Fitness-proportional selection
    CrossoverRecombination:      Cross the best two genotypes over and over
    RandomRecombination:         Keep the best two, cross random pairs
    MutateAll:                   Mutate every genotype
    MutateAllButBestTwo:         Mutate every genotype but the first two
    GenerationLimit:             Terminate after a number of generations
"""

import autograd.numpy as np  # type: ignore
import math
from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

from evonet.exceptions import FitnessCalculationError, PreconditionError
from evonet.genotype   import Genotype

if TYPE_CHECKING:
    from evonet.pool.genetic_algorithm import GeneticAlgorithm

# Default range of the parameters of the initial population.
DEF_INIT_PARAM_MIN = -1.0
DEF_INIT_PARAM_MAX =  1.0

# Default probability of a parameter being swapped during crossover.
DEF_CROSS_SWAP_PROB = 0.6

# Default probability of a parameter being mutated.
DEF_MUTATION_PROB = 0.3

# Default amount by which parameters may be mutated.
DEF_MUTATION_AMOUNT = 2.0

# Default fraction of genotypes in a new population that are mutated.
DEF_MUTATION_PERC = 1.0

# Default number of genotypes kept by elitist selection.
DEF_ELITIST_COUNT = 3

# ============================================================================
# Strategy interfaces
# ============================================================================

class InitialisationOperator(ABC):
    """Initialises the parameters of the initial population, in place."""

    @abstractmethod
    def __call__(self, population: list[Genotype]):
        pass

class EvaluationOperator(ABC):
    """
    Starts the evaluation of the current population.

    The evaluation may run asynchronously; whoever performs it must set the
    'evaluation' of every genotype and then call 'evaluation_finished()' on
    the genetic algorithm, once.
    """

    @abstractmethod
    def __call__(self, population: list[Genotype]):
        pass

class FitnessCalculation(ABC):
    """Calculates the 'fitness' of every genotype from the 'evaluation' scores."""

    @abstractmethod
    def __call__(self, population: list[Genotype]):
        pass

class SelectionOperator(ABC):
    """Selects genotypes from the current population into the intermediate population."""

    @abstractmethod
    def __call__(self, population: list[Genotype]) -> list[Genotype]:
        pass

class RecombinationOperator(ABC):
    """Recombines the intermediate population into a new population of exactly the given size."""

    @abstractmethod
    def __call__(self, intermediate_population: list[Genotype], new_population_size: int) -> list[Genotype]:
        pass

class MutationOperator(ABC):
    """Mutates the new population, in place."""

    @abstractmethod
    def __call__(self, new_population: list[Genotype]):
        pass

class TerminationCriterion(ABC):
    """Decides, after fitness calculation, whether the algorithm should stop."""

    @abstractmethod
    def __call__(self, population: list[Genotype]) -> bool:
        pass

# ============================================================================
# Primitives
# ============================================================================

def complete_crossover(parent1: Genotype, parent2: Genotype,
                       swap_prob: float) -> tuple[Genotype, Genotype]:
    """
    Uniform crossover of two parents into two offspring.

    For every parameter index independently, with probability 'swap_prob' the
    offspring swap parents (offspring1 takes parent2's value, offspring2 takes
    parent1's), otherwise each offspring inherits from its own parent. Each
    offspring value is always exactly one of the parents' values.

    Returns:
        The two offspring, with zero evaluation and fitness
    """
    if parent1.parameter_count != parent2.parameter_count:
        raise PreconditionError("Parents must have the same number of parameters.")

    p1   = parent1.copy_of_parameters()
    p2   = parent2.copy_of_parameters()
    swap = np.random.random(len(p1)) < swap_prob

    offspring1 = Genotype(np.where(swap, p2, p1))
    offspring2 = Genotype(np.where(swap, p1, p2))
    return offspring1, offspring2

def mutate_genotype(genotype: Genotype, mutation_prob: float, mutation_amount: float):
    """
    Mutate a genotype in place: every parameter, with probability 'mutation_prob',
    is perturbed by a value drawn uniformly from [-mutation_amount, mutation_amount].
    """
    for i in range(genotype.parameter_count):
        if np.random.random() < mutation_prob:
            genotype[i] += np.random.uniform(-mutation_amount, mutation_amount)

# ============================================================================
# Initialisation / evaluation / fitness
# ============================================================================

class RandomInitialisation(InitialisationOperator):
    """Set every parameter to a uniform random value in [min_value, max_value)."""

    def __init__(self, min_value: float = DEF_INIT_PARAM_MIN, max_value: float = DEF_INIT_PARAM_MAX):
        self.min_value = min_value
        self.max_value = max_value

    def __call__(self, population: list[Genotype]):
        for genotype in population:
            genotype.set_random_parameters(self.min_value, self.max_value)

class AsyncEvaluation(EvaluationOperator):
    """
    Does nothing: the evaluation is started and completed by an external
    environment, which calls 'evaluation_finished()' when done.
    """

    def __call__(self, population: list[Genotype]):
        pass

class MeanNormalisedFitness(FitnessCalculation):
    """
    fitness = evaluation / average evaluation of the whole population.

    Raises:
        FitnessCalculationError: for an empty population or a zero mean evaluation
    """

    def __call__(self, population: list[Genotype]):
        if not population:
            raise FitnessCalculationError("Cannot calculate fitness of an empty population.")

        average_evaluation = sum(genotype.evaluation for genotype in population) / len(population)
        if average_evaluation == 0 or not math.isfinite(average_evaluation):
            raise FitnessCalculationError(
                f"Cannot normalise fitness: average evaluation is {average_evaluation}.")

        for genotype in population:
            genotype.fitness = genotype.evaluation / average_evaluation

# ============================================================================
# Selection
# ============================================================================

class ElitistSelection(SelectionOperator):
    """
    Copy the first 'count' genotypes of the (sorted) current population into
    the intermediate population.
    """

    def __init__(self, count: int = DEF_ELITIST_COUNT):
        self.count = count

    def __call__(self, population: list[Genotype]) -> list[Genotype]:
        if len(population) < self.count:
            raise PreconditionError(
                f"Elitist selection of {self.count} genotypes needs a population of at least that size.")
        return list(population[:self.count])

class RemainderStochasticSampling(SelectionOperator):
    """
    Fitness-proportional selection; assumes the population is sorted by fitness.

    First, each genotype contributes floor(fitness) copies of itself, stopping at
    the first genotype whose fitness is below 1 (all following ones are worse).
    Then every genotype contributes one more copy with a probability equal to the
    fractional part of its fitness.
    """

    def __call__(self, population: list[Genotype]) -> list[Genotype]:
        intermediate_population = []

        # integer portion
        for genotype in population:
            if genotype.fitness < 1:
                break
            for _ in range(int(genotype.fitness)):
                intermediate_population.append(Genotype(genotype.copy_of_parameters()))

        # remainder portion
        for genotype in population:
            remainder = genotype.fitness - math.floor(genotype.fitness)
            if np.random.random() < remainder:
                intermediate_population.append(Genotype(genotype.copy_of_parameters()))

        return intermediate_population

# ============================================================================
# Recombination
# ============================================================================

class CrossoverRecombination(RecombinationOperator):
    """
    Cross the first with the second genotype of the intermediate population
    until the new population has the desired size.
    """

    def __init__(self, swap_prob: float = DEF_CROSS_SWAP_PROB):
        self.swap_prob = swap_prob

    def __call__(self, intermediate_population: list[Genotype], new_population_size: int) -> list[Genotype]:
        if len(intermediate_population) < 2:
            raise PreconditionError("The intermediate population has to be at least of size 2 for this operator.")

        new_population = []
        while len(new_population) < new_population_size:
            offspring1, offspring2 = complete_crossover(
                intermediate_population[0], intermediate_population[1], self.swap_prob)

            new_population.append(offspring1)
            if len(new_population) < new_population_size:
                new_population.append(offspring2)

        return new_population

class RandomRecombination(RecombinationOperator):
    """
    Copy the best two genotypes of the intermediate population into the new
    population unmodified, then cross two distinct, randomly chosen members of
    the intermediate population until the new population has the desired size.
    """

    def __init__(self, swap_prob: float = DEF_CROSS_SWAP_PROB):
        self.swap_prob = swap_prob

    def __call__(self, intermediate_population: list[Genotype], new_population_size: int) -> list[Genotype]:
        if len(intermediate_population) < 2:
            raise PreconditionError("The intermediate population has to be at least of size 2 for this operator.")

        # always keep the best two, unmodified
        new_population = list(intermediate_population[:min(2, new_population_size)])

        while len(new_population) < new_population_size:
            index1, index2 = np.random.choice(len(intermediate_population), size=2, replace=False)

            offspring1, offspring2 = complete_crossover(
                intermediate_population[index1], intermediate_population[index2], self.swap_prob)

            new_population.append(offspring1)
            if len(new_population) < new_population_size:
                new_population.append(offspring2)

        return new_population

# ============================================================================
# Mutation
# ============================================================================

class MutateAll(MutationOperator):
    """
    Mutate each genotype of the new population with probability 'mutation_perc',
    using 'mutate_genotype'. The first 'protected' genotypes are never mutated.
    """

    def __init__(self, mutation_perc  : float = DEF_MUTATION_PERC,
                       mutation_prob  : float = DEF_MUTATION_PROB,
                       mutation_amount: float = DEF_MUTATION_AMOUNT,
                       protected      : int   = 0):
        self.mutation_perc   = mutation_perc
        self.mutation_prob   = mutation_prob
        self.mutation_amount = mutation_amount
        self.protected       = protected

    def __call__(self, new_population: list[Genotype]):
        for genotype in new_population[self.protected:]:
            if np.random.random() < self.mutation_perc:
                mutate_genotype(genotype, self.mutation_prob, self.mutation_amount)

class MutateAllButBestTwo(MutateAll):
    """Mutate all genotypes except the first two, which recombination copied from the elites."""

    def __init__(self, mutation_perc  : float = DEF_MUTATION_PERC,
                       mutation_prob  : float = DEF_MUTATION_PROB,
                       mutation_amount: float = DEF_MUTATION_AMOUNT):
        super().__init__(mutation_perc, mutation_prob, mutation_amount, protected=2)

# ============================================================================
# Termination
# ============================================================================

class GenerationLimit(TerminationCriterion):
    """
    Terminate once the algorithm has reached a given generation count.

    The criterion asks the algorithm it is bound to for its generation count;
    bind it with 'bind()' or by passing the algorithm to the constructor.
    """

    def __init__(self, max_generations: int, algorithm: 'GeneticAlgorithm | None' = None):
        self.max_generations = max_generations
        self._algorithm      = algorithm

    def bind(self, algorithm: 'GeneticAlgorithm') -> 'GenerationLimit':
        self._algorithm = algorithm
        return self

    def __call__(self, population: list[Genotype]) -> bool:
        if self._algorithm is None:
            raise PreconditionError("GenerationLimit is not bound to a genetic algorithm.")
        return self._algorithm.generation_count >= self.max_generations

def operator_name(operator) -> str:
    """A readable name for an operator, whether a strategy object or a plain function."""
    if operator is None:
        return "None"
    if hasattr(operator, '__name__'):
        return operator.__name__
    return type(operator).__name__
