"""
Genetic Algorithm Module

This module implements the GeneticAlgorithm class, the generational engine
which evolves a fixed-size population of genotypes with pluggable operators.

Classes:
    AlgorithmState:   The states of the generational protocol
    GeneticAlgorithm: The engine driving the generations
"""

from enum   import Enum
from typing import Callable, Optional

from loguru import logger

from evonet.exceptions import AlgorithmStateError, PopulationSizeError
from evonet.genotype   import Genotype
from evonet.pool.operators import (
    AsyncEvaluation,
    CrossoverRecombination,
    ElitistSelection,
    MeanNormalisedFitness,
    MutateAll,
    RandomInitialisation,
    operator_name
)

class AlgorithmState(Enum):
    IDLE       = "idle"         # constructed, not started
    EVALUATING = "evaluating"   # waiting for 'evaluation_finished()'
    TERMINATED = "terminated"   # stopped by the termination criterion

class GeneticAlgorithm:
    """
    A generational genetic algorithm with an externally driven evaluation phase.

    The algorithm owns the current population and the generation counter, and
    holds one operator per step of a generation. It never evaluates genotypes
    itself: it hands the population to the 'evaluation' operator and waits until
    whoever performs the evaluation has set every genotype's 'evaluation' score
    and calls 'evaluation_finished()'. The algorithm is purely reactive; all its
    work happens inside 'start()' and 'evaluation_finished()', which both run to
    completion and return.

    A generation, started by 'evaluation_finished()':
        1. fitness_calculation(population)
        2. sort the population by fitness, best first (if 'sort_population')
        3. notify the 'fitness_calculation_finished' listeners
        4. if termination_criterion(population) is true: terminate and stop
        5. intermediate = selection(population)
        6. new_population = recombination(intermediate, population_size)
        7. mutation(new_population)
        8. adopt the new population, increment the generation count
        9. evaluation(new_population), then wait for the next callback

    Operators are plain callables (see 'evonet.pool.operators' for the expected
    signatures) and may be replaced between generations.

    Public Attributes:
        initialise_population: (population) -> None
        evaluation:            (population) -> None
        fitness_calculation:   (population) -> None
        selection:             (population) -> intermediate population
        recombination:         (intermediate population, size) -> new population
        mutation:              (new population) -> None
        termination_criterion: (population) -> bool, or None to never terminate
        fitness_calculation_finished: Listeners called with the population after fitness calculation
        algorithm_terminated:         Listeners called with the algorithm once it terminates

    Public Properties:
        current_population: The current population
        population_size:    The number of genotypes in every population
        generation_count:   The current generation, starting at 1
        sort_population:    Whether the population is sorted after fitness calculation
        running:            Whether the algorithm has been started and not terminated
        state:              The current AlgorithmState

    Public Methods:
        start():               Initialise the population and dispatch its evaluation
        evaluation_finished(): Complete the current generation and start the next one
    """

    def __init__(self, genotype_param_count: int, population_size: int,
                 sort_population      : bool = True,
                 initialise_population: Optional[Callable] = None,
                 evaluation           : Optional[Callable] = None,
                 fitness_calculation  : Optional[Callable] = None,
                 selection            : Optional[Callable] = None,
                 recombination        : Optional[Callable] = None,
                 mutation             : Optional[Callable] = None,
                 termination_criterion: Optional[Callable] = None):
        """
        Create the algorithm with a population of the given size, made of
        genotypes with the given number of parameters, all set to zero.

        Parameters:
            genotype_param_count: number of parameters of every genotype
            population_size:      number of genotypes in every generation
            sort_population:      whether to sort the population by fitness before selection
            the remaining:        operators; the defaults are used for those not given
        """
        if population_size < 1:
            raise ValueError("The population size must be at least 1.")

        self._population_size : int            = population_size
        self._sort_population : bool           = sort_population
        self._generation_count: int            = 1
        self._state           : AlgorithmState = AlgorithmState.IDLE
        self._current_population: list[Genotype] = \
            [Genotype([0.0] * genotype_param_count) for _ in range(population_size)]

        self.initialise_population = initialise_population or RandomInitialisation()
        self.evaluation            = evaluation            or AsyncEvaluation()
        self.fitness_calculation   = fitness_calculation   or MeanNormalisedFitness()
        self.selection             = selection             or ElitistSelection()
        self.recombination         = recombination         or CrossoverRecombination()
        self.mutation              = mutation              or MutateAll()
        self.termination_criterion = termination_criterion

        self.fitness_calculation_finished: list[Callable[[list[Genotype]], None]]       = []
        self.algorithm_terminated        : list[Callable[['GeneticAlgorithm'], None]] = []

    @property
    def current_population(self) -> list[Genotype]:
        return self._current_population

    @property
    def population_size(self) -> int:
        return self._population_size

    @property
    def generation_count(self) -> int:
        return self._generation_count

    @property
    def sort_population(self) -> bool:
        return self._sort_population

    @property
    def state(self) -> AlgorithmState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is AlgorithmState.EVALUATING

    def start(self):
        """
        Initialise the current population and dispatch its evaluation.

        Returns as soon as the evaluation operator returns; the next step
        happens when 'evaluation_finished()' is called.

        Raises:
            AlgorithmStateError: if the algorithm was already started
        """
        if self._state is not AlgorithmState.IDLE:
            raise AlgorithmStateError(f"start() requires an idle algorithm, state is '{self._state.value}'.")

        logger.info("Starting genetic algorithm: population {}, {} parameters per genotype, operators: {}",
                    self._population_size, self._current_population[0].parameter_count, self.describe_operators())

        self.initialise_population(self._current_population)
        self._dispatch_evaluation()

    def evaluation_finished(self):
        """
        Callback for the evaluation environment, to be called exactly once per
        generation, after the 'evaluation' of every genotype has been set.

        Raises:
            AlgorithmStateError: if no evaluation is pending
        """
        if self._state is not AlgorithmState.EVALUATING:
            raise AlgorithmStateError(
                f"evaluation_finished() called while no evaluation is pending, state is '{self._state.value}'.")

        population = self._current_population

        # Calculate fitness from evaluation
        self.fitness_calculation(population)

        # Stable sort, genotypes of equal fitness keep their order
        if self._sort_population:
            population.sort()

        logger.debug("Generation {}: best evaluation {:.4f}, best fitness {:.4f}",
                     self._generation_count, population[0].evaluation, population[0].fitness)

        for listener in list(self.fitness_calculation_finished):
            listener(population)

        if self.termination_criterion is not None and self.termination_criterion(population):
            self._terminate()
            return

        intermediate_population = self.selection(population)
        new_population = self.recombination(intermediate_population, self._population_size)
        if len(new_population) != self._population_size:
            raise PopulationSizeError(
                f"Recombination produced {len(new_population)} genotypes, expected {self._population_size}.")
        self.mutation(new_population)

        self._current_population = new_population
        self._generation_count  += 1

        self._dispatch_evaluation()

    def describe_operators(self) -> dict[str, str]:
        """The names of the operators currently in use."""
        return {
            "initialisation": operator_name(self.initialise_population),
            "evaluation":     operator_name(self.evaluation),
            "fitness":        operator_name(self.fitness_calculation),
            "selection":      operator_name(self.selection),
            "recombination":  operator_name(self.recombination),
            "mutation":       operator_name(self.mutation),
            "termination":    operator_name(self.termination_criterion),
        }

    def _dispatch_evaluation(self):
        # the state changes first: a synchronous environment may call back from inside 'evaluation'
        self._state = AlgorithmState.EVALUATING
        self.evaluation(self._current_population)

    def _terminate(self):
        self._state = AlgorithmState.TERMINATED
        logger.info("Genetic algorithm terminated after {} generations", self._generation_count)

        for listener in list(self.algorithm_terminated):
            listener(self)

    def __repr__(self):
        return (f"GeneticAlgorithm(population_size={self._population_size}, "
                f"generation={self._generation_count}, state={self._state.value})")
