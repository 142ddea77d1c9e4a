"""
Trial Module

This module defines the abstract base class for a trial: one run of the genetic
algorithm on a concrete task, with built-in support for CPU-based parallel
evaluation using joblib.

The trial plays the part of the evaluation environment. The genetic algorithm
hands it each new population through its evaluation operator; the trial wraps
every genotype in an Agent, lets the task score each agent, and reports back
to the algorithm once the last agent of the generation has died.
"""

from abc    import ABC, abstractmethod
from joblib import Parallel, delayed
from typing import Optional

from loguru import logger

from evonet.activations            import get_activation
from evonet.exceptions             import ConfigurationError
from evonet.genotype               import Genotype
from evonet.phenotype              import Agent, NeuralNetwork
from evonet.pool.genetic_algorithm import GeneticAlgorithm
from evonet.pool.operators import (
    CrossoverRecombination,
    ElitistSelection,
    GenerationLimit,
    MeanNormalisedFitness,
    MutateAll,
    MutateAllButBestTwo,
    RandomInitialisation,
    RandomRecombination,
    RemainderStochasticSampling
)
from evonet.run.config             import Config
from evonet.run.statistics         import StatisticsRecorder

class Trial(ABC):
    """
    Abstract base class for implementing a trial.

    A trial represents one independent run of the genetic algorithm: a fresh
    initial population is evolved until the termination criterion is met (the
    configured maximum number of generations) or, when there is none, until the
    generation limit passed to 'run()' is reached.

    Subclasses must implement:
    - _evaluate_agent(agent): Score a single agent on the task
    - _report_progress(population): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _reset(): Reset trial-specific state; must call super()._reset()
    - _success(): Whether the trial found an acceptable solution

    Evaluation protocol:
        Each generation, every genotype is wrapped in an Agent, the agent is
        reset (brought to life), scored by '_evaluate_agent' and killed; the
        score becomes the genotype's 'evaluation'. When the last agent dies
        the trial calls 'evaluation_finished()' on the algorithm, exactly once.

    Public Attributes:
        failed: Whether the last run ended without an acceptable solution

    Public Properties:
        algorithm:        The GeneticAlgorithm of the current run
        agents:           The agents of the generation being evaluated
        agents_alive:     How many of those agents are still alive
        generation_count: The current generation of the algorithm
        best_genotype:    The best genotype of the last evaluated generation

    Public Methods:
        build_algorithm(): Create a GeneticAlgorithm wired to this trial from the config
        run():             Execute a complete trial

    Parallelization of agent evaluation:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self, config: Config, suppress_output: bool = False, task_name: str = ""):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
            task_name:       Name of the task, used when saving statistics
        """
        self._config         : Config                     = config
        self._suppress_output: bool                       = suppress_output
        self._task_name      : str                        = task_name
        self._algorithm      : Optional[GeneticAlgorithm] = None
        self._agents         : list[Agent]                = []
        self._agents_alive   : int                        = 0
        self._pending        : bool                       = False
        self._best_genotype  : Optional[Genotype]         = None
        self.failed          : bool                       = True

    @property
    def algorithm(self) -> Optional[GeneticAlgorithm]:
        return self._algorithm

    @property
    def agents(self) -> list[Agent]:
        return self._agents

    @property
    def agents_alive(self) -> int:
        return self._agents_alive

    @property
    def generation_count(self) -> int:
        return self._algorithm.generation_count if self._algorithm is not None else 0

    @property
    def best_genotype(self) -> Optional[Genotype]:
        return self._best_genotype

    def build_algorithm(self) -> GeneticAlgorithm:
        """
        Create a genetic algorithm for this trial's configuration.

        The genotype length is the weight count of the configured topology.
        The operators are chosen by the config; the evaluation operator is
        this trial, and the algorithm's notifications are routed to it.
        """
        config = self._config
        network = NeuralNetwork(config.topology)

        if config.selection == 'elitist':
            selection = ElitistSelection(config.elitist_count)
        else:
            selection = RemainderStochasticSampling()

        if config.recombination == 'random':
            recombination = RandomRecombination(config.swap_prob)
        else:
            recombination = CrossoverRecombination(config.swap_prob)

        if config.mutation == 'all_but_best_two':
            mutation = MutateAllButBestTwo(config.mutation_perc, config.mutation_prob, config.mutation_amount)
        else:
            mutation = MutateAll(config.mutation_perc, config.mutation_prob, config.mutation_amount)

        algorithm = GeneticAlgorithm(network.weight_count, config.population_size,
                                     sort_population       = config.sort_population,
                                     initialise_population = RandomInitialisation(config.init_param_min,
                                                                                  config.init_param_max),
                                     evaluation            = self._start_evaluation,
                                     fitness_calculation   = MeanNormalisedFitness(),
                                     selection             = selection,
                                     recombination         = recombination,
                                     mutation              = mutation)

        if config.max_number_generations:
            algorithm.termination_criterion = GenerationLimit(config.max_number_generations, algorithm)

        algorithm.fitness_calculation_finished.append(self._on_fitness_calculated)
        algorithm.algorithm_terminated.append(self._on_terminated)

        if config.save_statistics or config.save_first_n_genotypes > 0:
            recorder = StatisticsRecorder(config.statistics_dir, self._task_name,
                                          save_statistics=config.save_statistics,
                                          save_first_n=config.save_first_n_genotypes)
            recorder.attach(algorithm)

        return algorithm

    def run(self, num_jobs: int = 1, max_generations: Optional[int] = None):
        """
        Run the trial.

        Resets the trial state, creates a new algorithm and drives it
        until it terminates or 'max_generations' have been evaluated.

        Parameters:
            num_jobs:        Number of parallel processes for agent evaluation
                              1 = serial (no parallelization)
                             -1 = use all available CPU cores
                             >1 = use specified number of processes
            max_generations: Upper bound on the number of generations to evaluate;
                             required when the config sets no termination criterion
        """
        if max_generations is None and not self._config.max_number_generations:
            raise ConfigurationError("The run never terminates: set 'max_number_generations' or pass 'max_generations'.")

        # Reset the trial state before starting a new run
        self._reset()

        self._algorithm = self.build_algorithm()
        self._algorithm.start()

        # Evolution loop: each evaluation ends with 'evaluation_finished()',
        # which either dispatches the next generation or terminates the run
        while self._pending:
            if max_generations is not None and self._algorithm.generation_count > max_generations:
                logger.info("Stopping trial at generation limit {}", max_generations)
                break
            self._evaluate_agents(num_jobs)

        self.failed = not self._success()

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses should call super()._reset() and then
        initialize their problem-specific data.
        """
        self._algorithm     = None
        self._agents        = []
        self._agents_alive  = 0
        self._pending       = False
        self._best_genotype = None
        self.failed         = True

    def _start_evaluation(self, population: list[Genotype]):
        """
        Evaluation operator of the algorithm: create one agent per genotype
        and mark the population as waiting for evaluation.
        """
        activation = get_activation(self._config.activation)

        self._agents = []
        self._agents_alive = 0
        for genotype in population:
            agent = Agent(genotype, activation, self._config.topology)
            agent.add_death_listener(self._on_agent_died)
            self._agents.append(agent)
            self._agents_alive += 1

        self._pending = True

    def _evaluate_agents(self, num_jobs: int):
        """
        Evaluate every agent of the pending generation.

        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        Parameters:
            num_jobs: Number of parallel processes for agent evaluation
        """
        agents = self._agents
        self._pending = False

        for agent in agents:
            agent.reset()

        if num_jobs == 1:
            evaluations = [self._evaluate_agent(agent) for agent in agents]
        else:
            evaluations = Parallel(num_jobs)(delayed(self._evaluate_agent)(agent) for agent in agents)

        # the last agent to die hands the generation back to the algorithm
        for agent, evaluation in zip(agents, evaluations):
            agent.genotype.evaluation = float(evaluation)
            agent.kill()

    def _on_agent_died(self, agent: Agent):
        self._agents_alive -= 1
        if self._agents_alive == 0:
            self._algorithm.evaluation_finished()

    def _on_fitness_calculated(self, population: list[Genotype]):
        # copied, the best genotype may be carried into the next generation and mutated there
        best = population[0]
        self._best_genotype            = Genotype(best.copy_of_parameters())
        self._best_genotype.evaluation = best.evaluation
        self._best_genotype.fitness    = best.fitness
        if not self._suppress_output:
            self._report_progress(population)

    def _on_terminated(self, algorithm: GeneticAlgorithm):
        self._pending = False

    def _success(self) -> bool:
        """
        Whether the trial found an acceptable solution. By default this is the
        case if the best genotype completed its task (evaluation of at least 1).
        """
        return self._best_genotype is not None and self._best_genotype.evaluation >= 1.0

    @abstractmethod
    def _evaluate_agent(self, agent: Agent) -> float:
        """
        Evaluate an agent and return its score on the task.

        This method should let the agent's neural network ('agent.network')
        act on the problem domain and compute a score. Conventionally the
        score is the fraction of the task completed, in [0, 1]; the genetic
        algorithm imposes no upper bound.

        IMPORTANT: The score must be a positive number (or zero), and the
        scores of a generation must not all be zero.

        The trial resets the agent before this call, and kills it once the
        returned score has been recorded. Implementations must not call
        'agent.kill()' themselves: the death of the last agent hands the
        generation back to the algorithm, before the scores are written.

        Parameters:
            agent: The Agent to evaluate

        Returns:
            float: The evaluation of the agent
        """
        pass

    @abstractmethod
    def _report_progress(self, population: list[Genotype]):
        """
        Report trial progress after each generation.

        Called once the fitness of each generation has been calculated, with
        the population sorted by fitness (if sorting is enabled).

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        pass
