"""
Integration tests for basic evolution.

These tests drive complete runs of the genetic algorithm through a Trial,
on the XOR task, and check the properties every run must have.

NOTE: These tests use a fixed random seed (42) for reproducibility.
"""

import pytest
import numpy as np
from pathlib import Path

from evonet.genotype               import Genotype
from evonet.phenotype              import Agent
from evonet.pool.genetic_algorithm import AlgorithmState, GeneticAlgorithm
from evonet.pool.operators         import GenerationLimit
from evonet.run.config             import Config
from evonet.run.trial              import Trial


# ============================================================================
# Helper Trial Class for XOR
# ============================================================================

class TrialXORTest(Trial):
    """Simplified XOR trial for integration testing."""

    def __init__(self, config, xor_inputs=None, xor_outputs=None, **kwargs):
        super().__init__(config, suppress_output=True, **kwargs)
        self.xor_inputs  = xor_inputs
        self.xor_outputs = xor_outputs
        self.best_per_generation = []

    def _reset(self):
        super()._reset()
        self.best_per_generation = []

    def _evaluate_agent(self, agent):
        outputs = agent.network.process_inputs(self.xor_inputs)
        return float(1.0 - np.mean((outputs - self.xor_outputs) ** 2))

    def _on_fitness_calculated(self, population):
        super()._on_fitness_calculated(population)
        self.best_per_generation.append(population[0].evaluation)

    def _report_progress(self, population):
        pass

    def _final_report(self):
        pass


# ============================================================================
# Test Evolution Runs
# ============================================================================

class TestXOREvolution:

    def test_run_completes(self, xor_config, xor_inputs, xor_outputs):
        trial = TrialXORTest(xor_config, xor_inputs, xor_outputs)

        trial.run()

        assert trial.algorithm.state is AlgorithmState.TERMINATED
        assert trial.generation_count == 15
        assert len(trial.best_per_generation) == 15

    def test_best_evaluation_never_decreases(self, xor_config, xor_inputs, xor_outputs):
        # elitist selection and random recombination keep the best genotype,
        # which the mutation operator leaves untouched
        trial = TrialXORTest(xor_config, xor_inputs, xor_outputs)

        trial.run()

        best = trial.best_per_generation
        assert all(later >= earlier for earlier, later in zip(best, best[1:]))

    def test_evaluations_in_range(self, xor_config, xor_inputs, xor_outputs):
        trial = TrialXORTest(xor_config, xor_inputs, xor_outputs)

        trial.run()

        for agent in trial.agents:
            assert 0.0 < agent.genotype.evaluation <= 1.0

    def test_population_size_constant(self, xor_config, xor_inputs, xor_outputs):
        trial = TrialXORTest(xor_config, xor_inputs, xor_outputs)
        sizes = []
        trial.build_algorithm = _spy_population_sizes(trial.build_algorithm, sizes)

        trial.run()

        assert sizes == [20] * 15

    def test_same_seed_same_run(self, xor_config, xor_inputs, xor_outputs):
        np.random.seed(7)
        first = TrialXORTest(xor_config, xor_inputs, xor_outputs)
        first.run()

        np.random.seed(7)
        second = TrialXORTest(xor_config, xor_inputs, xor_outputs)
        second.run()

        assert first.best_per_generation == second.best_per_generation

    def test_remainder_stochastic_run(self, xor_config, xor_inputs, xor_outputs):
        xor_config.selection = 'remainder_stochastic'
        xor_config.mutation  = 'all'
        trial = TrialXORTest(xor_config, xor_inputs, xor_outputs)

        trial.run()

        assert trial.generation_count == 15

    def test_example_config_file(self, xor_inputs, xor_outputs):
        config_file = Path(__file__).parents[2] / "examples" / "configs" / "config_xor.ini"
        config = Config(str(config_file))
        trial = TrialXORTest(config, xor_inputs, xor_outputs)

        trial.run(max_generations=5)

        assert len(trial.best_per_generation) == 5


def _spy_population_sizes(build_algorithm, sizes):
    def build():
        algorithm = build_algorithm()
        algorithm.fitness_calculation_finished.append(lambda population: sizes.append(len(population)))
        return algorithm
    return build


# ============================================================================
# Test Saved Genotypes
# ============================================================================

class TestSavedGenotype:

    def test_reloaded_best_genotype_behaves_identically(self, tmp_path, xor_config, xor_inputs, xor_outputs):
        trial = TrialXORTest(xor_config, xor_inputs, xor_outputs)
        trial.run()
        path = tmp_path / "best.txt"
        trial.best_genotype.save_to_file(path)

        reloaded = Genotype.load_from_file(path)

        original = Agent(trial.best_genotype, trial.agents[0].network.layers[0].activation, [2, 3, 1])
        copy     = Agent(reloaded, original.network.layers[0].activation, [2, 3, 1])
        np.testing.assert_array_equal(original.network.process_inputs(xor_inputs),
                                      copy.network.process_inputs(xor_inputs))

    def test_statistics_written_during_run(self, tmp_path, xor_config, xor_inputs, xor_outputs):
        xor_config.save_statistics = True
        xor_config.statistics_dir  = str(tmp_path)
        trial = TrialXORTest(xor_config, xor_inputs, xor_outputs, task_name="XOR")

        trial.run()

        files = list(tmp_path.glob("Evaluation - XOR *.txt"))
        assert len(files) == 1
        lines = files[0].read_text().splitlines()
        assert lines[0].startswith("Evaluation of a Population with size 20")
        generations = [line.split("\t") for line in lines[6:]]
        assert [int(g) for g, _ in generations] == list(range(1, 16))
        assert [float(e) for _, e in generations] == trial.best_per_generation


# ============================================================================
# Test Engine Without a Trial
# ============================================================================

class TestSynchronousEngine:

    def test_evaluation_inside_operator(self, xor_inputs, xor_outputs):
        """The engine may be driven entirely from its evaluation operator."""
        ga = GeneticAlgorithm(13, 10)
        best = []

        def evaluate(population):
            for genotype in population:
                agent = Agent(genotype, None, [2, 3, 1])
                outputs = agent.network.process_inputs(xor_inputs)
                genotype.evaluation = float(1.0 / (1.0 + np.mean((outputs - xor_outputs) ** 2)))
            ga.evaluation_finished()

        ga.evaluation = evaluate
        ga.termination_criterion = GenerationLimit(10, ga)
        ga.fitness_calculation_finished.append(lambda population: best.append(population[0].evaluation))

        ga.start()

        assert ga.state is AlgorithmState.TERMINATED
        assert len(best) == 10
