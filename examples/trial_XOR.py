"""
XOR Problem Implementation

This module implements the classic XOR (exclusive OR) problem as a benchmark
for evolving the weights of a fixed-topology network.

The XOR Problem:
    XOR is a two-input, one-output boolean function where the output is True
    only when the inputs differ:
        Input (0, 0) → Output 0
        Input (0, 1) → Output 1
        Input (1, 0) → Output 1
        Input (1, 1) → Output 0

    It is not linearly separable, so the network needs a hidden layer;
    the configuration uses the topology 2-3-1.

Evaluation:
    Evaluation = 1.0 - mean((output - target)²)

    With a sigmoid output layer the evaluation lies in [0, 1], 1.0 meaning
    all four cases are reproduced exactly. A trial succeeds when the best
    evaluation exceeds 'SUCCESS_THRESHOLD'.

Classes:
    Trial_XOR:      Trial for solving XOR
    Experiment_XOR: Multi-trial experiment for XOR with statistical analysis

Usage:
    Single Trial:
        config = Config("configs/config_xor.ini")
        trial = Trial_XOR(config)
        trial.run(num_jobs=1)

    Experiment (Multiple Trials):
        config = Config("configs/config_xor.ini")
        experiment = Experiment_XOR(num_trials=20, config=config)
        experiment.run(num_jobs_trials=-1)
"""

import autograd.numpy as np  # type: ignore
from pathlib    import Path
from statistics import mean

from evonet.activations import get_activation
from evonet.genotype    import Genotype
from evonet.phenotype   import Agent
from evonet.run         import Config, Experiment, Trial

SUCCESS_THRESHOLD = 0.99

XOR_INPUTS  = np.array([[0.0, 0.0],
                        [0.0, 1.0],
                        [1.0, 0.0],
                        [1.0, 1.0]])
XOR_OUTPUTS = np.array([[0.0],
                        [1.0],
                        [1.0],
                        [0.0]])

class Trial_XOR(Trial):
    """
    Trial evolving the weights of a 2-3-1 network to compute XOR.

    All four XOR cases are processed in a single batched pass through the
    agent's network.

    Implemented Methods:
        _evaluate_agent(agent): Score the agent's network on all 4 XOR cases
        _report_progress():     Display generation statistics and XOR truth table
        _final_report():        Display and save the best genotype
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        super().__init__(config, suppress_output, task_name="XOR")

    def _evaluate_agent(self, agent: Agent) -> float:
        outputs = agent.network.process_inputs(XOR_INPUTS)
        errors  = outputs - XOR_OUTPUTS
        return float(1.0 - np.mean(errors ** 2))

    def _success(self) -> bool:
        return self.best_genotype is not None and self.best_genotype.evaluation >= SUCCESS_THRESHOLD

    def _truth_table(self, genotype: Genotype) -> str:
        agent   = Agent(genotype, get_activation(self._config.activation), self._config.topology)
        outputs = agent.network.process_inputs(XOR_INPUTS)

        s  = "input         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, output, target in zip(XOR_INPUTS, outputs, XOR_OUTPUTS):
            s += f"{inputs.tolist()} -> {output[0]:.4f}    {target[0]}   {abs(output[0] - target[0]):.4f}\n"
        return s

    def _report_progress(self, population: list[Genotype]):
        """
        Print a report describing the current generation.
        """
        best = population[0]

        s  = f"===============\n"
        s += f"GENERATION {self.generation_count:04d}\n"
        s += f"population size = {len(population)}\n"
        s += f"best evaluation = {best.evaluation:.4f}\n"
        s += f"mean evaluation = {mean(g.evaluation for g in population):.4f}\n"
        s += '\n'
        s += self._truth_table(best)

        print(s)

    def _final_report(self):
        """
        Display results at the end of the trial, and save the best genotype.
        """
        best = self.best_genotype
        if best is None:
            print(f"Finished after {self.generation_count} generations: no generation was evaluated")
            return

        print(f"Finished after {self.generation_count} generations: "
              f"best evaluation {best.evaluation:.4f} {'[SUCCESS]' if not self.failed else '[FAILED]'}")

        path = Path("xor_best_genotype.txt")
        best.save_to_file(path)
        print(f"Best genotype saved as '{path}'")

class Experiment_XOR(Experiment):

    def __init__(self, num_trials: int, config: Config):
        """
        Initialize XOR experiment with multiple trials.

        Parameters:
            num_trials: Number of trials in this experiment
            config: Configuration parameters
        """
        super().__init__(Trial_XOR, num_trials, config)

    def _reset(self):
        super()._reset()

    def _prepare_trial(self, trial: Trial_XOR, trial_number: int):
        # the default implementation prints a progress report.
        super()._prepare_trial(trial, trial_number)

    def _extract_trial_results(self, trial: Trial_XOR, trial_number: int) -> dict:
        return super()._extract_trial_results(trial, trial_number)

    def _analyze_trial_results(self, results: dict):
        """
        Extract results of each trial, once complete.
        """
        super()._analyze_trial_results(results)

        s  = f"Trial {results['trial_number']:03d}: "
        s += f"best evaluation={results['best_evaluation']:.4f}, "
        s += f"generations={results['number_generations']:3} "
        s += "[SUCCESS]" if results['success'] else "[FAILED]"
        print(s)

    def _final_report(self):
        """
        Produce the final report, aggregating the data obtained from each trial.
        """
        success_rate = self._success_counter / self._trial_counter

        s  = "\nSUMMARY:\n"
        s += f"Total trials:         = {self._trial_counter}\n"
        s += f"Success rate          = {100*success_rate:.0f}%\n"

        # Only compute statistics if there were successful trials
        if self._number_generations:
            s += f"Avg # generations     = {mean(self._number_generations):.0f}\n"
            s += f"Avg best evaluation   = {mean(self._best_evaluation):.4f}\n"
        else:
            s += "No successful trials - cannot compute statistics\n"
        print(s)

if __name__ == "__main__":
    config = Config(str(Path(__file__).parent / "configs" / "config_xor.ini"))
    trial  = Trial_XOR(config)
    trial.run(num_jobs=1)
