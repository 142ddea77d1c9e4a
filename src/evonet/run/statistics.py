"""
Statistics Module

This module records the progress of a genetic algorithm run to disk: a text
file with the best evaluation of each generation, and the genotypes of the
first agents to complete their task.

Classes:
    StatisticsRecorder: Listener writing per-generation statistics and finished genotypes
"""

from datetime import datetime
from pathlib  import Path
from typing   import Optional

from loguru import logger

from evonet.genotype               import Genotype
from evonet.pool.genetic_algorithm import GeneticAlgorithm

class StatisticsRecorder:
    """
    Records the statistics of one genetic algorithm run.

    Once attached to an algorithm, the recorder listens for the end of each
    fitness calculation, and:
      - if 'save_statistics' is set, appends "<generation>\\t<best evaluation>"
        to '<run name>.txt', whose first lines name the population size and
        the operators in use
      - saves the genotypes of the first 'save_first_n' genotypes whose
        evaluation reaches 1 (the task was completed) to
        '<run name>/Genotype - Finished as <k>.txt'

    The population handed to the listener is expected to be sorted by fitness,
    so the scan for finished genotypes stops at the first one below 1.

    Public Attributes:
        genotypes_saved: How many finished genotypes have been saved so far

    Public Properties:
        statistics_file: Path of the statistics file
        genotype_dir:    Directory in which finished genotypes are saved

    Public Methods:
        attach(algorithm): Write the header and start listening to the algorithm
    """

    def __init__(self, directory: str | Path, task_name: str = "",
                 save_statistics: bool = True, save_first_n: int = 0,
                 run_name: Optional[str] = None):
        """
        Parameters:
            directory:       where the statistics file and genotype folder are created
            task_name:       name of the task, part of the run name
            save_statistics: whether to write the per-generation statistics file
            save_first_n:    how many finished genotypes to save
            run_name:        base name of the files; derived from the task name and time if None
        """
        if run_name is None:
            run_name = f"Evaluation - {task_name} {datetime.now():%Y_%m_%d_%H-%M-%S}".replace("  ", " ")

        self._directory      : Path = Path(directory)
        self._run_name       : str  = run_name
        self._save_statistics: bool = save_statistics
        self._save_first_n   : int  = save_first_n
        self._task_name      : str  = task_name
        self._algorithm      : Optional[GeneticAlgorithm] = None
        self.genotypes_saved : int  = 0

    @property
    def statistics_file(self) -> Path:
        return self._directory / f"{self._run_name}.txt"

    @property
    def genotype_dir(self) -> Path:
        return self._directory / self._run_name

    def attach(self, algorithm: GeneticAlgorithm):
        """Start recording the statistics of the given algorithm."""
        self._algorithm = algorithm
        self.genotypes_saved = 0

        if self._save_statistics:
            self._write_header()
            algorithm.fitness_calculation_finished.append(self._write_generation)
        if self._save_first_n > 0:
            algorithm.fitness_calculation_finished.append(self._save_finished_genotypes)

    def _write_header(self):
        self._directory.mkdir(parents=True, exist_ok=True)

        operators = self._algorithm.describe_operators()
        header = (f"Evaluation of a Population with size {self._algorithm.population_size}, "
                  f"on Task \"{self._task_name}\", using the following GA operators:\n"
                  f"Selection: {operators['selection']}\n"
                  f"Recombination: {operators['recombination']}\n"
                  f"Mutation: {operators['mutation']}\n"
                  f"FitnessCalculation: {operators['fitness']}\n\n")
        self.statistics_file.write_text(header, encoding="utf-8")

    def _write_generation(self, population: list[Genotype]):
        # only the first (best) genotype is recorded
        with self.statistics_file.open("a", encoding="utf-8") as f:
            f.write(f"{self._algorithm.generation_count}\t{population[0].evaluation}\n")

    def _save_finished_genotypes(self, population: list[Genotype]):
        for genotype in population:
            if self.genotypes_saved >= self._save_first_n:
                return
            if genotype.evaluation < 1:
                return   # sorted, no further genotype finished

            self.genotype_dir.mkdir(parents=True, exist_ok=True)
            self.genotypes_saved += 1
            path = self.genotype_dir / f"Genotype - Finished as {self.genotypes_saved}.txt"
            genotype.save_to_file(path)
            logger.info("Saved finished genotype to {}", path)
