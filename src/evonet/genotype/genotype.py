"""
Genotype Module

This module implements the Genotype class, the unit of evolution of the genetic
algorithm: a fixed-length vector of real-valued parameters, together with the
two scores the algorithm attaches to it.

Classes:
    Genotype: Parameter vector with evaluation and fitness scores
"""

import autograd.numpy as np  # type: ignore
from pathlib import Path
from typing  import Iterable, Iterator, Union

from evonet.exceptions import GenotypeFormatError

# Separator between parameters in the genotype text format
PARAMETER_SEPARATOR = ';'

class Genotype:
    """
    An evolvable vector of real-valued parameters.

    The parameters of a genotype are decoded into the weights of a neural
    network (see 'Agent'). The length of the vector is fixed when the genotype
    is created and never changes afterwards; operators may change the values
    of individual parameters in place.

    Genotypes are ordered by fitness in *descending* order: a genotype with a
    higher fitness compares as "less than" one with a lower fitness, so that
    sorting a population puts the best genotypes first. The sort is stable,
    genotypes of equal fitness keep their relative order.

    Public Attributes:
        evaluation: Raw task score, written by the evaluation environment
        fitness:    Normalized score, written by the fitness calculation operator

    Public Properties:
        parameter_count: Number of parameters in this genotype

    Public Methods:
        set_random_parameters(min, max): Draw every parameter uniformly from [min, max)
        copy_of_parameters():            Return an independent copy of the parameters
        save_to_file(path):              Serialize parameters as ';'-separated text
        load_from_file(path):            Create a genotype from a file (class method)
        generate_random(count, min, max): Create a randomized genotype (class method)
    """

    def __init__(self, parameters: Iterable[float]):
        """
        Parameters:
            parameters: the initial parameter values; they are copied
        """
        self._parameters: np.ndarray = np.array(list(parameters), dtype=np.float64)
        self.evaluation : float      = 0.0
        self.fitness    : float      = 0.0

    @property
    def parameter_count(self) -> int:
        return len(self._parameters)

    def _check_index(self, index: int):
        if not 0 <= index < len(self._parameters):
            raise IndexError(f"parameter index {index} out of range [0, {len(self._parameters)})")

    def __getitem__(self, index: int) -> float:
        self._check_index(index)
        return float(self._parameters[index])

    def __setitem__(self, index: int, value: float):
        self._check_index(index)
        self._parameters[index] = value

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[float]:
        return (float(p) for p in self._parameters)

    def __lt__(self, other: 'Genotype') -> bool:
        # reversed, so that the fittest genotype sorts first
        return self.fitness > other.fitness

    def set_random_parameters(self, min_value: float, max_value: float):
        """
        Set every parameter to a value drawn independently and uniformly from [min_value, max_value).

        Raises:
            ValueError: if 'min_value' exceeds 'max_value'
        """
        if min_value > max_value:
            raise ValueError("Minimum value may not exceed maximum value.")

        self._parameters = np.random.uniform(min_value, max_value, len(self._parameters))

    def copy_of_parameters(self) -> np.ndarray:
        """Return a copy of the parameter vector, independent of this genotype."""
        return np.array(self._parameters, dtype=np.float64)

    def save_to_file(self, file_path: Union[str, Path]):
        """
        Write the parameters to a file as ';'-separated decimal text, without trailing separator.

        'repr' of a float is the shortest string which parses back to the same
        value, so saving and loading reproduces the parameters exactly.
        """
        text = PARAMETER_SEPARATOR.join(repr(float(p)) for p in self._parameters)
        Path(file_path).write_text(text, encoding="utf-8")

    @classmethod
    def load_from_file(cls, file_path: Union[str, Path]) -> 'Genotype':
        """
        Create a genotype from a file written by 'save_to_file'.
        An empty file holds a genotype without parameters.

        Raises:
            GenotypeFormatError: if any field of the file is not a valid float
        """
        data = Path(file_path).read_text(encoding="utf-8")
        if not data.strip():
            return cls([])   # written by a genotype without parameters

        parameters = []
        for field in data.split(PARAMETER_SEPARATOR):
            try:
                parameters.append(float(field))
            except ValueError:
                raise GenotypeFormatError(
                    f"The file '{file_path}' does not contain a valid genotype serialisation "
                    f"(cannot parse {field!r})") from None

        return cls(parameters)

    @classmethod
    def generate_random(cls, parameter_count: int, min_value: float, max_value: float) -> 'Genotype':
        """
        Create a genotype of the given length with parameters drawn uniformly from [min_value, max_value).
        """
        genotype = cls(np.zeros(parameter_count))
        if parameter_count > 0:
            genotype.set_random_parameters(min_value, max_value)
        return genotype

    def __str__(self):
        return f"evaluation={self.evaluation:.4f}, fitness={self.fitness:.4f}, parameters={list(self)}"

    def __repr__(self):
        return f"Genotype(parameters={list(self)})"
