"""
Exception hierarchy for evonet.

Every error raised by the library derives from EvonetError, and additionally
from the builtin exception that best describes it, so callers can catch either
the specific evonet type or the usual ValueError / RuntimeError.

Classes:
    EvonetError:             Base class for all evonet errors
    ConfigurationError:      Invalid configuration (e.g. genotype/topology mismatch)
    GenotypeFormatError:     A genotype file could not be parsed
    PreconditionError:       An operator was given inputs it cannot work with
    FitnessCalculationError: Fitness is undefined for the given population
    AlgorithmStateError:     The generational protocol was driven out of order
    PopulationSizeError:     Recombination did not produce a full population
"""


class EvonetError(Exception):
    """Base class for all evonet specific exceptions."""


class ConfigurationError(EvonetError, ValueError):
    """Raised for invalid configuration values or incompatible components."""


class GenotypeFormatError(EvonetError, ValueError):
    """Raised when a serialized genotype cannot be parsed."""


class PreconditionError(EvonetError, ValueError):
    """Raised when an operator's input violates its requirements."""


class FitnessCalculationError(EvonetError, ArithmeticError):
    """Raised when fitness cannot be calculated (empty or zero-mean population)."""


class AlgorithmStateError(EvonetError, RuntimeError):
    """Raised when start() or evaluation_finished() is called in the wrong state."""


class PopulationSizeError(EvonetError, RuntimeError):
    """Raised when a recombination operator returns the wrong number of genotypes."""


__all__ = [
    "EvonetError",
    "ConfigurationError",
    "GenotypeFormatError",
    "PreconditionError",
    "FitnessCalculationError",
    "AlgorithmStateError",
    "PopulationSizeError",
]
