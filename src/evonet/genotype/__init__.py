"""
Genotype Package

This package implements the genetic encoding evolved by the genetic algorithm:
a flat, fixed-length vector of real-valued parameters which is decoded into the
weights of a feed-forward neural network.

Modules:
    genotype: Genotype class and its text serialisation

Exported Classes:
    Genotype: Parameter vector with evaluation and fitness scores
"""

from evonet.genotype.genotype import PARAMETER_SEPARATOR, Genotype

__all__ = ['PARAMETER_SEPARATOR',
           'Genotype']
