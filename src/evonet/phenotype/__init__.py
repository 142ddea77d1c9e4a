"""
Phenotype Package

This package expresses genotypes as executable feed-forward neural networks.
A genotype's flat parameter vector is decoded, layer by layer, into the weight
matrices of a network whose shape is given by its topology.

Modules:
    neural_layer:   A single fully-connected layer with bias neuron
    neural_network: A feed-forward network made of NeuralLayer(s)
    agent:          A genotype bound to its decoded network, with a life cycle

Exported Classes:
    Agent:         A genotype plus its decoded network and alive/dead state
    NeuralLayer:   Fully-connected layer
    NeuralNetwork: Feed-forward network of fully-connected layers
"""

from evonet.phenotype.neural_layer   import ActivationFunction, NeuralLayer
from evonet.phenotype.neural_network import NeuralNetwork
from evonet.phenotype.agent          import Agent, DeathListener

__all__ = ['ActivationFunction',
           'Agent',
           'DeathListener',
           'NeuralLayer',
           'NeuralNetwork']
