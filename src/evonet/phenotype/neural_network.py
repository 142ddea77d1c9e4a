"""
Neural Network Module

This module implements the fixed-topology feed-forward neural network which
genotypes are decoded into.

Classes:
    NeuralNetwork: A sequence of fully-connected layers
"""

import autograd.numpy as np  # type: ignore
from typing import Optional, Sequence

from evonet.activations              import sigmoid_activation
from evonet.phenotype.neural_layer   import ActivationFunction, NeuralLayer

class NeuralNetwork:
    """
    A feed-forward neural network of fully-connected layers.

    The network is described by its topology, the ordered list of layer sizes
    (input layer first, output layer last). Between each pair of consecutive
    layer sizes sits one NeuralLayer, so a network has one layer fewer than
    its topology has entries. The total number of weights is

        weight_count = sum_i (topology[i] + 1) * topology[i + 1]

    where the "+ 1" accounts for the bias neuron of each layer.

    Public Properties:
        layers:       The NeuralLayer objects, input side first
        topology:     Copy of the layer sizes
        weight_count: Total number of weights in all layers

    Public Methods:
        process_inputs(inputs):      Feed inputs forward through all layers
        set_weights(flat):           Decode a flat weight vector into the layers
        set_random_weights(min,max): Randomize all weights
        topology_copy():             Fresh network with same shape and activations, zero weights
        deep_copy():                 Independent copy including weights
    """

    def __init__(self, topology: Sequence[int],
                 activation: Optional[ActivationFunction] = sigmoid_activation):
        """
        Parameters:
            topology:   layer sizes, input layer first; at least two entries
            activation: activation function given to every layer
        """
        topology = [int(size) for size in topology]
        if len(topology) < 2:
            raise ValueError("A network topology needs at least an input and an output layer.")
        if any(size < 1 for size in topology):
            raise ValueError(f"All layer sizes must be positive, got {topology}.")

        self._topology: list[int] = topology
        self._layers  : list[NeuralLayer] = \
            [NeuralLayer(topology[i], topology[i + 1], activation) for i in range(len(topology) - 1)]

    @property
    def layers(self) -> list[NeuralLayer]:
        return self._layers

    @property
    def topology(self) -> list[int]:
        return list(self._topology)

    @property
    def weight_count(self) -> int:
        return sum(layer.weight_count for layer in self._layers)

    def process_inputs(self, inputs) -> np.ndarray:
        """
        Propagate the inputs through all layers, the outputs of
        each layer becoming the inputs of the next one.

        Parameters:
            inputs: input values, shape (topology[0],) or (batch_size, topology[0])

        Raises:
            ValueError: if the number of inputs does not match the input layer size
        """
        inputs = np.asarray(inputs, dtype=np.float64)
        if inputs.ndim == 0 or inputs.shape[-1] != self._topology[0]:
            raise ValueError(f"Given inputs do not match network input amount ({self._topology[0]}).")

        outputs = inputs
        for layer in self._layers:
            outputs = layer.process_inputs(outputs)
        return outputs

    def set_weights(self, weights: Sequence[float]):
        """
        Decode a flat weight vector into the layers: layer 0 first, each layer
        filled row-major including its trailing bias row.

        Raises:
            ValueError: if the vector length differs from 'weight_count'
        """
        flat = np.asarray(weights, dtype=np.float64).ravel()
        if flat.size != self.weight_count:
            raise ValueError(f"Weight vector length ({flat.size}) does not match network weight count ({self.weight_count}).")

        offset = 0
        for layer in self._layers:
            layer.set_weights(flat[offset:offset + layer.weight_count])
            offset += layer.weight_count

    def set_random_weights(self, min_value: float, max_value: float):
        for layer in self._layers:
            layer.set_random_weights(min_value, max_value)

    def topology_copy(self) -> 'NeuralNetwork':
        """
        Create a network with the same topology and activation
        functions as this one, but with all weights set to zero.
        """
        copy = NeuralNetwork(self._topology)
        for copy_layer, layer in zip(copy._layers, self._layers):
            copy_layer.activation = layer.activation
        return copy

    def deep_copy(self) -> 'NeuralNetwork':
        copy = NeuralNetwork(self._topology)
        copy._layers = [layer.deep_copy() for layer in self._layers]
        return copy

    def __str__(self):
        return ''.join(f"Layer {i}:\n{layer}" for i, layer in enumerate(self._layers))

    def __repr__(self):
        return f"NeuralNetwork(topology={self._topology})"
