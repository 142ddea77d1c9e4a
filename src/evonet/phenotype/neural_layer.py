"""
Neural Layer Module

This module implements a single fully-connected layer of a feed-forward
neural network, including its always-on bias neuron.

Classes:
    NeuralLayer: Weight matrix plus activation function connecting two layers of neurons
"""

import autograd.numpy as np  # type: ignore
from typing import Callable, Optional, Sequence

from evonet.activations import sigmoid_activation

ActivationFunction = Callable[[np.ndarray], np.ndarray]

class NeuralLayer:
    """
    A fully-connected layer mapping 'neuron_count' inputs to 'output_count' outputs.

    The weights are stored as a matrix of shape (neuron_count + 1, output_count);
    row i holds the weights leaving input neuron i, the extra last row holds the
    weights of the bias neuron, whose input is always 1.0. The shape of the matrix
    is fixed at construction, its values may be changed in place.

    Public Attributes:
        activation: Function applied to the weighted sums (None: raw sums are output)

    Public Properties:
        neuron_count: Number of inputs of this layer (bias excluded)
        output_count: Number of outputs of this layer
        weights:      The weight matrix
        weight_count: Number of entries in the weight matrix

    Public Methods:
        process_inputs(inputs):      Compute the layer's outputs
        set_weights(flat):           Fill the weight matrix from a flat sequence (row-major)
        set_random_weights(min,max): Fill the weight matrix with uniform random values
        deep_copy():                 Independent copy sharing the activation function
    """

    def __init__(self, neuron_count: int, output_count: int,
                 activation: Optional[ActivationFunction] = sigmoid_activation):
        """
        Parameters:
            neuron_count: number of neurons feeding into this layer (bias excluded)
            output_count: number of neurons this layer outputs to
            activation:   activation function applied to each weighted sum
        """
        self._neuron_count: int        = neuron_count
        self._output_count: int        = output_count
        self._weights     : np.ndarray = np.zeros((neuron_count + 1, output_count))   # + 1 for bias
        self.activation   : Optional[ActivationFunction] = activation

    @property
    def neuron_count(self) -> int:
        return self._neuron_count

    @property
    def output_count(self) -> int:
        return self._output_count

    @property
    def weights(self) -> np.ndarray:
        return self._weights

    @property
    def weight_count(self) -> int:
        return self._weights.size

    def set_weights(self, weights: Sequence[float]):
        """
        Copy the given flat weights into the weight matrix, in row-major order:
        all weights leaving input neuron 0 first, ..., the bias row last.

        Raises:
            ValueError: if the number of weights does not match the matrix size
        """
        flat = np.asarray(weights, dtype=np.float64).ravel()
        if flat.size != self._weights.size:
            raise ValueError(f"Input weights ({flat.size}) do not match layer weight count ({self._weights.size}).")

        self._weights[:, :] = flat.reshape(self._weights.shape)

    def set_random_weights(self, min_value: float, max_value: float):
        """Set every weight to a value drawn uniformly from [min_value, max_value)."""
        self._weights[:, :] = np.random.uniform(min_value, max_value, self._weights.shape)

    def process_inputs(self, inputs) -> np.ndarray:
        """
        Compute the outputs of this layer.

        A bias input of 1.0 is appended to the inputs, then every output is
        activation(sum_i biased_inputs[i] * weights[i, j]).

        Parameters:
            inputs: input values, shape (neuron_count,) or (batch_size, neuron_count)

        Returns:
            Output values, shape (output_count,) or (batch_size, output_count)

        Raises:
            ValueError: if the number of inputs does not match 'neuron_count'
        """
        inputs = np.asarray(inputs, dtype=np.float64)
        if inputs.ndim == 0 or inputs.shape[-1] != self._neuron_count:
            raise ValueError(f"Given inputs do not match layer input count ({self._neuron_count}).")

        bias          = np.ones(inputs.shape[:-1] + (1,))
        biased_inputs = np.concatenate([inputs, bias], axis=-1)
        sums          = np.dot(biased_inputs, self._weights)

        if self.activation is not None:
            return self.activation(sums)
        return sums

    def deep_copy(self) -> 'NeuralLayer':
        """Copy of this layer with an independent weight matrix and the same activation function."""
        layer = NeuralLayer(self._neuron_count, self._output_count, self.activation)
        layer._weights = np.array(self._weights)
        return layer

    def __str__(self):
        rows = []
        for i, row in enumerate(self._weights):
            rows.append(''.join(f"[{i},{j}]: {w}  " for j, w in enumerate(row)).rstrip())
        return '\n'.join(rows) + '\n'

    def __repr__(self):
        return f"NeuralLayer(neuron_count={self._neuron_count}, output_count={self._output_count})"
