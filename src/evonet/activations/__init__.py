"""
Activations Package

This package provides the activation functions used by the layers of the
feed-forward networks that genotypes are decoded into.

Exported:
    activations: Dictionary mapping activation function names to functions
    get_activation: Look up an activation function by name
    Individual activation functions: sigmoid_activation, tanh_activation,
                                     softsign_activation, identity_activation
"""

from evonet.activations.basic_activations import (
    SATURATION_THRESHOLD,
    activations,
    get_activation,
    identity_activation,
    sigmoid_activation,
    softsign_activation,
    tanh_activation
)

__all__ = [
    'SATURATION_THRESHOLD',
    'activations',
    'get_activation',
    'identity_activation',
    'sigmoid_activation',
    'softsign_activation',
    'tanh_activation'
]
