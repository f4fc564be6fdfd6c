"""
Copperhorn Activations Module

This module defines the scalar functions a neuron may apply to its
accumulated signal, and the registry through which Organisms and Neurons
refer to them by name. All functions are numpy-backed, so they accept
plain floats as well as arrays.

Functions:
    identity_activation: Linear passthrough (the default)
    clamped_activation:  Linear, clipped to [-1, 1]
    relu_activation:     max(0, z)
    sigmoid_activation:  Standard logistic function, range (0, 1)
    tanh_activation:     Hyperbolic tangent, range (-1, 1)
    sin_activation:      Sine
    abs_activation:      Absolute value
    get_activation:      Look up an activation function by name

Registries:
    activations:      Name => activation function
    activation_codes: Name => 3-letter code used when drawing an Organism
"""

import numpy as np

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.clip(z, -1.0, 1.0)

def relu_activation(z):
    return np.maximum(0.0, z)

def sigmoid_activation(z):
    # Unit gain: sigmoid(1) = 1 / (1 + e^-1)
    z = np.clip(z, -100, 100)   # to prevent under/overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-z))

def tanh_activation(z):
    return np.tanh(z)

def sin_activation(z):
    return np.sin(z)

def abs_activation(z):
    return np.abs(z)

activations = {
    "identity": identity_activation,
    "clamped" : clamped_activation,
    "relu"    : relu_activation,
    "sigmoid" : sigmoid_activation,
    "tanh"    : tanh_activation,
    "sin"     : sin_activation,
    "abs"     : abs_activation
    }

# 3-letter identifiers for each activation function
activation_codes = {
    "identity": "IDN",
    "clamped" : "CLP",
    "relu"    : "RLU",
    "sigmoid" : "SIG",
    "tanh"    : "TNH",
    "sin"     : "SIN",
    "abs"     : "ABS"
    }

def get_activation(name: str):
    """
    Look up an activation function by name.

    Raises:
        ValueError: if no activation function is registered under 'name'
    """
    try:
        return activations[name]
    except KeyError:
        raise ValueError(f"Unknown activation function '{name}'. "
                         f"Available: {', '.join(activations)}") from None
