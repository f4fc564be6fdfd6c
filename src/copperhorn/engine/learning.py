"""
Copperhorn Learning Module

This module adapts the weights of an Organism in place using Oja's rule, an
unsupervised online update that needs no label or loss. The learning pass is
a forward pass in which every neuron updates its own weights right after it
fires.

Functions:
    oja_update: Apply one Oja step to the weights of a neuron
    learn:      Run a learning pass over an organism
"""

import logging
from joblib import Parallel, delayed
from typing import Callable, Sequence, TYPE_CHECKING

from copperhorn.engine.evaluation import fire
from copperhorn.engine.topology   import topological_order, dependency_levels

if TYPE_CHECKING:
    from copperhorn.graph import Neuron, Organism

logger = logging.getLogger(__name__)

def oja_update(neuron : 'Neuron',
               y      : float,
               signals: dict[int, float],
               inputs : Sequence[float],
               eta    : float) -> None:
    """
    Apply Oja's rule to every existing weight of a neuron:

        w <- w + eta * y * (x - y * w)

    where 'x' is the signal the weight connects to: an input value for input
    weights, a cached hidden output for hidden weights. Input weights whose
    index lies outside the input vector have no signal and are left as they
    are. No connection is created and the bias is not changed.

    Parameters:
        neuron:  The neuron to update (modified in place)
        y:       The output the neuron produced in this pass
        signals: Outputs of the hidden neurons fired so far in this pass
        inputs:  The input vector
        eta:     Learning rate
    """
    width = len(inputs)
    for index, w in neuron.input_weights.items():
        if 0 <= index < width:
            neuron.input_weights[index] = w + eta * y * (inputs[index] - y * w)
    for neuron_id, w in neuron.hidden_weights.items():
        neuron.hidden_weights[neuron_id] = w + eta * y * (signals[neuron_id] - y * w)

def _fire_and_update(neuron    : 'Neuron',
                     signals   : dict[int, float],
                     inputs    : Sequence[float],
                     activation: Callable[[float], float],
                     eta       : float) -> float:
    y = fire(neuron, signals, inputs, activation)
    oja_update(neuron, y, signals, inputs, eta)
    return y

def learn(organism: 'Organism', eta: float, inputs: Sequence[float], num_jobs: int = 1) -> None:
    """
    Run one learning pass over an organism, adapting its weights in place.

    Neurons fire in the same order as in 'evaluate' (hidden neurons in
    dependency order, then outputs). Immediately after a neuron fires, its
    weights are updated with the output it just produced. Downstream neurons
    read that pre-update output from the signals cache, which is never
    revised within the pass.

    The dependency order and the activation of every neuron are resolved
    before anything else, so an organism with a cycle or an unknown
    activation is rejected without any weight being touched.

    Parameters:
        organism: The organism to adapt (modified in place)
        eta:      Learning rate
        inputs:   The input vector
        num_jobs: Number of worker threads per dependency level
                  1 = serial (no parallelization)
                 -1 = use all available CPU cores
                 >1 = use specified number of threads

    Raises:
        CycleDetected: If the hidden connections contain a cycle
        MissingNeuron: If a hidden connection refers to an unknown ID
        ValueError:    If a neuron names an unknown activation function
    """
    order              = topological_order(organism.hidden)
    hidden_activations = {neuron_id: organism.activation_for(organism.hidden[neuron_id]) for neuron_id in order}
    output_activations = [organism.activation_for(neuron) for neuron in organism.outputs]
    signals            = {}

    if num_jobs == 1:
        for neuron_id in order:
            neuron = organism.hidden[neuron_id]
            signals[neuron_id] = _fire_and_update(neuron, signals, inputs, hidden_activations[neuron_id], eta)
        for neuron, activation in zip(organism.outputs, output_activations):
            _fire_and_update(neuron, signals, inputs, activation, eta)
    else:
        # Each task updates the weights of its own neuron only
        levels = dependency_levels(organism.hidden, order)
        with Parallel(n_jobs=num_jobs, prefer="threads") as parallel:
            for level in levels:
                results = parallel(delayed(_fire_and_update)(organism.hidden[i], signals, inputs, hidden_activations[i], eta)
                                   for i in level)
                signals.update(zip(level, results))
            parallel(delayed(_fire_and_update)(n, signals, inputs, activation, eta)
                     for n, activation in zip(organism.outputs, output_activations))

    logger.debug("Learning pass over %d hidden and %d output neurons (eta=%g)",
                 len(order), len(organism.outputs), eta)
