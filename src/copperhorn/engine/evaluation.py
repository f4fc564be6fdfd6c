"""
Copperhorn Evaluation Module

This module computes the output of an Organism for an input vector.
Hidden neurons are fired in dependency order and their outputs stored in a
signals cache that lives for a single call; output neurons then fire from
the same cache.

Functions:
    fire:         Compute the output of a single neuron
    forward_pass: Fire the whole organism, returning signals cache and outputs
    evaluate:     Fire the whole organism, returning the output vector
"""

import logging
from joblib import Parallel, delayed
from typing import Callable, Sequence, TYPE_CHECKING

from copperhorn.engine.topology import topological_order, dependency_levels

if TYPE_CHECKING:
    from copperhorn.graph import Neuron, Organism

logger = logging.getLogger(__name__)

def fire(neuron    : 'Neuron',
         signals   : dict[int, float],
         inputs    : Sequence[float],
         activation: Callable[[float], float]) -> float:
    """
    Compute the output of a neuron.

    The accumulated signal starts at the bias. Each input weight adds
    'inputs[index] * weight' if 'index' is a position of the input vector;
    out-of-range indices (negative ones included) are skipped silently.
    Each hidden weight adds 'signals[id] * weight'.

    Parameters:
        neuron:     The neuron to fire
        signals:    Outputs of the hidden neurons fired so far in this call
        inputs:     The input vector
        activation: Function applied to the accumulated signal

    Returns:
        activation(accumulated signal)

    Raises:
        RuntimeError: If a hidden dependency has not been fired yet
                      (only possible if the firing order is wrong)
    """
    acc   = neuron.bias
    width = len(inputs)
    for index, weight in neuron.input_weights.items():
        if 0 <= index < width:
            acc += inputs[index] * weight
    for neuron_id, weight in neuron.hidden_weights.items():
        try:
            acc += signals[neuron_id] * weight
        except KeyError:
            raise RuntimeError(f"Hidden neuron {neuron_id} fired out of order") from None
    return float(activation(acc))

def forward_pass(organism: 'Organism',
                 inputs  : Sequence[float],
                 num_jobs: int = 1) -> tuple[dict[int, float], list[float]]:
    """
    Fire every neuron of the organism once.

    Parameters:
        organism: The organism to evaluate (not modified)
        inputs:   The input vector
        num_jobs: Number of worker threads firing the neurons of one dependency level
                  1 = serial (no parallelization)
                 -1 = use all available CPU cores
                 >1 = use specified number of threads

    Returns:
        The signals cache (hidden neuron ID => output) and the output vector

    Raises:
        CycleDetected: If the hidden connections contain a cycle
        MissingNeuron: If a hidden connection refers to an unknown ID
    """
    order   = topological_order(organism.hidden)
    signals = {}

    if num_jobs == 1:
        for neuron_id in order:
            neuron = organism.hidden[neuron_id]
            signals[neuron_id] = fire(neuron, signals, inputs, organism.activation_for(neuron))
        outputs = [fire(neuron, signals, inputs, organism.activation_for(neuron))
                   for neuron in organism.outputs]
    else:
        levels = dependency_levels(organism.hidden, order)
        logger.debug("Firing %d hidden levels with num_jobs=%d", len(levels), num_jobs)
        with Parallel(n_jobs=num_jobs, prefer="threads") as parallel:
            for level in levels:
                neurons = [organism.hidden[neuron_id] for neuron_id in level]
                results = parallel(delayed(fire)(n, signals, inputs, organism.activation_for(n)) for n in neurons)

                # Written by this thread only, after the whole level has fired
                signals.update(zip(level, results))

            outputs = parallel(delayed(fire)(n, signals, inputs, organism.activation_for(n))
                               for n in organism.outputs)

    return signals, outputs

def evaluate(organism: 'Organism', inputs: Sequence[float], num_jobs: int = 1) -> list[float]:
    """
    Compute the output vector of an organism.

    Parameters:
        organism: The organism to evaluate (not modified)
        inputs:   The input vector
        num_jobs: Number of worker threads per dependency level (see 'forward_pass')

    Returns:
        One value per output neuron, in output-neuron order

    Raises:
        CycleDetected: If the hidden connections contain a cycle
        MissingNeuron: If a hidden connection refers to an unknown ID
    """
    _, outputs = forward_pass(organism, inputs, num_jobs)
    return outputs
