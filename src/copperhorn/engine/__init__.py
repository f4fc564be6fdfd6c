"""
Copperhorn Engine Package

This package implements the evaluation and learning engine: the dependency
ordering of hidden neurons (with cycle detection), the per-call signals cache
filled while firing, and the online weight update applied during learning.

Modules:
    topology:   Topological sort, dependency levels and topology errors
    evaluation: Neuron firing and forward pass
    learning:   Oja's rule and the learning pass

Exported:
    TopologyError, CycleDetected, MissingNeuron
    topological_order, dependency_levels
    fire, forward_pass, evaluate
    oja_update, learn
"""

from copperhorn.engine.topology   import (TopologyError, CycleDetected, MissingNeuron,
                                          topological_order, dependency_levels)
from copperhorn.engine.evaluation import fire, forward_pass, evaluate
from copperhorn.engine.learning   import oja_update, learn

__all__ = ['TopologyError',
           'CycleDetected',
           'MissingNeuron',
           'topological_order',
           'dependency_levels',
           'fire',
           'forward_pass',
           'evaluate',
           'oja_update',
           'learn']
