"""
Copperhorn - evaluation and online adaptation of small, sparsely connected networks.

An organism is a neural network whose hidden neurons may be wired in any
acyclic pattern. This package fires organisms in dependency order, reports
cyclic wiring as a recoverable error, and adapts weights in place with
Oja's rule.

Main components:
- graph: Graph model (Neuron, Organism)
- engine: Topological sort, evaluation and learning
- activations: Activation functions
- assembly: Random generation of initial organisms
- run: Configuration

Example:
    >>> from copperhorn import Neuron, Organism
    >>> organism = Organism({1: Neuron(0.0, {0: 1.0})}, [Neuron(0.0, hidden_weights={1: 2.0})])
    >>> organism.evaluate([3.0])
    [6.0]
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from copperhorn.run.config       import Config
from copperhorn.graph            import Neuron, Organism, construct
from copperhorn.engine           import TopologyError, CycleDetected, MissingNeuron, evaluate, learn
from copperhorn.assembly         import OrganismFactory

__all__ = [
    "Config",
    "Neuron",
    "Organism",
    "construct",
    "TopologyError",
    "CycleDetected",
    "MissingNeuron",
    "evaluate",
    "learn",
    "OrganismFactory",
]
