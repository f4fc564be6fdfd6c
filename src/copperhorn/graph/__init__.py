"""
Copperhorn Graph Package

This package holds the graph model of an organism: neurons with a bias and
sparse weight maps, and the Organism that owns hidden and output neurons.

Modules:
    neuron:   Neuron class
    organism: Organism class and 'construct'

Exported Classes:
    Neuron:   A bias plus sparse input and hidden connection weights
    Organism: Hidden neurons plus an ordered sequence of output neurons
"""

from copperhorn.graph.neuron   import Neuron
from copperhorn.graph.organism import Organism, construct

__all__ = ['Neuron',
           'Organism',
           'construct']
