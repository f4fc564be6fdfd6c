"""
Copperhorn Topology Module

This module orders the hidden neurons of an Organism so that every neuron is
fired after all the hidden neurons it reads from, and reports cycles and
dangling references instead of failing unsafely.

Classes:
    TopologyError: Base class for structural problems found while ordering
    CycleDetected: The hidden connection graph contains a directed cycle
    MissingNeuron: A hidden connection points to a neuron that does not exist

Functions:
    topological_order: Dependency order of the hidden neurons
    dependency_levels: Group a dependency order into mutually-independent levels
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from copperhorn.graph import Neuron

logger = logging.getLogger(__name__)

# Visitation marks
_UNVISITED   = 0
_IN_PROGRESS = 1   # on the current traversal path
_DONE        = 2

class TopologyError(ValueError):
    """
    The hidden connection graph of an Organism cannot be ordered.
    Recoverable: the caller should discard the organism, not abort.
    """

class CycleDetected(TopologyError):
    """
    The hidden connection graph contains a directed cycle.

    Public Attributes:
        neuron_ids: IDs of the neurons on the cycle, in path order; each neuron
                    reads from the one before it (a self-loop has a single entry)
    """

    def __init__(self, neuron_ids: list[int]):
        self.neuron_ids: list[int] = list(neuron_ids)
        path = " <- ".join(str(i) for i in self.neuron_ids + self.neuron_ids[:1])
        super().__init__(f"Cycle detected among hidden neurons: {path}")

class MissingNeuron(TopologyError):
    """
    A hidden connection references an ID that is not a hidden neuron.

    Public Attributes:
        neuron_id:  ID of the neuron holding the dangling connection
        missing_id: ID it refers to
    """

    def __init__(self, neuron_id: int, missing_id: int):
        self.neuron_id : int = neuron_id
        self.missing_id: int = missing_id
        super().__init__(f"Hidden neuron {neuron_id} is connected to unknown neuron {missing_id}")

def topological_order(hidden: dict[int, 'Neuron']) -> list[int]:
    """
    Compute a dependency order of the hidden neurons.

    Depth-first traversal over the hidden connections with three marks per
    neuron (unvisited, in progress, done). Reaching an in-progress neuron means
    the traversal followed a back edge, which closes a cycle. The traversal
    uses an explicit stack, so graph depth is bounded only by memory.

    A neuron is appended to the result once all of its dependencies are done,
    so each neuron appears after every hidden neuron in its 'hidden_weights'.
    The order among mutually independent neurons follows dictionary order and
    carries no meaning.

    Parameters:
        hidden: Hidden neuron ID => Neuron

    Returns:
        List of hidden neuron IDs in dependency order

    Raises:
        CycleDetected: If the hidden connections contain a cycle (self-loops included)
        MissingNeuron: If a hidden connection refers to an unknown ID
    """
    marks: dict[int, int] = {}
    order: list[int]      = []

    for root_id in hidden:
        if marks.get(root_id, _UNVISITED) != _UNVISITED:
            continue

        # Each stack frame holds a neuron ID and an iterator over its
        # dependencies, so the traversal resumes where it left off.
        marks[root_id] = _IN_PROGRESS
        stack = [(root_id, iter(hidden[root_id].hidden_weights))]

        while stack:
            neuron_id, dependencies = stack[-1]
            for dep_id in dependencies:
                if dep_id not in hidden:
                    logger.warning("Hidden neuron %s refers to unknown neuron %s", neuron_id, dep_id)
                    raise MissingNeuron(neuron_id, dep_id)

                mark = marks.get(dep_id, _UNVISITED)
                if mark == _IN_PROGRESS:
                    path  = [frame_id for frame_id, _ in stack]
                    cycle = path[path.index(dep_id):]
                    logger.warning("Cycle detected among hidden neurons %s", cycle)
                    raise CycleDetected(cycle)
                if mark == _UNVISITED:
                    marks[dep_id] = _IN_PROGRESS
                    stack.append((dep_id, iter(hidden[dep_id].hidden_weights)))
                    break
            else:
                # all dependencies are done
                stack.pop()
                marks[neuron_id] = _DONE
                order.append(neuron_id)

    logger.debug("Topological order of %d hidden neurons: %s", len(order), order)
    return order

def dependency_levels(hidden: dict[int, 'Neuron'], order: list[int]) -> list[list[int]]:
    """
    Group a dependency order into levels of mutually independent neurons.

    Level 0 holds the neurons without hidden dependencies; a neuron at level k
    depends only on neurons of levels below k, and on at least one of level k-1.
    Neurons within a level may therefore be fired in any order, or concurrently,
    once all lower levels are in the signals cache.

    Parameters:
        hidden: Hidden neuron ID => Neuron
        order:  A dependency order of 'hidden', as produced by 'topological_order'

    Returns:
        List of levels, each a list of hidden neuron IDs (in 'order' order)
    """
    depth : dict[int, int]   = {}
    levels: list[list[int]]  = []
    for neuron_id in order:
        level = 1 + max((depth[dep_id] for dep_id in hidden[neuron_id].hidden_weights), default=-1)
        depth[neuron_id] = level
        if level == len(levels):
            levels.append([])
        levels[level].append(neuron_id)
    return levels
