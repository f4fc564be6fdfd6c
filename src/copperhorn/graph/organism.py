"""
Copperhorn Organism Module

This module implements the Organism: one small, sparsely connected neural
network made of addressable hidden neurons and an ordered sequence of output
neurons. Hidden neurons may be wired in any acyclic pattern, not necessarily
in layers.

Classes:
    Organism: Hidden neurons plus output neurons, with evaluation and learning

Functions:
    construct: Build an Organism (no validation beyond the activation name)
"""

import copy
import graphviz  # type: ignore
from typing import Callable, Sequence

from copperhorn.activations import activation_codes, get_activation
from copperhorn.engine      import evaluate, forward_pass, learn
from copperhorn.graph.neuron import Neuron

class Organism:
    """
    A neural network instance: hidden neurons plus an ordered output sequence.

    Hidden neurons are stored by ID with no implied evaluation order; the order
    is derived on every call from their hidden connections. Output neurons have
    no ID: they are pure sinks that no connection can reference, and their
    position in 'outputs' is their position in the output vector.

    The topology (which weights exist) is fixed once the Organism is built.
    'evaluate' never modifies the Organism; 'learn' changes the values of
    existing weights in place. Validation is lazy: a cycle among the hidden
    neurons is reported by 'evaluate' and 'learn', not at construction.

    Concurrent 'evaluate' calls on the same Organism are safe; 'learn' must not
    run concurrently with any other call on the same Organism.

    Public Attributes:
        hidden:          Hidden neuron ID => Neuron
        outputs:         Output neurons, in output-vector order
        activation_name: Default activation for neurons that do not override it

    Public Properties:
        number_hidden:      Number of hidden neurons
        number_outputs:     Number of output neurons
        number_connections: Total number of weights across all neurons

    Public Methods:
        activation_for(neuron): The activation function a neuron applies
        evaluate(inputs):       Compute the output vector
        signals(inputs):        Compute the hidden neuron outputs
        learn(eta, inputs):     Adapt the weights in place using Oja's rule
        clone():                Deep copy of this Organism
        to_dict(), from_dict(): Convert to and from a plain dictionary
        visualize():            Render the network with Graphviz
    """

    def __init__(self,
                 hidden         : dict[int, Neuron],
                 outputs        : Sequence[Neuron],
                 activation_name: str = "identity"):
        """
        Parameters:
            hidden:          Hidden neuron ID => Neuron
            outputs:         Output neurons, in output-vector order
            activation_name: Default activation function name

        Raises:
            ValueError: If 'activation_name' is not a known activation function
        """
        get_activation(activation_name)
        self.hidden         : dict[int, Neuron] = dict(hidden)
        self.outputs        : list[Neuron]      = list(outputs)
        self.activation_name: str               = activation_name

    @property
    def number_hidden(self) -> int:
        """Number of hidden neurons."""
        return len(self.hidden)

    @property
    def number_outputs(self) -> int:
        """Number of output neurons (the length of the output vector)."""
        return len(self.outputs)

    @property
    def number_connections(self) -> int:
        """Total number of weights across hidden and output neurons."""
        return (sum(n.number_connections for n in self.hidden.values()) +
                sum(n.number_connections for n in self.outputs))

    def activation_for(self, neuron: Neuron) -> Callable[[float], float]:
        """
        The activation function applied by 'neuron': its own
        if it names one, the Organism default otherwise.
        """
        name = neuron.activation_name if neuron.activation_name is not None else self.activation_name
        return get_activation(name)

    def evaluate(self, inputs: Sequence[float], num_jobs: int = 1) -> list[float]:
        """
        Compute the output vector for 'inputs'.

        Raises:
            CycleDetected: If the hidden connections contain a cycle
            MissingNeuron: If a hidden connection refers to an unknown ID
        """
        return evaluate(self, inputs, num_jobs)

    def signals(self, inputs: Sequence[float], num_jobs: int = 1) -> dict[int, float]:
        """
        Compute the output of every hidden neuron for 'inputs'.

        Returns:
            Hidden neuron ID => output (a fresh dictionary, not kept by the Organism)
        """
        signals, _ = forward_pass(self, inputs, num_jobs)
        return signals

    def learn(self, eta: float, inputs: Sequence[float], num_jobs: int = 1) -> None:
        """
        Adapt the weights in place with one pass of Oja's rule.
        On failure no weight is modified.

        Raises:
            CycleDetected: If the hidden connections contain a cycle
            MissingNeuron: If a hidden connection refers to an unknown ID
            ValueError:    If a neuron names an unknown activation function
        """
        learn(self, eta, inputs, num_jobs)

    def clone(self) -> 'Organism':
        """Create an independent copy of this Organism."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """
        Convert the Organism to a dictionary representation.

        This is the inverse operation of from_dict(). Hidden neurons are listed
        in dictionary order, outputs in output-vector order, weights as ordered
        [key, weight] pairs.

        Returns:
            Dictionary with the following structure:
            {
                "activation": "identity",
                "hidden": [
                    {"id": 1, "bias": 0.0, "input_weights": [[0, 1.0]], "hidden_weights": []}
                ],
                "outputs": [
                    {"bias": 0.0, "input_weights": [], "hidden_weights": [[1, 2.0]]}
                ]
            }
        """
        hidden = []
        for neuron_id, neuron in self.hidden.items():
            hidden.append({"id": neuron_id, **neuron.to_dict()})

        return {
            "activation": self.activation_name,
            "hidden"    : hidden,
            "outputs"   : [neuron.to_dict() for neuron in self.outputs]
        }

    @classmethod
    def from_dict(cls, organism_dict: dict) -> 'Organism':
        """
        Create an Organism from a dictionary description (see 'to_dict').

        Only the data layout is checked here; acyclicity is checked lazily
        by 'evaluate' and 'learn'.

        Raises:
            ValueError: If two hidden neurons share an ID, or a weight map repeats a key
            KeyError:   If required fields are missing from the dictionary
        """
        hidden = {}
        for neuron_data in organism_dict.get("hidden", []):
            neuron_id = neuron_data["id"]
            if neuron_id in hidden:
                raise ValueError(f"Duplicate hidden neuron ID {neuron_id}")
            hidden[neuron_id] = Neuron.from_dict(neuron_data)

        outputs = [Neuron.from_dict(neuron_data) for neuron_data in organism_dict["outputs"]]
        return cls(hidden, outputs, organism_dict.get("activation", "identity"))

    def visualize(self, view: bool = True) -> graphviz.Digraph:
        """
        Visualize the Organism using Graphviz.

        Inputs are drawn for every input index some neuron is connected to.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')  # Left to right layout

        base_attrs = {'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5',
                      'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}

        def label(neuron: Neuron) -> str:
            name = neuron.activation_name or self.activation_name
            return f"{activation_codes.get(name, '???')}\\nbias={neuron.bias:.2f}"

        input_indices = set()
        for neuron in list(self.hidden.values()) + self.outputs:
            input_indices.update(neuron.input_weights)

        with dot.subgraph(name='cluster_input') as input_cluster:
            input_cluster.attr(rank='source', label='Inputs', style='invisible')
            for index in sorted(input_indices):
                input_cluster.node(f"i{index}", label=f"x[{index}]", fillcolor='lightgrey', **base_attrs)

        if self.hidden:
            with dot.subgraph(name='cluster_hidden') as hidden_cluster:
                hidden_cluster.attr(label='Hidden', style='invisible')
                for neuron_id in sorted(self.hidden):
                    neuron = self.hidden[neuron_id]
                    hidden_cluster.node(f"h{neuron_id}", label=f"id={neuron_id}\\n{label(neuron)}",
                                        fillcolor='lightblue', **base_attrs)

        with dot.subgraph(name='cluster_output') as output_cluster:
            output_cluster.attr(rank='sink', label='Outputs', style='invisible')
            for position, neuron in enumerate(self.outputs):
                output_cluster.node(f"o{position}", label=f"y[{position}]\\n{label(neuron)}",
                                    fillcolor='white', **base_attrs)

        targets = [(f"h{i}", n) for i, n in self.hidden.items()] + [(f"o{p}", n) for p, n in enumerate(self.outputs)]
        for target, neuron in targets:
            for index, weight in neuron.input_weights.items():
                dot.edge(f"i{index}", target, label=f"w={weight:.2f}", fontsize='5', penwidth='0.5', arrowsize='0.5')
            for neuron_id, weight in neuron.hidden_weights.items():
                dot.edge(f"h{neuron_id}", target, label=f"w={weight:.2f}", fontsize='5', penwidth='0.5', arrowsize='0.5')

        if view:
            dot.view(cleanup=True)

        return dot

    def __str__(self):
        hidden  = "".join(f"h{i}{n}" for i, n in self.hidden.items())
        outputs = "".join(str(n) for n in self.outputs)
        return f"Hidden: {hidden}\nOutputs: {outputs}"

    def __repr__(self):
        return (f"Organism(hidden={self.number_hidden}, outputs={self.number_outputs}, "
                f"connections={self.number_connections}, activation={self.activation_name!r})")

def construct(hidden: dict[int, Neuron], outputs: Sequence[Neuron], activation_name: str = "identity") -> Organism:
    """
    Build an Organism from its hidden neurons and its output neurons.
    No structural validation is performed; see 'Organism'.
    """
    return Organism(hidden, outputs, activation_name)
