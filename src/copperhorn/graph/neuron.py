"""
Copperhorn Neuron Module

This module implements the Neuron, the computational unit of an Organism.
A Neuron is a pure data container: a bias plus two sparse weight maps, one
keyed by input-vector position and one keyed by hidden-neuron ID.

Classes:
    Neuron: A bias plus sparse input and hidden connection weights
"""

from copperhorn.activations import get_activation

class Neuron:
    """
    A computational unit producing one scalar output.

    The neuron computes its output as:
        activation(bias + sum(input[i] * w_i) + sum(signal[j] * w_j))
    where 'i' ranges over the keys of 'input_weights' and 'j' over the keys
    of 'hidden_weights'. The firing itself lives in the evaluation engine;
    this class only holds the parameters.

    Sparsity is structural: a key absent from a weight map means "no
    connection", which is not the same as a connection of weight zero.
    Absent entries are never read or updated, and the set of keys is fixed
    once the neuron is built. Only the values of existing weights change,
    and only through learning.

    Public Attributes:
        bias:            Bias value added to the accumulated signal (never learned)
        input_weights:   Input index => weight
        hidden_weights:  Hidden neuron ID => weight
        activation_name: Name of the activation function overriding the
                         Organism default (None to inherit it)

    Public Properties:
        number_connections: Total number of weights held by this neuron
    """

    def __init__(self,
                 bias           : float,
                 input_weights  : dict[int, float] | None = None,
                 hidden_weights : dict[int, float] | None = None,
                 activation_name: str | None = None):
        """
        Parameters:
            bias:            Bias value added to the accumulated signal
            input_weights:   Input index => weight (copied)
            hidden_weights:  Hidden neuron ID => weight (copied)
            activation_name: Optional per-neuron activation function name

        Raises:
            ValueError: If a weight key is not an integer, or the activation name is unknown
        """
        if activation_name is not None:
            get_activation(activation_name)

        self.bias           : float            = float(bias)
        self.input_weights  : dict[int, float] = self._integer_keys(input_weights,  "input")
        self.hidden_weights : dict[int, float] = self._integer_keys(hidden_weights, "hidden")
        self.activation_name: str | None       = activation_name

    @property
    def number_connections(self) -> int:
        """Total number of weights (input and hidden) held by this neuron."""
        return len(self.input_weights) + len(self.hidden_weights)

    def to_dict(self) -> dict:
        """
        Convert the neuron to a dictionary with ordered weight pairs.
        The activation name is included only when it overrides the default.
        """
        neuron_dict = {
            "bias"          : self.bias,
            "input_weights" : [[i, w] for i, w in self.input_weights.items()],
            "hidden_weights": [[j, w] for j, w in self.hidden_weights.items()]
        }
        if self.activation_name is not None:
            neuron_dict["activation"] = self.activation_name
        return neuron_dict

    @classmethod
    def from_dict(cls, neuron_dict: dict) -> 'Neuron':
        """
        Create a Neuron from the dictionary produced by 'to_dict()'.

        Raises:
            ValueError: If a weight map repeats a key, a key is not an integer,
                        or the activation name is unknown
        """
        input_weights  = cls._pairs_to_map(neuron_dict.get("input_weights",  []), "input")
        hidden_weights = cls._pairs_to_map(neuron_dict.get("hidden_weights", []), "hidden")
        return cls(neuron_dict["bias"], input_weights, hidden_weights, neuron_dict.get("activation"))

    @staticmethod
    def _integer_keys(weights: dict | None, kind: str) -> dict[int, float]:
        # Keys must be integral, never truncated
        converted = {}
        for key, weight in (weights or {}).items():
            if isinstance(key, bool) or int(key) != key:
                raise ValueError(f"The {kind} connection key {key!r} is not an integer")
            converted[int(key)] = float(weight)
        return converted

    @staticmethod
    def _pairs_to_map(pairs: list, kind: str) -> dict[int, float]:
        weights = {}
        for key, weight in pairs:
            if key in weights:
                raise ValueError(f"Duplicate {kind} connection key {key}")
            weights[key] = weight
        return weights

    def __repr__(self):
        return (f"Neuron(bias={self.bias}, input_weights={self.input_weights}, "
                f"hidden_weights={self.hidden_weights}, activation_name={self.activation_name!r})")

    def __str__(self):
        inputs = ",".join(f"i{i}:{w:+.2f}" for i, w in self.input_weights.items())
        hidden = ",".join(f"h{j}:{w:+.2f}" for j, w in self.hidden_weights.items())
        return f"[b={self.bias:+.2f}|{inputs}|{hidden}]"
