"""
Copperhorn Assembly Module

This module generates initial organisms: no hidden neurons, and one output
neuron per output slot wired to a random nonempty subset of the inputs.

Classes:
    OrganismFactory: Stateless generator of random initial organisms
"""

import logging
import numpy as np

from copperhorn.graph      import Neuron, Organism
from copperhorn.run.config import Config

logger = logging.getLogger(__name__)

class OrganismFactory:
    """
    Generator of random initial organisms.

    All randomness comes from the numpy Generator handed to the factory, so a
    seeded generator (or a seeded Config) makes assembly reproducible. The
    factory keeps no other state between calls.

    Public Methods:
        assemble(num_inputs, num_outputs): Generate a new Organism
    """

    def __init__(self, config: Config, rng: np.random.Generator | None = None):
        """
        Parameters:
            config: Stores configuration parameters (weight/bias ranges, widths, seed)
            rng:    Source of randomness; if None, one is created from 'config.seed'
        """
        self._config: Config              = config
        self._rng   : np.random.Generator = rng if rng is not None else np.random.default_rng(config.seed)

    def assemble(self, num_inputs: int | None = None, num_outputs: int | None = None) -> Organism:
        """
        Generate an Organism with zero hidden neurons.

        Each output neuron is connected to a random nonempty subset of the input
        indices (subset size uniform in [1, num_inputs], indices drawn without
        replacement). Weights and bias are drawn independently and uniformly from
        the configured ranges.

        Parameters:
            num_inputs:  Width of the input vector  (default: 'config.num_inputs')
            num_outputs: Width of the output vector (default: 'config.num_outputs')

        Returns:
            A new Organism using the configured default activation

        Raises:
            ValueError: If either width is smaller than 1
        """
        num_inputs  = self._config.num_inputs  if num_inputs  is None else num_inputs
        num_outputs = self._config.num_outputs if num_outputs is None else num_outputs
        if num_inputs is None or num_inputs < 1:
            raise ValueError(f"An organism needs at least one input, got {num_inputs}")
        if num_outputs is None or num_outputs < 1:
            raise ValueError(f"An organism needs at least one output, got {num_outputs}")

        config  = self._config
        outputs = []
        for _ in range(num_outputs):
            size    = int(self._rng.integers(1, num_inputs, endpoint=True))
            indices = self._rng.choice(num_inputs, size=size, replace=False)
            weights = self._rng.uniform(config.weight_init_min, config.weight_init_max, size=size)
            bias    = self._rng.uniform(config.bias_init_min, config.bias_init_max)
            outputs.append(Neuron(bias, {int(i): float(w) for i, w in zip(indices, weights)}))

        organism = Organism({}, outputs, config.activation)
        logger.info("Assembled organism with %d inputs, %d outputs and %d connections",
                    num_inputs, num_outputs, organism.number_connections)
        return organism
