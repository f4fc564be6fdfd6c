"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture
def scenario_a_organism():
    """No hidden neurons, one output neuron: bias 0.1, input{0: 0.5}."""
    from copperhorn.graph import Neuron, Organism
    return Organism({}, [Neuron(0.1, {0: 0.5})])


@pytest.fixture
def scenario_b_organism():
    """Hidden H1 (bias 0, input{0: 1.0}) feeding output O1 (bias 0, hidden{H1: 2.0})."""
    from copperhorn.graph import Neuron, Organism
    return Organism({1: Neuron(0.0, {0: 1.0})},
                    [Neuron(0.0, hidden_weights={1: 2.0})])


@pytest.fixture
def cyclic_organism():
    """H1 depends on H2 and H2 depends on H1."""
    from copperhorn.graph import Neuron, Organism
    return Organism({1: Neuron(0.0, {0: 1.0}, {2: 0.5}),
                     2: Neuron(0.0, {0: 1.0}, {1: 0.5})},
                    [Neuron(0.0, hidden_weights={1: 1.0, 2: 1.0})])
