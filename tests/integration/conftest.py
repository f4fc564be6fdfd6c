"""
Shared fixtures for integration tests.
"""

import pytest
import numpy as np
from copperhorn.run.config import Config


@pytest.fixture
def rng():
    """Seeded random generator for reproducible assembly."""
    return np.random.default_rng(42)


@pytest.fixture
def config_file(tmp_path):
    """A complete configuration file."""
    path = tmp_path / "organism.ini"
    path.write_text(
        "[ORGANISM]\n"
        "activation = tanh\n"
        "\n"
        "[ASSEMBLY]\n"
        "num_inputs      = 4\n"
        "num_outputs     = 2\n"
        "weight_init_min = -1.0\n"
        "weight_init_max = 1.0\n"
        "bias_init_min   = -0.1\n"
        "bias_init_max   = 0.1\n"
        "seed            = 7\n"
        "\n"
        "[LEARNING]\n"
        "learning_rate = 0.05\n"
        "\n"
        "[EVALUATION]\n"
        "num_jobs = 2\n"
    )
    return str(path)


@pytest.fixture
def config(config_file):
    return Config(config_file)


@pytest.fixture
def sample_inputs(rng):
    """A small stream of input vectors."""
    return rng.uniform(-1.0, 1.0, size=(25, 4))
