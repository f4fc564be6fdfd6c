"""
Integration tests for the organism lifecycle.

These tests exercise the package end to end: configuration, assembly,
evaluation, persistence, learning, and the handling of nonviable
(cyclic) organisms by a caller that screens many of them.
"""

import json
import logging
import pytest
from copperhorn import (Config, CycleDetected, Neuron, Organism, OrganismFactory,
                        TopologyError, construct, evaluate, learn)


# ============================================================================
# Helpers
# ============================================================================

def grow_hidden_layer(organism: Organism) -> Organism:
    """
    Insert two hidden neurons between the inputs and the outputs of an
    assembled organism (as an external loader would), returning a new one.
    """
    hidden = {100: Neuron(0.0, {0: 0.5, 1: -0.5}),
              101: Neuron(0.1, {2: 0.7}, {100: 0.3})}
    outputs = []
    for position, neuron in enumerate(organism.outputs):
        outputs.append(Neuron(neuron.bias, neuron.input_weights, {101: 0.4 + position}))
    return construct(hidden, outputs, organism.activation_name)


# ============================================================================
# Tests
# ============================================================================

class TestLifecycle:
    """End-to-end use of the package."""

    def test_assemble_evaluate_learn(self, config, sample_inputs):
        organism = OrganismFactory(config).assemble()
        assert organism.number_outputs == config.num_outputs

        for x in sample_inputs:
            outputs = organism.evaluate(x, num_jobs=config.num_jobs)
            assert len(outputs) == config.num_outputs
            assert all(-1.0 <= y <= 1.0 for y in outputs)   # tanh
            organism.learn(config.learning_rate, x, num_jobs=config.num_jobs)

    def test_config_seed_makes_assembly_reproducible(self, config_file):
        a = OrganismFactory(Config(config_file)).assemble()
        b = OrganismFactory(Config(config_file)).assemble()
        assert a.to_dict() == b.to_dict()

    def test_json_persistence_preserves_behaviour(self, config, rng, sample_inputs, tmp_path):
        organism = grow_hidden_layer(OrganismFactory(config, rng).assemble())
        for x in sample_inputs[:5]:
            learn(organism, config.learning_rate, x)

        path = tmp_path / "organism.json"
        path.write_text(json.dumps(organism.to_dict()))
        restored = Organism.from_dict(json.loads(path.read_text()))

        for x in sample_inputs:
            assert evaluate(restored, x) == evaluate(organism, x)

    def test_serial_and_parallel_learning_agree(self, config, rng, sample_inputs):
        serial = grow_hidden_layer(OrganismFactory(config, rng).assemble())
        parallel = serial.clone()
        for x in sample_inputs:
            learn(serial, config.learning_rate, x)
            learn(parallel, config.learning_rate, x, num_jobs=config.num_jobs)
        assert parallel.to_dict() == serial.to_dict()

    def test_learning_keeps_structure(self, config, rng, sample_inputs):
        organism = grow_hidden_layer(OrganismFactory(config, rng).assemble())
        connections = organism.number_connections
        for x in sample_inputs:
            organism.learn(config.learning_rate, x)
        assert organism.number_connections == connections
        assert sorted(organism.hidden) == [100, 101]

    def test_deep_chain_evaluates(self):
        """A long chain of identity neurons propagates the input unchanged."""
        depth = 20_000
        hidden = {i: Neuron(0.0, {0: 1.0} if i == 0 else {}, {i - 1: 1.0} if i > 0 else {})
                  for i in reversed(range(depth))}
        organism = Organism(hidden, [Neuron(0.0, hidden_weights={depth - 1: 1.0})])
        assert organism.evaluate([0.75]) == pytest.approx([0.75])


class TestNonviableOrganisms:
    """A caller screening organisms treats cycles as nonviable, not fatal."""

    def test_screening_discards_cyclic_organisms(self):
        good = Organism({1: Neuron(0.0, {0: 1.0})}, [Neuron(0.0, hidden_weights={1: 1.0})])
        cyclic = Organism({1: Neuron(0.0, {0: 1.0}, {2: 1.0}), 2: Neuron(0.0, hidden_weights={1: 1.0})},
                          [Neuron(0.0, hidden_weights={1: 1.0})])
        dangling = Organism({1: Neuron(0.0, hidden_weights={5: 1.0})}, [Neuron(0.0)])

        viable = []
        for organism in [good, cyclic, dangling]:
            try:
                organism.evaluate([1.0])
            except TopologyError:
                continue
            viable.append(organism)
        assert viable == [good]

    def test_cycle_is_logged(self, caplog):
        cyclic = Organism({1: Neuron(0.0, hidden_weights={1: 1.0})}, [Neuron(0.0)])
        with caplog.at_level(logging.WARNING, logger="copperhorn"):
            with pytest.raises(CycleDetected):
                cyclic.learn(0.1, [1.0])
        assert "Cycle detected" in caplog.text
