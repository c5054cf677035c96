"""Tests for neural genomes and brain generation."""

import pytest

from creatures.config.genetics import BRAIN_INPUTS, INITIAL_INNOVATION_NUMBER, MAX_WEIGHT
from creatures.genetics.neural_genome import (
    ConnectionGene,
    NEATGenome,
    NeuralNodeGene,
    NodeType,
    adjust_output_nodes,
    ensure_non_empty,
    minimal_brain,
    random_brain,
)
from creatures.util.rng import MissingRNGError


def _endpoints_exist(genome: NEATGenome) -> bool:
    return all(
        c.input_id in genome.nodes and c.output_id in genome.nodes for c in genome.connections
    )


class TestNEATGenome:
    def test_with_io_layout(self):
        genome = NEATGenome.with_io(3, 2)
        assert [n.id for n in genome.input_nodes()] == [0, 1, 2]
        assert [n.id for n in genome.output_nodes()] == [3, 4]
        assert genome.connection_count == 0

    def test_dangling_connection_is_refused(self):
        genome = NEATGenome.with_io(1, 1)
        assert not genome.add_connection(ConnectionGene(0, 99, 1.0, 10000))
        assert genome.connection_count == 0

    def test_duplicate_node_is_refused(self):
        genome = NEATGenome([NeuralNodeGene(0, NodeType.INPUT)])
        assert not genome.add_node(NeuralNodeGene(0, NodeType.OUTPUT))
        assert genome.nodes[0].type == NodeType.INPUT

    def test_weights_and_biases_are_clamped(self):
        genome = NEATGenome(
            [NeuralNodeGene(0, NodeType.INPUT), NeuralNodeGene(1, NodeType.OUTPUT, bias=9.0)],
            [ConnectionGene(0, 1, 50.0, 10000)],
        )
        assert genome.nodes[1].bias == 2.0
        assert genome.connections[0].weight == MAX_WEIGHT

    def test_remove_node_drops_its_connections(self):
        genome = NEATGenome.with_io(2, 1)
        genome.add_connection(ConnectionGene(0, 2, 1.0, 10000))
        genome.add_connection(ConnectionGene(1, 2, 1.0, 10001))
        genome.remove_node(1)
        assert [c.innovation for c in genome.connections] == [10000]

    def test_copy_is_independent(self):
        genome = NEATGenome.with_io(1, 1)
        clone = genome.copy()
        clone.add_connection(ConnectionGene(0, 1, 1.0, 10000))
        assert genome.connection_count == 0
        assert clone != genome


class TestRandomBrain:
    def test_requires_rng(self, registry):
        with pytest.raises(MissingRNGError):
            random_brain(3, registry)

    def test_layout(self, registry, seeded_rng):
        brain = random_brain(4, registry, seeded_rng)
        assert len(brain.input_nodes()) == BRAIN_INPUTS
        assert [n.id for n in brain.output_nodes()] == [12, 13, 14, 15]
        assert len(brain.hidden_nodes()) <= 2
        assert _endpoints_exist(brain)

    def test_innovations_shared_across_brains(self, registry, seeded_rng):
        first = random_brain(2, registry, seeded_rng)
        second = random_brain(2, registry, seeded_rng)
        by_pair = {(c.input_id, c.output_id): c.innovation for c in first.connections}
        for connection in second.connections:
            key = (connection.input_id, connection.output_id)
            if key in by_pair:
                assert by_pair[key] == connection.innovation
        assert all(c.innovation >= INITIAL_INNOVATION_NUMBER for c in second.connections)

    def test_hidden_ids_come_from_registry(self, registry, seeded_rng):
        for _ in range(10):
            brain = random_brain(1, registry, seeded_rng)
            assert all(node.id >= 1000 for node in brain.hidden_nodes())


class TestOutputAdjustment:
    def test_minimal_brain(self, registry):
        brain = minimal_brain(registry)
        assert brain.node_count == 2
        assert brain.connections[0].weight == 1.0

    def test_ensure_non_empty_replaces_empty_genome(self, registry):
        assert ensure_non_empty(NEATGenome(), registry).node_count == 2

    def test_ensure_non_empty_keeps_populated_genome(self, registry):
        brain = NEATGenome.with_io(1, 1)
        assert ensure_non_empty(brain, registry) is brain

    def test_surplus_outputs_removed(self, registry, seeded_rng):
        brain = random_brain(3, registry, seeded_rng)
        adjusted = adjust_output_nodes(brain, 1, registry, seeded_rng)
        assert [n.id for n in adjusted.output_nodes()] == [12]
        assert _endpoints_exist(adjusted)
        assert len(brain.output_nodes()) == 3

    def test_missing_outputs_added(self, registry, seeded_rng):
        brain = random_brain(2, registry, seeded_rng)
        adjusted = adjust_output_nodes(brain, 4, registry, seeded_rng)
        assert [n.id for n in adjusted.output_nodes()] == [12, 13, 14, 15]
        assert _endpoints_exist(adjusted)

    def test_exact_count_unchanged(self, registry, seeded_rng):
        brain = random_brain(2, registry, seeded_rng)
        assert adjust_output_nodes(brain, 2, registry, seeded_rng) == brain
