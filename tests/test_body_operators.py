"""Tests for body mutation and crossover."""

import pytest

from creatures.evolution.body_crossover import choose_cut_points, crossover_body
from creatures.evolution.body_mutation import (
    BodyMutationConfig,
    mutate_body,
    remove_gene,
)
from creatures.exceptions import ConfigurationError
from creatures.genetics.body_genome import (
    BodyGenome,
    NodeGene,
    minimal_body_genome,
    random_body_genome,
)
from creatures.util.rng import MissingRNGError

FROZEN = BodyMutationConfig(mutation_rate=0.0, structural_rate=0.0)


def _is_sequential(genome: BodyGenome) -> bool:
    return all(gene.is_valid_at(i) for i, gene in enumerate(genome))


class TestRemoveGene:
    def test_children_reparented_and_indices_shifted(self):
        genes = [
            NodeGene.root(),
            NodeGene(0),
            NodeGene(1),
            NodeGene(2),
            NodeGene(0),
        ]
        result = remove_gene(genes, 2)
        assert [gene.parent_index for gene in result] == [-1, 0, 1, 0]

    def test_later_parents_decremented(self):
        genes = [NodeGene.root(), NodeGene(0), NodeGene(0), NodeGene(2), NodeGene(3)]
        result = remove_gene(genes, 1)
        assert [gene.parent_index for gene in result] == [-1, 0, 1, 2]

    @pytest.mark.parametrize("index", [0, 5, -1])
    def test_invalid_index(self, index):
        genes = [NodeGene.root(), NodeGene(0), NodeGene(1), NodeGene(2), NodeGene(0)]
        with pytest.raises(IndexError):
            remove_gene(genes, index)


class TestMutateBody:
    def test_requires_rng(self, reference_genome):
        with pytest.raises(MissingRNGError):
            mutate_body(reference_genome)

    def test_zero_rates_leave_genome_unchanged(self, reference_genome, seeded_rng):
        assert mutate_body(reference_genome, seeded_rng, FROZEN) == reference_genome

    def test_full_rate_changes_fields_within_bounds(self, reference_genome, seeded_rng):
        config = BodyMutationConfig(mutation_rate=1.0, structural_rate=0.0)
        mutated = mutate_body(reference_genome, seeded_rng, config)
        assert mutated != reference_genome
        assert mutated.root == NodeGene.root()
        for gene in mutated.genes[1:]:
            assert 0.0 <= gene.base_angle <= 360.0
            assert 0.5 <= gene.osc_speed <= 8.0
            assert 0.01 <= gene.forward_ratio <= 0.99

    def test_structural_add(self, reference_genome, seeded_rng):
        config = BodyMutationConfig(
            mutation_rate=0.0, structural_rate=1.0, min_nodes=20, max_nodes=20
        )
        mutated = mutate_body(reference_genome, seeded_rng, config)
        assert mutated.node_count == reference_genome.node_count + 1
        assert mutated.genes[:5] == reference_genome.genes

    def test_structural_remove(self, reference_genome, seeded_rng):
        config = BodyMutationConfig(
            mutation_rate=0.0, structural_rate=1.0, min_nodes=2, max_nodes=5
        )
        mutated = mutate_body(reference_genome, seeded_rng, config)
        assert mutated.node_count == reference_genome.node_count - 1
        assert _is_sequential(mutated)

    def test_node_bounds_respected_over_many_generations(self, seeded_rng):
        config = BodyMutationConfig(structural_rate=0.5)
        genome = random_body_genome(seeded_rng)
        for _ in range(200):
            genome = mutate_body(genome, seeded_rng, config)
            assert config.min_nodes <= genome.node_count <= config.max_nodes
            assert _is_sequential(genome)

    def test_source_not_modified(self, reference_genome, seeded_rng):
        before = reference_genome.genes
        mutate_body(reference_genome, seeded_rng, BodyMutationConfig(mutation_rate=1.0))
        assert reference_genome.genes == before

    def test_config_validation(self):
        with pytest.raises(ConfigurationError):
            BodyMutationConfig(mutation_rate=1.5).validate()
        with pytest.raises(ConfigurationError):
            BodyMutationConfig(min_nodes=5, max_nodes=3).validate()


class TestChooseCutPoints:
    def test_short_parent_has_no_cuts(self, seeded_rng):
        assert choose_cut_points(2, seeded_rng) == []
        assert choose_cut_points(1, seeded_rng) == []

    def test_cuts_sorted_unique_and_in_range(self, seeded_rng):
        for _ in range(100):
            cuts = choose_cut_points(10, seeded_rng)
            assert 1 <= len(cuts) <= 3
            assert cuts == sorted(set(cuts))
            assert all(2 <= cut <= 9 for cut in cuts)

    def test_three_nodes_allows_single_cut(self, seeded_rng):
        assert choose_cut_points(3, seeded_rng) == [2]


class TestCrossoverBody:
    def test_requires_rng(self, reference_genome):
        with pytest.raises(MissingRNGError):
            crossover_body(reference_genome, reference_genome)

    def test_identical_parents_give_identical_child(self, reference_genome, seeded_rng):
        child = crossover_body(reference_genome, reference_genome, seeded_rng, mutate=False)
        assert child == reference_genome

    def test_short_parents_copy_first_parent(self, seeded_rng):
        other = BodyGenome([NodeGene.root(), NodeGene(0, 90.0, 5.0, -30.0, 0.7)])
        child = crossover_body(minimal_body_genome(), other, seeded_rng, mutate=False)
        assert child == minimal_body_genome()

    def test_genes_come_from_either_parent_at_same_index(self, seeded_rng):
        for _ in range(50):
            a = random_body_genome(seeded_rng)
            b = random_body_genome(seeded_rng)
            child = crossover_body(a, b, seeded_rng, mutate=False)

            assert child.node_count in (a.node_count, b.node_count)
            assert child.node_count >= min(a.node_count, b.node_count)
            for index, gene in enumerate(child):
                candidates = [p[index] for p in (a, b) if index < len(p)]
                assert gene in candidates
            assert _is_sequential(child)

    def test_parents_unchanged(self, seeded_rng):
        a = random_body_genome(seeded_rng)
        b = random_body_genome(seeded_rng)
        genes_a, genes_b = a.genes, b.genes
        crossover_body(a, b, seeded_rng)
        assert a.genes == genes_a
        assert b.genes == genes_b

    def test_mutation_applied_by_default(self, reference_genome, seeded_rng):
        config = BodyMutationConfig(mutation_rate=1.0, structural_rate=0.0)
        child = crossover_body(reference_genome, reference_genome, seeded_rng, config=config)
        assert child != reference_genome
