"""Tests for two-parent reproduction."""

import pytest

from creatures.evolution.reproduction import Genotype, ReproductionConfig, reproduce
from creatures.exceptions import ConfigurationError
from creatures.genetics.body_genome import random_body_genome
from creatures.genetics.neural_genome import NEATGenome, random_brain
from creatures.util.rng import MissingRNGError


def _genotype(registry, rng) -> Genotype:
    body = random_body_genome(rng)
    return Genotype(body, random_brain(body.segment_count, registry, rng))


class TestReproduce:
    def test_requires_rng(self, registry, seeded_rng):
        parent = _genotype(registry, seeded_rng)
        with pytest.raises(MissingRNGError):
            reproduce(parent, parent, registry)

    def test_two_offspring_with_matching_outputs(self, registry, seeded_rng):
        for _ in range(25):
            a = _genotype(registry, seeded_rng)
            b = _genotype(registry, seeded_rng)
            offspring = reproduce(a, b, registry, seeded_rng)
            assert len(offspring) == 2
            for child in offspring:
                assert len(child.brain.output_nodes()) == child.segment_count
                assert child.brain.node_count > 0

    def test_parents_unchanged(self, registry, seeded_rng):
        a = _genotype(registry, seeded_rng)
        b = _genotype(registry, seeded_rng)
        brain_a, brain_b = a.brain.copy(), b.brain.copy()
        body_a, body_b = a.body, b.body

        reproduce(a, b, registry, seeded_rng)

        assert a.brain == brain_a and b.brain == brain_b
        assert a.body == body_a and b.body == body_b

    def test_empty_brains_get_minimal_controller(self, registry, seeded_rng):
        body = random_body_genome(seeded_rng, node_count=3)
        parent = Genotype(body, NEATGenome())
        for child in reproduce(parent, parent, registry, seeded_rng):
            assert len(child.brain.output_nodes()) == child.segment_count
            assert child.brain.input_nodes()

    def test_offspring_brains_are_distinct_objects(self, registry, seeded_rng):
        a = _genotype(registry, seeded_rng)
        first, second = reproduce(a, a, registry, seeded_rng)
        assert first.brain is not second.brain
        assert first.brain is not a.brain


def test_reproduction_config_validation():
    ReproductionConfig().validate()
    with pytest.raises(ConfigurationError):
        ReproductionConfig(mating_range=0).validate()
    with pytest.raises(ConfigurationError):
        ReproductionConfig(max_population=0).validate()
