"""Tests for expanding body genomes into body graphs."""

import pytest

from creatures.body.builder import build_body
from creatures.genetics.body_genome import BodyGenome


class TestBuildBody:
    def test_reference_counts(self, reference_genome):
        graph = build_body(reference_genome)
        assert graph.node_count == 5
        assert graph.segment_count == 4

    def test_reference_positions(self, reference_genome):
        graph = build_body(reference_genome)
        positions = graph.positions()

        assert positions[0].to_tuple() == (0.0, 0.0)
        assert positions[1].x == pytest.approx(2.0)
        assert positions[1].y == pytest.approx(0.0, abs=1e-9)
        assert positions[2].x == pytest.approx(-1.0)
        assert positions[2].y == pytest.approx(1.7320508, rel=1e-6)
        assert positions[3].x == pytest.approx(2.0 + 2**0.5)
        assert positions[3].y == pytest.approx(2**0.5)
        assert positions[4].x == pytest.approx(-3.0)
        assert positions[4].y == pytest.approx(1.7320508, rel=1e-6)

    def test_segments_follow_gene_order(self, reference_genome):
        graph = build_body(reference_genome)
        assert [(s.parent_index, s.child_index) for s in graph.segments] == [
            (0, 1),
            (0, 2),
            (1, 3),
            (2, 4),
        ]
        assert graph.segments[2].osc_speed == 4.0
        assert graph.segments[3].max_angle == 120.0

    def test_segment_length_is_configurable(self, reference_genome):
        graph = build_body(reference_genome, segment_length=5.0)
        assert graph.nodes[1].local_position.x == pytest.approx(5.0)
        assert all(s.length == 5.0 for s in graph.segments)

    def test_incoming_segment_lookup(self, reference_genome):
        graph = build_body(reference_genome)
        assert graph.incoming_segment(0) is None
        assert graph.incoming_segment(3).parent_index == 1

    def test_single_root_has_no_segments(self):
        graph = build_body(BodyGenome([]))
        assert graph.node_count == 1
        assert graph.segments == []

    def test_previous_positions_start_equal(self, reference_genome):
        graph = build_body(reference_genome)
        for node in graph.nodes:
            assert node.position_delta.length() == 0.0
