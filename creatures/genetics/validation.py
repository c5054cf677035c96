"""Validation helpers for genomes.

These functions are debugging and safety aids, not hot-path logic. Genomes
built through their constructors always validate; these checks catch bugs in
code that mutates genome internals directly.
"""

from __future__ import annotations

import math
from typing import List

from creatures.config.genetics import (
    MAX_BASE_ANGLE,
    MAX_BIAS,
    MAX_FORWARD_RATIO,
    MAX_MAX_ANGLE,
    MAX_OSC_SPEED,
    MAX_WEIGHT,
    MIN_BASE_ANGLE,
    MIN_BIAS,
    MIN_FORWARD_RATIO,
    MIN_MAX_ANGLE,
    MIN_OSC_SPEED,
    MIN_WEIGHT,
)
from creatures.genetics.body_genome import BodyGenome
from creatures.genetics.neural_genome import NEATGenome

_BODY_FIELD_RANGES = (
    ("base_angle", MIN_BASE_ANGLE, MAX_BASE_ANGLE),
    ("osc_speed", MIN_OSC_SPEED, MAX_OSC_SPEED),
    ("max_angle", MIN_MAX_ANGLE, MAX_MAX_ANGLE),
    ("forward_ratio", MIN_FORWARD_RATIO, MAX_FORWARD_RATIO),
)


def _check_range(issues: List[str], path: str, value: float, low: float, high: float) -> None:
    if not math.isfinite(float(value)):
        issues.append(f"{path}: not finite ({value})")
    elif value < low or value > high:
        issues.append(f"{path}: {value} not in [{low}, {high}]")


def validate_body_genome(genome: BodyGenome, *, path: str = "body") -> List[str]:
    """Return a list of human-readable issues; empty means valid."""
    issues: List[str] = []
    if genome.node_count == 0:
        issues.append(f"{path}: empty genome")
        return issues

    for i, gene in enumerate(genome):
        gene_path = f"{path}.genes[{i}]"
        if not gene.is_valid_at(i):
            issues.append(f"{gene_path}.parent_index: {gene.parent_index} invalid at position {i}")
        if i == 0:
            if gene.base_angle or gene.osc_speed or gene.max_angle or gene.forward_ratio:
                issues.append(f"{gene_path}: root gene has non-zero motion parameters")
            continue
        for name, low, high in _BODY_FIELD_RANGES:
            _check_range(issues, f"{gene_path}.{name}", getattr(gene, name), low, high)
    return issues


def validate_neural_genome(genome: NEATGenome, *, path: str = "brain") -> List[str]:
    """Return a list of human-readable issues; empty means valid."""
    issues: List[str] = []
    for node_id, node in genome.nodes.items():
        if node_id != node.id:
            issues.append(f"{path}.nodes[{node_id}]: keyed under wrong id {node.id}")
        _check_range(issues, f"{path}.nodes[{node_id}].bias", node.bias, MIN_BIAS, MAX_BIAS)

    seen_innovations = set()
    for i, connection in enumerate(genome.connections):
        conn_path = f"{path}.connections[{i}]"
        if connection.input_id not in genome.nodes:
            issues.append(f"{conn_path}.input_id: {connection.input_id} missing from node set")
        if connection.output_id not in genome.nodes:
            issues.append(f"{conn_path}.output_id: {connection.output_id} missing from node set")
        if connection.innovation in seen_innovations:
            issues.append(f"{conn_path}.innovation: duplicate {connection.innovation}")
        seen_innovations.add(connection.innovation)
        _check_range(issues, f"{conn_path}.weight", connection.weight, MIN_WEIGHT, MAX_WEIGHT)
    return issues
