"""Genome serialization/deserialization helpers.

This module is the persistence/transfer boundary for body and neural genomes.
Keeping codecs separate from the domain model keeps the genome classes free of
format concerns. Decoding goes through the sanitizers and then the genome
constructors, so any payload yields a valid (repaired) genome.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from creatures.exceptions import GeneticsError
from creatures.genetics.body_genome import BodyGenome, NodeGene
from creatures.genetics.neural_genome import (
    ConnectionGene,
    NEATGenome,
    NeuralNodeGene,
    NodeType,
)
from creatures.genetics.sanitization import (
    MAX_CONNECTIONS,
    MAX_GENES,
    MAX_NEURAL_NODES,
    sanitize_bool,
    sanitize_float,
    sanitize_int,
    sanitize_list,
)

logger = logging.getLogger(__name__)

GENOME_SCHEMA_VERSION = 1

_GENE_FIELDS = ("parent_index", "base_angle", "osc_speed", "max_angle", "forward_ratio")
_NODE_TYPE_NAMES = {node_type.name.lower(): node_type for node_type in NodeType}


def body_genome_to_dict(genome: BodyGenome) -> Dict[str, Any]:
    """Serialize a body genome into JSON-compatible primitives."""
    return {
        "schema_version": GENOME_SCHEMA_VERSION,
        "genes": [
            {
                "parent_index": gene.parent_index,
                "base_angle": gene.base_angle,
                "osc_speed": gene.osc_speed,
                "max_angle": gene.max_angle,
                "forward_ratio": gene.forward_ratio,
            }
            for gene in genome
        ],
    }


def body_genome_from_dict(data: Any) -> BodyGenome:
    """Deserialize a body genome. Unknown fields are ignored."""
    if not isinstance(data, dict):
        raise GeneticsError(f"Body genome payload must be an object, got {type(data).__name__}")
    _check_schema(data)

    genes = []
    for raw in sanitize_list(data.get("genes"), MAX_GENES):
        if isinstance(raw, (list, tuple)) and len(raw) == 5:
            raw = dict(zip(_GENE_FIELDS, raw))
        if not isinstance(raw, dict):
            logger.debug("Skipping malformed body gene %r", raw)
            continue
        genes.append(
            NodeGene(
                parent_index=sanitize_int(raw.get("parent_index"), default=-2),
                base_angle=sanitize_float(raw.get("base_angle")),
                osc_speed=sanitize_float(raw.get("osc_speed")),
                max_angle=sanitize_float(raw.get("max_angle")),
                forward_ratio=sanitize_float(raw.get("forward_ratio"), default=0.5),
            )
        )
    return BodyGenome(genes)


def neural_genome_to_dict(genome: NEATGenome) -> Dict[str, Any]:
    """Serialize a neural genome into JSON-compatible primitives."""
    return {
        "schema_version": GENOME_SCHEMA_VERSION,
        "nodes": [
            {"id": node.id, "type": node.type.name.lower(), "bias": node.bias}
            for node in genome.nodes.values()
        ],
        "connections": [
            {
                "input_id": c.input_id,
                "output_id": c.output_id,
                "weight": c.weight,
                "enabled": c.enabled,
                "innovation": c.innovation,
            }
            for c in genome.connections
        ],
    }


def neural_genome_from_dict(data: Any) -> NEATGenome:
    """Deserialize a neural genome.

    Nodes with an unknown type are skipped; connections whose endpoints are
    missing are dropped by ``NEATGenome.add_connection``.
    """
    if not isinstance(data, dict):
        raise GeneticsError(f"Neural genome payload must be an object, got {type(data).__name__}")
    _check_schema(data)

    genome = NEATGenome()
    for raw in sanitize_list(data.get("nodes"), MAX_NEURAL_NODES):
        if not isinstance(raw, dict):
            continue
        node_type = _parse_node_type(raw.get("type"))
        if node_type is None:
            logger.debug("Skipping neural node with unknown type %r", raw.get("type"))
            continue
        genome.add_node(
            NeuralNodeGene(
                id=sanitize_int(raw.get("id"), default=-1),
                type=node_type,
                bias=sanitize_float(raw.get("bias")),
            )
        )

    for raw in sanitize_list(data.get("connections"), MAX_CONNECTIONS):
        if not isinstance(raw, dict):
            continue
        added = genome.add_connection(
            ConnectionGene(
                input_id=sanitize_int(raw.get("input_id"), default=-1),
                output_id=sanitize_int(raw.get("output_id"), default=-1),
                weight=sanitize_float(raw.get("weight")),
                innovation=sanitize_int(raw.get("innovation"), default=-1),
                enabled=sanitize_bool(raw.get("enabled")),
            )
        )
        if not added:
            logger.debug("Dropping dangling connection %r", raw)
    return genome


def _parse_node_type(value: Any):
    if isinstance(value, str):
        return _NODE_TYPE_NAMES.get(value.lower())
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return NodeType(value)
        except ValueError:
            return None
    return None


def _check_schema(data: Dict[str, Any]) -> None:
    version = data.get("schema_version", GENOME_SCHEMA_VERSION)
    if version != GENOME_SCHEMA_VERSION:
        raise GeneticsError(
            f"Unsupported genome schema_version {version!r} (expected {GENOME_SCHEMA_VERSION})"
        )
