"""Body graph model and the genome-to-graph builder."""

from creatures.body.builder import build_body
from creatures.body.graph import BodyGraph, Node, Segment

__all__ = ["build_body", "BodyGraph", "Node", "Segment"]
