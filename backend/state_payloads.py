"""Lightweight data transfer objects for simulation state serialization."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

import orjson

from creatures.body.graph import BodyGraph
from creatures.creature import Creature
from creatures.genetics.genome_codec import body_genome_to_dict, neural_genome_to_dict
from creatures.simulation import Simulation


def body_graph_to_dict(graph: BodyGraph) -> Dict[str, Any]:
    return {
        "node_count": graph.node_count,
        "segment_count": graph.segment_count,
        "nodes": [
            {
                "index": index,
                "x": node.local_position.x,
                "y": node.local_position.y,
                "size": node.size,
            }
            for index, node in enumerate(graph.nodes)
        ],
        "segments": [
            {
                "parent_index": segment.parent_index,
                "child_index": segment.child_index,
                "length": segment.length,
                "width": segment.width,
                "base_angle": segment.base_angle,
                "max_angle": segment.max_angle,
                "osc_speed": segment.osc_speed,
                "forward_ratio": segment.forward_ratio,
                "current_angle": segment.current_angle,
            }
            for segment in graph.segments
        ],
    }


def event_to_dict(event: Any) -> Dict[str, Any]:
    data = asdict(event)
    data["type"] = type(event).__name__
    return data


@dataclass
class CreatureSnapshot:
    """Minimal snapshot of a creature for clients."""

    id: int
    x: float
    y: float
    heading: float
    orientation: float
    energy: float
    age: float
    generation: int
    segment_count: int
    reproduction_ready: bool
    nodes: List[List[float]] = field(default_factory=list)

    @classmethod
    def from_creature(cls, creature: Creature) -> "CreatureSnapshot":
        return cls(
            id=creature.id,
            x=creature.position.x,
            y=creature.position.y,
            heading=creature.heading,
            orientation=creature.orientation,
            energy=creature.energy,
            age=creature.metabolism.age,
            generation=creature.generation,
            segment_count=creature.segment_count,
            reproduction_ready=creature.reproduction_ready,
            nodes=[[node.local_position.x, node.local_position.y] for node in creature.body.nodes],
        )


@dataclass
class SimulationSnapshot:
    """Full state payload for ``GET /api/simulation/state``."""

    frame: int
    time: float
    stats: Dict[str, Any]
    creatures: List[CreatureSnapshot]

    @classmethod
    def from_simulation(cls, simulation: Simulation) -> "SimulationSnapshot":
        return cls(
            frame=simulation.frame,
            time=simulation.time,
            stats=simulation.stats(),
            creatures=[
                CreatureSnapshot.from_creature(creature)
                for creature in simulation.creatures.values()
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


def creature_detail(creature: Creature) -> Dict[str, Any]:
    """Stats plus genomes and current body pose for one creature."""
    detail = creature.stats()
    detail["body_genome"] = body_genome_to_dict(creature.genotype.body)
    detail["brain_genome"] = neural_genome_to_dict(creature.genotype.brain)
    detail["body"] = body_graph_to_dict(creature.body)
    detail["controls"] = list(creature.last_controls)
    return detail
