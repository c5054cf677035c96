"""Historical markings for neural genomes.

The registry hands out stable identifiers so that the same structural change
made independently in two genomes gets the same marker. Crossover aligns
connection genes by these markers.

One registry is owned by the ``Simulation`` for the whole evolutionary run.
It is not thread-safe: the simulation is single-threaded, and the backend
serialises access with a lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

from creatures.config.genetics import INITIAL_INNOVATION_NUMBER, INITIAL_NODE_ID

logger = logging.getLogger(__name__)


@dataclass
class InnovationRegistry:
    """Lookup-or-allocate store for connection innovations and node ids.

    Attributes:
        next_innovation: Counter for the next connection innovation number
        next_node_id: Counter for the next hidden node id
    """

    next_innovation: int = INITIAL_INNOVATION_NUMBER
    next_node_id: int = INITIAL_NODE_ID
    _connections: Dict[Tuple[int, int], int] = field(default_factory=dict, repr=False)
    _node_splits: Dict[int, int] = field(default_factory=dict, repr=False)

    def connection_innovation(self, input_id: int, output_id: int) -> int:
        """Return the innovation number for the ``input_id -> output_id`` pair.

        A pair seen before (by any genome) gets its original number back.
        """
        key = (input_id, output_id)
        innovation = self._connections.get(key)
        if innovation is None:
            innovation = self.next_innovation
            self.next_innovation += 1
            self._connections[key] = innovation
        return innovation

    def node_split_id(self, connection_innovation: int) -> int:
        """Return the hidden node id created by splitting a connection."""
        node_id = self._node_splits.get(connection_innovation)
        if node_id is None:
            node_id = self.allocate_node_id()
            self._node_splits[connection_innovation] = node_id
        return node_id

    def allocate_node_id(self) -> int:
        """Allocate a fresh hidden node id not tied to any split."""
        node_id = self.next_node_id
        self.next_node_id += 1
        return node_id

    def reset(self) -> None:
        """Forget all markers. Only valid on an explicit simulation restart."""
        self.next_innovation = INITIAL_INNOVATION_NUMBER
        self.next_node_id = INITIAL_NODE_ID
        self._connections.clear()
        self._node_splits.clear()
        logger.info("Innovation registry reset")

    @property
    def total_connection_innovations(self) -> int:
        return len(self._connections)

    @property
    def total_node_innovations(self) -> int:
        return len(self._node_splits)

    def stats(self) -> Dict[str, int]:
        """Return counters for logging and the API."""
        return {
            "connections": self.total_connection_innovations,
            "node_splits": self.total_node_innovations,
            "next_innovation": self.next_innovation,
            "next_node_id": self.next_node_id,
        }
