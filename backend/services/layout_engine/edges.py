"""
Connection records to typed edges.

Each stored connection links two space ids.  Connections whose endpoints
are missing, or not part of the current scene, are dropped and logged;
the rest of the batch is still processed.
"""

import logging
import math
from typing import Dict, Iterable, List, Optional

from schemas import ConnectionRecord

from .nodes import Edge, Node
from .styles import edge_style

logger = logging.getLogger(__name__)

# Anchor along a hallway's length (0 = start, 1 = end) for named directions
HALLWAY_DIRECTIONS = {
    "start": 0.1,
    "end": 0.9,
    "center": 0.5,
    "left": 0.3,
    "right": 0.7,
}

DEFAULT_HALLWAY_POSITION = 0.5


def hallway_anchor(direction: Optional[str], hallway_position: Optional[float]) -> float:
    """
    A named direction always wins over the stored numeric anchor.

    Numeric anchors are clamped to ``[0, 1]``; missing or non-finite ones
    default to the hallway's midpoint.
    """
    if direction in HALLWAY_DIRECTIONS:
        return HALLWAY_DIRECTIONS[direction]
    if hallway_position is None or not math.isfinite(hallway_position):
        return DEFAULT_HALLWAY_POSITION
    return min(max(float(hallway_position), 0.0), 1.0)


def _is_hallway_flavored(record: ConnectionRecord, source: Node, target: Node) -> bool:
    return (
        record.connection_type == "hallway"
        or source.kind == "hallway"
        or target.kind == "hallway"
        or record.direction in HALLWAY_DIRECTIONS
    )


def derive_edge(record: ConnectionRecord, source: Node, target: Node) -> Edge:
    """Build one edge from a connection whose endpoints are both resolved."""
    connection_type = record.connection_type or "direct"
    return Edge(
        id=record.id or f"{record.from_id}-{record.to_id}",
        source=source.id,
        target=target.id,
        connection_type=connection_type,
        direction=record.direction,
        is_transition=connection_type == "transition" or bool(record.is_transition),
        is_secured=connection_type == "secured" or bool(record.is_secured),
        hallway_position=hallway_anchor(record.direction, record.hallway_position),
        offset_distance=record.offset_distance,
        shape="elbow" if _is_hallway_flavored(record, source, target) else "straight",
        style=edge_style(connection_type, record.status),
        is_active=record.status in (None, "active"),
    )


def derive_edges(connections: Iterable[ConnectionRecord], nodes: List[Node]) -> List[Edge]:
    """
    Convert connection records into edges between nodes of this scene.

    Parameters
    ----------
    connections : iterable of ConnectionRecord
        Raw connections for the floor.
    nodes : list[Node]
        The scene's nodes; every returned edge references two of them.
    """
    by_id: Dict[str, Node] = {n.id: n for n in nodes}
    edges: List[Edge] = []

    for record in connections:
        if not record.from_id or not record.to_id:
            logger.warning("Dropping connection %s: missing endpoint", record.id)
            continue
        source = by_id.get(record.from_id)
        target = by_id.get(record.to_id)
        if source is None or target is None:
            logger.warning(
                "Dropping connection %s: unresolved endpoint (%s -> %s)",
                record.id, record.from_id, record.to_id,
            )
            continue
        edges.append(derive_edge(record, source, target))

    return edges


def connection_map(edges: Iterable[Edge]) -> Dict[str, List[str]]:
    """Distinct neighbour ids per node id, in edge order, both directions."""
    neighbours: Dict[str, List[str]] = {}
    for e in edges:
        for a, b in ((e.source, e.target), (e.target, e.source)):
            linked = neighbours.setdefault(a, [])
            if b not in linked:
                linked.append(b)
    return neighbours
