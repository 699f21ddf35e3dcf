"""
Hallway shape inference.

A hallway stretched between the rooms it connects reads better than one
drawn at its stored size.  For every hallway with at least two distinct
connected rooms, its box is recomputed from the span of those rooms:
the longer axis of the span decides orientation, the hallway is centred on
the span's midpoint along that axis, and its cross-axis coordinate is kept.
"""

from dataclasses import replace
from typing import Dict, List

from .fallback import guarded
from .nodes import Edge, Node, Position, Size

HALLWAY_THICKNESS = 50
HALLWAY_MIN_LENGTH = 300
HALLWAY_END_MARGIN = 200


def connected_rooms(hallway: Node, edges: List[Edge], by_id: Dict[str, Node]) -> List[Node]:
    """Distinct room nodes on the far side of the hallway's edges."""
    rooms: List[Node] = []
    seen = set()
    for e in edges:
        if e.source == hallway.id:
            other_id = e.target
        elif e.target == hallway.id:
            other_id = e.source
        else:
            continue
        other = by_id.get(other_id)
        if other is None or other.kind != "room" or other.id in seen:
            continue
        seen.add(other.id)
        rooms.append(other)
    return rooms


def fit_hallway(hallway: Node, rooms: List[Node]) -> Node:
    """Resize and reposition *hallway* to span *rooms* (two or more)."""
    xs = [r.position.x for r in rooms]
    ys = [r.position.y for r in rooms]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    x_span, y_span = max_x - min_x, max_y - min_y

    if x_span > y_span:
        width = max(x_span + HALLWAY_END_MARGIN, HALLWAY_MIN_LENGTH)
        return replace(
            hallway,
            size=Size(width, HALLWAY_THICKNESS),
            position=Position((min_x + max_x) / 2 - width / 2, hallway.position.y),
            rotation=0,
            properties={**hallway.properties, "orientation": "horizontal"},
        )

    height = max(y_span + HALLWAY_END_MARGIN, HALLWAY_MIN_LENGTH)
    return replace(
        hallway,
        size=Size(HALLWAY_THICKNESS, height),
        position=Position(hallway.position.x, (min_y + max_y) / 2 - height / 2),
        rotation=90,
        properties={**hallway.properties, "orientation": "vertical"},
    )


def size_hallways(nodes: List[Node], edges: List[Edge]) -> List[Node]:
    """
    Recompute every connected hallway's box; everything else passes through.

    Hallways with fewer than two distinct connected rooms are left exactly
    as they were.
    """
    snapshot: Dict[str, Node] = {n.id: n for n in nodes}
    result = []

    for node in nodes:
        if node.kind != "hallway":
            result.append(node)
            continue
        rooms = connected_rooms(node, edges, snapshot)
        if len(rooms) < 2:
            result.append(node)
            continue
        result.append(guarded(lambda n: fit_hallway(n, rooms), node, "hallway sizing"))

    return result
