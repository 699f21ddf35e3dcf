"""
Parent/child room nesting.

A room that names a parent room is drawn inside it: offset from the
parent's corner, shrunk, dashed, and stacked one level above.  Parents are
always read from the pre-transform snapshot, so a child never sees another
child's already-nested geometry.
"""

import logging
from dataclasses import replace
from typing import Dict, List

from .fallback import guarded
from .nodes import Node, Position, Size
from .styles import child_room_style

logger = logging.getLogger(__name__)

CHILD_OFFSET = (50, 50)
CHILD_SCALE = 0.7
CHILD_MIN_SIZE = (100, 80)


def nest_in_parent(child: Node, parent: Node) -> Node:
    """Return *child* repositioned and resized relative to *parent*."""
    return replace(
        child,
        position=Position(
            parent.position.x + CHILD_OFFSET[0],
            parent.position.y + CHILD_OFFSET[1],
        ),
        size=Size(
            max(parent.size.width * CHILD_SCALE, CHILD_MIN_SIZE[0]),
            max(parent.size.height * CHILD_SCALE, CHILD_MIN_SIZE[1]),
        ),
        style=child_room_style(child.style),
        z_order=parent.z_order + 1,
        properties={**child.properties, "is_child_room": True},
    )


def apply_parent_child(nodes: List[Node]) -> List[Node]:
    snapshot: Dict[str, Node] = {n.id: n for n in nodes}
    result = []

    for node in nodes:
        parent_id = node.properties.get("parent_room_id")
        if node.kind != "room" or not parent_id:
            result.append(node)
            continue

        parent = snapshot.get(parent_id)
        if parent is None or parent.id == node.id:
            logger.debug("Room %s: parent %s not on this floor", node.id, parent_id)
            result.append(node)
            continue

        result.append(guarded(lambda n: nest_in_parent(n, parent), node, "nesting"))

    return result
