"""
Box overlap and bounds utilities.

Every node is treated as its axis-aligned box (position + size).  Boxes
that only share an edge or a corner do not overlap.
"""

from typing import List, Sequence, Tuple

from shapely.geometry import MultiPoint, Polygon, box

from .nodes import Node


def node_box(node: Node) -> Polygon:
    """Node footprint as a Shapely box."""
    x, y = node.position.x, node.position.y
    return box(x, y, x + node.size.width, y + node.size.height)


def detect_overlaps(nodes: Sequence[Node]) -> List[Tuple[int, int]]:
    """
    Return a list of (i, j) index pairs for nodes that overlap.

    Parameters
    ----------
    nodes : list[Node]
        Nodes to check, in scene order.
    """
    boxes = [node_box(n) for n in nodes]
    overlaps = []
    for i in range(len(boxes)):
        for j in range(i + 1, len(boxes)):
            if boxes[i].intersection(boxes[j]).area > 0:
                overlaps.append((i, j))
    return overlaps


def scene_bounds(nodes: Sequence[Node]) -> Tuple[float, float, float, float]:
    """``(minx, miny, maxx, maxy)`` over every node's box, size included."""
    corners = []
    for n in nodes:
        corners.append((n.position.x, n.position.y))
        corners.append((n.position.x + n.size.width, n.position.y + n.size.height))
    return MultiPoint(corners).bounds
