"""
Scene graph value types: positions, sizes, nodes, edges and the scene.

Positions are the top-left corner of a node's box, in layout units.
Transforms never mutate a node in place; they return copies built with
``dataclasses.replace``.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass(frozen=True)
class Position:
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}


@dataclass
class Node:
    """A positioned, sized and styled room, hallway or door."""

    id: str
    kind: str                     # "room" | "hallway" | "door"
    label: str
    position: Position
    size: Size
    rotation: float = 0.0
    z_order: int = 0
    style: dict = field(default_factory=dict)
    properties: dict = field(default_factory=dict)
    has_stored_position: bool = True
    is_error: bool = False

    def moved_to(self, position: Position) -> "Node":
        return replace(self, position=position)

    def to_dict(self) -> dict:
        """Serialize node to the renderer-facing dictionary."""
        return {
            "id": self.id,
            "type": self.kind,
            "label": self.label,
            "position": self.position.to_dict(),
            "size": self.size.to_dict(),
            "rotation": self.rotation,
            "z_order": self.z_order,
            "style": dict(self.style),
            "properties": dict(self.properties),
            "has_stored_position": self.has_stored_position,
            "is_error": self.is_error,
        }

    def __repr__(self) -> str:
        return (
            f"Node(id={self.id!r}, kind={self.kind}, "
            f"pos=({self.position.x:.1f},{self.position.y:.1f}), "
            f"size=({self.size.width:.1f}x{self.size.height:.1f}))"
        )


@dataclass
class Edge:
    """A derived connection between two nodes of the same scene."""

    id: str
    source: str
    target: str
    connection_type: str = "direct"
    direction: Optional[str] = None
    is_transition: bool = False
    is_secured: bool = False
    hallway_position: float = 0.5
    offset_distance: Optional[float] = None
    shape: str = "straight"       # "straight" | "elbow"
    style: dict = field(default_factory=dict)
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "connection_type": self.connection_type,
            "direction": self.direction,
            "is_transition": self.is_transition,
            "is_secured": self.is_secured,
            "hallway_position": self.hallway_position,
            "offset_distance": self.offset_distance,
            "shape": self.shape,
            "style": dict(self.style),
            "is_active": self.is_active,
        }


@dataclass
class Scene:
    """The ``{nodes, edges}`` graph handed to the 2D and 3D renderers."""

    nodes: List[Node] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    selected_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "selected_id": self.selected_id,
        }
