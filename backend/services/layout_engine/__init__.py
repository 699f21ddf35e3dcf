"""
Layout Engine for Floor Plan Scenes.

Turns stored space and connection records (with missing, malformed or
colliding geometry) into a consistent ``{nodes, edges}`` scene graph for
the 2D diagram and 3D renderers.  Overlap tests use Shapely boxes.
"""

from .nodes import Position, Size, Node, Edge, Scene
from .geometry import parse_position, parse_size
from .grid import GridPolicy, DEFAULT_SIZES, grid_position
from .edges import HALLWAY_DIRECTIONS, derive_edges
from .nesting import apply_parent_child
from .hallways import size_hallways
from .smart_layout import (
    LayoutConfig,
    apply_smart_layout,
    has_overlap,
    needs_auto_layout,
    normalize_to_origin,
    resolve_collisions,
)
from .scene import assemble_scene, build_nodes

__all__ = [
    "Position",
    "Size",
    "Node",
    "Edge",
    "Scene",
    "parse_position",
    "parse_size",
    "GridPolicy",
    "DEFAULT_SIZES",
    "grid_position",
    "HALLWAY_DIRECTIONS",
    "derive_edges",
    "apply_parent_child",
    "size_hallways",
    "LayoutConfig",
    "apply_smart_layout",
    "has_overlap",
    "needs_auto_layout",
    "normalize_to_origin",
    "resolve_collisions",
    "assemble_scene",
    "build_nodes",
]
