"""
Scene assembly: public API of the layout engine.

Coordinates geometry parsing, grid fallback, edge derivation, nesting,
hallway sizing, smart layout and origin centring into one stateless pass
over a floor's records.  Never raises: bad records become error nodes,
dangling connections are dropped.
"""

import logging
import math
from dataclasses import replace
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from schemas import ConnectionRecord, RoomRecord

from .edges import connection_map, derive_edges
from .fallback import error_node
from .geometry import parse_position, parse_size
from .grid import DEFAULT_GRID_POLICY, GridPolicy, default_size, grid_position
from .hallways import size_hallways
from .nesting import apply_parent_child
from .nodes import Edge, Node, Scene
from .smart_layout import (
    LayoutConfig,
    apply_smart_layout,
    needs_auto_layout,
    normalize_to_origin,
    resolve_collisions,
)
from .styles import Z_ORDER, node_style

logger = logging.getLogger(__name__)

DEFAULT_LABELS = {
    "hallway": "Hallway",
    "door": "Door",
}


def _label(record) -> str:
    if isinstance(record, RoomRecord):
        return record.name or record.room_number or "Unnamed Room"
    return record.name or DEFAULT_LABELS.get(record.type, record.id)


def _properties(record, width: float, height: float) -> dict:
    props = {**(record.properties or {}), "status": record.status or "active"}
    if isinstance(record, RoomRecord):
        props["room_number"] = record.room_number
        props["room_type"] = record.room_type
        if record.parent_room_id:
            props["parent_room_id"] = record.parent_room_id
    elif record.type == "hallway":
        props["orientation"] = "horizontal" if width > height else "vertical"
    return props


def build_node(record, fallback_index: int, policy: GridPolicy = DEFAULT_GRID_POLICY) -> Node:
    """
    Turn one space record into a node.

    *fallback_index* is the grid slot to use if the record has no usable
    stored position.
    """
    kind = record.type
    stored = parse_position(record.position, None)
    position = stored if stored is not None else grid_position(fallback_index, kind, policy)
    size = parse_size(record.size, default_size(kind))

    rotation = record.rotation
    if rotation is None or not math.isfinite(rotation):
        rotation = 0.0

    return Node(
        id=record.id,
        kind=kind,
        label=_label(record),
        position=position,
        size=size,
        rotation=rotation,
        z_order=Z_ORDER.get(kind, Z_ORDER["room"]),
        style=node_style(kind, record.status),
        properties=_properties(record, size.width, size.height),
        has_stored_position=stored is not None,
    )


def build_nodes(spaces: Iterable, policy: GridPolicy = DEFAULT_GRID_POLICY) -> List[Node]:
    """
    Build the floor's node list in record order.

    Records lacking a valid position take consecutive grid slots.  A
    duplicate id keeps its first record.
    """
    nodes: List[Node] = []
    seen = set()
    fallback_index = 0

    for record in spaces:
        if record.id in seen:
            logger.warning("Skipping duplicate space id %s", record.id)
            continue
        seen.add(record.id)

        try:
            node = build_node(record, fallback_index, policy)
        except Exception as e:
            logger.exception("Could not build node for %s %s", record.type, record.id)
            node = error_node(record.id, record.type, fallback_index,
                              getattr(record, "name", None), reason=f"build: {e}")

        if not node.has_stored_position:
            fallback_index += 1
        nodes.append(node)

    return nodes


def enrich_properties(nodes: List[Node], edges: List[Edge],
                      lighting: Optional[Mapping[str, dict]] = None) -> List[Node]:
    """Attach ``connected_spaces`` and any lighting summary to each node."""
    neighbours = connection_map(edges)
    lighting = lighting or {}
    result = []
    for node in nodes:
        props = {**node.properties, "connected_spaces": neighbours.get(node.id, [])}
        props.update(lighting.get(node.id) or {})
        result.append(replace(node, properties=props))
    return result


def assemble_scene(
    spaces: Sequence,
    connections: Sequence[ConnectionRecord] = (),
    lighting: Optional[Mapping[str, dict]] = None,
    *,
    target: str = "2d",
    selected_id: Optional[str] = None,
    grid_policy: Optional[GridPolicy] = None,
    layout_config: Optional[Union[LayoutConfig, dict]] = None,
) -> Scene:
    """
    Build the complete scene graph for one floor.

    Parameters
    ----------
    spaces : list[SpaceRecord]
        Rooms, hallways and doors of the floor, in fetch order.
    connections : list[ConnectionRecord]
        Stored connections between spaces.
    lighting : dict, optional
        ``{space_id: summary}``; merged into node properties verbatim.
    target : str
        ``"2d"`` or ``"3d"``.  A 3D scene is recentred on the origin.
    selected_id : str, optional
        Current selection; returned only if it still names a node or edge.
    grid_policy : GridPolicy, optional
        Fallback grid for spaces without a stored position.
    layout_config : LayoutConfig or dict, optional
        Settings for the smart layout pass.
    """
    nodes = build_nodes(spaces, grid_policy or DEFAULT_GRID_POLICY)
    auto_layout = needs_auto_layout(nodes)

    edges = derive_edges(connections, nodes)
    nodes = enrich_properties(nodes, edges, lighting)
    nodes = apply_parent_child(nodes)
    nodes = size_hallways(nodes, edges)

    if auto_layout:
        logger.info("Most spaces lack a stored position, applying smart layout")
        nodes = resolve_collisions(apply_smart_layout(nodes, layout_config))

    if target == "3d":
        nodes = normalize_to_origin(nodes)

    known_ids = {n.id for n in nodes} | {e.id for e in edges}
    if selected_id not in known_ids:
        selected_id = None

    logger.info(
        "Assembled %s scene: %d nodes (%d errors), %d edges",
        target, len(nodes), sum(1 for n in nodes if n.is_error), len(edges),
    )
    return Scene(nodes=nodes, edges=edges, selected_id=selected_id)
