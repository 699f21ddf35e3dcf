"""
Per-node failure containment.

One bad record must never blank a floor: when building or transforming a
single node raises, that node is swapped for a flagged error node and the
rest of the scene carries on.
"""

import logging
from dataclasses import replace
from typing import Callable, Optional

from .grid import default_size, grid_position
from .nodes import Node
from .styles import ERROR_STYLE, Z_ORDER

logger = logging.getLogger(__name__)


def error_node(node_id: str, kind: str, index: int, label: Optional[str] = None,
               reason: str = "") -> Node:
    """A visibly distinct stand-in placed on the fallback grid."""
    if kind not in Z_ORDER:
        kind = "room"
    return Node(
        id=node_id,
        kind=kind,
        label=label or node_id,
        position=grid_position(index, kind),
        size=default_size(kind),
        z_order=Z_ORDER[kind],
        style=dict(ERROR_STYLE),
        properties={"error": reason},
        has_stored_position=False,
        is_error=True,
    )


def guarded(transform: Callable[[Node], Node], node: Node, stage: str) -> Node:
    """
    Apply *transform* to *node*, or flag the node in place if it raises.

    The flagged node keeps its geometry and properties; only its style and
    the ``error`` entry change.
    """
    if node.is_error:
        return node
    try:
        return transform(node)
    except Exception as e:
        logger.exception("%s failed for %s %s", stage, node.kind, node.id)
        return replace(
            node,
            style=dict(ERROR_STYLE),
            properties={**node.properties, "error": f"{stage}: {e}"},
            is_error=True,
        )
