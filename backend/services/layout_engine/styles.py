"""
Presentation hints attached to nodes and edges.

Renderers are free to ignore these; they never influence geometry.
"""

from typing import Optional

# Fill colors by space kind
FILL_COLORS = {
    "room": "#e2e8f0",
    "hallway": "#e5e7eb",
    "door": "#94a3b8",
}

# Border colors by space status
STATUS_COLORS = {
    "active": "#10b981",
    "maintenance": "#f59e0b",
    "inactive": "#ef4444",
    "default": "#6b7280",
}

# Hallways draw below rooms, doors on top
Z_ORDER = {
    "hallway": 0,
    "room": 1,
    "door": 2,
}

ERROR_STYLE = {
    "backgroundColor": "#fee2e2",
    "borderColor": "#dc2626",
    "borderStyle": "dashed",
    "borderWidth": 2,
    "opacity": 1.0,
}

CHILD_ROOM_OPACITY = 0.85

# Stroke by connection type
EDGE_STROKES = {
    "direct": {"stroke": "#64748b", "strokeWidth": 2},
    "door": {"stroke": "#64748b", "strokeWidth": 2},
    "hallway": {"stroke": "#3b82f6", "strokeWidth": 3},
    "transition": {"stroke": "#8b5cf6", "strokeWidth": 2, "strokeDasharray": "6,4"},
    "secured": {"stroke": "#b91c1c", "strokeWidth": 2},
    "emergency": {"stroke": "#ef4444", "strokeWidth": 3, "strokeDasharray": "2,2"},
}


def node_style(kind: str, status: Optional[str]) -> dict:
    return {
        "backgroundColor": FILL_COLORS.get(kind, FILL_COLORS["room"]),
        "borderColor": STATUS_COLORS.get(status or "active", STATUS_COLORS["default"]),
        "borderStyle": "solid",
        "borderWidth": 1,
        "opacity": 1.0,
    }


def child_room_style(style: dict) -> dict:
    """Dashed and slightly transparent, keeping the parent's color family."""
    return {**style, "borderStyle": "dashed", "opacity": CHILD_ROOM_OPACITY}


def edge_style(connection_type: str, status: Optional[str]) -> dict:
    style = dict(EDGE_STROKES.get(connection_type, EDGE_STROKES["direct"]))
    if status == "inactive":
        style.update({"stroke": "#cbd5e1", "strokeDasharray": "4,4", "opacity": 0.6})
    elif status == "maintenance":
        style.update({"stroke": STATUS_COLORS["maintenance"], "strokeDasharray": "8,4"})
    return style
