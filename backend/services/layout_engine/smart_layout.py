"""
Fallback ("smart") layout, collision resolution and origin centring.

Used when most of a floor has no real stored geometry:

  1. Hallways are laid out first as the spine of the floor
  2. Rooms fill a grid split above and below the spine
  3. Doors are lined up in a row beneath everything
  4. ``resolve_collisions`` then pushes apart whatever still overlaps

``normalize_to_origin`` is independent of the above and recentres a scene
for the 3D renderer.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import List, Optional, Sequence, Union

from config import COLLISION_MAX_ITERATIONS

from .geometry_utils import detect_overlaps, scene_bounds
from .nodes import Node, Position, Size

# Extra separation added to every push, on top of half the overlap
COLLISION_MARGIN = 10


@dataclass(frozen=True)
class LayoutConfig:
    grid_spacing: float = 50
    hallway_width: float = 60
    hallway_length: float = 600
    room_width: float = 150
    room_height: float = 120
    door_width: float = 40
    door_height: float = 15
    padding: float = 100
    columns_per_row: int = 4

    @classmethod
    def from_overrides(cls, overrides: Optional[Union["LayoutConfig", dict]]) -> "LayoutConfig":
        if overrides is None:
            return cls()
        if isinstance(overrides, cls):
            return overrides
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in overrides.items() if k in known})


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def is_valid_position(position: Optional[Position]) -> bool:
    """Finite and not exactly the origin, which stands in for "never placed"."""
    if position is None:
        return False
    if not (math.isfinite(position.x) and math.isfinite(position.y)):
        return False
    return not (position.x == 0 and position.y == 0)


def needs_auto_layout(nodes: Sequence[Node]) -> bool:
    """True iff more than half of *nodes* have no valid position."""
    if not nodes:
        return False
    invalid = sum(1 for n in nodes if not is_valid_position(n.position))
    return invalid > len(nodes) * 0.5


def has_overlap(nodes: Sequence[Node]) -> bool:
    """Quick check: are there any overlapping node pairs?"""
    return len(detect_overlaps(nodes)) > 0


# ---------------------------------------------------------------------------
# Collision resolution
# ---------------------------------------------------------------------------

def resolve_collisions(nodes: Sequence[Node],
                       max_iterations: int = COLLISION_MAX_ITERATIONS) -> List[Node]:
    """
    Push overlapping pairs apart until a pass finds no overlap.

    Each overlapping pair moves in opposite directions along the axis on
    which their centres are further apart, by half the overlap on that axis
    plus ``COLLISION_MARGIN``.  Bounded by *max_iterations* passes; whatever
    state remains after the budget is returned.  Node order, count and
    identity are preserved, and untouched nodes are returned as-is.
    """
    xs = [n.position.x for n in nodes]
    ys = [n.position.y for n in nodes]
    moved = [False] * len(nodes)

    for _ in range(max_iterations):
        collided = False

        for i in range(len(nodes)):
            wi, hi = nodes[i].size.width, nodes[i].size.height
            for j in range(i + 1, len(nodes)):
                wj, hj = nodes[j].size.width, nodes[j].size.height

                overlap_x = min(xs[i] + wi, xs[j] + wj) - max(xs[i], xs[j])
                overlap_y = min(ys[i] + hi, ys[j] + hj) - max(ys[i], ys[j])
                if overlap_x <= 0 or overlap_y <= 0:
                    continue

                collided = True
                moved[i] = moved[j] = True

                ci_x, cj_x = xs[i] + wi / 2, xs[j] + wj / 2
                ci_y, cj_y = ys[i] + hi / 2, ys[j] + hj / 2

                if abs(ci_x - cj_x) > abs(ci_y - cj_y):
                    push = overlap_x / 2 + COLLISION_MARGIN
                    sign = -1 if ci_x < cj_x else 1
                    xs[i] += sign * push
                    xs[j] -= sign * push
                else:
                    push = overlap_y / 2 + COLLISION_MARGIN
                    sign = -1 if ci_y < cj_y else 1
                    ys[i] += sign * push
                    ys[j] -= sign * push

        if not collided:
            break

    return [
        n.moved_to(Position(xs[k], ys[k])) if moved[k] else n
        for k, n in enumerate(nodes)
    ]


# ---------------------------------------------------------------------------
# Smart layout
# ---------------------------------------------------------------------------

def _layout_hallways(hallways: List[Node], cfg: LayoutConfig) -> List[Node]:
    center_x = cfg.padding + cfg.hallway_length / 2
    center_y = cfg.padding + cfg.hallway_length / 2
    placed = []

    for index, hallway in enumerate(hallways):
        long_side = max(hallway.size.width, hallway.size.height)
        short_side = min(hallway.size.width, hallway.size.height)

        if index == 0:
            # Horizontal, centred
            vertical = False
            x, y = center_x - long_side / 2, center_y - short_side / 2
        elif index == 1:
            # Vertical, crossing the first
            vertical = True
            x, y = center_x - short_side / 2, center_y - long_side / 2
        else:
            offset = (index - 1) * (cfg.hallway_length / 2 + cfg.grid_spacing)
            vertical = index % 2 == 0
            if vertical:
                x, y = center_x + offset - short_side / 2, center_y - long_side / 2
            else:
                x, y = center_x - long_side / 2, center_y + offset - short_side / 2

        size = Size(short_side, long_side) if vertical else Size(long_side, short_side)
        placed.append(replace(
            hallway,
            position=Position(x, y),
            size=size,
            rotation=90 if vertical else 0,
            properties={**hallway.properties,
                        "orientation": "vertical" if vertical else "horizontal"},
        ))

    return placed


def _layout_rooms(rooms: List[Node], hallways: List[Node], cfg: LayoutConfig) -> List[Node]:
    cell_width = cfg.room_width + cfg.grid_spacing
    cell_height = cfg.room_height + cfg.grid_spacing
    cols = max(cfg.columns_per_row, 1)
    placed = []

    if not hallways:
        for index, room in enumerate(rooms):
            row, col = divmod(index, cols)
            placed.append(room.moved_to(Position(
                cfg.padding + col * cell_width,
                cfg.padding + row * cell_height,
            )))
        return placed

    start_x = min(h.position.x for h in hallways)
    start_y = min(h.position.y for h in hallways) - cfg.room_height - cfg.grid_spacing
    hallway_bottom = max(h.position.y + h.size.height for h in hallways)
    half_count = math.ceil(len(rooms) / 2)

    for index, room in enumerate(rooms):
        above = index < half_count
        row_index = index if above else index - half_count
        row, col = divmod(row_index, cols)
        if above:
            y = start_y - row * cell_height
        else:
            y = hallway_bottom + cfg.grid_spacing + row * cell_height
        placed.append(room.moved_to(Position(start_x + col * cell_width, y)))

    return placed


def _layout_doors(doors: List[Node], spaces: List[Node], cfg: LayoutConfig) -> List[Node]:
    max_y = max((s.position.y + s.size.height for s in spaces), default=0.0)
    return [
        door.moved_to(Position(
            cfg.padding + index * (cfg.door_width + cfg.grid_spacing),
            max_y + cfg.grid_spacing * 2,
        ))
        for index, door in enumerate(doors)
    ]


def apply_smart_layout(nodes: Sequence[Node],
                       config: Optional[Union[LayoutConfig, dict]] = None) -> List[Node]:
    """
    Lay out a whole floor from scratch, ignoring stored positions.

    Parameters
    ----------
    nodes : list[Node]
        Every node of the floor.
    config : LayoutConfig or dict, optional
        Spacing and default dimensions; a dict overrides individual fields.

    Returns
    -------
    list[Node]
        Same nodes in the same order, repositioned.  Overlaps are not
        resolved here; follow with :func:`resolve_collisions`.
    """
    cfg = LayoutConfig.from_overrides(config)
    if not nodes:
        return []

    slots = {"hallway": [], "room": [], "door": []}
    for index, node in enumerate(nodes):
        slots.get(node.kind, slots["room"]).append(index)

    hallways = _layout_hallways([nodes[i] for i in slots["hallway"]], cfg)
    rooms = _layout_rooms([nodes[i] for i in slots["room"]], hallways, cfg)
    doors = _layout_doors([nodes[i] for i in slots["door"]], hallways + rooms, cfg)

    result = list(nodes)
    for indices, placed in ((slots["hallway"], hallways),
                            (slots["room"], rooms),
                            (slots["door"], doors)):
        for i, node in zip(indices, placed):
            result[i] = node
    return result


# ---------------------------------------------------------------------------
# Origin centring
# ---------------------------------------------------------------------------

def normalize_to_origin(nodes: Sequence[Node]) -> List[Node]:
    """Shift every node so the scene's bounding box is centred at (0, 0)."""
    if not nodes:
        return []
    min_x, min_y, max_x, max_y = scene_bounds(nodes)
    cx, cy = (min_x + max_x) / 2, (min_y + max_y) / 2
    return [
        n.moved_to(Position(n.position.x - cx, n.position.y - cy))
        for n in nodes
    ]
