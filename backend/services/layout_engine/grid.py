"""
Deterministic fallback placement for spaces with no usable stored position.

Spaces are laid into a fixed-column grid whose cell pitch is the kind's
default size plus a spacing constant.  This is the only grid policy the
engine uses; its constants come from ``config``.
"""

from dataclasses import dataclass

from config import GRID_COLUMNS, GRID_SPACING_X, GRID_SPACING_Y, GRID_START_X, GRID_START_Y

from .nodes import Position, Size


# Default sizes per space kind (layout units)
DEFAULT_SIZES = {
    "room": Size(150, 120),
    "hallway": Size(300, 60),
    "door": Size(50, 20),
}


def default_size(kind: str) -> Size:
    return DEFAULT_SIZES.get(kind, DEFAULT_SIZES["room"])


@dataclass(frozen=True)
class GridPolicy:
    start_x: float = 100
    start_y: float = 100
    spacing_x: float = 200
    spacing_y: float = 180
    columns: int = 4


DEFAULT_GRID_POLICY = GridPolicy(
    start_x=GRID_START_X,
    start_y=GRID_START_Y,
    spacing_x=GRID_SPACING_X,
    spacing_y=GRID_SPACING_Y,
    columns=max(GRID_COLUMNS, 1),
)


def grid_position(index: int, kind: str, policy: GridPolicy = DEFAULT_GRID_POLICY) -> Position:
    """
    Return the grid cell origin for the *index*-th unplaced space of *kind*.

    Parameters
    ----------
    index : int
        Running count of spaces that needed a fallback position, in batch order.
    kind : str
        ``"room"``, ``"hallway"`` or ``"door"``; unknown kinds use room pitch.
    policy : GridPolicy
        Origin, spacing and column count of the grid.
    """
    size = default_size(kind)
    row, col = divmod(index, policy.columns)
    return Position(
        policy.start_x + col * (size.width + policy.spacing_x),
        policy.start_y + row * (size.height + policy.spacing_y),
    )
