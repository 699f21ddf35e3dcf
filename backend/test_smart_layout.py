"""Tests for auto-layout detection, collision resolution, smart layout and origin centring."""

import math

import pytest

from services.layout_engine import (
    LayoutConfig,
    Node,
    Position,
    Size,
    apply_smart_layout,
    has_overlap,
    needs_auto_layout,
    normalize_to_origin,
    resolve_collisions,
)
from services.layout_engine.geometry_utils import scene_bounds


def _node(node_id, x, y, w=100, h=100, kind="room"):
    return Node(id=node_id, kind=kind, label=node_id, position=Position(x, y), size=Size(w, h))


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

def test_needs_auto_layout_majority_rule():
    assert not needs_auto_layout([])
    assert needs_auto_layout([_node("a", 0, 0), _node("b", 0, 0), _node("c", 10, 10)])
    # exactly half invalid is not a majority
    assert not needs_auto_layout([_node("a", 0, 0), _node("b", 10, 10)])
    assert needs_auto_layout([_node("a", math.nan, 5), _node("b", math.inf, 5), _node("c", 1, 1)])


def test_has_overlap():
    assert has_overlap([_node("a", 0, 0), _node("b", 50, 50)])
    # touching edges or corners share no area
    assert not has_overlap([_node("a", 0, 0), _node("b", 100, 0)])
    assert not has_overlap([_node("a", 0, 0), _node("b", 100, 100)])
    assert not has_overlap([_node("a", 0, 0)])


# ---------------------------------------------------------------------------
# Collision resolution
# ---------------------------------------------------------------------------

def test_resolve_collisions_noop_without_overlap():
    nodes = [_node("a", 0, 0), _node("b", 200, 0), _node("c", 0, 300)]
    result = resolve_collisions(nodes)
    assert [n.position for n in result] == [n.position for n in nodes]
    assert all(r is n for r, n in zip(result, nodes))


def test_resolve_collisions_pushes_along_wider_separation():
    a, b = _node("a", 0, 0), _node("b", 60, 10)
    result = resolve_collisions([a, b], max_iterations=1)

    # overlap_x = 40, centres further apart on x -> push 40/2 + 10 each way
    assert result[0].position == Position(-30, 0)
    assert result[1].position == Position(90, 10)
    assert not has_overlap(result)


def test_resolve_collisions_separates_a_pile():
    nodes = [_node(str(i), 5 * i, 3 * i) for i in range(6)]
    result = resolve_collisions(nodes, max_iterations=200)

    assert [n.id for n in result] == [n.id for n in nodes]
    assert not has_overlap(result)
    assert all(r.size == n.size for r, n in zip(result, nodes))


def test_resolve_collisions_respects_budget():
    nodes = [_node(str(i), 0, 0) for i in range(8)]
    assert len(resolve_collisions(nodes, max_iterations=0)) == 8
    assert resolve_collisions(nodes, max_iterations=0)[0] is nodes[0]


# ---------------------------------------------------------------------------
# Smart layout
# ---------------------------------------------------------------------------

def test_smart_layout_spine_and_rows():
    cfg = LayoutConfig()
    nodes = [
        _node("d1", 0, 0, 40, 15, kind="door"),
        _node("h1", 0, 0, 600, 60, kind="hallway"),
        _node("r1", 0, 0, 150, 120),
        _node("r2", 0, 0, 150, 120),
        _node("h2", 0, 0, 600, 60, kind="hallway"),
        _node("r3", 0, 0, 150, 120),
    ]
    result = apply_smart_layout(nodes, cfg)
    by_id = {n.id: n for n in result}

    assert [n.id for n in result] == [n.id for n in nodes]

    center = cfg.padding + cfg.hallway_length / 2
    h1, h2 = by_id["h1"], by_id["h2"]
    assert h1.rotation == 0 and h1.size == Size(600, 60)
    assert h1.position == Position(center - 300, center - 30)
    assert h2.rotation == 90 and h2.size == Size(60, 600)
    assert h2.position == Position(center - 30, center - 300)

    spine_top = min(h1.position.y, h2.position.y)
    spine_bottom = max(h1.position.y + h1.size.height, h2.position.y + h2.size.height)
    # two rooms above the spine, one below
    assert by_id["r1"].position.y + cfg.room_height < spine_top
    assert by_id["r2"].position.y + cfg.room_height < spine_top
    assert by_id["r3"].position.y > spine_bottom

    lowest = max(n.position.y + n.size.height for n in result if n.kind != "door")
    assert by_id["d1"].position == Position(cfg.padding, lowest + 2 * cfg.grid_spacing)


def test_smart_layout_plain_grid_without_hallways():
    nodes = [_node(f"r{i}", 0, 0) for i in range(5)]
    result = apply_smart_layout(nodes, {"grid_spacing": 20, "padding": 0})
    assert result[0].position == Position(0, 0)
    assert result[1].position == Position(170, 0)
    assert result[4].position == Position(0, 140)


def test_smart_layout_vertical_hallway_input_is_reoriented():
    # a hallway already sized vertical still becomes the horizontal spine
    result = apply_smart_layout([_node("h", 0, 0, 50, 500, kind="hallway")])
    assert result[0].size == Size(500, 50)
    assert result[0].properties["orientation"] == "horizontal"


def test_smart_layout_empty():
    assert apply_smart_layout([]) == []


# ---------------------------------------------------------------------------
# Origin centring
# ---------------------------------------------------------------------------

def test_normalize_to_origin_centres_bounding_box():
    nodes = [_node("a", 100, 100, 150, 120), _node("b", 700, 340, 300, 60), _node("c", -40, 900, 50, 20)]
    result = normalize_to_origin(nodes)

    min_x, min_y, max_x, max_y = scene_bounds(result)
    assert (min_x + max_x) / 2 == pytest.approx(0)
    assert (min_y + max_y) / 2 == pytest.approx(0)
    assert [n.size for n in result] == [n.size for n in nodes]


def test_normalize_single_node_and_empty():
    (only,) = normalize_to_origin([_node("a", 10, 20, 30, 40)])
    assert only.position == Position(-15, -20)
    assert normalize_to_origin([]) == []
