"""Tests for connection-to-edge derivation."""

import logging

from schemas import ConnectionRecord
from services.layout_engine import HALLWAY_DIRECTIONS, Node, Position, Size, derive_edges


def _node(node_id, kind="room"):
    return Node(id=node_id, kind=kind, label=node_id, position=Position(100, 100), size=Size(150, 120))


NODES = [_node("r1"), _node("r2"), _node("h1", "hallway")]


def _conn(**kwargs):
    return ConnectionRecord(**kwargs)


def test_named_direction_overrides_numeric_anchor():
    edges = derive_edges([_conn(id="c1", from_id="r1", to_id="h1", direction="start", hallway_position=0.8)], NODES)
    assert edges[0].hallway_position == 0.1


def test_every_named_direction_has_fixed_anchor():
    for direction, anchor in HALLWAY_DIRECTIONS.items():
        edge = derive_edges([_conn(from_id="r1", to_id="h1", direction=direction, hallway_position=0.05)], NODES)[0]
        assert edge.hallway_position == anchor


def test_numeric_anchor_used_without_named_direction():
    edges = derive_edges([
        _conn(id="a", from_id="r1", to_id="h1", direction="north", hallway_position=0.25),
        _conn(id="b", from_id="r2", to_id="h1"),
        _conn(id="c", from_id="r2", to_id="h1", hallway_position=4.0),
    ], NODES)
    assert [e.hallway_position for e in edges] == [0.25, 0.5, 1.0]


def test_dangling_connections_are_dropped_and_logged(caplog):
    records = [
        _conn(id="ok", from_id="r1", to_id="r2"),
        _conn(id="ghost", from_id="r1", to_id="nowhere"),
        _conn(id="half", from_id="r1"),
        _conn(id="empty"),
    ]
    with caplog.at_level(logging.WARNING):
        edges = derive_edges(records, NODES)

    assert [e.id for e in edges] == ["ok"]
    assert "ghost" in caplog.text
    assert "half" in caplog.text


def test_from_alias_accepted():
    record = ConnectionRecord.model_validate({"from": "r1", "to": "r2"})
    edge = derive_edges([record], NODES)[0]
    assert (edge.source, edge.target) == ("r1", "r2")
    assert edge.id == "r1-r2"


def test_transition_and_secured_flags():
    edges = derive_edges([
        _conn(id="t", from_id="r1", to_id="r2", connection_type="transition"),
        _conn(id="s", from_id="r1", to_id="r2", connection_type="secured"),
        _conn(id="f", from_id="r1", to_id="r2", is_transition=True, is_secured=True),
        _conn(id="d", from_id="r1", to_id="r2", connection_type="door"),
    ], NODES)
    flags = {e.id: (e.is_transition, e.is_secured) for e in edges}
    assert flags == {
        "t": (True, False),
        "s": (False, True),
        "f": (True, True),
        "d": (False, False),
    }


def test_shape_hint():
    edges = derive_edges([
        _conn(id="room-room", from_id="r1", to_id="r2"),
        _conn(id="room-hall", from_id="r1", to_id="h1"),
        _conn(id="typed", from_id="r1", to_id="r2", connection_type="hallway"),
        _conn(id="directed", from_id="r1", to_id="r2", direction="left"),
    ], NODES)
    shapes = {e.id: e.shape for e in edges}
    assert shapes == {"room-room": "straight", "room-hall": "elbow", "typed": "elbow", "directed": "elbow"}


def test_status_drives_active_flag_and_style():
    active, inactive = derive_edges([
        _conn(id="a", from_id="r1", to_id="r2", status="active"),
        _conn(id="i", from_id="r1", to_id="r2", status="inactive"),
    ], NODES)
    assert active.is_active and not inactive.is_active
    assert "strokeDasharray" in inactive.style
    assert active.style["stroke"] != inactive.style["stroke"]
