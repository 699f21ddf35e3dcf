"""HTTP API tests for the floor plan scene routes."""

import pytest

from models import Building, Floor, Hallway, LightingFixture, Room, SpaceConnection


@pytest.fixture
def floor(seed):
    seed([
        Building(id="b1", name="Courthouse"),
        Floor(id="f1", building_id="b1", name="First", floor_number=1),
        Room(id="r1", floor_id="f1", name="101"),
        Room(id="r2", floor_id="f1", name="102"),
        Room(id="r3", floor_id="f1", name="103"),
        Room(id="r4", floor_id="f1", name="104"),
        Hallway(id="h1", floor_id="f1", name="Main"),
        SpaceConnection(id="c1", floor_id="f1", from_space_id="h1", to_space_id="r1"),
        SpaceConnection(id="c2", floor_id="f1", from_space_id="r2", to_space_id="h1"),
        SpaceConnection(id="c3", floor_id="f1", from_space_id="h1", to_space_id="r-gone"),
        LightingFixture(id="l1", floor_id="f1", space_id="h1", status="functional"),
    ])


def _nodes(body):
    return {n["id"]: n for n in body["nodes"]}


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"


def test_list_floors(client, floor):
    r = client.get("/api/floors")
    assert r.status_code == 200
    assert r.json() == [{
        "id": "f1", "name": "First", "floor_number": 1,
        "building_id": "b1", "building_name": "Courthouse",
    }]


def test_floor_scene(client, floor):
    r = client.get("/api/floors/f1/scene")
    assert r.status_code == 200
    body = r.json()
    nodes = _nodes(body)

    assert body["view"] == "2d"
    assert [e["id"] for e in body["edges"]] == ["c1", "c2"]
    assert len(nodes) == 5

    # rooms fetch first and take grid slots 0..3, the hallway slot 4
    assert nodes["r3"]["position"] == {"x": 800, "y": 100}
    assert nodes["r4"]["position"] == {"x": 1150, "y": 100}

    hallway = nodes["h1"]
    assert hallway["rotation"] == 0
    assert hallway["size"] == {"width": 550, "height": 50}
    assert hallway["position"] == {"x": 0, "y": 340}
    assert hallway["properties"]["connected_spaces"] == ["r1", "r2"]
    assert hallway["properties"]["total_fixtures"] == 1


def test_floor_scene_3d_is_centred(client, floor):
    body = client.get("/api/floors/f1/scene", params={"view": "3d"}).json()
    xs = [n["position"]["x"] for n in body["nodes"]]
    right = [n["position"]["x"] + n["size"]["width"] for n in body["nodes"]]
    assert (min(xs) + max(right)) / 2 == pytest.approx(0)


def test_unknown_floor_is_an_empty_scene(client, floor):
    r = client.get("/api/floors/nowhere/scene")
    assert r.status_code == 200
    assert r.json()["nodes"] == [] and r.json()["edges"] == []


def test_bad_view_rejected(client, floor):
    assert client.get("/api/floors/f1/scene", params={"view": "4d"}).status_code == 422


def test_position_write_back_applies_on_next_fetch(client, floor):
    r = client.patch("/api/spaces/r3/position", json={"type": "room", "position": {"x": 10, "y": 20}})
    assert r.status_code == 200
    assert r.json()["position"] == {"x": 10, "y": 20}

    nodes = _nodes(client.get("/api/floors/f1/scene").json())
    assert nodes["r3"]["position"] == {"x": 10, "y": 20}
    assert nodes["r3"]["has_stored_position"] is True


def test_size_write_back(client, floor):
    r = client.patch("/api/spaces/r4/size", json={"type": "room", "size": {"width": 90, "height": 70}})
    assert r.status_code == 200
    nodes = _nodes(client.get("/api/floors/f1/scene").json())
    assert nodes["r4"]["size"] == {"width": 90, "height": 70}


def test_write_back_unknown_space(client, floor):
    r = client.patch("/api/spaces/zzz/position", json={"type": "door", "position": {"x": 1, "y": 2}})
    assert r.status_code == 404


def test_write_back_invalid_body(client, floor):
    r = client.patch("/api/spaces/r1/position", json={"type": "window", "position": {"x": 1, "y": 2}})
    assert r.status_code == 422


def test_batch_positions(client, floor):
    r = client.post("/api/spaces/positions/batch", json={"updates": [
        {"id": "r1", "type": "room", "position": {"x": 700, "y": 900}},
        {"id": "h1", "type": "hallway", "position": {"x": 5, "y": 5}},
        {"id": "nope", "type": "door", "position": {"x": 0, "y": 1}},
    ]})
    assert r.status_code == 200
    assert r.json() == {"updated": 2}
