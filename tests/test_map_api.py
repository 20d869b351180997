import pytest

from pacmaze.maze import WallData, generate_wall_layout
from pacmaze.models import SavedMap

pytestmark = pytest.mark.db_isolation


def create(client, **body):
    body.setdefault("name", "Level 1")
    return client.post("/api/maps", json=body)


def test_create_from_seed(client):
    r = create(client, seed=42, difficulty="Hard", event_enabled=True)
    assert r.status_code == 201
    data = r.get_json()
    assert data["name"] == "Level 1"
    assert data["difficulty"] == "Hard"
    assert data["event_enabled"] is True
    assert data["seed"] == 42
    assert data["high_score"] == 0
    assert WallData.from_dict(data["walls"]) == generate_wall_layout(seed=42)


def test_create_from_walls(client):
    walls = generate_wall_layout(seed=9).to_dict()
    r = create(client, name="Hand drawn", walls=walls)
    assert r.status_code == 201
    data = r.get_json()
    assert data["seed"] is None
    assert data["difficulty"] == "Normal"
    assert data["walls"] == walls
    saved = SavedMap.query.filter_by(name="Hand drawn").one()
    assert saved.wall_data == WallData.from_dict(walls)


@pytest.mark.parametrize(
    "body,message",
    [
        ({"name": ""}, "name"),
        ({"name": "x" * 33}, "32"),
        ({"name": 5}, "name"),
        ({"name": "ok", "difficulty": "Insane"}, "difficulty"),
        ({"name": "ok", "walls": {"horizontalWallStatus": [True]}}, "verticalWallStatus"),
        ({"name": "ok", "walls": {"horizontalWallStatus": [True], "verticalWallStatus": [False]}}, "110"),
    ],
)
def test_create_validation(client, body, message):
    r = client.post("/api/maps", json=body)
    assert r.status_code == 400
    assert message in r.get_json()["error"]


def test_duplicate_name_conflict(client):
    assert create(client, seed=1).status_code == 201
    r = create(client, seed=2)
    assert r.status_code == 409
    assert "exists" in r.get_json()["error"]


def test_list_and_get(client):
    first = create(client, name="A", seed=1).get_json()
    create(client, name="B", seed=2)
    listing = client.get("/api/maps").get_json()["maps"]
    assert [m["name"] for m in listing] == ["A", "B"]
    assert "walls" not in listing[0]
    one = client.get(f"/api/maps/{first['id']}").get_json()
    assert one["name"] == "A"
    assert "walls" in one


def test_get_missing(client):
    r = client.get("/api/maps/9999")
    assert r.status_code == 404
    assert r.get_json()["error"] == "map not found"


def test_high_score_only_increases(client):
    map_id = create(client, seed=3).get_json()["id"]
    assert client.patch(f"/api/maps/{map_id}", json={"high_score": 500}).get_json()["high_score"] == 500
    assert client.patch(f"/api/maps/{map_id}", json={"high_score": 200}).get_json()["high_score"] == 500
    assert client.patch(f"/api/maps/{map_id}", json={"high_score": 900}).get_json()["high_score"] == 900


@pytest.mark.parametrize("score", [-1, "100", True, 1.5])
def test_high_score_validation(client, score):
    map_id = create(client, seed=3).get_json()["id"]
    r = client.patch(f"/api/maps/{map_id}", json={"high_score": score})
    assert r.status_code == 400


def test_rename_and_difficulty(client):
    map_id = create(client, name="Old", seed=4).get_json()["id"]
    create(client, name="Taken", seed=5)
    r = client.patch(f"/api/maps/{map_id}", json={"name": "Taken"})
    assert r.status_code == 409
    r = client.patch(f"/api/maps/{map_id}", json={"name": "New", "difficulty": "Easy", "event_enabled": True})
    assert r.status_code == 200
    data = r.get_json()
    assert (data["name"], data["difficulty"], data["event_enabled"]) == ("New", "Easy", True)
    # renaming to its own name is not a conflict
    assert client.patch(f"/api/maps/{map_id}", json={"name": "New"}).status_code == 200
    assert client.patch(f"/api/maps/{map_id}", json={"difficulty": "Nightmare"}).status_code == 400


def test_patch_missing(client):
    assert client.patch("/api/maps/424242", json={"high_score": 1}).status_code == 404


def test_delete(client):
    map_id = create(client, seed=6).get_json()["id"]
    r = client.delete(f"/api/maps/{map_id}")
    assert r.status_code == 200
    assert r.get_json() == {"deleted": map_id}
    assert client.get(f"/api/maps/{map_id}").status_code == 404
    assert client.delete(f"/api/maps/{map_id}").status_code == 404


@pytest.mark.parametrize("body", [[1, 2], "name", 7])
def test_non_object_body_rejected(client, body):
    r = client.post("/api/maps", json=body)
    assert r.status_code == 400
    assert r.get_json()["error"] == "body must be a JSON object"
    map_id = create(client, seed=8).get_json()["id"]
    r = client.patch(f"/api/maps/{map_id}", json=body)
    assert r.status_code == 400
    assert r.get_json()["error"] == "body must be a JSON object"
