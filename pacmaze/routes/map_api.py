"""
project: PacMaze
module: map_api.py
License: MIT

Saved map API routes.

Stores finished layouts with their name, difficulty, event flag and high
score. A map is created either from a seed (walls regenerated server side)
or from explicit flattened wall lists, as the editor submits them.
"""

from flask import Blueprint, jsonify, request

from pacmaze import db
from pacmaze.logging_utils import get_logger
from pacmaze.maze import WallData, WallDataError
from pacmaze.models import DIFFICULTIES, SavedMap
from pacmaze.routes.maze_api import coerce_seed, get_cached_session

bp_maps = Blueprint("maps", __name__)
log = get_logger("routes.maps")

NAME_MAX = 32


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _validate_name(name):
    if not isinstance(name, str) or not name.strip():
        return None, "name is required"
    name = name.strip()
    if len(name) > NAME_MAX:
        return None, f"name must be at most {NAME_MAX} characters"
    return name, None


def _name_taken(name: str, exclude_id: int | None = None) -> bool:
    q = SavedMap.query.filter_by(name=name)
    if exclude_id is not None:
        q = q.filter(SavedMap.id != exclude_id)
    return q.first() is not None


@bp_maps.route("/api/maps", methods=["POST"])
def create_map():
    """Save a map.

    Body JSON:
      { "name": str, "difficulty": "Easy"|"Normal"|"Hard", "event_enabled": bool,
        "seed": <int|str>  OR  "walls": {horizontalWallStatus, verticalWallStatus} }
    If neither seed nor walls is given a random seed is generated.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _error("body must be a JSON object", 400)
    name, err = _validate_name(data.get("name"))
    if err:
        return _error(err, 400)
    difficulty = data.get("difficulty", "Normal")
    if difficulty not in DIFFICULTIES:
        return _error(f"difficulty must be one of {', '.join(DIFFICULTIES)}", 400)
    if _name_taken(name):
        return _error("a map with this name already exists", 409)

    seed = None
    if data.get("walls") is not None:
        try:
            walls = WallData.from_dict(data["walls"])
        except WallDataError as e:
            return _error(str(e), 400)
    else:
        seed = coerce_seed(data.get("seed"))
        walls = get_cached_session(seed).wall_data

    saved = SavedMap(name=name, difficulty=difficulty, event_enabled=bool(data.get("event_enabled", False)), seed=seed)
    saved.wall_data = walls
    db.session.add(saved)
    db.session.commit()
    log.info("map_saved", map_id=saved.id, name=saved.name, seed=seed)
    return jsonify(saved.to_dict()), 201


@bp_maps.route("/api/maps", methods=["GET"])
def list_maps():
    maps = SavedMap.query.order_by(SavedMap.id).all()
    return jsonify({"maps": [m.summary() for m in maps]})


@bp_maps.route("/api/maps/<int:map_id>", methods=["GET"])
def get_map(map_id):
    saved = db.session.get(SavedMap, map_id)
    if saved is None:
        return _error("map not found", 404)
    return jsonify(saved.to_dict())


@bp_maps.route("/api/maps/<int:map_id>", methods=["PATCH"])
def update_map(map_id):
    """Rename a map, change its difficulty or event flag, or record a high score.

    High scores only ever go up; a lower submitted score is ignored.
    """
    saved = db.session.get(SavedMap, map_id)
    if saved is None:
        return _error("map not found", 404)
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _error("body must be a JSON object", 400)
    if "name" in data:
        name, err = _validate_name(data.get("name"))
        if err:
            return _error(err, 400)
        if _name_taken(name, exclude_id=saved.id):
            return _error("a map with this name already exists", 409)
        saved.name = name
    if "difficulty" in data:
        if data["difficulty"] not in DIFFICULTIES:
            return _error(f"difficulty must be one of {', '.join(DIFFICULTIES)}", 400)
        saved.difficulty = data["difficulty"]
    if "event_enabled" in data:
        saved.event_enabled = bool(data["event_enabled"])
    if "high_score" in data:
        score = data["high_score"]
        if not isinstance(score, int) or isinstance(score, bool) or score < 0:
            return _error("high_score must be a non-negative integer", 400)
        saved.high_score = max(saved.high_score or 0, score)
    db.session.commit()
    return jsonify(saved.to_dict())


@bp_maps.route("/api/maps/<int:map_id>", methods=["DELETE"])
def delete_map(map_id):
    saved = db.session.get(SavedMap, map_id)
    if saved is None:
        return _error("map not found", 404)
    db.session.delete(saved)
    db.session.commit()
    log.info("map_deleted", map_id=map_id)
    return jsonify({"deleted": map_id})
