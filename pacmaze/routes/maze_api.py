"""
project: PacMaze
module: maze_api.py
License: MIT

Maze generation API routes.

Generates wall layouts on demand and hands out the finished matrices for the
wall renderer, plus ASCII and metrics views for debugging. Generated sessions
are cached per seed since a seed always produces the same layout.
"""

import hashlib
import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from pacmaze.maze import MazeGenerationSession

bp_maze = Blueprint("maze", __name__)

SQLITE_MAX_INT = 9223372036854775807

# Simple in-process cache seed -> MazeGenerationSession, guarded by a lock for threaded servers.
_maze_cache = {}
_maze_cache_lock = threading.Lock()


def coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded 64-bit signed int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        return int(payload_seed)
    if isinstance(payload_seed, int):
        return payload_seed % SQLITE_MAX_INT
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SQLITE_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SQLITE_MAX_INT
    return random.randint(1, 1_000_000)


def get_cached_session(seed: int) -> MazeGenerationSession:
    if current_app.config.get("MAZE_DISABLE_CACHE"):
        return MazeGenerationSession(seed=seed)
    with _maze_cache_lock:
        session = _maze_cache.get(seed)
        if session is not None:
            return session
    session = MazeGenerationSession(seed=seed)
    cap = current_app.config.get("MAZE_CACHE_MAX", 8)
    with _maze_cache_lock:
        _maze_cache[seed] = session
        while len(_maze_cache) > cap:
            first_key = next(iter(_maze_cache.keys()))
            _maze_cache.pop(first_key, None)
    return session


def clear_cache() -> None:
    with _maze_cache_lock:
        _maze_cache.clear()


@bp_maze.route("/api/maze/generate")
def generate():
    """
    Generate (or fetch from cache) the maze for a seed.
    Query: ?seed=<int|str>  (omitted => random seed)
    Response: { 'seed', 'walls': {horizontalWallStatus, verticalWallStatus}, 'targets', 'metrics' }
    """
    seed = coerce_seed(request.args.get("seed"))
    session = get_cached_session(seed)
    return jsonify(session.to_json())


@bp_maze.route("/api/maze/<int:seed>/ascii")
def maze_ascii(seed):
    session = get_cached_session(coerce_seed(seed))
    body = session.to_ascii()
    if request.args.get("targets") in ("1", "true", "yes"):
        body += "\n\n" + session.distribution_ascii()
    return Response(body + "\n", mimetype="text/plain")


@bp_maze.route("/api/maze/<int:seed>/metrics")
def maze_metrics(seed):
    session = get_cached_session(coerce_seed(seed))
    return jsonify({"seed": session.seed, "metrics": session.metrics})


@bp_maze.route("/api/maze/<int:seed>/cells")
def maze_cells(seed):
    """Carving record of every cell, for checking which cells missed their target."""
    session = get_cached_session(coerce_seed(seed))
    return jsonify(
        {
            "seed": session.seed,
            "cells": session.cell_records(),
            "unmet": [list(c) for c in session.unmet_targets()],
        }
    )
