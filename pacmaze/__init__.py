"""
project: PacMaze
module: __init__.py
License: MIT

Flask application factory and core extensions setup.

Wires together the Flask app and SQLAlchemy around the maze generator.
Configuration is sourced from environment variables (optionally via a .env
file) with reasonable defaults for development. A local `instance/`
directory holds the SQLite database and log file.
"""

import logging
import os
import uuid
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy

# Load .env if present so `SECRET_KEY`, `DATABASE_URL`, etc. can be supplied
# without exporting shell variables during development.
load_dotenv()

db = SQLAlchemy()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(config_overrides: dict | None = None) -> Flask:
    """Build a configured Flask app with the maze and saved-map blueprints registered."""
    app = Flask(__name__, instance_relative_config=True)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only installs still work with an explicit DATABASE_URL
        pass

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        db_path = Path(app.instance_path) / "pacmaze.db"
        database_url = f"sqlite:///{db_path.as_posix()}"

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        SQLALCHEMY_DATABASE_URI=database_url,
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        MAZE_DISABLE_CACHE=_env_flag("MAZE_DISABLE_CACHE"),
        MAZE_CACHE_MAX=int(os.getenv("MAZE_CACHE_MAX", "8")),
        SUPPRESS_ROUTE_MAP=_env_flag("PACMAZE_SUPPRESS_ROUTE_MAP"),
    )
    if config_overrides:
        app.config.update(config_overrides)

    db.init_app(app)

    from pacmaze.routes.map_api import bp_maps
    from pacmaze.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)
    app.register_blueprint(bp_maps)

    with app.app_context():
        from pacmaze.models import SavedMap  # noqa: F401 - register table metadata

        db.create_all()

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    if not app.config.get("SUPPRESS_ROUTE_MAP") and not app.config.get("TESTING"):
        logging.getLogger(__name__).info("Registered routes:\n%s", app.url_map)

    return app
