"""PacMaze CLI entry point.

Provides subcommands for running the maze HTTP server and for generating a
single layout straight to the terminal. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        return (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    PacMaze Generator

    Serve the maze generation and saved-map API, or generate a single wall
    layout on the command line. Configuration can be provided via CLI flags or
    environment variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)
          DATABASE_URL    SQLAlchemy database URI (default: sqlite:///instance/pacmaze.db)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Bind to localhost only on a custom port
          python run.py server --host 127.0.0.1 --port 8080

          # Print the maze for seed 42 with its neighbour targets
          python run.py generate --seed 42 --show-targets

          # Dump the same maze as JSON
          python run.py generate --seed 42 --format json
        """
    )

    parser = argparse.ArgumentParser(
        prog="PacMaze",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"PacMaze Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the maze HTTP server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/maze and /api/maps",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or sqlite:///instance/pacmaze.db)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one maze and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate a single wall layout and print it as ASCII or JSON.",
    )
    gen_parser.add_argument("--seed", default=None, help="Seed (int or string); random when omitted")
    gen_parser.add_argument(
        "--format",
        dest="fmt",
        choices=("ascii", "json"),
        default="ascii",
        help="Output format (default: ascii)",
    )
    gen_parser.add_argument(
        "--show-targets",
        action="store_true",
        help="Also print the planned neighbour counts (ascii format only)",
    )
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def _generate(args) -> int:
    from pacmaze.maze import MazeGenerationSession
    from pacmaze.routes.maze_api import coerce_seed

    raw = getattr(args, "seed", None)
    session = MazeGenerationSession(seed=None if raw is None else coerce_seed(raw))
    if args.fmt == "json":
        print(json.dumps(session.to_json()))
        return 0
    header = f"Seed {session.seed}"
    print(f"{Fore.CYAN}{Style.BRIGHT}{header}{Style.RESET_ALL}" if _COLOR_ENABLED else header)
    print(session.to_ascii())
    if args.show_targets:
        print()
        print(session.distribution_ascii())
    unmet = session.unmet_targets()
    if unmet:
        warn = f"{len(unmet)} cell(s) kept more openings than planned"
        print(f"{Fore.YELLOW}[WARN]{Style.RESET_ALL} {warn}" if _COLOR_ENABLED else f"[WARN] {warn}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return _generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    env_db = os.getenv("DATABASE_URL")

    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    db_uri_cli = getattr(args, "db_uri", None)

    # Make DATABASE_URL available to the Flask app BEFORE importing it
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli

    db_banner = db_uri_cli or env_db or "auto (instance/pacmaze.db)"

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from pacmaze.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}PacMaze Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "PacMaze Server Bootup"
    )

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Version:'):12} {value(__version__)}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Database:'):12} {value(db_banner)}",
        divider,
        "",
    ]
    print("\n".join(lines))

    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
    from pacmaze.logging_utils import log

    log.info("listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
