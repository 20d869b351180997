"""Public maze package interface.

Procedural wall-layout generator for the 11x11 maze: a neighbour-count
planner, a connectivity-guarded carver and the finished ``WallData``.
"""

from .carver import CarveStage, LayoutCarver
from .cells import GRID_SIZE, ORIGIN, CellState
from .config import MazeConfig
from .connectivity import is_fully_connected, reachable_cells
from .errors import InvalidAdjacencyError, MazeError, WallDataError
from .grid import MazeGrid
from .pipeline import MazeGenerationSession, generate_wall_layout
from .planner import NeighbourCountPlanner, render_distribution
from .walls import WallData, render_ascii

__all__ = [
    "CarveStage",
    "CellState",
    "GRID_SIZE",
    "InvalidAdjacencyError",
    "LayoutCarver",
    "MazeConfig",
    "MazeError",
    "MazeGenerationSession",
    "MazeGrid",
    "NeighbourCountPlanner",
    "ORIGIN",
    "WallData",
    "WallDataError",
    "generate_wall_layout",
    "is_fully_connected",
    "reachable_cells",
    "render_ascii",
    "render_distribution",
]
