from typing import List, Optional, Tuple

Coord2D = Tuple[int, int]

GRID_SIZE = 11
LAST = GRID_SIZE - 1
ORIGIN: Coord2D = (5, 5)
CENTER_MIN, CENTER_MAX = 4, 6

# Unassigned planner target
UNASSIGNED = 0

UP = (-1, 0)
DOWN = (1, 0)
LEFT = (0, -1)
RIGHT = (0, 1)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


class CellState:
    """Per-cell carving record: live open-edge count, planner target, preferred neighbours."""
    __slots__ = ("current_count", "target_count", "preferred_neighbours")

    def __init__(self, current_count: int, target_count: int = UNASSIGNED,
                 preferred_neighbours: Optional[Tuple[Coord2D, ...]] = None):
        self.current_count = current_count
        self.target_count = target_count
        self.preferred_neighbours = preferred_neighbours or ()

    @property
    def effective_target(self) -> int:
        # An unassigned target means "keep every structural edge"
        return self.target_count or self.current_count

    def to_dict(self):
        return {
            "current_count": self.current_count,
            "target_count": self.target_count,
            "preferred_neighbours": [list(c) for c in self.preferred_neighbours],
        }

    def __repr__(self):
        return f"CellState(current={self.current_count}, target={self.target_count})"


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x <= LAST and 0 <= y <= LAST


def is_boundary(cell: Coord2D) -> bool:
    x, y = cell
    return x in (0, LAST) or y in (0, LAST)


def is_center(cell: Coord2D) -> bool:
    x, y = cell
    return CENTER_MIN <= x <= CENTER_MAX and CENTER_MIN <= y <= CENTER_MAX


def structural_max(cell: Coord2D) -> int:
    """2 for corners, 3 for edge cells, 4 for interior cells."""
    x, y = cell
    return 4 - (x in (0, LAST)) - (y in (0, LAST))


def all_cells() -> List[Coord2D]:
    return [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE)]


def chebyshev_from_origin(cell: Coord2D) -> int:
    return max(abs(cell[0] - ORIGIN[0]), abs(cell[1] - ORIGIN[1]))


def preferred_neighbours(cell: Coord2D) -> Tuple[Coord2D, Coord2D]:
    """Return the two neighbours that keep a 2-exit cell on its concentric ring.

    Rings are the squares at equal distance from the border. Cells on a ring
    diagonal turn the corner; cells on a horizontal side (fixed row) run
    left/right; cells on a vertical side run up/down.
    """
    x, y = cell
    if x == y:
        dirs = (DOWN, RIGHT) if x <= 3 else (UP, LEFT)
    elif x + y == LAST:
        dirs = (DOWN, LEFT) if x <= 3 else (UP, RIGHT)
    else:
        ring = min(x, y, LAST - x, LAST - y)
        dirs = (LEFT, RIGHT) if x in (ring, LAST - ring) else (UP, DOWN)
    return tuple((x + dx, y + dy) for dx, dy in dirs)


__all__ = [
    "Coord2D",
    "CellState",
    "GRID_SIZE",
    "LAST",
    "ORIGIN",
    "CENTER_MIN",
    "CENTER_MAX",
    "UNASSIGNED",
    "DIRECTIONS",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "in_bounds",
    "is_boundary",
    "is_center",
    "structural_max",
    "all_cells",
    "chebyshev_from_origin",
    "preferred_neighbours",
]
