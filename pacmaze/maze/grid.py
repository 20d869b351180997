"""Grid model: cell records plus the two wall-presence matrices.

Wall matrices (``True`` = wall present, ``False`` = open):
    horizontal[row][col]  10x11  wall between (row, col) and (row+1, col)
    vertical[row][col]    11x10  wall between (row, col) and (row, col+1)

Every edge toggle goes through :meth:`MazeGrid.toggle_edge` so the per-cell
``current_count`` always equals the number of open edges of that cell.
"""
from __future__ import annotations

from typing import List, Tuple

from ..logging_utils import get_logger
from .cells import (
    DIRECTIONS,
    GRID_SIZE,
    LAST,
    CellState,
    Coord2D,
    all_cells,
    in_bounds,
    preferred_neighbours,
    structural_max,
)
from .errors import InvalidAdjacencyError

log = get_logger("maze.grid")


class MazeGrid:
    def __init__(self):
        self.horizontal: List[List[bool]] = [[False] * GRID_SIZE for _ in range(LAST)]
        self.vertical: List[List[bool]] = [[False] * LAST for _ in range(GRID_SIZE)]
        self.cells: List[List[CellState]] = [
            [CellState(structural_max((x, y)), preferred_neighbours=preferred_neighbours((x, y)))
             for y in range(GRID_SIZE)]
            for x in range(GRID_SIZE)
        ]

    def cell(self, c: Coord2D) -> CellState:
        return self.cells[c[0]][c[1]]

    @staticmethod
    def adjacent_cells(c: Coord2D) -> List[Coord2D]:
        x, y = c
        return [(x + dx, y + dy) for dx, dy in DIRECTIONS if in_bounds(x + dx, y + dy)]

    @staticmethod
    def all_cells() -> List[Coord2D]:
        return all_cells()

    def _edge_slot(self, a: Coord2D, b: Coord2D) -> Tuple[List[bool], int]:
        """Return (matrix row, column index) holding the wall between a and b."""
        (ax, ay), (bx, by) = a, b
        if not (in_bounds(ax, ay) and in_bounds(bx, by)):
            raise InvalidAdjacencyError(a, b)
        if ax == bx and abs(ay - by) == 1:
            return self.vertical[ax], min(ay, by)
        if ay == by and abs(ax - bx) == 1:
            return self.horizontal[min(ax, bx)], ay
        raise InvalidAdjacencyError(a, b)

    def is_open(self, a: Coord2D, b: Coord2D) -> bool:
        row, col = self._edge_slot(a, b)
        return not row[col]

    def toggle_edge(self, a: Coord2D, b: Coord2D, open: bool) -> bool:
        """Open or close the edge between two adjacent cells.

        Returns True when the wall state changed. Re-closing a closed edge or
        re-opening an open one is a no-op and returns False. Non-adjacent cells
        raise InvalidAdjacencyError.
        """
        try:
            row, col = self._edge_slot(a, b)
        except InvalidAdjacencyError:
            log.error("invalid_adjacency", a=a, b=b)
            raise
        wall_present = not open
        if row[col] == wall_present:
            log.debug("edge_toggle_noop", a=a, b=b, open=open)
            return False
        row[col] = wall_present
        delta = 1 if open else -1
        self.cell(a).current_count += delta
        self.cell(b).current_count += delta
        return True

    def close_edge(self, a: Coord2D, b: Coord2D) -> bool:
        return self.toggle_edge(a, b, open=False)

    def open_edge(self, a: Coord2D, b: Coord2D) -> bool:
        return self.toggle_edge(a, b, open=True)

    def open_edge_count(self, c: Coord2D) -> int:
        return sum(1 for n in self.adjacent_cells(c) if self.is_open(c, n))

    def wall_count(self) -> int:
        return sum(map(sum, self.horizontal)) + sum(map(sum, self.vertical))

    def targets(self) -> List[List[int]]:
        return [[cs.target_count for cs in row] for row in self.cells]

    def apply_plan(self, plan: List[List[int]]) -> None:
        for x in range(GRID_SIZE):
            for y in range(GRID_SIZE):
                self.cells[x][y].target_count = plan[x][y]


__all__ = ["MazeGrid"]
