"""Connectivity oracle: BFS flood over open edges from the origin cell.

The carver calls :func:`is_fully_connected` after every tentative wall so a
closure that strands any cell can be rolled back immediately.
"""
from __future__ import annotations

from collections import deque
from typing import Set

from .cells import GRID_SIZE, ORIGIN, Coord2D


def reachable_cells(grid, origin: Coord2D = ORIGIN) -> Set[Coord2D]:
    horizontal, vertical = grid.horizontal, grid.vertical
    visited = {origin}
    q = deque([origin])
    while q:
        x, y = q.popleft()
        # up / down cross a horizontal wall, left / right a vertical one
        if x > 0 and not horizontal[x - 1][y] and (x - 1, y) not in visited:
            visited.add((x - 1, y)); q.append((x - 1, y))
        if x < GRID_SIZE - 1 and not horizontal[x][y] and (x + 1, y) not in visited:
            visited.add((x + 1, y)); q.append((x + 1, y))
        if y > 0 and not vertical[x][y - 1] and (x, y - 1) not in visited:
            visited.add((x, y - 1)); q.append((x, y - 1))
        if y < GRID_SIZE - 1 and not vertical[x][y] and (x, y + 1) not in visited:
            visited.add((x, y + 1)); q.append((x, y + 1))
    return visited


def is_fully_connected(grid, origin: Coord2D = ORIGIN) -> bool:
    """True iff every one of the 121 cells is reachable from ``origin``."""
    return len(reachable_cells(grid, origin)) == GRID_SIZE * GRID_SIZE


__all__ = ["reachable_cells", "is_fully_connected"]
