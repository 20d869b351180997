"""Finished wall layout and its save-file codecs.

``WallData`` is what leaves the generator: two immutable boolean matrices
handed to whatever draws the walls or writes them to disk. Saved maps store
both matrices flattened row-major, under the same keys the game's save
wrapper uses (``horizontalWallStatus`` / ``verticalWallStatus``).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from .cells import GRID_SIZE, LAST
from .errors import WallDataError

H_ROWS, H_COLS = LAST, GRID_SIZE
V_ROWS, V_COLS = GRID_SIZE, LAST

BoolMatrix = Tuple[Tuple[bool, ...], ...]


def _freeze(matrix: Sequence[Sequence[bool]], rows: int, cols: int, label: str) -> BoolMatrix:
    if len(matrix) != rows or any(len(r) != cols for r in matrix):
        raise WallDataError(f"{label} walls must be {rows}x{cols}")
    return tuple(tuple(bool(v) for v in r) for r in matrix)


def _unflatten(flat: Sequence[Any], rows: int, cols: int, label: str) -> BoolMatrix:
    if len(flat) != rows * cols:
        raise WallDataError(f"{label} walls need {rows * cols} entries, got {len(flat)}")
    for v in flat:
        if not isinstance(v, (bool, int)) or v not in (0, 1):
            raise WallDataError(f"{label} walls contain a non-boolean entry: {v!r}")
    return tuple(tuple(bool(flat[r * cols + c]) for c in range(cols)) for r in range(rows))


@dataclass(frozen=True)
class WallData:
    horizontal: BoolMatrix
    vertical: BoolMatrix

    @classmethod
    def from_matrices(cls, horizontal, vertical) -> "WallData":
        return cls(_freeze(horizontal, H_ROWS, H_COLS, "horizontal"), _freeze(vertical, V_ROWS, V_COLS, "vertical"))

    @classmethod
    def from_grid(cls, grid) -> "WallData":
        return cls.from_matrices(grid.horizontal, grid.vertical)

    @classmethod
    def empty(cls) -> "WallData":
        return cls.from_matrices([[False] * H_COLS for _ in range(H_ROWS)], [[False] * V_COLS for _ in range(V_ROWS)])

    @classmethod
    def from_flat(cls, horizontal: Sequence[Any], vertical: Sequence[Any]) -> "WallData":
        return cls(_unflatten(horizontal, H_ROWS, H_COLS, "horizontal"), _unflatten(vertical, V_ROWS, V_COLS, "vertical"))

    def flatten(self) -> Tuple[List[bool], List[bool]]:
        return [v for r in self.horizontal for v in r], [v for r in self.vertical for v in r]

    def to_dict(self) -> Dict[str, List[bool]]:
        h, v = self.flatten()
        return {"horizontalWallStatus": h, "verticalWallStatus": v}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WallData":
        try:
            h = data["horizontalWallStatus"]
            v = data["verticalWallStatus"]
        except (KeyError, TypeError):
            raise WallDataError("walls need horizontalWallStatus and verticalWallStatus lists") from None
        if not isinstance(h, list) or not isinstance(v, list):
            raise WallDataError("wall status entries must be lists")
        return cls.from_flat(h, v)

    def wall_count(self) -> int:
        return sum(map(sum, self.horizontal)) + sum(map(sum, self.vertical))


def render_ascii(walls: WallData) -> str:
    """Draw the layout with '+' posts, '---' horizontal and '|' vertical walls.

    Rows of the drawing follow grid rows (x); the outer border is always drawn.
    """
    border = "+" + "---+" * GRID_SIZE
    lines = [border]
    for x in range(GRID_SIZE):
        row = "|"
        for y in range(GRID_SIZE):
            row += "   "
            row += "|" if y == LAST or walls.vertical[x][y] else " "
        lines.append(row)
        if x == LAST:
            lines.append(border)
            continue
        sep = "+"
        for y in range(GRID_SIZE):
            sep += ("---" if walls.horizontal[x][y] else "   ") + "+"
        lines.append(sep)
    return "\n".join(lines)


__all__ = ["WallData", "render_ascii"]
