"""Layout carver: builds walls until cells approach their planner targets.

Starts from a fully open grid and closes edges in three fixed stages. Every
closure is tentative: :meth:`LayoutCarver.try_remove_edge` closes the edge,
asks the connectivity oracle, and reopens it when any cell would be cut off
from the origin. Targets are soft; connectivity is the only hard invariant.

Floor rule: an edge is never attempted when either endpoint is already at or
below its target.
"""
from __future__ import annotations

import enum
import random
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .cells import Coord2D, is_center
from .config import MazeConfig
from .connectivity import is_fully_connected
from .grid import MazeGrid

log = get_logger("maze.carver")


class CarveStage(enum.Enum):
    INIT = "init"
    CARVE_THREE_TARGET = "three_target"
    CARVE_EDGE_TWO_TARGET = "edge_two_target"
    CARVE_CENTER_REMAINDER = "center_remainder"
    DONE = "done"


class LayoutCarver:
    def __init__(self, grid: MazeGrid, rng: Optional[random.Random] = None,
                 config: Optional[MazeConfig] = None, metrics: Optional[Dict[str, Any]] = None, logger=None):
        self.grid = grid
        self.rng = rng or random.Random()
        self.config = config or MazeConfig()
        self.log = logger or log
        self.metrics = metrics if metrics is not None else {}
        for key in ("edges_removed", "rollbacks", "floor_skips", "flood_checks"):
            self.metrics.setdefault(key, 0)
        self.stage = CarveStage.INIT
        self.order: List[Coord2D] = []

    def _bump(self, key: str) -> None:
        self.metrics[key] += 1

    def _roll(self, percent: int) -> bool:
        return self.rng.randrange(100) < percent

    def _above_floor(self, c: Coord2D) -> bool:
        cs = self.grid.cell(c)
        return cs.current_count > cs.effective_target

    def _shuffled_adjacent(self, c: Coord2D) -> List[Coord2D]:
        adjacent = self.grid.adjacent_cells(c)
        self.rng.shuffle(adjacent)
        return adjacent

    def try_remove_edge(self, a: Coord2D, b: Coord2D) -> bool:
        """Tentatively build the wall between a and b; keep it only if the maze stays connected."""
        if not (self._above_floor(a) and self._above_floor(b)):
            self._bump("floor_skips")
            return False
        if not self.grid.close_edge(a, b):
            return False
        self._bump("flood_checks")
        if is_fully_connected(self.grid):
            self._bump("edges_removed")
            return True
        self.grid.open_edge(a, b)
        self._bump("rollbacks")
        return False

    def run(self) -> MazeGrid:
        """Drive INIT -> three-target -> edge two-target -> center remainder -> DONE."""
        self.stage = CarveStage.INIT
        self.order = self.grid.all_cells()
        self.rng.shuffle(self.order)
        for stage, handler in (
            (CarveStage.CARVE_THREE_TARGET, self.carve_three_target),
            (CarveStage.CARVE_EDGE_TWO_TARGET, self.carve_edge_two_target),
            (CarveStage.CARVE_CENTER_REMAINDER, self.carve_center_remainder),
        ):
            self.stage = stage
            before = self.metrics["edges_removed"]
            handler()
            self.log.debug("carve_stage_done", stage=stage.value, removed=self.metrics["edges_removed"] - before)
        self.stage = CarveStage.DONE
        return self.grid

    # ---------------- Stage A ----------------------------------------------
    def carve_three_target(self) -> None:
        cells = [c for c in self.order if self.grid.cell(c).target_count == 3]
        for c in cells:
            for n in self._shuffled_adjacent(c):
                if not self._above_floor(c):
                    break
                if self.grid.cell(n).target_count == 2:
                    self.try_remove_edge(c, n)
                elif self._above_floor(n) and self._roll(self.config.three_disconnect_probability):
                    self.try_remove_edge(c, n)

    # ---------------- Stage B ----------------------------------------------
    def carve_edge_two_target(self) -> None:
        cells = [c for c in self.order if self.grid.cell(c).target_count == 2 and not is_center(c)]
        for c in cells:
            preferred = self.grid.cell(c).preferred_neighbours
            adjacent = self._shuffled_adjacent(c)
            for n in adjacent:
                if not self._above_floor(c):
                    break
                if n in preferred or not self._above_floor(n):
                    continue
                if self._roll(self.config.non_preferred_disconnect_probability):
                    self.try_remove_edge(c, n)
            if not self._above_floor(c):
                continue
            # Forced sweep: give up preferred neighbours, no probability gate
            for n in adjacent:
                if not self._above_floor(c):
                    break
                if n in preferred:
                    self.try_remove_edge(c, n)

    # ---------------- Stage C ----------------------------------------------
    def carve_center_remainder(self) -> None:
        cells = [c for c in self.order if is_center(c) and self.grid.cell(c).target_count != 3]
        for c in cells:
            for n in self._shuffled_adjacent(c):
                if not self._above_floor(c):
                    break
                self.try_remove_edge(c, n)


__all__ = ["CarveStage", "LayoutCarver"]
