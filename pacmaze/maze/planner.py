"""Neighbour-count planner.

Assigns every cell a *target* number of open edges (2, 3 or 4) before any
wall is built. Three passes run in order; the first two only write cells that
are still unassigned (0), the last one overwrites whatever it lands on:

1. Outer ring: mostly 2-exit cells, at most ``max_outer_threes`` 3-exit
   cells, never two of them side by side.
2. Inner tiles: 3-exit cells become likelier toward the center and tend to
   appear in adjacent pairs (propagation); a few stay alone when every
   neighbour is already planned.
3. Center wide rooms: exactly one adjacent pair of 4-exit cells inside the
   central 3x3 block.
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional

from ..logging_utils import get_logger
from .cells import (
    CENTER_MAX,
    CENTER_MIN,
    DIRECTIONS,
    DOWN,
    GRID_SIZE,
    LAST,
    RIGHT,
    UNASSIGNED,
    Coord2D,
    chebyshev_from_origin,
    is_boundary,
    is_center,
)
from .config import MazeConfig

log = get_logger("maze.planner")


class NeighbourCountPlanner:
    def __init__(self, rng: Optional[random.Random] = None, config: Optional[MazeConfig] = None, logger=None):
        self.rng = rng or random.Random()
        self.config = config or MazeConfig()
        self.log = logger or log
        self.plan: List[List[int]] = []
        self.wide_room_pair: tuple = ()
        self.stats: Dict[str, int] = {}

    def _roll(self, percent: int) -> bool:
        # Strict comparison: a draw equal to the threshold fails
        return self.rng.randrange(100) < percent

    def _get(self, c: Coord2D) -> int:
        return self.plan[c[0]][c[1]]

    def _set(self, c: Coord2D, value: int) -> None:
        self.plan[c[0]][c[1]] = value

    def generate(self) -> List[List[int]]:
        """Run all three passes and return the target map ``plan[x][y]``."""
        self.plan = [[UNASSIGNED] * GRID_SIZE for _ in range(GRID_SIZE)]
        self.wide_room_pair = ()
        self.stats = {"ring_threes": 0, "inner_threes": 0, "propagations": 0,
                      "propagation_collapses": 0, "lone_threes": 0}
        self.determine_outer_ring()
        self.determine_inner_tiles()
        self.place_center_wide_rooms()
        self.log.debug("plan_ready", **self.stats)
        return self.plan

    # ---------------- Pass 1 ------------------------------------------------
    def ring_exclusion_neighbours(self, c: Coord2D) -> List[Coord2D]:
        """Ring cells whose 3-target blocks ``c`` from becoming a 3-target.

        Corners look at their two in-bounds neighbours; cells on the top and
        bottom rows look left/right; cells on the side columns look up/down.
        """
        x, y = c
        if x in (0, LAST):
            inward = x + 1 if x == 0 else x - 1
            if y == 0:
                return [(inward, y), (x, y + 1)]
            if y == LAST:
                return [(inward, y), (x, y - 1)]
            return [(x, y - 1), (x, y + 1)]
        return [(x - 1, y), (x + 1, y)]

    def determine_outer_ring(self) -> None:
        ring = [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE) if is_boundary((x, y))]
        self.rng.shuffle(ring)
        threes = 0
        for c in ring:
            if threes >= self.config.max_outer_threes:
                self._set(c, 2)
                continue
            blocked = any(self._get(n) == 3 for n in self.ring_exclusion_neighbours(c))
            if not blocked and self._roll(self.config.outer_three_probability):
                self._set(c, 3)
                threes += 1
            else:
                self._set(c, 2)
        self.stats["ring_threes"] = threes

    # ---------------- Pass 2 ------------------------------------------------
    def three_probability(self, c: Coord2D) -> int:
        """Percent chance that inner cell ``c`` is a 3-target candidate."""
        cfg = self.config
        raw = cfg.three_max_probability - cfg.three_decay_rate * chebyshev_from_origin(c)
        return min(cfg.three_cap_probability, max(cfg.three_min_probability, raw))

    def determine_inner_tiles(self) -> None:
        for x in range(1, LAST):
            for y in range(1, LAST):
                c = (x, y)
                if self._get(c) != UNASSIGNED:
                    continue
                if not self._roll(self.three_probability(c)):
                    self._set(c, 2)
                    continue
                # 3 is provisional until the propagation draw decides
                self._set(c, 3)
                if not self._roll(self.config.propagation_probability):
                    self._set(c, 2)
                    self.stats["propagation_collapses"] += 1
                elif self._propagate(c):
                    self.stats["inner_threes"] += 2
                    self.stats["propagations"] += 1
                else:
                    # every neighbour already planned: the 3 stays on its own
                    self.stats["inner_threes"] += 1
                    self.stats["lone_threes"] += 1

    def _propagate(self, c: Coord2D) -> bool:
        directions = list(DIRECTIONS)
        self.rng.shuffle(directions)
        for dx, dy in directions:
            n = (c[0] + dx, c[1] + dy)
            if self._get(n) == UNASSIGNED:
                self._set(n, 3)
                return True
        return False

    # ---------------- Pass 3 ------------------------------------------------
    def place_center_wide_rooms(self) -> None:
        center = [(x, y) for x in range(CENTER_MIN, CENTER_MAX + 1) for y in range(CENTER_MIN, CENTER_MAX + 1)]
        self.rng.shuffle(center)
        for c in center:
            options = [DOWN, RIGHT]
            self.rng.shuffle(options)
            for dx, dy in options:
                n = (c[0] + dx, c[1] + dy)
                if is_center(n):
                    self._set(c, 4)
                    self._set(n, 4)
                    self.wide_room_pair = (c, n)
                    return


def render_distribution(plan: List[List[int]]) -> str:
    """Debug dump of a target map, one grid row per line."""
    return "\n".join(" ".join(str(v) for v in row) for row in plan)


__all__ = ["NeighbourCountPlanner", "render_distribution"]
