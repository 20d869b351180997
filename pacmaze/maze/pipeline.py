"""Pipeline orchestration for maze generation.

``MazeGenerationSession`` owns everything one run mutates: its own RNG, the
grid, the target map and the metrics. Nothing is shared between sessions, so
two mazes can be generated side by side (or in parallel tests) without
interfering.
"""
from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from ..logging_utils import get_logger
from .carver import LayoutCarver
from .cells import GRID_SIZE
from .config import MazeConfig
from .grid import MazeGrid
from .metrics import init_metrics
from .planner import NeighbourCountPlanner, render_distribution
from .walls import WallData, render_ascii

log = get_logger("maze.pipeline")


@dataclass
class MazeGenerationSession:
    seed: Optional[int] = None
    config: Optional[MazeConfig] = None
    enable_metrics: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict, init=False)

    def __post_init__(self):
        if self.config is None:
            self.config = MazeConfig()
        if self.seed is None:
            self.seed = self.config.seed
        # 0 is a valid deterministic seed; None => random
        if self.seed is None:
            self.seed = random.randint(1, 1_000_000)
        self.config = replace(self.config, seed=self.seed)
        env_val = os.environ.get('MAZE_ENABLE_GENERATION_METRICS')
        if env_val is not None:
            self.enable_metrics = env_val.lower() not in {'0', 'false', 'no', ''}
        self._rng = random.Random(self.seed)
        self.metrics = init_metrics()
        self.grid = MazeGrid()
        self.plan: List[List[int]] = []
        self.wide_room_pair: tuple = ()
        self.wall_data: WallData = WallData.empty()
        self._run_pipeline()

    def _run_pipeline(self):
        """Plan targets, carve, then freeze the walls.

        With metrics enabled, ``metrics['phase_ms']`` maps phase name to its
        duration in milliseconds.
        """
        start = time.perf_counter()
        phase_times = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = int((pe - ps) * 1000)
            return r

        planner = NeighbourCountPlanner(self._rng, self.config, logger=get_logger("maze.planner").bind(seed=self.seed))
        self.plan = _phase('plan', planner.generate)
        self.wide_room_pair = planner.wide_room_pair
        self.metrics.update(planner.stats)
        self.grid.apply_plan(self.plan)
        carver = LayoutCarver(self.grid, self._rng, self.config, self.metrics,
                              logger=get_logger("maze.carver").bind(seed=self.seed))
        _phase('carve', carver.run)
        self.wall_data = WallData.from_grid(self.grid)
        self.metrics['unmet_targets'] = len(self.unmet_targets())
        self.metrics['walls_total'] = self.wall_data.wall_count()
        if self.enable_metrics:
            self.metrics['runtime_ms'] = int((time.perf_counter() - start) * 1000)
            self.metrics['phase_ms'] = phase_times
        else:
            self.metrics = {}
        log.bind(seed=self.seed).info("maze_generated", walls=self.wall_data.wall_count(),
                                      unmet=len(self.unmet_targets()))

    def unmet_targets(self):
        """Cells whose open-edge count is still above their planner target."""
        return [
            (x, y)
            for x in range(GRID_SIZE)
            for y in range(GRID_SIZE)
            if self.grid.cells[x][y].current_count > self.grid.cells[x][y].effective_target
        ]

    def open_counts(self) -> List[List[int]]:
        return [[cs.current_count for cs in row] for row in self.grid.cells]

    def cell_records(self) -> List[List[Dict[str, Any]]]:
        """Per-cell carving record (live count, target, preferred neighbours), indexed [x][y]."""
        return [[cs.to_dict() for cs in row] for row in self.grid.cells]

    # Convenience outputs
    def to_ascii(self) -> str:
        return render_ascii(self.wall_data)

    def distribution_ascii(self) -> str:
        return render_distribution(self.plan)

    def to_json(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "size": GRID_SIZE,
            "walls": self.wall_data.to_dict(),
            "targets": self.plan,
            "open_counts": self.open_counts(),
            "wide_room_pair": [list(c) for c in self.wide_room_pair],
            "metrics": self.metrics,
        }


def generate_wall_layout(seed: Optional[int] = None, config: Optional[MazeConfig] = None) -> WallData:
    """Generate one maze and return only its finished walls."""
    return MazeGenerationSession(seed=seed, config=config).wall_data


__all__ = ["MazeGenerationSession", "generate_wall_layout"]
