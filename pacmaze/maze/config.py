from dataclasses import dataclass
from typing import Optional


@dataclass
class MazeConfig:
    # Percent chances, compared with rng.randrange(100) < value
    outer_three_probability: int = 10
    max_outer_threes: int = 4
    three_max_probability: int = 75
    three_decay_rate: int = 12
    three_min_probability: int = 10
    three_cap_probability: int = 90
    propagation_probability: int = 50
    three_disconnect_probability: int = 10
    non_preferred_disconnect_probability: int = 85
    seed: Optional[int] = None


__all__ = ["MazeConfig"]
