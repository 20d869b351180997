from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'ring_threes': 0,
        'inner_threes': 0,
        'propagations': 0,
        'propagation_collapses': 0,
        'lone_threes': 0,
        'edges_removed': 0,
        'rollbacks': 0,
        'floor_skips': 0,
        'flood_checks': 0,
        'unmet_targets': 0,
        'walls_total': 0,
        'runtime_ms': 0.0,
    }
