"""Simulation engine: scoring and imitation rounds, metrics, and Parquet persistence."""

from spatial_dilemma.simulation.engine import (
    best_neighbor,
    evolve,
    evolve_once,
    imitate,
    run_evolution,
    score_board,
    validate_board,
)
from spatial_dilemma.simulation.persistence import flush_columns
from spatial_dilemma.simulation.step import (
    cluster_count_by_strategy,
    compute_generation_metrics,
    strategy_changes,
)

__all__ = [
    "best_neighbor",
    "cluster_count_by_strategy",
    "compute_generation_metrics",
    "evolve",
    "evolve_once",
    "flush_columns",
    "imitate",
    "run_evolution",
    "score_board",
    "strategy_changes",
    "validate_board",
]
