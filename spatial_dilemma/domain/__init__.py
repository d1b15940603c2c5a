"""Domain layer: strategies, boards, neighbor topology, and payoffs."""

from spatial_dilemma.domain.board import (
    Board,
    Cell,
    Coord,
    board_from_strategies,
    copy_board,
    initialize_board,
)
from spatial_dilemma.domain.errors import (
    ConfigurationError,
    InvariantViolationError,
    SpatialDilemmaError,
)
from spatial_dilemma.domain.neighbors import MOORE_OFFSETS, classify_position, moore_neighbors
from spatial_dilemma.domain.payoff import pairwise_payoff
from spatial_dilemma.domain.strategy import Strategy, parse_strategy

__all__ = [
    "Board",
    "Cell",
    "ConfigurationError",
    "Coord",
    "InvariantViolationError",
    "MOORE_OFFSETS",
    "SpatialDilemmaError",
    "Strategy",
    "board_from_strategies",
    "classify_position",
    "copy_board",
    "initialize_board",
    "moore_neighbors",
    "pairwise_payoff",
    "parse_strategy",
]
