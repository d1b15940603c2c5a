"""Spatial Prisoner's Dilemma: evolution of cooperation on a 2D grid."""

from spatial_dilemma.domain.board import Board, Cell, copy_board, initialize_board
from spatial_dilemma.domain.errors import (
    ConfigurationError,
    InvariantViolationError,
    SpatialDilemmaError,
)
from spatial_dilemma.domain.neighbors import moore_neighbors
from spatial_dilemma.domain.payoff import pairwise_payoff
from spatial_dilemma.domain.strategy import Strategy
from spatial_dilemma.simulation.engine import evolve, evolve_once

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Cell",
    "ConfigurationError",
    "InvariantViolationError",
    "SpatialDilemmaError",
    "Strategy",
    "copy_board",
    "evolve",
    "evolve_once",
    "initialize_board",
    "moore_neighbors",
    "pairwise_payoff",
]
