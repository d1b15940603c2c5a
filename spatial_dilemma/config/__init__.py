"""Configuration layer: constants and typed config dataclasses."""

from spatial_dilemma.config.constants import (
    DEFAULT_B,
    DEFAULT_CELL_SIZE,
    DEFAULT_FPS,
    DEFAULT_GIF_NAME,
    DEFAULT_OUT_DIR,
    DEFAULT_PNG_NAME,
    DEFAULT_ROUNDS,
    FLUSH_THRESHOLD,
)
from spatial_dilemma.config.types import (
    EvolutionConfig,
    RenderConfig,
    RunConfig,
    SimulationResult,
    validate_payoff_parameter,
    validate_rounds,
)

__all__ = [
    "DEFAULT_B",
    "DEFAULT_CELL_SIZE",
    "DEFAULT_FPS",
    "DEFAULT_GIF_NAME",
    "DEFAULT_OUT_DIR",
    "DEFAULT_PNG_NAME",
    "DEFAULT_ROUNDS",
    "EvolutionConfig",
    "FLUSH_THRESHOLD",
    "RenderConfig",
    "RunConfig",
    "SimulationResult",
    "validate_payoff_parameter",
    "validate_rounds",
]
