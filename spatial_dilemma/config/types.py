"""Configuration dataclasses for evolution runs.

All frozen dataclasses that parameterise an evolution run, its rendering,
and its output layout live here. Validation happens in ``__post_init__`` so
an invalid configuration fails before any simulation work starts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from spatial_dilemma.config.constants import (
    DEFAULT_B,
    DEFAULT_CELL_SIZE,
    DEFAULT_FPS,
    DEFAULT_GIF_NAME,
    DEFAULT_OUT_DIR,
    DEFAULT_PNG_NAME,
    DEFAULT_ROUNDS,
)
from spatial_dilemma.domain.errors import ConfigurationError

__all__ = [
    "EvolutionConfig",
    "RenderConfig",
    "RunConfig",
    "SimulationResult",
    "validate_payoff_parameter",
    "validate_rounds",
]


def validate_payoff_parameter(b: float) -> float:
    """Return *b* as a float, rejecting booleans, non-numbers, NaN and infinities."""
    if isinstance(b, bool) or not isinstance(b, (int, float)):
        raise ConfigurationError(f"b must be a real number, got {b!r}")
    if not math.isfinite(b):
        raise ConfigurationError(f"b must be finite, got {b!r}")
    return float(b)


def validate_rounds(rounds: int) -> int:
    """Return *rounds*, rejecting non-integers and negative counts."""
    if isinstance(rounds, bool) or not isinstance(rounds, int):
        raise ConfigurationError(f"rounds must be an integer, got {rounds!r}")
    if rounds < 0:
        raise ConfigurationError(f"rounds must be >= 0, got {rounds}")
    return rounds


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SimulationResult:
    """Summary of one completed evolution run."""

    run_id: str
    rounds: int
    num_rows: int
    num_cols: int
    initial_cooperator_fraction: float
    final_cooperator_fraction: float
    fixed_point_at: int | None
    """First round whose output equals its input, if the run reached one."""


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EvolutionConfig:
    """Game parameters: defector temptation ``b`` and number of rounds."""

    b: float = DEFAULT_B
    rounds: int = DEFAULT_ROUNDS

    def __post_init__(self) -> None:
        validate_payoff_parameter(self.b)
        validate_rounds(self.rounds)


@dataclass(frozen=True)
class RenderConfig:
    """Image and animation output settings."""

    fps: int = DEFAULT_FPS
    cell_size: int = DEFAULT_CELL_SIZE
    theme_name: str = "default"

    def __post_init__(self) -> None:
        if self.fps < 1:
            raise ConfigurationError("fps must be >= 1")
        if self.cell_size < 1:
            raise ConfigurationError("cell_size must be >= 1")


@dataclass(frozen=True)
class RunConfig:
    """Everything the CLI needs for one board-file run."""

    board_path: Path
    out_dir: Path = Path(DEFAULT_OUT_DIR)
    evolution: EvolutionConfig = field(default_factory=EvolutionConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    write_log: bool = True
    png_name: str = DEFAULT_PNG_NAME
    gif_name: str = DEFAULT_GIF_NAME

    def __post_init__(self) -> None:
        for label, name in (("png_name", self.png_name), ("gif_name", self.gif_name)):
            if not name or Path(name).name != name:
                raise ConfigurationError(f"{label} must be a bare file name, got {name!r}")
        if not self.png_name.lower().endswith(".png"):
            raise ConfigurationError("png_name must end with .png")
        if not self.gif_name.lower().endswith(".gif"):
            raise ConfigurationError("gif_name must end with .gif")
