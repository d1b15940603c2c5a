"""Matplotlib-based rendering of boards, generation animations, and run metrics."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.parquet as pq
from matplotlib import animation
from matplotlib.colors import BoundaryNorm, ListedColormap, to_rgb

from spatial_dilemma.domain.board import Board
from spatial_dilemma.domain.errors import ConfigurationError
from spatial_dilemma.domain.strategy import Strategy
from spatial_dilemma.viz.theme import DEFAULT_THEME, Theme

_STRATEGY_INDEX = {Strategy.COOPERATE: 0, Strategy.DEFECT: 1}


def board_to_array(board: Board) -> np.ndarray:
    """Return an (R, C) int array: 0 for Cooperate, 1 for Defect.

    A cell without a valid strategy is a :exc:`ConfigurationError`.
    """
    grid = np.empty(board.shape, dtype=np.int8)
    for r, c, cell in board.iter_cells():
        index = _STRATEGY_INDEX.get(cell.strategy)  # type: ignore[arg-type]
        if index is None:
            raise ConfigurationError(
                f"cell ({r}, {c}) contains invalid strategy: {cell.strategy!r}"
            )
        grid[r, c] = index
    return grid


def board_to_rgb(board: Board, cell_size: int = 1, theme: Theme = DEFAULT_THEME) -> np.ndarray:
    """Return an (R*cell_size, C*cell_size, 3) uint8 image of *board*."""
    if cell_size < 1:
        raise ValueError("cell_size must be >= 1")
    palette = np.array(
        [[round(255 * channel) for channel in to_rgb(color)] for color in theme.strategy_colors],
        dtype=np.uint8,
    )
    image = palette[board_to_array(board)]
    if cell_size > 1:
        image = np.repeat(np.repeat(image, cell_size, axis=0), cell_size, axis=1)
    return image


def _strategy_cmap(theme: Theme = DEFAULT_THEME) -> tuple[ListedColormap, BoundaryNorm]:
    """Discrete 2-color colormap (Cooperate, Defect)."""
    cmap = ListedColormap(list(theme.strategy_colors))
    norm = BoundaryNorm([-0.5, 0.5, 1.5], cmap.N)
    return cmap, norm


def render_board(
    board: Board,
    output_path: Path,
    cell_size: int = 1,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Write *board* as a PNG with one ``cell_size`` x ``cell_size`` block per cell.

    Row ``r`` of the board is image row ``r`` (top to bottom).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(output_path, board_to_rgb(board, cell_size=cell_size, theme=theme))
    return output_path


def render_generations(
    boards: Sequence[Board],
    output_path: Path,
    fps: int = 8,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Render a generation sequence (oldest first) as an animated GIF."""
    if not boards:
        raise ValueError("boards must not be empty")
    if fps < 1:
        raise ValueError("fps must be >= 1")
    shape = boards[0].shape
    for index, board in enumerate(boards):
        if board.shape != shape:
            raise ValueError(f"generation {index} has shape {board.shape}, expected {shape}")
    grids = [board_to_array(board) for board in boards]

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    num_rows, num_cols = shape
    scale = 6.0 / max(num_rows, num_cols)
    fig, ax = plt.subplots(figsize=(max(2.0, num_cols * scale), max(2.0, num_rows * scale)))
    cmap, norm = _strategy_cmap(theme)
    img = ax.imshow(
        grids[0], cmap=cmap, norm=norm, origin="upper", aspect="equal", interpolation="nearest"
    )
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title("Generation 0")
    fig.tight_layout()

    def update(frame_index: int) -> tuple[Any, ...]:
        img.set_data(grids[frame_index])
        ax.set_title(f"Generation {frame_index}")
        return (img,)

    anim = animation.FuncAnimation(
        fig, update, frames=len(grids), interval=max(1, int(1000 / fps)), blit=False
    )
    anim.save(output_path, writer=animation.PillowWriter(fps=fps))
    plt.close(fig)
    return output_path


def render_metric_timeseries(
    metrics_path: Path,
    output_path: Path,
    metric_names: list[str] | None = None,
    run_id: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Plot per-generation metrics from a generation-metrics Parquet file."""
    if metric_names is None:
        metric_names = ["cooperator_fraction"]
    filters = [("run_id", "=", run_id)] if run_id is not None else None
    rows = pq.read_table(metrics_path, filters=filters).to_pylist()
    if not rows:
        raise ValueError(f"No metric rows found in {metrics_path}")
    rows.sort(key=lambda row: int(row["generation"]))
    generations = [int(row["generation"]) for row in rows]

    fig, axes = plt.subplots(
        len(metric_names), 1, figsize=(8, 2.5 * len(metric_names)), squeeze=False, sharex=True
    )
    for ax, name in zip(axes[:, 0], metric_names, strict=True):
        values = [np.nan if row.get(name) is None else float(row[name]) for row in rows]
        label = theme.metric_labels.get(name, name)
        ax.plot(generations, values, color=theme.metric_colors.get(name, "tab:blue"))
        ax.set_ylabel(label)
        ax.set_title(label)
        if name == "cooperator_fraction":
            ax.set_ylim(0.0, 1.0)
    axes[-1, 0].set_xlabel("Generation")
    fig.tight_layout()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path)
    plt.close(fig)
    return output_path
