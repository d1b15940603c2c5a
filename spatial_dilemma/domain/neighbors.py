"""Moore-neighborhood lookup on a bounded (non-toroidal) rectangular board.

Neighbors are enumerated in a fixed order, NW, N, NE, W, E, SW, S, SE (a
row-major scan of the 3x3 window around the cell), with out-of-bounds
positions dropped. The imitation rule breaks ties by this order, so it must
never change.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from spatial_dilemma.domain.board import Coord
from spatial_dilemma.domain.errors import ConfigurationError

MOORE_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)
"""(row, col) offsets in neighbor enumeration order."""

PositionKind = Literal["corner", "edge", "interior"]


def _validate(row: int, col: int, num_rows: int, num_cols: int) -> None:
    if num_rows < 1 or num_cols < 1:
        raise ConfigurationError(f"board dimensions must be >= 1x1, got {num_rows}x{num_cols}")
    if num_rows == 1 and num_cols == 1:
        raise ConfigurationError("1x1 board: no neighbors to play against")
    if not (0 <= row < num_rows and 0 <= col < num_cols):
        raise ConfigurationError(
            f"coordinate out of range ({row}, {col}) for a {num_rows}x{num_cols} board"
        )


@lru_cache(maxsize=65_536)
def _moore_neighbors_cached(row: int, col: int, num_rows: int, num_cols: int) -> tuple[Coord, ...]:
    return tuple(
        (row + dr, col + dc)
        for dr, dc in MOORE_OFFSETS
        if 0 <= row + dr < num_rows and 0 <= col + dc < num_cols
    )


def moore_neighbors(row: int, col: int, num_rows: int, num_cols: int) -> tuple[Coord, ...]:
    """Return in-bounds Moore neighbors of ``(row, col)``, excluding the cell itself.

    Interior cells get 8 neighbors, edge cells 5 and corner cells 3 on boards
    of at least 2x2. On single-row or single-column strips, end cells get 1
    and middle cells 2.

    Raises :exc:`ConfigurationError` for a 1x1 board (there is nobody to play
    against) and for positions outside the board.
    """
    _validate(row, col, num_rows, num_cols)
    return _moore_neighbors_cached(row, col, num_rows, num_cols)


def classify_position(row: int, col: int, num_rows: int, num_cols: int) -> PositionKind:
    """Classify a position as corner, edge, or interior of the board."""
    _validate(row, col, num_rows, num_cols)
    on_row_border = row in (0, num_rows - 1)
    on_col_border = col in (0, num_cols - 1)
    if on_row_border and on_col_border:
        return "corner"
    if on_row_border or on_col_border:
        return "edge"
    return "interior"
