"""Immutable rectangular board of Prisoner's Dilemma agents.

A ``Board`` is a value: every generation is a distinct instance and no
operation mutates one in place. Cells are frozen ``Cell`` records stored in a
tuple of row tuples, addressed by ``(row, col)``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from spatial_dilemma.domain.errors import ConfigurationError
from spatial_dilemma.domain.strategy import Strategy, parse_strategy

Coord = tuple[int, int]
"""A ``(row, col)`` board position."""


@dataclass(frozen=True)
class Cell:
    """A single agent: its strategy and the score accumulated this round.

    ``strategy`` is ``None`` only on boards allocated by ``initialize_board``
    that have not been filled in yet.
    """

    strategy: Strategy | None
    score: float = 0.0

    def __post_init__(self) -> None:
        if self.strategy is not None and not isinstance(self.strategy, Strategy):
            raise ConfigurationError(f"invalid strategy {self.strategy!r}; expected C or D")


_UNSET_CELL = Cell(strategy=None)


@dataclass(frozen=True)
class Board:
    """Rectangular R x C grid of cells (R >= 1, C >= 1)."""

    cells: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(tuple(row) for row in self.cells))
        if not self.cells:
            raise ConfigurationError("board must have at least one row")
        width = len(self.cells[0])
        if width < 1:
            raise ConfigurationError("board must have at least one column")
        for row_index, row in enumerate(self.cells):
            if len(row) != width:
                raise ConfigurationError(
                    f"board row {row_index} has {len(row)} cells, expected {width}"
                )
            for col_index, cell in enumerate(row):
                if not isinstance(cell, Cell):
                    raise ConfigurationError(
                        f"board cell ({row_index}, {col_index}) is not a Cell: {cell!r}"
                    )

    @classmethod
    def from_strategy_rows(cls, rows: Sequence[str]) -> Board:
        """Build a populated board from rows of ``C``/``D`` symbols.

        Every symbol is validated here, at construction time.
        """
        return cls(
            cells=tuple(
                tuple(Cell(strategy=parse_strategy(symbol)) for symbol in row) for row in rows
            )
        )

    @property
    def num_rows(self) -> int:
        return len(self.cells)

    @property
    def num_cols(self) -> int:
        return len(self.cells[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.num_rows, self.num_cols

    def cell(self, row: int, col: int) -> Cell:
        if not (0 <= row < self.num_rows and 0 <= col < self.num_cols):
            raise ConfigurationError(
                f"position ({row}, {col}) is outside a {self.num_rows}x{self.num_cols} board"
            )
        return self.cells[row][col]

    def strategy_at(self, row: int, col: int) -> Strategy | None:
        return self.cell(row, col).strategy

    def score_at(self, row: int, col: int) -> float:
        return self.cell(row, col).score

    def with_strategy(self, row: int, col: int, strategy: Strategy) -> Board:
        """Return a new board with one cell's strategy replaced (score kept)."""
        current = self.cell(row, col)
        new_row = list(self.cells[row])
        new_row[col] = Cell(strategy=strategy, score=current.score)
        rows = list(self.cells)
        rows[row] = tuple(new_row)
        return Board(cells=tuple(rows))

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(row, col, cell)`` in row-major order."""
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                yield r, c, cell

    def unset_positions(self) -> list[Coord]:
        return [(r, c) for r, c, cell in self.iter_cells() if cell.strategy is None]

    def is_populated(self) -> bool:
        return not self.unset_positions()

    def strategy_rows(self) -> list[str]:
        """Rows of strategy symbols; unset cells appear as ``?``."""
        return [
            "".join(cell.strategy.symbol if cell.strategy is not None else "?" for cell in row)
            for row in self.cells
        ]

    def count(self, strategy: Strategy) -> int:
        return sum(1 for _, _, cell in self.iter_cells() if cell.strategy is strategy)


def _require_dimensions(num_rows: int, num_cols: int) -> None:
    if num_rows < 1 or num_cols < 1:
        raise ConfigurationError(
            f"board dimensions must be >= 1x1, got {num_rows}x{num_cols}"
        )


def initialize_board(num_rows: int, num_cols: int) -> Board:
    """Allocate a board whose cells have no strategy yet and a zero score.

    The caller (normally the board loader) fills strategies afterwards with
    ``Board.with_strategy`` or builds a populated board directly.
    """
    _require_dimensions(num_rows, num_cols)
    row = tuple(_UNSET_CELL for _ in range(num_cols))
    return Board(cells=tuple(row for _ in range(num_rows)))


def board_from_strategies(strategies: Iterable[Iterable[Strategy]]) -> Board:
    """Build a board with zero scores from a nested iterable of strategies."""
    return Board(
        cells=tuple(tuple(Cell(strategy=strategy) for strategy in row) for row in strategies)
    )


def copy_board(board: Board) -> Board:
    """Deep value copy of *board*.

    Boards are immutable, but callers that keep a generation snapshot while
    evolving a working copy get a distinct instance with equal contents.
    """
    return Board(
        cells=tuple(
            tuple(Cell(strategy=cell.strategy, score=cell.score) for cell in row)
            for row in board.cells
        )
    )
