"""Board text format: loading and printing.

A board file starts with a header line ``"<rows> <cols>"`` followed by
exactly ``rows`` lines of exactly ``cols`` strategy symbols (``C`` or ``D``)::

    3 3
    CCC
    CDC
    CCC

Trailing blank lines are ignored. Any other deviation is a
:exc:`ConfigurationError` naming the offending line.
"""

from __future__ import annotations

from pathlib import Path

from spatial_dilemma.domain.board import Board
from spatial_dilemma.domain.errors import ConfigurationError


def _parse_header(line: str) -> tuple[int, int]:
    tokens = line.split()
    if len(tokens) != 2:
        raise ConfigurationError(f"line 1: expected '<rows> <cols>' header, got {line!r}")
    try:
        num_rows, num_cols = int(tokens[0]), int(tokens[1])
    except ValueError as exc:
        raise ConfigurationError(
            f"line 1: board dimensions must be integers, got {line!r}"
        ) from exc
    if num_rows < 1 or num_cols < 1:
        raise ConfigurationError(
            f"line 1: board dimensions must be >= 1x1, got {num_rows}x{num_cols}"
        )
    return num_rows, num_cols


def parse_board(text: str) -> Board:
    """Parse board text into a fully populated board with zero scores."""
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise ConfigurationError("board text is empty")

    num_rows, num_cols = _parse_header(lines[0])
    body = [line.rstrip("\r\n ") for line in lines[1:]]
    if len(body) != num_rows:
        raise ConfigurationError(f"header declares {num_rows} rows but {len(body)} were given")

    for offset, row in enumerate(body):
        line_number = offset + 2
        if len(row) != num_cols:
            raise ConfigurationError(
                f"line {line_number}: expected {num_cols} cells, got {len(row)}"
            )
        for col, symbol in enumerate(row):
            if symbol not in ("C", "D"):
                raise ConfigurationError(
                    f"line {line_number}, column {col}: invalid strategy {symbol!r}"
                )

    return Board.from_strategy_rows(body)


def load_board(path: Path) -> Board:
    """Read and parse a board file."""
    path = Path(path)
    try:
        text = path.read_text()
    except FileNotFoundError as exc:
        raise ConfigurationError(f"board file not found: {path}") from exc
    except OSError as exc:
        raise ConfigurationError(f"cannot read board file {path}: {exc.strerror or exc}") from exc
    return parse_board(text)


def dump_board(board: Board) -> str:
    """Serialize a populated board back to the board text format."""
    if not board.is_populated():
        raise ConfigurationError("cannot serialize a board with unset cells")
    header = f"{board.num_rows} {board.num_cols}"
    return "\n".join([header, *board.strategy_rows()]) + "\n"


def format_strategies(board: Board) -> str:
    """One line of strategy symbols per row."""
    return "\n".join(board.strategy_rows())


def format_scores(board: Board) -> str:
    """One line of space-separated scores (six decimals) per row."""
    return "\n".join(" ".join(f"{cell.score:f}" for cell in row) for row in board.cells)
