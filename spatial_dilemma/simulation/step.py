"""Per-generation summary metrics for the run log."""

from __future__ import annotations

from spatial_dilemma.domain.board import Board
from spatial_dilemma.domain.strategy import Strategy


def strategy_changes(previous: Board, current: Board) -> int:
    """Count cells whose strategy differs between two same-shaped boards."""
    if previous.shape != current.shape:
        raise ValueError(f"board shapes differ: {previous.shape} vs {current.shape}")
    return sum(
        1
        for prev_row, curr_row in zip(previous.cells, current.cells, strict=True)
        for prev_cell, curr_cell in zip(prev_row, curr_row, strict=True)
        if prev_cell.strategy is not curr_cell.strategy
    )


def cluster_count_by_strategy(board: Board) -> int:
    """Count same-strategy connected components using the bounded 4-neighborhood."""
    num_rows, num_cols = board.shape
    seen: set[tuple[int, int]] = set()
    clusters = 0

    for start_r, start_c, start_cell in board.iter_cells():
        if (start_r, start_c) in seen:
            continue
        clusters += 1
        target = start_cell.strategy
        stack = [(start_r, start_c)]
        seen.add((start_r, start_c))
        while stack:
            r, c = stack.pop()
            for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
                if not (0 <= nr < num_rows and 0 <= nc < num_cols):
                    continue
                if (nr, nc) in seen or board.cells[nr][nc].strategy is not target:
                    continue
                seen.add((nr, nc))
                stack.append((nr, nc))

    return clusters


def compute_generation_metrics(
    board: Board, previous: Board | None
) -> dict[str, float | int | None]:
    """Compute summary values for one generation.

    ``strategy_changes`` is ``None`` for the initial generation, which has no
    predecessor.
    """
    total = board.num_rows * board.num_cols
    cooperators = board.count(Strategy.COOPERATE)
    return {
        "cooperator_fraction": cooperators / total,
        "cooperator_count": cooperators,
        "defector_count": board.count(Strategy.DEFECT),
        "strategy_changes": None if previous is None else strategy_changes(previous, board),
        "cluster_count": cluster_count_by_strategy(board),
    }
