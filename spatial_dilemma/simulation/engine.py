"""Round engine: scoring phase, imitation phase, and multi-round runs.

One round is two strictly separated phases. The scoring phase reads the
frozen input board and produces a new board carrying this round's scores.
The imitation phase reads only that frozen scored board and builds the next
generation from scratch. No phase ever reads a board that is still being
built.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from spatial_dilemma.config.constants import FLUSH_THRESHOLD
from spatial_dilemma.config.types import (
    EvolutionConfig,
    SimulationResult,
    validate_payoff_parameter,
    validate_rounds,
)
from spatial_dilemma.domain.board import Board, Cell
from spatial_dilemma.domain.errors import ConfigurationError, InvariantViolationError
from spatial_dilemma.domain.neighbors import moore_neighbors
from spatial_dilemma.domain.payoff import pairwise_payoff
from spatial_dilemma.domain.strategy import Strategy
from spatial_dilemma.io.paths import generation_log_path, generation_metrics_path, run_payload_path
from spatial_dilemma.io.schemas import GENERATION_METRICS_SCHEMA, RUN_PAYLOAD_SCHEMA_VERSION
from spatial_dilemma.simulation.persistence import flush_columns
from spatial_dilemma.simulation.step import compute_generation_metrics

logger = logging.getLogger(__name__)


def _require_strategy(board: Board, row: int, col: int) -> Strategy:
    strategy = board.cells[row][col].strategy
    if not isinstance(strategy, Strategy):
        raise InvariantViolationError(
            f"cell ({row}, {col}) has no valid strategy: {strategy!r}"
        )
    return strategy


def score_board(board: Board, b: float) -> Board:
    """Scoring phase: play every cell against each of its neighbors.

    Scores start from zero. Cells are visited in row-major order and each
    neighbor in locator order; both participants receive their payoff on
    every visit, so each neighboring pair plays twice per round (once from
    each side). Returns a new board; *board* is not modified.
    """
    b = validate_payoff_parameter(b)
    num_rows, num_cols = board.shape
    strategies = [
        [_require_strategy(board, r, c) for c in range(num_cols)] for r in range(num_rows)
    ]
    scores = [[0.0] * num_cols for _ in range(num_rows)]

    for r in range(num_rows):
        for c in range(num_cols):
            for nr, nc in moore_neighbors(r, c, num_rows, num_cols):
                self_delta, opp_delta = pairwise_payoff(strategies[r][c], strategies[nr][nc], b)
                scores[r][c] += self_delta
                scores[nr][nc] += opp_delta

    return Board(
        cells=tuple(
            tuple(Cell(strategy=strategies[r][c], score=scores[r][c]) for c in range(num_cols))
            for r in range(num_rows)
        )
    )


def best_neighbor(scored: Board, row: int, col: int) -> tuple[int, int]:
    """Return the highest-scoring position in the closed neighborhood of ``(row, col)``.

    The cell itself is the initial candidate; a neighbor replaces the current
    best only when its score is strictly greater, so ties keep the earlier
    candidate in locator order.
    """
    num_rows, num_cols = scored.shape
    best = (row, col)
    best_score = scored.cells[row][col].score
    for nr, nc in moore_neighbors(row, col, num_rows, num_cols):
        neighbor_score = scored.cells[nr][nc].score
        if neighbor_score > best_score:
            best = (nr, nc)
            best_score = neighbor_score
    return best


def imitate(scored: Board) -> Board:
    """Imitation phase: each cell adopts its best neighbor's strategy, score reset to 0."""
    num_rows, num_cols = scored.shape
    next_rows: list[tuple[Cell, ...]] = []
    for r in range(num_rows):
        next_row: list[Cell] = []
        for c in range(num_cols):
            br, bc = best_neighbor(scored, r, c)
            next_row.append(Cell(strategy=_require_strategy(scored, br, bc), score=0.0))
        next_rows.append(tuple(next_row))
    return Board(cells=tuple(next_rows))


def validate_board(board: Board) -> None:
    """Reject boards the engine cannot evolve, before any round runs."""
    if board.shape == (1, 1):
        raise ConfigurationError("1x1 board: no neighbors to play against")
    invalid = [
        (r, c) for r, c, cell in board.iter_cells() if not isinstance(cell.strategy, Strategy)
    ]
    if invalid:
        r, c = invalid[0]
        raise InvariantViolationError(
            f"cell ({r}, {c}) has no strategy; {len(invalid)} unset cell(s) in total"
        )


def evolve_once(board: Board, b: float) -> Board:
    """Run one full scoring + imitation round and return the next generation."""
    validate_board(board)
    return imitate(score_board(board, b))


def evolve(board: Board, b: float, rounds: int) -> list[Board]:
    """Return the generation sequence ``[board, gen1, ..., gen_rounds]``."""
    b = validate_payoff_parameter(b)
    rounds = validate_rounds(rounds)
    validate_board(board)
    generations = [board]
    current = board
    for round_index in range(1, rounds + 1):
        current = evolve_once(current, b)
        generations.append(current)
        logger.debug(
            "round %d: %d cooperators, %d defectors",
            round_index,
            current.count(Strategy.COOPERATE),
            current.count(Strategy.DEFECT),
        )
    return generations


def _first_fixed_point(generations: list[Board]) -> int | None:
    for index in range(1, len(generations)):
        if generations[index].strategy_rows() == generations[index - 1].strategy_rows():
            return index
    return None


def run_evolution(
    board: Board,
    config: EvolutionConfig,
    out_dir: Path | None = None,
    run_id: str = "run",
) -> tuple[list[Board], SimulationResult]:
    """Evolve *board* for ``config.rounds`` rounds, optionally persisting run logs.

    When *out_dir* is given, per-cell strategies for every generation are
    streamed to ``logs/<run_id>_generation_log.parquet``, per-generation
    metrics to ``logs/<run_id>_generation_metrics.parquet``, and a JSON
    payload describing the run to ``runs/<run_id>.json``.
    """
    generations = evolve(board, config.b, config.rounds)
    initial_metrics = compute_generation_metrics(generations[0], None)
    final_metrics = compute_generation_metrics(
        generations[-1], generations[-2] if len(generations) > 1 else None
    )
    result = SimulationResult(
        run_id=run_id,
        rounds=config.rounds,
        num_rows=board.num_rows,
        num_cols=board.num_cols,
        initial_cooperator_fraction=float(initial_metrics["cooperator_fraction"]),
        final_cooperator_fraction=float(final_metrics["cooperator_fraction"]),
        fixed_point_at=_first_fixed_point(generations),
    )
    logger.info(
        "run %s: %d rounds on %dx%d board, cooperators %.3f -> %.3f",
        run_id,
        config.rounds,
        board.num_rows,
        board.num_cols,
        result.initial_cooperator_fraction,
        result.final_cooperator_fraction,
    )

    if out_dir is not None:
        _persist_run(generations, config, Path(out_dir), result)
    return generations, result


def _persist_run(
    generations: list[Board],
    config: EvolutionConfig,
    out_dir: Path,
    result: SimulationResult,
) -> None:
    log_path = generation_log_path(out_dir, result.run_id)
    metrics_path = generation_metrics_path(out_dir, result.run_id)
    payload_path = run_payload_path(out_dir, result.run_id)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    payload_path.parent.mkdir(parents=True, exist_ok=True)

    log_columns: dict[str, list[int | str]] = {
        "run_id": [],
        "generation": [],
        "row": [],
        "col": [],
        "strategy": [],
    }
    metric_columns: dict[str, list[int | str | float | None]] = {
        field.name: [] for field in GENERATION_METRICS_SCHEMA
    }
    log_writer: pq.ParquetWriter | None = None
    try:
        previous: Board | None = None
        for generation, board in enumerate(generations):
            for r, symbols in enumerate(board.strategy_rows()):
                for c, symbol in enumerate(symbols):
                    log_columns["run_id"].append(result.run_id)
                    log_columns["generation"].append(generation)
                    log_columns["row"].append(r)
                    log_columns["col"].append(c)
                    log_columns["strategy"].append(symbol)
            if len(log_columns["run_id"]) >= FLUSH_THRESHOLD:
                log_writer = flush_columns(log_columns, log_path, log_writer)

            metric_columns["run_id"].append(result.run_id)
            metric_columns["generation"].append(generation)
            for key, value in compute_generation_metrics(board, previous).items():
                metric_columns[key].append(value)
            previous = board

        log_writer = flush_columns(log_columns, log_path, log_writer)
    finally:
        if log_writer is not None:
            log_writer.close()

    pq.write_table(
        pa.Table.from_pydict(metric_columns, schema=GENERATION_METRICS_SCHEMA), metrics_path
    )

    payload = {
        "run_id": result.run_id,
        "parameters": {"b": config.b, "rounds": config.rounds},
        "board": {"num_rows": result.num_rows, "num_cols": result.num_cols},
        "initial_strategies": generations[0].strategy_rows(),
        "final_strategies": generations[-1].strategy_rows(),
        "summary": {
            "initial_cooperator_fraction": result.initial_cooperator_fraction,
            "final_cooperator_fraction": result.final_cooperator_fraction,
            "fixed_point_at": result.fixed_point_at,
        },
        "schema_version": RUN_PAYLOAD_SCHEMA_VERSION,
    }
    payload_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2))
    logger.info("wrote run logs for %s under %s", result.run_id, out_dir)
