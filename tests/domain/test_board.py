"""Tests for spatial_dilemma.domain.board and strategy modules."""

from __future__ import annotations

import dataclasses

import pytest

from spatial_dilemma.domain.board import (
    Board,
    Cell,
    board_from_strategies,
    copy_board,
    initialize_board,
)
from spatial_dilemma.domain.errors import ConfigurationError
from spatial_dilemma.domain.strategy import Strategy, parse_strategy


class TestStrategy:
    def test_symbols(self) -> None:
        assert Strategy.COOPERATE.symbol == "C"
        assert Strategy.DEFECT.symbol == "D"

    def test_parse_strategy(self) -> None:
        assert parse_strategy("C") is Strategy.COOPERATE
        assert parse_strategy("D") is Strategy.DEFECT

    @pytest.mark.parametrize("symbol", ["c", "X", "", "CD"])
    def test_parse_invalid_strategy(self, symbol: str) -> None:
        with pytest.raises(ConfigurationError, match="invalid strategy"):
            parse_strategy(symbol)


class TestInitializeBoard:
    def test_shape_and_unset_cells(self) -> None:
        board = initialize_board(2, 3)
        assert board.shape == (2, 3)
        assert all(cell == Cell(strategy=None, score=0.0) for _, _, cell in board.iter_cells())
        assert not board.is_populated()
        assert len(board.unset_positions()) == 6

    @pytest.mark.parametrize(("rows", "cols"), [(0, 3), (3, 0), (-1, 2)])
    def test_rejects_empty_dimensions(self, rows: int, cols: int) -> None:
        with pytest.raises(ConfigurationError, match="dimensions"):
            initialize_board(rows, cols)

    def test_fill_with_with_strategy(self) -> None:
        board = initialize_board(1, 2)
        board = board.with_strategy(0, 0, Strategy.COOPERATE)
        board = board.with_strategy(0, 1, Strategy.DEFECT)
        assert board.is_populated()
        assert board.strategy_rows() == ["CD"]


class TestBoardValue:
    def test_from_strategy_rows(self) -> None:
        board = Board.from_strategy_rows(["CD", "DC", "CC"])
        assert board.shape == (3, 2)
        assert board.strategy_at(0, 1) is Strategy.DEFECT
        assert board.score_at(2, 1) == 0.0
        assert board.count(Strategy.COOPERATE) == 4

    def test_from_strategy_rows_validates_symbols(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid strategy"):
            Board.from_strategy_rows(["CC", "CX"])

    def test_ragged_rows_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="row 1"):
            Board.from_strategy_rows(["CCC", "CC"])

    def test_empty_board_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            Board(cells=())
        with pytest.raises(ConfigurationError):
            Board(cells=((),))

    def test_board_is_frozen(self) -> None:
        board = Board.from_strategy_rows(["CC"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            board.cells = ()  # type: ignore[misc]
        with pytest.raises(dataclasses.FrozenInstanceError):
            board.cells[0][0].score = 3.0  # type: ignore[misc]

    def test_with_strategy_returns_new_board(self) -> None:
        board = Board.from_strategy_rows(["CC", "CC"])
        updated = board.with_strategy(1, 0, Strategy.DEFECT)
        assert board.strategy_rows() == ["CC", "CC"]
        assert updated.strategy_rows() == ["CC", "DC"]

    def test_cell_out_of_range(self) -> None:
        board = Board.from_strategy_rows(["CC"])
        with pytest.raises(ConfigurationError, match="outside"):
            board.cell(1, 0)

    def test_iter_cells_is_row_major(self) -> None:
        board = Board.from_strategy_rows(["CD", "DC"])
        assert [(r, c) for r, c, _ in board.iter_cells()] == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_unset_cells_print_as_question_mark(self) -> None:
        board = initialize_board(1, 2).with_strategy(0, 1, Strategy.DEFECT)
        assert board.strategy_rows() == ["?D"]


class TestCopyBoard:
    def test_copy_is_equal_but_distinct(self) -> None:
        original = Board(
            cells=(
                (Cell(Strategy.COOPERATE, 2.0), Cell(Strategy.DEFECT, 4.5)),
                (Cell(Strategy.DEFECT, 0.0), Cell(Strategy.COOPERATE, 1.0)),
            )
        )
        copied = copy_board(original)
        assert copied == original
        assert copied is not original
        assert copied.cells is not original.cells

    def test_board_from_strategies(self) -> None:
        board = board_from_strategies([[Strategy.DEFECT, Strategy.COOPERATE]])
        assert board.strategy_rows() == ["DC"]
        assert board.score_at(0, 0) == 0.0


class TestConstructionInvariants:
    @pytest.mark.parametrize("strategy", ["X", "C", 0, True])
    def test_cell_rejects_non_strategy(self, strategy: object) -> None:
        with pytest.raises(ConfigurationError, match="invalid strategy"):
            Cell(strategy)  # type: ignore[arg-type]

    def test_board_rejects_non_cell_entries(self) -> None:
        with pytest.raises(ConfigurationError, match=r"cell \(0, 1\) is not a Cell"):
            Board(cells=((Cell(Strategy.COOPERATE), "D"),))  # type: ignore[arg-type]

    def test_list_cells_are_frozen_into_tuples(self) -> None:
        row = [Cell(Strategy.COOPERATE), Cell(Strategy.COOPERATE)]
        board = Board(cells=[row])  # type: ignore[arg-type]
        row[0] = Cell(Strategy.DEFECT)
        assert isinstance(board.cells, tuple)
        assert all(isinstance(r, tuple) for r in board.cells)
        assert board.strategy_rows() == ["CC"]
        assert hash(board) == hash(Board.from_strategy_rows(["CC"]))
