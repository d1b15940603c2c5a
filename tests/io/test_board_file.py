"""Tests for spatial_dilemma.io.board_file loader and printers."""

from __future__ import annotations

from pathlib import Path

import pytest

from spatial_dilemma.domain.board import Board, Cell, initialize_board
from spatial_dilemma.domain.errors import ConfigurationError
from spatial_dilemma.domain.strategy import Strategy
from spatial_dilemma.io.board_file import (
    dump_board,
    format_scores,
    format_strategies,
    load_board,
    parse_board,
)
from spatial_dilemma.simulation.engine import score_board


class TestParseBoard:
    def test_valid_board(self) -> None:
        board = parse_board("2 3\nCDC\nDDC\n")
        assert board.shape == (2, 3)
        assert board.strategy_rows() == ["CDC", "DDC"]
        assert all(cell.score == 0.0 for _, _, cell in board.iter_cells())

    def test_trailing_blank_lines_ignored(self) -> None:
        assert parse_board("1 2\nCD\n\n\n").strategy_rows() == ["CD"]

    def test_windows_line_endings(self) -> None:
        assert parse_board("2 2\r\nCD\r\nDC\r\n").strategy_rows() == ["CD", "DC"]

    def test_empty_text(self) -> None:
        with pytest.raises(ConfigurationError, match="empty"):
            parse_board("\n\n")

    @pytest.mark.parametrize("header", ["3", "3 3 3", "three 3", "0 3", "2 -1"])
    def test_bad_header(self, header: str) -> None:
        with pytest.raises(ConfigurationError, match="line 1"):
            parse_board(f"{header}\nCCC\n")

    def test_too_few_rows(self) -> None:
        with pytest.raises(ConfigurationError, match="declares 3 rows but 2"):
            parse_board("3 2\nCC\nCC\n")

    def test_too_many_rows(self) -> None:
        with pytest.raises(ConfigurationError, match="declares 1 rows but 2"):
            parse_board("1 2\nCC\nCC\n")

    def test_wrong_row_width(self) -> None:
        with pytest.raises(ConfigurationError, match="line 3: expected 3 cells, got 2"):
            parse_board("2 3\nCCC\nCC\n")

    def test_invalid_symbol_reports_position(self) -> None:
        with pytest.raises(ConfigurationError, match=r"line 2, column 1: invalid strategy 'x'"):
            parse_board("2 2\nCx\nCC\n")


class TestLoadBoard:
    def test_load_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "board.txt"
        path.write_text("3 3\nCCC\nCDC\nCCC\n")
        board = load_board(path)
        assert board.strategy_at(1, 1) is Strategy.DEFECT
        assert board.count(Strategy.COOPERATE) == 8

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_board(tmp_path / "missing.txt")

    def test_directory_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="cannot read board file"):
            load_board(tmp_path)


class TestPrinters:
    def test_dump_parses_back(self) -> None:
        board = Board.from_strategy_rows(["CDD", "DCC"])
        text = dump_board(board)
        assert text == "2 3\nCDD\nDCC\n"
        assert parse_board(text) == board

    def test_dump_rejects_unset_cells(self) -> None:
        with pytest.raises(ConfigurationError, match="unset"):
            dump_board(initialize_board(2, 2))

    def test_format_strategies(self) -> None:
        board = Board.from_strategy_rows(["CD", "DC"])
        assert format_strategies(board) == "CD\nDC"

    def test_format_scores(self) -> None:
        scored = score_board(Board.from_strategy_rows(["CC"]), 2.0)
        assert format_scores(scored) == "2.000000 2.000000"

    def test_format_scores_fractional(self) -> None:
        board = Board(cells=((Cell(Strategy.DEFECT, 1.85), Cell(Strategy.COOPERATE, 0.0)),))
        assert format_scores(board) == "1.850000 0.000000"
