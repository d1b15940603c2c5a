"""Tests for spatial_dilemma.viz rendering and themes."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402
from PIL import Image  # noqa: E402

from spatial_dilemma.config.types import EvolutionConfig  # noqa: E402
from spatial_dilemma.domain.board import Board, initialize_board  # noqa: E402
from spatial_dilemma.domain.errors import ConfigurationError  # noqa: E402
from spatial_dilemma.io.paths import generation_metrics_path  # noqa: E402
from spatial_dilemma.simulation.engine import evolve, run_evolution  # noqa: E402
from spatial_dilemma.viz.render import (  # noqa: E402
    board_to_array,
    board_to_rgb,
    render_board,
    render_generations,
    render_metric_timeseries,
)
from spatial_dilemma.viz.theme import (  # noqa: E402
    DEFAULT_THEME,
    PAPER_THEME,
    Theme,
    get_theme,
)

BLUE = [0, 0, 255]
RED = [255, 0, 0]


class TestBoardArrays:
    def test_board_to_array(self) -> None:
        grid = board_to_array(Board.from_strategy_rows(["CD", "DD", "CC"]))
        assert grid.shape == (3, 2)
        assert grid.tolist() == [[0, 1], [1, 1], [0, 0]]

    def test_unset_cell_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match=r"cell \(0, 0\)"):
            board_to_array(initialize_board(1, 2))

    def test_rgb_colors_and_orientation(self) -> None:
        image = board_to_rgb(Board.from_strategy_rows(["CDD", "CCD"]))
        assert image.shape == (2, 3, 3)
        assert image.dtype == np.uint8
        assert image[0, 0].tolist() == BLUE
        assert image[0, 1].tolist() == RED
        assert image[1, 1].tolist() == BLUE
        assert image[1, 2].tolist() == RED

    def test_rgb_cell_size_blocks(self) -> None:
        image = board_to_rgb(Board.from_strategy_rows(["CD"]), cell_size=4)
        assert image.shape == (4, 8, 3)
        assert (image[:, :4] == BLUE).all()
        assert (image[:, 4:] == RED).all()

    def test_rgb_rejects_bad_cell_size(self) -> None:
        with pytest.raises(ValueError, match="cell_size"):
            board_to_rgb(Board.from_strategy_rows(["CD"]), cell_size=0)


class TestRenderBoard:
    def test_png_dimensions(self, tmp_path: Path) -> None:
        path = render_board(Board.from_strategy_rows(["CDC", "DDC"]), tmp_path / "b.png", 5)
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.size == (15, 10)
            rgb = img.convert("RGB")
            assert list(rgb.getpixel((0, 0))) == BLUE
            assert list(rgb.getpixel((5, 0))) == RED

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = render_board(Board.from_strategy_rows(["CD"]), tmp_path / "nested" / "b.png")
        assert path.exists()


class TestRenderGenerations:
    def test_writes_gif(self, tmp_path: Path) -> None:
        boards = evolve(Board.from_strategy_rows(["CCC", "CDC", "CCC"]), 3.0, 2)
        path = render_generations(boards, tmp_path / "run.gif", fps=4)
        with Image.open(path) as img:
            assert img.format == "GIF"

    def test_empty_sequence_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="empty"):
            render_generations([], tmp_path / "run.gif")

    def test_bad_fps_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="fps"):
            render_generations([Board.from_strategy_rows(["CD"])], tmp_path / "run.gif", fps=0)

    def test_shape_mismatch_rejected(self, tmp_path: Path) -> None:
        boards = [Board.from_strategy_rows(["CD"]), Board.from_strategy_rows(["CD", "DC"])]
        with pytest.raises(ValueError, match="generation 1"):
            render_generations(boards, tmp_path / "run.gif")


class TestMetricTimeseries:
    def test_plots_run_metrics(self, tmp_path: Path) -> None:
        board = Board.from_strategy_rows(["CCC", "CDC", "CCC"])
        run_evolution(board, EvolutionConfig(b=3.0, rounds=3), tmp_path, "center")
        path = render_metric_timeseries(
            generation_metrics_path(tmp_path, "center"),
            tmp_path / "metrics.png",
            metric_names=["cooperator_fraction", "strategy_changes"],
            run_id="center",
        )
        assert path.exists()

    def test_unknown_run_id(self, tmp_path: Path) -> None:
        board = Board.from_strategy_rows(["CC", "CD"])
        run_evolution(board, EvolutionConfig(b=2.0, rounds=1), tmp_path, "present")
        with pytest.raises(ValueError, match="No metric rows"):
            render_metric_timeseries(
                generation_metrics_path(tmp_path, "present"), tmp_path / "m.png", run_id="absent"
            )


class TestThemes:
    def test_default_colors(self) -> None:
        assert DEFAULT_THEME.strategy_colors == ("#0000FF", "#FF0000")

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_theme("Paper") is PAPER_THEME

    def test_unknown_theme(self) -> None:
        with pytest.raises(ValueError, match="Unknown theme"):
            get_theme("neon")

    def test_paper_theme_renders(self) -> None:
        image = board_to_rgb(Board.from_strategy_rows(["CD"]), theme=PAPER_THEME)
        assert image[0, 0].tolist() == [31, 119, 180]

    def test_custom_theme_colors_reach_the_image(self) -> None:
        theme = Theme(cooperate_color="#00FF00", defect_color="#000000")
        image = board_to_rgb(Board.from_strategy_rows(["CD"]), theme=theme)
        assert image[0, 0].tolist() == [0, 255, 0]
        assert image[0, 1].tolist() == [0, 0, 0]
