"""CLI entrypoint: board file -> N rounds of evolution -> images and run logs.

This module owns argument parsing, config-file resolution, and output
wiring. Domain logic lives in:

- ``spatial_dilemma.io.board_file``        – board text loader and printers
- ``spatial_dilemma.simulation.engine``    – scoring/imitation rounds, run logs
- ``spatial_dilemma.viz.render``           – PNG/GIF/metric rendering
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import matplotlib

from spatial_dilemma.config.constants import (
    DEFAULT_B,
    DEFAULT_CELL_SIZE,
    DEFAULT_FPS,
    DEFAULT_GIF_NAME,
    DEFAULT_OUT_DIR,
    DEFAULT_PNG_NAME,
    DEFAULT_ROUNDS,
)
from spatial_dilemma.config.types import EvolutionConfig, RenderConfig, RunConfig
from spatial_dilemma.domain.errors import ConfigurationError
from spatial_dilemma.io.board_file import format_strategies, load_board
from spatial_dilemma.io.paths import generation_metrics_path, run_id_for
from spatial_dilemma.simulation.engine import run_evolution
from spatial_dilemma.viz.render import (
    render_board,
    render_generations,
    render_metric_timeseries,
)
from spatial_dilemma.viz.theme import REGISTERED_THEMES, get_theme

logger = logging.getLogger(__name__)

METRICS_PLOT_NAME = "cooperation.png"
"""File name of the per-generation metrics plot written alongside the run log."""

# ---------------------------------------------------------------------------
# Config resolution helpers
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be a float value, got {raw!r}") from exc
    raise ValueError(f"{key} must be a float value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    """CLI > file > default resolution for boolean flags."""
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    """CLI > file > default resolution for integer values."""
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_float(
    cli_val: float | None, key: str, file_cfg: dict[str, object], default: float
) -> float:
    """CLI > file > default resolution for float values."""
    return _coerce_float(_get_val(cli_val, key, file_cfg, default), key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    """CLI > file > default resolution for string values."""
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Evolve a spatial Prisoner's Dilemma board and render the generations"
    )
    parser.add_argument("board_file", nargs="?", type=Path, default=None)
    parser.add_argument(
        "b",
        nargs="?",
        type=float,
        default=None,
        help="Payoff a defector earns against a cooperator",
    )
    parser.add_argument("rounds", nargs="?", type=int, default=None)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--png-name", type=str, default=None)
    parser.add_argument("--gif-name", type=str, default=None)
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--cell-size", type=int, default=None)
    parser.add_argument(
        "--theme",
        type=str,
        choices=sorted(REGISTERED_THEMES),
        default=None,
    )
    parser.add_argument(
        "--write-log",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Persist Parquet generation logs and a metrics plot",
    )
    parser.add_argument(
        "--print-board",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the final generation's strategies",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    return parser


def _resolve_run_config(
    args: argparse.Namespace, file_cfg: dict[str, object]
) -> tuple[RunConfig, bool]:
    board_raw = _get_val(args.board_file, "board_file", file_cfg, None)
    if board_raw is None:
        raise ConfigurationError("board_file is required (positional or in --config)")
    evolution = EvolutionConfig(
        b=_get_float(args.b, "b", file_cfg, DEFAULT_B),
        rounds=_get_int(args.rounds, "rounds", file_cfg, DEFAULT_ROUNDS),
    )
    render = RenderConfig(
        fps=_get_int(args.fps, "fps", file_cfg, DEFAULT_FPS),
        cell_size=_get_int(args.cell_size, "cell_size", file_cfg, DEFAULT_CELL_SIZE),
        theme_name=_get_str(args.theme, "theme", file_cfg, "default"),
    )
    get_theme(render.theme_name)
    run_config = RunConfig(
        board_path=Path(_coerce_str(board_raw, "board_file")),
        out_dir=Path(_get_str(args.out_dir, "out_dir", file_cfg, DEFAULT_OUT_DIR)),
        evolution=evolution,
        render=render,
        write_log=_get_bool(args.write_log, "write_log", file_cfg, True),
        png_name=_get_str(args.png_name, "png_name", file_cfg, DEFAULT_PNG_NAME),
        gif_name=_get_str(args.gif_name, "gif_name", file_cfg, DEFAULT_GIF_NAME),
    )
    print_board = _get_bool(args.print_board, "print_board", file_cfg, False)
    return run_config, print_board


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``--config path/to/config.json`` for reproducible runs. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    matplotlib.use("Agg")

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")
        if not isinstance(file_cfg, dict):
            parser.error(f"Config file must contain a JSON object: {args.config}")

    try:
        run_config, print_board = _resolve_run_config(args, file_cfg)
        board = load_board(run_config.board_path)
        run_id = run_id_for(
            run_config.board_path, run_config.evolution.b, run_config.evolution.rounds
        )
        generations, result = run_evolution(
            board,
            run_config.evolution,
            out_dir=run_config.out_dir if run_config.write_log else None,
            run_id=run_id,
        )
    except ValueError as exc:
        parser.error(str(exc))

    theme = get_theme(run_config.render.theme_name)
    out_dir = run_config.out_dir
    png_path = render_board(
        generations[-1],
        out_dir / run_config.png_name,
        cell_size=run_config.render.cell_size,
        theme=theme,
    )
    gif_path = render_generations(
        generations, out_dir / run_config.gif_name, fps=run_config.render.fps, theme=theme
    )
    outputs = {"png": str(png_path), "gif": str(gif_path)}
    if run_config.write_log:
        metrics_plot = render_metric_timeseries(
            generation_metrics_path(out_dir, run_id),
            out_dir / METRICS_PLOT_NAME,
            metric_names=["cooperator_fraction", "strategy_changes"],
            run_id=run_id,
            theme=theme,
        )
        outputs["metrics_plot"] = str(metrics_plot)
        outputs["generation_metrics"] = str(generation_metrics_path(out_dir, run_id))
    logger.info("rendered %d generations to %s", len(generations), out_dir)

    if print_board:
        print(format_strategies(generations[-1]))

    summary = {
        "run_id": result.run_id,
        "board": [result.num_rows, result.num_cols],
        "b": run_config.evolution.b,
        "rounds": result.rounds,
        "initial_cooperator_fraction": result.initial_cooperator_fraction,
        "final_cooperator_fraction": result.final_cooperator_fraction,
        "fixed_point_at": result.fixed_point_at,
        "outputs": outputs,
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
