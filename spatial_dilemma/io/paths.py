"""Path construction helpers for run output directories."""

from __future__ import annotations

import re
from pathlib import Path

_SAFE_NAME_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


def run_id_for(board_path: Path, b: float, rounds: int) -> str:
    """Build a reproducible run ID from the board file stem and parameters."""
    stem = re.sub(r"[^A-Za-z0-9_\-]+", "_", Path(board_path).stem) or "board"
    b_token = f"{b:g}".replace(".", "p").replace("-", "m").replace("+", "")
    return f"{stem}_b{b_token}_r{rounds}"


def require_safe_name(name: str) -> str:
    if not _SAFE_NAME_RE.match(name):
        raise ValueError(f"Unsafe name for filename: {name!r}")
    return name


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def runs_dir(out_dir: Path) -> Path:
    """Return path to the run payload subdirectory within an output directory."""
    return out_dir / "runs"


def generation_log_path(out_dir: Path, run_id: str) -> Path:
    """Return path to one run's per-cell generation log Parquet file."""
    return logs_dir(out_dir) / f"{require_safe_name(run_id)}_generation_log.parquet"


def generation_metrics_path(out_dir: Path, run_id: str) -> Path:
    """Return path to one run's per-generation metrics Parquet file."""
    return logs_dir(out_dir) / f"{require_safe_name(run_id)}_generation_metrics.parquet"


def run_payload_path(out_dir: Path, run_id: str) -> Path:
    """Return path to the JSON payload describing one run."""
    return runs_dir(out_dir) / f"{require_safe_name(run_id)}.json"
