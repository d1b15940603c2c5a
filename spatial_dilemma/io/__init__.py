"""I/O layer: board text format, output paths, and Parquet schemas."""

from spatial_dilemma.io.board_file import (
    dump_board,
    format_scores,
    format_strategies,
    load_board,
    parse_board,
)
from spatial_dilemma.io.paths import (
    generation_log_path,
    generation_metrics_path,
    run_id_for,
    run_payload_path,
)
from spatial_dilemma.io.schemas import (
    GENERATION_LOG_SCHEMA,
    GENERATION_METRIC_NAMES,
    GENERATION_METRICS_SCHEMA,
    RUN_PAYLOAD_SCHEMA_VERSION,
)

__all__ = [
    "GENERATION_LOG_SCHEMA",
    "GENERATION_METRICS_SCHEMA",
    "GENERATION_METRIC_NAMES",
    "RUN_PAYLOAD_SCHEMA_VERSION",
    "dump_board",
    "format_scores",
    "format_strategies",
    "generation_log_path",
    "generation_metrics_path",
    "load_board",
    "parse_board",
    "run_id_for",
    "run_payload_path",
]
