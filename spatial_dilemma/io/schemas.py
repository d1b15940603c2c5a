"""Parquet schema definitions for evolution run artifacts.

The generation log stores one row per cell per generation; the metrics table
stores one row per generation. Both are keyed by ``run_id``.
"""

from __future__ import annotations

import pyarrow as pa

RUN_PAYLOAD_SCHEMA_VERSION = 1

GENERATION_LOG_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("generation", pa.int64()),
        ("row", pa.int64()),
        ("col", pa.int64()),
        ("strategy", pa.string()),
    ]
)

GENERATION_METRICS_SCHEMA = pa.schema(
    [
        ("run_id", pa.string()),
        ("generation", pa.int64()),
        ("cooperator_fraction", pa.float64()),
        ("cooperator_count", pa.int64()),
        ("defector_count", pa.int64()),
        ("strategy_changes", pa.int64()),
        ("cluster_count", pa.int64()),
    ]
)

GENERATION_METRIC_NAMES = [
    name for name in GENERATION_METRICS_SCHEMA.names if name not in ("run_id", "generation")
]
"""Metric columns produced by ``compute_generation_metrics``."""
