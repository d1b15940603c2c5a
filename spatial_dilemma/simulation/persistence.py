"""Parquet persistence helpers for the generation log stream."""

from __future__ import annotations

import logging
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from spatial_dilemma.io.schemas import GENERATION_LOG_SCHEMA

logger = logging.getLogger(__name__)


def flush_columns(
    columns: dict[str, list[int | str]],
    log_path: Path,
    writer: pq.ParquetWriter | None,
    schema: pa.Schema = GENERATION_LOG_SCHEMA,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers.

    Opens the writer lazily on the first non-empty flush and returns it so the
    caller can keep streaming into the same file.
    """
    first_key = next(iter(columns))
    if not columns[first_key]:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(log_path, schema)
    writer.write_table(table)
    logger.debug("flushed %d rows to %s", table.num_rows, log_path)
    for values in columns.values():
        values.clear()
    return writer
