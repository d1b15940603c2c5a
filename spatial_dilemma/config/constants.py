"""Centralized defaults for evolution runs, rendering, and persistence.

Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

DEFAULT_B = 1.85
"""Default temptation payoff a defector earns against a cooperator."""

DEFAULT_ROUNDS = 100
"""Default number of evolution rounds."""

DEFAULT_FPS = 8
"""Frames per second for generation animations."""

DEFAULT_CELL_SIZE = 1
"""Rendered pixel width of one board cell."""

DEFAULT_OUT_DIR = "output"
"""Directory for rendered images and run logs."""

DEFAULT_PNG_NAME = "Prisoners.png"
"""File name of the final-generation image."""

DEFAULT_GIF_NAME = "Prisoners.gif"
"""File name of the generation animation."""

FLUSH_THRESHOLD = 8_192
"""Flush generation log rows to Parquet once this in-memory row count is reached."""
