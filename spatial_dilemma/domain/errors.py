"""Error taxonomy for the evolution engine and its collaborators.

Configuration errors are raised before any simulation work starts (bad board
dimensions, bad parameters, malformed board files). Invariant violations
indicate a defect upstream, such as a board reaching the engine with a cell
that was never assigned a strategy.
"""

from __future__ import annotations


class SpatialDilemmaError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(SpatialDilemmaError, ValueError):
    """Invalid user-supplied configuration: dimensions, parameters, or input files."""


class InvariantViolationError(SpatialDilemmaError, RuntimeError):
    """A board reached the engine in a state the loader should never produce."""
