"""Agent strategies for the spatial Prisoner's Dilemma."""

from __future__ import annotations

from enum import Enum

from spatial_dilemma.domain.errors import ConfigurationError


class Strategy(Enum):
    """The two strategies an agent can hold, valued by their board-file symbol."""

    COOPERATE = "C"
    DEFECT = "D"

    @property
    def symbol(self) -> str:
        return self.value


def parse_strategy(symbol: str) -> Strategy:
    """Parse a single board-file symbol into a Strategy."""
    try:
        return Strategy(symbol)
    except ValueError as exc:
        valid = ", ".join(s.value for s in Strategy)
        raise ConfigurationError(f"invalid strategy {symbol!r}; must be one of {valid}") from exc
