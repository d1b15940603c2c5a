"""Two-level Prisoner's Dilemma payoff for one directed interaction."""

from __future__ import annotations

from spatial_dilemma.domain.errors import InvariantViolationError
from spatial_dilemma.domain.strategy import Strategy

COOPERATION_PAYOFF = 1.0
"""Score each player receives when both cooperate."""


def pairwise_payoff(
    self_strategy: Strategy | None, opponent_strategy: Strategy | None, b: float
) -> tuple[float, float]:
    """Return ``(self_delta, opponent_delta)`` for one game.

    ====  ====  ==========
    self  opp   deltas
    ====  ====  ==========
    C     C     (1, 1)
    C     D     (0, b)
    D     C     (b, 0)
    D     D     (0, 0)
    ====  ====  ==========

    Mutual defection scores nothing for either side; there is no separate
    punishment term.
    """
    if not isinstance(self_strategy, Strategy) or not isinstance(opponent_strategy, Strategy):
        raise InvariantViolationError(
            f"payoff requested for invalid strategies {self_strategy!r} vs {opponent_strategy!r}"
        )
    if self_strategy is Strategy.COOPERATE:
        if opponent_strategy is Strategy.COOPERATE:
            return COOPERATION_PAYOFF, COOPERATION_PAYOFF
        return 0.0, b
    if opponent_strategy is Strategy.COOPERATE:
        return b, 0.0
    return 0.0, 0.0
