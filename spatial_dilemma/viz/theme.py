"""Visualization theme presets for board renderers.

Themes are frozen dataclasses that group all styling constants together, so
palettes can be swapped via the ``--theme`` CLI argument or programmatically.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    cooperate_color: str = "#0000FF"
    defect_color: str = "#FF0000"
    metric_labels: dict[str, str] = field(default_factory=dict)
    metric_colors: dict[str, str] = field(default_factory=dict)

    @property
    def strategy_colors(self) -> tuple[str, str]:
        """Colors indexed by board array value (0 = Cooperate, 1 = Defect)."""
        return self.cooperate_color, self.defect_color


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

_DEFAULT_METRIC_LABELS: dict[str, str] = {
    "cooperator_fraction": "Cooperator Fraction",
    "strategy_changes": "Strategy Changes",
    "cluster_count": "Cluster Count",
}

DEFAULT_THEME = Theme(
    metric_labels=_DEFAULT_METRIC_LABELS,
    metric_colors={
        "cooperator_fraction": "tab:blue",
        "strategy_changes": "tab:orange",
        "cluster_count": "tab:purple",
    },
)

PAPER_THEME = Theme(
    cooperate_color="#1f77b4",
    defect_color="#d62728",
    metric_labels=_DEFAULT_METRIC_LABELS,
    metric_colors={
        "cooperator_fraction": "#1f77b4",
        "strategy_changes": "#ff7f0e",
        "cluster_count": "#9467bd",
    },
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "paper": PAPER_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
