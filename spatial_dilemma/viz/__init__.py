"""Visualization layer: themes and renderers."""

from spatial_dilemma.viz.render import (
    board_to_array,
    board_to_rgb,
    render_board,
    render_generations,
    render_metric_timeseries,
)
from spatial_dilemma.viz.theme import (
    DEFAULT_THEME,
    PAPER_THEME,
    REGISTERED_THEMES,
    Theme,
    get_theme,
)

__all__ = [
    "DEFAULT_THEME",
    "PAPER_THEME",
    "REGISTERED_THEMES",
    "Theme",
    "board_to_array",
    "board_to_rgb",
    "get_theme",
    "render_board",
    "render_generations",
    "render_metric_timeseries",
]
