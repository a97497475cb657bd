"""Utility modules for tumblecube."""

from tumblecube.utils.logger import ExperimentLogger
from tumblecube.utils.display import ProgressDisplay, StatusDisplay, LiveLogger, format_board, format_footprint
from tumblecube.utils.render import render_board_image

__all__ = [
    "ExperimentLogger",
    "ProgressDisplay",
    "StatusDisplay",
    "LiveLogger",
    "format_board",
    "format_footprint",
    "render_board_image",
]
