"""
User-friendly display utilities for tumblecube.
"""

import time
from typing import Optional, Dict, Any
from datetime import datetime

import numpy as np

from tumblecube.core.base import Cell, Direction

CELL_GLYPHS = {
    Cell.FREE: "□",
    Cell.OCCUPIED: "■",
    Cell.BLOCKED: "▦",
}


def format_board(grid: np.ndarray, direction: Optional[Direction] = None,
                 successful: bool = True) -> str:
    """
    Render a board grid as text, one glyph per cell.

    Args:
        grid: 2D array of cell markers
        direction: last move direction, shown as an arrow above the board
        successful: draw a solid arrow for an accepted move, hollow otherwise
    """
    lines = []
    if direction is not None:
        lines.append(f"Move {direction.indicator(outline=not successful)} {direction.value}")
    for row in grid:
        lines.append(" ".join(CELL_GLYPHS[Cell(int(v))] for v in row))
    return "\n".join(lines)


def format_footprint(piece_footprint: np.ndarray) -> str:
    return format_board(piece_footprint)


def format_cube(cube: np.ndarray) -> str:
    """Render a piece cube as its depth layers, contact layer first."""
    blocks = []
    for depth in range(cube.shape[2]):
        blocks.append(f"depth {depth}:\n{format_board(cube[:, :, depth])}")
    return "\n\n".join(blocks)


class ProgressDisplay:
    """Progress bar over the games of a benchmark run."""

    def __init__(self, total_steps: int = 100):
        self.total_steps = max(total_steps, 1)
        self.current_step = 0
        self.start_time = time.time()

    def update(self, step: int, description: str = ""):
        """Redraw the progress line for ``step`` finished games."""
        self.current_step = step
        progress = min(step / self.total_steps, 1.0)

        # Timing so far, and a linear estimate for the remaining games
        elapsed = time.time() - self.start_time
        if step > 0:
            eta = (elapsed / step) * (self.total_steps - step)
        else:
            eta = 0

        # Create progress bar
        bar_length = 30
        filled_length = int(bar_length * progress)
        bar = "█" * filled_length + "░" * (bar_length - filled_length)

        # Format time
        elapsed_str = self._format_time(elapsed)
        eta_str = self._format_time(eta)

        # Print progress, overwriting the previous line
        progress_line = f"\r⏳ Games: [{bar}] {progress:.1%} ({step}/{self.total_steps}) | Elapsed: {elapsed_str} | ETA: {eta_str}"
        if description:
            progress_line += f" | {description}"

        print(progress_line, end="", flush=True)

    def finish(self, success: bool = True):
        """Finish progress display."""
        total_time_str = self._format_time(time.time() - self.start_time)

        # Leave the progress line in place and report on a new one
        if success:
            print(f"\n✅ Complete! Total time: {total_time_str}")
        else:
            print(f"\n❌ Failed! Total time: {total_time_str}")

    def _format_time(self, seconds: float) -> str:
        """Format time in human-readable format."""
        if seconds < 60:
            return f"{seconds:.1f}s"
        elif seconds < 3600:
            minutes = int(seconds // 60)
            secs = int(seconds % 60)
            return f"{minutes}m {secs}s"
        else:
            hours = int(seconds // 3600)
            minutes = int((seconds % 3600) // 60)
            return f"{hours}h {minutes}m"


class StatusDisplay:
    """Console sections, results tables and boards for the CLI and runner."""

    @staticmethod
    def print_header(title: str, width: int = 80):
        """Print a formatted header."""
        print("\n" + "=" * width)
        print(f"{title:^{width}}")
        print("=" * width)

    @staticmethod
    def print_section(title: str, width: int = 60):
        """Print a section header."""
        print(f"\n📋 {title}")
        print("-" * width)

    @staticmethod
    def print_config(config_dict: Dict[str, Any], title: str = "Configuration"):
        """Print a nested configuration dictionary, one block per section."""
        StatusDisplay.print_section(title)
        for key, value in config_dict.items():
            if isinstance(value, dict):
                # board, piece, goal, explorer and runner groups from Config.to_dict()
                print(f"  {key}:")
                for sub_key, sub_value in value.items():
                    print(f"    {sub_key:<18} : {sub_value}")
            else:
                print(f"  {key:<20} : {value}")

    @staticmethod
    def print_status(message: str, status: str = "info"):
        """Print a status message with appropriate emoji."""
        icons = {
            "info": "ℹ️",
            "success": "✅",
            "warning": "⚠️",
            "error": "❌",
            "loading": "⏳",
            "processing": "🔄"
        }
        icon = icons.get(status, "ℹ️")
        timestamp = datetime.now().strftime("%H:%M:%S")
        print(f"{icon} [{timestamp}] {message}")

    @staticmethod
    def print_results(results: Dict[str, Any], title: str = "Results"):
        """Print results in a nice format."""
        StatusDisplay.print_section(title)
        for key, value in results.items():
            # Flags get an icon
            if isinstance(value, bool):
                icon = "✅" if value else "❌"
                print(f"  {key:<20} : {icon} {value}")
            elif isinstance(value, float):
                if key.lower().endswith("rate"):
                    # Solve rate is a ratio
                    print(f"  {key:<20} : {value:.1%}")
                else:
                    print(f"  {key:<20} : {value:.3f}")
            else:
                print(f"  {key:<20} : {value}")

    @staticmethod
    def print_board(grid: np.ndarray, title: str = "Board",
                    direction: Optional[Direction] = None, successful: bool = True):
        """Print a board grid under a section header, indented like the results."""
        StatusDisplay.print_section(title)
        for line in format_board(grid, direction, successful).splitlines():
            print(f"  {line}")

    @staticmethod
    def print_step_summary(step: int, action: str, result: str, timing: float = None):
        """Print a step summary."""
        timing_str = f" ({timing:.2f}s)" if timing else ""
        print(f"  Step {step:2d}: {action:<20} → {result}{timing_str}")

    @staticmethod
    def print_separator(char: str = "-", length: int = 60):
        """Print a separator line."""
        print(char * length)


class LiveLogger:
    """Live console logging of scenario and move progress."""

    def __init__(self, verbose: bool = True):
        self.verbose = verbose
        self.scenario_times = {}

    def log_scenario_start(self, scenario: int, description: str):
        """Log the start of a game and remember when it began."""
        if self.verbose:
            StatusDisplay.print_status(f"Starting scenario {scenario}: {description}", "processing")
        self.scenario_times[scenario] = time.time()

    def log_scenario_end(self, scenario: int, result: str, success: bool = True):
        """Log the end of a game with its elapsed time."""
        if self.verbose:
            elapsed = time.time() - self.scenario_times.get(scenario, time.time())
            status = "success" if success else "error"
            StatusDisplay.print_status(
                f"Scenario {scenario} finished: {result} ({elapsed:.2f}s)",
                status
            )

    def log_move(self, index: int, position: str, direction: Direction, outcome: str):
        """Log one explorer move as a numbered step."""
        if self.verbose:
            StatusDisplay.print_step_summary(index, f"{position} {direction.indicator()} {direction.value}", outcome)

    def log_action(self, action_name: str, details: str = ""):
        """Log an action being performed."""
        if self.verbose:
            message = f"Executing: {action_name}"
            if details:
                message += f" - {details}"
            StatusDisplay.print_status(message, "processing")

    def log_result(self, message: str, success: bool = True):
        """Log a result."""
        if self.verbose:
            StatusDisplay.print_status(message, "success" if success else "error")

    def log_info(self, message: str):
        """Log an info message."""
        if self.verbose:
            StatusDisplay.print_status(message, "info")

    def log_warning(self, message: str):
        """Log a warning message."""
        if self.verbose:
            StatusDisplay.print_status(message, "warning")

    def log_error(self, message: str):
        """Log an error message."""
        if self.verbose:
            StatusDisplay.print_status(message, "error")
