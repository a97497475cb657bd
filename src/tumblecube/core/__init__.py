"""
Core modules for tumblecube.

This package contains the fundamental components:
- Cell markers, axes, directions and positions
- Move results, explorer records and game results
- Configuration management
"""

from tumblecube.core.base import (
    Cell,
    Axis,
    Direction,
    Position,
    PieceRotation,
    MoveError,
    MoveResult,
    MoveRecord,
    GameResult,
    BenchmarkSummary,
)

from tumblecube.core.config import (
    Config,
    BoardConfig,
    PieceConfig,
    GoalConfig,
    ExplorerConfig,
    RunnerConfig,
    load_config,
    create_default_config,
    validate_config,
)

__all__ = [
    "Cell",
    "Axis",
    "Direction",
    "Position",
    "PieceRotation",
    "MoveError",
    "MoveResult",
    "MoveRecord",
    "GameResult",
    "BenchmarkSummary",
    "Config",
    "BoardConfig",
    "PieceConfig",
    "GoalConfig",
    "ExplorerConfig",
    "RunnerConfig",
    "load_config",
    "create_default_config",
    "validate_config",
]
