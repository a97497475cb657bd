"""
Configuration management for tumblecube.

This module handles loading and validation of YAML configuration files and
provides typed configuration objects for the board, the piece, the winning
goal, the explorer and the scenario runner.
"""

import os
import yaml
from typing import Any, Dict, Optional, List, Tuple
from dataclasses import dataclass, field, asdict
from pathlib import Path


@dataclass
class BoardConfig:
    """Square game board settings."""
    size: int = 7
    blocked_cells: int = 4

    def __post_init__(self):
        if not isinstance(self.size, int) or self.size <= 0:
            raise ValueError("board size must be a positive integer")
        if not isinstance(self.blocked_cells, int) or self.blocked_cells < 0:
            raise ValueError("blocked_cells must be a non-negative integer")
        if self.blocked_cells >= self.size * self.size:
            raise ValueError("blocked_cells must leave at least one free cell")


@dataclass
class PieceConfig:
    """Piece bounding cube settings."""
    size: int = 3
    # None loads the packaged default shape
    shape_path: Optional[str] = None
    random_tumbles: int = 16

    def __post_init__(self):
        if not isinstance(self.size, int) or self.size <= 0:
            raise ValueError("piece size must be a positive integer")
        if not isinstance(self.random_tumbles, int) or self.random_tumbles < 0:
            raise ValueError("random_tumbles must be a non-negative integer")
        if self.shape_path is not None and not os.path.isabs(self.shape_path):
            self.shape_path = os.path.abspath(self.shape_path)


@dataclass
class GoalConfig:
    """Winning anchor position for the default winning configuration."""
    position: Tuple[int, int] = (4, 5)

    def __post_init__(self):
        if not isinstance(self.position, (tuple, list)) or len(self.position) != 2:
            raise ValueError("goal position must be a (row, col) pair")
        self.position = (int(self.position[0]), int(self.position[1]))


@dataclass
class ExplorerConfig:
    """Puzzle explorer limits."""
    # None keeps the search unbounded
    max_moves: Optional[int] = 10000

    def __post_init__(self):
        if self.max_moves is not None and (not isinstance(self.max_moves, int) or self.max_moves <= 0):
            raise ValueError("max_moves must be a positive integer or null")


@dataclass
class RunnerConfig:
    """Configuration for the scenario runner."""
    experiment_name: str = "tumblecube"
    log_dir: str = "logs"
    seed: Optional[int] = None
    require_solvable: bool = True
    max_scenarios: Optional[int] = 1000
    results_csv_path: str = "results.csv"

    def __post_init__(self):
        if self.max_scenarios is not None and (not isinstance(self.max_scenarios, int) or self.max_scenarios <= 0):
            raise ValueError("max_scenarios must be a positive integer or null")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError("seed must be an integer or null")


@dataclass
class Config:
    """Main configuration object."""
    board: BoardConfig = field(default_factory=BoardConfig)
    piece: PieceConfig = field(default_factory=PieceConfig)
    goal: GoalConfig = field(default_factory=GoalConfig)
    explorer: ExplorerConfig = field(default_factory=ExplorerConfig)
    runner: RunnerConfig = field(default_factory=RunnerConfig)

    def __post_init__(self):
        if self.piece.size > self.board.size:
            raise ValueError(
                f"piece size ({self.piece.size}) cannot exceed board size ({self.board.size})"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        return cls(
            board=BoardConfig(**data.get("board", {})),
            piece=PieceConfig(**data.get("piece", {})),
            goal=GoalConfig(**data.get("goal", {})),
            explorer=ExplorerConfig(**data.get("explorer", {})),
            runner=RunnerConfig(**data.get("runner", {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        result = asdict(self)
        result["goal"]["position"] = list(self.goal.position)
        return result


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If values are invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")

    try:
        return Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: str = "config.yaml") -> Config:
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the default config

    Returns:
        Default Config object
    """
    config = Config()

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages
    """
    issues = []

    if not config.runner.experiment_name:
        issues.append("ERROR: Experiment name is required")

    if config.piece.size > config.board.size:
        issues.append("ERROR: Piece size cannot exceed board size")
    elif config.piece.size == config.board.size:
        issues.append("WARNING: Piece size equals board size; a full-width footprint has no room to tumble")

    if config.piece.shape_path and not os.path.exists(config.piece.shape_path):
        issues.append(f"ERROR: Piece shape file does not exist: {config.piece.shape_path}")

    row, col = config.goal.position
    if not (0 <= row < config.board.size and 0 <= col < config.board.size):
        issues.append(f"ERROR: Goal position {config.goal.position} is outside the board")

    free_cells = config.board.size * config.board.size - config.piece.size * config.piece.size
    if config.board.blocked_cells > free_cells:
        issues.append("WARNING: blocked_cells may exceed the cells left free by the piece")

    if config.explorer.max_moves is None:
        issues.append("WARNING: explorer.max_moves is unbounded; a cyclic scenario can run forever")

    if config.runner.require_solvable and config.runner.max_scenarios is None:
        issues.append("WARNING: runner.max_scenarios is unbounded; generation may never terminate")

    return issues
