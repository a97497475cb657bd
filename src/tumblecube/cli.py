"""
Command-line interface for tumblecube.

Run random tumbling-cube games, benchmark the puzzle explorer, manage YAML
configuration files and render boards.
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional

import numpy as np
import yaml

from tumblecube.core.config import Config, load_config, create_default_config, validate_config
from tumblecube.game.controller import GameController
from tumblecube.game.geometry import InvalidPieceError, footprint
from tumblecube.game.loader import load_default_piece, load_piece_from_json
from tumblecube.runner import ScenarioRunner
from tumblecube.utils.display import StatusDisplay, LiveLogger, format_cube, format_footprint
from tumblecube.utils.render import save_board_image


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="tumblecube: tumbling-cube puzzle explorer and scenario generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play one game (random scenarios until one is solved)
  tumblecube run --config configs/default.yaml

  # Play several games and write the summary CSV
  tumblecube benchmark --config configs/default.yaml --num-runs 10

  # Create and validate a configuration
  tumblecube create-config --output config.yaml
  tumblecube validate-config config.yaml

  # Inspect the piece and render a generated board
  tumblecube show-piece
  tumblecube render --config config.yaml --output board.png
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Run a single game")
    run_parser.add_argument("--config", "-c", required=True, help="Path to configuration file")
    run_parser.add_argument("--seed", type=int, help="Override random seed")
    run_parser.add_argument("--output-dir", help="Override output directory")
    run_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    benchmark_parser = subparsers.add_parser("benchmark", help="Run several games and summarize")
    benchmark_parser.add_argument("--config", "-c", required=True, help="Path to configuration file")
    benchmark_parser.add_argument("--num-runs", "-n", type=int, default=1, help="Number of games")
    benchmark_parser.add_argument("--seed", type=int, help="Override random seed")
    benchmark_parser.add_argument("--output-dir", help="Override output directory")
    benchmark_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")

    config_parser = subparsers.add_parser("create-config", help="Create default configuration file")
    config_parser.add_argument("--output", "-o", default="config.yaml", help="Output configuration file")
    config_parser.add_argument("--force", action="store_true", help="Overwrite an existing file")

    validate_parser = subparsers.add_parser("validate-config", help="Validate configuration file")
    validate_parser.add_argument("config", help="Configuration file to validate")
    validate_parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")

    piece_parser = subparsers.add_parser("show-piece", help="Print a piece shape and its footprint")
    piece_parser.add_argument("--shape", help="Piece shape JSON (default: packaged shape)")

    render_parser = subparsers.add_parser("render", help="Render a generated board to PNG")
    render_parser.add_argument("--config", "-c", help="Path to configuration file (default settings if omitted)")
    render_parser.add_argument("--output", "-o", default="board.png", help="Output image file")
    render_parser.add_argument("--seed", type=int, help="Random seed")
    render_parser.add_argument("--cell-px", type=int, default=48, help="Cell size in pixels")

    return parser


def _load_and_validate_config(path: str, logger: LiveLogger) -> Optional[Config]:
    """Load and validate configuration with error handling."""
    try:
        logger.log_action("Loading configuration")
        config = load_config(path)
        logger.log_result("Configuration loaded")
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {path}")
        logger.log_info("Use 'tumblecube create-config' to create a default configuration")
        return None
    except (yaml.YAMLError, ValueError) as e:
        logger.log_error(f"Configuration error: {e}")
        return None

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    warnings = [issue for issue in issues if not issue.startswith("ERROR")]

    if errors:
        StatusDisplay.print_section("Configuration Errors")
        for error in errors:
            logger.log_error(error.replace("ERROR: ", ""))
        return None
    for warning in warnings:
        logger.log_warning(warning.replace("WARNING: ", ""))

    return config


def _apply_overrides(config: Config, args) -> None:
    if getattr(args, 'seed', None) is not None:
        config.runner.seed = args.seed
    if getattr(args, 'output_dir', None):
        config.runner.log_dir = args.output_dir


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


def run_command(args) -> int:
    """Execute run command."""
    logger = LiveLogger(verbose=True)
    _configure_logging(args.verbose)

    StatusDisplay.print_header("tumblecube Game")
    config = _load_and_validate_config(args.config, logger)
    if config is None:
        return 1
    _apply_overrides(config, args)

    try:
        runner = ScenarioRunner(config)
        runner.setup()
        result = runner.run_single_game()
        runner.logger.save_logs()
    except KeyboardInterrupt:
        logger.log_warning("Game interrupted by user")
        return 1
    except (OSError, ValueError, RuntimeError) as e:
        logger.log_error(f"Failed to run game: {e}")
        if args.verbose:
            logger.log_error(traceback.format_exc())
        return 1

    StatusDisplay.print_results({
        "Solved": result.solved,
        "Scenarios": result.scenarios_evaluated,
        "Moves Attempted": result.moves_attempted,
        "Moves Successful": result.moves_successful,
        "Solution Length": len(result.solution),
        "Total Time (s)": result.total_time,
    }, "Game Results")

    if result.solved:
        logger.log_result("Puzzle solved!")
    else:
        logger.log_warning("No solvable scenario found within the configured limits")
    return 0


def benchmark_command(args) -> int:
    """Execute benchmark command."""
    logger = LiveLogger(verbose=True)
    _configure_logging(args.verbose)

    if args.num_runs <= 0:
        logger.log_error("--num-runs must be positive")
        return 1

    config = _load_and_validate_config(args.config, logger)
    if config is None:
        return 1
    _apply_overrides(config, args)

    try:
        runner = ScenarioRunner(config)
        runner.run_benchmark(num_runs=args.num_runs)
    except KeyboardInterrupt:
        logger.log_warning("Benchmark interrupted by user")
        return 1
    except (OSError, ValueError, RuntimeError) as e:
        logger.log_error(f"Failed to run benchmark: {e}")
        if args.verbose:
            logger.log_error(traceback.format_exc())
        return 1
    return 0


def create_config_command(args) -> int:
    """Execute create-config command."""
    logger = LiveLogger(verbose=True)
    StatusDisplay.print_header("Creating Configuration File")

    if Path(args.output).exists() and not args.force:
        logger.log_error(f"Configuration file already exists: {args.output} (use --force to overwrite)")
        return 1

    try:
        config = create_default_config(args.output)
    except OSError as e:
        logger.log_error(f"Failed to create config: {e}")
        return 1

    logger.log_result(f"Configuration created: {args.output}")
    StatusDisplay.print_config(config.to_dict(), "Configuration Summary")
    logger.log_info("Next steps:")
    logger.log_info("1. Validate the configuration: tumblecube validate-config " + args.output)
    logger.log_info("2. Play a game: tumblecube run --config " + args.output)
    return 0


def validate_config_command(args) -> int:
    """Execute validate-config command."""
    logger = LiveLogger(verbose=True)
    StatusDisplay.print_header("Configuration Validation")

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        logger.log_error(f"Configuration file not found: {args.config}")
        return 1
    except (yaml.YAMLError, ValueError) as e:
        logger.log_error(f"Failed to load config: {e}")
        return 1

    StatusDisplay.print_config(config.to_dict(), "Configuration")

    issues = validate_config(config)
    errors = [issue for issue in issues if issue.startswith("ERROR")]
    warnings = [issue for issue in issues if not issue.startswith("ERROR")]

    if args.strict and warnings:
        errors.extend(warnings)
        warnings = []

    if errors:
        StatusDisplay.print_section("Configuration Errors")
        for i, error in enumerate(errors, 1):
            logger.log_error(f"{i}. {error}")
        StatusDisplay.print_results({
            "Status": "FAILED",
            "Errors Found": len(errors),
            "Warnings Found": len(warnings),
        }, "Validation Summary")
        return 1

    for i, warning in enumerate(warnings, 1):
        logger.log_warning(f"{i}. {warning}")
    StatusDisplay.print_results({
        "Status": "VALID (with warnings)" if warnings else "VALID",
        "Warnings Found": len(warnings),
    }, "Validation Summary")
    return 0


def show_piece_command(args) -> int:
    """Execute show-piece command."""
    logger = LiveLogger(verbose=True)

    try:
        cube = load_piece_from_json(args.shape) if args.shape else load_default_piece()
    except (FileNotFoundError, ValueError) as e:
        logger.log_error(f"Failed to load piece: {e}")
        return 1

    StatusDisplay.print_section(f"Piece cube ({cube.shape[0]}x{cube.shape[0]}x{cube.shape[0]})")
    print(format_cube(cube))
    StatusDisplay.print_section("Footprint")
    print(format_footprint(footprint(cube)))
    return 0


def render_command(args) -> int:
    """Execute render command."""
    logger = LiveLogger(verbose=True)

    if args.config:
        config = _load_and_validate_config(args.config, logger)
        if config is None:
            return 1
    else:
        config = Config()

    try:
        if config.piece.shape_path:
            cube = load_piece_from_json(config.piece.shape_path, config.piece.size)
        else:
            cube = load_default_piece(config.piece.size)

        controller = GameController(config)
        controller.initialize_piece(cube)
        controller.use_default_winning_conditions()
        controller.generate_scenario(np.random.default_rng(args.seed))

        save_board_image(
            controller.board.grid, args.output,
            cell_px=args.cell_px, highlight=config.goal.position
        )
    except (InvalidPieceError, OSError, ValueError) as e:
        logger.log_error(f"Failed to render board: {e}")
        return 1

    StatusDisplay.print_board(controller.board.grid, "Generated board")
    logger.log_result(f"Board image saved to {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    argv = sys.argv[1:] if argv is None else argv

    if not argv:
        parser.print_help()
        return 1

    args = parser.parse_args(argv)

    command_handlers = {
        "run": run_command,
        "benchmark": benchmark_command,
        "create-config": create_config_command,
        "validate-config": validate_config_command,
        "show-piece": show_piece_command,
        "render": render_command,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
