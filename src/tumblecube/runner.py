"""
Main runner for tumblecube.

This module coordinates the execution of games: it loads the piece shape,
builds the game controller, drives random scenarios through the explorer
and records the outcomes.
"""

import os
import time
from typing import List, Optional

import numpy as np

from tumblecube.core import Config
from tumblecube.core.base import BenchmarkSummary, GameResult
from tumblecube.game.controller import GameController
from tumblecube.game.loader import load_default_piece, load_piece_from_json
from tumblecube.utils.display import LiveLogger, ProgressDisplay, StatusDisplay
from tumblecube.utils.logger import ExperimentLogger
from tumblecube.utils.render import render_board_image


class ScenarioRunner:
    """Main runner for tumblecube game execution."""

    def __init__(self, config: Config, verbose: bool = True):
        self.config = config
        self.logger = ExperimentLogger(
            log_dir=config.runner.log_dir,
            experiment_name=config.runner.experiment_name
        )

        self.controller: Optional[GameController] = None
        self.rng: Optional[np.random.Generator] = None
        self.games_played = 0

        self.live_logger = LiveLogger(verbose=verbose)
        self.verbose = verbose

    def setup(self) -> None:
        """Load the piece and build a fresh controller and random generator."""
        if self.config.piece.shape_path:
            cube = load_piece_from_json(self.config.piece.shape_path, self.config.piece.size)
            self.live_logger.log_info(f"Loaded piece shape from {self.config.piece.shape_path}")
        else:
            cube = load_default_piece(self.config.piece.size)
            self.live_logger.log_info("Loaded default piece shape")

        self.controller = GameController(self.config)
        self.controller.initialize_piece(cube)
        self.controller.use_default_winning_conditions()

        self.rng = np.random.default_rng(self.config.runner.seed)
        self.live_logger.log_info("Runner setup complete")

    def _validate_components(self) -> None:
        if self.controller is None or self.rng is None:
            raise RuntimeError("Components not properly initialized. Call setup() first.")

    def run_single_game(self) -> GameResult:
        """Generate scenarios until one is solved (or the caps are reached)."""
        self._validate_components()
        self.games_played += 1
        game = self.games_played

        self.live_logger.log_scenario_start(game, "generating random scenarios")
        outcome = self.controller.start_new_random_scenario(
            require_solvable=self.config.runner.require_solvable,
            rng=self.rng,
            max_scenarios=self.config.runner.max_scenarios,
            max_moves=self.config.explorer.max_moves,
        )

        exploration = outcome.exploration
        result = GameResult(
            solved=outcome.solved,
            scenarios_evaluated=outcome.scenarios_evaluated,
            moves_attempted=exploration.moves_attempted,
            moves_successful=exploration.moves_successful,
            total_time=outcome.total_time,
            solution_time=outcome.solution_time,
            seed=self.config.runner.seed,
            solution=[record.to_dict() for record in exploration.solution_path()] if outcome.solved else [],
        )

        self.live_logger.log_scenario_end(
            game,
            f"{exploration.stop_reason} after {outcome.scenarios_evaluated} scenario(s)",
            success=outcome.solved,
        )
        if self.verbose:
            StatusDisplay.print_board(self.controller.board.grid, f"Final board (game {game})")

        self.logger.log_game(game, {
            **result.to_dict(),
            "stop_reason": exploration.stop_reason,
            "final_position": list(self.controller.piece.position.to_tuple()),
            "image": render_board_image(
                self.controller.board.grid, highlight=self.config.goal.position
            ),
        }, verbose=self.verbose)

        return result

    def run_multiple_games(self, num_runs: int = 1) -> List[GameResult]:
        """Run several games from a single setup, sharing the random generator."""
        if num_runs <= 0:
            raise ValueError("num_runs must be positive")

        self.setup()
        results = []
        progress = ProgressDisplay(num_runs) if num_runs > 1 and self.verbose else None

        for i in range(num_runs):
            if progress:
                progress.update(i, f"Running game {i + 1}/{num_runs}")
            results.append(self.run_single_game())

        if progress:
            progress.update(num_runs)
            progress.finish(success=True)

        return results

    def run_benchmark(self, num_runs: int = 1) -> BenchmarkSummary:
        """Run several games, save the logs and append a row to the results CSV."""
        if self.verbose:
            StatusDisplay.print_header(f"tumblecube Benchmark - {num_runs} Game{'s' if num_runs > 1 else ''}")
            StatusDisplay.print_config({
                "Board Size": self.config.board.size,
                "Blocked Cells": self.config.board.blocked_cells,
                "Piece Size": self.config.piece.size,
                "Goal Position": self.config.goal.position,
                "Seed": self.config.runner.seed,
                "Number of Games": num_runs,
            }, "Benchmark Configuration")

        start_time = time.time()
        results = self.run_multiple_games(num_runs)
        summary = BenchmarkSummary.from_results(results)

        self.logger.save_logs()
        self.logger.save_results_to_csv(
            summary.to_dict(),
            os.path.join(self.logger.run_dir, self.config.runner.results_csv_path),
            extra={
                "board_size": self.config.board.size,
                "blocked_cells": self.config.board.blocked_cells,
                "seed": self.config.runner.seed,
                "wall_time": time.time() - start_time,
            },
        )

        if self.verbose:
            self._print_benchmark_summary(summary)
        return summary

    def _print_benchmark_summary(self, summary: BenchmarkSummary) -> None:
        StatusDisplay.print_header("BENCHMARK SUMMARY")
        StatusDisplay.print_results({
            "Games": summary.num_games,
            "Solved": summary.num_solved,
            "Solve Rate": summary.solve_rate,
            "Mean Scenarios": summary.mean_scenarios,
            "Mean Moves": summary.mean_moves_attempted,
            "Mean Time (s)": summary.mean_total_time,
        }, "Basic Results")

        StatusDisplay.print_section("Output Files")
        self.live_logger.log_info(f"Logs saved to: {self.logger.run_dir}")
        StatusDisplay.print_separator("=", 60)
