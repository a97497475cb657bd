"""
Game controller - the public operations of the tumbling puzzle.

The controller owns the board, the piece state and the winning conditions of
one game, commits accepted moves and drives the explorer and the scenario
generator.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from tumblecube.core.base import Direction, MoveResult, Position
from tumblecube.core.config import Config
from tumblecube.game.board import Board, validate_move
from tumblecube.game.explorer import ExplorationResult, PuzzleExplorer
from tumblecube.game.generator import ScenarioGenerator
from tumblecube.game.geometry import validate_piece_shape
from tumblecube.game.piece import PieceState
from tumblecube.game.winning import WinningConditions

logger = logging.getLogger(__name__)


@dataclass
class ScenarioOutcome:
    """Result of start_new_random_scenario."""
    solved: bool
    scenarios_evaluated: int
    total_time: float
    solution_time: float
    exploration: Optional[ExplorationResult] = None
    explorations: List[ExplorationResult] = field(default_factory=list)


class GameController:
    """
    Owner of one game's board, piece and winning conditions.

    Args:
        config: game configuration; defaults are used when omitted
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.board = Board(self.config.board.size)
        self.piece: Optional[PieceState] = None
        self.winning = WinningConditions()
        self._initial_cube: Optional[np.ndarray] = None

    # ------------------------------------------------------------------ #
    # Setup
    # ------------------------------------------------------------------ #
    def initialize_piece(self, cube: np.ndarray) -> None:
        """
        Install the default piece shape and place it at (0, 0).

        Raises:
            InvalidPieceError: If the shape is not a connected solid of the
                configured cube size
        """
        validate_piece_shape(cube, self.config.piece.size)
        self.piece = PieceState(cube=cube.copy())
        self._initial_cube = self.piece.cube.copy()
        self.board.overlay(self.piece.position, self.piece.footprint())

    def set_winning_conditions(self, winning: WinningConditions) -> None:
        self.winning = winning

    def use_default_winning_conditions(self) -> WinningConditions:
        """Winning pair of the configured goal position and the starting cube."""
        self._require_piece()
        winning = WinningConditions.default(self._initial_cube, Position(*self.config.goal.position))
        self.set_winning_conditions(winning)
        return winning

    def block_cell(self, row: int, col: int) -> None:
        self.board.block_cell(row, col)

    @property
    def initial_cube(self) -> Optional[np.ndarray]:
        return None if self._initial_cube is None else self._initial_cube.copy()

    # ------------------------------------------------------------------ #
    # Moves
    # ------------------------------------------------------------------ #
    def try_move(self, position: Position, direction: Direction) -> MoveResult:
        """
        Validate a tumble and commit it when accepted.

        The piece cube and anchor are replaced together and the board overlay
        is redrawn only on success; a rejection changes nothing.

        Raises:
            ValueError: If ``position`` is not the piece's current anchor
        """
        self._require_piece()
        if position != self.piece.position:
            raise ValueError(
                f"Move requested from {position.to_tuple()} but the piece is at "
                f"{self.piece.position.to_tuple()}"
            )

        logger.debug("Attempt move @%s %s", position, direction.indicator())
        result = validate_move(self.board, self.piece, direction)
        if result.success:
            self.piece.replace(result.cube, result.position)
            self.board.overlay(result.position, result.footprint)
        return result

    def attempt_move(self, position: Position, direction: Direction) -> bool:
        return self.try_move(position, direction).success

    def is_solved(self) -> bool:
        self._require_piece()
        return self.winning.is_satisfied(self.piece.position, self.piece.cube)

    def run_explorer(self, max_moves: Optional[int] = None) -> ExplorationResult:
        """Run the puzzle explorer from the current state."""
        self._require_piece()
        explorer = PuzzleExplorer(self, max_moves=max_moves)
        return explorer.run()

    # ------------------------------------------------------------------ #
    # Random scenarios
    # ------------------------------------------------------------------ #
    def generate_scenario(self, rng: np.random.Generator) -> None:
        """Replace board and piece with a freshly generated random scenario."""
        self._require_piece()
        generator = ScenarioGenerator(
            board_size=self.config.board.size,
            blocked_cells=self.config.board.blocked_cells,
            random_tumbles=self.config.piece.random_tumbles,
            rng=rng,
        )
        self.board, self.piece = generator.generate(self._initial_cube, self.winning)

    def start_new_random_scenario(self, require_solvable: bool = True,
                                  rng: Optional[np.random.Generator] = None,
                                  max_scenarios: Optional[int] = None,
                                  max_moves: Optional[int] = None) -> ScenarioOutcome:
        """
        Generate random scenarios and explore them.

        Args:
            require_solvable: keep generating new boards until one is solved
            rng: randomness source; a fresh unseeded generator when omitted
            max_scenarios: cap on generated boards (None for no cap)
            max_moves: cap on explorer moves per board (None for no cap)

        Returns:
            ScenarioOutcome
        """
        self._require_piece()
        rng = rng if rng is not None else np.random.default_rng()

        start_time = time.time()
        explorations = []
        solved = False
        solution_time = 0.0

        while True:
            self.generate_scenario(rng)

            scenario_start = time.time()
            exploration = self.run_explorer(max_moves=max_moves)
            solution_time = time.time() - scenario_start
            explorations.append(exploration)
            solved = exploration.solved

            logger.info(
                "Scenario %d: %s after %d moves",
                len(explorations), exploration.stop_reason, exploration.moves_attempted
            )

            if solved or not require_solvable:
                break
            if max_scenarios is not None and len(explorations) >= max_scenarios:
                logger.warning("No solvable scenario found in %d attempts", max_scenarios)
                break

        return ScenarioOutcome(
            solved=solved,
            scenarios_evaluated=len(explorations),
            total_time=time.time() - start_time,
            solution_time=solution_time,
            exploration=explorations[-1],
            explorations=explorations,
        )

    def _require_piece(self) -> None:
        if self.piece is None:
            raise RuntimeError("Piece is not initialized; call initialize_piece() first")
