"""
Scenario generator - random tumbling, placement and blocking.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from tumblecube.core.base import Axis, Cell, Position
from tumblecube.game.board import Board
from tumblecube.game.geometry import footprint, rotate
from tumblecube.game.piece import PieceState
from tumblecube.game.winning import WinningConditions

logger = logging.getLogger(__name__)


class ScenarioGenerator:
    """
    Build random boards for the explorer to solve.

    Args:
        board_size: edge length of the square board
        blocked_cells: number of cells to block after placing the piece
        random_tumbles: number of random tumbles applied before placement
        rng: seedable randomness source, owned by the caller
    """

    def __init__(self, board_size: int = 7, blocked_cells: int = 4,
                 random_tumbles: int = 16, rng: Optional[np.random.Generator] = None):
        self.board_size = board_size
        self.blocked_cells = blocked_cells
        self.random_tumbles = random_tumbles
        self.rng = rng if rng is not None else np.random.default_rng()

    def tumble(self, cube: np.ndarray) -> np.ndarray:
        """Apply ``random_tumbles`` rotations about random horizontal axes."""
        axes = Axis.tumbling_axes()
        for _ in range(self.random_tumbles):
            axis = axes[int(self.rng.integers(len(axes)))]
            clockwise = bool(self.rng.integers(2))
            cube = rotate(cube, axis, clockwise)
        return cube

    def pick_anchor(self, shape: Tuple[int, int], winning: WinningConditions) -> Position:
        """
        Random anchor where a footprint of ``shape`` fits on the board.

        Anchors sharing a row or a column with the winning position are
        resampled. Only the last stored winning position is enforced.
        """
        height, width = shape
        winning_positions = winning.positions

        if winning_positions:
            last = winning_positions[-1]
            rows = set(range(self.board_size - height + 1)) - {last.row}
            cols = set(range(self.board_size - width + 1)) - {last.col}
            if not rows or not cols:
                raise ValueError(f"No anchor for a {height}x{width} footprint avoids {last.to_tuple()}")

        while True:
            row = int(self.rng.integers(self.board_size - height + 1))
            col = int(self.rng.integers(self.board_size - width + 1))

            suitable = True
            for winning_position in winning_positions:
                suitable = row != winning_position.row and col != winning_position.col
            if suitable:
                return Position(row, col)

    def block_randomly(self, board: Board, count: int) -> None:
        """Block ``count`` random FREE cells, resampling non-free picks."""
        free = len(board.cells_with(Cell.FREE))
        if count > free:
            raise ValueError(f"Cannot block {count} cells, only {free} are free")

        placed = 0
        while placed < count:
            row = int(self.rng.integers(self.board_size))
            col = int(self.rng.integers(self.board_size))
            if board.cell(row, col) == Cell.FREE:
                board.block_cell(row, col)
                placed += 1

    def generate(self, base_cube: np.ndarray, winning: WinningConditions) -> Tuple[Board, PieceState]:
        """
        Create a fresh board and piece for one scenario.

        Args:
            base_cube: canonical starting shape of the piece
            winning: winning conditions used for near-miss avoidance

        Returns:
            (board, piece) with the footprint overlaid and cells blocked
        """
        board = Board(self.board_size)

        piece = PieceState(cube=self.tumble(base_cube.copy()))
        piece_footprint = footprint(piece.cube)
        piece.position = self.pick_anchor(piece_footprint.shape, winning)
        board.overlay(piece.position, piece_footprint)

        self.block_randomly(board, self.blocked_cells)

        logger.debug("Generated scenario with piece at %s", piece.position)
        return board, piece
