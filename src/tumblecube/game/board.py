"""
Grid model and move validation.

The board is a square grid of cell markers. A tumble is validated against
the board edges and the blocked cells before it is committed.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from tumblecube.core.base import Cell, Direction, MoveError, MoveResult, Position
from tumblecube.game.geometry import CELL_DTYPE, apply_rotation, footprint
from tumblecube.game.piece import PieceState

logger = logging.getLogger(__name__)


class Board:
    """Square playing surface of FREE, OCCUPIED and BLOCKED cells."""

    def __init__(self, size: int = 7):
        if size <= 0:
            raise ValueError("Board size must be positive")
        self.size = size
        self.grid = np.full((size, size), Cell.FREE, dtype=CELL_DTYPE)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        return Cell(int(self.grid[row, col]))

    def block_cell(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise ValueError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board")
        self.grid[row, col] = Cell.BLOCKED

    def fits(self, position: Position, shape: Tuple[int, int]) -> bool:
        """Whether a rectangle of ``shape`` anchored at ``position`` lies on the board."""
        height, width = shape
        return (
            position.row >= 0
            and position.col >= 0
            and position.row + height - 1 <= self.size - 1
            and position.col + width - 1 <= self.size - 1
        )

    def blocked_overlap(self, position: Position, piece_footprint: np.ndarray) -> Optional[Tuple[int, int]]:
        """First board cell where an occupied footprint cell meets a blocked cell."""
        height, width = piece_footprint.shape
        region = self.grid[position.row:position.row + height, position.col:position.col + width]
        hits = np.argwhere((piece_footprint == Cell.OCCUPIED) & (region == Cell.BLOCKED))
        if hits.size == 0:
            return None
        r, c = hits[0]
        return (position.row + int(r), position.col + int(c))

    def overlay(self, position: Position, piece_footprint: np.ndarray) -> None:
        """
        Draw the piece footprint at ``position``.

        Previously occupied cells revert to FREE, then every non-blocked cell
        inside the footprint rectangle takes the footprint's marker. Blocked
        cells are never altered.
        """
        height, width = piece_footprint.shape
        self.grid[self.grid == Cell.OCCUPIED] = Cell.FREE

        region = self.grid[position.row:position.row + height, position.col:position.col + width]
        writable = region != Cell.BLOCKED
        region[writable] = piece_footprint[writable]

    def cells_with(self, marker: Cell) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == marker)]


def touches_edge(board: Board, piece: PieceState, direction: Direction) -> bool:
    """Whether the current footprint already touches the edge it would tumble over."""
    height, width = piece.footprint().shape
    row, col = piece.position.row, piece.position.col

    if direction is Direction.E:
        return col + width - 1 >= board.size - 1
    if direction is Direction.N:
        return row <= 0
    if direction is Direction.W:
        return col <= 0
    return row + height - 1 >= board.size - 1


def project_position(position: Position, direction: Direction,
                     current_shape: Tuple[int, int],
                     candidate_shape: Tuple[int, int]) -> Position:
    """
    Anchor of the candidate footprint after tumbling.

    Moving east or south advances the anchor by the current footprint
    extent; moving north or west pulls it back by the candidate extent.
    Either way the pivot row/column is shared by both footprints.
    """
    current_height, current_width = current_shape
    candidate_height, candidate_width = candidate_shape
    row, col = position.row, position.col

    if direction is Direction.E:
        col += current_width - 1
    elif direction is Direction.N:
        row -= candidate_height - 1
    elif direction is Direction.W:
        col -= candidate_width - 1
    else:
        row += current_height - 1

    return Position(row, col)


def validate_move(board: Board, piece: PieceState, direction: Direction) -> MoveResult:
    """
    Check whether the piece can tumble in ``direction``.

    Nothing is mutated; on success the candidate cube, footprint and anchor
    are returned for the caller to commit.

    Args:
        board: the current board
        piece: the current piece state
        direction: requested tumble direction

    Returns:
        MoveResult
    """
    if touches_edge(board, piece, direction):
        logger.debug("No room to move %s from %s", direction.value, piece.position)
        return MoveResult(
            success=False,
            error=MoveError.NO_ROOM,
            direction=direction,
            message="No room to move"
        )

    current_footprint = piece.footprint()
    candidate_cube = apply_rotation(piece.cube, direction.rotation)
    candidate_footprint = footprint(candidate_cube)

    projected = project_position(
        piece.position, direction, current_footprint.shape, candidate_footprint.shape
    )

    if not board.fits(projected, candidate_footprint.shape):
        logger.debug("Out of bounds moving %s from %s", direction.value, piece.position)
        return MoveResult(
            success=False,
            error=MoveError.OUT_OF_BOUNDS,
            direction=direction,
            message=f"Footprint at {projected.to_tuple()} exceeds the board"
        )

    hit = board.blocked_overlap(projected, candidate_footprint)
    if hit is not None:
        logger.debug("Blocked position moving %s from %s", direction.value, piece.position)
        return MoveResult(
            success=False,
            error=MoveError.BLOCKED,
            direction=direction,
            message=f"Blocked cell at {hit}"
        )

    return MoveResult(
        success=True,
        error=MoveError.OK,
        direction=direction,
        position=projected,
        cube=candidate_cube,
        footprint=candidate_footprint,
        message="Move accepted"
    )
