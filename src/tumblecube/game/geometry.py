"""
Geometry kernel - rotation, realignment and footprint projection of the
piece bounding cube.

The cube is indexed ``cube[row, col, depth]``. Depth 0 is the layer in
contact with the board, rows run north to south and columns west to east.
"""

from collections import deque
from typing import Iterable, List, Optional, Tuple

import numpy as np

from tumblecube.core.base import Axis, Cell, PieceRotation

CELL_DTYPE = np.int8

PIECE_MARKERS = (Cell.FREE, Cell.OCCUPIED)


class InvalidPieceError(ValueError):
    """Raised when a piece shape violates the cube preconditions."""


def as_cube(data: Iterable) -> np.ndarray:
    """Convert nested lists of markers into a cube array."""
    return np.array(data, dtype=CELL_DTYPE)


def empty_cube(size: int) -> np.ndarray:
    return np.full((size, size, size), Cell.FREE, dtype=CELL_DTYPE)


def rotate_layer(layer: np.ndarray, clockwise: bool) -> np.ndarray:
    """
    Rotate a square 2D layer by 90 degrees.

    The layer is transposed, then its columns are reversed for a clockwise
    rotation or its rows are reversed for a counter-clockwise one.
    """
    transposed = layer.T
    if clockwise:
        return transposed[:, ::-1].copy()
    return transposed[::-1, :].copy()


def rotate(cube: np.ndarray, axis: Axis, clockwise: bool) -> np.ndarray:
    """
    Rotate every layer perpendicular to ``axis`` and realign the result.

    Args:
        cube: M x M x M cube of markers (left untouched)
        axis: Axis.X rotates the (col, depth) layers of each row,
              Axis.Y the (row, depth) layers of each column and
              Axis.Z the (row, col) layers of each depth
        clockwise: rotation sense

    Returns:
        New realigned cube
    """
    size = cube.shape[0]
    rotated = np.empty_like(cube)

    if axis is Axis.X:
        for row in range(size):
            rotated[row, :, :] = rotate_layer(cube[row, :, :], clockwise)
    elif axis is Axis.Y:
        # The (row, depth) plane is not contiguous, so each slice is
        # extracted, rotated and written back along the column axis.
        for col in range(size):
            rotated[:, col, :] = rotate_layer(cube[:, col, :], clockwise)
    elif axis is Axis.Z:
        for depth in range(size):
            rotated[:, :, depth] = rotate_layer(cube[:, :, depth], clockwise)
    else:
        raise ValueError(f"Unknown axis: {axis}")

    return realign(rotated)


def apply_rotation(cube: np.ndarray, rotation: PieceRotation) -> np.ndarray:
    return rotate(cube, rotation.axis, rotation.clockwise)


def realign(cube: np.ndarray) -> np.ndarray:
    """
    Translate the occupied region so it touches the origin on every axis.

    Vacated cells are filled with FREE. A cube without occupied cells is
    returned as an unchanged copy.
    """
    occupied = np.argwhere(cube == Cell.OCCUPIED)
    if occupied.size == 0:
        return cube.copy()

    start_row, start_col, start_depth = occupied.min(axis=0)
    rows, cols, depths = cube.shape

    realigned = np.full_like(cube, Cell.FREE)
    realigned[:rows - start_row, :cols - start_col, :depths - start_depth] = \
        cube[start_row:, start_col:, start_depth:]
    return realigned


def contact_layer(cube: np.ndarray) -> np.ndarray:
    """The (row, col) layer touching the board."""
    return cube[:, :, 0]


def footprint(cube: np.ndarray) -> np.ndarray:
    """
    Project the contact layer to the 2D footprint.

    The footprint is the contact layer cropped to the smallest rectangle,
    anchored at the origin, that contains all of its occupied cells. It may
    contain FREE holes.

    Raises:
        ValueError: If the contact layer has no occupied cell
    """
    layer = contact_layer(cube)
    rows, cols = np.nonzero(layer == Cell.OCCUPIED)
    if rows.size == 0:
        raise ValueError("Contact layer has no occupied cells; is the cube realigned?")
    return layer[:rows.max() + 1, :cols.max() + 1].copy()


def count_occupied(cells: np.ndarray) -> int:
    return int(np.count_nonzero(cells == Cell.OCCUPIED))


def occupied_cells(cube: np.ndarray) -> List[Tuple[int, int, int]]:
    return [tuple(int(v) for v in idx) for idx in np.argwhere(cube == Cell.OCCUPIED)]


def is_connected(cube: np.ndarray) -> bool:
    """Check that the occupied cells form a single face-connected solid."""
    cells = set(occupied_cells(cube))
    if not cells:
        return False

    start = next(iter(cells))
    seen = {start}
    queue = deque([start])
    while queue:
        r, c, d = queue.popleft()
        neighbors = [
            (r + 1, c, d), (r - 1, c, d),
            (r, c + 1, d), (r, c - 1, d),
            (r, c, d + 1), (r, c, d - 1),
        ]
        for n in neighbors:
            if n in cells and n not in seen:
                seen.add(n)
                queue.append(n)

    return len(seen) == len(cells)


def validate_piece_shape(cube: np.ndarray, size: Optional[int] = None) -> None:
    """
    Reject malformed piece shapes before they reach the game.

    Args:
        cube: candidate cube
        size: declared cube edge length, if any

    Raises:
        InvalidPieceError: If the cube is not an M x M x M array of FREE and
            OCCUPIED markers describing one non-empty connected solid
    """
    if cube.ndim != 3 or len(set(cube.shape)) != 1:
        raise InvalidPieceError(f"Piece must be a cube, got shape {cube.shape}")
    if size is not None and cube.shape[0] != size:
        raise InvalidPieceError(f"Piece must be {size}x{size}x{size}, got {cube.shape}")
    if not np.isin(cube, [int(m) for m in PIECE_MARKERS]).all():
        raise InvalidPieceError("Piece may only contain FREE and OCCUPIED cells")
    if count_occupied(cube) == 0:
        raise InvalidPieceError("Piece has no occupied cells")
    if not is_connected(cube):
        raise InvalidPieceError("Piece cells must form one connected solid")
