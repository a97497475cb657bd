"""
Piece state - the current cube orientation and anchor of the player piece.
"""

from dataclasses import dataclass, field

import numpy as np

from tumblecube.core.base import Position
from tumblecube.game.geometry import footprint, realign, validate_piece_shape


@dataclass
class PieceState:
    """
    The piece bounding cube and the anchor of its footprint on the board.

    Both fields are only replaced together, through ``replace``, once a
    move has been accepted.
    """
    cube: np.ndarray
    position: Position = field(default_factory=lambda: Position(0, 0))

    def __post_init__(self):
        validate_piece_shape(self.cube)
        self.cube = realign(self.cube)

    @property
    def size(self) -> int:
        return self.cube.shape[0]

    def footprint(self) -> np.ndarray:
        return footprint(self.cube)

    def replace(self, cube: np.ndarray, position: Position) -> None:
        self.cube = cube.copy()
        self.position = position
