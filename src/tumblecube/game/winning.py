"""
Winning conditions - the exact positions and cube configurations that end
the puzzle.
"""

from typing import List, Tuple

import numpy as np

from tumblecube.core.base import Position


class WinningConditions:
    """
    Ordered set of (anchor position, cube configuration) pairs.

    A pair matches only on exact position equality and exact element-wise
    equality of the whole cube, so the orientation of the piece matters and
    not just its footprint.
    """

    def __init__(self):
        self._pairs: List[Tuple[Position, np.ndarray]] = []

    @classmethod
    def default(cls, cube: np.ndarray, position: Position) -> "WinningConditions":
        """Single pair built from a copy of the (realigned) starting cube."""
        conditions = cls()
        conditions.add(position, cube)
        return conditions

    def add(self, position: Position, cube: np.ndarray) -> None:
        self._pairs.append((position, cube.copy()))

    @property
    def positions(self) -> List[Position]:
        return [position for position, _ in self._pairs]

    @property
    def configurations(self) -> List[np.ndarray]:
        return [cube for _, cube in self._pairs]

    def is_satisfied(self, position: Position, cube: np.ndarray) -> bool:
        for winning_position, winning_cube in self._pairs:
            if winning_position == position and np.array_equal(winning_cube, cube):
                return True
        return False

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"WinningConditions(positions={[p.to_tuple() for p in self.positions]})"
