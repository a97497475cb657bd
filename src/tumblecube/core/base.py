"""
Base types shared by the tumblecube game modules.

This module defines the cell markers, axes, directions, positions and the
value objects returned by move validation and the puzzle explorer.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum, IntEnum

import numpy as np


class Cell(IntEnum):
    """Marker stored in every grid cell and every piece cube cell."""
    FREE = 0
    OCCUPIED = 1
    BLOCKED = 2

    @classmethod
    def from_name(cls, name: str) -> "Cell":
        """Parse a serialized marker name ("PLAYER" is accepted for OCCUPIED)."""
        key = name.strip().upper()
        if key == "PLAYER":
            return cls.OCCUPIED
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown cell marker: {name!r}")


class Axis(Enum):
    """Rotation axes of the piece cube.

    X and Y are the two horizontal (tumbling) axes. Z is the vertical axis,
    supported by the geometry kernel but never used by gameplay.
    """
    X = "x"
    Y = "y"
    Z = "z"

    @classmethod
    def tumbling_axes(cls) -> Tuple["Axis", "Axis"]:
        return (cls.X, cls.Y)


@dataclass(frozen=True)
class PieceRotation:
    """A 90 degree rotation of the piece cube."""
    axis: Axis
    clockwise: bool

    def inverse(self) -> "PieceRotation":
        return PieceRotation(self.axis, not self.clockwise)


class Direction(Enum):
    """The four tumbling directions, in the order the explorer cycles them."""
    E = "E"
    N = "N"
    W = "W"
    S = "S"

    def next_clockwise(self) -> "Direction":
        """Next direction in the E -> N -> W -> S -> E cycle."""
        members = list(Direction)
        return members[(members.index(self) + 1) % len(members)]

    @property
    def rotation(self) -> PieceRotation:
        """The rotation that tumbles the piece in this direction."""
        return _DIRECTION_ROTATIONS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def indicator(self, outline: bool = False) -> str:
        """Arrow glyph used by the text renderer."""
        solid, hollow = _INDICATORS[self]
        return hollow if outline else solid


_DIRECTION_ROTATIONS = {
    Direction.E: PieceRotation(Axis.X, True),
    Direction.N: PieceRotation(Axis.Y, True),
    Direction.W: PieceRotation(Axis.X, False),
    Direction.S: PieceRotation(Axis.Y, False),
}

_OPPOSITES = {
    Direction.E: Direction.W,
    Direction.W: Direction.E,
    Direction.N: Direction.S,
    Direction.S: Direction.N,
}

_INDICATORS = {
    Direction.E: ("▶", "▷"),
    Direction.N: ("▲", "△"),
    Direction.W: ("◀", "◁"),
    Direction.S: ("▼", "▽"),
}


@dataclass(frozen=True)
class Position:
    """Grid coordinate (row, col) of the footprint's top-left corner."""
    row: int
    col: int

    def to_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"{self.row},{self.col}"


class MoveError(Enum):
    """Outcome codes of a move attempt."""
    OK = "OK"
    NO_ROOM = "NoRoom"
    OUT_OF_BOUNDS = "OutOfBounds"
    BLOCKED = "Blocked"


@dataclass
class MoveResult:
    """Result of validating a tumble.

    On success ``position``, ``cube`` and ``footprint`` hold the candidate
    state that the caller commits; on failure they are None.
    """
    success: bool
    error: MoveError
    direction: Direction
    position: Optional[Position] = None
    cube: Optional[np.ndarray] = None
    footprint: Optional[np.ndarray] = None
    message: str = ""


@dataclass
class MoveRecord:
    """One attempted move in the explorer history."""
    position: Position
    direction: Direction
    preceding: Optional[int]
    successful: bool = False
    error: MoveError = MoveError.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": list(self.position.to_tuple()),
            "direction": self.direction.value,
            "preceding": self.preceding,
            "successful": self.successful,
            "error": self.error.value,
        }


@dataclass
class GameResult:
    """Outcome of one runner game (one call to start_new_random_scenario)."""
    solved: bool
    scenarios_evaluated: int
    moves_attempted: int
    moves_successful: int
    total_time: float
    solution_time: float
    seed: Optional[int] = None
    solution: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "solved": self.solved,
            "scenarios_evaluated": self.scenarios_evaluated,
            "moves_attempted": self.moves_attempted,
            "moves_successful": self.moves_successful,
            "total_time": self.total_time,
            "solution_time": self.solution_time,
            "seed": self.seed,
            "solution": self.solution,
        }


@dataclass
class BenchmarkSummary:
    """Aggregate statistics over several games."""
    num_games: int
    num_solved: int
    solve_rate: float
    mean_scenarios: float
    mean_moves_attempted: float
    mean_total_time: float
    results: List[GameResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[GameResult]) -> "BenchmarkSummary":
        count = len(results)
        if count == 0:
            return cls(0, 0, 0.0, 0.0, 0.0, 0.0, [])

        solved = sum(1 for r in results if r.solved)
        return cls(
            num_games=count,
            num_solved=solved,
            solve_rate=solved / count,
            mean_scenarios=sum(r.scenarios_evaluated for r in results) / count,
            mean_moves_attempted=sum(r.moves_attempted for r in results) / count,
            mean_total_time=sum(r.total_time for r in results) / count,
            results=list(results),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flat row of the aggregate fields (per-game results excluded)."""
        return {
            "num_games": self.num_games,
            "num_solved": self.num_solved,
            "solve_rate": self.solve_rate,
            "mean_scenarios": self.mean_scenarios,
            "mean_moves_attempted": self.mean_moves_attempted,
            "mean_total_time": self.mean_total_time,
        }
