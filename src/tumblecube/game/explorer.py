"""
Puzzle explorer - greedy direction-cycling walk over anchor positions.

The explorer is not a backtracking search. It starts by tumbling east and
then, at every step:

- at an anchor it has not seen before, retries the previous direction;
- at an anchor it has seen, tries the direction after the previous one in
  the E -> N -> W -> S cycle.

The walk stops as soon as the winning conditions are met, or when the
anchor it checks already holds four attempts. At a known anchor that is the
anchor itself. At a new anchor it is the most recently registered one, so a
fourth attempt that tumbles the piece somewhere new still ends the walk. It
never returns to an earlier anchor to retry a direction, so it can get stuck
on layouts a real search would solve.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from tumblecube.core.base import Direction, MoveRecord, Position

if TYPE_CHECKING:
    from tumblecube.game.controller import GameController

logger = logging.getLogger(__name__)

STOP_SOLVED = "solved"
STOP_EXHAUSTED = "exhausted"
STOP_MOVE_LIMIT = "move_limit"


@dataclass
class ExplorationResult:
    """Outcome of one explorer run."""
    solved: bool
    stop_reason: str
    history: List[MoveRecord] = field(default_factory=list)
    visited: Dict[Position, List[int]] = field(default_factory=dict)

    @property
    def moves_attempted(self) -> int:
        return len(self.history)

    @property
    def moves_successful(self) -> int:
        return sum(1 for record in self.history if record.successful)

    def solution_path(self) -> List[MoveRecord]:
        """Successful moves from the start to the last move, oldest first."""
        path = []
        index = len(self.history) - 1 if self.history else None
        while index is not None:
            record = self.history[index]
            if record.successful:
                path.append(record)
            index = record.preceding
        path.reverse()
        return path


class PuzzleExplorer:
    """Drive a GameController with the direction-cycling walk."""

    def __init__(self, controller: "GameController", max_moves: Optional[int] = None):
        self.controller = controller
        self.max_moves = max_moves

    def run(self) -> ExplorationResult:
        history: List[MoveRecord] = []
        visited: Dict[Position, List[int]] = {}
        previous: Optional[MoveRecord] = None

        while True:
            if self.max_moves is not None and len(history) >= self.max_moves:
                logger.info("Explorer stopped after %d moves (move limit)", len(history))
                return ExplorationResult(False, STOP_MOVE_LIMIT, history, visited)

            position = self.controller.piece.position

            if previous is None:
                direction = Direction.E
                checked = visited.setdefault(position, [])
            elif position not in visited:
                direction = previous.direction
                # a new anchor is judged by the most recently registered one
                checked = visited[next(reversed(visited))]
                visited[position] = []
            else:
                direction = previous.direction.next_clockwise()
                checked = visited[position]

            if len(checked) >= len(Direction):
                logger.info("Explorer exhausted all directions before moving from %s", position)
                return ExplorationResult(False, STOP_EXHAUSTED, history, visited)

            result = self.controller.try_move(position, direction)
            record = MoveRecord(
                position=position,
                direction=direction,
                preceding=len(history) - 1 if history else None,
                successful=result.success,
                error=result.error,
            )
            visited[position].append(len(history))
            history.append(record)
            previous = record

            if record.successful and self.controller.is_solved():
                logger.info("Puzzle solved after %d moves", len(history))
                return ExplorationResult(True, STOP_SOLVED, history, visited)
