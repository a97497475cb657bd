"""
Game modules for tumblecube: geometry, board, piece, winning conditions,
explorer, scenario generator and the controller tying them together.
"""

from tumblecube.game.geometry import (
    InvalidPieceError,
    rotate,
    rotate_layer,
    realign,
    footprint,
    validate_piece_shape,
)
from tumblecube.game.board import Board, validate_move
from tumblecube.game.piece import PieceState
from tumblecube.game.winning import WinningConditions
from tumblecube.game.explorer import ExplorationResult, PuzzleExplorer
from tumblecube.game.generator import ScenarioGenerator
from tumblecube.game.controller import GameController, ScenarioOutcome
from tumblecube.game.loader import load_piece_from_json, load_default_piece

__all__ = [
    "InvalidPieceError",
    "rotate",
    "rotate_layer",
    "realign",
    "footprint",
    "validate_piece_shape",
    "Board",
    "validate_move",
    "PieceState",
    "WinningConditions",
    "ExplorationResult",
    "PuzzleExplorer",
    "ScenarioGenerator",
    "GameController",
    "ScenarioOutcome",
    "load_piece_from_json",
    "load_default_piece",
]
