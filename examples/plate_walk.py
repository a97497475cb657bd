#!/usr/bin/env python3
"""Walk a flat plate across a board with one blocked cell and print every move."""

from __future__ import annotations

import argparse

from tumblecube.core.base import Cell, Position
from tumblecube.core.config import BoardConfig, Config
from tumblecube.game.controller import GameController
from tumblecube.game.geometry import empty_cube
from tumblecube.game.winning import WinningConditions
from tumblecube.utils.display import LiveLogger, StatusDisplay


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explorer walk of a 3x3 plate.")
    parser.add_argument("--block", nargs=2, type=int, default=[0, 3], metavar=("ROW", "COL"),
                        help="Cell to block")
    parser.add_argument("--goal", nargs=2, type=int, default=[2, 0], metavar=("ROW", "COL"),
                        help="Winning anchor of the flat plate")
    return parser


def main() -> int:
    args = build_parser().parse_args()

    plate = empty_cube(3)
    plate[:, :, 0] = Cell.OCCUPIED

    controller = GameController(Config(board=BoardConfig(size=7, blocked_cells=0)))
    controller.block_cell(*args.block)
    controller.initialize_piece(plate)
    controller.set_winning_conditions(WinningConditions.default(plate, Position(*args.goal)))

    StatusDisplay.print_board(controller.board.grid, "Start")
    result = controller.run_explorer(max_moves=500)

    logger = LiveLogger()
    for index, record in enumerate(result.history):
        logger.log_move(index, str(record.position), record.direction, record.error.value)

    StatusDisplay.print_board(controller.board.grid, f"Final board ({result.stop_reason})")
    return 0 if result.solved else 1


if __name__ == "__main__":
    raise SystemExit(main())


# python examples/plate_walk.py --block 0 3 --goal 2 0
