import numpy as np
import pytest

from tumblecube.core.base import Cell, Position
from tumblecube.game.board import Board
from tumblecube.game.generator import ScenarioGenerator
from tumblecube.game.geometry import count_occupied
from tumblecube.game.loader import load_default_piece
from tumblecube.game.winning import WinningConditions


def test_tumble_preserves_shape_size(l_cube):
    generator = ScenarioGenerator(random_tumbles=25, rng=np.random.default_rng(0))
    tumbled = generator.tumble(l_cube)
    assert count_occupied(tumbled) == 3
    assert tumbled.shape == l_cube.shape


def test_zero_tumbles_keeps_cube(l_cube):
    generator = ScenarioGenerator(random_tumbles=0, rng=np.random.default_rng(0))
    assert np.array_equal(generator.tumble(l_cube), l_cube)


@pytest.mark.parametrize("seed", range(10))
def test_generated_scenario_invariants(seed):
    cube = load_default_piece()
    winning = WinningConditions.default(cube, Position(4, 5))
    generator = ScenarioGenerator(board_size=7, blocked_cells=4, random_tumbles=16,
                                  rng=np.random.default_rng(seed))

    board, piece = generator.generate(cube, winning)

    fp = piece.footprint()
    assert board.fits(piece.position, fp.shape)
    assert piece.position.row != 4
    assert piece.position.col != 5
    assert len(board.cells_with(Cell.BLOCKED)) == 4
    assert len(board.cells_with(Cell.OCCUPIED)) == count_occupied(fp)
    assert count_occupied(piece.cube) == count_occupied(cube)


def test_only_last_winning_position_is_avoided(plate_cube):
    winning = WinningConditions()
    winning.add(Position(0, 0), plate_cube)
    winning.add(Position(4, 4), plate_cube)
    generator = ScenarioGenerator(board_size=7, rng=np.random.default_rng(1))

    anchors = {generator.pick_anchor((1, 1), winning) for _ in range(300)}

    assert all(a.row != 4 and a.col != 4 for a in anchors)
    assert any(a.row == 0 or a.col == 0 for a in anchors)


def test_no_winning_positions_accepts_any_anchor():
    generator = ScenarioGenerator(board_size=4, rng=np.random.default_rng(2))
    anchors = {generator.pick_anchor((2, 2), WinningConditions()) for _ in range(200)}
    assert anchors == {Position(r, c) for r in range(3) for c in range(3)}


def test_pick_anchor_without_candidates_raises(plate_cube):
    winning = WinningConditions.default(plate_cube, Position(0, 0))
    generator = ScenarioGenerator(board_size=3, rng=np.random.default_rng(0))
    with pytest.raises(ValueError):
        generator.pick_anchor((3, 3), winning)


def test_block_randomly_needs_enough_free_cells():
    board = Board(2)
    board.overlay(Position(0, 0), np.ones((1, 2), dtype=np.int8))
    generator = ScenarioGenerator(board_size=2, rng=np.random.default_rng(0))

    with pytest.raises(ValueError):
        generator.block_randomly(board, 3)

    generator.block_randomly(board, 2)
    assert board.cells_with(Cell.BLOCKED) == [(1, 0), (1, 1)]


def test_same_seed_same_scenario():
    cube = load_default_piece()
    winning = WinningConditions.default(cube, Position(4, 5))

    boards = []
    for _ in range(2):
        generator = ScenarioGenerator(rng=np.random.default_rng(99))
        board, piece = generator.generate(cube, winning)
        boards.append((board.grid.copy(), piece.position, piece.cube.copy()))

    assert np.array_equal(boards[0][0], boards[1][0])
    assert boards[0][1] == boards[1][1]
    assert np.array_equal(boards[0][2], boards[1][2])
