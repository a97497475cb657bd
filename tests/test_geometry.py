import numpy as np
import pytest

from tumblecube.core.base import Axis, Cell, Direction
from tumblecube.game.geometry import (
    InvalidPieceError,
    apply_rotation,
    footprint,
    occupied_cells,
    realign,
    rotate,
    rotate_layer,
    validate_piece_shape,
)

from conftest import cube_with


def test_rotate_layer_clockwise():
    layer = np.arange(9).reshape(3, 3)
    assert rotate_layer(layer, clockwise=True).tolist() == [[6, 3, 0], [7, 4, 1], [8, 5, 2]]


def test_rotate_layer_counter_clockwise():
    layer = np.arange(9).reshape(3, 3)
    assert rotate_layer(layer, clockwise=False).tolist() == [[2, 5, 8], [1, 4, 7], [0, 3, 6]]


def test_rotate_layer_does_not_alias_input():
    layer = np.arange(9).reshape(3, 3)
    rotated = rotate_layer(layer, clockwise=True)
    rotated[0, 0] = -1
    assert layer[0, 0] == 0


def test_l_shape_about_x_axis(l_cube):
    rotated = rotate(l_cube, Axis.X, clockwise=True)
    assert sorted(occupied_cells(rotated)) == [(0, 0, 0), (0, 1, 0), (1, 0, 0)]
    assert footprint(rotated).tolist() == [[Cell.OCCUPIED, Cell.OCCUPIED], [Cell.OCCUPIED, Cell.FREE]]


def test_l_shape_about_y_axis(l_cube):
    rotated = rotate(l_cube, Axis.Y, clockwise=True)
    assert sorted(occupied_cells(rotated)) == [(0, 0, 0), (0, 0, 1), (1, 0, 1)]
    assert footprint(rotated).tolist() == [[Cell.OCCUPIED]]


def test_rotate_leaves_input_untouched(l_cube):
    before = l_cube.copy()
    rotate(l_cube, Axis.X, clockwise=True)
    assert np.array_equal(l_cube, before)


@pytest.mark.parametrize("axis", list(Axis))
def test_four_quarter_turns_restore_cube(l_cube, axis):
    cube = l_cube
    for _ in range(4):
        cube = rotate(cube, axis, clockwise=True)
    assert np.array_equal(cube, l_cube)


@pytest.mark.parametrize("axis", list(Axis))
def test_opposite_rotations_cancel(l_cube, axis):
    there = rotate(l_cube, axis, clockwise=True)
    back = rotate(there, axis, clockwise=False)
    assert np.array_equal(back, l_cube)


def test_rotation_preserves_cell_count(l_cube):
    cube = l_cube
    for direction in [Direction.E, Direction.N, Direction.N, Direction.W, Direction.S]:
        cube = apply_rotation(cube, direction.rotation)
        assert len(occupied_cells(cube)) == 3


def test_plate_tumbles_to_wall_and_bar(plate_cube, wall_cube, bar_cube):
    assert np.array_equal(apply_rotation(plate_cube, Direction.E.rotation), wall_cube)
    assert np.array_equal(apply_rotation(plate_cube, Direction.W.rotation), wall_cube)
    assert np.array_equal(apply_rotation(plate_cube, Direction.N.rotation), bar_cube)
    assert np.array_equal(apply_rotation(plate_cube, Direction.S.rotation), bar_cube)


def test_realign_moves_shape_to_origin():
    cube = cube_with([(1, 2, 1), (2, 2, 1), (2, 1, 2)])
    realigned = realign(cube)
    assert sorted(occupied_cells(realigned)) == [(0, 1, 0), (1, 0, 1), (1, 1, 0)]


def test_realign_is_idempotent():
    once = realign(cube_with([(1, 1, 1), (2, 1, 1)]))
    assert np.array_equal(realign(once), once)


def test_footprint_keeps_holes():
    cube = cube_with([(0, 0, 0), (0, 2, 0), (0, 1, 1), (0, 0, 1), (0, 2, 1)])
    assert footprint(cube).tolist() == [[Cell.OCCUPIED, Cell.FREE, Cell.OCCUPIED]]


def test_footprint_of_empty_contact_layer_raises():
    cube = cube_with([(0, 0, 1)])
    with pytest.raises(ValueError):
        footprint(cube)


def test_validate_rejects_disconnected_shape():
    with pytest.raises(InvalidPieceError):
        validate_piece_shape(cube_with([(0, 0, 0), (2, 2, 2)]))


def test_validate_rejects_empty_and_wrong_size(l_cube):
    with pytest.raises(InvalidPieceError):
        validate_piece_shape(cube_with([]))
    with pytest.raises(InvalidPieceError):
        validate_piece_shape(l_cube, size=4)
    with pytest.raises(InvalidPieceError):
        validate_piece_shape(np.zeros((3, 3, 2), dtype=np.int8))


def test_validate_rejects_blocked_marker(l_cube):
    cube = l_cube.copy()
    cube[2, 2, 2] = Cell.BLOCKED
    with pytest.raises(InvalidPieceError):
        validate_piece_shape(cube)


@pytest.mark.parametrize("direction", list(Direction))
def test_footprint_keeps_every_contact_cell(l_cube, direction):
    cube = apply_rotation(l_cube, direction.rotation)
    contact = int((cube[:, :, 0] == Cell.OCCUPIED).sum())
    assert int((footprint(cube) == Cell.OCCUPIED).sum()) == contact
