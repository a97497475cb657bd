from tumblecube.core.base import Direction, MoveError, Position
from tumblecube.game.explorer import STOP_EXHAUSTED, STOP_MOVE_LIMIT, STOP_SOLVED


def walk(result):
    return [(r.position.to_tuple(), r.direction, r.successful) for r in result.history]


def test_open_board_walk_gets_stuck(make_controller, plate_cube):
    controller = make_controller(plate_cube)

    result = controller.run_explorer()

    assert not result.solved
    assert result.stop_reason == STOP_EXHAUSTED
    assert result.moves_attempted == 5
    assert walk(result) == [
        ((0, 0), Direction.E, True),
        ((0, 2), Direction.E, True),
        ((0, 2), Direction.N, False),
        ((0, 2), Direction.W, True),
        ((0, 2), Direction.S, True),
    ]
    assert controller.piece.position == Position(2, 2)


def test_successful_fourth_attempt_still_ends_walk(make_controller, plate_cube):
    controller = make_controller(plate_cube)

    result = controller.run_explorer()

    # the fourth attempt from (0, 2) moves the piece to (2, 2), which is
    # never tried because (0, 2) is the last registered anchor
    assert result.history[-1].successful
    assert len(result.visited[Position(0, 2)]) == 4
    assert result.visited[Position(2, 2)] == []
    assert all(r.position != Position(2, 2) for r in result.history)


def test_explorer_stops_on_first_win(make_controller, plate_cube):
    controller = make_controller(plate_cube, winning=((0, 2), plate_cube))

    result = controller.run_explorer()

    assert result.solved
    assert result.stop_reason == STOP_SOLVED
    assert result.moves_attempted == 2
    assert controller.is_solved()


def test_win_on_last_attempt_before_exhaustion(make_controller, plate_cube, wall_cube):
    controller = make_controller(plate_cube, winning=((2, 2), wall_cube))

    result = controller.run_explorer()

    assert result.solved
    assert result.moves_attempted == 5
    assert controller.piece.position == Position(2, 2)


def test_blocked_scenario_is_solved(make_controller, plate_cube):
    controller = make_controller(plate_cube, blocked=[(0, 3)], winning=((2, 0), plate_cube))

    result = controller.run_explorer()

    assert result.solved
    assert result.history[1].error is MoveError.BLOCKED
    assert walk(result) == [
        ((0, 0), Direction.E, True),
        ((0, 2), Direction.E, False),
        ((0, 2), Direction.N, False),
        ((0, 2), Direction.W, True),
        ((0, 0), Direction.S, True),
        ((2, 0), Direction.S, True),
    ]
    assert controller.piece.position == Position(2, 0)


def test_win_depends_on_orientation(make_controller, plate_cube, wall_cube):
    as_wall = make_controller(plate_cube, winning=((0, 2), wall_cube)).run_explorer()
    as_plate = make_controller(plate_cube, winning=((0, 2), plate_cube)).run_explorer()

    # the piece stands on (0, 2) as a wall first, then as the plate
    assert as_wall.solved and as_plate.solved
    assert as_wall.moves_attempted == 1
    assert as_plate.moves_attempted == 2


def test_solution_path_follows_preceding_links(make_controller, plate_cube):
    controller = make_controller(plate_cube, blocked=[(0, 3)], winning=((2, 0), plate_cube))

    result = controller.run_explorer()
    path = result.solution_path()

    assert [r.preceding for r in result.history] == [None, 0, 1, 2, 3, 4]
    assert [r.position.to_tuple() for r in path] == [(0, 0), (0, 2), (0, 0), (2, 0)]
    assert all(record.successful for record in path)
    assert path[-1] is result.history[-1]


def test_boxed_in_piece_exhausts_after_four_attempts(make_controller, plate_cube):
    controller = make_controller(plate_cube, board_size=3, goal=(0, 0), winning=((2, 2), plate_cube))

    result = controller.run_explorer()

    assert result.stop_reason == STOP_EXHAUSTED
    assert [r.direction for r in result.history] == [Direction.E, Direction.N, Direction.W, Direction.S]
    assert all(r.error is MoveError.NO_ROOM for r in result.history)


def test_move_limit(make_controller, plate_cube):
    controller = make_controller(plate_cube)

    result = controller.run_explorer(max_moves=3)

    assert not result.solved
    assert result.stop_reason == STOP_MOVE_LIMIT
    assert result.moves_attempted == 3


def test_history_records_serialize(make_controller, plate_cube):
    controller = make_controller(plate_cube)
    result = controller.run_explorer(max_moves=3)

    assert result.history[2].to_dict() == {
        "position": [0, 2],
        "direction": "N",
        "preceding": 1,
        "successful": False,
        "error": "NoRoom",
    }
