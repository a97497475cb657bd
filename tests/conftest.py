import pytest

from tumblecube.core.base import Cell, Position
from tumblecube.core.config import BoardConfig, Config, PieceConfig, RunnerConfig
from tumblecube.game.controller import GameController
from tumblecube.game.geometry import empty_cube
from tumblecube.game.winning import WinningConditions


def cube_with(cells, size=3):
    cube = empty_cube(size)
    for cell in cells:
        cube[cell] = Cell.OCCUPIED
    return cube


@pytest.fixture
def plate_cube():
    """Flat 3x3 plate lying on the board."""
    return cube_with([(r, c, 0) for r in range(3) for c in range(3)])


@pytest.fixture
def wall_cube():
    """The plate after tumbling east: a 3x1 footprint, three cells tall."""
    return cube_with([(r, 0, d) for r in range(3) for d in range(3)])


@pytest.fixture
def bar_cube():
    """The plate after tumbling north: a 1x3 footprint, three cells tall."""
    return cube_with([(0, c, d) for c in range(3) for d in range(3)])


@pytest.fixture
def l_cube():
    return cube_with([(0, 0, 0), (1, 0, 0), (0, 0, 1)])


@pytest.fixture
def make_controller():
    def factory(cube, board_size=7, blocked=(), winning=None, goal=(4, 5)):
        config = Config(
            board=BoardConfig(size=board_size, blocked_cells=0),
            piece=PieceConfig(size=cube.shape[0]),
        )
        config.goal.position = goal
        controller = GameController(config)
        for row, col in blocked:
            controller.block_cell(row, col)
        controller.initialize_piece(cube)
        if winning is None:
            controller.use_default_winning_conditions()
        else:
            position, winning_cube = winning
            controller.set_winning_conditions(WinningConditions.default(winning_cube, Position(*position)))
        return controller
    return factory


@pytest.fixture
def runner_config(tmp_path):
    return Config(
        board=BoardConfig(size=7, blocked_cells=4),
        runner=RunnerConfig(
            experiment_name="test",
            log_dir=str(tmp_path / "logs"),
            seed=1234,
            max_scenarios=5,
        ),
    )
