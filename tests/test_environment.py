import pytest

from envs.sokoban_puzzle.errors import LevelFormatError, LevelIndexError, PlayerNotFoundError
from envs.sokoban_puzzle.levels import format_grid, parse_level
from envs.sokoban_puzzle.models import Cell, Direction, MoveAction, MoveToCellAction, Position
from envs.sokoban_puzzle.server.sokoban_environment import SokobanEnvironment


def test_initial_state(env):
    assert env.level_index == 0
    assert env.level_name == "Push Once"
    assert env.moves_count == 0
    assert env.pushes_count == 0
    assert env.completed is False
    assert env.player_position == Position(1, 1)
    assert env.has_next_level


def test_empty_catalog_is_rejected():
    with pytest.raises(LevelFormatError):
        SokobanEnvironment([])


def test_push_onto_goal_completes_level(env):
    assert env.attempt_move(Direction.RIGHT) is True
    assert env.moves_count == 1
    assert env.pushes_count == 1
    assert env.completed is True
    assert format_grid(env.grid) == ["#####", "# @X#", "#####"]


def test_moves_ignored_once_completed(env):
    env.attempt_move(Direction.RIGHT)
    grid = env.grid
    assert env.attempt_move(Direction.LEFT) is False
    assert env.move_to_cell(1, 1) is False
    assert env.grid == grid
    assert env.moves_count == 1


def test_step_onto_last_goal_does_not_complete():
    level = parse_level({"id": 9, "name": "Step", "grid": ["###", "#@T", "###"]})
    env = SokobanEnvironment([level])
    assert env.attempt_move(Direction.RIGHT) is True
    assert env.grid[1][2] == Cell.PLAYER_ON_GOAL
    assert env.moves_count == 1
    assert env.completed is False


def test_rejected_move_leaves_session_untouched(env):
    env.load_level(1)
    before = env.grid
    assert env.attempt_move(Direction.UP) is False
    assert env.grid == before
    assert env.moves_count == 0


def test_blocked_push_is_rejected():
    level = parse_level({"id": 5, "name": "Blocked", "grid": ["#######", "#@BB T#", "#######"]})
    env = SokobanEnvironment([level])
    assert env.attempt_move(Direction.RIGHT) is False
    assert format_grid(env.grid) == ["#######", "#@BB T#", "#######"]
    assert env.moves_count == 0
    assert env.pushes_count == 0


def test_click_walks_the_whole_path(env):
    env.load_level(1)
    assert env.move_to_cell(1, 4) is True
    assert env.player_position == Position(1, 4)
    assert env.moves_count == 3
    assert env.pushes_count == 0


def test_click_on_adjacent_box_pushes(env):
    assert env.move_to_cell(1, 2) is True
    assert env.completed is True
    assert env.moves_count == 1


def test_click_that_goes_nowhere(env):
    env.load_level(1)
    assert env.move_to_cell(0, 0) is False
    assert env.move_to_cell(3, 3) is False  # box out of reach
    assert env.move_to_cell(20, 20) is False
    assert env.moves_count == 0


def test_grid_observable_is_a_copy(env):
    grid = env.grid
    grid[1][1] = Cell.FLOOR
    assert env.player_position == Position(1, 1)


def test_reset_restores_level(env):
    env.load_level(1)
    env.move_to_cell(1, 4)
    episode = env.state.episode_id
    env.reset()
    assert env.level_index == 1
    assert env.moves_count == 0
    assert env.player_position == Position(1, 1)
    assert env.state.episode_id != episode
    assert env.state.step_count == 0


def test_reset_clears_completion(env):
    env.attempt_move(Direction.RIGHT)
    env.reset()
    assert env.completed is False
    assert env.pushes_count == 0
    assert env.attempt_move(Direction.RIGHT) is True


def test_advance_level(env):
    assert env.advance_level() is True
    assert env.level_index == 1
    assert env.advance_level() is True
    assert env.level_name == "Last One"
    assert not env.has_next_level
    assert env.advance_level() is False
    assert env.level_index == 2


def test_load_level_out_of_range(env):
    with pytest.raises(LevelIndexError):
        env.load_level(3)
    with pytest.raises(IndexError):
        env.load_level(-1)
    assert env.level_index == 0


def test_start_level(catalog):
    env = SokobanEnvironment(catalog, start_level=2)
    assert env.level_name == "Last One"


def test_step_with_actions(env):
    env.load_level(1)
    obs = env.step(MoveToCellAction(row=3, col=2))
    assert obs.metadata["moved"] is True
    assert obs.moves_count == 3
    obs = env.step(MoveAction(direction=Direction.RIGHT))
    assert obs.completed is True
    assert obs.done is True
    assert obs.pushes_count == 1
    assert env.state.step_count == 2


def test_step_rejects_unknown_action(env):
    with pytest.raises(TypeError):
        env.step("up")


def test_observation(env):
    obs = env.observe()
    assert obs.board_shape == [3, 5]
    assert obs.board == [1, 1, 1, 1, 1, 1, 4, 2, 3, 1, 1, 1, 1, 1, 1]
    assert obs.rows == ["#####", "#@BT#", "#####"]
    assert obs.num_boxes == 1
    assert obs.boxes_on_goals == 0
    assert obs.player_position == [1, 1]
    assert obs.level_id == 1
    assert obs.has_next_level is True
    assert obs.done is False


def test_player_position_requires_player(env):
    env._grid = [[Cell.FLOOR, Cell.GOAL]]
    with pytest.raises(PlayerNotFoundError):
        env.player_position
