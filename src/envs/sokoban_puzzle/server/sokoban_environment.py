# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Sokoban Environment Implementation.

A classic puzzle game where the player pushes boxes onto goal positions.
The environment owns the session state of the active level: the working
grid, the move and push counters and the completion flag.
"""

import logging
from typing import List, Sequence, Tuple
from uuid import uuid4

from ..engine import attempt_move
from ..errors import LevelFormatError, LevelIndexError
from ..executor import move_to_cell
from ..grid import copy_grid, count_boxes, count_boxes_on_goals, encode_grid, require_player
from ..levels import format_grid
from ..models import (
    Direction,
    Grid,
    Level,
    MoveAction,
    MoveResult,
    MoveToCellAction,
    Position,
    SokobanAction,
    SokobanObservation,
    State,
)

logger = logging.getLogger(__name__)


class SokobanEnvironment:
    """
    Sokoban puzzle session over a catalog of levels.

    The goal is to push all boxes onto goal positions. The player can move
    in four directions, or tap a cell to walk there along a shortest path.
    Tapping a box next to the player pushes it. The level is completed by
    the push that fills the last goal; after that, moves are ignored until
    the level is reset or another level is loaded.

    Example:
        >>> env = SokobanEnvironment(load_levels())
        >>> obs = env.observe()
        >>> print(f"Level: {obs.level_name}, board size: {obs.board_shape}")
        >>>
        >>> env.attempt_move(Direction.RIGHT)
        >>> env.move_to_cell(1, 1)
        >>> print(f"Moves: {env.moves_count}, completed: {env.completed}")
    """

    def __init__(self, levels: Sequence[Level], start_level: int = 0):
        """
        Initialize the environment and load the first level.

        Args:
            levels: Level catalog, in play order
            start_level: Index of the level to load first (default: 0)
        """
        if not levels:
            raise LevelFormatError("level catalog is empty")

        self._levels: Tuple[Level, ...] = tuple(levels)
        self._level_index = 0
        self._grid: Grid = []
        self._moves_count = 0
        self._pushes_count = 0
        self._completed = False
        self._state = State(episode_id=str(uuid4()), step_count=0)

        logger.info(f"SokobanEnvironment initialized with {len(self._levels)} levels")
        self.load_level(start_level)

    # Lifecycle

    def load_level(self, index: int) -> SokobanObservation:
        """
        Load a level from the catalog, discarding the current session.

        Raises:
            LevelIndexError: if `index` is not a catalog position
        """
        if not 0 <= index < len(self._levels):
            raise LevelIndexError(f"level index {index} out of range (0-{len(self._levels) - 1})")

        level = self._levels[index]
        self._level_index = index
        self._grid = level.new_grid()
        self._moves_count = 0
        self._pushes_count = 0
        self._completed = False
        self._state = State(episode_id=str(uuid4()), step_count=0)
        logger.info(f"Loaded level {index} ({level.name}). New episode ID: {self._state.episode_id}")
        return self.observe()

    def reset(self) -> SokobanObservation:
        """Restart the current level."""
        return self.load_level(self._level_index)

    def advance_level(self) -> bool:
        """
        Move on to the next level in the catalog.

        Returns:
            False, leaving the session untouched, when this is the last level
        """
        if not self.has_next_level:
            logger.info("Already on the last level; not advancing")
            return False
        self.load_level(self._level_index + 1)
        return True

    # Input

    def attempt_move(self, direction: Direction) -> bool:
        """Move the player one step. Returns whether the player moved."""
        if self._completed:
            return False
        return self._commit(attempt_move(self._grid, Direction(direction)))

    def move_to_cell(self, row: int, col: int) -> bool:
        """Handle a tap on a cell. Returns whether the player moved."""
        if self._completed:
            return False
        return self._commit(move_to_cell(self._grid, Position(row, col)))

    def step(self, action: SokobanAction) -> SokobanObservation:
        """
        Apply an action and observe the result.

        Args:
            action: MoveAction or MoveToCellAction

        Returns:
            SokobanObservation with the updated board state
        """
        self._state.step_count += 1
        if isinstance(action, MoveAction):
            moved = self.attempt_move(action.direction)
        elif isinstance(action, MoveToCellAction):
            moved = self.move_to_cell(action.row, action.col)
        else:
            raise TypeError(f"unsupported action type {type(action).__name__}")

        observation = self.observe()
        observation.metadata["moved"] = moved
        logger.debug(f"Step {self._state.step_count}: Action={action}, Moved={moved}, Done={observation.done}")
        return observation

    def _commit(self, result: MoveResult) -> bool:
        if not result.moved:
            return False

        self._grid = result.grid
        self._moves_count += result.steps
        if result.pushed:
            self._pushes_count += 1
            if result.solved:
                self._completed = True
                logger.info(
                    f"Episode {self._state.episode_id} solved level {self._level_index} "
                    f"in {self._moves_count} moves"
                )
        return True

    # Observables

    @property
    def grid(self) -> Grid:
        """A copy of the current board."""
        return copy_grid(self._grid)

    @property
    def levels(self) -> Tuple[Level, ...]:
        return self._levels

    @property
    def level(self) -> Level:
        return self._levels[self._level_index]

    @property
    def level_index(self) -> int:
        return self._level_index

    @property
    def level_name(self) -> str:
        return self.level.name

    @property
    def has_next_level(self) -> bool:
        return self._level_index < len(self._levels) - 1

    @property
    def moves_count(self) -> int:
        return self._moves_count

    @property
    def pushes_count(self) -> int:
        return self._pushes_count

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def player_position(self) -> Position:
        return require_player(self._grid)

    @property
    def state(self) -> State:
        """
        Get the current environment state.

        Returns:
            Current State with episode_id and step_count
        """
        return self._state

    def rows(self) -> List[str]:
        return format_grid(self._grid)

    def observe(self) -> SokobanObservation:
        """Create an observation from the current board state."""
        board = encode_grid(self._grid)

        return SokobanObservation(
            board=board.flatten().tolist(),
            board_shape=list(board.shape),
            rows=self.rows(),
            num_boxes=count_boxes(self._grid),
            boxes_on_goals=count_boxes_on_goals(self._grid),
            player_position=list(self.player_position),
            moves_count=self._moves_count,
            pushes_count=self._pushes_count,
            completed=self._completed,
            level_index=self._level_index,
            level_id=self.level.id,
            level_name=self.level.name,
            has_next_level=self.has_next_level,
            done=self._completed,
            metadata={"step": self._state.step_count},
        )
