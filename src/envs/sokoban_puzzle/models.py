# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Data models for the Sokoban puzzle engine.

The board is a rectangular grid of cells. Each cell carries both the terrain
(wall, floor or goal) and its occupant (player, box or nothing) as a single
tag, so there is no separate occupancy layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union


class Cell(str, Enum):
    """Tile tags, valued by the character used in level files."""

    WALL = "#"
    FLOOR = " "
    PLAYER = "@"
    PLAYER_ON_GOAL = "P"
    BOX = "B"
    BOX_ON_GOAL = "X"
    GOAL = "T"


class Direction(str, Enum):
    """The four directions the player can move in."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTION_DELTAS[self]


# Expansion order matters: the path planner breaks ties in this order.
DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}


class Position(NamedTuple):
    """A (row, col) coordinate on the grid."""

    row: int
    col: int

    def step(self, direction: Direction) -> "Position":
        dr, dc = direction.delta
        return Position(self.row + dr, self.col + dc)


Grid = List[List[Cell]]


@dataclass(frozen=True)
class Level:
    """
    A level from the catalog.

    Attributes:
        id: Identifier from the level file
        name: Display name
        template: Initial board, stored as immutable rows. Sessions always
            play on a copy made by `new_grid()`.
    """

    id: int
    name: str
    template: Tuple[Tuple[Cell, ...], ...]

    def new_grid(self) -> Grid:
        return [list(row) for row in self.template]


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of a move, a push or a click-to-move dispatch.

    Attributes:
        grid: The board after the action. For a rejected action this is the
            very grid object that was passed in.
        steps: Number of player moves applied (0 when rejected)
        pushed: Whether a box was pushed
        solved: Whether a push left no unfilled goal on the board
    """

    grid: Grid
    steps: int = 0
    pushed: bool = False
    solved: bool = False

    @property
    def moved(self) -> bool:
        return self.steps > 0


@dataclass(kw_only=True)
class Action:
    """Base class for actions sent to the environment."""

    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class MoveAction(Action):
    """
    Move the player one step.

    Attributes:
        direction: The direction to move ("up", "down", "left", "right")
    """

    direction: Direction


@dataclass(kw_only=True)
class MoveToCellAction(Action):
    """
    Tap a cell: walk there, or push the adjacent box that was tapped.

    Attributes:
        row: Row of the tapped cell
        col: Column of the tapped cell
    """

    row: int
    col: int


SokobanAction = Union[MoveAction, MoveToCellAction]


@dataclass(kw_only=True)
class Observation:
    """Base class for observations returned by the environment."""

    done: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class SokobanObservation(Observation):
    """
    Observation of the current session.

    Attributes:
        board: Flattened representation of the game board.
                Each cell is encoded as:
                0 = empty floor
                1 = wall
                2 = box
                3 = goal
                4 = player
                5 = box on goal
                6 = player on goal
        board_shape: Shape of the board (height, width)
        rows: The board as tile-character strings, one per row
        num_boxes: Total number of boxes in the puzzle
        boxes_on_goals: Number of boxes currently on goal positions
        player_position: (row, col) position of the player
        moves_count: Number of moves taken so far
        pushes_count: Number of box pushes performed
        completed: Whether the level has been completed
        level_index: Index of the level in the catalog
        level_id: Identifier of the level
        level_name: Display name of the level
        has_next_level: Whether the catalog has a level after this one
    """

    board: List[int]
    board_shape: List[int]
    rows: List[str]
    num_boxes: int
    boxes_on_goals: int
    player_position: List[int]
    moves_count: int = 0
    pushes_count: int = 0
    completed: bool = False
    level_index: int = 0
    level_id: int = 0
    level_name: str = ""
    has_next_level: bool = False


@dataclass
class State:
    """Episode bookkeeping. A new episode starts on every level load."""

    episode_id: Optional[str] = None
    step_count: int = 0


@dataclass
class StepResult:
    """Result of a step as seen by the HTTP client."""

    observation: SokobanObservation
    moved: bool = False
    done: bool = False
