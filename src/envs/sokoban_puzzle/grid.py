# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Queries over a Sokoban grid.

A grid is a list of rows of `Cell` tags. These helpers never mutate the grid
they are given.
"""

import logging
from typing import Optional

import numpy as np

from .errors import PlayerNotFoundError
from .models import Cell, Grid, Position


# Integer cell codes used in observations
EMPTY = 0
WALL = 1
BOX = 2
GOAL = 3
PLAYER = 4
BOX_ON_GOAL = 5
PLAYER_ON_GOAL = 6

CELL_CODES = {
    Cell.FLOOR: EMPTY,
    Cell.WALL: WALL,
    Cell.BOX: BOX,
    Cell.GOAL: GOAL,
    Cell.PLAYER: PLAYER,
    Cell.BOX_ON_GOAL: BOX_ON_GOAL,
    Cell.PLAYER_ON_GOAL: PLAYER_ON_GOAL,
}

WALKABLE = (Cell.FLOOR, Cell.GOAL)
PLAYER_CELLS = (Cell.PLAYER, Cell.PLAYER_ON_GOAL)
BOX_CELLS = (Cell.BOX, Cell.BOX_ON_GOAL)

logger = logging.getLogger(__name__)


def is_walkable(cell: Cell) -> bool:
    """A player may only step onto unoccupied floor or goal."""
    return cell in WALKABLE


def in_bounds(grid: Grid, position: Position) -> bool:
    row, col = position
    return 0 <= row < len(grid) and 0 <= col < len(grid[0])


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def locate_player(grid: Grid) -> Optional[Position]:
    """
    Find the player by scanning rows, then columns, in order.

    Returns:
        Position of the first player cell, or None if the grid has no player
    """
    for r, row in enumerate(grid):
        for c, cell in enumerate(row):
            if cell in PLAYER_CELLS:
                return Position(r, c)
    return None


def require_player(grid: Grid) -> Position:
    """Like `locate_player`, but a missing player is a hard error."""
    position = locate_player(grid)
    if position is None:
        logger.error(f"Grid of shape {len(grid)}x{len(grid[0]) if grid else 0} has no player")
        raise PlayerNotFoundError("grid has no player cell ('@' or 'P')")
    return position


def is_solved(grid: Grid) -> bool:
    """True iff no goal is left unfilled. Occupied goals do not count."""
    return all(cell != Cell.GOAL for row in grid for cell in row)


def encode_grid(grid: Grid) -> np.ndarray:
    """Encode the grid as a (rows, cols) array of integer cell codes."""
    return np.array([[CELL_CODES[cell] for cell in row] for row in grid], dtype=np.int8)


def count_boxes(grid: Grid) -> int:
    board = encode_grid(grid)
    return int(np.count_nonzero(board == BOX)) + int(np.count_nonzero(board == BOX_ON_GOAL))


def count_boxes_on_goals(grid: Grid) -> int:
    return int(np.count_nonzero(encode_grid(grid) == BOX_ON_GOAL))
