# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Single-step movement and box pushing.

If there's a box in the direction of movement and an empty space behind it,
the box will be pushed. Boxes are never pulled, and only one box moves at a
time.
"""

import logging

from .grid import BOX_CELLS, copy_grid, in_bounds, is_solved, is_walkable, locate_player
from .models import Cell, Direction, Grid, MoveResult, Position

logger = logging.getLogger(__name__)


def vacated(cell: Cell) -> Cell:
    """The tile left behind when the player or a box moves off `cell`."""
    if cell in (Cell.PLAYER_ON_GOAL, Cell.BOX_ON_GOAL, Cell.GOAL):
        return Cell.GOAL
    return Cell.FLOOR


def with_player(cell: Cell) -> Cell:
    """The tile for the player standing on the terrain under `cell`."""
    return Cell.PLAYER_ON_GOAL if vacated(cell) == Cell.GOAL else Cell.PLAYER


def with_box(cell: Cell) -> Cell:
    """The tile for a box resting on the terrain under `cell`."""
    return Cell.BOX_ON_GOAL if vacated(cell) == Cell.GOAL else Cell.BOX


def attempt_move(grid: Grid, direction: Direction) -> MoveResult:
    """
    Move the player one step in `direction`, pushing a box if one is in the way.

    The input grid is never modified. An accepted move returns a new grid;
    a rejected move returns the input grid itself with `steps == 0`.

    Args:
        grid: Current board
        direction: Direction to move

    Returns:
        MoveResult. `solved` is only evaluated after a push.
    """
    player = locate_player(grid)
    if player is None:
        logger.error(f"Move {direction.value} rejected: grid has no player")
        return MoveResult(grid)

    target = player.step(direction)
    if not in_bounds(grid, target):
        logger.debug(f"Move {direction.value} rejected: {target} is out of bounds")
        return MoveResult(grid)

    target_cell = grid[target.row][target.col]

    if is_walkable(target_cell):
        new_grid = copy_grid(grid)
        _move_player(new_grid, player, target)
        return MoveResult(new_grid, steps=1)

    if target_cell in BOX_CELLS:
        box_target = target.step(direction)
        if not in_bounds(grid, box_target):
            logger.debug(f"Push {direction.value} rejected: box would leave the board")
            return MoveResult(grid)
        if not is_walkable(grid[box_target.row][box_target.col]):
            logger.debug(f"Push {direction.value} rejected: {box_target} is blocked")
            return MoveResult(grid)

        new_grid = copy_grid(grid)
        new_grid[box_target.row][box_target.col] = with_box(grid[box_target.row][box_target.col])
        _move_player(new_grid, player, target)
        solved = is_solved(new_grid)
        if solved:
            logger.info(f"Push {direction.value} filled the last goal")
        return MoveResult(new_grid, steps=1, pushed=True, solved=solved)

    logger.debug(f"Move {direction.value} rejected: {target} is a {target_cell.name.lower()}")
    return MoveResult(grid)


def _move_player(grid: Grid, source: Position, target: Position) -> None:
    """Move the player from `source` to `target` in place."""
    grid[source.row][source.col] = vacated(grid[source.row][source.col])
    grid[target.row][target.col] = with_player(grid[target.row][target.col])
