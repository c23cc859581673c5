# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Replaying planned walks and dispatching taps on the board."""

import logging
from typing import Sequence, Tuple

from .engine import attempt_move, vacated, with_player
from .grid import BOX_CELLS, copy_grid, in_bounds, is_walkable, locate_player
from .models import Direction, Grid, MoveResult, Position
from .planner import find_path, resolve_push

logger = logging.getLogger(__name__)


def move_along_path(grid: Grid, path: Sequence[Direction]) -> Tuple[Grid, int]:
    """
    Walk the player along `path` on a working copy of the grid.

    Every step is checked again; the walk stops at the first step that would
    leave the board or enter anything other than floor or goal, keeping the
    steps made so far. Boxes are never pushed.

    Returns:
        (grid, steps_applied). With no step applied, the input grid itself.
    """
    player = locate_player(grid)
    if player is None or not path:
        return grid, 0

    working = copy_grid(grid)
    steps = 0
    for direction in path:
        target = player.step(direction)
        if not in_bounds(working, target) or not is_walkable(working[target.row][target.col]):
            logger.debug(f"Walk stopped after {steps} of {len(path)} steps at {target}")
            break
        working[player.row][player.col] = vacated(working[player.row][player.col])
        working[target.row][target.col] = with_player(working[target.row][target.col])
        player = target
        steps += 1

    if steps == 0:
        return grid, 0
    return working, steps


def move_to_cell(grid: Grid, target: Position) -> MoveResult:
    """
    Handle a tap on `target`.

    Tapping a box next to the player pushes it away from the player. Tapping
    empty floor or a goal walks there along a shortest path. Anything else
    is ignored.
    """
    if not in_bounds(grid, target):
        return MoveResult(grid)

    cell = grid[target.row][target.col]
    if cell in BOX_CELLS:
        direction = resolve_push(grid, target)
        if direction is None:
            return MoveResult(grid)
        return attempt_move(grid, direction)

    if not is_walkable(cell):
        return MoveResult(grid)

    player = locate_player(grid)
    if player is None:
        return MoveResult(grid)
    path = find_path(grid, player, target)
    if path is None:
        return MoveResult(grid)

    new_grid, steps = move_along_path(grid, path)
    return MoveResult(new_grid, steps=steps)
