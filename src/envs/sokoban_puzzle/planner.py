# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Path planning for click-to-move.

Paths only cross empty floor and goal tiles, so following one never pushes
a box.
"""

import logging
from collections import deque
from typing import Deque, List, Optional, Set, Tuple

from .grid import in_bounds, is_walkable, locate_player
from .models import DIRECTION_DELTAS, Direction, Grid, Position

logger = logging.getLogger(__name__)


def find_path(grid: Grid, start: Position, end: Position) -> Optional[List[Direction]]:
    """
    Breadth-first search from `start` to `end` over walkable cells.

    Neighbours are expanded up, down, left, right, so among several shortest
    paths the one found first in that order wins. The start cell is exempt
    from the walkability check since the player stands on it.

    Args:
        grid: Current board
        start: Where the walk begins (normally the player)
        end: Target cell

    Returns:
        Directions to follow, `[]` when start equals end, or None when the
        target cannot be reached
    """
    queue: Deque[Tuple[Position, List[Direction]]] = deque([(start, [])])
    visited: Set[Position] = {start}

    while queue:
        position, path = queue.popleft()
        if position == end:
            return path

        for direction in DIRECTION_DELTAS:
            neighbour = position.step(direction)
            if neighbour in visited or not in_bounds(grid, neighbour):
                continue
            if is_walkable(grid[neighbour.row][neighbour.col]):
                visited.add(neighbour)
                queue.append((neighbour, path + [direction]))

    logger.debug(f"No path from {start} to {end} ({len(visited)} cells explored)")
    return None


def resolve_push(grid: Grid, box: Position) -> Optional[Direction]:
    """
    Turn a tap on a box into the direction that pushes it.

    The player must stand directly next to the box and the cell beyond the
    box must be free. The push itself is left to `engine.attempt_move`.

    Returns:
        The push direction, or None if the box cannot be pushed from here
    """
    player = locate_player(grid)
    if player is None:
        return None

    row_diff = box.row - player.row
    col_diff = box.col - player.col
    if abs(row_diff) + abs(col_diff) != 1:
        return None

    beyond = Position(box.row + row_diff, box.col + col_diff)
    if not in_bounds(grid, beyond) or not is_walkable(grid[beyond.row][beyond.col]):
        return None

    if row_diff == -1:
        return Direction.UP
    if row_diff == 1:
        return Direction.DOWN
    if col_diff == -1:
        return Direction.LEFT
    return Direction.RIGHT
