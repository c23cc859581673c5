# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Sokoban Puzzle - grid state, box pushing and click-to-move pathfinding."""

from .client import SokobanClient
from .engine import attempt_move
from .errors import LevelFormatError, LevelIndexError, PlayerNotFoundError, SokobanError
from .executor import move_along_path, move_to_cell
from .grid import is_solved, is_walkable, locate_player
from .levels import load_levels
from .models import (
    Cell,
    Direction,
    Level,
    MoveAction,
    MoveResult,
    MoveToCellAction,
    Position,
    SokobanObservation,
    State,
    StepResult,
)
from .planner import find_path, resolve_push

__all__ = [
    "Cell",
    "Direction",
    "Level",
    "LevelFormatError",
    "LevelIndexError",
    "MoveAction",
    "MoveResult",
    "MoveToCellAction",
    "PlayerNotFoundError",
    "Position",
    "SokobanClient",
    "SokobanError",
    "SokobanObservation",
    "State",
    "StepResult",
    "attempt_move",
    "find_path",
    "is_solved",
    "is_walkable",
    "load_levels",
    "locate_player",
    "move_along_path",
    "move_to_cell",
    "resolve_push",
]
