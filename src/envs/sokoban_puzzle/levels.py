# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Level catalog loading.

A catalog is a JSON document of the form::

    {"levels": [{"id": 1, "name": "First Push", "grid": ["#####", ...]}]}

Each grid row is either a string or a list of single-character tile codes:

    '#' = wall
    ' ' = floor
    '@' = player
    'P' = player on goal
    'B' = box
    'X' = box on goal
    'T' = goal
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .errors import LevelFormatError
from .grid import PLAYER_CELLS
from .models import Cell, Grid, Level

DEFAULT_LEVELS_RESOURCE = "levels.json"

logger = logging.getLogger(__name__)


def parse_grid(rows: Sequence[Union[str, Sequence[str]]]) -> Grid:
    """Decode rows of tile characters into cells and validate the result."""
    if isinstance(rows, str):
        raise LevelFormatError("grid must be a list of rows, not a single string")
    if not isinstance(rows, (list, tuple)):
        raise LevelFormatError(f"grid must be a list of rows, got {type(rows).__name__}")

    grid: Grid = []
    for r, row in enumerate(rows):
        if not isinstance(row, (str, list, tuple)):
            raise LevelFormatError(f"row {r} must be a string or a list of tiles, got {type(row).__name__}")
        cells = []
        for c, char in enumerate(row):
            try:
                cells.append(Cell(char))
            except (ValueError, TypeError):
                raise LevelFormatError(f"unknown tile {char!r} at row {r}, column {c}") from None
        grid.append(cells)

    validate_grid(grid)
    return grid


def validate_grid(grid: Grid) -> None:
    """
    Check the invariants the engine relies on.

    Raises:
        LevelFormatError: if the grid is empty, ragged, or does not hold
            exactly one player
    """
    if not grid or not grid[0]:
        raise LevelFormatError("grid is empty")

    width = len(grid[0])
    for r, row in enumerate(grid):
        if len(row) != width:
            raise LevelFormatError(f"row {r} has {len(row)} cells, expected {width}")

    players = sum(1 for row in grid for cell in row if cell in PLAYER_CELLS)
    if players != 1:
        raise LevelFormatError(f"grid must contain exactly one player, found {players}")


def format_grid(grid: Sequence[Sequence[Cell]]) -> List[str]:
    """Encode cells back into rows of tile characters."""
    return ["".join(cell.value for cell in row) for row in grid]


def parse_level(data: Dict[str, Any]) -> Level:
    try:
        level_id = data["id"]
        name = data["name"]
        rows = data["grid"]
    except (KeyError, TypeError) as e:
        raise LevelFormatError(f"level entry is missing field {e}") from None

    if not isinstance(level_id, int) or isinstance(level_id, bool):
        raise LevelFormatError(f"level id must be an integer, got {level_id!r}")

    try:
        grid = parse_grid(rows)
    except LevelFormatError as e:
        raise LevelFormatError(f"level {level_id} ({name}): {e}") from None

    return Level(id=level_id, name=str(name), template=tuple(tuple(row) for row in grid))


def parse_levels(document: Dict[str, Any]) -> List[Level]:
    """Decode a whole catalog document."""
    if not isinstance(document, dict) or not isinstance(document.get("levels"), list):
        raise LevelFormatError("catalog must be an object with a 'levels' list")
    return [parse_level(entry) for entry in document["levels"]]


def load_levels(path: Optional[Union[str, Path]] = None) -> List[Level]:
    """
    Load a level catalog from a JSON file.

    Args:
        path: Catalog file. Defaults to the catalog shipped with the package.

    Returns:
        Levels in catalog order
    """
    if path is None:
        text = resources.files(__package__).joinpath(DEFAULT_LEVELS_RESOURCE).read_text(encoding="utf-8")
        source = f"package resource {DEFAULT_LEVELS_RESOURCE}"
    else:
        text = Path(path).read_text(encoding="utf-8")
        source = str(path)

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise LevelFormatError(f"{source} is not valid JSON: {e}") from e

    levels = parse_levels(document)
    logger.info(f"Loaded {len(levels)} levels from {source}")
    return levels
