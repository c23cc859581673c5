# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exceptions raised by the Sokoban puzzle engine."""


class SokobanError(Exception):
    """Base class for all Sokoban engine errors."""


class PlayerNotFoundError(SokobanError):
    """Raised when a grid that must contain a player has none."""


class LevelFormatError(SokobanError, ValueError):
    """Raised when level data cannot be decoded into a well-formed grid."""


class LevelIndexError(SokobanError, IndexError):
    """Raised when a level index falls outside the catalog."""
