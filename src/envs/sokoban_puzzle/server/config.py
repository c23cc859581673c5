# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Server configuration read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class ServerConfig:
    """
    Settings for the Sokoban HTTP server.

    Attributes:
        levels_path: Level catalog JSON file; None uses the packaged catalog
        start_level: Index of the level loaded at startup
        host: Interface to bind
        port: Port to bind
        log_level: Root logging level name
        log_file: Also write logs to this file when set
    """

    levels_path: Optional[str] = None
    start_level: int = 0
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        env = os.environ if environ is None else environ
        return cls(
            levels_path=env.get("SOKOBAN_LEVELS_PATH") or None,
            start_level=_int(env, "SOKOBAN_START_LEVEL", cls.start_level),
            host=env.get("SOKOBAN_HOST", cls.host),
            port=_int(env, "SOKOBAN_PORT", cls.port),
            log_level=env.get("SOKOBAN_LOG_LEVEL", cls.log_level).upper(),
            log_file=env.get("SOKOBAN_LOG_FILE") or None,
        )


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
