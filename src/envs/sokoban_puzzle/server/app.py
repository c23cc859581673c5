# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
FastAPI application for the Sokoban Environment.

This module creates an HTTP server that exposes a SokobanEnvironment
over HTTP endpoints, making it usable from SokobanClient.

Usage:
    # Development (with auto-reload):
    uvicorn envs.sokoban_puzzle.server.app:app --reload --host 0.0.0.0 --port 8000

    # Production (one session per process, so keep a single worker):
    uvicorn envs.sokoban_puzzle.server.app:app --host 0.0.0.0 --port 8000

    # Or run directly:
    python -m envs.sokoban_puzzle.server.app
"""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..errors import LevelIndexError, PlayerNotFoundError
from ..levels import load_levels
from ..models import Direction, MoveAction, MoveToCellAction, SokobanAction
from .config import ServerConfig
from .sokoban_environment import SokobanEnvironment

logger = logging.getLogger(__name__)


class StepRequest(BaseModel):
    """Either a direction, or the row and column of a tapped cell."""

    direction: Optional[Direction] = None
    row: Optional[int] = None
    col: Optional[int] = None

    def to_action(self) -> SokobanAction:
        if self.direction is not None:
            return MoveAction(direction=self.direction)
        if self.row is not None and self.col is not None:
            return MoveToCellAction(row=self.row, col=self.col)
        raise HTTPException(status_code=422, detail="step needs 'direction' or both 'row' and 'col'")


def configure_logging(config: ServerConfig) -> None:
    handlers: list = [logging.StreamHandler()]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def create_app(env: SokobanEnvironment) -> FastAPI:
    """Build the HTTP application around a single environment."""
    app = FastAPI(title="Sokoban Puzzle Environment")

    def corrupted_board(e: PlayerNotFoundError) -> HTTPException:
        logger.error(f"Corrupted board in level {env.level_index}: {e}")
        return HTTPException(status_code=500, detail=str(e))

    def observation() -> Dict[str, Any]:
        try:
            return asdict(env.observe())
        except PlayerNotFoundError as e:
            raise corrupted_board(e) from e

    @app.on_event("startup")
    async def startup_event():
        logger.info("Sokoban server starting up.")

    @app.on_event("shutdown")
    def shutdown_event():
        logger.info("Sokoban server shutting down.")

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/state")
    def state() -> Dict[str, Any]:
        return asdict(env.state)

    @app.get("/observation")
    def observe() -> Dict[str, Any]:
        return observation()

    @app.post("/reset")
    def reset() -> Dict[str, Any]:
        env.reset()
        return observation()

    @app.post("/step")
    def step(request: StepRequest) -> Dict[str, Any]:
        action = request.to_action()
        try:
            obs = env.step(action)
        except PlayerNotFoundError as e:
            raise corrupted_board(e) from e
        return {
            "observation": asdict(obs),
            "moved": obs.metadata.get("moved", False),
            "done": obs.done,
        }

    @app.get("/levels")
    def levels() -> list:
        return [
            {"index": index, "id": level.id, "name": level.name}
            for index, level in enumerate(env.levels)
        ]

    @app.post("/levels/next")
    def next_level() -> Dict[str, Any]:
        advanced = env.advance_level()
        return {"observation": observation(), "advanced": advanced}

    @app.post("/levels/{index}")
    def load_level(index: int) -> Dict[str, Any]:
        try:
            env.load_level(index)
        except LevelIndexError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        return observation()

    return app


config = ServerConfig.from_env()
configure_logging(config)

# Create the environment instance
env = SokobanEnvironment(load_levels(config.levels_path), start_level=config.start_level)

app = create_app(env)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port)
