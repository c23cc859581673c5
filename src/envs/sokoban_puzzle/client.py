# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Sokoban Environment HTTP Client.

This module provides the client for connecting to a Sokoban Environment server
over HTTP.
"""

from typing import Any, Dict, List

import requests

from .models import MoveAction, SokobanAction, SokobanObservation, State, StepResult


class SokobanClient:
    """
    HTTP client for the Sokoban Environment.

    This client connects to a Sokoban Environment HTTP server and provides
    methods to interact with it: reset(), step(), level selection and state
    access.

    Example:
        >>> # Connect to a running server
        >>> client = SokobanClient(base_url="http://localhost:8000")
        >>> obs = client.reset()
        >>> print(f"Level: {obs.level_name}, board shape: {obs.board_shape}")
        >>>
        >>> # Make a move, then tap a cell
        >>> result = client.step(MoveAction(direction="up"))
        >>> result = client.step(MoveToCellAction(row=2, col=3))
        >>> print(f"Moves: {result.observation.moves_count}")
        >>> print(f"Completed: {result.observation.completed}")
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()

    def reset(self) -> SokobanObservation:
        return self._parse_observation(self._request("POST", "/reset"))

    def step(self, action: SokobanAction) -> StepResult:
        return self._parse_result(self._request("POST", "/step", json=self._step_payload(action)))

    def observation(self) -> SokobanObservation:
        return self._parse_observation(self._request("GET", "/observation"))

    def state(self) -> State:
        return self._parse_state(self._request("GET", "/state"))

    def load_level(self, index: int) -> SokobanObservation:
        return self._parse_observation(self._request("POST", f"/levels/{index}"))

    def next_level(self) -> bool:
        """Advance to the next level. Returns False on the last level."""
        payload = self._request("POST", "/levels/next")
        return bool(payload.get("advanced", False))

    def levels(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/levels")

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._session.request(method, self.base_url + path, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()

    def _step_payload(self, action: SokobanAction) -> Dict:
        """
        Convert an action to JSON payload for step request.

        Args:
            action: MoveAction or MoveToCellAction instance

        Returns:
            Dictionary representation suitable for JSON encoding
        """
        if isinstance(action, MoveAction):
            # Accept plain strings as well as Direction members
            return {"direction": getattr(action.direction, "value", action.direction)}
        return {"row": action.row, "col": action.col}

    def _parse_observation(self, obs_data: Dict) -> SokobanObservation:
        return SokobanObservation(
            board=obs_data.get("board", []),
            board_shape=obs_data.get("board_shape", []),
            rows=obs_data.get("rows", []),
            num_boxes=obs_data.get("num_boxes", 0),
            boxes_on_goals=obs_data.get("boxes_on_goals", 0),
            player_position=obs_data.get("player_position", [0, 0]),
            moves_count=obs_data.get("moves_count", 0),
            pushes_count=obs_data.get("pushes_count", 0),
            completed=obs_data.get("completed", False),
            level_index=obs_data.get("level_index", 0),
            level_id=obs_data.get("level_id", 0),
            level_name=obs_data.get("level_name", ""),
            has_next_level=obs_data.get("has_next_level", False),
            done=obs_data.get("done", False),
            metadata=obs_data.get("metadata", {}),
        )

    def _parse_result(self, payload: Dict) -> StepResult:
        """
        Parse server response into StepResult.

        Args:
            payload: JSON response from server

        Returns:
            StepResult with SokobanObservation
        """
        return StepResult(
            observation=self._parse_observation(payload.get("observation", {})),
            moved=payload.get("moved", False),
            done=payload.get("done", False),
        )

    def _parse_state(self, payload: Dict) -> State:
        """
        Parse server response into State object.

        Args:
            payload: JSON response from /state endpoint

        Returns:
            State object with episode_id and step_count
        """
        return State(
            episode_id=payload.get("episode_id"),
            step_count=payload.get("step_count", 0),
        )
