

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, BlockfallGame, GameConfig, ScoringRules, TetrominoType


_PALETTE = {
    0: (30, 30, 36),
    1: (0, 240, 240),  # I
    2: (0, 0, 240),    # J
    3: (240, 160, 0),  # L
    4: (240, 240, 0),  # O
    5: (0, 240, 0),    # S
    6: (160, 0, 240),  # T
    7: (240, 0, 0),    # Z
}


class BlockfallEnv(gym.Env):
    """Headless falling-block environment.

    Each step applies one `Action` and then advances the game clock by one
    frame, so gravity keeps running while the driver thinks. The reward is the
    change in engine score over the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None, frame_ms: float = 1000.0 / 60.0,
                 max_episode_steps: int = 100_000) -> None:
        super().__init__()
        self.game = BlockfallGame(config, rules)
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)

        width = self.game.config.width
        height = self.game.config.height
        lookahead = self.game.config.lookahead
        kinds = len(TetrominoType)

        # piece = (kind, rotation, x, y); anchors may sit a couple of cells off the grid
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=-kinds, high=kinds, shape=(height, width), dtype=np.int8),
                "piece": spaces.Box(
                    low=np.array([1, 0, -2, -2], dtype=np.int16),
                    high=np.array([kinds, 3, width + 1, height + 1], dtype=np.int16),
                    dtype=np.int16,
                ),
                "hold": spaces.Discrete(kinds + 1),
                "queue": spaces.Box(low=1, high=kinds, shape=(lookahead,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0
        self._last_obs: Optional[Dict[str, Any]] = None

    def _get_obs(self) -> Dict[str, Any]:
        piece = self.game.current_piece
        if piece is not None:
            piece_obs = np.array([int(piece.kind), piece.rotation, piece.x, piece.y], dtype=np.int16)
        else:
            piece_obs = np.array([1, 0, 0, 0], dtype=np.int16)
        hold = self.game.hold_slot.kind
        return {
            "grid": self.game.get_board().astype(np.int8),
            "piece": piece_obs,
            "hold": int(hold) if hold is not None else 0,
            "queue": np.array([int(k) for k in self.game.queue.peek()], dtype=np.int8),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines": self.game.lines_cleared_total,
            "level": self.game.level,
            "best": self.game.best,
            "assist": self.game.assist,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        obs = self._get_obs()
        self._last_obs = obs
        return obs, self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"invalid action {action!r}; expected 0..{self.action_space.n - 1}")

        score_before = self.game.score
        self.game.step(Action(int(action)))
        self.game.advance(self.frame_ms)
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps

        obs = self._get_obs()
        self._last_obs = obs
        return obs, reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._last_obs["grid"] if self._last_obs is not None else self.game.get_board()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = _PALETTE.get(abs(int(grid[y, x])), (200, 200, 200))
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
