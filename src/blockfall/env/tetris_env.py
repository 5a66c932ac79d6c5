from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import GameConfig, Intent, Phase, ScoringRules, Snapshot, TetrisEngine
from blockfall.visualization.colors import color_for_value


# Action index -> intent; 0 lets gravity act alone.
ACTIONS: Tuple[Optional[Intent], ...] = (
    None,
    Intent.MOVE_LEFT,
    Intent.MOVE_RIGHT,
    Intent.ROTATE,
    Intent.SOFT_DROP,
    Intent.HARD_DROP,
)


class TetrisEnv(gym.Env):
    """Falling-block game as a Gymnasium environment.

    Each step applies one action and advances `ticks_per_step` gravity
    ticks. The reward is the engine's score delta. Line clears resolve
    inside the step (no flash animation).
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 20}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        ticks_per_step: int = 1,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        base = config or GameConfig()
        # Animation only matters to a human viewer
        self._config = GameConfig(
            width=base.width,
            height=base.height,
            random_seed=base.random_seed,
            flash_cycles=0,
            flash_ticks=base.flash_ticks,
            high_score=base.high_score,
            top_row_game_over=base.top_row_game_over,
        )
        self._rules = rules
        self.game = TetrisEngine(self._config, rules)
        self.render_mode = render_mode
        self.ticks_per_step = int(ticks_per_step)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self._config.height, self._config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=7, shape=(h, w), dtype=np.int8),
                "next_kind": spaces.Discrete(8),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

        self._snapshot: Snapshot = self.game.snapshot()
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self._snapshot.composite().astype(np.int8),
            "next_kind": int(self._snapshot.next_kind),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self._snapshot.score,
            "level": self._snapshot.level,
            "lines": self._snapshot.total_lines_cleared,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self._config.random_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game = TetrisEngine(self._config, self._rules)
        self._snapshot = self.game.snapshot()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        intent = ACTIONS[int(action)]
        before = self._snapshot.score
        self._snapshot = self.game.step(intent, self.ticks_per_step)
        self._steps += 1

        reward = float(self._snapshot.score - before)
        terminated = self._snapshot.phase == Phase.GAME_OVER
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self._snapshot.composite()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(state[y, x]))
        return img

    def close(self) -> None:
        pass
