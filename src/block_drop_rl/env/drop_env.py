from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_drop_rl.agent.actions import action_space
from block_drop_rl.game import BlockDropGame, BlockType, GameConfig, ScoringRules


class BlockDropEnv(gym.Env):
    """Gymnasium wrapper around `BlockDropGame`.

    One step is one complete drop. Actions are indices into the shared
    (offset_right, rotation) action space; the underlying game stays reachable as
    `env.unwrapped.game` for agents that read it directly.
    """

    metadata = {"render_modes": [], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        profile_start_row: int = 2,
        n_rotations: int = 4,
    ) -> None:
        super().__init__()
        self.game = BlockDropGame(config, rules)
        self.profile_start_row = int(profile_start_row)
        self.actions = action_space(self.game.grid.width, n_rotations)

        h, w = self.game.grid.height, self.game.grid.width
        n_types = len(BlockType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=1, shape=(h, w), dtype=np.int8),
                "piece": spaces.Discrete(n_types),
                "next_piece": spaces.Discrete(n_types),
                "profile": spaces.Box(low=0, high=h, shape=(w,), dtype=np.int8),
            }
        )
        self.action_space = spaces.Discrete(len(self.actions))

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.board_snapshot(),
            "piece": int(self.game.current_piece.kind),
            "next_piece": int(self.game.next_piece.kind),
            "profile": np.asarray(self.game.free_space_profile(self.profile_start_row), dtype=np.int8),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_placed": self.game.pieces_placed,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        offset, rotation = self.actions.decode(int(action))
        reward = float(self.game.place(offset, rotation))

        terminated = bool(self.game.game_over)

        info = self._get_info()
        info["action"] = (offset, rotation)
        return self._get_obs(), reward, terminated, False, info

    def close(self) -> None:
        pass
