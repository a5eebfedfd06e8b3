"""Gymnasium environments for Block Drop RL."""

from __future__ import annotations

from gymnasium.envs.registration import register

ENV_ID = "BlockDrop-6x5-v0"

# Register default Block Drop environment (6 columns, 5 rows, 24 drop actions)
register(
    id=ENV_ID,
    entry_point="block_drop_rl.env.drop_env:BlockDropEnv",
)

__all__ = ["ENV_ID"]
