from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Optional

import gymnasium as gym
import numpy as np

from block_drop_rl.agent import Agent, policy_kind
from block_drop_rl.env import ENV_ID
from block_drop_rl.utils.logging import setup_logger

logger = logging.getLogger(__name__)


@dataclass
class EvalSummary:
    episodes: int
    mean_score: float
    mean_lines: float
    mean_pieces: float

    def __str__(self) -> str:
        return (f"{self.episodes} games  score={self.mean_score:.2f}  "
                f"lines={self.mean_lines:.2f}  pieces={self.mean_pieces:.1f}")


def evaluate(agent: Agent, episodes: int = 100, seed: int = 0,
             max_episode_steps: int = 1000) -> EvalSummary:
    """Play `episodes` games with the agent's current policy, without learning."""
    env = gym.make(ENV_ID, max_episode_steps=max_episode_steps)
    game = env.unwrapped.game
    scores, lines, pieces = [], [], []
    try:
        for ep in range(episodes):
            env.reset(seed=seed + ep)
            done = False
            total = 0.0
            info: dict = {}
            while not done:
                agent.observe(game)
                action = agent.actions.encode(*agent.choose_action())
                _, reward, terminated, truncated, info = env.step(action)
                total += float(reward)
                done = terminated or truncated
            scores.append(total)
            lines.append(info.get("lines_cleared_total", 0))
            pieces.append(info.get("pieces_placed", 0))
    finally:
        env.close()

    return EvalSummary(
        episodes=episodes,
        mean_score=float(np.mean(scores)) if scores else 0.0,
        mean_lines=float(np.mean(lines)) if lines else 0.0,
        mean_pieces=float(np.mean(pieces)) if pieces else 0.0,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play baseline policies on the block drop game")
    p.add_argument("--policy", choices=["random", "fixed"], default="fixed")
    p.add_argument("--episodes", type=int, default=100)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--max-episode-steps", type=int, default=1000)
    p.add_argument("--log-level", type=str, default="info")
    return p


def run_baseline(policy: str, episodes: int, seed: int = 0, max_episode_steps: int = 1000,
                 rng: Optional[np.random.Generator] = None) -> EvalSummary:
    kind = policy_kind(policy)
    agent = Agent(kind, rng=rng if rng is not None else np.random.default_rng(seed))
    return evaluate(agent, episodes=episodes, seed=seed, max_episode_steps=max_episode_steps)


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(level=args.log_level)
    summary = run_baseline(args.policy, args.episodes, args.seed, args.max_episode_steps)
    logger.info("%s policy: %s", args.policy, summary)


if __name__ == "__main__":  # pragma: no cover
    main()
