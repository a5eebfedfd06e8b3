from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional

import gymnasium as gym
import numpy as np

from block_drop_rl.agent import Agent, AgentConfig, PolicyKind, remaining_fraction
from block_drop_rl.env import ENV_ID
from block_drop_rl.rl.eval_agent import evaluate
from block_drop_rl.utils.logging import setup_logger

logger = logging.getLogger(__name__)


@dataclass
class EpisodeStats:
    score: float
    lines: int
    pieces: int


@dataclass
class TrainingResult:
    agent: Agent
    episodes: List[EpisodeStats] = field(default_factory=list)

    @property
    def mean_score(self) -> float:
        if not self.episodes:
            return 0.0
        return float(np.mean([ep.score for ep in self.episodes]))


def _print_progress(step: int, total: int, episodes: int, states: int, alpha: float) -> None:
    width = 30
    filled = int(width * (step + 1) / max(1, total))
    bar = "=" * filled + "." * (width - filled)
    msg = f"\r[{bar}] {step + 1}/{total}  episodes={episodes}  states={states}  alpha={alpha:.3f}"
    print(msg, end="", file=sys.stdout, flush=True)


def train_tabular_q(total_steps: int = 50_000, epsilon: float = 0.05, seed: int = 0,
                    max_episode_steps: int = 1000, progress: bool = True,
                    agent: Optional[Agent] = None) -> TrainingResult:
    """Train a learning agent for `total_steps` drops.

    The learning rate for step t is (total_steps - t) / total_steps.
    """
    env = gym.make(ENV_ID, max_episode_steps=max_episode_steps)
    game = env.unwrapped.game
    if agent is None:
        agent = Agent(
            PolicyKind.LEARNED,
            config=AgentConfig(epsilon=epsilon),
            rng=np.random.default_rng(seed),
            learning=True,
        )
    alpha_fn = remaining_fraction(total_steps)
    result = TrainingResult(agent=agent)

    env.reset(seed=seed)
    ep_return = 0.0
    try:
        for step in range(total_steps):
            agent.observe(game)
            action = agent.actions.encode(*agent.choose_action())
            _, reward, terminated, truncated, info = env.step(action)
            ep_return += float(reward)

            alpha = alpha_fn(step)
            agent.report_reward(reward)
            agent.learn(alpha)

            if terminated or truncated:
                stats = EpisodeStats(
                    score=ep_return,
                    lines=int(info["lines_cleared_total"]),
                    pieces=int(info["pieces_placed"]),
                )
                result.episodes.append(stats)
                logger.debug("episode %d: score=%.1f lines=%d pieces=%d",
                             len(result.episodes), stats.score, stats.lines, stats.pieces)
                env.reset(seed=seed + len(result.episodes))
                ep_return = 0.0

            if progress and (step % 500 == 0 or step + 1 == total_steps):
                _print_progress(step, total_steps, len(result.episodes), len(agent.table), alpha)
    finally:
        env.close()

    if progress:
        print()
    logger.info("trained %d steps over %d episodes, %d states, mean score %.2f",
                total_steps, len(result.episodes), len(agent.table), result.mean_score)
    return result


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Train the tabular TD agent on the block drop game")
    p.add_argument("--steps", type=int, default=50_000)
    p.add_argument("--epsilon", type=float, default=0.05)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--max-episode-steps", type=int, default=1000)
    p.add_argument("--eval-episodes", type=int, default=100,
                   help="Greedy evaluation games played after training (0 to skip)")
    p.add_argument("--log-level", type=str, default="info")
    p.add_argument("--no-progress", action="store_true")
    return p


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(level=args.log_level)

    result = train_tabular_q(args.steps, args.epsilon, args.seed, args.max_episode_steps,
                             progress=not args.no_progress)
    if args.eval_episodes > 0:
        agent = result.agent
        agent.set_epsilon(0.0)
        summary = evaluate(agent, episodes=args.eval_episodes, seed=args.seed + 10_000,
                           max_episode_steps=args.max_episode_steps)
        logger.info("greedy evaluation: %s", summary)


if __name__ == "__main__":  # pragma: no cover
    main()
