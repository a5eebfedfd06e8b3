from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np

from .actions import Action, ActionSpace, action_space
from .config import AgentConfig, PolicyKind, check_unit_interval, policy_kind
from .errors import InvalidConfigError, ObservationOrderError
from .learner import TDLearner
from .observation import BoardObservation, Environment, Observation, ProfileObservation
from .policies import FixedPolicy, LearnedPolicy, Policy, RandomPolicy
from .state import StateKey
from .value_table import ValueTable

logger = logging.getLogger(__name__)


class Agent:
    """Plays the game with a random, fixed or learned policy.

    A turn is `observe` -> `choose_action` -> (game drops the block) ->
    `report_reward` -> `learn`. With learning enabled the agent observes the
    active piece and column profile and keeps a value table; otherwise it observes
    the whole board and the upcoming piece.
    """

    def __init__(
        self,
        policy: PolicyKind = PolicyKind.RANDOM,
        *,
        config: Optional[AgentConfig] = None,
        rng: Optional[np.random.Generator] = None,
        learning: bool = False,
    ) -> None:
        self.config = config or AgentConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.actions: ActionSpace = action_space(self.config.n_offsets, self.config.n_rotations)
        self.table = ValueTable(len(self.actions))
        self.learner = TDLearner(self.table, discount=self.config.discount)

        random_policy = RandomPolicy(self.config, self.rng)
        self._policies: Dict[PolicyKind, Policy] = {
            PolicyKind.RANDOM: random_policy,
            PolicyKind.FIXED: FixedPolicy(self.config, self.rng, fallback=random_policy),
            PolicyKind.LEARNED: LearnedPolicy(self.config, self.rng, self.table, self.actions),
        }

        self._learning = bool(learning)
        self._policy: Policy = random_policy
        self.observation: Optional[Observation] = None
        self.current_action: Optional[int] = None
        self.reward = 0.0
        self.set_policy(policy)

    # Configuration

    @property
    def policy(self) -> Policy:
        return self._policy

    @property
    def learning(self) -> bool:
        return self._learning

    @property
    def epsilon(self) -> float:
        return self._learned_policy.epsilon

    @property
    def _learned_policy(self) -> LearnedPolicy:
        policy = self._policies[PolicyKind.LEARNED]
        assert isinstance(policy, LearnedPolicy)
        return policy

    def set_policy(self, kind: PolicyKind) -> None:
        kind = policy_kind(kind)
        if kind == PolicyKind.LEARNED and not self._learning:
            raise InvalidConfigError("the learned policy needs learning enabled first")
        if kind == PolicyKind.FIXED and self._learning:
            raise InvalidConfigError("the fixed policy reads the full board; disable learning first")
        self._policy = self._policies[kind]
        self.observation = None
        logger.debug("policy set to %s (learning=%s)", kind.name.lower(), self._learning)

    def set_epsilon(self, epsilon: float) -> None:
        self._learned_policy.epsilon = epsilon

    def enable_learning(self) -> None:
        if self._policy.kind == PolicyKind.FIXED:
            raise InvalidConfigError("the fixed policy reads the full board and cannot learn")
        self._learning = True
        self.observation = None
        logger.debug("learning enabled")

    def disable_learning(self) -> None:
        if self._policy.kind == PolicyKind.LEARNED:
            raise InvalidConfigError("the learned policy needs learning enabled")
        self._learning = False
        self.observation = None
        logger.debug("learning disabled")

    # Turn cycle

    def observe(self, env: Environment) -> Observation:
        piece = env.active_piece()
        self.current_action = None
        if self._learning:
            profile = env.free_space_profile(self.config.profile_start_row)
            key = StateKey.build(int(piece.kind), profile)
            self.table.ensure(key)
            self.observation = ProfileObservation(piece=piece, key=key)
        else:
            self.observation = BoardObservation(
                piece=piece,
                next_piece=env.upcoming_piece(),
                board=np.array(env.board_snapshot(), copy=True),
            )
        return self.observation

    def choose_action(self) -> Action:
        if self.observation is None:
            raise ObservationOrderError("observe() must be called before choose_action()")
        if isinstance(self._policy, LearnedPolicy):
            assert isinstance(self.observation, ProfileObservation)
            index = self._policy.choose_index(self.observation)
            self.current_action = index
            return self.actions.decode(index)

        action = self._policy.choose_action(self.observation)
        if self._learning:
            self.current_action = self.actions.encode(*action)
        return action

    def report_reward(self, value: float) -> None:
        self.reward = float(value)

    def learn(self, alpha: float) -> Optional[float]:
        """Back up the previous step towards the current one. See `TDLearner.update`."""
        check_unit_interval("alpha", alpha)
        if not self._learning:
            raise InvalidConfigError("learning is disabled")
        if not isinstance(self.observation, ProfileObservation) or self.current_action is None:
            raise ObservationOrderError("learn() needs an observed state and a chosen action")
        return self.learner.update(self.observation.key, self.current_action, self.reward, alpha)

    def reset(self) -> None:
        """Forget the in-flight turn and the remembered transition; keep learned values."""
        self.observation = None
        self.current_action = None
        self.reward = 0.0
        self.learner.reset()
