"""Tabular TD agent for the block drop game.

Exports:
- Agent: observe/act/learn façade over the pieces below
- ActionSpace: (offset, rotation) <-> action index
- StateKey: value-semantics state abstraction
- ValueTable: per-state action values
- RandomPolicy, FixedPolicy, LearnedPolicy: action selection
- TDLearner: one-step TD backup
"""

from .actions import ActionSpace, action_space
from .agent import Agent
from .config import AgentConfig, PolicyKind, policy_kind
from .errors import AgentError, InvalidConfigError, ObservationOrderError, UnknownStateError
from .learner import TDLearner, Transition
from .observation import BoardObservation, Environment, ProfileObservation
from .policies import FixedPolicy, LearnedPolicy, Policy, RandomPolicy
from .schedules import linear_decay, remaining_fraction
from .state import StateKey
from .value_table import ValueTable

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentError",
    "ActionSpace",
    "BoardObservation",
    "Environment",
    "FixedPolicy",
    "InvalidConfigError",
    "LearnedPolicy",
    "ObservationOrderError",
    "Policy",
    "PolicyKind",
    "ProfileObservation",
    "RandomPolicy",
    "StateKey",
    "TDLearner",
    "Transition",
    "UnknownStateError",
    "ValueTable",
    "action_space",
    "linear_decay",
    "policy_kind",
    "remaining_fraction",
]
