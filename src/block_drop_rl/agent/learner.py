from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import check_unit_interval
from .state import StateKey
from .value_table import ValueTable


@dataclass(frozen=True)
class Transition:
    state: StateKey
    action: int
    reward: float


class TDLearner:
    """One-step TD backup over a value table.

    The learner remembers a single transition. Each call backs the remembered
    (state, action) up towards

        reward + discount * Q(current state, current action)

    and then remembers the current step in its place. The first call after
    construction or `reset` only remembers.
    """

    def __init__(self, table: ValueTable, discount: float = 0.9) -> None:
        self.table = table
        self.discount = check_unit_interval("discount", discount)
        self.previous: Optional[Transition] = None
        self.last_td_error: Optional[float] = None

    @property
    def is_warm(self) -> bool:
        return self.previous is not None

    def reset(self) -> None:
        self.previous = None
        self.last_td_error = None

    def update(self, state: StateKey, action: int, reward: float, alpha: float) -> Optional[float]:
        """Apply one backup and return the new value, or None on a cold start."""
        alpha = check_unit_interval("alpha", alpha)
        new_value: Optional[float] = None

        prev = self.previous
        if prev is not None:
            prev_value = self.table.get(prev.state, prev.action)
            curr_value = self.table.get(state, action)
            td_error = prev.reward + self.discount * curr_value - prev_value
            new_value = prev_value + alpha * td_error
            self.table.set(prev.state, prev.action, new_value)
            self.last_td_error = td_error

        self.previous = Transition(state=state, action=int(action), reward=float(reward))
        return new_value
