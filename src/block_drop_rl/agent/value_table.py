from __future__ import annotations

import logging
from typing import Dict, Iterator

import numpy as np

from .errors import UnknownStateError
from .state import StateKey

logger = logging.getLogger(__name__)


class ValueTable:
    """Action values per visited state.

    Each row is a fixed-size float array indexed by action. Rows are created whole
    by `ensure`; looking up a state that was never ensured is an error rather than
    an implicit zero row.
    """

    def __init__(self, n_actions: int, initial_value: float = 0.0) -> None:
        self.n_actions = int(n_actions)
        self.initial_value = float(initial_value)
        self._rows: Dict[StateKey, np.ndarray] = {}

    def ensure(self, key: StateKey) -> bool:
        """Insert a fresh row for `key` if it has none. Returns True on insertion."""
        if key in self._rows:
            return False
        self._rows[key] = np.full((self.n_actions,), self.initial_value, dtype=np.float64)
        logger.debug("new state %s (%d known)", key, len(self._rows))
        return True

    def _row(self, key: StateKey) -> np.ndarray:
        try:
            return self._rows[key]
        except KeyError:
            raise UnknownStateError(key) from None

    def _check_action(self, action: int) -> int:
        action = int(action)
        if not 0 <= action < self.n_actions:
            raise IndexError(f"action index {action} outside [0, {self.n_actions})")
        return action

    def get(self, key: StateKey, action: int) -> float:
        return float(self._row(key)[self._check_action(action)])

    def set(self, key: StateKey, action: int, value: float) -> None:
        self._row(key)[self._check_action(action)] = float(value)

    def values(self, key: StateKey) -> np.ndarray:
        """Read-only view of the row for `key`."""
        view = self._row(key).view()
        view.flags.writeable = False
        return view

    def best_action(self, key: StateKey) -> int:
        # np.argmax keeps the first index among equal maxima
        return int(np.argmax(self._row(key)))

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[StateKey]:
        return iter(self._rows)
