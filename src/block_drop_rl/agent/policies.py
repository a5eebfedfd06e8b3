from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .actions import Action, ActionSpace
from .config import AgentConfig, PolicyKind, check_unit_interval
from .observation import BoardObservation, Observation, ProfileObservation
from .value_table import ValueTable

logger = logging.getLogger(__name__)


class Policy(ABC):
    kind: PolicyKind

    def __init__(self, config: AgentConfig, rng: np.random.Generator) -> None:
        self.config = config
        self.rng = rng

    @abstractmethod
    def choose_action(self, observation: Observation) -> Action:
        """Return (offset_right, rotation_count) for the active piece."""


class RandomPolicy(Policy):
    """Uniform offset and rotation; wide pieces get one fewer offset."""

    kind = PolicyKind.RANDOM

    def choose_action(self, observation: Observation) -> Action:
        n_offsets = self.config.n_offsets
        if observation.piece.width == self.config.wide_piece_width:
            n_offsets -= 1
        return self._draw(n_offsets)

    def fallback_action(self) -> Action:
        return self._draw(self.config.n_offsets - 1)

    def _draw(self, n_offsets: int) -> Action:
        offset = int(self.rng.integers(0, max(1, n_offsets)))
        rotation = int(self.rng.integers(0, self.config.n_rotations))
        return offset, rotation


class FixedPolicy(Policy):
    """Drop into the deepest gap near the top of the stack.

    Only the rows in `config.scan_rows` are inspected. The single-cell piece looks
    for the deepest empty column, every other piece for the deepest gap two columns
    wide. Among gaps of equal depth the leftmost one wins. When nothing fits the
    decision is handed to the random fallback.
    """

    kind = PolicyKind.FIXED

    def __init__(self, config: AgentConfig, rng: np.random.Generator, fallback: Optional[RandomPolicy] = None) -> None:
        super().__init__(config, rng)
        self.fallback = fallback or RandomPolicy(config, rng)

    def choose_action(self, observation: Observation) -> Action:
        if not isinstance(observation, BoardObservation):
            raise TypeError("FixedPolicy needs a BoardObservation")

        board = np.asarray(observation.board)
        kind = int(observation.piece.kind)
        if kind == self.config.single_piece_type:
            column = self._deepest_gap(board, span=1)
            if column is None:
                logger.debug("no open column for single piece, acting randomly")
                return self.fallback.fallback_action()
            return column, 0

        column = self._deepest_gap(board, span=2)
        if column is None:
            logger.debug("no two-wide gap, acting randomly")
            return self.fallback.fallback_action()
        rotation = 1 if kind == self.config.skinny_piece_type else 0
        return column, rotation

    def _deepest_gap(self, board: np.ndarray, span: int) -> Optional[int]:
        rows = self.config.scan_rows
        best_col: Optional[int] = None
        best_depth = 0
        for col in range(board.shape[1] - span + 1):
            depth = 0
            for row in rows:
                if np.any(board[row, col:col + span] != 0):
                    break
                depth += 1
            # strictly deeper replaces, so the leftmost of equal gaps is kept
            if depth > best_depth:
                best_col, best_depth = col, depth
        return best_col


class LearnedPolicy(Policy):
    """Epsilon-greedy selection over the value table."""

    kind = PolicyKind.LEARNED

    def __init__(
        self,
        config: AgentConfig,
        rng: np.random.Generator,
        table: ValueTable,
        actions: ActionSpace,
    ) -> None:
        super().__init__(config, rng)
        self.table = table
        self.actions = actions
        self.epsilon = config.epsilon

    @property
    def epsilon(self) -> float:
        return self._epsilon

    @epsilon.setter
    def epsilon(self, value: float) -> None:
        self._epsilon = check_unit_interval("epsilon", value)

    def choose_index(self, observation: ProfileObservation) -> int:
        if self.rng.random() < self._epsilon:
            index = int(self.rng.integers(0, len(self.actions)))
        else:
            index = self.table.best_action(observation.key)
        return index

    def choose_action(self, observation: Observation) -> Action:
        if not isinstance(observation, ProfileObservation):
            raise TypeError("LearnedPolicy needs a ProfileObservation")
        return self.actions.decode(self.choose_index(observation))
