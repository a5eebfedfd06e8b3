from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple, Union

import numpy as np

from block_drop_rl.game.pieces import Piece

from .state import StateKey


class Environment(Protocol):
    """What an agent reads from the game each turn."""

    def active_piece(self) -> Piece:
        ...

    def upcoming_piece(self) -> Piece:
        ...

    def board_snapshot(self) -> np.ndarray:
        ...

    def free_space_profile(self, start_row: int) -> Tuple[int, ...]:
        ...


@dataclass(frozen=True)
class ProfileObservation:
    """Learning-mode view: active piece plus column profile."""

    piece: Piece
    key: StateKey

    @property
    def profile(self) -> Tuple[int, ...]:
        return self.key.profile


@dataclass(frozen=True)
class BoardObservation:
    """Non-learning view: full occupancy grid plus current and next piece."""

    piece: Piece
    next_piece: Piece
    board: np.ndarray


Observation = Union[ProfileObservation, BoardObservation]
