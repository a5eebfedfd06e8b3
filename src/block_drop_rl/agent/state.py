from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class StateKey:
    """What the learner sees: the active block type and the free-space profile.

    Compared and hashed by value, so keys built from separate but equal
    profiles land on the same table row.
    """

    piece_type: int
    profile: Tuple[int, ...]

    @classmethod
    def build(cls, piece_type: int, profile: Iterable[int]) -> "StateKey":
        return cls(int(piece_type), tuple(int(v) for v in profile))
