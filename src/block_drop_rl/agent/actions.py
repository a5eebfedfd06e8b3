from __future__ import annotations

from functools import lru_cache
from typing import Dict, Iterator, Tuple

Action = Tuple[int, int]  # (offset_right, rotation_count)


class ActionSpace:
    """Fixed enumeration of (offset_right, rotation_count) pairs.

    Indices are assigned row-major: index = offset * n_rotations + rotation.
    """

    def __init__(self, n_offsets: int = 6, n_rotations: int = 4) -> None:
        self.n_offsets = int(n_offsets)
        self.n_rotations = int(n_rotations)
        self._pairs: Tuple[Action, ...] = tuple(
            (offset, rotation) for offset in range(self.n_offsets) for rotation in range(self.n_rotations)
        )
        self._index: Dict[Action, int] = {pair: i for i, pair in enumerate(self._pairs)}

    @property
    def n(self) -> int:
        return len(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._pairs)

    def decode(self, index: int) -> Action:
        index = int(index)
        if not 0 <= index < len(self._pairs):
            raise IndexError(f"action index {index} outside [0, {len(self._pairs)})")
        return self._pairs[index]

    def encode(self, offset_right: int, rotation_count: int) -> int:
        try:
            return self._index[(int(offset_right), int(rotation_count))]
        except KeyError:
            raise ValueError(
                f"no action for offset={offset_right}, rotation={rotation_count}"
            ) from None


@lru_cache(maxsize=None)
def action_space(n_offsets: int = 6, n_rotations: int = 4) -> ActionSpace:
    """Shared instance per shape, built once per process."""
    return ActionSpace(n_offsets, n_rotations)
