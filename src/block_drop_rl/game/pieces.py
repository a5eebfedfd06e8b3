from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class BlockType(IntEnum):
    SQUARE = 0
    CORNER_L = 1
    CORNER_J = 2
    CORNER_R = 3
    BAR = 4  # skinny vertical domino
    DOT = 5  # single cell


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


BASE_SHAPES = {
    BlockType.SQUARE: np.array([[1, 1], [1, 1]], dtype=np.int8),
    BlockType.CORNER_L: np.array([[1, 0], [1, 1]], dtype=np.int8),
    BlockType.CORNER_J: np.array([[0, 1], [1, 1]], dtype=np.int8),
    BlockType.CORNER_R: np.array([[1, 1], [1, 0]], dtype=np.int8),
    BlockType.BAR: np.array([[1], [1]], dtype=np.int8),
    BlockType.DOT: np.array([[1]], dtype=np.int8),
}


@dataclass(frozen=True)
class Piece:
    """A falling block: its type and how many quarter turns it has been rotated."""

    kind: BlockType
    rotation: int = 0  # 0..3

    @property
    def width(self) -> int:
        # Width of the unrotated type, which is what spawn-time offsets are reasoned against.
        return int(BASE_SHAPES[self.kind].shape[1])

    def shape(self) -> Shape:
        base = BASE_SHAPES[self.kind]
        return _rot90(base, self.rotation)

    def rotated(self, delta: int) -> "Piece":
        return Piece(self.kind, (self.rotation + delta) % 4)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells
