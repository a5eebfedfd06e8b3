from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import BlockType, Piece
from .rules import ScoringRules

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    width: int = 6
    height: int = 5
    spawn_rows: int = 2  # blocks resting in these top rows end the game
    random_seed: Optional[int] = None


class BlockDropGame:
    """Falling-block game where each turn is one complete drop.

    A turn shifts the active block right from the left wall, rotates it and drops
    it straight down. Full rows are cleared, the reward is the score gained, and the
    game ends once a block comes to rest inside the spawn rows.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0.0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False
        self.current_piece: Piece = self._random_piece()
        self.next_piece: Piece = self._random_piece()
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0.0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False
        self.current_piece = self._random_piece()
        self.next_piece = self._random_piece()

    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(BlockType))
        return Piece(kind=kind, rotation=0)

    def _advance_piece(self) -> None:
        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()

    def _landing_row(self, piece: Piece, x: int) -> Optional[int]:
        if not self.grid.can_place(piece.cells_at(x, 0)):
            return None
        y = 0
        while self.grid.can_place(piece.cells_at(x, y + 1)):
            y += 1
        return y

    def place(self, offset_right: int, rotation: int) -> float:
        """Drop the active block and return the reward for doing so.

        The offset is clamped so the rotated block stays on the board.
        """
        if self.game_over:
            return 0.0

        piece = self.current_piece.rotated(int(rotation))
        _, w = piece.shape().shape
        x = min(max(int(offset_right), 0), self.grid.width - w)

        before = self.score
        y = self._landing_row(piece, x)
        if y is None:
            self.game_over = True
        else:
            lines = self.grid.place(piece.cells_at(x, y), int(piece.kind) + 1)
            self.pieces_placed += 1
            self.lines_cleared_total += lines
            self.score += self.rules.score_for_lines(lines) + self.rules.placement_score
            if self.grid.any_filled_above(self.config.spawn_rows):
                self.game_over = True

        if self.game_over:
            self.score -= self.rules.game_over_penalty
            logger.debug("game over after %d pieces, score=%.1f", self.pieces_placed, self.score)
        else:
            self._advance_piece()
        return self.score - before

    # Observation surface used by agents

    def active_piece(self) -> Piece:
        return self.current_piece

    def upcoming_piece(self) -> Piece:
        return self.next_piece

    def board_snapshot(self) -> np.ndarray:
        return (self.grid.clone_state() != 0).astype(np.int8)

    def free_space_profile(self, start_row: int) -> Tuple[int, ...]:
        return self.grid.free_space_profile(start_row)
