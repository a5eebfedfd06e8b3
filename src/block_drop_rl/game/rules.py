from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[float, float, float, float] = (1.0, 3.0, 5.0, 8.0)
    placement_score: float = 0.0
    game_over_penalty: float = 1.0

    def score_for_lines(self, lines: int) -> float:
        if lines <= 0:
            return 0.0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1]
        return self.line_clear_scores[-1] + (lines - 4) * 4.0
