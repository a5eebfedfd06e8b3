"""Game module for Block Drop RL.

Exports the reference falling-block engine that agents play against:
- GameGrid: Grid representation, line clearing and column profiles
- Piece: Falling block with rotation mechanics
- BlockType: Enum of the six block types
- ScoringRules: Simple scoring configuration and helpers
- BlockDropGame: One-drop-per-turn game state
"""

from .grid import GameGrid
from .pieces import BlockType, Piece
from .rules import ScoringRules
from .core import BlockDropGame, GameConfig

__all__ = [
    "GameGrid",
    "Piece",
    "BlockType",
    "ScoringRules",
    "BlockDropGame",
    "GameConfig",
]
