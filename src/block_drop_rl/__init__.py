"""Block Drop RL: a tabular TD agent for a small falling-block game."""

__version__ = "0.1.0"
