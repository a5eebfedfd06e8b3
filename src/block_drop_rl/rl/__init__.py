"""Training and evaluation runners for Block Drop RL."""
