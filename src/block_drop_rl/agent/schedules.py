from __future__ import annotations

from typing import Callable


def linear_decay(start: float, end: float, total_steps: int) -> Callable[[int], float]:
    """
    Linear interpolation from start -> end over total_steps.
    Usage: alpha_fn = linear_decay(1.0, 0.0, total_steps=50_000)
           alpha = alpha_fn(step)
    """
    total = max(1, int(total_steps))

    def fn(step: int) -> float:
        frac = min(max(step / total, 0.0), 1.0)
        return start + (end - start) * frac

    return fn


def remaining_fraction(total_steps: int) -> Callable[[int], float]:
    """Learning rate equal to the share of training still ahead: (total - step) / total."""
    return linear_decay(1.0, 0.0, total_steps)
