from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

from .errors import InvalidConfigError


class PolicyKind(IntEnum):
    RANDOM = 0
    FIXED = 1
    LEARNED = 2


def policy_kind(value: object) -> PolicyKind:
    """Resolve a policy kind from the enum, its integer code or its name."""
    try:
        if isinstance(value, str):
            return PolicyKind[value.upper()]
        return PolicyKind(value)
    except (ValueError, KeyError):
        raise InvalidConfigError(f"unknown policy kind {value!r}") from None


def check_unit_interval(name: str, value: float) -> float:
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise InvalidConfigError(f"{name} must be in [0, 1], got {value}")
    return value


@dataclass(frozen=True)
class AgentConfig:
    """Static settings for an agent instance.

    The defaults describe a 6-column board whose top two rows are the spawn area.
    """

    n_offsets: int = 6
    n_rotations: int = 4
    discount: float = 0.9
    epsilon: float = 0.05
    profile_start_row: int = 2
    scan_rows: Tuple[int, ...] = (2, 3, 4)
    wide_piece_width: int = 2
    single_piece_type: int = 5  # searched column by column
    skinny_piece_type: int = 4  # turned once to lie flat in a two-wide gap

    def __post_init__(self) -> None:
        check_unit_interval("epsilon", self.epsilon)
        check_unit_interval("discount", self.discount)
        if self.n_offsets <= 0 or self.n_rotations <= 0:
            raise InvalidConfigError(
                f"action space must be non-empty, got {self.n_offsets}x{self.n_rotations}"
            )
        if self.profile_start_row < 0:
            raise InvalidConfigError(f"profile_start_row must be >= 0, got {self.profile_start_row}")
        if not self.scan_rows or min(self.scan_rows) < 0:
            raise InvalidConfigError(f"scan_rows must be non-empty and non-negative, got {self.scan_rows}")
        if list(self.scan_rows) != list(range(self.scan_rows[0], self.scan_rows[0] + len(self.scan_rows))):
            raise InvalidConfigError(f"scan_rows must be consecutive, got {self.scan_rows}")
