from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from block_drop_rl.agent import (
    AgentConfig,
    BoardObservation,
    FixedPolicy,
    InvalidConfigError,
    LearnedPolicy,
    ProfileObservation,
    RandomPolicy,
    StateKey,
    ValueTable,
    action_space,
)
from block_drop_rl.game import BlockType, Piece


def _board(*rows: list[int]) -> np.ndarray:
    # rows 0 and 1 are the empty spawn area
    empty = [[0] * 6, [0] * 6]
    return np.array(empty + [list(r) for r in rows], dtype=np.int8)


def _board_obs(kind: BlockType, board: np.ndarray) -> BoardObservation:
    return BoardObservation(piece=Piece(kind), next_piece=Piece(BlockType.SQUARE), board=board)


def _learned(epsilon: float, seed: int = 0) -> tuple[LearnedPolicy, ValueTable, ProfileObservation]:
    config = AgentConfig(epsilon=epsilon)
    actions = action_space()
    table = ValueTable(len(actions))
    key = StateKey.build(int(BlockType.CORNER_L), [3, 2, 1, 0, 3, 3])
    table.ensure(key)
    policy = LearnedPolicy(config, np.random.default_rng(seed), table, actions)
    return policy, table, ProfileObservation(piece=Piece(BlockType.CORNER_L), key=key)


# Random


@pytest.mark.parametrize("kind", [BlockType.SQUARE, BlockType.CORNER_L, BlockType.CORNER_J, BlockType.CORNER_R])
def test_random_offsets_for_wide_pieces_stay_below_five(kind: BlockType) -> None:
    policy = RandomPolicy(AgentConfig(), np.random.default_rng(1))
    obs = _board_obs(kind, _board([0] * 6, [0] * 6, [0] * 6))
    draws = [policy.choose_action(obs) for _ in range(1000)]

    assert max(offset for offset, _ in draws) == 4
    assert {rotation for _, rotation in draws} == {0, 1, 2, 3}


@pytest.mark.parametrize("kind", [BlockType.BAR, BlockType.DOT])
def test_random_offsets_for_narrow_pieces_stay_below_six(kind: BlockType) -> None:
    policy = RandomPolicy(AgentConfig(), np.random.default_rng(2))
    obs = _board_obs(kind, _board([0] * 6, [0] * 6, [0] * 6))
    offsets = [policy.choose_action(obs)[0] for _ in range(1000)]

    assert max(offsets) == 5
    assert min(offsets) == 0


# Fixed


def test_fixed_prefers_leftmost_of_equal_two_wide_gaps() -> None:
    board = _board(
        [1, 0, 0, 1, 0, 0],
        [1, 0, 0, 1, 0, 0],
        [1, 1, 1, 1, 1, 1],
    )
    policy = FixedPolicy(AgentConfig(), np.random.default_rng(0))

    assert policy.choose_action(_board_obs(BlockType.SQUARE, board)) == (1, 0)


def test_fixed_takes_a_strictly_deeper_gap_further_right() -> None:
    board = _board(
        [1, 0, 0, 1, 0, 0],
        [1, 0, 0, 1, 0, 0],
        [1, 1, 1, 1, 0, 0],
    )
    policy = FixedPolicy(AgentConfig(), np.random.default_rng(0))

    assert policy.choose_action(_board_obs(BlockType.CORNER_J, board)) == (4, 0)


def test_fixed_turns_the_skinny_piece_flat() -> None:
    board = _board(
        [1, 1, 0, 0, 1, 1],
        [1, 1, 0, 0, 1, 1],
        [1, 1, 1, 1, 1, 1],
    )
    policy = FixedPolicy(AgentConfig(), np.random.default_rng(0))

    assert policy.choose_action(_board_obs(BlockType.BAR, board)) == (2, 1)


def test_fixed_single_piece_finds_deepest_column() -> None:
    board = _board(
        [1, 0, 1, 0, 0, 1],
        [1, 0, 1, 0, 1, 1],
        [1, 1, 1, 0, 1, 1],
    )
    policy = FixedPolicy(AgentConfig(), np.random.default_rng(0))

    assert policy.choose_action(_board_obs(BlockType.DOT, board)) == (3, 0)


def test_fixed_single_piece_prefers_leftmost_on_ties() -> None:
    board = _board(
        [1, 0, 1, 0, 1, 0],
        [1, 1, 1, 1, 1, 1],
        [1, 1, 1, 1, 1, 1],
    )
    policy = FixedPolicy(AgentConfig(), np.random.default_rng(0))

    assert policy.choose_action(_board_obs(BlockType.DOT, board)) == (1, 0)


def test_fixed_falls_back_to_random_without_a_two_wide_gap() -> None:
    board = _board(
        [0, 1, 0, 1, 0, 1],
        [0, 1, 0, 1, 0, 1],
        [1, 1, 1, 1, 1, 1],
    )
    policy = FixedPolicy(AgentConfig(), np.random.default_rng(3))
    draws = [policy.choose_action(_board_obs(BlockType.SQUARE, board)) for _ in range(500)]

    offsets = {offset for offset, _ in draws}
    assert offsets == {0, 1, 2, 3, 4}
    assert {rotation for _, rotation in draws} == {0, 1, 2, 3}


def test_fixed_rejects_profile_observations() -> None:
    _, _, obs = _learned(0.0)
    policy = FixedPolicy(AgentConfig(), np.random.default_rng(0))
    with pytest.raises(TypeError):
        policy.choose_action(obs)


# Learned


def test_epsilon_zero_is_deterministically_greedy() -> None:
    policy, table, obs = _learned(0.0)
    table.set(obs.key, 13, 0.75)
    table.set(obs.key, 2, 0.5)

    for _ in range(200):
        assert policy.choose_index(obs) == 13
        assert policy.choose_action(obs) == action_space().decode(13)


def test_greedy_ties_go_to_the_lowest_index() -> None:
    policy, table, obs = _learned(0.0)
    table.set(obs.key, 20, 1.0)
    table.set(obs.key, 6, 1.0)

    assert policy.choose_index(obs) == 6
    assert policy.choose_action(obs) == (1, 2)


def test_epsilon_one_is_uniform_regardless_of_values() -> None:
    policy, table, obs = _learned(1.0, seed=12345)
    table.set(obs.key, 0, 100.0)

    trials = 24_000
    counts = Counter(policy.choose_index(obs) for _ in range(trials))
    expected = trials / 24
    chi2 = sum((counts.get(i, 0) - expected) ** 2 / expected for i in range(24))

    assert set(counts) == set(range(24))
    # 23 degrees of freedom; 60 is far beyond the 99.9th percentile (~49.7)
    assert chi2 < 60.0


def test_epsilon_is_validated() -> None:
    policy, _, _ = _learned(0.05)
    with pytest.raises(InvalidConfigError):
        policy.epsilon = 1.5
    with pytest.raises(InvalidConfigError):
        AgentConfig(epsilon=-0.1)
