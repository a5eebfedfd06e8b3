from __future__ import annotations

import numpy as np

from block_drop_rl.game import BlockDropGame, BlockType, GameConfig, GameGrid, Piece, ScoringRules


def _game(seed: int = 0) -> BlockDropGame:
    return BlockDropGame(GameConfig(random_seed=seed))


def test_piece_width_follows_type() -> None:
    assert {kind: Piece(kind).width for kind in BlockType} == {
        BlockType.SQUARE: 2,
        BlockType.CORNER_L: 2,
        BlockType.CORNER_J: 2,
        BlockType.CORNER_R: 2,
        BlockType.BAR: 1,
        BlockType.DOT: 1,
    }
    assert Piece(BlockType.BAR).rotated(1).shape().shape == (1, 2)


def test_free_space_profile_counts_from_start_row() -> None:
    grid = GameGrid(6, 5)
    grid.grid[3, 0] = 1
    grid.grid[2, 1] = 1
    grid.grid[1, 2] = 1  # above the start row, ignored
    grid.grid[4, 3] = 1

    assert grid.free_space_profile(2) == (1, 0, 3, 2, 3, 3)
    assert grid.free_space_profile(0) == (3, 2, 1, 4, 5, 5)


def test_grid_place_returns_the_number_of_cleared_rows() -> None:
    grid = GameGrid(6, 5)
    grid.grid[3:, :4] = 1

    assert grid.place([(4, 0), (5, 0)], 2) == 0
    assert grid.place([(4, 3), (5, 3), (4, 4), (5, 4)], 1) == 2
    # the two cleared rows are gone and the row-0 cells have moved down by two
    np.testing.assert_array_equal(grid.grid[2], [0, 0, 0, 0, 2, 2])
    assert not grid.grid[:2].any()
    assert not grid.grid[3:].any()


def test_drop_clears_a_full_row_and_scores_it() -> None:
    game = _game()
    game.current_piece = Piece(BlockType.SQUARE)
    game.grid.grid[4, :4] = 1

    reward = game.place(4, 0)

    assert reward == 1.0
    assert game.lines_cleared_total == 1
    assert game.pieces_placed == 1
    assert not game.game_over
    np.testing.assert_array_equal(game.board_snapshot()[4], [0, 0, 0, 0, 1, 1])


def test_offset_is_clamped_to_the_board() -> None:
    game = _game()
    game.current_piece = Piece(BlockType.SQUARE)

    game.place(5, 0)

    np.testing.assert_array_equal(game.board_snapshot()[3:], [[0, 0, 0, 0, 1, 1]] * 2)


def test_resting_in_spawn_rows_ends_the_game() -> None:
    game = BlockDropGame(GameConfig(random_seed=1), ScoringRules(game_over_penalty=2.0))
    game.grid.grid[2:, 0:2] = 1
    game.current_piece = Piece(BlockType.SQUARE)
    current_next = game.next_piece

    reward = game.place(0, 0)

    assert game.game_over
    assert reward == -2.0
    assert game.next_piece == current_next
    assert game.place(3, 0) == 0.0


def test_next_piece_becomes_current_after_a_drop() -> None:
    game = _game(3)
    upcoming = game.upcoming_piece()
    game.place(0, 0)
    assert game.active_piece() == upcoming


def test_reset_with_seed_is_reproducible() -> None:
    game = _game()
    game.reset(seed=11)
    first = [game.active_piece().kind, game.upcoming_piece().kind]
    game.place(0, 0)
    game.reset(seed=11)

    assert [game.active_piece().kind, game.upcoming_piece().kind] == first
    assert game.score == 0.0
    assert not game.board_snapshot().any()
