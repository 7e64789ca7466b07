"""Heuristic opponent decision order."""
import random

import pytest

from endless_ttt.constants import CORNERS, EDGES
from endless_ttt.opponent import (
    creates_fork,
    has_diagonal_threat,
    select_move,
    select_move_with_delay,
)

_ = None


class TestPriorities:
    def test_takes_immediate_win_over_block(self):
        board = ["O", "O", _,
                 "X", "X", _,
                 _, _, _]
        for seed in range(20):
            assert select_move(board, "O", "X", random.Random(seed)) == 2

    def test_blocks_human_win(self):
        board = ["X", "X", _,
                 _, "O", _,
                 _, _, _]
        assert select_move(board, "O", "X", random.Random(0)) == 2

    def test_prefers_center(self):
        board = ["X", _, _, _, _, _, _, _, _]
        assert select_move(board, "O", "X", random.Random(0)) == 4

    def test_corner_when_center_taken(self):
        board = [_, _, _, _, "X", _, _, _, _]
        for seed in range(20):
            assert select_move(board, "O", "X", random.Random(seed)) in CORNERS

    def test_diagonal_threat_prefers_edges(self):
        board = ["X", _, _,
                 _, "O", _,
                 _, _, "X"]
        assert has_diagonal_threat(board, "X")
        for seed in range(20):
            assert select_move(board, "O", "X", random.Random(seed)) in EDGES

    def test_blocks_open_diagonal(self):
        board = [_, _, "X",
                 _, _, _,
                 "X", _, _]
        assert select_move(board, "O", "X", random.Random(0)) == 4

    def test_no_move_on_full_board(self):
        board = ["X", "O", "X", "X", "O", "O", "O", "X", "X"]
        assert select_move(board, "O", "X") is None


def test_creates_fork():
    board = ["X", _, "X",
             _, _, _,
             "X", _, _]
    # X already threatens 1, 3 and 4: any single reply leaves two
    assert creates_fork(board, 5, "O", "X")
    quiet = ["X", _, _, _, _, _, _, _, _]
    assert not creates_fork(quiet, 4, "O", "X")


def test_never_selects_occupied_cell():
    rng = random.Random(99)
    for _i in range(500):
        board = [rng.choice((None, "X", "O")) for _j in range(9)]
        move = select_move(board, "O", "X", random.Random(rng.random()))
        if move is None:
            assert all(c is not None for c in board)
        else:
            assert board[move] is None


def test_same_seed_same_choice():
    board = [_, _, _, _, "X", _, _, _, _]
    picks = {select_move(board, "O", "X", random.Random(7)) for _i in range(10)}
    assert len(picks) == 1


@pytest.mark.asyncio
async def test_delay_does_not_change_choice():
    board = [_, _, _, _, "X", _, _, _, _]
    expected = select_move(board, "O", "X", random.Random(3))
    got = await select_move_with_delay(board, "O", "X", delay=0.01, rng=random.Random(3))
    assert got == expected

