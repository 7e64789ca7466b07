"""
Эвристический соперник.
Порядок: выиграть, заблокировать, обойти диагональную вилку, центр/углы, любая клетка.
"""
import asyncio
import random
from collections.abc import Sequence

from .constants import CENTER, CORNERS, DIAGONAL_CORNER_PAIRS, EDGES
from .rules import empty_cells, winning_cells

DEFAULT_DELAY_SECONDS = 0.4


def has_diagonal_threat(board: Sequence[str | None], human: str) -> bool:
    """Человек занял оба конца одной из диагоналей."""
    return any(board[a] == human and board[b] == human for a, b in DIAGONAL_CORNER_PAIRS)


def creates_fork(board: Sequence[str | None], index: int, ai: str, human: str) -> bool:
    """После хода ai в index у человека будет две и больше выигрышных клеток."""
    test = list(board)
    test[index] = ai
    return len(winning_cells(test, human)) >= 2


def _strategic_move(board, ai: str, human: str, rng: random.Random) -> int | None:
    empty = empty_cells(board)
    if has_diagonal_threat(board, human):
        safe = [i for i in empty if not creates_fork(board, i, ai, human)]
        if safe:
            if CENTER in safe:
                return CENTER
            edges = [i for i in EDGES if i in safe]
            if edges:
                return rng.choice(edges)
            return rng.choice(safe)
    if board[CENTER] is None:
        return CENTER
    corners = [i for i in CORNERS if board[i] is None]
    if corners:
        return rng.choice(corners)
    if empty:
        return rng.choice(empty)
    return None


def select_move(
    board: Sequence[str | None],
    ai: str,
    human: str,
    rng: random.Random | None = None,
) -> int | None:
    """
    Выбирает клетку для ai. None — только если пустых клеток нет.
    При одинаковых board и seed у rng выбор детерминирован.
    """
    rng = rng or random.Random()
    empty = empty_cells(board)
    if not empty:
        return None

    win = winning_cells(board, ai)
    if win:
        return win[0]
    block = winning_cells(board, human)
    if block:
        return block[0]

    move = _strategic_move(board, ai, human, rng)
    if move is not None:
        return move
    return rng.choice(empty)


async def select_move_with_delay(
    board: Sequence[str | None],
    ai: str,
    human: str,
    delay: float = DEFAULT_DELAY_SECONDS,
    rng: random.Random | None = None,
) -> int | None:
    """Тот же select_move, но после косметической паузы «раздумья»."""
    frozen = tuple(board)
    await asyncio.sleep(delay)
    return select_move(frozen, ai, human, rng)
