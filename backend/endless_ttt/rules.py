"""
Правила: поиск выигрышной линии и заполненности поля.
Чистые функции без побочных эффектов.
"""
from collections.abc import Sequence

from .constants import BOARD_SIZE, WIN_LINES

Board = Sequence[str | None]


def evaluate(board: Board) -> tuple[str, tuple[int, int, int]] | None:
    """
    Возвращает (символ, линия) первой собранной тройки или None.
    Линии перебираются в фиксированном порядке WIN_LINES.
    """
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a], (a, b, c)
    return None


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def empty_cells(board: Board) -> list[int]:
    return [i for i, cell in enumerate(board) if cell is None]


def occupied_count(board: Board) -> int:
    return sum(1 for cell in board if cell is not None)


def is_valid_index(index) -> bool:
    # bool — подкласс int, но ходом не является
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < BOARD_SIZE


def completes_line(board: Board, symbol: str, index: int) -> bool:
    """Собирает ли ход symbol в пустую клетку index тройку."""
    if board[index] is not None:
        return False
    for line in WIN_LINES:
        if index in line and all(board[i] == symbol for i in line if i != index):
            return True
    return False


def winning_cells(board: Board, symbol: str) -> list[int]:
    """Все пустые клетки, ход в которые сразу выигрывает для symbol."""
    return [i for i in empty_cells(board) if completes_line(board, symbol, i)]
