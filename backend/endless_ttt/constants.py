"""Константы игры: символы, линии, режимы."""
from enum import Enum
from typing import TypedDict

X = "X"
O = "O"
SYMBOLS = (X, O)

BOARD_SIZE = 9

# Порядок важен: сначала строки, затем столбцы, затем диагонали
WIN_LINES: list[tuple[int, int, int]] = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
]

CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)
DIAGONAL_CORNER_PAIRS = ((0, 8), (2, 6))

MAX_LIVE_PIECES = 3
EVICTION_THRESHOLD = 6


class GameMode(str, Enum):
    # Режимы локального контроллера. Счёт сетевой игры хранит сервер
    # (Session.state.scores), клиент лишь отражает его в GameClient.scores.
    LOCAL = "local"
    AI = "ai"


class Variant(str, Enum):
    ENDLESS = "endless"
    CLASSIC = "classic"


class GameStatus(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    WON = "won"
    DRAWN = "drawn"


class Scores(TypedDict):
    X: int
    O: int


def empty_scores() -> Scores:
    return {"X": 0, "O": 0}


def opposite(symbol: str) -> str:
    return O if symbol == X else X
