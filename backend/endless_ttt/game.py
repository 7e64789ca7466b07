"""
Состояние партии и транзакция постановки фигуры.
Используется и локальным контроллером, и сервером сессий.
"""
from dataclasses import dataclass, field

from .constants import BOARD_SIZE, MAX_LIVE_PIECES, X, GameStatus, Scores, Variant, empty_scores, opposite
from .ledger import Move, MoveLedger
from .rules import evaluate, is_full, is_valid_index, occupied_count


@dataclass(frozen=True)
class Placement:
    """Итог принятого хода."""
    index: int
    symbol: str
    evicted: Move | None
    winner: str | None
    winning_line: tuple[int, int, int] | None
    is_draw: bool
    next_turn: str | None


@dataclass(frozen=True)
class GameSnapshot:
    board: tuple[str | None, ...]
    current_player: str
    status: GameStatus
    active: bool
    winner: str | None
    winning_line: tuple[int, int, int] | None
    is_draw: bool
    scores: Scores
    moves: tuple[Move, ...]


@dataclass
class GameState:
    variant: Variant = Variant.ENDLESS
    board: list[str | None] = field(default_factory=lambda: [None] * BOARD_SIZE)
    current_player: str = X
    ledger: MoveLedger | None = None
    active: bool = False
    winner: str | None = None
    winning_line: tuple[int, int, int] | None = None
    is_draw: bool = False
    scores: Scores = field(default_factory=empty_scores)

    def __post_init__(self) -> None:
        if self.ledger is None:
            cap = None if self.variant is Variant.CLASSIC else MAX_LIVE_PIECES
            self.ledger = MoveLedger(cap=cap)

    @property
    def status(self) -> GameStatus:
        if self.winner is not None:
            return GameStatus.WON
        if self.is_draw:
            return GameStatus.DRAWN
        return GameStatus.ACTIVE if self.active else GameStatus.IDLE

    @property
    def occupied(self) -> int:
        return occupied_count(self.board)

    def can_place(self, index, symbol: str) -> bool:
        return (
            self.active
            and self.winner is None
            and is_valid_index(index)
            and self.board[index] is None
            and symbol == self.current_player
        )

    def place(self, index: int, symbol: str) -> Placement | None:
        """
        Ставит фигуру symbol в клетку index.
        Недопустимый ход ничего не меняет и возвращает None.
        """
        if not self.can_place(index, symbol):
            return None
        evicted = self.ledger.record(self.board, symbol, index)
        result = evaluate(self.board)
        if result is not None:
            self.winner, self.winning_line = result
            self.active = False
            self.scores[self.winner] += 1
            next_turn = None
        elif self.variant is Variant.CLASSIC and is_full(self.board):
            self.is_draw = True
            self.active = False
            next_turn = None
        else:
            self.current_player = opposite(symbol)
            next_turn = self.current_player
        return Placement(
            index=index,
            symbol=symbol,
            evicted=evicted,
            winner=self.winner,
            winning_line=self.winning_line,
            is_draw=self.is_draw,
            next_turn=next_turn,
        )

    def evict_oldest(self) -> Move | None:
        """Снимает самый старый ход (таймер). На завершённой партии — ничего."""
        if not self.active or self.winner is not None:
            return None
        return self.ledger.evict_oldest(self.board)

    def reset(self) -> None:
        """Очищает поле, журнал и очередь хода. Счёт сохраняется."""
        self.board[:] = [None] * BOARD_SIZE
        self.ledger.clear()
        self.current_player = X
        self.winner = None
        self.winning_line = None
        self.is_draw = False
        self.active = True

    def reset_scores(self) -> None:
        self.scores["X"] = 0
        self.scores["O"] = 0

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=tuple(self.board),
            current_player=self.current_player,
            status=self.status,
            active=self.active,
            winner=self.winner,
            winning_line=self.winning_line,
            is_draw=self.is_draw,
            scores=dict(self.scores),
            moves=tuple(self.ledger),
        )
