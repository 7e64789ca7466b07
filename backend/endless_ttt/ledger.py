"""
Журнал живых ходов (FIFO).
У каждого символа не больше cap фигур: четвёртая вытесняет самую старую.
"""
import itertools
import logging
from collections import deque
from collections.abc import Iterator, MutableSequence
from dataclasses import dataclass

from .constants import MAX_LIVE_PIECES, SYMBOLS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    index: int
    symbol: str
    seq: int  # порядковый номер записи в журнале


class MoveLedger:
    def __init__(self, cap: int | None = MAX_LIVE_PIECES):
        self.cap = cap
        self._seq = itertools.count()
        self._moves: dict[str, deque[Move]] = {s: deque() for s in SYMBOLS}

    def __len__(self) -> int:
        return sum(len(q) for q in self._moves.values())

    def __iter__(self) -> Iterator[Move]:
        """Все живые ходы в порядке записи."""
        return iter(sorted(itertools.chain(*self._moves.values()), key=lambda m: m.seq))

    def live(self, symbol: str) -> list[Move]:
        return list(self._moves[symbol])

    def clear(self) -> None:
        for q in self._moves.values():
            q.clear()

    def record(self, board: MutableSequence[str | None], symbol: str, index: int) -> Move | None:
        """
        Ставит symbol в клетку index и записывает ход.
        Если у символа уже cap живых ходов — сначала снимает самый старый.
        Возвращает вытесненный ход или None.
        """
        queue = self._moves[symbol]
        evicted = None
        if self.cap is not None and len(queue) >= self.cap:
            evicted = queue.popleft()
            _clear_cell(board, evicted)
        board[index] = symbol
        queue.append(Move(index=index, symbol=symbol, seq=next(self._seq)))
        return evicted

    def evict_oldest(self, board: MutableSequence[str | None]) -> Move | None:
        """Снимает самый старый ход среди обоих символов."""
        heads = [q[0] for q in self._moves.values() if q]
        if not heads:
            return None
        oldest = min(heads, key=lambda m: m.seq)
        self._moves[oldest.symbol].popleft()
        _clear_cell(board, oldest)
        return oldest


def _clear_cell(board: MutableSequence[str | None], move: Move) -> None:
    if board[move.index] != move.symbol:
        # Клетку уже очистили раньше
        logger.debug("ledger: cell %s already cleared, skip", move.index)
        return
    board[move.index] = None
