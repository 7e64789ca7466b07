"""
Транспортный клиент сетевой игры.

Пересылает намерения игрока на сервер и держит зеркало состояния, которое
собирается только из сообщений сервера. Сам ничего не вычисляет.
"""
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from . import messages
from .constants import BOARD_SIZE, Scores, empty_scores

logger = logging.getLogger(__name__)

Send = Callable[[dict[str, Any]], Awaitable[None]]


class GameClient:
    def __init__(self, send: Send):
        self._send = send
        self.game_id: str | None = None
        self.is_host = False
        self.player_symbol: str | None = None
        self.player_name: str | None = None
        self.opponent_name: str | None = None
        self.opponent_connected = False
        self.last_error: str | None = None
        self._clear_board()
        self.scores: Scores = empty_scores()

    def _clear_board(self) -> None:
        self.board: list[str | None] = [None] * BOARD_SIZE
        self.next_turn: str | None = "X"
        self.winner: str | None = None
        self.winning_line: list[int] | None = None
        self.is_draw = False

    @property
    def my_turn(self) -> bool:
        return self.player_symbol is not None and self.next_turn == self.player_symbol

    # --- намерения ---

    async def create_game(self, player_name: str) -> None:
        await self._send({"type": messages.CREATE_GAME, "playerName": player_name})

    async def join_game(self, game_id: str, player_name: str) -> None:
        await self._send({"type": messages.JOIN_GAME, "gameId": game_id, "playerName": player_name})

    async def make_move(self, index: int) -> None:
        if self.game_id is None:
            return
        await self._send({"type": messages.MAKE_MOVE, "gameId": self.game_id, "index": index})

    async def reset_game(self) -> None:
        # Сервер всё равно проигнорирует не-хоста, но лишний кадр не шлём
        if self.game_id is None or not self.is_host:
            return
        await self._send({"type": messages.RESET_GAME, "gameId": self.game_id})

    async def reset_scores(self) -> None:
        if self.game_id is None or not self.is_host:
            return
        await self._send({"type": messages.RESET_SCORES, "gameId": self.game_id})

    # --- сообщения сервера ---

    def handle(self, msg: dict[str, Any]) -> str | None:
        """Применяет сообщение сервера к зеркалу, возвращает его type."""
        t = msg.get("type")
        if t in (messages.GAME_CREATED, messages.GAME_JOINED):
            self.game_id = msg["gameId"]
            self.is_host = bool(msg.get("isHost"))
            self.player_symbol = msg.get("playerSymbol")
            self.player_name = msg.get("playerName")
            self.opponent_name = msg.get("opponentName")
            self.opponent_connected = t == messages.GAME_JOINED
            self.last_error = None
            self._clear_board()
            self.scores = empty_scores()
        elif t == messages.OPPONENT_JOINED:
            self.opponent_name = msg.get("opponentName")
            self.opponent_connected = True
        elif t == messages.MOVE_MADE:
            self.board = list(msg["board"])
            self.next_turn = msg.get("nextTurn")
            self.winner = msg.get("winner")
            self.winning_line = msg.get("winningLine")
            self.is_draw = bool(msg.get("isDraw"))
            if msg.get("scores"):
                self.scores = dict(msg["scores"])
        elif t == messages.GAME_RESET:
            self._clear_board()
        elif t == messages.SCORES_RESET:
            self.scores = empty_scores()
        elif t == messages.OPPONENT_DISCONNECTED:
            self.opponent_connected = False
            self.game_id = None
            self.is_host = False
        elif t == messages.ERROR:
            self.last_error = msg.get("message")
            logger.warning("server error: %s", self.last_error)
        else:
            logger.debug("client: ignored message type %r", t)
        return t
