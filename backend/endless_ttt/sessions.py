"""
Сессии сетевой игры (in-memory).
Сервер — единственный источник правды: клиенты присылают намерения, доску
и исход партии считает только хранилище.

Методы хранилища синхронные: между проверкой и мутацией нет await, поэтому
намерения одной сессии обрабатываются строго по очереди.
"""
import logging
import secrets
import string
from dataclasses import dataclass, field

from .constants import O, X
from .errors import AlreadyInSession, SessionFull, SessionNotFound
from .game import GameState
from .messages import move_made_payload

logger = logging.getLogger(__name__)

SESSION_ID_ALPHABET = string.ascii_lowercase + string.digits
SESSION_ID_LENGTH = 6


@dataclass
class SessionPlayer:
    connection_id: str
    name: str
    symbol: str


@dataclass
class Session:
    id: str
    host_connection_id: str
    players: list[SessionPlayer] = field(default_factory=list)
    state: GameState = field(default_factory=lambda: GameState(active=True))

    def player(self, connection_id: str) -> SessionPlayer | None:
        for p in self.players:
            if p.connection_id == connection_id:
                return p
        return None

    def player_by_symbol(self, symbol: str) -> SessionPlayer | None:
        for p in self.players:
            if p.symbol == symbol:
                return p
        return None

    @property
    def host(self) -> SessionPlayer | None:
        return self.player(self.host_connection_id)

    def is_host(self, connection_id: str) -> bool:
        return connection_id == self.host_connection_id

    def other(self, connection_id: str) -> SessionPlayer | None:
        for p in self.players:
            if p.connection_id != connection_id:
                return p
        return None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= 2


def new_session_id() -> str:
    # Коллизии не проверяем: пространство 36^6, сессии живут недолго
    return "".join(secrets.choice(SESSION_ID_ALPHABET) for _ in range(SESSION_ID_LENGTH))


class SessionStore:
    """Реестр сессий. Создаётся один раз при старте приложения."""

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._by_connection: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def get_for_connection(self, connection_id: str) -> Session | None:
        session_id = self._by_connection.get(connection_id)
        return self._sessions.get(session_id) if session_id else None

    def _ensure_free(self, connection_id: str) -> None:
        """Одно подключение — не больше одной сессии."""
        session_id = self._by_connection.get(connection_id)
        if session_id is not None and session_id in self._sessions:
            raise AlreadyInSession(session_id)

    def create_session(self, connection_id: str, host_name: str) -> Session:
        self._ensure_free(connection_id)
        session = Session(id=new_session_id(), host_connection_id=connection_id)
        session.players.append(SessionPlayer(connection_id, host_name, X))
        self._sessions[session.id] = session
        self._by_connection[connection_id] = session.id
        logger.info("session %s created by %s", session.id, host_name)
        return session

    def join_session(self, session_id: str, connection_id: str, name: str) -> Session:
        self._ensure_free(connection_id)
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if session.is_full:
            raise SessionFull(session_id)
        session.players.append(SessionPlayer(connection_id, name, O))
        self._by_connection[connection_id] = session.id
        logger.info("session %s joined by %s", session.id, name)
        return session

    def apply_move(self, session_id: str, connection_id: str, index) -> dict | None:
        """
        Применить ход. Возвращает payload move-made для рассылки или None,
        если ход отклонён (состояние при этом не меняется).
        """
        session = self._sessions.get(session_id)
        if session is None:
            return None
        player = session.player(connection_id)
        if player is None:
            return None
        placement = session.state.place(index, player.symbol)
        if placement is None:
            logger.debug("session %s: rejected move %s by %s", session_id, index, player.symbol)
            return None
        winner_name = None
        if placement.winner is not None:
            winner = session.player_by_symbol(placement.winner)
            winner_name = winner.name if winner else "Unknown"
            logger.info("session %s: %s wins", session_id, placement.winner)
        return move_made_payload(placement, session.state, winner_name)

    def reset_game(self, session_id: str, connection_id: str) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        if not session.is_host(connection_id):
            logger.info("session %s: reset-game from non-host ignored", session_id)
            return False
        session.state.reset()
        return True

    def reset_scores(self, session_id: str, connection_id: str) -> bool:
        session = self._sessions.get(session_id)
        if session is None:
            return False
        if not session.is_host(connection_id):
            logger.info("session %s: reset-scores from non-host ignored", session_id)
            return False
        session.state.reset_scores()
        return True

    def disconnect(self, connection_id: str) -> Session | None:
        """Удаляет сессию, в которой был этот игрок. Возвращает её для уведомления соперника."""
        session_id = self._by_connection.pop(connection_id, None)
        if session_id is None:
            return None
        session = self._sessions.pop(session_id, None)
        if session is None:
            return None
        for p in session.players:
            self._by_connection.pop(p.connection_id, None)
        logger.info("session %s closed, %s disconnected", session_id, connection_id)
        return session
