"""
Иерархия ошибок.

Отклонённые ходы и чужие сбросы исключений не бросают (возвращают
False/None), исключения нужны только там, где клиенту отправляется ответ
или где сбой должен быть залогирован.
"""
from typing import Any

__all__ = [
    "AlreadyInSession",
    "GameError",
    "OpponentFailure",
    "SessionError",
    "SessionFull",
    "SessionNotFound",
]


class GameError(Exception):
    """Базовая ошибка игры: машинный code и человекочитаемое message."""
    code: str = "GAME_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class SessionError(GameError):
    code = "SESSION_ERROR"


class SessionNotFound(SessionError):
    code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: str):
        super().__init__("Game not found", context={"game_id": session_id})


class SessionFull(SessionError):
    code = "SESSION_FULL"

    def __init__(self, session_id: str):
        super().__init__("Game is full", context={"game_id": session_id})


class AlreadyInSession(SessionError):
    code = "ALREADY_IN_SESSION"

    def __init__(self, session_id: str):
        super().__init__("Already in a game", context={"game_id": session_id})


class OpponentFailure(GameError):
    """Соперник-эвристика не смог выдать ход."""
    code = "OPPONENT_FAILURE"
