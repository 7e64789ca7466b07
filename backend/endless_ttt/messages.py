"""Сообщения websocket-протокола. Каждый кадр — JSON с ключом type."""
from typing import Any

CREATE_GAME = "create-game"
JOIN_GAME = "join-game"
MAKE_MOVE = "make-move"
RESET_GAME = "reset-game"
RESET_SCORES = "reset-scores"

GAME_CREATED = "game-created"
GAME_JOINED = "game-joined"
OPPONENT_JOINED = "opponent-joined"
MOVE_MADE = "move-made"
GAME_RESET = "game-reset"
SCORES_RESET = "scores-reset"
OPPONENT_DISCONNECTED = "opponent-disconnected"
ERROR = "error"


def game_created_payload(game_id: str, player_name: str) -> dict[str, Any]:
    return {
        "type": GAME_CREATED,
        "gameId": game_id,
        "isHost": True,
        "playerSymbol": "X",
        "playerName": player_name,
    }


def game_joined_payload(game_id: str, player_name: str, opponent_name: str) -> dict[str, Any]:
    return {
        "type": GAME_JOINED,
        "gameId": game_id,
        "isHost": False,
        "playerSymbol": "O",
        "playerName": player_name,
        "opponentName": opponent_name,
    }


def opponent_joined_payload(opponent_name: str) -> dict[str, Any]:
    return {"type": OPPONENT_JOINED, "opponentName": opponent_name}


def move_made_payload(placement, state, winner_name: str | None = None) -> dict[str, Any]:
    """Собрать move-made из итога хода и состояния после него."""
    payload: dict[str, Any] = {
        "type": MOVE_MADE,
        "index": placement.index,
        "symbol": placement.symbol,
        "nextTurn": placement.next_turn,
        "board": list(state.board),
        "evicted": placement.evicted.index if placement.evicted else None,
    }
    if placement.winner is not None:
        payload.update({
            "winner": placement.winner,
            "winnerName": winner_name,
            "winningLine": list(placement.winning_line),
            "scores": dict(state.scores),
        })
    elif placement.is_draw:
        payload["isDraw"] = True
    return payload


def simple_payload(msg_type: str) -> dict[str, Any]:
    return {"type": msg_type}


def error_payload(error) -> dict[str, Any]:
    """Кадр error из GameError: клиенту уходит только to_dict()."""
    return {"type": ERROR, **error.to_dict()}
