"""
Обработка сообщений WebSocket: create-game, join-game, make-move,
reset-game, reset-scores. При отключении сессия закрывается, сопернику
уходит opponent-disconnected.
"""
import json
import logging
import uuid

from fastapi import WebSocket
from starlette.websockets import WebSocketDisconnect

from . import messages
from .errors import SessionError
from .sessions import SessionStore
from .ws_manager import WSManager

logger = logging.getLogger(__name__)


def _game_id(data: dict) -> str | None:
    value = data.get("gameId")
    return value if isinstance(value, str) and value else None


def _player_name(value, default: str = "Player") -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


async def handle_ws_message(
    raw: str,
    connection_id: str,
    store: SessionStore,
    manager: WSManager,
) -> bool:
    """
    Обрабатывает одно сообщение клиента.
    Некорректные сообщения логируются и отбрасываются.
    Возвращает False если соединение нужно закрыть.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("WS: invalid JSON from %s: %s", connection_id, e)
        return True
    if not isinstance(data, dict):
        logger.warning("WS: non-object frame from %s dropped", connection_id)
        return True
    t = data.get("type")
    logger.info("WS: msg from %s type=%s", connection_id, t)

    if t == messages.CREATE_GAME:
        name = _player_name(data.get("playerName"))
        try:
            session = store.create_session(connection_id, name)
        except SessionError as e:
            logger.info("WS: create by %s failed: %s", connection_id, e)
            await manager.send_to(connection_id, messages.error_payload(e))
            return True
        await manager.send_to(connection_id, messages.game_created_payload(session.id, name))
        return True

    if t == messages.JOIN_GAME:
        game_id = _game_id(data)
        name = _player_name(data.get("playerName"))
        try:
            session = store.join_session(game_id or "", connection_id, name)
        except SessionError as e:
            logger.info("WS: join %s by %s failed: %s", game_id, connection_id, e)
            await manager.send_to(connection_id, messages.error_payload(e))
            return True
        host = session.host
        await manager.send_to(
            connection_id,
            messages.game_joined_payload(session.id, name, host.name if host else "Unknown"),
        )
        await manager.send_to(
            session.host_connection_id,
            messages.opponent_joined_payload(name),
        )
        return True

    if t == messages.MAKE_MOVE:
        game_id = _game_id(data)
        update = store.apply_move(game_id, connection_id, data.get("index")) if game_id else None
        if update:
            await manager.broadcast(store.get(game_id), update)
        return True

    if t == messages.RESET_GAME:
        game_id = _game_id(data)
        if game_id and store.reset_game(game_id, connection_id):
            await manager.broadcast(store.get(game_id), messages.simple_payload(messages.GAME_RESET))
        return True

    if t == messages.RESET_SCORES:
        game_id = _game_id(data)
        if game_id and store.reset_scores(game_id, connection_id):
            await manager.broadcast(store.get(game_id), messages.simple_payload(messages.SCORES_RESET))
        return True

    logger.warning("WS: unknown message type %r from %s", t, connection_id)
    return True


async def ws_loop(ws: WebSocket, store: SessionStore, manager: WSManager) -> None:
    """Цикл приёма сообщений одного подключения."""
    connection_id = uuid.uuid4().hex
    try:
        await ws.accept()
        await manager.connect(ws, connection_id)
        logger.info("WS: accepted connection_id=%s", connection_id)
        while True:
            msg = await ws.receive_text()
            if not await handle_ws_message(msg, connection_id, store, manager):
                break
    except WebSocketDisconnect as e:
        logger.info("WS: client disconnected code=%s connection_id=%s", e.code, connection_id)
    except Exception as e:
        logger.exception("WS: error connection_id=%s: %s", connection_id, e)
    finally:
        manager.disconnect(connection_id)
        session = store.disconnect(connection_id)
        if session:
            peer = session.other(connection_id)
            if peer:
                await manager.send_to(
                    peer.connection_id,
                    messages.simple_payload(messages.OPPONENT_DISCONNECTED),
                )
        logger.info("WS: disconnected connection_id=%s", connection_id)
