"""
Менеджер WebSocket: подключения по connection_id, отправка игрокам сессии.
"""
import logging
from typing import Any

from fastapi import WebSocket

from .sessions import Session

logger = logging.getLogger(__name__)


class Connection:
    def __init__(self, ws: WebSocket, connection_id: str):
        self.ws = ws
        self.connection_id = connection_id


class WSManager:
    def __init__(self):
        self._by_id: dict[str, Connection] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    async def connect(self, ws: WebSocket, connection_id: str) -> None:
        self._by_id[connection_id] = Connection(ws, connection_id)

    def disconnect(self, connection_id: str) -> None:
        self._by_id.pop(connection_id, None)

    async def send_to(self, connection_id: str, payload: dict[str, Any]) -> bool:
        conn = self._by_id.get(connection_id)
        if not conn:
            return False
        try:
            await conn.ws.send_json(payload)
            return True
        except Exception as e:
            logger.warning("send_to %s: %s", connection_id, e)
            return False

    async def broadcast(self, session: Session, payload: dict[str, Any]) -> None:
        for p in list(session.players):
            await self.send_to(p.connection_id, payload)
