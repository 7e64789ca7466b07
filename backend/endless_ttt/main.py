"""
Endless Tic-Tac-Toe: API и WebSocket сервера сетевой игры.
"""
import logging

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .sessions import SessionStore
from .ws_handlers import ws_loop
from .ws_manager import WSManager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(store: SessionStore | None = None) -> FastAPI:
    """Хранилище сессий создаётся один раз на приложение и передаётся обработчикам."""
    config = get_config()
    app = FastAPI(title="Endless Tic-Tac-Toe API")
    app.state.store = store if store is not None else SessionStore()
    app.state.manager = WSManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        logger.info("WS: connection attempt from %s", ws.client)
        await ws_loop(ws, app.state.store, app.state.manager)

    return app


app = create_app()
