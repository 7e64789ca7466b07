"""Запуск сервера: python -m endless_ttt"""
import uvicorn

from .config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run(
        "endless_ttt.main:app",
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )


if __name__ == "__main__":
    main()
