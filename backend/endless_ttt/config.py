"""Конфигурация приложения."""
import os
from functools import lru_cache


@lru_cache
def get_config():
    return type("Config", (), {
        "debug": os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes"),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "host": os.environ.get("HOST", "0.0.0.0"),
        "port": int(os.environ.get("PORT", "5001")),
        "eviction_interval": float(os.environ.get("EVICTION_INTERVAL_SECONDS", "1.0")),
        "ai_delay": float(os.environ.get("AI_DELAY_SECONDS", "0.4")),
    })()
