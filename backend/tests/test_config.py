"""Environment-driven configuration."""
import pytest

from endless_ttt.config import get_config


@pytest.fixture(autouse=True)
def fresh_config():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_defaults(monkeypatch):
    for name in ("DEBUG", "ALLOWED_ORIGINS", "PORT", "EVICTION_INTERVAL_SECONDS", "AI_DELAY_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    config = get_config()
    assert config.debug is False
    assert config.allowed_origins == ["*"]
    assert config.port == 5001
    assert config.eviction_interval == 1.0
    assert config.ai_delay == 0.4


def test_overrides(monkeypatch):
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a,http://b")
    monkeypatch.setenv("EVICTION_INTERVAL_SECONDS", "2.5")
    config = get_config()
    assert config.debug is True
    assert config.allowed_origins == ["http://a", "http://b"]
    assert config.eviction_interval == 2.5
