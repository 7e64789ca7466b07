"""
Shared pytest fixtures.

FakeScheduler replaces the asyncio loop for controller tests so timers fire
only when a test calls advance().
"""
import pytest
from fastapi.testclient import TestClient

from endless_ttt.main import create_app
from endless_ttt.sessions import SessionStore


class FakeHandle:
    def __init__(self, when: float, callback):
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    def __init__(self):
        self.now = 0.0
        self._handles: list[FakeHandle] = []

    def call_later(self, delay: float, callback) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = sorted((h for h in self.pending if h.when <= target), key=lambda h: h.when)
            if not due:
                break
            handle = due[0]
            self._handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def client(store):
    app = create_app(store)
    with TestClient(app) as c:
        yield c
