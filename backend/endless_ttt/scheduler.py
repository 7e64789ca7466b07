"""
Отложенные задачи поверх цикла asyncio.
Контроллер получает планировщик снаружи, поэтому в тестах его можно подменить.
"""
import asyncio
from collections.abc import Callable
from typing import Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle: ...


class AsyncioScheduler:
    """Планировщик на текущем цикле событий. Нужен запущенный цикл."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Handle:
        return asyncio.get_running_loop().call_later(delay, callback)


class Repeating:
    """
    Периодическая задача с идемпотентными start/stop.
    Одновременно взведён не больше одного таймера.
    """

    def __init__(self, scheduler: Scheduler, interval: float, callback: Callable[[], None]):
        self._scheduler = scheduler
        self.interval = interval
        self._callback = callback
        self._handle: Handle | None = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._arm()

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _arm(self) -> None:
        self._handle = self._scheduler.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        self._callback()
        # callback мог остановить таймер или перезапустить его сам
        if self._running and self._handle is None:
            self._arm()
