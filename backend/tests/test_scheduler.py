"""Repeating timer start/stop semantics."""
import asyncio

import pytest

from endless_ttt.scheduler import AsyncioScheduler, Repeating


def test_start_is_idempotent(scheduler):
    ticks = []
    timer = Repeating(scheduler, 1.0, lambda: ticks.append(scheduler.now))
    timer.start()
    timer.start()
    assert len(scheduler.pending) == 1
    scheduler.advance(3)
    assert ticks == [1.0, 2.0, 3.0]


def test_stop_is_idempotent(scheduler):
    timer = Repeating(scheduler, 1.0, lambda: None)
    timer.stop()
    timer.start()
    timer.stop()
    timer.stop()
    assert not timer.running
    assert scheduler.pending == []


def test_callback_may_stop_timer(scheduler):
    ticks = []

    def tick():
        ticks.append(1)
        timer.stop()

    timer = Repeating(scheduler, 1.0, tick)
    timer.start()
    scheduler.advance(5)
    assert ticks == [1]
    assert scheduler.pending == []


@pytest.mark.asyncio
async def test_asyncio_scheduler():
    fired = asyncio.Event()
    handle = AsyncioScheduler().call_later(0.01, fired.set)
    await asyncio.wait_for(fired.wait(), 1)
    handle.cancel()
