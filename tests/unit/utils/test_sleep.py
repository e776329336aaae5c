r"""Unit tests for the interruptible sleepers."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from retrycall.utils.sleep import AsyncInterruptibleSleep, InterruptibleSleep

########################################
#     Tests for InterruptibleSleep     #
########################################


def test_sleep_zero_returns_immediately() -> None:
    assert not InterruptibleSleep().sleep(0.0)


def test_sleep_negative_returns_immediately() -> None:
    assert not InterruptibleSleep().sleep(-1.0)


def test_sleep_waits() -> None:
    start = time.monotonic()
    assert not InterruptibleSleep().sleep(0.05)
    assert time.monotonic() - start >= 0.04


def test_sleep_interrupted_from_other_thread() -> None:
    sleeper = InterruptibleSleep()
    timer = threading.Timer(0.05, sleeper.interrupt)
    timer.start()
    start = time.monotonic()
    try:
        assert sleeper.sleep(30.0)
    finally:
        timer.cancel()
    assert time.monotonic() - start < 10.0


def test_sleep_interrupt_before_wait_is_discarded() -> None:
    sleeper = InterruptibleSleep()
    sleeper.interrupt()
    start = time.monotonic()
    assert not sleeper.sleep(0.05)
    assert time.monotonic() - start >= 0.04


def test_sleep_interrupt_after_zero_wait_is_discarded() -> None:
    sleeper = InterruptibleSleep()
    sleeper.interrupt()
    assert not sleeper.sleep(0.0)
    assert not sleeper.sleep(0.01)


#############################################
#     Tests for AsyncInterruptibleSleep     #
#############################################


@pytest.mark.asyncio
async def test_async_sleep_zero_returns_immediately() -> None:
    assert not await AsyncInterruptibleSleep().sleep(0.0)


@pytest.mark.asyncio
async def test_async_sleep_waits() -> None:
    assert not await AsyncInterruptibleSleep().sleep(0.01)


@pytest.mark.asyncio
async def test_async_sleep_interrupted() -> None:
    sleeper = AsyncInterruptibleSleep()
    task = asyncio.ensure_future(sleeper.sleep(30.0))
    await asyncio.sleep(0.01)
    sleeper.interrupt()
    assert await asyncio.wait_for(task, timeout=5.0)


@pytest.mark.asyncio
async def test_async_sleep_interrupt_before_wait_is_discarded() -> None:
    sleeper = AsyncInterruptibleSleep()
    sleeper.interrupt()
    assert not await sleeper.sleep(0.01)


@pytest.mark.asyncio
async def test_async_sleep_interrupted_from_other_thread() -> None:
    sleeper = AsyncInterruptibleSleep()
    task = asyncio.ensure_future(sleeper.sleep(30.0))
    await asyncio.sleep(0.01)
    thread = threading.Thread(target=sleeper.interrupt)
    thread.start()
    thread.join()
    assert await asyncio.wait_for(task, timeout=5.0)


def test_async_sleep_reused_across_event_loops() -> None:
    sleeper = AsyncInterruptibleSleep()
    assert not asyncio.run(sleeper.sleep(0.01))
    assert not asyncio.run(sleeper.sleep(0.01))


@pytest.mark.asyncio
async def test_async_sleep_cancelled() -> None:
    task = asyncio.ensure_future(AsyncInterruptibleSleep().sleep(30.0))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
