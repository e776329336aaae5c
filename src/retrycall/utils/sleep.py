r"""Interruptible waits between tries.

The executors wait through these sleepers instead of calling
``time.sleep`` or ``asyncio.sleep`` directly so that a pending wait can
be cut short. An interrupted wait is not an error: the executor simply
moves on to the next try.
"""

from __future__ import annotations

__all__ = ["AsyncInterruptibleSleep", "InterruptibleSleep"]

import asyncio
import logging
import threading

logger: logging.Logger = logging.getLogger(__name__)


class InterruptibleSleep:
    """Blocking wait that another thread can interrupt.

    Only a wait in progress can be interrupted: an interruption
    requested while no wait is pending is discarded by the next wait.

    Example:
        ```pycon
        >>> from retrycall.utils.sleep import InterruptibleSleep
        >>> sleeper = InterruptibleSleep()
        >>> sleeper.interrupt()
        >>> sleeper.sleep(0.01)
        False

        ```
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def sleep(self, seconds: float) -> bool:
        """Wait for ``seconds`` unless interrupted.

        Args:
            seconds: The duration of the wait in seconds. Non-positive
                values return immediately.

        Returns:
            ``True`` if the wait was interrupted, otherwise ``False``.
        """
        self._event.clear()
        if seconds <= 0:
            return False
        interrupted = self._event.wait(seconds)
        if interrupted:
            logger.debug(f"Wait of {seconds:.2f}s interrupted, continuing with next try")
        return interrupted

    def interrupt(self) -> None:
        """Wake up the pending wait, if any."""
        self._event.set()


class AsyncInterruptibleSleep:
    """Cooperative wait that can be interrupted.

    Each wait uses its own ``asyncio.Event`` bound to the running loop,
    so a sleeper can serve several event loops one after the other.
    Only the interruption requested through ``interrupt`` is absorbed:
    cancelling the task running the wait still raises
    ``asyncio.CancelledError``.
    """

    def __init__(self) -> None:
        self._waiter: tuple[asyncio.AbstractEventLoop, asyncio.Event] | None = None

    async def sleep(self, seconds: float) -> bool:
        """Wait for ``seconds`` unless interrupted.

        Args:
            seconds: The duration of the wait in seconds.

        Returns:
            ``True`` if the wait was interrupted, otherwise ``False``.
        """
        if seconds <= 0:
            return False
        event = asyncio.Event()
        self._waiter = (asyncio.get_running_loop(), event)
        try:
            await asyncio.wait_for(event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        finally:
            self._waiter = None
        logger.debug(f"Wait of {seconds:.2f}s interrupted, continuing with next try")
        return True

    def interrupt(self) -> None:
        """Wake up the pending wait, if any.

        Safe to call from any thread. Does nothing when no wait is in
        progress.
        """
        waiter = self._waiter
        if waiter is None:
            return
        loop, event = waiter
        loop.call_soon_threadsafe(event.set)
