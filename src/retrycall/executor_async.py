r"""Asynchronous call executor running the retry loop in asyncio.

Example:
    ```pycon
    >>> import asyncio
    >>> from retrycall import AsyncCallExecutor, RetryConfigBuilder
    >>> config = (
    ...     RetryConfigBuilder()
    ...     .retry_on_any_exception()
    ...     .with_max_number_of_tries(3)
    ...     .with_delay_between_tries(0)
    ...     .with_no_wait_backoff()
    ...     .build()
    ... )
    >>> async def fetch():
    ...     return "data"
    ...
    >>> asyncio.run(AsyncCallExecutor(config).execute(fetch)).result
    'data'

    ```
"""

from __future__ import annotations

__all__ = ["AsyncCallExecutor"]

import functools
import inspect
import logging
from typing import TYPE_CHECKING, Any

from retrycall.executor import BaseCallExecutor
from retrycall.executor_core import (
    check_config,
    compute_wait,
    create_exhausted_error,
    create_unexpected_error,
    finalize_results,
    new_results,
    refresh_results,
    should_retry,
)
from retrycall.method import get_retry_method
from retrycall.utils.sleep import AsyncInterruptibleSleep
from retrycall.utils.structured_logging import call_id_context

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from retrycall.config import RetryConfig
    from retrycall.results import CallResults

logger: logging.Logger = logging.getLogger(__name__)


class AsyncCallExecutor(BaseCallExecutor):
    """Execute an async callable, retrying it according to a retry
    configuration.

    Behaves like ``CallExecutor`` with cooperative waits. ``interrupt``
    cuts the pending wait short; cancelling the task is not absorbed and
    propagates ``asyncio.CancelledError``.

    Args:
        config: The retry configuration. Defaults to fixed backoff,
            5 tries, 10 seconds, retry on any exception.
        sleeper: The sleeper used for the waits.
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        *,
        sleeper: AsyncInterruptibleSleep | None = None,
    ) -> None:
        super().__init__(config)
        self.sleeper = sleeper if sleeper is not None else AsyncInterruptibleSleep()

    def interrupt(self) -> None:
        """Cut the pending wait short; the next try starts immediately.

        Does nothing when no wait is in progress. Safe to call from
        another thread.
        """
        self.sleeper.interrupt()

    async def execute(self, operation: Callable[[], Awaitable[Any]]) -> CallResults:
        """Execute ``operation`` until it succeeds, fails with a
        non-retryable exception, or the tries are exhausted.

        Args:
            operation: The zero-argument callable returning an
                awaitable. A plain return value is accepted too.

        Returns:
            The results of the call.

        Raises:
            UnexpectedError: If the operation raises an exception the
                exception policy does not allow to retry.
            RetriesExhaustedError: If every try failed with a retryable
                exception.
        """
        return await self._execute(operation, self.config)

    async def execute_method(
        self, func: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> CallResults:
        """Execute a function decorated with ``retry_method``.

        Raises:
            InvalidRetryMethodError: If ``func`` is not decorated.
        """
        config = get_retry_method(func).to_config()
        return await self._execute(functools.partial(func, *args, **kwargs), config)

    async def _execute(
        self, operation: Callable[[], Awaitable[Any] | Any], config: RetryConfig
    ) -> CallResults:
        check_config(config)
        max_tries = config.max_number_of_tries
        results = new_results(operation)
        last_error: Exception | None = None

        with call_id_context():
            for attempt in range(1, max_tries + 1):
                try:
                    value = operation()
                    if inspect.isawaitable(value):
                        value = await value
                except Exception as exc:
                    if not should_retry(config, exc, attempt):
                        raise create_unexpected_error(exc, results, attempt) from exc
                    last_error = exc
                    await self._handle_retry(config, results, attempt, exc)
                    continue

                finalize_results(results, tries=attempt, successful=True)
                results.result = value
                logger.debug(
                    f"Call '{results.call_name}' succeeded on try {attempt}/{max_tries} "
                    f"after {results.total_elapsed_duration:.2f}s"
                )
                return results

            raise create_exhausted_error(results, max_tries) from last_error

    async def _handle_retry(
        self, config: RetryConfig, results: CallResults, attempt: int, exc: Exception
    ) -> None:
        refresh_results(results, tries=attempt, successful=False, exception=exc)
        self._after_failed_try(results)
        if attempt >= config.max_number_of_tries:
            return
        await self.sleeper.sleep(compute_wait(config, results, attempt))
        self._before_next_try(results)
