r"""Synchronous call executor running the retry loop.

Example:
    ```pycon
    >>> from retrycall import CallExecutor, RetryConfigBuilder
    >>> config = (
    ...     RetryConfigBuilder()
    ...     .retry_on_any_exception()
    ...     .with_max_number_of_tries(3)
    ...     .with_delay_between_tries(0)
    ...     .with_fixed_backoff()
    ...     .build()
    ... )
    >>> results = CallExecutor(config).execute(lambda: 42)
    >>> results.successful, results.total_tries, results.result
    (True, 1, 42)

    ```
"""

from __future__ import annotations

__all__ = ["CallExecutor"]

import functools
import logging
from typing import TYPE_CHECKING, Any

from retrycall.builder import RetryConfigBuilder
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
from retrycall.listeners import AfterFailedTryListener, BeforeNextTryListener, RetryListener
from retrycall.method import get_retry_method
from retrycall.utils.sleep import InterruptibleSleep
from retrycall.utils.structured_logging import call_id_context

if TYPE_CHECKING:
    from collections.abc import Callable

    from retrycall.config import RetryConfig
    from retrycall.results import CallResults

logger: logging.Logger = logging.getLogger(__name__)


class BaseCallExecutor:
    """State shared by the sync and async executors: the configuration
    and the registered listeners."""

    def __init__(self, config: RetryConfig | None = None) -> None:
        if config is None:
            config = RetryConfigBuilder.fixed_backoff_5_tries_10_sec().build()
        self.config = config
        self.after_failed_try_listener: AfterFailedTryListener | None = None
        self.before_next_try_listener: BeforeNextTryListener | None = None

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config!r})"

    def register_retry_listener(self, listener: RetryListener) -> None:
        """Register a listener.

        A listener replaces the previously registered listener of the
        same kind. A listener implementing both kinds is registered for
        both.

        Args:
            listener: The listener to register.

        Raises:
            TypeError: If the listener is of no known kind.
        """
        recognized = False
        if isinstance(listener, AfterFailedTryListener):
            self.after_failed_try_listener = listener
            recognized = True
        if isinstance(listener, BeforeNextTryListener):
            self.before_next_try_listener = listener
            recognized = True
        if not recognized:
            msg = f"Tried to register an unrecognized retry listener: {listener!r}"
            raise TypeError(msg)

    def _after_failed_try(self, results: CallResults) -> None:
        if self.after_failed_try_listener is not None:
            self.after_failed_try_listener.immediately_after_failed_try(results)

    def _before_next_try(self, results: CallResults) -> None:
        if self.before_next_try_listener is not None:
            self.before_next_try_listener.immediately_before_next_try(results)


class CallExecutor(BaseCallExecutor):
    """Execute a callable, retrying it according to a retry
    configuration.

    Tries are made one after the other on the calling thread. Between two
    tries the executor waits for the duration computed by the backoff
    strategy; ``interrupt`` cuts the pending wait short.

    Args:
        config: The retry configuration. Defaults to fixed backoff,
            5 tries, 10 seconds, retry on any exception.
        sleeper: The sleeper used for the waits. A new
            ``InterruptibleSleep`` is created if not specified.

    Attributes:
        config: The retry configuration.
        sleeper: The sleeper used for the waits.
    """

    def __init__(
        self, config: RetryConfig | None = None, *, sleeper: InterruptibleSleep | None = None
    ) -> None:
        super().__init__(config)
        self.sleeper = sleeper if sleeper is not None else InterruptibleSleep()

    def interrupt(self) -> None:
        """Cut the pending wait short; the next try starts immediately.

        Does nothing when no wait is in progress.
        """
        self.sleeper.interrupt()

    def execute(self, operation: Callable[[], Any]) -> CallResults:
        """Execute ``operation`` until it succeeds, fails with a
        non-retryable exception, or the tries are exhausted.

        Args:
            operation: The zero-argument callable to execute.

        Returns:
            The results of the call, with ``successful=True`` and the
            value returned by the operation.

        Raises:
            UnexpectedError: If the operation raises an exception the
                exception policy does not allow to retry.
            RetriesExhaustedError: If every try failed with a retryable
                exception.
            InvalidRetryConfigError: If the configuration lacks the
                maximum number of tries or the backoff strategy.
        """
        return self._execute(operation, self.config)

    def execute_method(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> CallResults:
        """Execute a function decorated with ``retry_method``.

        The retry configuration is built from the metadata of the
        function; the executor configuration is left untouched.

        Args:
            func: The decorated function.
            *args: Positional arguments for the function.
            **kwargs: Keyword arguments for the function.

        Returns:
            The results of the call.

        Raises:
            InvalidRetryMethodError: If ``func`` is not decorated.
        """
        config = get_retry_method(func).to_config()
        return self._execute(functools.partial(func, *args, **kwargs), config)

    def _execute(self, operation: Callable[[], Any], config: RetryConfig) -> CallResults:
        check_config(config)
        max_tries = config.max_number_of_tries
        results = new_results(operation)
        last_error: Exception | None = None

        with call_id_context():
            for attempt in range(1, max_tries + 1):
                try:
                    value = operation()
                except Exception as exc:
                    if not should_retry(config, exc, attempt):
                        raise create_unexpected_error(exc, results, attempt) from exc
                    last_error = exc
                    self._handle_retry(config, results, attempt, exc)
                    continue

                finalize_results(results, tries=attempt, successful=True)
                results.result = value
                logger.debug(
                    f"Call '{results.call_name}' succeeded on try {attempt}/{max_tries} "
                    f"after {results.total_elapsed_duration:.2f}s"
                )
                return results

            raise create_exhausted_error(results, max_tries) from last_error

    def _handle_retry(
        self, config: RetryConfig, results: CallResults, attempt: int, exc: Exception
    ) -> None:
        refresh_results(results, tries=attempt, successful=False, exception=exc)
        self._after_failed_try(results)
        if attempt >= config.max_number_of_tries:
            return
        self.sleeper.sleep(compute_wait(config, results, attempt))
        self._before_next_try(results)
