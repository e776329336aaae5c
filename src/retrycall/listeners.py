r"""Listeners notified around the retries of a call.

Two kinds of listener exist. An ``AfterFailedTryListener`` is notified
right after a try fails with a retryable exception, before the wait. A
``BeforeNextTryListener`` is notified after the wait, right before the
next try. Both receive the ``CallResults`` of the call in progress.

Example:
    ```pycon
    >>> from retrycall import CallExecutor, RetryConfigBuilder
    >>> from retrycall.listeners import AfterFailedTryListener
    >>> class PrintFailures(AfterFailedTryListener):
    ...     def immediately_after_failed_try(self, results):
    ...         print(f"try {results.total_tries} failed")
    ...
    >>> config = (
    ...     RetryConfigBuilder()
    ...     .retry_on_any_exception()
    ...     .with_max_number_of_tries(2)
    ...     .with_delay_between_tries(0)
    ...     .with_no_wait_backoff()
    ...     .build()
    ... )
    >>> executor = CallExecutor(config)
    >>> executor.register_retry_listener(PrintFailures())
    >>> attempts = iter([ValueError("boom"), "ok"])
    >>> def flaky():
    ...     item = next(attempts)
    ...     if isinstance(item, Exception):
    ...         raise item
    ...     return item
    ...
    >>> executor.execute(flaky).result
    try 1 failed
    'ok'

    ```
"""

from __future__ import annotations

__all__ = ["AfterFailedTryListener", "BeforeNextTryListener", "RetryListener"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retrycall.results import CallResults


class RetryListener(ABC):  # noqa: B024
    """Base class of the retry listeners."""


class AfterFailedTryListener(RetryListener):
    """Listener notified right after a retryable failure."""

    @abstractmethod
    def immediately_after_failed_try(self, results: CallResults) -> None:
        """Handle a failed try.

        Args:
            results: The telemetry of the call in progress.
        """


class BeforeNextTryListener(RetryListener):
    """Listener notified after the wait, right before the next try."""

    @abstractmethod
    def immediately_before_next_try(self, results: CallResults) -> None:
        """Handle the start of the next try.

        Args:
            results: The telemetry of the call in progress.
        """
