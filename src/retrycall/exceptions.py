r"""Exceptions raised by the retry engine.

Configuration problems surface at build time as
``InvalidRetryConfigError``. Problems with the wrapped operation surface at
call time as ``UnexpectedError`` (a failure the exception policy does not
allow to retry) or ``RetriesExhaustedError`` (the retry budget is used up).
"""

from __future__ import annotations

__all__ = [
    "InvalidRetryConfigError",
    "InvalidRetryMethodError",
    "RetriesExhaustedError",
    "RetryCallError",
    "UnexpectedError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retrycall.results import CallResults


class RetryCallError(Exception):
    """Base class of all the errors raised by ``retrycall``."""


class InvalidRetryConfigError(RetryCallError, ValueError):
    """Raised when a retry configuration breaks one of the builder rules.

    Example:
        ```pycon
        >>> from retrycall import RetryConfigBuilder
        >>> from retrycall.exceptions import InvalidRetryConfigError
        >>> try:
        ...     RetryConfigBuilder().with_fixed_backoff().with_no_wait_backoff()
        ... except InvalidRetryConfigError as exc:
        ...     print(exc)
        ...
        Retry config cannot specify more than one backoff strategy!

        ```
    """


class InvalidRetryMethodError(RetryCallError, TypeError):
    """Raised when a function without retry metadata is executed as a
    retry method."""


class RetriesExhaustedError(RetryCallError):
    """Raised when every allowed try failed with a retryable exception.

    Args:
        message: The error message.
        results: The telemetry accumulated during the call.

    Attributes:
        results: The final ``CallResults`` of the call, with
            ``successful=False`` and ``total_tries`` equal to the
            retry budget.
    """

    def __init__(self, message: str, results: CallResults) -> None:
        super().__init__(message)
        self.message = message
        self.results = results


class UnexpectedError(RetryCallError):
    """Raised when the operation fails with an exception that must not
    be retried.

    Args:
        cause: The exception raised by the operation.
        results: The telemetry accumulated up to the failing try.
        message: Optional error message. A message naming the cause is
            generated when omitted.

    Attributes:
        cause: The exception raised by the operation.
        results: The ``CallResults`` at the time of the failure.
    """

    def __init__(
        self,
        cause: BaseException,
        results: CallResults | None = None,
        message: str | None = None,
    ) -> None:
        if message is None:
            message = f"Unexpected exception: {cause!r}"
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.results = results
