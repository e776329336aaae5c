r"""Declarative retry metadata attached to functions.

The ``retry_method`` decorator attaches a ``RetryMethod`` record to a
function without changing its behavior. ``CallExecutor.execute_method``
reads the record, maps it to a ``RetryConfig`` and runs the function
through the retry loop.

Example:
    ```pycon
    >>> from retrycall import CallExecutor
    >>> from retrycall.method import BackoffStrategyKind, TimeUnit, retry_method
    >>> @retry_method(
    ...     max_number_of_tries=3,
    ...     delay=0,
    ...     time_unit=TimeUnit.MILLISECONDS,
    ...     retry_on_exceptions=(ConnectionError,),
    ...     backoff_strategy=BackoffStrategyKind.NO_WAIT,
    ... )
    ... def fetch(key):
    ...     return key.upper()
    ...
    >>> CallExecutor().execute_method(fetch, "abc").result
    'ABC'

    ```
"""

from __future__ import annotations

__all__ = [
    "RETRY_METHOD_ATTRIBUTE",
    "BackoffStrategyKind",
    "RetryMethod",
    "TimeUnit",
    "get_retry_method",
    "retry_method",
]

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

from retrycall.backoff import (
    ExponentialBackoff,
    FibonacciBackoff,
    FixedBackoff,
    NoWaitBackoff,
    RandomBackoff,
    RandomExponentialBackoff,
)
from retrycall.builder import RetryConfigBuilder
from retrycall.config import TimeUnit
from retrycall.exceptions import InvalidRetryMethodError

if TYPE_CHECKING:
    from collections.abc import Callable

    from retrycall.backoff.base import BaseBackoffStrategy
    from retrycall.config import RetryConfig

F = TypeVar("F", bound="Callable[..., Any]")

RETRY_METHOD_ATTRIBUTE = "__retry_method__"


class BackoffStrategyKind(enum.Enum):
    """Selector of the backoff strategy of a retry method."""

    EXPONENTIAL = "exponential"
    FIBONACCI = "fibonacci"
    FIXED = "fixed"
    NO_WAIT = "no_wait"
    RANDOM = "random"
    RANDOM_EXPONENTIAL = "random_exponential"

    def create_strategy(self) -> BaseBackoffStrategy:
        """Instantiate the strategy selected by this kind."""
        return _STRATEGY_FACTORIES[self]()


_STRATEGY_FACTORIES: dict[BackoffStrategyKind, Callable[[], BaseBackoffStrategy]] = {
    BackoffStrategyKind.EXPONENTIAL: ExponentialBackoff,
    BackoffStrategyKind.FIBONACCI: FibonacciBackoff,
    BackoffStrategyKind.FIXED: FixedBackoff,
    BackoffStrategyKind.NO_WAIT: NoWaitBackoff,
    BackoffStrategyKind.RANDOM: RandomBackoff,
    BackoffStrategyKind.RANDOM_EXPONENTIAL: RandomExponentialBackoff,
}


@dataclass(frozen=True)
class RetryMethod:
    """Retry metadata of a function.

    Attributes:
        max_number_of_tries: Maximum number of tries.
        delay: Base delay between tries, in ``time_unit``.
        time_unit: Unit of ``delay``.
        retry_on_exceptions: Retryable exception types. Empty means the
            first exception ends the call.
        backoff_strategy: Selected backoff strategy.
    """

    max_number_of_tries: int
    delay: float
    time_unit: TimeUnit = TimeUnit.SECONDS
    retry_on_exceptions: tuple[type[BaseException], ...] = ()
    backoff_strategy: BackoffStrategyKind = BackoffStrategyKind.FIXED

    def to_config(self) -> RetryConfig:
        """Map the metadata to a validated retry configuration.

        Raises:
            InvalidRetryConfigError: If the metadata values are out of
                range.
        """
        builder = (
            RetryConfigBuilder()
            .with_max_number_of_tries(self.max_number_of_tries)
            .with_delay_between_tries(self.delay, self.time_unit)
            .with_backoff_strategy(self.backoff_strategy.create_strategy())
        )
        if self.retry_on_exceptions:
            builder.retry_on_specific_exceptions(*self.retry_on_exceptions)
        else:
            builder.fail_on_any_exception()
        return builder.build()


def retry_method(
    max_number_of_tries: int,
    delay: float,
    time_unit: TimeUnit = TimeUnit.SECONDS,
    retry_on_exceptions: tuple[type[BaseException], ...] = (),
    backoff_strategy: BackoffStrategyKind = BackoffStrategyKind.FIXED,
) -> Callable[[F], F]:
    """Attach retry metadata to a function.

    The function itself is returned unchanged; run it with
    ``CallExecutor.execute_method`` to apply the retries.

    Args:
        max_number_of_tries: Maximum number of tries.
        delay: Base delay between tries, in ``time_unit``.
        time_unit: Unit of ``delay``. Defaults to seconds.
        retry_on_exceptions: Retryable exception types.
        backoff_strategy: Selected backoff strategy. Defaults to fixed.

    Returns:
        The decorator.
    """
    record = RetryMethod(
        max_number_of_tries=max_number_of_tries,
        delay=delay,
        time_unit=time_unit,
        retry_on_exceptions=tuple(retry_on_exceptions),
        backoff_strategy=backoff_strategy,
    )

    def decorator(func: F) -> F:
        setattr(func, RETRY_METHOD_ATTRIBUTE, record)
        return func

    return decorator


def get_retry_method(func: Callable[..., Any]) -> RetryMethod:
    """Get the retry metadata of a function.

    Raises:
        InvalidRetryMethodError: If the function was not decorated with
            ``retry_method``.
    """
    record = getattr(func, RETRY_METHOD_ATTRIBUTE, None)
    if not isinstance(record, RetryMethod):
        msg = (
            f"{getattr(func, '__qualname__', func)!r} must be decorated with "
            "@retry_method to be executed as a retry method"
        )
        raise InvalidRetryMethodError(msg)
    return record
