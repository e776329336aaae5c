r"""Retry configuration and default values.

``RetryConfig`` is the immutable value object consumed by the executors.
It is normally assembled with ``RetryConfigBuilder`` which enforces the
configuration rules.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_DELAY_BETWEEN_RETRIES",
    "DEFAULT_MAX_NUMBER_OF_TRIES",
    "RetryConfig",
    "TimeUnit",
    "to_seconds",
]

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from retrycall.policy import ExceptionPolicy, FailOnAnyException, RetryOnAnyException

if TYPE_CHECKING:
    from retrycall.backoff.base import BaseBackoffStrategy

# Values of the default configuration used by ``CallExecutor()``.
DEFAULT_MAX_NUMBER_OF_TRIES = 5
DEFAULT_DELAY_BETWEEN_RETRIES = 10.0


class TimeUnit(enum.Enum):
    """Units accepted for delays, valued in seconds."""

    MILLISECONDS = 0.001
    SECONDS = 1.0
    MINUTES = 60.0
    HOURS = 3600.0
    DAYS = 86400.0


def to_seconds(delay: float | timedelta, unit: TimeUnit = TimeUnit.SECONDS) -> float:
    """Convert a delay to seconds.

    Args:
        delay: The delay, either an amount of ``unit`` or a
            ``timedelta``. ``unit`` is ignored for a ``timedelta``.
        unit: The unit of a numeric delay.

    Returns:
        The delay in seconds.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from retrycall.config import TimeUnit, to_seconds
        >>> to_seconds(1500, TimeUnit.MILLISECONDS)
        1.5
        >>> to_seconds(timedelta(minutes=2))
        120.0

        ```
    """
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay) * unit.value


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_number_of_tries: Maximum number of tries, the first one
            included.
        delay_between_retries: Base delay between tries in seconds.
            The backoff strategy turns it into the actual wait.
        backoff_strategy: Strategy computing the wait before each retry.
        exception_policy: Policy deciding which exceptions are retried.

    ``None`` values only occur in configurations built with validation
    disabled.
    """

    max_number_of_tries: int | None = None
    delay_between_retries: float | None = None
    backoff_strategy: BaseBackoffStrategy | None = None
    exception_policy: ExceptionPolicy = field(default_factory=FailOnAnyException)

    @property
    def retry_on_any_exception(self) -> bool:
        """Indicate if every exception is retried."""
        return isinstance(self.exception_policy, RetryOnAnyException)
