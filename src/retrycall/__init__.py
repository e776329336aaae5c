r"""retrycall - Retry execution engine for fallible calls.

This package runs an arbitrary fallible operation repeatedly under a
configurable policy until it succeeds, the retry budget is exhausted,
or an exception the policy does not allow to retry is raised.

Key Features:
    - Builder validating the retry configuration
    - Backoff strategies: NoWait, Fixed, Exponential, Fibonacci, Random,
      and RandomExponential
    - Exception policies: retry on any, fail on any, retry on specific
      exception types
    - Telemetry of each call (tries, timing, outcome) in ``CallResults``
    - Listeners notified after a failed try and before the next one
    - Declarative retry metadata with the ``retry_method`` decorator
    - Sync and asyncio executors

Example:
    ```pycon
    >>> from retrycall import CallExecutor, RetryConfigBuilder
    >>> config = (
    ...     RetryConfigBuilder()
    ...     .retry_on_specific_exceptions(ConnectionError)
    ...     .with_max_number_of_tries(5)
    ...     .with_delay_between_tries(0.5)
    ...     .with_exponential_backoff()
    ...     .build()
    ... )
    >>> results = CallExecutor(config).execute(lambda: "pong")
    >>> results.result
    'pong'

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncCallExecutor",
    "BackoffStrategyKind",
    "CallExecutor",
    "CallResults",
    "InvalidRetryConfigError",
    "InvalidRetryMethodError",
    "RetriesExhaustedError",
    "RetryCallError",
    "RetryConfig",
    "RetryConfigBuilder",
    "TimeUnit",
    "UnexpectedError",
    "__version__",
    "retry_method",
]

from importlib.metadata import PackageNotFoundError, version

from retrycall.builder import RetryConfigBuilder
from retrycall.config import RetryConfig, TimeUnit
from retrycall.exceptions import (
    InvalidRetryConfigError,
    InvalidRetryMethodError,
    RetriesExhaustedError,
    RetryCallError,
    UnexpectedError,
)
from retrycall.executor import CallExecutor
from retrycall.executor_async import AsyncCallExecutor
from retrycall.method import BackoffStrategyKind, retry_method
from retrycall.results import CallResults

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
