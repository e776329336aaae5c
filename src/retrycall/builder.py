r"""Builder assembling validated retry configurations.

``RetryConfigBuilder`` accumulates the configuration choices, enforces
that only one exception strategy and only one backoff strategy are
chosen, and checks at build time that every required value is set.

Example:
    ```pycon
    >>> from retrycall import RetryConfigBuilder
    >>> config = (
    ...     RetryConfigBuilder()
    ...     .retry_on_specific_exceptions(ConnectionError, TimeoutError)
    ...     .with_max_number_of_tries(3)
    ...     .with_delay_between_tries(0.5)
    ...     .with_exponential_backoff()
    ...     .build()
    ... )
    >>> config.max_number_of_tries
    3

    ```
"""

from __future__ import annotations

__all__ = [
    "CAN_ONLY_SPECIFY_ONE_BACKOFF_STRAT_ERROR_MSG",
    "CAN_ONLY_SPECIFY_ONE_EXCEPTION_STRAT_ERROR_MSG",
    "MUST_SPECIFY_BACKOFF_ERROR_MSG",
    "MUST_SPECIFY_DELAY_ERROR_MSG",
    "MUST_SPECIFY_MAX_TRIES_ERROR_MSG",
    "RetryConfigBuilder",
]

import logging
from typing import TYPE_CHECKING

from retrycall.backoff import (
    ExponentialBackoff,
    FibonacciBackoff,
    FixedBackoff,
    NoWaitBackoff,
    RandomBackoff,
    RandomExponentialBackoff,
)
from retrycall.config import (
    DEFAULT_DELAY_BETWEEN_RETRIES,
    DEFAULT_MAX_NUMBER_OF_TRIES,
    RetryConfig,
    TimeUnit,
    to_seconds,
)
from retrycall.exceptions import InvalidRetryConfigError
from retrycall.policy import (
    ExceptionPolicy,
    FailOnAnyException,
    RetryOnAnyException,
    RetryOnSpecificExceptions,
)
from retrycall.utils.validation import validate_non_negative, validate_positive_int

if TYPE_CHECKING:
    from datetime import timedelta

    from retrycall.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)

MUST_SPECIFY_BACKOFF_ERROR_MSG = "Retry config must specify a backoff strategy!"
MUST_SPECIFY_MAX_TRIES_ERROR_MSG = "Retry config must specify a maximum number of tries!"
MUST_SPECIFY_DELAY_ERROR_MSG = "Retry config must specify the delay between retries!"
CAN_ONLY_SPECIFY_ONE_BACKOFF_STRAT_ERROR_MSG = (
    "Retry config cannot specify more than one backoff strategy!"
)
CAN_ONLY_SPECIFY_ONE_EXCEPTION_STRAT_ERROR_MSG = (
    "Retry config cannot specify more than one exception strategy!"
)


class RetryConfigBuilder:
    """Builder of ``RetryConfig`` objects.

    Every ``with_*`` and exception strategy method returns the builder so
    calls can be chained. Choosing a second exception strategy or a second
    backoff strategy raises ``InvalidRetryConfigError``. Setting the
    maximum number of tries or the delay twice keeps the last value.

    Args:
        validation_enabled: If ``False``, no rule is checked, neither
            when choosing strategies nor in ``build``. Useful to build
            partial configurations.
    """

    def __init__(self, validation_enabled: bool = True) -> None:
        self._validation_enabled = validation_enabled
        self._max_number_of_tries: int | None = None
        self._delay_between_retries: float | None = None
        self._backoff_strategy: BaseBackoffStrategy | None = None
        self._exception_policy: ExceptionPolicy | None = None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}("
            f"max_number_of_tries={self._max_number_of_tries}, "
            f"delay_between_retries={self._delay_between_retries}, "
            f"backoff_strategy={self._backoff_strategy!r}, "
            f"exception_policy={self._exception_policy!r}, "
            f"validation_enabled={self._validation_enabled})"
        )

    @classmethod
    def new_config(cls, validation_enabled: bool = True) -> RetryConfigBuilder:
        """Create a new empty builder."""
        return cls(validation_enabled=validation_enabled)

    @property
    def validation_enabled(self) -> bool:
        """Indicate if the configuration rules are checked."""
        return self._validation_enabled

    @validation_enabled.setter
    def validation_enabled(self, enabled: bool) -> None:
        self._validation_enabled = enabled

    ###############################
    #     Exception strategy      #
    ###############################

    def retry_on_any_exception(self) -> RetryConfigBuilder:
        """Retry the operation whatever exception it raises."""
        return self._set_exception_policy(RetryOnAnyException())

    def fail_on_any_exception(self) -> RetryConfigBuilder:
        """Stop at the first exception raised by the operation."""
        return self._set_exception_policy(FailOnAnyException())

    def retry_on_specific_exceptions(
        self, *exceptions: type[BaseException]
    ) -> RetryConfigBuilder:
        """Retry the operation only on the given exception types.

        Subclasses of the given types are retried too.

        Args:
            *exceptions: The retryable exception types.
        """
        return self._set_exception_policy(RetryOnSpecificExceptions(exceptions))

    def _set_exception_policy(self, policy: ExceptionPolicy) -> RetryConfigBuilder:
        if self._validation_enabled and self._exception_policy is not None:
            raise InvalidRetryConfigError(CAN_ONLY_SPECIFY_ONE_EXCEPTION_STRAT_ERROR_MSG)
        self._exception_policy = policy
        return self

    ###############################
    #      Tries and delays       #
    ###############################

    def with_max_number_of_tries(self, max_number_of_tries: int) -> RetryConfigBuilder:
        """Set the maximum number of tries, the first one included."""
        self._max_number_of_tries = max_number_of_tries
        return self

    def with_delay_between_tries(
        self, delay: float | timedelta, unit: TimeUnit = TimeUnit.SECONDS
    ) -> RetryConfigBuilder:
        """Set the base delay between tries.

        Args:
            delay: The delay, as an amount of ``unit`` or a
                ``timedelta``.
            unit: The unit of a numeric delay. Defaults to seconds.

        Example:
            ```pycon
            >>> from retrycall import RetryConfigBuilder, TimeUnit
            >>> builder = RetryConfigBuilder().with_delay_between_tries(250, TimeUnit.MILLISECONDS)
            >>> builder.with_fixed_backoff().with_max_number_of_tries(2).build().delay_between_retries
            0.25

            ```
        """
        self._delay_between_retries = to_seconds(delay, unit)
        return self

    ###############################
    #      Backoff strategy       #
    ###############################

    def with_backoff_strategy(self, strategy: BaseBackoffStrategy) -> RetryConfigBuilder:
        """Use a custom backoff strategy."""
        if self._validation_enabled and self._backoff_strategy is not None:
            raise InvalidRetryConfigError(CAN_ONLY_SPECIFY_ONE_BACKOFF_STRAT_ERROR_MSG)
        self._backoff_strategy = strategy
        return self

    def with_fixed_backoff(self) -> RetryConfigBuilder:
        return self.with_backoff_strategy(FixedBackoff())

    def with_exponential_backoff(self) -> RetryConfigBuilder:
        return self.with_backoff_strategy(ExponentialBackoff())

    def with_fibonacci_backoff(self) -> RetryConfigBuilder:
        return self.with_backoff_strategy(FibonacciBackoff())

    def with_no_wait_backoff(self) -> RetryConfigBuilder:
        return self.with_backoff_strategy(NoWaitBackoff())

    def with_random_backoff(self) -> RetryConfigBuilder:
        return self.with_backoff_strategy(RandomBackoff())

    def with_random_exponential_backoff(self) -> RetryConfigBuilder:
        return self.with_backoff_strategy(RandomExponentialBackoff())

    ###############################
    #            Build            #
    ###############################

    def build(self) -> RetryConfig:
        """Build the retry configuration.

        Returns:
            The assembled configuration. The exception policy defaults
            to ``FailOnAnyException`` when none was chosen.

        Raises:
            InvalidRetryConfigError: If validation is enabled and the
                backoff strategy, the maximum number of tries or the
                delay is missing or out of range.
        """
        self._validate()
        policy = self._exception_policy
        if policy is None:
            logger.debug("No exception strategy specified, failing on any exception")
            policy = FailOnAnyException()
        return RetryConfig(
            max_number_of_tries=self._max_number_of_tries,
            delay_between_retries=self._delay_between_retries,
            backoff_strategy=self._backoff_strategy,
            exception_policy=policy,
        )

    def _validate(self) -> None:
        if not self._validation_enabled:
            return
        if self._backoff_strategy is None:
            raise InvalidRetryConfigError(MUST_SPECIFY_BACKOFF_ERROR_MSG)
        if self._max_number_of_tries is None:
            raise InvalidRetryConfigError(MUST_SPECIFY_MAX_TRIES_ERROR_MSG)
        if self._delay_between_retries is None:
            raise InvalidRetryConfigError(MUST_SPECIFY_DELAY_ERROR_MSG)
        try:
            validate_positive_int("max_number_of_tries", self._max_number_of_tries)
            validate_non_negative("delay_between_retries", self._delay_between_retries)
        except ValueError as exc:
            raise InvalidRetryConfigError(str(exc)) from exc

    ###############################
    #           Presets           #
    ###############################

    @classmethod
    def fixed_backoff_5_tries_10_sec(cls) -> RetryConfigBuilder:
        """Fixed backoff, 5 tries, 10 seconds between tries, retry on
        any exception."""
        return (
            cls()
            .retry_on_any_exception()
            .with_max_number_of_tries(DEFAULT_MAX_NUMBER_OF_TRIES)
            .with_delay_between_tries(DEFAULT_DELAY_BETWEEN_RETRIES)
            .with_fixed_backoff()
        )

    @classmethod
    def exponential_backoff_5_tries_5_sec(cls) -> RetryConfigBuilder:
        """Exponential backoff, 5 tries, 5 seconds base delay, retry on
        any exception."""
        return (
            cls()
            .retry_on_any_exception()
            .with_max_number_of_tries(5)
            .with_delay_between_tries(5)
            .with_exponential_backoff()
        )

    @classmethod
    def fibo_backoff_7_tries_5_sec(cls) -> RetryConfigBuilder:
        """Fibonacci backoff, 7 tries, 5 seconds base delay, retry on
        any exception."""
        return (
            cls()
            .retry_on_any_exception()
            .with_max_number_of_tries(7)
            .with_delay_between_tries(5)
            .with_fibonacci_backoff()
        )

    @classmethod
    def random_exp_backoff_10_tries_60_sec(cls) -> RetryConfigBuilder:
        """Random exponential backoff, 10 tries, 60 seconds base delay,
        retry on any exception."""
        return (
            cls()
            .retry_on_any_exception()
            .with_max_number_of_tries(10)
            .with_delay_between_tries(1, TimeUnit.MINUTES)
            .with_random_exponential_backoff()
        )
