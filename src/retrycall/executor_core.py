r"""Shared core logic for the call executors.

This module provides the helpers used by both ``CallExecutor`` and
``AsyncCallExecutor``: results accounting, exception classification,
wait computation and the creation of the terminal errors.
"""

from __future__ import annotations

__all__ = [
    "check_config",
    "compute_wait",
    "create_exhausted_error",
    "create_unexpected_error",
    "finalize_results",
    "new_results",
    "refresh_results",
    "should_retry",
]

import logging
import time
from typing import TYPE_CHECKING, Any

from retrycall.exceptions import (
    InvalidRetryConfigError,
    RetriesExhaustedError,
    UnexpectedError,
)
from retrycall.results import CallResults, get_call_name
from retrycall.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from retrycall.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


def check_config(config: RetryConfig) -> None:
    """Check that a configuration can drive a call.

    Configurations built with validation disabled may miss values that
    the loop needs.

    Raises:
        InvalidRetryConfigError: If the maximum number of tries or the
            backoff strategy is missing.
    """
    if config.max_number_of_tries is None:
        msg = "Cannot execute a call without a maximum number of tries"
        raise InvalidRetryConfigError(msg)
    if config.backoff_strategy is None:
        msg = "Cannot execute a call without a backoff strategy"
        raise InvalidRetryConfigError(msg)


def new_results(operation: Any) -> CallResults:
    """Create the results of a call that starts now."""
    return CallResults(call_name=get_call_name(operation), start_time=time.time())


def refresh_results(
    results: CallResults,
    tries: int,
    successful: bool,
    exception: BaseException | None = None,
) -> None:
    """Update the try count, the outcome and the elapsed time.

    Args:
        results: The results to update.
        tries: The number of tries made so far.
        successful: Whether a try succeeded.
        exception: The exception of the last failed try, if any.
    """
    results.total_tries = tries
    results.successful = successful
    results.total_elapsed_duration = time.time() - results.start_time
    if exception is not None:
        results.last_exception = exception


def finalize_results(
    results: CallResults,
    tries: int,
    successful: bool,
    exception: BaseException | None = None,
) -> None:
    """Refresh the results one last time and record the end time."""
    refresh_results(results, tries=tries, successful=successful, exception=exception)
    results.end_time = time.time()
    results.total_elapsed_duration = results.end_time - results.start_time


def should_retry(config: RetryConfig, exception: Exception, attempt: int) -> bool:
    """Classify the exception of a failed try with the exception policy.

    Args:
        config: The retry configuration.
        exception: The exception raised by the operation.
        attempt: The number of the failed try (1-indexed).

    Returns:
        ``True`` if the exception is retryable.
    """
    retryable = config.exception_policy.is_retryable(exception)
    logger.debug(
        f"Try {attempt}/{config.max_number_of_tries} raised "
        f"{type(exception).__qualname__}: {exception} "
        f"({'retryable' if retryable else 'not retryable'})"
    )
    return retryable


def compute_wait(config: RetryConfig, results: CallResults, attempt: int) -> float:
    """Compute the wait before the try that follows ``attempt``.

    Args:
        config: The retry configuration.
        results: The results of the call in progress, used for logging.
        attempt: The number of the failed try (1-indexed).

    Returns:
        The wait in seconds.
    """
    wait_time = config.backoff_strategy.calculate(attempt, config.delay_between_retries or 0.0)
    log_structured(
        logger,
        logging.DEBUG,
        f"Waiting {wait_time:.2f}s before try {attempt + 1}/{config.max_number_of_tries} "
        f"of '{results.call_name}'",
        call_name=results.call_name,
        attempt=attempt,
        wait_time=wait_time,
    )
    return wait_time


def create_unexpected_error(
    exception: Exception, results: CallResults, attempt: int
) -> UnexpectedError:
    """Create the error ending a call on a non-retryable exception.

    The results are finalized before the error is created.
    """
    finalize_results(results, tries=attempt, successful=False, exception=exception)
    log_structured(
        logger,
        logging.DEBUG,
        f"Call '{results.call_name}' failed on try {attempt} with a non-retryable "
        f"{type(exception).__qualname__}",
        call_name=results.call_name,
        attempt=attempt,
    )
    return UnexpectedError(
        cause=exception,
        results=results,
        message=(
            f"Call '{results.call_name}' raised an unexpected exception on try "
            f"{attempt}: {exception!r}"
        ),
    )


def create_exhausted_error(
    results: CallResults, max_number_of_tries: int
) -> RetriesExhaustedError:
    """Create the error ending a call after the last retryable failure.

    The results are finalized before the error is created.
    """
    finalize_results(results, tries=max_number_of_tries, successful=False)
    message = f"Call '{results.call_name}' failed after {max_number_of_tries} tries!"
    log_structured(
        logger,
        logging.DEBUG,
        message,
        call_name=results.call_name,
        total_tries=max_number_of_tries,
        total_time=results.total_elapsed_duration,
    )
    return RetriesExhaustedError(message, results)
