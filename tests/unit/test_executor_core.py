r"""Unit tests for the helpers shared by the executors."""

from __future__ import annotations

import time

import pytest

from retrycall import RetryConfig, RetryConfigBuilder
from retrycall.backoff import FibonacciBackoff
from retrycall.exceptions import RetriesExhaustedError, UnexpectedError
from retrycall.executor_core import (
    compute_wait,
    create_exhausted_error,
    create_unexpected_error,
    finalize_results,
    new_results,
    refresh_results,
    should_retry,
)
from retrycall.policy import RetryOnSpecificExceptions
from retrycall.results import CallResults


def operation() -> None:
    pass


def test_new_results() -> None:
    before = time.time()
    results = new_results(operation)
    assert results.call_name == "operation"
    assert results.start_time >= before
    assert results.total_tries == 0


def test_refresh_results() -> None:
    results = CallResults(call_name="op", start_time=time.time() - 2.0)
    error = ValueError()
    refresh_results(results, tries=2, successful=False, exception=error)
    assert results.total_tries == 2
    assert not results.successful
    assert results.last_exception is error
    assert results.total_elapsed_duration >= 2.0
    assert results.end_time is None


def test_finalize_results() -> None:
    results = CallResults(call_name="op", start_time=time.time())
    finalize_results(results, tries=1, successful=True)
    assert results.successful
    assert results.end_time is not None
    assert results.total_elapsed_duration == results.end_time - results.start_time


def test_should_retry() -> None:
    config = RetryConfig(
        max_number_of_tries=2, exception_policy=RetryOnSpecificExceptions([KeyError])
    )
    assert should_retry(config, KeyError("k"), 1)
    assert not should_retry(config, ValueError(), 1)


def test_compute_wait() -> None:
    config = (
        RetryConfigBuilder()
        .with_max_number_of_tries(7)
        .with_delay_between_tries(0.5)
        .with_backoff_strategy(FibonacciBackoff())
        .build()
    )
    results = CallResults(call_name="op", start_time=0.0)
    assert compute_wait(config, results, 5) == 2.5


def test_create_unexpected_error() -> None:
    results = CallResults(call_name="op", start_time=time.time())
    cause = KeyError("k")
    error = create_unexpected_error(cause, results, 3)
    assert isinstance(error, UnexpectedError)
    assert error.cause is cause
    assert error.results is results
    assert results.total_tries == 3
    assert results.end_time is not None
    assert str(error) == "Call 'op' raised an unexpected exception on try 3: KeyError('k')"


def test_create_exhausted_error() -> None:
    results = CallResults(call_name="op", start_time=time.time())
    error = create_exhausted_error(results, 4)
    assert isinstance(error, RetriesExhaustedError)
    assert str(error) == "Call 'op' failed after 4 tries!"
    assert results.total_tries == 4
    assert not results.successful


@pytest.mark.parametrize("level", ["DEBUG", "INFO"])
def test_compute_wait_logs(caplog: pytest.LogCaptureFixture, level: str) -> None:
    config = (
        RetryConfigBuilder()
        .with_max_number_of_tries(3)
        .with_delay_between_tries(1)
        .with_fixed_backoff()
        .build()
    )
    results = CallResults(call_name="op", start_time=0.0)
    with caplog.at_level(level, logger="retrycall"):
        compute_wait(config, results, 1)
    waiting = [record for record in caplog.records if "Waiting 1.00s" in record.getMessage()]
    if level == "DEBUG":
        assert len(waiting) == 1
        assert waiting[0].call_name == "op"
        assert waiting[0].wait_time == 1.0
    else:
        assert waiting == []
