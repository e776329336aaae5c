r"""Unit tests for retry method metadata."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from retrycall import (
    BackoffStrategyKind,
    CallExecutor,
    InvalidRetryConfigError,
    InvalidRetryMethodError,
    RetriesExhaustedError,
    RetryConfigBuilder,
    TimeUnit,
    UnexpectedError,
    retry_method,
)
from retrycall.backoff import (
    ExponentialBackoff,
    FibonacciBackoff,
    FixedBackoff,
    NoWaitBackoff,
    RandomBackoff,
    RandomExponentialBackoff,
)
from retrycall.method import RETRY_METHOD_ATTRIBUTE, RetryMethod, get_retry_method
from retrycall.policy import FailOnAnyException, RetryOnSpecificExceptions

#########################################
#     Tests for BackoffStrategyKind     #
#########################################


@pytest.mark.parametrize(
    ("kind", "cls"),
    [
        (BackoffStrategyKind.EXPONENTIAL, ExponentialBackoff),
        (BackoffStrategyKind.FIBONACCI, FibonacciBackoff),
        (BackoffStrategyKind.FIXED, FixedBackoff),
        (BackoffStrategyKind.NO_WAIT, NoWaitBackoff),
        (BackoffStrategyKind.RANDOM, RandomBackoff),
        (BackoffStrategyKind.RANDOM_EXPONENTIAL, RandomExponentialBackoff),
    ],
)
def test_backoff_strategy_kind_create_strategy(kind: BackoffStrategyKind, cls: type) -> None:
    assert type(kind.create_strategy()) is cls


#################################
#     Tests for RetryMethod     #
#################################


def test_retry_method_defaults() -> None:
    record = RetryMethod(max_number_of_tries=3, delay=1)
    assert record.time_unit == TimeUnit.SECONDS
    assert record.retry_on_exceptions == ()
    assert record.backoff_strategy == BackoffStrategyKind.FIXED


def test_retry_method_to_config() -> None:
    config = RetryMethod(
        max_number_of_tries=4,
        delay=500,
        time_unit=TimeUnit.MILLISECONDS,
        retry_on_exceptions=(ConnectionError, TimeoutError),
        backoff_strategy=BackoffStrategyKind.EXPONENTIAL,
    ).to_config()

    assert config.max_number_of_tries == 4
    assert config.delay_between_retries == 0.5
    assert isinstance(config.backoff_strategy, ExponentialBackoff)
    assert config.exception_policy == RetryOnSpecificExceptions([ConnectionError, TimeoutError])


def test_retry_method_to_config_without_exceptions_fails_on_any() -> None:
    config = RetryMethod(max_number_of_tries=2, delay=0).to_config()
    assert config.exception_policy == FailOnAnyException()
    assert isinstance(config.backoff_strategy, FixedBackoff)


def test_retry_method_to_config_invalid() -> None:
    with pytest.raises(InvalidRetryConfigError, match=r"max_number_of_tries must be >= 1"):
        RetryMethod(max_number_of_tries=0, delay=1).to_config()


##################################
#     Tests for retry_method     #
##################################


def test_retry_method_decorator_attaches_record() -> None:
    @retry_method(max_number_of_tries=2, delay=3, retry_on_exceptions=[KeyError])
    def lookup() -> int:
        return 1

    assert lookup() == 1
    assert getattr(lookup, RETRY_METHOD_ATTRIBUTE) == RetryMethod(
        max_number_of_tries=2, delay=3, retry_on_exceptions=(KeyError,)
    )
    assert get_retry_method(lookup) is getattr(lookup, RETRY_METHOD_ATTRIBUTE)


def test_get_retry_method_not_decorated() -> None:
    def plain() -> None:
        pass

    with pytest.raises(InvalidRetryMethodError, match=r"must be decorated with @retry_method"):
        get_retry_method(plain)


#####################################
#     Tests for execute_method      #
#####################################


def test_execute_method_with_arguments(mock_sleep: Mock) -> None:
    mock = Mock(side_effect=[ConnectionError(), ConnectionError(), "pong"])

    @retry_method(
        max_number_of_tries=5,
        delay=1,
        time_unit=TimeUnit.MINUTES,
        retry_on_exceptions=(ConnectionError,),
        backoff_strategy=BackoffStrategyKind.EXPONENTIAL,
    )
    def ping(host: str, port: int = 80) -> str:
        return f"{host}:{port} {mock()}"

    results = CallExecutor().execute_method(ping, "localhost", port=8080)

    assert results.successful
    assert results.total_tries == 3
    assert results.result == "localhost:8080 pong"
    assert [c.args for c in mock_sleep.call_args_list] == [(60.0,), (120.0,)]


def test_execute_method_honours_backoff_selector(mock_sleep: Mock) -> None:
    @retry_method(
        max_number_of_tries=2,
        delay=5,
        retry_on_exceptions=(ValueError,),
        backoff_strategy=BackoffStrategyKind.NO_WAIT,
    )
    def parse() -> int:
        raise ValueError

    with pytest.raises(RetriesExhaustedError):
        CallExecutor().execute_method(parse)
    mock_sleep.assert_called_once_with(0.0)


def test_execute_method_without_exceptions_fails_on_first() -> None:
    mock = Mock(side_effect=ValueError("bad"))

    @retry_method(max_number_of_tries=3, delay=0)
    def parse() -> None:
        mock()

    with pytest.raises(UnexpectedError):
        CallExecutor().execute_method(parse)
    assert mock.call_count == 1


def test_execute_method_keeps_executor_config() -> None:
    config = RetryConfigBuilder.fixed_backoff_5_tries_10_sec().build()
    executor = CallExecutor(config)

    @retry_method(max_number_of_tries=1, delay=0)
    def noop() -> None:
        pass

    executor.execute_method(noop)
    assert executor.config is config


def test_execute_method_on_bound_method() -> None:
    class Client:
        @retry_method(max_number_of_tries=2, delay=0, retry_on_exceptions=(KeyError,))
        def get(self, key: str) -> str:
            return key * 2

    results = CallExecutor().execute_method(Client().get, "ab")
    assert results.result == "abab"
    assert results.call_name.endswith("Client.get")


def test_execute_method_not_decorated() -> None:
    with pytest.raises(InvalidRetryMethodError):
        CallExecutor().execute_method(len, "abc")
