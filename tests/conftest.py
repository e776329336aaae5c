from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

from retrycall import RetryConfig, RetryConfigBuilder

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch the blocking sleeper to make tests run faster."""
    with patch("retrycall.utils.sleep.InterruptibleSleep.sleep", return_value=False) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[AsyncMock, None, None]:
    """Patch the asyncio sleeper to make tests run faster."""
    with patch(
        "retrycall.utils.sleep.AsyncInterruptibleSleep.sleep",
        new_callable=AsyncMock,
        return_value=False,
    ) as mock:
        yield mock


@pytest.fixture
def retry_any_config() -> RetryConfig:
    """Three tries, no delay, fixed backoff, retry on any exception."""
    return (
        RetryConfigBuilder()
        .retry_on_any_exception()
        .with_max_number_of_tries(3)
        .with_delay_between_tries(0)
        .with_fixed_backoff()
        .build()
    )
