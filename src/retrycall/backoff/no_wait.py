r"""No-wait backoff strategy."""

from __future__ import annotations

__all__ = ["NoWaitBackoff"]

from retrycall.backoff.base import BaseBackoffStrategy
from retrycall.utils.validation import validate_attempt


class NoWaitBackoff(BaseBackoffStrategy):
    """Backoff strategy that retries immediately.

    The base delay of the retry configuration is ignored.

    Example:
        ```pycon
        >>> from retrycall.backoff import NoWaitBackoff
        >>> backoff = NoWaitBackoff()
        >>> backoff.calculate(1, 10.0)
        0.0
        >>> backoff.calculate(7, 10.0)
        0.0

        ```
    """

    def calculate(self, attempt: int, base_delay: float) -> float:  # noqa: ARG002
        validate_attempt(attempt)
        return 0.0
