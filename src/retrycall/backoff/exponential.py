r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from retrycall.backoff.base import BaseBackoffStrategy
from retrycall.utils.validation import validate_attempt, validate_max_delay


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: base_delay * (2 ** (attempt - 1)), with optional
    max_delay cap.

    Args:
        max_delay: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from retrycall.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff()
        >>> backoff.calculate(1, 0.5)  # After the first try
        0.5
        >>> backoff.calculate(2, 0.5)
        1.0
        >>> backoff.calculate(3, 0.5)
        2.0
        >>> # With max_delay cap
        >>> backoff = ExponentialBackoff(max_delay=5.0)
        >>> backoff.calculate(11, 1.0)  # Would be 1024.0, but capped
        5.0

        ```
    """

    def __init__(self, max_delay: float | None = None) -> None:
        validate_max_delay(max_delay)
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_delay={self.max_delay})"

    def calculate(self, attempt: int, base_delay: float) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The number of the try that just failed (1-indexed).
            base_delay: The base delay in seconds.

        Returns:
            The calculated delay: base_delay * (2 ** (attempt - 1)),
            capped at max_delay if set.
        """
        validate_attempt(attempt)
        delay = base_delay * (2 ** (attempt - 1))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
