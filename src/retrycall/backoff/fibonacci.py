r"""Fibonacci backoff strategy."""

from __future__ import annotations

__all__ = ["FibonacciBackoff"]

from retrycall.backoff.base import BaseBackoffStrategy
from retrycall.utils.validation import validate_attempt, validate_max_delay


class FibonacciBackoff(BaseBackoffStrategy):
    """Fibonacci backoff strategy.

    Calculates delay as: base_delay * fibonacci(attempt), with optional
    max_delay cap.

    The Fibonacci sequence (1, 1, 2, 3, 5, 8, 13, ...) grows slower than
    the powers of two, so the waits ramp up more gradually than with
    ``ExponentialBackoff``.

    Args:
        max_delay: Optional maximum delay cap in seconds. If specified,
            delays will not exceed this value.

    Example:
        ```pycon
        >>> from retrycall.backoff import FibonacciBackoff
        >>> backoff = FibonacciBackoff()
        >>> backoff.calculate(1, 1.0)  # 1.0 * fib(1)
        1.0
        >>> backoff.calculate(2, 1.0)  # 1.0 * fib(2)
        1.0
        >>> backoff.calculate(3, 1.0)  # 1.0 * fib(3)
        2.0
        >>> backoff.calculate(5, 1.0)  # 1.0 * fib(5)
        5.0
        >>> # With max_delay cap
        >>> backoff = FibonacciBackoff(max_delay=10.0)
        >>> backoff.calculate(11, 1.0)  # fib(11) = 89, but capped
        10.0

        ```
    """

    def __init__(self, max_delay: float | None = None) -> None:
        validate_max_delay(max_delay)
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_delay={self.max_delay})"

    @staticmethod
    def _fibonacci(n: int) -> int:
        """Calculate the nth Fibonacci number (1-indexed).

        Args:
            n: The position in the Fibonacci sequence (1-indexed).

        Returns:
            The nth Fibonacci number.
        """
        if n <= 0:
            return 0
        a, b = 0, 1
        for _ in range(n - 1):
            a, b = b, a + b
        return b

    def calculate(self, attempt: int, base_delay: float) -> float:
        validate_attempt(attempt)
        delay = base_delay * self._fibonacci(attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
