r"""Fixed backoff strategy."""

from __future__ import annotations

__all__ = ["FixedBackoff"]

from retrycall.backoff.base import BaseBackoffStrategy
from retrycall.utils.validation import validate_attempt


class FixedBackoff(BaseBackoffStrategy):
    """Fixed backoff strategy.

    Waits the base delay before every retry, regardless of the try
    number. This is the strategy of the default retry configuration.

    Example:
        ```pycon
        >>> from retrycall.backoff import FixedBackoff
        >>> backoff = FixedBackoff()
        >>> backoff.calculate(1, 2.5)  # After the first try
        2.5
        >>> backoff.calculate(10, 2.5)  # After the tenth try
        2.5

        ```
    """

    def calculate(self, attempt: int, base_delay: float) -> float:
        """Calculate fixed backoff delay.

        Args:
            attempt: The number of the try that just failed (1-indexed,
                unused).
            base_delay: The base delay in seconds.

        Returns:
            The base delay.
        """
        validate_attempt(attempt)
        return base_delay
