r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy computes how long to wait before the next try
    from the number of the try that just failed and the base delay of
    the retry configuration. It never sleeps itself: waiting is the job
    of the executor.
    """

    @abstractmethod
    def calculate(self, attempt: int, base_delay: float) -> float:
        """Calculate the wait before the try that follows ``attempt``.

        Args:
            attempt: The number of the try that just failed (1-indexed).
                For example, attempt=1 is the first try.
            base_delay: The delay between tries of the retry
                configuration, in seconds.

        Returns:
            The wait in seconds before the next try. Never negative.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"
