r"""Randomized backoff strategies.

Both strategies sample the wait uniformly between zero and an upper
bound, which spreads the retries of many concurrent callers instead of
having them all retry at the same moment.
"""

from __future__ import annotations

__all__ = ["RandomBackoff", "RandomExponentialBackoff"]

import random

from retrycall.backoff.base import BaseBackoffStrategy
from retrycall.utils.validation import validate_attempt, validate_max_delay


class RandomBackoff(BaseBackoffStrategy):
    """Random backoff strategy.

    Samples the delay uniformly in ``[0, base_delay]``.

    Args:
        rng: Optional random number generator. The module-level
            generator of ``random`` is used if not specified.

    Example:
        ```pycon
        >>> import random
        >>> from retrycall.backoff import RandomBackoff
        >>> backoff = RandomBackoff(rng=random.Random(42))
        >>> 0.0 <= backoff.calculate(1, 2.0) <= 2.0
        True

        ```
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng

    def _uniform(self, upper: float) -> float:
        if self._rng is not None:
            return self._rng.uniform(0, upper)
        return random.uniform(0, upper)  # noqa: S311

    def calculate(self, attempt: int, base_delay: float) -> float:
        """Calculate random backoff delay.

        Args:
            attempt: The number of the try that just failed (1-indexed,
                unused).
            base_delay: The upper bound of the delay in seconds.

        Returns:
            A delay sampled uniformly in ``[0, base_delay]``.
        """
        validate_attempt(attempt)
        return self._uniform(base_delay)


class RandomExponentialBackoff(RandomBackoff):
    """Random exponential backoff strategy.

    Samples the delay uniformly in
    ``[0, base_delay * 2 ** (attempt - 1)]``. The upper bound is capped at
    ``max_delay`` if set.

    Args:
        max_delay: Optional maximum delay cap in seconds.
        rng: Optional random number generator.

    Example:
        ```pycon
        >>> import random
        >>> from retrycall.backoff import RandomExponentialBackoff
        >>> backoff = RandomExponentialBackoff(rng=random.Random(42))
        >>> 0.0 <= backoff.calculate(3, 1.0) <= 4.0
        True

        ```
    """

    def __init__(
        self, max_delay: float | None = None, rng: random.Random | None = None
    ) -> None:
        super().__init__(rng=rng)
        validate_max_delay(max_delay)
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_delay={self.max_delay})"

    def calculate(self, attempt: int, base_delay: float) -> float:
        validate_attempt(attempt)
        upper = base_delay * (2 ** (attempt - 1))
        if self.max_delay is not None:
            upper = min(upper, self.max_delay)
        return self._uniform(upper)
