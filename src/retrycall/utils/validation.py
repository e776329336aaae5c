r"""Parameter validation utilities.

This module provides small validation functions shared by the backoff
strategies and the retry configuration. They all raise ``ValueError``
with a message naming the offending parameter.
"""

from __future__ import annotations

__all__ = [
    "validate_attempt",
    "validate_max_delay",
    "validate_non_negative",
    "validate_positive_int",
]


def validate_attempt(attempt: int) -> None:
    """Validate a 1-indexed try number.

    Args:
        attempt: The try number to check.

    Raises:
        ValueError: If attempt is lower than 1.

    Example:
        ```pycon
        >>> from retrycall.utils.validation import validate_attempt
        >>> validate_attempt(1)
        >>> validate_attempt(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: attempt must be >= 1, got 0

        ```
    """
    if attempt < 1:
        msg = f"attempt must be >= 1, got {attempt}"
        raise ValueError(msg)


def validate_non_negative(name: str, value: float) -> None:
    """Validate that a numeric parameter is >= 0.

    Args:
        name: The parameter name used in the error message.
        value: The value to check.

    Raises:
        ValueError: If value is negative.

    Example:
        ```pycon
        >>> from retrycall.utils.validation import validate_non_negative
        >>> validate_non_negative("delay", 0.0)
        >>> validate_non_negative("delay", 2.5)

        ```
    """
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ValueError(msg)


def validate_max_delay(max_delay: float | None) -> None:
    """Validate an optional delay cap.

    Args:
        max_delay: The cap in seconds, or ``None`` for no cap.

    Raises:
        ValueError: If max_delay is set and not positive.
    """
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be positive if specified, got {max_delay}"
        raise ValueError(msg)


def validate_positive_int(name: str, value: int) -> None:
    """Validate that an integer parameter is >= 1.

    Args:
        name: The parameter name used in the error message.
        value: The value to check.

    Raises:
        ValueError: If value is not an integer or is lower than 1.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{name} must be an integer, got {value!r}"
        raise ValueError(msg)
    if value < 1:
        msg = f"{name} must be >= 1, got {value}"
        raise ValueError(msg)
