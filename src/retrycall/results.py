r"""Telemetry record of one retried call."""

from __future__ import annotations

__all__ = ["CallResults", "get_call_name"]

import functools
from dataclasses import dataclass
from typing import Any


@dataclass
class CallResults:
    """Telemetry accumulated while executing one call.

    A fresh instance is created by each ``execute`` and only the
    executor driving that call mutates it. Listeners receive it while the
    call is in progress; treat it as read-only once returned.

    Attributes:
        call_name: Diagnostic label of the operation.
        start_time: Timestamp (``time.time()``) when the call started.
        end_time: Timestamp when the call finished, ``None`` while it
            is in progress.
        total_tries: Number of tries made so far.
        successful: Whether a try succeeded.
        result: The value returned by the successful try.
        total_elapsed_duration: Seconds elapsed since ``start_time`` at
            the last update.
        last_exception: The exception raised by the most recent failed
            try, if any.
    """

    call_name: str
    start_time: float
    end_time: float | None = None
    total_tries: int = 0
    successful: bool = False
    result: Any = None
    total_elapsed_duration: float = 0.0
    last_exception: BaseException | None = None


def get_call_name(operation: Any) -> str:
    """Compute a diagnostic label for an operation.

    Args:
        operation: The callable to describe.

    Returns:
        The qualified name of the callable (of the wrapped function for
        a ``functools.partial``), or its ``repr`` if it has none.

    Example:
        ```pycon
        >>> import functools
        >>> from retrycall.results import get_call_name
        >>> get_call_name(len)
        'len'
        >>> get_call_name(functools.partial(int, "42"))
        'int'

        ```
    """
    while isinstance(operation, functools.partial):
        operation = operation.func
    name = getattr(operation, "__qualname__", None)
    if isinstance(name, str):
        return name
    return repr(operation)
