r"""Structured logging utilities for machine-readable log output.

The executors tag every log record of a call with a call id stored in a
context variable, and log their retry events with structured fields
(``call_name``, ``attempt``, ``wait_time`` ...). With
``StructuredFormatter`` installed these records become JSON objects
that log aggregation systems can index.

Example:
    Enable structured logging for retrycall:

    ```python
    import logging
    from retrycall.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("retrycall")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "call_id_context",
    "clear_call_id",
    "get_call_id",
    "log_structured",
    "set_call_id",
]

import contextvars
import json
import logging
import time
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Generator

_call_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "retrycall_call_id", default=None
)

# Attributes every LogRecord has; anything else came through ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def get_call_id() -> str | None:
    """Get the id of the call in progress in the current context.

    Example:
        ```pycon
        >>> from retrycall.utils.structured_logging import get_call_id, set_call_id
        >>> set_call_id("call-1")
        >>> get_call_id()
        'call-1'

        ```
    """
    return _call_id.get()


def set_call_id(call_id: str) -> None:
    """Set the call id for the current context.

    The id is stored in a context variable, so it is isolated per thread
    and per asyncio task.
    """
    _call_id.set(call_id)


def clear_call_id() -> None:
    """Clear the call id for the current context."""
    _call_id.set(None)


@contextmanager
def call_id_context(call_id: str | None = None) -> Generator[str, None, None]:
    """Set a call id for the duration of a block.

    Args:
        call_id: The id to use. A random id is generated if not
            specified.

    Yields:
        The call id.

    Example:
        ```pycon
        >>> from retrycall.utils.structured_logging import call_id_context, get_call_id
        >>> with call_id_context("abc") as call_id:
        ...     get_call_id() == call_id
        ...
        True
        >>> get_call_id() is None
        True

        ```
    """
    token = _call_id.set(call_id or uuid.uuid4().hex)
    try:
        yield _call_id.get()
    finally:
        _call_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record is rendered as one JSON object with the fields
    ``timestamp`` (ISO 8601, UTC), ``level``, ``logger``, ``message``,
    ``module``, ``function`` and ``line``, plus ``call_id`` when a call is
    in progress, ``exception`` when the record carries exception info,
    and every field passed through ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        call_id = get_call_id()
        if call_id is not None:
            log_data["call_id"] = call_id
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value
        return json.dumps(log_data, default=repr)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002, N802
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.DEBUG``).
        message: Log message.
        **extra: Fields added to the record, rendered by
            ``StructuredFormatter``.
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, extra=extra, stacklevel=2)
