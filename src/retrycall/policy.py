r"""Exception policies deciding whether a failed try may be retried.

A retry configuration holds exactly one exception policy. The executor
asks it once per failed try; a failure the policy rejects ends the call
immediately with ``UnexpectedError``.
"""

from __future__ import annotations

__all__ = [
    "ExceptionPolicy",
    "FailOnAnyException",
    "RetryOnAnyException",
    "RetryOnSpecificExceptions",
]

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

logger: logging.Logger = logging.getLogger(__name__)


class ExceptionPolicy(ABC):
    """Decides whether an exception raised by the operation is retryable."""

    @abstractmethod
    def is_retryable(self, exception: BaseException) -> bool:
        """Indicate if the try that raised ``exception`` may be retried.

        Args:
            exception: The exception raised by the operation.

        Returns:
            ``True`` if another try is allowed, otherwise ``False``.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class RetryOnAnyException(ExceptionPolicy):
    """Policy that retries every exception.

    Example:
        ```pycon
        >>> from retrycall.policy import RetryOnAnyException
        >>> RetryOnAnyException().is_retryable(KeyError("x"))
        True

        ```
    """

    def is_retryable(self, exception: BaseException) -> bool:  # noqa: ARG002
        return True


class FailOnAnyException(ExceptionPolicy):
    """Policy that never retries: the first failure ends the call.

    Example:
        ```pycon
        >>> from retrycall.policy import FailOnAnyException
        >>> FailOnAnyException().is_retryable(KeyError("x"))
        False

        ```
    """

    def is_retryable(self, exception: BaseException) -> bool:  # noqa: ARG002
        return False


class RetryOnSpecificExceptions(ExceptionPolicy):
    """Policy that retries only the configured exception types.

    An exception is retryable if it is an instance of one of the
    configured types, i.e. its type is the same as or a subclass of a
    configured type. A configured subclass does not make its base
    classes retryable: with ``ConnectionError`` configured, a raised
    ``OSError`` is not retried.

    Args:
        exceptions: The retryable exception types.

    Raises:
        TypeError: If an item is not an exception type.

    Example:
        ```pycon
        >>> from retrycall.policy import RetryOnSpecificExceptions
        >>> policy = RetryOnSpecificExceptions([ConnectionError])
        >>> policy.is_retryable(ConnectionResetError())
        True
        >>> policy.is_retryable(OSError())
        False

        ```
    """

    def __init__(self, exceptions: Iterable[type[BaseException]]) -> None:
        exceptions = frozenset(exceptions)
        for exc_type in exceptions:
            if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
                msg = f"retryable exceptions must be exception types, got {exc_type!r}"
                raise TypeError(msg)
        self.exceptions: frozenset[type[BaseException]] = exceptions
        self._types = tuple(exceptions)

    def __repr__(self) -> str:
        names = ", ".join(sorted(exc.__qualname__ for exc in self.exceptions))
        return f"{self.__class__.__qualname__}({{{names}}})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RetryOnSpecificExceptions):
            return False
        return self.exceptions == other.exceptions

    def __hash__(self) -> int:
        return hash((type(self), self.exceptions))

    def is_retryable(self, exception: BaseException) -> bool:
        retryable = isinstance(exception, self._types)
        if not retryable:
            logger.debug(
                f"{type(exception).__qualname__} does not match any retryable "
                f"exception type of {self!r}"
            )
        return retryable
