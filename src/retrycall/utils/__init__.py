r"""Utility functions shared by the retry engine: waits, logging and
parameter validation."""

from __future__ import annotations

__all__ = [
    "AsyncInterruptibleSleep",
    "InterruptibleSleep",
    "StructuredFormatter",
    "log_structured",
]

from retrycall.utils.sleep import AsyncInterruptibleSleep, InterruptibleSleep
from retrycall.utils.structured_logging import StructuredFormatter, log_structured
