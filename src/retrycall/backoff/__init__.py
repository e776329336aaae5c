r"""Backoff strategies for delays between tries.

This package provides the backoff strategies used to compute how long to
wait before the next try: no wait, fixed, exponential, Fibonacci, random,
and random exponential.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ExponentialBackoff",
    "FibonacciBackoff",
    "FixedBackoff",
    "NoWaitBackoff",
    "RandomBackoff",
    "RandomExponentialBackoff",
]

from retrycall.backoff.base import BaseBackoffStrategy
from retrycall.backoff.exponential import ExponentialBackoff
from retrycall.backoff.fibonacci import FibonacciBackoff
from retrycall.backoff.fixed import FixedBackoff
from retrycall.backoff.no_wait import NoWaitBackoff
from retrycall.backoff.randomized import RandomBackoff, RandomExponentialBackoff
