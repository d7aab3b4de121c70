"""Backoff strategies mapping a 1-indexed attempt number to a retry delay."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Callable, Optional

from .types import DelayLike, timedelta_micros, to_timedelta

DEFAULT_INITIAL_DELAY = timedelta(milliseconds=500)


class BackoffStrategy(ABC):
    """Computes the delay to wait before retrying a given attempt.

    Implementations must be free of mutable state so a single instance can be
    shared by concurrent requests.
    """

    @abstractmethod
    def get_delay(self, attempt: int) -> timedelta:
        """Return the delay for ``attempt`` (1 for the first attempt)."""


def _capped(micros: int, max_delay: Optional[timedelta]) -> timedelta:
    if max_delay is not None:
        micros = min(micros, timedelta_micros(max_delay))
    return timedelta(microseconds=micros)


class FixedBackoffStrategy(BackoffStrategy):
    """Waits the same amount of time before every retry."""

    def __init__(self, delay: DelayLike) -> None:
        self.delay = to_timedelta(delay)

    def get_delay(self, attempt: int) -> timedelta:
        return self.delay

    def __repr__(self) -> str:
        return f"FixedBackoffStrategy({self.delay!r})"


class LinearBackoffStrategy(BackoffStrategy):
    """Grows the delay by ``base_delay`` per attempt: 1x, 2x, 3x, ..."""

    def __init__(self, base_delay: DelayLike, *, max_delay: Optional[DelayLike] = None) -> None:
        self.base_delay = to_timedelta(base_delay)
        self.max_delay = to_timedelta(max_delay) if max_delay is not None else None

    def get_delay(self, attempt: int) -> timedelta:
        return _capped(timedelta_micros(self.base_delay) * attempt, self.max_delay)

    def __repr__(self) -> str:
        return f"LinearBackoffStrategy({self.base_delay!r}, max_delay={self.max_delay!r})"


class ExponentialBackoffStrategy(BackoffStrategy):
    """Doubles the delay on every attempt starting at ``initial_delay``.

    With the default 500ms this yields 500ms, 1s, 2s, 4s, 8s, ... The product
    is computed on integer microseconds so large attempt counts do not drift.
    """

    def __init__(
        self,
        initial_delay: DelayLike = DEFAULT_INITIAL_DELAY,
        *,
        max_delay: Optional[DelayLike] = None,
    ) -> None:
        self.initial_delay = to_timedelta(initial_delay)
        self.max_delay = to_timedelta(max_delay) if max_delay is not None else None

    def get_delay(self, attempt: int) -> timedelta:
        micros = timedelta_micros(self.initial_delay) * (2 ** (attempt - 1))
        return _capped(micros, self.max_delay)

    def __repr__(self) -> str:
        return f"ExponentialBackoffStrategy({self.initial_delay!r}, max_delay={self.max_delay!r})"


class CallbackBackoffStrategy(BackoffStrategy):
    """Adapts a plain ``fn(attempt) -> delay`` callable."""

    def __init__(self, fn: Callable[[int], DelayLike]) -> None:
        self._fn = fn

    def get_delay(self, attempt: int) -> timedelta:
        return to_timedelta(self._fn(attempt))


class JitteredBackoffStrategy(BackoffStrategy):
    """Adds up to ``jitter`` of random delay on top of another strategy."""

    def __init__(
        self,
        inner: BackoffStrategy,
        jitter: DelayLike,
        *,
        random_fn: Callable[[], float] = random.random,
    ) -> None:
        self.inner = inner
        self.jitter = to_timedelta(jitter)
        self._random = random_fn

    def get_delay(self, attempt: int) -> timedelta:
        extra = int(timedelta_micros(self.jitter) * self._random())
        return self.inner.get_delay(attempt) + timedelta(microseconds=extra)


__all__ = [
    "BackoffStrategy",
    "CallbackBackoffStrategy",
    "DEFAULT_INITIAL_DELAY",
    "ExponentialBackoffStrategy",
    "FixedBackoffStrategy",
    "JitteredBackoffStrategy",
    "LinearBackoffStrategy",
]
