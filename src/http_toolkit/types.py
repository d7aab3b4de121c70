"""Common data types used across the http_toolkit package."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol, Union

import httpx
from pydantic import BaseModel, Field

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]
Transport = Handler
MiddlewareFunction = Callable[[httpx.Request, Handler], Awaitable[httpx.Response]]
DelayLike = Union[timedelta, float, int]


class ErrorPredicate(Protocol):
    """Decides whether a failed attempt should be retried."""

    def __call__(
        self, error: Exception, attempt: int, next_delay: timedelta
    ) -> bool:  # pragma: no cover - protocol definition
        ...


class ResponsePredicate(Protocol):
    """Decides whether a received response should be retried."""

    def __call__(
        self, response: httpx.Response, attempt: int, next_delay: timedelta
    ) -> bool:  # pragma: no cover - protocol definition
        ...


class SleepFunction(Protocol):
    """Awaitable sleep taking seconds, e.g. ``anyio.sleep``."""

    def __call__(self, seconds: float) -> Awaitable[None]:  # pragma: no cover - protocol definition
        ...


class HttpLogEventKind(str, Enum):
    """Phases reported by the logger middleware."""

    REQUEST = "request"
    RESPONSE = "response"
    ERROR = "error"


class HttpLogEvent(BaseModel):
    """A single request/response/error observation emitted to log sinks."""

    kind: HttpLogEventKind
    method: str
    url: str
    status_code: Optional[int] = None
    elapsed_ms: Optional[float] = None
    headers: Optional[dict[str, str]] = None
    body: Optional[str] = None
    error: Optional[str] = Field(
        default=None,
        description="repr() of the exception for error events.",
    )


def to_timedelta(value: DelayLike) -> timedelta:
    """Coerce seconds (int/float) or a timedelta into a timedelta."""

    if isinstance(value, timedelta):
        return value
    return timedelta(seconds=value)


def timedelta_micros(value: timedelta) -> int:
    """Return the exact integer number of microseconds in ``value``."""

    return (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds


MapperFunction = Callable[[Any], Any]
