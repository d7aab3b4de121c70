"""Retry middleware with pluggable backoff and decision callbacks."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Iterable, Optional

import anyio
import httpx

from ..backoff import BackoffStrategy, ExponentialBackoffStrategy
from ..copier import copy_request, drain_response
from ..types import ErrorPredicate, Handler, ResponsePredicate, SleepFunction

if TYPE_CHECKING:
    from ..config import RetryConfig

LOGGER = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({408, 425, 429, 500, 502, 503, 504})


class RetryMiddleware:
    """Re-sends a request when it fails or when its response asks for it.

    Every attempt after the first sends a fresh copy of the original request.
    Exceptions are retried up to ``max_retries`` times unless ``when_error``
    says otherwise; responses are only retried when ``when_response`` returns
    true. Both callbacks receive the 1-indexed attempt that just finished and
    the delay that will be waited before the next one.
    """

    def __init__(
        self,
        max_retries: int = 3,
        *,
        strategy: Optional[BackoffStrategy] = None,
        when_error: Optional[ErrorPredicate] = None,
        when_response: Optional[ResponsePredicate] = None,
        sleep: Optional[SleepFunction] = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.strategy = strategy or ExponentialBackoffStrategy()
        self.when_error = when_error
        self.when_response = when_response
        self._sleep = sleep or anyio.sleep

    @classmethod
    def from_config(
        cls,
        config: "RetryConfig",
        *,
        when_error: Optional[ErrorPredicate] = None,
        when_response: Optional[ResponsePredicate] = None,
        sleep: Optional[SleepFunction] = None,
    ) -> "RetryMiddleware":
        """Build a middleware from :class:`~http_toolkit.config.RetryConfig`.

        ``retry_statuses`` in the config supply ``when_response`` unless one is
        passed explicitly.
        """

        if when_response is None and config.retry_statuses:
            when_response = retry_on_status(config.retry_statuses)
        return cls(
            config.max_retries,
            strategy=config.backoff.build(),
            when_error=when_error,
            when_response=when_response,
            sleep=sleep,
        )

    async def handle(self, request: httpx.Request, next: Handler) -> httpx.Response:
        attempt = 1
        while True:
            delay = self.strategy.get_delay(attempt)
            current = request if attempt == 1 else copy_request(request)

            try:
                response = await next(current)
            except Exception as exc:
                if attempt > self.max_retries:
                    raise
                if self.when_error is not None and not self.when_error(exc, attempt, delay):
                    raise
                LOGGER.debug(
                    "Retrying %s %s after %r in %.3fs (attempt %d/%d)",
                    request.method,
                    request.url,
                    exc,
                    delay.total_seconds(),
                    attempt,
                    self.max_retries + 1,
                )
                await self._wait(delay)
                attempt += 1
                continue

            if (
                attempt <= self.max_retries
                and self.when_response is not None
                and self.when_response(response, attempt, delay)
            ):
                await drain_response(response)
                LOGGER.debug(
                    "Retrying %s %s after status %d in %.3fs (attempt %d/%d)",
                    request.method,
                    request.url,
                    response.status_code,
                    delay.total_seconds(),
                    attempt,
                    self.max_retries + 1,
                )
                await self._wait(delay)
                attempt += 1
                continue
            return response

    async def _wait(self, delay: timedelta) -> None:
        seconds = delay.total_seconds()
        if seconds > 0:
            await self._sleep(seconds)

    def __repr__(self) -> str:
        return f"RetryMiddleware(max_retries={self.max_retries}, strategy={self.strategy!r})"


def retry_on_status(codes: Iterable[int] = RETRYABLE_STATUS_CODES) -> ResponsePredicate:
    """Return a ``when_response`` callback that retries the given status codes."""

    retryable = frozenset(codes)

    def predicate(response: httpx.Response, attempt: int, next_delay: timedelta) -> bool:
        return response.status_code in retryable

    return predicate


def retry_on_transport_errors() -> ErrorPredicate:
    """Return a ``when_error`` callback that only retries ``httpx.TransportError``."""

    def predicate(error: Exception, attempt: int, next_delay: timedelta) -> bool:
        return isinstance(error, httpx.TransportError)

    return predicate


__all__ = [
    "RETRYABLE_STATUS_CODES",
    "RetryMiddleware",
    "retry_on_status",
    "retry_on_transport_errors",
]
