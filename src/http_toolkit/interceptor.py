"""Interceptors: request/response/error hooks adapted into the pipeline."""

from __future__ import annotations

from typing import Awaitable, Callable, Optional, Protocol, Union

import httpx

from .types import Handler
from .utils import maybe_await

RequestHook = Callable[[httpx.Request], Union[httpx.Request, Awaitable[httpx.Request]]]
ResponseHook = Callable[[httpx.Response], Union[httpx.Response, Awaitable[httpx.Response]]]
ErrorHook = Callable[[Exception], Union[httpx.Response, Awaitable[httpx.Response]]]


class Interceptor(Protocol):
    """Hooks around a single send.

    ``on_error`` either returns a response to recover with or raises.
    """

    def on_request(
        self, request: httpx.Request
    ) -> Union[httpx.Request, Awaitable[httpx.Request]]:  # pragma: no cover - protocol
        ...

    def on_response(
        self, response: httpx.Response
    ) -> Union[httpx.Response, Awaitable[httpx.Response]]:  # pragma: no cover - protocol
        ...

    def on_error(
        self, error: Exception
    ) -> Union[httpx.Response, Awaitable[httpx.Response]]:  # pragma: no cover - protocol
        ...


class FunctionalInterceptor:
    """Interceptor built from optional callbacks; missing ones pass through."""

    def __init__(
        self,
        *,
        on_request: Optional[RequestHook] = None,
        on_response: Optional[ResponseHook] = None,
        on_error: Optional[ErrorHook] = None,
    ) -> None:
        self._on_request = on_request
        self._on_response = on_response
        self._on_error = on_error

    def on_request(self, request: httpx.Request) -> Union[httpx.Request, Awaitable[httpx.Request]]:
        if self._on_request is not None:
            return self._on_request(request)
        return request

    def on_response(
        self, response: httpx.Response
    ) -> Union[httpx.Response, Awaitable[httpx.Response]]:
        if self._on_response is not None:
            return self._on_response(response)
        return response

    def on_error(self, error: Exception) -> Union[httpx.Response, Awaitable[httpx.Response]]:
        if self._on_error is not None:
            return self._on_error(error)
        raise error


class InterceptorMiddleware:
    """Runs an :class:`Interceptor` as an async middleware.

    Only errors raised further down the pipeline reach ``on_error``; failures
    inside ``on_request`` or ``on_response`` propagate unchanged.
    """

    def __init__(self, interceptor: Interceptor) -> None:
        self.interceptor = interceptor

    async def handle(self, request: httpx.Request, next: Handler) -> httpx.Response:
        request = await maybe_await(self.interceptor.on_request(request))
        try:
            response = await next(request)
        except Exception as exc:
            return await maybe_await(self.interceptor.on_error(exc))
        return await maybe_await(self.interceptor.on_response(response))

    def __repr__(self) -> str:
        return f"InterceptorMiddleware({self.interceptor!r})"


__all__ = [
    "FunctionalInterceptor",
    "Interceptor",
    "InterceptorMiddleware",
]
