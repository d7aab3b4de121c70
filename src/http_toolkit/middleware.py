"""Middleware role contracts.

A middleware is classified by the hooks it exposes rather than by a base
class. One object may implement several roles; the pipeline buckets it once per
role.

* :class:`RequestMiddleware` observes the outgoing request (side effects only).
* :class:`RequestTransformerMiddleware` returns the request seen downstream.
* :class:`ResponseMiddleware` returns the response seen upstream.
* :class:`AsyncMiddleware` wraps the rest of the pipeline through ``next``.
"""

from __future__ import annotations

from typing import Awaitable, Protocol, Union, runtime_checkable

import httpx

from .types import Handler, MiddlewareFunction


@runtime_checkable
class RequestMiddleware(Protocol):
    """Side-effect-only hook run before the request is sent, in declaration order."""

    def on_request(self, request: httpx.Request) -> None:
        ...


@runtime_checkable
class RequestTransformerMiddleware(Protocol):
    """Replaces the outgoing request; the last declared transformer runs first."""

    def transform_request(
        self, request: httpx.Request
    ) -> Union[httpx.Request, Awaitable[httpx.Request]]:
        ...


@runtime_checkable
class ResponseMiddleware(Protocol):
    """Replaces the incoming response; the last declared runs first."""

    def on_response(
        self, response: httpx.Response
    ) -> Union[httpx.Response, Awaitable[httpx.Response]]:
        ...


@runtime_checkable
class AsyncMiddleware(Protocol):
    """Wraps the remaining pipeline; may call ``next`` zero or more times."""

    async def handle(self, request: httpx.Request, next: Handler) -> httpx.Response:
        ...


Middleware = Union[
    RequestMiddleware,
    RequestTransformerMiddleware,
    ResponseMiddleware,
    AsyncMiddleware,
    MiddlewareFunction,
]


__all__ = [
    "AsyncMiddleware",
    "Middleware",
    "RequestMiddleware",
    "RequestTransformerMiddleware",
    "ResponseMiddleware",
]
