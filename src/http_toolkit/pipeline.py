"""Compose middleware into a single request handler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

import httpx

from .middleware import (
    AsyncMiddleware,
    Middleware,
    RequestMiddleware,
    RequestTransformerMiddleware,
    ResponseMiddleware,
)
from .types import Handler, MiddlewareFunction
from .utils import maybe_await

LOGGER = logging.getLogger(__name__)


class FunctionMiddleware:
    """Adapts a plain ``async fn(request, next)`` into an :class:`AsyncMiddleware`."""

    def __init__(self, fn: MiddlewareFunction) -> None:
        self._fn = fn

    async def handle(self, request: httpx.Request, next: Handler) -> httpx.Response:
        return await self._fn(request, next)

    def __repr__(self) -> str:
        return f"FunctionMiddleware({self._fn!r})"


@dataclass
class MiddlewareBuckets:
    """Middleware split by role, each list in declaration order."""

    wrappers: list[AsyncMiddleware] = field(default_factory=list)
    observers: list[RequestMiddleware] = field(default_factory=list)
    transformers: list[RequestTransformerMiddleware] = field(default_factory=list)
    responders: list[ResponseMiddleware] = field(default_factory=list)


def partition_middlewares(middlewares: Iterable[Middleware]) -> MiddlewareBuckets:
    """Sort ``middlewares`` into role buckets in a single pass."""

    buckets = MiddlewareBuckets()
    for middleware in middlewares:
        matched = False
        if isinstance(middleware, AsyncMiddleware):
            buckets.wrappers.append(middleware)
            matched = True
        if isinstance(middleware, RequestMiddleware):
            buckets.observers.append(middleware)
            matched = True
        if isinstance(middleware, RequestTransformerMiddleware):
            buckets.transformers.append(middleware)
            matched = True
        if isinstance(middleware, ResponseMiddleware):
            buckets.responders.append(middleware)
            matched = True
        if matched:
            continue
        if callable(middleware):
            buckets.wrappers.append(FunctionMiddleware(middleware))
            continue
        raise TypeError(
            f"{middleware!r} does not implement on_request, transform_request, "
            "on_response or handle and is not callable"
        )
    return buckets


def _base_handler(transport: Handler, buckets: MiddlewareBuckets) -> Handler:
    observers = tuple(buckets.observers)
    transformers = tuple(reversed(buckets.transformers))
    responders = tuple(reversed(buckets.responders))
    if not (observers or transformers or responders):
        return transport

    async def base(request: httpx.Request) -> httpx.Response:
        for observer in observers:
            observer.on_request(request)
        for transformer in transformers:
            request = await maybe_await(transformer.transform_request(request))
        response = await transport(request)
        for responder in responders:
            response = await maybe_await(responder.on_response(response))
        return response

    return base


def _wrap(middleware: AsyncMiddleware, next_handler: Handler) -> Handler:
    async def wrapped(request: httpx.Request) -> httpx.Response:
        return await middleware.handle(request, next_handler)

    return wrapped


def compose_handler(transport: Handler, middlewares: Optional[Iterable[Middleware]] = None) -> Handler:
    """Build the handler that runs ``middlewares`` around ``transport``.

    Async middlewares wrap everything in LIFO order, so the last declared one
    sees the request first and the response last. Inside them, request
    observers run in declaration order, request transformers and response
    middlewares in reverse declaration order.
    """

    buckets = partition_middlewares(middlewares or ())
    handler = _base_handler(transport, buckets)
    for middleware in buckets.wrappers:
        handler = _wrap(middleware, handler)
    LOGGER.debug(
        "Composed pipeline: %d wrappers, %d observers, %d request transformers, %d response middlewares",
        len(buckets.wrappers),
        len(buckets.observers),
        len(buckets.transformers),
        len(buckets.responders),
    )
    return handler


class Pipeline:
    """Collects middleware and composes them around a transport handler."""

    def __init__(self, middlewares: Optional[Iterable[Middleware]] = None) -> None:
        self._middlewares: list[Middleware] = list(middlewares or [])

    def add(self, middleware: Middleware) -> "Pipeline":
        self._middlewares.append(middleware)
        return self

    def add_all(self, middlewares: Iterable[Middleware]) -> "Pipeline":
        self._middlewares.extend(middlewares)
        return self

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return tuple(self._middlewares)

    def add_handler(self, handler: Handler) -> Handler:
        """Return ``handler`` wrapped by every collected middleware."""

        return compose_handler(handler, self._middlewares)

    def __len__(self) -> int:
        return len(self._middlewares)


__all__ = [
    "FunctionMiddleware",
    "MiddlewareBuckets",
    "Pipeline",
    "compose_handler",
    "partition_middlewares",
]
