"""HTTP client that runs every request through a composed middleware pipeline."""

from __future__ import annotations

from functools import partial
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

import httpx

from .config import ToolkitConfig
from .interceptor import Interceptor, InterceptorMiddleware
from .middleware import Middleware
from .pipeline import compose_handler
from .types import MapperFunction, Transport
from .validators import ResponseValidator


class Client:
    """Asynchronous client executing a middleware pipeline for each request.

    Ordering inside the pipeline:

    1. Async middlewares (``handle(request, next)``) wrap everything, last
       declared outermost, e.g. :class:`~http_toolkit.middlewares.RetryMiddleware`.
    2. Request middlewares (``on_request``) observe the request in declaration
       order.
    3. Request transformers (``transform_request``) run last declared first, so
       later entries override earlier ones.
    4. The transport sends the request.
    5. Response middlewares (``on_response``) run last declared first.

    The terminal call is ``transport`` when given (an async callable or an
    ``httpx.AsyncBaseTransport``), otherwise ``inner.send`` of an
    ``httpx.AsyncClient`` built from ``client_options``. Interceptors are
    adapted into async middlewares placed before ``middlewares``.
    """

    def __init__(
        self,
        *,
        inner: Optional[httpx.AsyncClient] = None,
        transport: Union[Transport, httpx.AsyncBaseTransport, None] = None,
        middlewares: Optional[Iterable[Middleware]] = None,
        interceptors: Optional[Iterable[Interceptor]] = None,
        client_options: Optional[dict[str, Any]] = None,
        stream: bool = False,
    ) -> None:
        if inner is not None and transport is not None:
            raise ValueError("Pass either inner or transport, not both")
        options = dict(client_options or {})
        if isinstance(transport, httpx.AsyncBaseTransport):
            options["transport"] = transport
            transport = None
        if transport is None and inner is None:
            inner = httpx.AsyncClient(**options)
        self._inner = inner
        self._transport = transport
        if transport is None:
            transport = partial(inner.send, stream=stream)

        chain: list[Middleware] = [InterceptorMiddleware(i) for i in interceptors or []]
        chain.extend(middlewares or [])
        self.middlewares: tuple[Middleware, ...] = tuple(chain)
        self._handler = compose_handler(transport, chain)
        self._closed = False

    @classmethod
    def from_config(cls, config: ToolkitConfig, **kwargs: Any) -> "Client":
        """Create a client whose middleware list is derived from ``config``.

        Extra ``middlewares`` in ``kwargs`` are declared after the configured
        ones.
        """

        extra = list(kwargs.pop("middlewares", None) or [])
        return cls(middlewares=[*config.middlewares(), *extra], **kwargs)

    # ------------------------------------------------------------------
    # Context management
    # ------------------------------------------------------------------
    @property
    def is_closed(self) -> bool:
        return self._closed

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._inner is not None:
            await self._inner.aclose()
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Public request API
    # ------------------------------------------------------------------
    async def send(self, request: httpx.Request) -> httpx.Response:
        """Run ``request`` through the pipeline and return the response."""

        if self._closed:
            raise RuntimeError("Cannot send a request, as the client has been closed.")
        return await self._handler(request)

    def build_request(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        params: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        content: Any = None,
        data: Any = None,
        files: Any = None,
        json: Any = None,
        extensions: Optional[dict[str, Any]] = None,
    ) -> httpx.Request:
        """Build a request; relative URLs are left for a base URL middleware."""

        request = httpx.Request(
            method,
            url,
            params=params,
            headers=headers,
            content=content,
            data=data,
            files=files,
            json=json,
            extensions=extensions,
        )
        if files is not None:
            # Multipart bodies are buffered so retries can copy them.
            request.read()
        return request

    async def request(self, method: str, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.send(self.build_request(method, url, **kwargs))

    async def get(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def head(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.request("HEAD", url, **kwargs)

    async def options(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.request("OPTIONS", url, **kwargs)

    async def post(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: httpx.URL | str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def request_decoded(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        mapper: Optional[MapperFunction] = None,
        validator: Union[ResponseValidator, Sequence[ResponseValidator], None] = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request, validate the response and decode its JSON body.

        Validators run before decoding and raise to abort. ``mapper`` turns the
        decoded JSON into a domain object.
        """

        response = await self.request(method, url, **kwargs)
        await response.aread()
        if validator is not None:
            validators = [validator] if callable(validator) else list(validator)
            for check in validators:
                check(response)
        decoded = response.json()
        return mapper(decoded) if mapper is not None else decoded

    async def get_decoded(self, url: httpx.URL | str, **kwargs: Any) -> Any:
        return await self.request_decoded("GET", url, **kwargs)

    async def post_decoded(self, url: httpx.URL | str, **kwargs: Any) -> Any:
        return await self.request_decoded("POST", url, **kwargs)

    async def put_decoded(self, url: httpx.URL | str, **kwargs: Any) -> Any:
        return await self.request_decoded("PUT", url, **kwargs)

    async def patch_decoded(self, url: httpx.URL | str, **kwargs: Any) -> Any:
        return await self.request_decoded("PATCH", url, **kwargs)

    async def delete_decoded(self, url: httpx.URL | str, **kwargs: Any) -> Any:
        return await self.request_decoded("DELETE", url, **kwargs)


__all__ = ["Client"]
