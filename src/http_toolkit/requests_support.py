"""Integration helpers for using the `requests` library as the transport."""

from __future__ import annotations

from functools import partial
from typing import Any, Optional

import anyio.to_thread
import httpx
import requests

# requests hands back decoded content, so these no longer describe the body.
_DROPPED_RESPONSE_HEADERS = {"content-encoding", "content-length", "transfer-encoding"}


class RequestsTransport:
    """Async transport that sends requests with a ``requests.Session``.

    The blocking call runs in a worker thread. Parameters beyond the session
    are passed to ``requests.Session.request`` on every call, e.g.
    ``timeout`` or ``verify``. A session created here is closed by
    :meth:`aclose`; a session passed in is left open.
    """

    def __init__(self, session: Optional[requests.Session] = None, **request_kwargs: Any) -> None:
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self._request_kwargs = request_kwargs

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        content = await request.aread()
        call = partial(
            self.session.request,
            request.method,
            str(request.url),
            headers=dict(request.headers),
            data=content or None,
            **self._request_kwargs,
        )
        response = await anyio.to_thread.run_sync(call)
        return _to_httpx_response(response, request)

    async def aclose(self) -> None:
        if self._owns_session:
            self.session.close()


def _to_httpx_response(response: requests.Response, request: httpx.Request) -> httpx.Response:
    headers = [
        (name, value)
        for name, value in response.headers.items()
        if name.lower() not in _DROPPED_RESPONSE_HEADERS
    ]
    return httpx.Response(
        response.status_code,
        headers=headers,
        content=response.content,
        request=request,
    )


__all__ = ["RequestsTransport"]
