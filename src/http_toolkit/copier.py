"""Helpers for duplicating requests and materializing response bodies."""

from __future__ import annotations

from typing import Optional

import httpx

# Recomputed by httpx from the buffered body.
_BODY_FRAMING_HEADERS = ("transfer-encoding", "content-length")
# Describe the encoded wire body, not the decoded content.
_ENCODING_HEADERS = ("content-encoding",) + _BODY_FRAMING_HEADERS


class RequestNotReplayableError(RuntimeError):
    """Raised when a request body cannot be duplicated for another send."""

    def __init__(self, request: httpx.Request) -> None:
        super().__init__(
            f"Cannot copy {request.method} {request.url}: the request body is a stream "
            "that has not been read. Call `await request.aread()` first to buffer it."
        )
        self.request = request


def copy_request(
    request: httpx.Request,
    *,
    url: Optional[httpx.URL | str] = None,
) -> httpx.Request:
    """Return an independent copy of ``request`` that can be sent again.

    The body is snapshotted as bytes, so only requests whose content is already
    materialized can be copied. Streaming bodies raise
    :class:`RequestNotReplayableError` instead of being buffered implicitly.
    ``url`` optionally retargets the copy.
    """

    try:
        content = request.content
    except httpx.RequestNotRead as exc:
        raise RequestNotReplayableError(request) from exc

    headers = request.headers.copy()
    headers.pop("transfer-encoding", None)
    target = request.url
    if url is not None:
        target = httpx.URL(url)
        headers.pop("host", None)

    return httpx.Request(
        request.method,
        target,
        headers=headers,
        content=content or None,
        extensions=dict(request.extensions),
    )


async def buffer_response(response: httpx.Response) -> httpx.Response:
    """Return a new response whose body can be read any number of times.

    Streamed responses are drained into memory and closed. Responses that were
    already read are rebuilt from their decoded content.
    """

    if response.is_stream_consumed:
        dropped = _ENCODING_HEADERS
        content = response.content
    else:
        dropped = _BODY_FRAMING_HEADERS
        content = b"".join([chunk async for chunk in response.aiter_raw()])
        await response.aclose()

    headers = [
        (name, value)
        for name, value in response.headers.multi_items()
        if name.lower() not in dropped
    ]
    return httpx.Response(
        response.status_code,
        headers=headers,
        content=content,
        request=_request_of(response),
        extensions=dict(response.extensions),
    )


async def drain_response(response: httpx.Response) -> None:
    """Read and close ``response`` so its connection is released."""

    try:
        await response.aread()
    finally:
        await response.aclose()


def _request_of(response: httpx.Response) -> Optional[httpx.Request]:
    try:
        return response.request
    except RuntimeError:
        return None


__all__ = [
    "RequestNotReplayableError",
    "buffer_response",
    "copy_request",
    "drain_response",
]
