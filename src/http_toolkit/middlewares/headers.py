"""Static header injection."""

from __future__ import annotations

from typing import Mapping

import httpx


class HeadersMiddleware:
    """Adds ``headers`` to every request, overwriting existing values."""

    def __init__(self, headers: Mapping[str, str]) -> None:
        self.headers = dict(headers)

    def transform_request(self, request: httpx.Request) -> httpx.Request:
        request.headers.update(self.headers)
        return request


__all__ = ["HeadersMiddleware"]
