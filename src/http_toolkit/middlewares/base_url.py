"""Resolve relative request URLs against a base URL."""

from __future__ import annotations

import httpx

from ..copier import copy_request


def _enforce_trailing_slash(url: httpx.URL) -> httpx.URL:
    if url.raw_path.endswith(b"/"):
        return url
    return url.copy_with(raw_path=url.raw_path + b"/")


class BaseUrlMiddleware:
    """Retargets requests with a relative URL onto ``base_url``.

    The base path acts as a prefix, so ``/users`` against
    ``https://api.example.com/v1`` becomes ``https://api.example.com/v1/users``.
    Absolute URLs pass through untouched; with several of these middlewares
    declared, the last one resolves first and the earlier ones see an absolute
    URL.
    """

    def __init__(self, base_url: httpx.URL | str) -> None:
        base = httpx.URL(base_url)
        if base.is_relative_url:
            raise ValueError(f"base_url must be absolute, got {str(base_url)!r}")
        self.base_url = _enforce_trailing_slash(base)

    def resolve(self, url: httpx.URL) -> httpx.URL:
        if url.is_absolute_url:
            return url
        raw_path = self.base_url.raw_path + url.raw_path.lstrip(b"/")
        return self.base_url.copy_with(raw_path=raw_path)

    def transform_request(self, request: httpx.Request) -> httpx.Request:
        target = self.resolve(request.url)
        if target is request.url:
            return request
        return copy_request(request, url=target)

    def __repr__(self) -> str:
        return f"BaseUrlMiddleware({str(self.base_url)!r})"


__all__ = ["BaseUrlMiddleware"]
