"""Authorization header middlewares."""

from __future__ import annotations

import base64

import httpx


class BearerAuthMiddleware:
    """Sets ``Authorization: Bearer <token>`` on every request."""

    def __init__(self, token: str) -> None:
        self.token = token

    def transform_request(self, request: httpx.Request) -> httpx.Request:
        request.headers["Authorization"] = f"Bearer {self.token}"
        return request

    def __repr__(self) -> str:
        return "BearerAuthMiddleware(token=***)"


class BasicAuthMiddleware:
    """Sets HTTP basic credentials on every request."""

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    def transform_request(self, request: httpx.Request) -> httpx.Request:
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        request.headers["Authorization"] = "Basic " + base64.b64encode(credentials).decode("ascii")
        return request

    def __repr__(self) -> str:
        return f"BasicAuthMiddleware(username={self.username!r}, password=***)"


__all__ = ["BasicAuthMiddleware", "BearerAuthMiddleware"]
