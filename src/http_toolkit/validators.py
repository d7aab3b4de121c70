"""Response predicates and validators used before decoding a body."""

from __future__ import annotations

from typing import Callable

import httpx

ResponseValidator = Callable[[httpx.Response], None]


class ResponseValidationError(ValueError):
    """Raised when a response fails validation."""

    def __init__(self, message: str, response: httpx.Response) -> None:
        super().__init__(message)
        self.response = response


def is_success(response: httpx.Response) -> bool:
    return 200 <= response.status_code < 300


def is_redirect(response: httpx.Response) -> bool:
    return 300 <= response.status_code < 400


def is_client_error(response: httpx.Response) -> bool:
    return 400 <= response.status_code < 500


def is_server_error(response: httpx.Response) -> bool:
    return 500 <= response.status_code < 600


def expect_status(*codes: int) -> ResponseValidator:
    """Return a validator accepting only the given status codes."""

    allowed = frozenset(codes)

    def validator(response: httpx.Response) -> None:
        if response.status_code not in allowed:
            expected = " or ".join(str(code) for code in sorted(allowed))
            raise ResponseValidationError(
                f"Expected status {expected}, got {response.status_code}", response
            )

    return validator


def success(response: httpx.Response) -> None:
    if not is_success(response):
        raise ResponseValidationError(
            f"Request failed with status: {response.status_code}", response
        )


created = expect_status(201)
success_or_no_content = expect_status(200, 204)


def json_content_type(response: httpx.Response) -> None:
    content_type = response.headers.get("content-type")
    if content_type is None:
        raise ResponseValidationError("Missing `content-type` header from response", response)
    if "application/json" not in content_type:
        raise ResponseValidationError(
            f"Expected JSON response, but received: {content_type}", response
        )


def not_empty(response: httpx.Response) -> None:
    if not response.text.strip():
        raise ResponseValidationError("Response body is empty", response)


__all__ = [
    "ResponseValidationError",
    "ResponseValidator",
    "created",
    "expect_status",
    "is_client_error",
    "is_redirect",
    "is_server_error",
    "is_success",
    "json_content_type",
    "not_empty",
    "success",
    "success_or_no_content",
]
