"""Built-in middlewares."""

from .auth import BasicAuthMiddleware, BearerAuthMiddleware
from .base_url import BaseUrlMiddleware
from .headers import HeadersMiddleware
from .logger import (
    InMemoryLogSink,
    LoggerMiddleware,
    LoggingLogSink,
    LogSink,
    StdoutLogSink,
)
from .retry import (
    RETRYABLE_STATUS_CODES,
    RetryMiddleware,
    retry_on_status,
    retry_on_transport_errors,
)

__all__ = [
    "BaseUrlMiddleware",
    "BasicAuthMiddleware",
    "BearerAuthMiddleware",
    "HeadersMiddleware",
    "InMemoryLogSink",
    "LogSink",
    "LoggerMiddleware",
    "LoggingLogSink",
    "RETRYABLE_STATUS_CODES",
    "RetryMiddleware",
    "StdoutLogSink",
    "retry_on_status",
    "retry_on_transport_errors",
]
