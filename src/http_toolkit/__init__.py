"""Public package interface for http_toolkit."""

from .backoff import (
    BackoffStrategy,
    CallbackBackoffStrategy,
    ExponentialBackoffStrategy,
    FixedBackoffStrategy,
    JitteredBackoffStrategy,
    LinearBackoffStrategy,
)
from .client import Client
from .config import BackoffConfig, BackoffKind, LoggerConfig, RetryConfig, ToolkitConfig
from .copier import RequestNotReplayableError, buffer_response, copy_request
from .interceptor import FunctionalInterceptor, Interceptor, InterceptorMiddleware
from .middleware import (
    AsyncMiddleware,
    Middleware,
    RequestMiddleware,
    RequestTransformerMiddleware,
    ResponseMiddleware,
)
from .middlewares import (
    RETRYABLE_STATUS_CODES,
    BaseUrlMiddleware,
    BasicAuthMiddleware,
    BearerAuthMiddleware,
    HeadersMiddleware,
    InMemoryLogSink,
    LoggerMiddleware,
    LoggingLogSink,
    LogSink,
    RetryMiddleware,
    StdoutLogSink,
    retry_on_status,
    retry_on_transport_errors,
)
from .pipeline import Pipeline, compose_handler
from .requests_support import RequestsTransport
from .types import Handler, HttpLogEvent, HttpLogEventKind
from .validators import ResponseValidationError

__all__ = [
    "AsyncMiddleware",
    "BackoffConfig",
    "BackoffKind",
    "BackoffStrategy",
    "BaseUrlMiddleware",
    "BasicAuthMiddleware",
    "BearerAuthMiddleware",
    "CallbackBackoffStrategy",
    "Client",
    "ExponentialBackoffStrategy",
    "FixedBackoffStrategy",
    "FunctionalInterceptor",
    "Handler",
    "HeadersMiddleware",
    "HttpLogEvent",
    "HttpLogEventKind",
    "InMemoryLogSink",
    "Interceptor",
    "InterceptorMiddleware",
    "JitteredBackoffStrategy",
    "LinearBackoffStrategy",
    "LogSink",
    "LoggerConfig",
    "LoggerMiddleware",
    "LoggingLogSink",
    "Middleware",
    "Pipeline",
    "RETRYABLE_STATUS_CODES",
    "RequestMiddleware",
    "RequestNotReplayableError",
    "RequestTransformerMiddleware",
    "RequestsTransport",
    "ResponseMiddleware",
    "ResponseValidationError",
    "RetryConfig",
    "RetryMiddleware",
    "StdoutLogSink",
    "ToolkitConfig",
    "buffer_response",
    "compose_handler",
    "copy_request",
    "retry_on_status",
    "retry_on_transport_errors",
]
