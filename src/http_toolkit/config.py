"""Configuration models for building clients and middleware."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    ValidationInfo,
    field_validator,
)

from .backoff import (
    BackoffStrategy,
    ExponentialBackoffStrategy,
    FixedBackoffStrategy,
    LinearBackoffStrategy,
)
from .middlewares import (
    BaseUrlMiddleware,
    BearerAuthMiddleware,
    HeadersMiddleware,
    LoggerMiddleware,
    RetryMiddleware,
)


class BackoffKind(str, Enum):
    """Built-in backoff strategies."""

    FIXED = "fixed"
    LINEAR = "linear"
    EXPONENTIAL = "exponential"


class BackoffConfig(BaseModel):
    """Delay schedule applied between retry attempts."""

    kind: BackoffKind = BackoffKind.EXPONENTIAL
    base_delay_seconds: NonNegativeFloat = Field(
        default=0.5,
        description="Constant delay (fixed), per-attempt step (linear) or first delay (exponential).",
    )
    max_delay_seconds: Optional[NonNegativeFloat] = Field(
        default=None,
        description="Upper bound for linear and exponential delays.",
    )

    @field_validator("max_delay_seconds")
    @classmethod
    def _validate_range(cls, value: Optional[float], info: ValidationInfo) -> Optional[float]:
        base = info.data.get("base_delay_seconds", 0.0)
        if value is not None and value < base:
            raise ValueError("max_delay_seconds cannot be smaller than base_delay_seconds")
        return value

    def build(self) -> BackoffStrategy:
        if self.kind is BackoffKind.FIXED:
            return FixedBackoffStrategy(self.base_delay_seconds)
        if self.kind is BackoffKind.LINEAR:
            return LinearBackoffStrategy(self.base_delay_seconds, max_delay=self.max_delay_seconds)
        return ExponentialBackoffStrategy(self.base_delay_seconds, max_delay=self.max_delay_seconds)


class RetryConfig(BaseModel):
    """Retry policy for :class:`~http_toolkit.middlewares.RetryMiddleware`."""

    max_retries: NonNegativeInt = Field(
        default=3,
        description="Retries after the first attempt; 0 disables retrying.",
    )
    backoff: BackoffConfig = Field(default_factory=BackoffConfig)
    retry_statuses: set[int] = Field(
        default_factory=set,
        description="Response status codes that trigger a retry. Empty means never retry on status.",
    )

    @field_validator("retry_statuses")
    @classmethod
    def _validate_statuses(cls, value: set[int]) -> set[int]:
        for code in value:
            if not 100 <= code <= 599:
                raise ValueError(f"invalid HTTP status code: {code}")
        return value


class LoggerConfig(BaseModel):
    """Settings for :class:`~http_toolkit.middlewares.LoggerMiddleware`."""

    enabled: bool = True
    log_headers: bool = False
    log_body: bool = False


class ToolkitConfig(BaseModel):
    """Top-level configuration object for a client."""

    base_url: Optional[str] = Field(
        default=None,
        description="Absolute URL that relative request URLs are resolved against.",
    )
    headers: dict[str, str] = Field(default_factory=dict)
    bearer_token: Optional[str] = None
    retry: Optional[RetryConfig] = None
    logging: Optional[LoggerConfig] = None

    def middlewares(self) -> list:
        """Return the middleware list this configuration describes.

        Retry is declared last so it is the outermost wrapper and every attempt
        is logged.
        """

        chain: list = []
        if self.base_url is not None:
            chain.append(BaseUrlMiddleware(self.base_url))
        if self.headers:
            chain.append(HeadersMiddleware(self.headers))
        if self.bearer_token is not None:
            chain.append(BearerAuthMiddleware(self.bearer_token))
        if self.logging is not None and self.logging.enabled:
            chain.append(
                LoggerMiddleware(
                    log_headers=self.logging.log_headers,
                    log_body=self.logging.log_body,
                )
            )
        if self.retry is not None:
            chain.append(RetryMiddleware.from_config(self.retry))
        return chain


__all__ = [
    "BackoffConfig",
    "BackoffKind",
    "LoggerConfig",
    "RetryConfig",
    "ToolkitConfig",
]
