"""Request/response logging middleware and its sinks."""

from __future__ import annotations

import logging
import sys
import time
from typing import Optional, Protocol, TextIO

import httpx

from ..copier import buffer_response
from ..types import Handler, HttpLogEvent, HttpLogEventKind

LOGGER = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


class LogSink(Protocol):
    """Sink that handles log events."""

    def handle(self, event: HttpLogEvent) -> None:  # pragma: no cover - protocol
        ...


def format_event(event: HttpLogEvent) -> list[str]:
    """Render ``event`` as the lines printed by :class:`StdoutLogSink`."""

    if event.kind is HttpLogEventKind.REQUEST:
        lines = [f"--> {event.method} {event.url}"]
    elif event.kind is HttpLogEventKind.RESPONSE:
        lines = [f"<-- {event.status_code} {event.url} ({event.elapsed_ms or 0.0:.0f}ms)"]
    else:
        lines = [f"<-- ERROR {event.url}: {event.error}"]
    for name, value in (event.headers or {}).items():
        lines.append(f"{name}: {value}")
    if event.body is not None:
        lines.append(f"Body: {event.body}")
    return lines


class StdoutLogSink:
    """Writes formatted events to standard output (or another text stream)."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def handle(self, event: HttpLogEvent) -> None:
        stream = self._stream or sys.stdout
        for line in format_event(event):
            stream.write(line + "\n")
        stream.flush()


class LoggingLogSink:
    """Routes events to a :mod:`logging` logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> None:
        self.logger = logger or LOGGER
        self.level = level

    def handle(self, event: HttpLogEvent) -> None:
        level = logging.WARNING if event.kind is HttpLogEventKind.ERROR else self.level
        for line in format_event(event):
            self.logger.log(level, line)


class InMemoryLogSink:
    """Collects events in memory for diagnostics or testing."""

    def __init__(self) -> None:
        self.events: list[HttpLogEvent] = []

    def handle(self, event: HttpLogEvent) -> None:
        self.events.append(event)


class LoggerMiddleware:
    """Reports each request, its response or its error to a :class:`LogSink`.

    Bodies are only captured with ``log_body=True``; the response is then
    buffered so downstream readers still get the full content.
    """

    def __init__(
        self,
        sink: Optional[LogSink] = None,
        *,
        log_headers: bool = False,
        log_body: bool = False,
    ) -> None:
        self.sink = sink or StdoutLogSink()
        self.log_headers = log_headers
        self.log_body = log_body

    async def handle(self, request: httpx.Request, next: Handler) -> httpx.Response:
        url = str(request.url)
        self.sink.handle(
            HttpLogEvent(
                kind=HttpLogEventKind.REQUEST,
                method=request.method,
                url=url,
                headers=dict(request.headers) if self.log_headers else None,
                body=self._request_body(request),
            )
        )
        start = time.perf_counter()
        try:
            response = await next(request)
        except Exception as exc:
            self.sink.handle(
                HttpLogEvent(
                    kind=HttpLogEventKind.ERROR,
                    method=request.method,
                    url=url,
                    elapsed_ms=_elapsed_ms(start),
                    error=repr(exc),
                )
            )
            raise

        body = None
        if self.log_body:
            response = await buffer_response(response)
            body = response.text
        self.sink.handle(
            HttpLogEvent(
                kind=HttpLogEventKind.RESPONSE,
                method=request.method,
                url=url,
                status_code=response.status_code,
                elapsed_ms=_elapsed_ms(start),
                headers=dict(response.headers) if self.log_headers else None,
                body=body,
            )
        )
        return response

    def _request_body(self, request: httpx.Request) -> Optional[str]:
        if not self.log_body:
            return None
        try:
            content = request.content
        except httpx.RequestNotRead:
            return "<streaming body>"
        return content.decode("utf-8", errors="replace")


__all__ = [
    "InMemoryLogSink",
    "LogSink",
    "LoggerMiddleware",
    "LoggingLogSink",
    "StdoutLogSink",
    "format_event",
]
