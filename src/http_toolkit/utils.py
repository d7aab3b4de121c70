"""Small helpers shared by the pipeline and adapters."""

from __future__ import annotations

import inspect
from typing import Awaitable, TypeVar, Union

T = TypeVar("T")


async def maybe_await(value: Union[T, Awaitable[T]]) -> T:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""

    if inspect.isawaitable(value):
        return await value
    return value


__all__ = ["maybe_await"]
