"""Await something and get ``(result, error)`` back instead of an exception."""

from __future__ import annotations

from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


async def p(aw: Awaitable[T]) -> tuple[Optional[T], Optional[Exception]]:
    try:
        return await aw, None
    except Exception as e:  # noqa: BLE001
        return None, e


def unwrap(result: tuple[Optional[T], Optional[Exception]]) -> T:
    """Return the value of a ``p`` result or raise its error."""
    value, err = result
    if err is not None:
        raise err
    return value  # type: ignore[return-value]
