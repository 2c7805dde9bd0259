"""Concurrent execution helpers."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def first_leaf(group: BaseExceptionGroup[BaseException]) -> BaseException:
    """Return the first exception of a possibly nested exception group."""
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc


async def run_concurrently(*coroutines: Coroutine[Any, Any, T]) -> list[T]:
    """
    Run coroutines concurrently and return their results in argument order.

    The first failure cancels every sibling still running and is re-raised
    as is, not wrapped in an exception group.

    Args:
        *coroutines: Coroutines to run

    Returns:
        Results in the order the coroutines were given
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coroutine) for coroutine in coroutines]
    except ExceptionGroup as eg:
        raise first_leaf(eg) from None
    return [task.result() for task in tasks]
