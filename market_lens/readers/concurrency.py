"""Fail-fast gathering helpers."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def gather_ordered(
    items: Sequence[T],
    fetch: Callable[[T], Awaitable[R]],
    max_concurrency: int,
) -> list[R]:
    """Apply ``fetch`` to every item with at most ``max_concurrency`` in flight.

    Results come back in input order. The first failure cancels all pending
    work and propagates; no partial result list is returned.
    """
    semaphore = asyncio.Semaphore(max_concurrency)

    async def run(item: T) -> R:
        async with semaphore:
            return await fetch(item)

    return await gather_or_cancel(*(run(item) for item in items))
