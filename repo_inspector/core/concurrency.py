# repo_inspector/core/concurrency.py
import asyncio
import itertools
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def map_with_concurrency(
    items: Sequence[T],
    concurrency: int,
    mapper: Callable[[T, int], Awaitable[R]],
) -> List[R]:
    """
    Runs `mapper(item, index)` over `items` with at most `concurrency` calls in
    flight and returns results index-aligned with `items`, whatever order the
    calls finish in.

    concurrency <= 1 runs strictly in order, one call at a time. Otherwise a
    fixed pool of min(concurrency, len(items)) workers pulls indices from one
    shared cursor; `next(cursor)` never yields to the event loop, so each index
    is claimed by exactly one worker.
    """
    if concurrency <= 1:
        return [await mapper(item, index) for index, item in enumerate(items)]

    results: List[Optional[R]] = [None] * len(items)
    cursor = itertools.count()

    async def worker() -> None:
        while True:
            index = next(cursor)
            if index >= len(items):
                return
            results[index] = await mapper(items[index], index)

    await asyncio.gather(*(worker() for _ in range(min(concurrency, len(items)))))
    return results  # type: ignore[return-value]
