"""
Resolution Cache

In-memory map from resolution key to a shared task, so that identical
references resolved at the same time (or later in the same run) share a
single lookup chain.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResolutionCache(Generic[T]):
    """
    Key -> shared asyncio.Task mapping.

    - The first caller for a key starts the work; later callers get the
      same task, whether it is still running or already finished.
    - Successful results stay until clear().
    - A failed task removes its own entry before it completes, so every
      waiter sees the failure with the entry already gone and the next call
      starts over.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, asyncio.Task[T]] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_create(
        self,
        key: Hashable,
        start: Callable[[], Awaitable[T]],
    ) -> asyncio.Task[T]:
        """
        Return the shared task for `key`, starting `start()` if there is none.

        Must be called from a running event loop. The lookup and the insert
        happen without yielding to the loop.
        """
        task = self._entries.get(key)
        if task is not None:
            logger.debug(f"Resolution cache hit: {key}")
            return task

        logger.debug(f"Resolution cache miss: {key}")
        task = asyncio.ensure_future(self._run(key, start))
        self._entries[key] = task
        return task

    async def _run(self, key: Hashable, start: Callable[[], Awaitable[T]]) -> T:
        try:
            return await start()
        except BaseException:
            # Only drop our own entry; clear() may already have replaced it
            if self._entries.get(key) is asyncio.current_task():
                del self._entries[key]
                logger.debug(f"Evicted failed resolution: {key}")
            raise

    def clear(self) -> None:
        """Evict every entry. Running tasks keep running for their waiters."""
        if self._entries:
            logger.debug(f"Clearing {len(self._entries)} cached resolutions")
        self._entries.clear()
