"""
Cooperative cancellation shared by every stage of one search.
"""

from __future__ import annotations

__all__ = ["CancelToken"]

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from omnisearch.errors import FetchCancelled

T = TypeVar("T")


class CancelToken:
    """A one-way cancellation flag that stages can wait on.

    A token starts live and can only be cancelled once; a new search gets a
    new token.
    """

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def sleep(self, delay: float) -> bool:
        """Wait ``delay`` seconds unless cancelled first.

        Returns:
            True if the full delay elapsed, False if the token was cancelled.
        """
        if self.cancelled:
            return False
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except TimeoutError:
            return True
        return False

    async def run(self, aw: Awaitable[T]) -> T:
        """Await ``aw`` unless the token is cancelled first.

        When the token wins, the underlying task is cancelled and awaited so
        the transport can release its connection.

        Raises:
            FetchCancelled: If the token was cancelled before ``aw`` finished.
        """
        if self.cancelled:
            if asyncio.iscoroutine(aw):
                aw.close()
            raise FetchCancelled()

        task = asyncio.ensure_future(aw)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            waiter.cancel()

        if task.done():
            return task.result()

        task.cancel()
        await asyncio.wait({task})
        if not task.cancelled():
            # consume a late failure so it is not reported as unretrieved
            task.exception()
        raise FetchCancelled()
