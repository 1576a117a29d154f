# bibcrawl/cancel.py
"""Cooperative cancellation shared by a crawl and its page fetches."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from bibcrawl.errors import CrawlCancelledError

T = TypeVar("T")


class CancelToken:
    """One-shot cancellation signal.

    The token is observed, never polled in a busy loop: fetches check it
    before each attempt, race it against the request in flight, and wait on
    it during backoff.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CrawlCancelledError()

    async def sleep(self, delay: float) -> None:
        """Sleep for `delay` seconds, raising as soon as the token fires."""
        self.raise_if_cancelled()
        if delay <= 0:
            return
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except TimeoutError:
            return
        raise CrawlCancelledError()

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await `awaitable`, abandoning it if the token fires first."""
        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise CrawlCancelledError()
        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.create_task(self._event.wait())
        try:
            await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            abandoned = not work.done()
            if abandoned:
                work.cancel()
            # reap both so no task outlives the guard
            await asyncio.gather(waiter, *([work] if abandoned else []), return_exceptions=True)
        if abandoned:
            raise CrawlCancelledError()
        return work.result()
