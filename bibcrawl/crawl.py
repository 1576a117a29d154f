# bibcrawl/crawl.py
import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx

from bibcrawl.cancel import CancelToken
from bibcrawl.config import Settings
from bibcrawl.errors import (
    InvalidQueryError,
    PartialPageFailure,
    PermanentRequestError,
    RequestError,
    ResponseFormatError,
    ServiceUnavailableError,
)
from bibcrawl.fetch import PageFetcher
from bibcrawl.filters import matches_query
from bibcrawl.models import CrawlProgress, CrawlQuery, CrawlResult, Record
from bibcrawl.providers.base import Provider
from bibcrawl.providers.dblp import DBLP

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[CrawlProgress], None]
Hits = list[dict[str, Any]]

# Failures that cost a single page (after the fetcher's own retries).
PAGE_ERRORS = (RequestError, httpx.HTTPError)


class Crawler:
    """Turns one query into a complete, ordered, size-bounded record list.

    The first page is fetched alone to learn the total match count; the
    remaining pages go through a fixed pool of workers pulling offsets from a
    queue, so at most `concurrency` requests are in flight at once.

    Example:
        async with Crawler() as crawler:
            records = await crawler.crawl(CrawlQuery("graph neural", max_results=500))
    """

    def __init__(
        self,
        provider: Provider | None = None,
        fetcher: PageFetcher | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.provider = provider or DBLP(self.settings.base_url)
        self.fetcher = fetcher or PageFetcher(self.settings)
        self.page_size = self.settings.page_size
        self.concurrency = self.settings.concurrency
        self.max_attempts = self.settings.max_attempts

    async def __aenter__(self) -> "Crawler":
        await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.fetcher.__aexit__(*exc)

    async def crawl(
        self,
        query: CrawlQuery,
        on_progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> list[Record]:
        """Crawl and return only the records."""
        result = await self.crawl_detailed(query, on_progress, cancel)
        return result.records

    async def crawl_detailed(
        self,
        query: CrawlQuery,
        on_progress: ProgressCallback | None = None,
        cancel: CancelToken | None = None,
    ) -> CrawlResult:
        """Crawl and return records together with the total and skipped pages.

        Raises:
            InvalidQueryError: empty query or non-positive max_results.
            CrawlCancelledError: the token fired at any point.
            PermanentRequestError: the first page was rejected by the source.
            ServiceUnavailableError: the first page could not be fetched.
        """
        q = self.provider.resolve_query(query)
        if not q:
            raise InvalidQueryError("Search query cannot be empty.")
        if query.max_results < 1:
            raise InvalidQueryError("max_results must be at least 1.")

        cancel = cancel or CancelToken()
        cancel.raise_if_cancelled()
        logger.info(
            "Starting crawl of %s for %r (max %d)", self.provider.name, q, query.max_results
        )

        try:
            total, first_hits = await self._fetch_page(q, 0, cancel)
        except PermanentRequestError:
            logger.error("First page of %r rejected by %s", q, self.provider.name)
            raise
        except PAGE_ERRORS as e:
            logger.error("First page of %r failed: %s", q, e)
            raise ServiceUnavailableError(
                f"Failed to fetch data from {self.provider.name}: {e}"
            ) from e

        target = query.max_results if total is None else min(total, query.max_results)
        pages: dict[int, Hits] = {0: first_hits}
        failures: list[PartialPageFailure] = []
        fetched = len(first_hits)
        self._report(on_progress, cancel, fetched, target)

        offsets = self._remaining_offsets(total, len(first_hits), target)
        if offsets:
            logger.debug("Fetching %d more pages (target %d)", len(offsets), target)

            def on_page(offset: int, outcome: Hits | PartialPageFailure) -> None:
                nonlocal fetched
                if isinstance(outcome, PartialPageFailure):
                    logger.warning("Skipping page at offset %d: %s", offset, outcome.cause)
                    failures.append(outcome)
                else:
                    pages[offset] = outcome
                    fetched += len(outcome)
                self._report(on_progress, cancel, fetched, target)

            await self._fetch_remaining(q, offsets, cancel, on_page)

        cancel.raise_if_cancelled()

        # Page order, not completion order.
        hits = [hit for offset in sorted(pages) for hit in pages[offset]][: query.max_results]
        records = [self.provider.normalize(hit) for hit in hits]
        records = [r for r in records if matches_query(r, query)]

        logger.info(
            "Crawl complete: %d records (%d hits, %d pages skipped)",
            len(records),
            len(hits),
            len(failures),
        )
        return CrawlResult(records=records, total_matches=total, target=target, failures=failures)

    def _remaining_offsets(self, total: int | None, first_count: int, target: int) -> list[int]:
        if first_count >= target:
            return []
        if total is None and first_count < self.page_size:
            # Unknown total and a short first page: the source has nothing more.
            return []
        return list(range(self.page_size, target, self.page_size))

    async def _fetch_page(
        self, q: str, offset: int, cancel: CancelToken
    ) -> tuple[int | None, Hits]:
        url = self.provider.page_url(q, offset, self.page_size)
        response = await self.fetcher.fetch(url, self.max_attempts, cancel)
        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Invalid JSON at offset {offset}") from e
        return self.provider.parse_page(payload)

    async def _fetch_remaining(
        self,
        q: str,
        offsets: list[int],
        cancel: CancelToken,
        on_page: Callable[[int, Hits | PartialPageFailure], None],
    ) -> None:
        """Fetch `offsets` through a fixed worker pool.

        Workers only send outcomes; this coroutine is the single consumer and
        the only one calling `on_page`.
        """
        work: asyncio.Queue[int] = asyncio.Queue()
        for offset in offsets:
            work.put_nowait(offset)
        outcomes: asyncio.Queue[tuple[int, Hits | PartialPageFailure] | BaseException | None] = (
            asyncio.Queue()
        )

        async def worker() -> None:
            try:
                while not cancel.cancelled:
                    try:
                        offset = work.get_nowait()
                    except asyncio.QueueEmpty:
                        return
                    try:
                        _, hits = await self._fetch_page(q, offset, cancel)
                    except PAGE_ERRORS as e:
                        outcomes.put_nowait((offset, PartialPageFailure(offset, e)))
                    else:
                        outcomes.put_nowait((offset, hits))
            except Exception as e:
                # Cancellation or a bug: hand it to the consumer to re-raise.
                outcomes.put_nowait(e)
            finally:
                outcomes.put_nowait(None)

        pool_size = min(self.concurrency, len(offsets))
        workers = [asyncio.create_task(worker()) for _ in range(pool_size)]
        active = len(workers)
        try:
            while active:
                item = await outcomes.get()
                if item is None:
                    active -= 1
                elif isinstance(item, BaseException):
                    raise item
                else:
                    on_page(*item)
        finally:
            for task in workers:
                task.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

    def _report(
        self,
        on_progress: ProgressCallback | None,
        cancel: CancelToken,
        fetched: int,
        target: int,
    ) -> None:
        if on_progress is None or cancel.cancelled:
            return
        on_progress(CrawlProgress(fetched_count=min(fetched, target), target_count=target))


async def crawl(
    query: CrawlQuery | str,
    on_progress: ProgressCallback | None = None,
    cancel: CancelToken | None = None,
    settings: Settings | None = None,
) -> list[Record]:
    """Crawl DBLP for `query` with a throwaway client.

    Examples:
        records = await crawl("streaming joins")
        records = await crawl(CrawlQuery("conf/sigmod", mode="url", max_results=1000))
    """
    if isinstance(query, str):
        query = CrawlQuery(query_string=query)
    async with Crawler(settings=settings) as crawler:
        return await crawler.crawl(query, on_progress, cancel)
