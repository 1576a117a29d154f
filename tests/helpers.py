# tests/helpers.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx

from bibcrawl.config import Settings
from bibcrawl.crawl import Crawler
from bibcrawl.fetch import PageFetcher
from bibcrawl.models import Record

HitFactory = Callable[[int], dict[str, Any]]


def make_record(
    title: str,
    year: str = "2020",
    authors: tuple[str, ...] = ("Alice",),
    id: str | None = None,
    venue: str = "SIGMOD",
    venue_type: str = "Conference",
    **extra: Any,
) -> Record:
    return Record(
        id=id or f"rec-{abs(hash((title, year, authors))) % 10**8}",
        title=title,
        authors=authors,
        venue=venue,
        venue_type=venue_type,  # type: ignore[arg-type]
        year=year,
        **extra,
    )


def make_hit(index: int, **info: Any) -> dict[str, Any]:
    """Synthetic DBLP hit; `index` doubles as the hit's position in the result set."""
    base = {
        "title": f"Paper {index}",
        "authors": {"author": [{"text": "Alice"}, {"text": "Bob"}]},
        "venue": "VLDB",
        "type": "Conference and Workshop Papers",
        "year": "2020",
        "key": f"conf/vldb/P{index}",
    }
    base.update(info)
    return {"@id": f"hit-{index}", "info": base}


def dblp_page(hits: list[dict[str, Any]], total: int | None) -> dict[str, Any]:
    block: dict[str, Any] = {"hit": hits}
    if total is not None:
        block["@total"] = str(total)
    return {"result": {"hits": block}}


class FakeDBLP:
    """Serves synthetic DBLP pages through httpx.MockTransport.

    Args:
        total: number of hits the fake source holds.
        declared_total: value reported as @total (defaults to `total`; None omits it).
        delays: per-offset response delay in seconds.
        statuses: per-offset list of error statuses returned, in order, before
            the page is served successfully.
        errors: per-offset list of exceptions raised, in order, before success.
    """

    def __init__(
        self,
        total: int,
        declared_total: int | None | str = "same",
        delays: dict[int, float] | None = None,
        statuses: dict[int, list[int]] | None = None,
        errors: dict[int, list[Exception]] | None = None,
        hit_factory: HitFactory = make_hit,
    ) -> None:
        self.total = total
        self.declared_total = total if declared_total == "same" else declared_total
        self.delays = delays or {}
        self.statuses = {k: list(v) for k, v in (statuses or {}).items()}
        self.errors = {k: list(v) for k, v in (errors or {}).items()}
        self.hit_factory = hit_factory
        self.requests: list[int] = []
        self.queries: list[str] = []
        self.completed: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        offset = int(request.url.params["f"])
        size = int(request.url.params["h"])
        self.requests.append(offset)
        self.queries.append(request.url.params["q"])
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(offset, 0))
            if self.errors.get(offset):
                raise self.errors[offset].pop(0)
            if self.statuses.get(offset):
                return httpx.Response(self.statuses[offset].pop(0))
            hits = [self.hit_factory(i) for i in range(offset, min(offset + size, self.total))]
            self.completed.append(offset)
            payload = dblp_page(hits, self.declared_total)  # type: ignore[arg-type]
            return httpx.Response(200, json=payload)
        finally:
            self.in_flight -= 1


@asynccontextmanager
async def crawler_for(handler: Any, **overrides: Any) -> AsyncIterator[Crawler]:
    """Crawler wired to a mock transport, with zero backoff unless overridden."""
    overrides.setdefault("base_delay", 0.0)
    settings = Settings(**overrides)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        fetcher = PageFetcher(settings, client=client)
        async with Crawler(fetcher=fetcher, settings=settings) as crawler:
            yield crawler


@asynccontextmanager
async def fetcher_for(handler: Any, **overrides: Any) -> AsyncIterator[PageFetcher]:
    overrides.setdefault("base_delay", 0.0)
    settings = Settings(**overrides)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        async with PageFetcher(settings, client=client) as fetcher:
            yield fetcher
