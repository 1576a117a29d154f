# bibcrawl/providers/dblp.py
import logging
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from bibcrawl.config import DEFAULT_BASE_URL
from bibcrawl.errors import ResponseFormatError
from bibcrawl.models import CrawlQuery, Record
from bibcrawl.normalize import classify_venue, clean_text, fallback_id, normalize_authors
from bibcrawl.providers.base import Provider

logger = logging.getLogger(__name__)

STREAM_PATH = re.compile(r"db/(journals/[^/]+|conf/[^/]+)")


class DBLP(Provider):
    """DBLP publication search (https://dblp.org/search/publ/api)."""

    name = "dblp"

    def __init__(self, base_url: str = DEFAULT_BASE_URL) -> None:
        self.base_url = base_url

    def resolve_query(self, query: CrawlQuery) -> str:
        """Return the upstream query string.

        In URL mode a DBLP venue page (".../db/journals/tkde/index.html") or a
        bare stream path ("conf/icse") becomes a "stream:<path>:" query.
        """
        q = query.query_string.strip()
        if query.mode != "url":
            return q

        match = STREAM_PATH.search(q)
        if match:
            return f"stream:{match.group(1)}:"
        if "/" in q and not q.startswith(("http", "stream:")):
            return f"stream:{q}:"
        return q

    def page_url(self, query: str, offset: int, page_size: int) -> str:
        params = {"q": query, "h": page_size, "f": offset, "format": "json"}
        return f"{self.base_url}?{urlencode(params)}"

    def parse_page(self, payload: Any) -> tuple[int | None, list[dict[str, Any]]]:
        if not isinstance(payload, Mapping):
            raise ResponseFormatError(f"Expected a JSON object, got {type(payload).__name__}")

        result = payload.get("result") or {}
        hits_block = result.get("hits") or {} if isinstance(result, Mapping) else None
        if not isinstance(hits_block, Mapping):
            raise ResponseFormatError("Malformed 'result.hits' block")

        total: int | None = None
        raw_total = hits_block.get("@total")
        if raw_total is not None:
            try:
                total = int(raw_total)
            except (TypeError, ValueError):
                logger.debug("Ignoring unparseable total: %r", raw_total)

        match hits_block.get("hit"):
            case list() as hits:
                pass
            case Mapping() as single:
                hits = [single]
            case _:
                hits = []

        return total, [h for h in hits if isinstance(h, Mapping)]

    def normalize(self, hit: dict[str, Any]) -> Record:
        info = hit.get("info") or {}
        key = info.get("key")
        pub_type = info.get("type")

        authors_block = info.get("authors")
        raw_authors = authors_block.get("author") if isinstance(authors_block, Mapping) else None

        return Record(
            id=str(hit.get("@id") or key or fallback_id()),
            title=clean_text(info.get("title")),
            authors=normalize_authors(raw_authors),
            venue=clean_text(_first(info.get("venue"))),
            venue_type=classify_venue(pub_type, key),
            year=str(info.get("year") or ""),
            doi=info.get("doi"),
            source_key=key,
            url=info.get("url"),
            pub_type=pub_type or "Unknown",
        )


def _first(value: Any) -> str | None:
    """Venue is occasionally a list (e.g. joint proceedings); keep the first."""
    match value:
        case list():
            return str(value[0]) if value else None
        case None:
            return None
        case _:
            return str(value)
