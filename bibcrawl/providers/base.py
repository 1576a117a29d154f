# bibcrawl/providers/base.py
"""Base class for paginated search sources."""

from abc import ABC, abstractmethod
from typing import Any

from bibcrawl.models import CrawlQuery, Record


class Provider(ABC):
    """Describes one paginated search endpoint.

    Providers do no I/O themselves: the crawler fetches the URLs they build
    and hands the decoded payloads back for parsing.
    """

    name: str

    @abstractmethod
    def resolve_query(self, query: CrawlQuery) -> str:
        """Turn the user's query into the string sent upstream."""
        ...

    @abstractmethod
    def page_url(self, query: str, offset: int, page_size: int) -> str:
        """URL for one page of results."""
        ...

    @abstractmethod
    def parse_page(self, payload: Any) -> tuple[int | None, list[dict[str, Any]]]:
        """Extract (total match count or None, raw hits) from a page payload."""
        ...

    @abstractmethod
    def normalize(self, hit: dict[str, Any]) -> Record:
        """Map a raw hit into a Record."""
        ...
