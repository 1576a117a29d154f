"""bibcrawl - Paginated DBLP crawler and bibliographic text analytics."""

from bibcrawl.analytics import (
    build_collaboration_graph,
    extract_keywords,
    find_similar,
    generate_correlation_heatmap,
    generate_trends,
    summarize,
    tokenize,
)
from bibcrawl.cancel import CancelToken
from bibcrawl.config import Settings
from bibcrawl.crawl import Crawler, crawl
from bibcrawl.errors import (
    BibcrawlError,
    CrawlCancelledError,
    InvalidQueryError,
    PartialPageFailure,
    PermanentRequestError,
    ServiceUnavailableError,
    TransientRequestError,
)
from bibcrawl.fetch import PageFetcher
from bibcrawl.filters import filter_records
from bibcrawl.models import (
    CollaborationEdge,
    CollaborationGraph,
    CollaborationNode,
    CooccurrenceCell,
    CrawlProgress,
    CrawlQuery,
    CrawlResult,
    KeywordEntry,
    Record,
    SimilarityHit,
    TrendRow,
)

__all__ = [
    # Crawling
    "crawl",
    "Crawler",
    "PageFetcher",
    "CancelToken",
    "Settings",
    "filter_records",
    # Analytics
    "tokenize",
    "extract_keywords",
    "generate_trends",
    "generate_correlation_heatmap",
    "build_collaboration_graph",
    "find_similar",
    "summarize",
    # Models
    "Record",
    "CrawlQuery",
    "CrawlProgress",
    "CrawlResult",
    "KeywordEntry",
    "TrendRow",
    "CooccurrenceCell",
    "CollaborationNode",
    "CollaborationEdge",
    "CollaborationGraph",
    "SimilarityHit",
    # Errors
    "BibcrawlError",
    "InvalidQueryError",
    "CrawlCancelledError",
    "TransientRequestError",
    "PermanentRequestError",
    "ServiceUnavailableError",
    "PartialPageFailure",
]
