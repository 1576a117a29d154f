# bibcrawl/models.py
from dataclasses import dataclass, field
from typing import Literal

from bibcrawl.errors import PartialPageFailure

VenueType = Literal["Journal", "Conference", "Editorship", "Unknown"]
VenueFilter = Literal["all", "journal", "conference"]
QueryMode = Literal["keyword", "url"]

UNKNOWN_AUTHOR = "Unknown Author"


@dataclass(frozen=True)
class Record:
    """One normalized bibliographic entry."""

    # Required fields
    id: str
    title: str
    authors: tuple[str, ...]
    venue: str
    venue_type: VenueType
    year: str  # Kept as given by the source; may be empty or non-numeric

    # Optional fields
    doi: str | None = None
    source_key: str | None = None  # DBLP key, e.g. "journals/corr/abs-2001-00001"
    url: str | None = None
    pub_type: str = "Unknown"

    @property
    def year_int(self) -> int | None:
        """Numeric year, or None when the year string is not a number."""
        try:
            return int(self.year.strip())
        except ValueError:
            return None


@dataclass(frozen=True)
class CrawlQuery:
    """Immutable input to one crawl."""

    query_string: str
    year_start: int | None = None
    year_end: int | None = None
    venue_filter: VenueFilter = "all"
    max_results: int = 50
    mode: QueryMode = "keyword"


@dataclass(frozen=True)
class CrawlProgress:
    fetched_count: int
    target_count: int


@dataclass
class CrawlResult:
    """Outcome of a successful crawl, including pages that were skipped."""

    records: list[Record]
    total_matches: int | None
    target: int
    failures: list[PartialPageFailure] = field(default_factory=list)


@dataclass(frozen=True)
class KeywordEntry:
    term: str
    count: int


@dataclass(frozen=True)
class TrendRow:
    """Per-year counts of records whose title contains each term."""

    year: str
    counts: dict[str, int]


@dataclass(frozen=True)
class CooccurrenceCell:
    term_a: str
    term_b: str
    count: int


@dataclass(frozen=True)
class CollaborationNode:
    author_id: str
    display_name: str
    paper_count: int


@dataclass(frozen=True)
class CollaborationEdge:
    """Undirected co-authorship edge; author_a < author_b."""

    author_a: str
    author_b: str
    co_publication_count: int


@dataclass(frozen=True)
class CollaborationGraph:
    nodes: tuple[CollaborationNode, ...]
    edges: tuple[CollaborationEdge, ...]


@dataclass(frozen=True)
class SimilarityHit:
    record: Record
    score: float
    shared_terms: tuple[str, ...]


@dataclass(frozen=True)
class CountEntry:
    label: str
    count: int
