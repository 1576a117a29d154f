# bibcrawl/analytics/stats.py
"""Result-set statistics and the combined dashboard summary."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from bibcrawl.analytics.collaboration import build_collaboration_graph
from bibcrawl.analytics.keywords import (
    extract_keywords,
    generate_correlation_heatmap,
    generate_trends,
)
from bibcrawl.models import (
    CollaborationGraph,
    CooccurrenceCell,
    CountEntry,
    KeywordEntry,
    Record,
    TrendRow,
)


def year_distribution(records: Sequence[Record]) -> list[CountEntry]:
    """Records per year, numeric years ascending, then non-numeric ones."""
    counts = Counter(r.year for r in records)

    def order(year: str) -> tuple[int, int, str]:
        try:
            return (0, int(year), year)
        except ValueError:
            return (1, 0, year)

    return [CountEntry(label=y, count=counts[y]) for y in sorted(counts, key=order)]


def venue_type_distribution(records: Sequence[Record]) -> list[CountEntry]:
    """Records per venue type, in first-seen order."""
    counts = Counter(r.venue_type for r in records)
    return [CountEntry(label=label, count=count) for label, count in counts.items()]


@dataclass(frozen=True)
class DashboardSummary:
    """Every analytics view over one result set."""

    total: int
    years: list[CountEntry]
    venue_types: list[CountEntry]
    keywords: list[KeywordEntry]
    trends: list[TrendRow]
    heatmap: list[CooccurrenceCell]
    collaboration: CollaborationGraph


def summarize(
    records: Sequence[Record],
    keyword_limit: int = 40,
    trend_terms: int = 5,
    top_authors: int = 25,
) -> DashboardSummary:
    keywords = extract_keywords(records, keyword_limit)
    terms = [k.term for k in keywords]
    return DashboardSummary(
        total=len(records),
        years=year_distribution(records),
        venue_types=venue_type_distribution(records),
        keywords=keywords,
        trends=generate_trends(records, terms[:trend_terms]),
        heatmap=generate_correlation_heatmap(records, terms),
        collaboration=build_collaboration_graph(records, top_authors),
    )
