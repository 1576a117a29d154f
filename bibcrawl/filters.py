# bibcrawl/filters.py
"""Client-side record filters."""

from collections.abc import Iterable

from bibcrawl.models import CrawlQuery, Record


def matches_year_range(record: Record, start: int | None, end: int | None) -> bool:
    """Inclusive year range check. Records without a numeric year always pass."""
    year = record.year_int
    if year is None:
        return True
    if start is not None and year < start:
        return False
    if end is not None and year > end:
        return False
    return True


def matches_query(record: Record, query: CrawlQuery) -> bool:
    """Apply the year range and venue filter of a crawl query."""
    if not matches_year_range(record, query.year_start, query.year_end):
        return False
    match query.venue_filter:
        case "journal":
            return record.venue_type == "Journal"
        case "conference":
            return record.venue_type == "Conference"
        case _:
            return True


def filter_records(
    records: Iterable[Record],
    keyword: str = "",
    venue: str = "",
) -> list[Record]:
    """Narrow an already-fetched result set.

    `keyword` matches the title or any author, `venue` matches the venue name;
    both are case-insensitive substring matches and empty values match all.
    """
    kw = keyword.strip().lower()
    vn = venue.strip().lower()

    def keep(record: Record) -> bool:
        if kw and kw not in record.title.lower():
            if not any(kw in a.lower() for a in record.authors):
                return False
        if vn and vn not in record.venue.lower():
            return False
        return True

    return [r for r in records if keep(r)]
