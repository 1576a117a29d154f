# bibcrawl/analytics/keywords.py
from collections import Counter
from collections.abc import Sequence

from bibcrawl.analytics.tokenize import tokenize
from bibcrawl.models import CooccurrenceCell, KeywordEntry, Record, TrendRow

HEATMAP_SIZE = 10


def extract_keywords(records: Sequence[Record], limit: int = 50) -> list[KeywordEntry]:
    """Most frequent title terms, highest count first.

    Ties keep the order in which terms were first seen.
    """
    counts: Counter[str] = Counter()
    for record in records:
        counts.update(tokenize(record.title))
    # Counter preserves insertion order and sorted() is stable.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [KeywordEntry(term=term, count=count) for term, count in ranked[:limit]]


def generate_trends(records: Sequence[Record], terms: Sequence[str]) -> list[TrendRow]:
    """Per-year count of records whose title contains each term.

    Years are sorted as strings, so "" and non-numeric years sort by text.
    """
    by_year: dict[str, list[set[str]]] = {}
    for record in records:
        by_year.setdefault(record.year, []).append(set(tokenize(record.title)))

    rows = []
    for year in sorted(by_year):
        title_terms = by_year[year]
        counts = {term: sum(1 for t in title_terms if term in t) for term in terms}
        rows.append(TrendRow(year=year, counts=counts))
    return rows


def generate_correlation_heatmap(
    records: Sequence[Record], terms: Sequence[str]
) -> list[CooccurrenceCell]:
    """Co-occurrence counts for every ordered pair of the first ten terms.

    Self-pairs are kept: a term co-occurs with itself in every title that
    contains it. Pairs that never co-occur are omitted.
    """
    matrix_terms = list(terms[:HEATMAP_SIZE])
    title_terms = [set(tokenize(r.title)) for r in records]

    cells = []
    for a in matrix_terms:
        for b in matrix_terms:
            count = sum(1 for t in title_terms if a in t and b in t)
            if count > 0:
                cells.append(CooccurrenceCell(term_a=a, term_b=b, count=count))
    return cells
