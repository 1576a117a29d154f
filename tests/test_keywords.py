# tests/test_keywords.py
from bibcrawl.analytics.keywords import (
    extract_keywords,
    generate_correlation_heatmap,
    generate_trends,
)
from bibcrawl.models import CooccurrenceCell, KeywordEntry, TrendRow
from tests.helpers import make_record


def test_extract_keywords_ranks_by_count():
    records = [
        make_record("Graph Query Processing", id="1"),
        make_record("Graph Compression", id="2"),
        make_record("Streaming Graph Query", id="3"),
    ]
    assert extract_keywords(records, limit=2) == [
        KeywordEntry("graph", 3),
        KeywordEntry("query", 2),
    ]


def test_extract_keywords_ties_keep_first_seen_order():
    records = [
        make_record("Zebra Apple", id="1"),
        make_record("Mango Zebra Apple Mango", id="2"),
    ]
    terms = [k.term for k in extract_keywords(records)]
    assert terms == ["zebra", "apple", "mango"]


def test_extract_keywords_is_idempotent():
    records = [make_record(f"Topic {i} Indexing Structures", id=str(i)) for i in range(20)]
    assert extract_keywords(records, 10) == extract_keywords(records, 10)


def test_extract_keywords_empty():
    assert extract_keywords([]) == []


def test_trends_count_records_per_year():
    records = [
        make_record("Graph Neural Networks", year="2020", id="1"),
        make_record("Graph Databases", year="2020", id="2"),
        make_record("Neural Compression", year="2021", id="3"),
    ]
    assert generate_trends(records, ["graph"]) == [
        TrendRow(year="2020", counts={"graph": 2}),
        TrendRow(year="2021", counts={"graph": 0}),
    ]


def test_trends_count_records_not_occurrences():
    records = [make_record("Graph of Graph Summaries", year="2019", id="1")]
    assert generate_trends(records, ["graph", "summaries"])[0].counts == {
        "graph": 1,
        "summaries": 1,
    }


def test_trends_sort_years_as_strings():
    records = [
        make_record("Alpha", year="2010", id="1"),
        make_record("Alpha", year="", id="2"),
        make_record("Alpha", year="999", id="3"),
        make_record("Alpha", year="2009", id="4"),
    ]
    assert [row.year for row in generate_trends(records, ["alpha"])] == ["", "2009", "2010", "999"]


def test_heatmap_includes_self_pairs_and_skips_zero():
    records = [
        make_record("Graph Query", id="1"),
        make_record("Graph Storage", id="2"),
    ]
    cells = generate_correlation_heatmap(records, ["graph", "query", "storage"])
    assert cells == [
        CooccurrenceCell("graph", "graph", 2),
        CooccurrenceCell("graph", "query", 1),
        CooccurrenceCell("graph", "storage", 1),
        CooccurrenceCell("query", "graph", 1),
        CooccurrenceCell("query", "query", 1),
        CooccurrenceCell("storage", "graph", 1),
        CooccurrenceCell("storage", "storage", 1),
    ]


def test_heatmap_uses_first_ten_terms():
    terms = [f"term{i:02d}" for i in range(15)]
    records = [make_record(" ".join(terms), id="1")]
    cells = generate_correlation_heatmap(records, terms)
    assert len(cells) == 100
    assert {c.term_a for c in cells} == set(terms[:10])
