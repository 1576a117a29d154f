# tests/test_cli.py
from __future__ import annotations

import json

import pytest

from bibcrawl import cli
from bibcrawl.errors import CrawlCancelledError, PartialPageFailure, ServiceUnavailableError
from bibcrawl.export import get_exporter
from bibcrawl.models import CrawlQuery, CrawlResult
from tests.helpers import make_record

RECORDS = [
    make_record("Adaptive Query Execution", authors=("Ada", "Bob"), year="2020", id="r1"),
    make_record("Adaptive Query Execution Revisited", authors=("Ada",), year="2021", id="r2"),
    make_record("Learned Bloom Filters", authors=("Cy",), year="2021", venue="VLDB", id="r3"),
]


@pytest.fixture
def records_file(tmp_path):
    path = tmp_path / "records.json"
    get_exporter("json").export(RECORDS, path)
    return path


@pytest.fixture
def fake_crawl(monkeypatch):
    seen: list[CrawlQuery] = []
    outcome: dict[str, object] = {
        "result": CrawlResult(
            records=RECORDS,
            total_matches=3,
            target=3,
            failures=[PartialPageFailure(100, RuntimeError("boom"))],
        )
    }

    async def run(query, settings):
        seen.append(query)
        if isinstance(outcome["result"], Exception):
            raise outcome["result"]
        return outcome["result"]

    monkeypatch.setattr(cli, "_run_crawl", run)
    return seen, outcome


class TestSearchCommand:
    def test_prints_export_and_summary(self, fake_crawl, capsys):
        seen, _ = fake_crawl
        cli.search("query execution", from_year=2020, venue_type="journal", max_results=10)
        out, err = capsys.readouterr()

        assert json.loads(out)["total"] == 3
        assert "[WARN] Page at offset 100 failed: boom" in err
        assert "Total: 3 records (3 matches)" in err
        assert seen == [
            CrawlQuery(
                "query execution", year_start=2020, venue_filter="journal", max_results=10
            )
        ]

    def test_url_mode_and_output_file(self, fake_crawl, tmp_path, capsys):
        seen, _ = fake_crawl
        target = tmp_path / "out.csv"
        cli.search("conf/icse", url=True, format="csv", output=target)
        assert seen[0].mode == "url"
        assert target.read_text(encoding="utf-8").startswith('"ID","Title"')
        assert "Exported 3 records" in capsys.readouterr().out

    def test_unknown_format_exits(self, fake_crawl, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.search("graphs", format="ris")
        assert excinfo.value.code == 1
        assert "Unknown format" in capsys.readouterr().err

    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (CrawlCancelledError(), "Crawl cancelled."),
            (ServiceUnavailableError("dblp is down"), "dblp is down"),
        ],
    )
    def test_crawl_errors_exit(self, fake_crawl, capsys, error, message):
        _, outcome = fake_crawl
        outcome["result"] = error
        with pytest.raises(SystemExit):
            cli.search("graphs")
        assert f"Error: {message}" in capsys.readouterr().err


class TestAnalyzeCommand:
    def test_prints_summary(self, records_file, capsys):
        cli.analyze(records_file)
        data = json.loads(capsys.readouterr().out)
        assert data["total"] == 3
        assert data["keywords"][0] == {"term": "adaptive", "count": 2}
        assert [row["year"] for row in data["trends"]] == ["2020", "2021"]
        assert {"author_a": "Ada", "author_b": "Bob", "co_publication_count": 1} in data[
            "collaboration"
        ]["edges"]

    def test_local_filters(self, records_file, capsys):
        cli.analyze(records_file, venue="vldb")
        assert json.loads(capsys.readouterr().out)["total"] == 1

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            cli.analyze(tmp_path / "nope.json")
        assert "File not found" in capsys.readouterr().err

    def test_malformed_entry_exits(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"records": [1]}', encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            cli.analyze(path)
        assert excinfo.value.code == 1
        assert "Error: Could not read" in capsys.readouterr().err


class TestSimilarCommand:
    def test_lists_similar_records(self, records_file, capsys):
        cli.similar(records_file, "r1")
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert lines[0].startswith("0.87  Adaptive Query Execution Revisited (2021)")

    def test_unknown_record(self, records_file, capsys):
        with pytest.raises(SystemExit):
            cli.similar(records_file, "missing")
        assert "No record with id 'missing'" in capsys.readouterr().err
