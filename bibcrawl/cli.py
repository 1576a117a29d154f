# bibcrawl/cli.py
import asyncio
import contextlib
import json
import logging
import signal
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Literal, NoReturn

import cyclopts

from bibcrawl.analytics import find_similar, summarize
from bibcrawl.cancel import CancelToken
from bibcrawl.config import Settings
from bibcrawl.crawl import Crawler
from bibcrawl.errors import BibcrawlError, CrawlCancelledError
from bibcrawl.export import get_exporter, records_from_json
from bibcrawl.filters import filter_records
from bibcrawl.models import CrawlProgress, CrawlQuery, CrawlResult, Record

app = cyclopts.App(
    name="bibcrawl",
    help="Crawl the DBLP bibliography and analyze the results.",
)


def _fail(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _print_progress(progress: CrawlProgress) -> None:
    print(
        f"\rFetched {progress.fetched_count}/{progress.target_count}",
        end="",
        file=sys.stderr,
        flush=True,
    )


async def _run_crawl(query: CrawlQuery, settings: Settings) -> CrawlResult:
    """Crawl with Ctrl-C wired to the cancel token."""
    cancel = CancelToken()
    loop = asyncio.get_running_loop()
    with contextlib.suppress(NotImplementedError):
        loop.add_signal_handler(signal.SIGINT, cancel.cancel)
    try:
        async with Crawler(settings=settings) as crawler:
            return await crawler.crawl_detailed(query, _print_progress, cancel)
    finally:
        with contextlib.suppress(NotImplementedError):
            loop.remove_signal_handler(signal.SIGINT)
        print(file=sys.stderr)


def _load_records(path: Path) -> list[Record]:
    if not path.exists():
        _fail(f"File not found: {path}")
    try:
        return records_from_json(path.read_text(encoding="utf-8"))
    except ValueError as e:
        _fail(f"Could not read {path}: {e}")


@app.command(name="search")
def search(
    query: Annotated[str, cyclopts.Parameter(help="Keywords, or a DBLP venue URL with --url")],
    url: Annotated[
        bool,
        cyclopts.Parameter(name="--url", help="Treat QUERY as a DBLP venue URL or stream path"),
    ] = False,
    from_year: Annotated[
        int | None,
        cyclopts.Parameter(name="--from-year", help="First year to keep (inclusive)"),
    ] = None,
    to_year: Annotated[
        int | None,
        cyclopts.Parameter(name="--to-year", help="Last year to keep (inclusive)"),
    ] = None,
    venue_type: Annotated[
        Literal["all", "journal", "conference"],
        cyclopts.Parameter(name=["--type", "-t"], help="Venue type filter"),
    ] = "all",
    max_results: Annotated[
        int,
        cyclopts.Parameter(name=["--max", "-n"], help="Maximum records to fetch"),
    ] = 50,
    format: Annotated[
        str,
        cyclopts.Parameter(name=["--format", "-f"], help="Output format: json, csv, bibtex"),
    ] = "json",
    output: Annotated[
        Path | None,
        cyclopts.Parameter(name=["--output", "-o"], help="Output file path"),
    ] = None,
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Enable debug logging"),
    ] = False,
) -> None:
    """Crawl DBLP for QUERY and export the matching records."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        exporter = get_exporter(format)
        settings = Settings.from_env()
    except ValueError as e:
        _fail(str(e))

    crawl_query = CrawlQuery(
        query_string=query,
        year_start=from_year,
        year_end=to_year,
        venue_filter=venue_type,
        max_results=max_results,
        mode="url" if url else "keyword",
    )

    try:
        result = asyncio.run(_run_crawl(crawl_query, settings))
    except CrawlCancelledError:
        _fail("Crawl cancelled.")
    except BibcrawlError as e:
        _fail(str(e))

    if output:
        exporter.export(result.records, output)
        print(f"Exported {len(result.records)} records to {output}")
    else:
        print(exporter.to_string(result.records))

    for failure in result.failures:
        print(f"[WARN] {failure}", file=sys.stderr)

    total = "unknown" if result.total_matches is None else result.total_matches
    print(f"\nTotal: {len(result.records)} records ({total} matches)", file=sys.stderr)


@app.command(name="analyze")
def analyze(
    input: Annotated[Path, cyclopts.Parameter(help="JSON file written by 'search'")],
    keyword: Annotated[
        str,
        cyclopts.Parameter(name="--keyword", help="Only records whose title or authors match"),
    ] = "",
    venue: Annotated[
        str,
        cyclopts.Parameter(name="--venue", help="Only records whose venue matches"),
    ] = "",
    top_authors: Annotated[
        int,
        cyclopts.Parameter(name="--top-authors", help="Authors in the collaboration graph"),
    ] = 25,
) -> None:
    """Print keyword, trend, co-occurrence and collaboration statistics."""
    records = filter_records(_load_records(input), keyword=keyword, venue=venue)
    summary = summarize(records, top_authors=top_authors)
    print(json.dumps(asdict(summary), indent=2, ensure_ascii=False))


@app.command(name="similar")
def similar(
    input: Annotated[Path, cyclopts.Parameter(help="JSON file written by 'search'")],
    record_id: Annotated[str, cyclopts.Parameter(help="Id of the record to compare against")],
    limit: Annotated[
        int,
        cyclopts.Parameter(name=["--limit", "-n"], help="Maximum similar records"),
    ] = 5,
) -> None:
    """List records whose titles are most similar to RECORD_ID's."""
    records = _load_records(input)
    target = next((r for r in records if r.id == record_id), None)
    if target is None:
        _fail(f"No record with id {record_id!r} in {input}")

    for hit in find_similar(target, records, limit):
        shared = ", ".join(hit.shared_terms)
        print(f"{hit.score:.2f}  {hit.record.title} ({hit.record.year})  [{shared}]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
