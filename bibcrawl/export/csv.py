# bibcrawl/export/csv.py
import csv
from collections.abc import Sequence
from io import StringIO

from bibcrawl.models import Record

from .base import Exporter

HEADERS = ["ID", "Title", "Authors", "Venue", "Type", "Year", "DOI", "DBLP Key"]


class CsvExporter(Exporter):
    """Export records to CSV, one row per record, authors joined by "; "."""

    name = "csv"
    extension = ".csv"

    def to_string(self, records: Sequence[Record]) -> str:
        buffer = StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(HEADERS)
        for r in records:
            writer.writerow(
                [
                    r.id,
                    r.title,
                    "; ".join(r.authors),
                    r.venue,
                    r.venue_type,
                    r.year,
                    r.doi or "",
                    r.source_key or "",
                ]
            )
        return buffer.getvalue()
