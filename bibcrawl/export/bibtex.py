# bibcrawl/export/bibtex.py
import zlib
from collections.abc import Sequence

from bibcrawl.models import Record

from .base import Exporter


def citation_key(record: Record) -> str:
    """Last segment of the DBLP key, or a stable dblp_<n> fallback."""
    if record.source_key:
        tail = record.source_key.rsplit("/", 1)[-1]
        if tail:
            return tail
    return f"dblp_{zlib.crc32(record.id.encode()) % 10000}"


def format_entry(record: Record) -> str:
    is_journal = record.venue_type == "Journal"
    entry_type = "article" if is_journal else "inproceedings"
    venue_field = "journal" if is_journal else "booktitle"

    lines = [
        f"@{entry_type}{{{citation_key(record)},",
        f"  author    = {{{' and '.join(record.authors)}}},",
        f"  title     = {{{record.title}}},",
        f"  {venue_field:<9} = {{{record.venue}}},",
        f"  year      = {{{record.year}}},",
    ]
    if record.doi:
        lines.append(f"  doi       = {{{record.doi}}},")
    lines.append("  bibsource = {dblp computer science bibliography, https://dblp.org}")
    lines.append("}")
    return "\n".join(lines)


class BibtexExporter(Exporter):
    """Export records as BibTeX entries."""

    name = "bibtex"
    extension = ".bib"

    def to_string(self, records: Sequence[Record]) -> str:
        return "\n\n".join(format_entry(r) for r in records) + ("\n" if records else "")
