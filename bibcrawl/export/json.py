# bibcrawl/export/json.py
import json
from collections.abc import Sequence
from dataclasses import asdict, fields
from typing import Any

from bibcrawl.models import Record
from bibcrawl.normalize import normalize_authors

from .base import Exporter

_RECORD_FIELDS = {f.name for f in fields(Record)}


class JsonExporter(Exporter):
    """Export records to JSON format."""

    name = "json"
    extension = ".json"

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_string(self, records: Sequence[Record]) -> str:
        data = {
            "records": [asdict(r) for r in records],
            "total": len(records),
        }
        return json.dumps(data, indent=self.indent, ensure_ascii=False)


def records_from_json(text: str) -> list[Record]:
    """Load records written by JsonExporter.

    Raises:
        ValueError: the text is not a JsonExporter document.
    """
    data = json.loads(text)
    if not isinstance(data, dict) or not isinstance(data.get("records"), list):
        raise ValueError("Expected an object with a 'records' list")
    return [_record_from_dict(item) for item in data["records"]]


def _record_from_dict(item: Any) -> Record:
    if not isinstance(item, dict):
        raise ValueError(f"Invalid record entry: expected an object, got {type(item).__name__}")
    values = {k: v for k, v in item.items() if k in _RECORD_FIELDS}
    values["authors"] = normalize_authors(values.get("authors"))
    try:
        return Record(**values)
    except TypeError as e:
        raise ValueError(f"Invalid record entry: {e}") from e
