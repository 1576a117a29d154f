# bibcrawl/export/base.py
"""Base class for record exporters."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from bibcrawl.models import Record


class Exporter(ABC):
    """Serializes a list of records to text."""

    name: str
    extension: str

    @abstractmethod
    def to_string(self, records: Sequence[Record]) -> str:
        """Render records as a string."""
        ...

    def export(self, records: Sequence[Record], path: Path) -> None:
        """Write records to `path` (UTF-8)."""
        path.write_text(self.to_string(records), encoding="utf-8")
