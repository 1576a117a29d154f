from .base import Exporter
from .bibtex import BibtexExporter
from .csv import CsvExporter
from .json import JsonExporter, records_from_json

EXPORTERS: dict[str, type[Exporter]] = {
    "json": JsonExporter,
    "csv": CsvExporter,
    "bibtex": BibtexExporter,
}


def get_exporter(name: str) -> Exporter:
    """Return an exporter instance by format name."""
    try:
        return EXPORTERS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown format: {name!r}. Available: {', '.join(EXPORTERS)}"
        ) from None


__all__ = [
    "Exporter",
    "JsonExporter",
    "CsvExporter",
    "BibtexExporter",
    "EXPORTERS",
    "get_exporter",
    "records_from_json",
]
