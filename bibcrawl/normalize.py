# bibcrawl/normalize.py
"""Helpers that turn loosely shaped source fields into Record fields."""

import logging
import uuid
from collections.abc import Mapping

from bs4 import BeautifulSoup

from bibcrawl.models import UNKNOWN_AUTHOR, VenueType

logger = logging.getLogger(__name__)

JOURNAL_TYPES = frozenset({"Article", "Journal Articles"})
CONFERENCE_TYPES = frozenset({"Inproceedings", "Conference and Workshop Papers"})
EDITORSHIP_TYPES = frozenset({"Editorship"})


def clean_text(text: object) -> str:
    """Strip embedded markup and resolve entity escapes.

    Non-string values are stringified first. Falls back to the raw text if it
    cannot be parsed.
    """
    if text is None or text == "":
        return ""
    text = str(text)
    try:
        return BeautifulSoup(text, "html.parser").get_text()
    except Exception as e:  # html.parser can choke on pathological input
        logger.debug("Could not clean %r: %s", text, e)
        return text


def classify_venue(pub_type: str | None, key: str | None) -> VenueType:
    """Explicit source type first, then the key prefix, then Unknown."""
    if pub_type in JOURNAL_TYPES:
        return "Journal"
    if pub_type in CONFERENCE_TYPES:
        return "Conference"
    if pub_type in EDITORSHIP_TYPES:
        return "Editorship"
    if key:
        if key.startswith("journals/"):
            return "Journal"
        if key.startswith("conf/"):
            return "Conference"
    return "Unknown"


def _author_name(entry: object) -> str:
    match entry:
        case str():
            return clean_text(entry).strip()
        case Mapping():
            text = entry.get("text")
            return clean_text(text).strip() if isinstance(text, str) else ""
        case _:
            return ""


def normalize_authors(raw: object) -> tuple[str, ...]:
    """Normalize the author field to a non-empty tuple of names.

    The source sends nothing, a single entry, or a list of entries, where an
    entry is either a plain string or a mapping with a "text" key.
    """
    match raw:
        case None:
            names: list[str] = []
        case list() | tuple():
            names = [_author_name(entry) for entry in raw]
        case str() | Mapping():
            names = [_author_name(raw)]
        case _:
            logger.debug("Unexpected author shape: %r", type(raw))
            names = []

    names = [n for n in names if n]
    return tuple(names) if names else (UNKNOWN_AUTHOR,)


def fallback_id() -> str:
    """Random id for hits without a source identifier.

    Unique enough within one session; not a stable identity.
    """
    return f"generated-{uuid.uuid4().hex}"
