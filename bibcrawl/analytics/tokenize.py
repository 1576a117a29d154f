# bibcrawl/analytics/tokenize.py
"""Text-to-terms pipeline shared by every analytics function."""

import re

# English function words plus generic academic boilerplate.
STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "from", "up", "about", "into", "over", "after", "is", "are",
        "was", "were", "be", "been", "being", "have", "has", "had", "do", "does",
        "did", "will", "would", "should", "can", "could", "this", "that", "these",
        "those", "it", "its", "they", "their", "we", "our", "which", "who", "what",
        "when", "where", "how", "why", "based", "using", "via", "through",
        "approach", "method", "system", "analysis", "survey", "review", "study",
        "towards", "new", "novel", "application", "performance", "evaluation",
        "data", "model", "algorithm", "network", "networks", "learning", "problem",
        "problems", "efficient", "multi", "large", "scale", "real", "time", "under",
        "during", "between", "among", "proposed", "framework", "architecture",
    }
)  # fmt: skip

_PUNCTUATION = re.compile(r"[^\w\s-]")
MIN_TERM_LENGTH = 3


def tokenize(text: str) -> list[str]:
    """Split text into lowercase keyword terms, in order of appearance.

    Punctuation is removed except hyphens inside a word; terms shorter than
    three characters, pure numbers and stop words are dropped.

    Example:
        >>> tokenize("Graph Neural Networks for Large-Scale Traffic (2021)")
        ['graph', 'neural', 'large-scale', 'traffic']
    """
    cleaned = _PUNCTUATION.sub("", text.lower())
    terms = []
    for raw in cleaned.split():
        term = raw.strip("-")
        if len(term) < MIN_TERM_LENGTH or term.isdigit() or term in STOP_WORDS:
            continue
        terms.append(term)
    return terms
