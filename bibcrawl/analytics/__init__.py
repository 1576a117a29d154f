from .collaboration import build_collaboration_graph
from .keywords import extract_keywords, generate_correlation_heatmap, generate_trends
from .similarity import find_similar
from .stats import DashboardSummary, summarize, venue_type_distribution, year_distribution
from .tokenize import STOP_WORDS, tokenize

__all__ = [
    "tokenize",
    "STOP_WORDS",
    "extract_keywords",
    "generate_trends",
    "generate_correlation_heatmap",
    "build_collaboration_graph",
    "find_similar",
    "year_distribution",
    "venue_type_distribution",
    "summarize",
    "DashboardSummary",
]
