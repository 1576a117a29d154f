# bibcrawl/analytics/collaboration.py
from collections import Counter
from collections.abc import Sequence
from itertools import combinations

from bibcrawl.models import CollaborationEdge, CollaborationGraph, CollaborationNode, Record


def build_collaboration_graph(records: Sequence[Record], top_n: int = 20) -> CollaborationGraph:
    """Co-authorship graph induced on the `top_n` most prolific authors.

    Every pair of authors on a paper counts once for that paper, not just
    adjacent names. Edges touching an author outside the top set are dropped.
    """
    paper_counts: Counter[str] = Counter()
    pair_counts: Counter[tuple[str, str]] = Counter()

    for record in records:
        paper_counts.update(record.authors)
        for a, b in combinations(record.authors, 2):
            if a == b:
                continue
            pair_counts[(a, b) if a < b else (b, a)] += 1

    ranked = sorted(paper_counts.items(), key=lambda item: item[1], reverse=True)[:top_n]
    nodes = tuple(
        CollaborationNode(author_id=name, display_name=name, paper_count=count)
        for name, count in ranked
    )
    top = {node.author_id for node in nodes}

    edges = tuple(
        CollaborationEdge(author_a=a, author_b=b, co_publication_count=count)
        for (a, b), count in pair_counts.items()
        if a in top and b in top
    )
    return CollaborationGraph(nodes=nodes, edges=edges)
