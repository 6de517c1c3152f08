import logging
import math
from collections.abc import Sequence

from dijkstra_map.domain.entities.geography import Arc, GraphType, Node, RoadGraph, Way

logger = logging.getLogger(__name__)


def euclid(a: Node, b: Node) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def build_graph(nodes: Sequence[Node], ways: Sequence[Way]) -> RoadGraph:
    """Derive the adjacency list and GraphType from nodes + ways.

    Segments that reference an index outside [0, n) are skipped and counted
    rather than failing the whole build: a partially corrupt import still gives
    a usable graph. Parallel arcs are kept; the search keeps the shortest.
    """
    n = len(nodes)
    rows: list[list[Arc]] = [[] for _ in range(n)]
    has_oneway = False
    skipped = 0

    for way in ways:
        for u, v in way.segments():
            if not (0 <= u < n and 0 <= v < n):
                skipped += 1
                continue
            w = euclid(nodes[u], nodes[v])
            rows[u].append(Arc(v, w))
            if way.oneway:
                has_oneway = True
            else:
                rows[v].append(Arc(u, w))

    if skipped:
        logger.warning("Skipped %d segment(s) with out-of-range node indices", skipped)

    return RoadGraph(
        nodes=tuple(nodes),
        ways=tuple(ways),
        adjacency=tuple(tuple(r) for r in rows),
        graph_type=GraphType(is_directed=has_oneway, has_one_way_streets=has_oneway),
        skipped_segments=skipped,
    )


def expected_arc_count(ways: Sequence[Way]) -> int:
    # one-way segment -> 1 arc, two-way -> 2
    return sum((len(w.nodes) - 1) * (1 if w.oneway else 2) for w in ways)
