# domain/graph/connectivity.py
from collections import deque

from dijkstra_map.domain.entities.geography import RoadGraph
from dijkstra_map.domain.entities.results import PathError, PathErrorKind


# ------------------- Weak Components ---------------------------
def weak_components(graph: RoadGraph) -> list[list[int]]:
    """Connected components ignoring arc direction, each sorted by index."""
    n = len(graph.nodes)
    undirected: list[set[int]] = [set() for _ in range(n)]
    for u, row in enumerate(graph.adjacency):
        for arc in row:
            undirected[u].add(arc.target)
            undirected[arc.target].add(u)

    seen = [False] * n
    comps = []
    for s in range(n):
        if seen[s]:
            continue
        seen[s] = True
        q = deque([s])
        comp = []
        while q:
            u = q.popleft()
            comp.append(u)
            for v in undirected[u]:
                if not seen[v]:
                    seen[v] = True
                    q.append(v)
        comps.append(sorted(comp))
    return comps


def check_connectivity(graph: RoadGraph) -> PathError | None:
    if graph.is_empty:
        return PathError(
            PathErrorKind.INVALID_NODES,
            "Invalid nodes or empty graph",
            "Load or generate a graph first.",
        )
    comps = weak_components(graph)
    if len(comps) <= 1:
        return None
    isolated = sum(1 for c in comps if len(c) == 1)
    return PathError(
        PathErrorKind.DISCONNECTED_GRAPH,
        "The graph is not connected",
        f"{len(comps)} components ({isolated} isolated node(s)); "
        f"largest has {max(len(c) for c in comps)} of {len(graph.nodes)} nodes.",
    )
