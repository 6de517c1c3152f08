# domain/graph/pathfinder.py
import heapq
import math
import time

from dijkstra_map.domain.entities.geography import RoadGraph
from dijkstra_map.domain.entities.results import PathError, PathErrorKind, PathOutcome, PathSuccess
from dijkstra_map.domain.graph.projection import METERS_PER_UNIT, to_meters


# ------------------- Path Reconstruction ---------------------------
def reconstruct(prev: list[int | None], goal: int) -> list[int]:
    path = []
    v = goal
    while v is not None:
        path.append(v)
        v = prev[v]
    path.reverse()
    return path


# ------------------- Failure Classification ---------------------------
def classify_failure(start: int, end: int, graph: RoadGraph) -> PathError:
    """
    Heuristic only: blames directionality when the graph has one-way streets and
    either the start has no outgoing arcs or nothing at all points into end.
    It does not prove that the one-way flags are the cause.
    """
    adj = graph.adjacency
    one_way_issue = graph.graph_type.has_one_way_streets and (
        len(adj[start]) == 0 or not any(arc.target == end for row in adj for arc in row)
    )
    if one_way_issue:
        return PathError(
            PathErrorKind.ONE_WAY_BLOCKED,
            "Path blocked by one-way streets",
            "No path could be found because of street direction. Try selecting different nodes.",
        )
    return PathError(
        PathErrorKind.NO_PATH,
        "No path exists between the selected nodes",
        "The selected nodes are not connected in the graph.",
    )


# ------------------- Dijkstra ---------------------------
def shortest_path(
    start: int, end: int, graph: RoadGraph, *, meters_per_unit: float = METERS_PER_UNIT
) -> PathOutcome:
    n = len(graph.nodes)
    if graph.is_empty or not graph.has_index(start) or not graph.has_index(end):
        return PathError(
            PathErrorKind.INVALID_NODES,
            "Invalid nodes or empty graph",
            "Check that the graph was loaded and that the selected nodes are valid.",
        )

    t0 = time.perf_counter()
    adj = graph.adjacency
    dist = [math.inf] * n
    prev: list[int | None] = [None] * n
    visited = [False] * n
    visited_count = 0

    dist[start] = 0.0
    openh: list[tuple[float, int]] = [(0.0, start)]

    while openh:
        _, u = heapq.heappop(openh)
        # Stale entries are left in the heap: a popped node that is already
        # visited had its distance finalized at its first pop.
        if visited[u]:
            continue
        visited[u] = True
        visited_count += 1

        if u == end:
            break

        du = dist[u]
        for arc in adj[u]:
            alt = du + arc.weight
            if alt < dist[arc.target]:
                dist[arc.target] = alt
                prev[arc.target] = u
                heapq.heappush(openh, (alt, arc.target))

    elapsed_ms = (time.perf_counter() - t0) * 1000

    if math.isinf(dist[end]):
        return classify_failure(start, end, graph)

    return PathSuccess(
        distance=dist[end],
        distance_m=to_meters(dist[end], meters_per_unit=meters_per_unit),
        path=reconstruct(prev, end),
        visited_count=visited_count,
        elapsed_ms=elapsed_ms,
    )
