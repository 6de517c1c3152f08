import logging
from collections.abc import Sequence

from dijkstra_map.app.protocols import Triangulator
from dijkstra_map.domain.entities.geography import Node, Way
from dijkstra_map.domain.entities.results import EditResult

logger = logging.getLogger(__name__)


def remove_edge(ways: Sequence[Way], a: int, b: int) -> EditResult:
    """Drop the first way whose endpoints are {a, b}, in either order."""
    target = {a, b}
    for i, way in enumerate(ways):
        if set(way.endpoints) == target:
            kept = tuple(ways[:i]) + tuple(ways[i + 1 :])
            return EditResult(
                ok=True, message=f"Removed edge {a} - {b}", ways=kept, removed=way
            )
    return EditResult(ok=False, message=f"Edge {a} - {b} not found", ways=tuple(ways))


def triangle_edges(triangles) -> list[tuple[int, int]]:
    """Unique unordered (i, j), i < j, in first-seen order."""
    seen: set[tuple[int, int]] = set()
    out = []
    for tri in triangles:
        i, j, k = (int(v) for v in tri)
        for u, v in ((i, j), (j, k), (k, i)):
            key = (u, v) if u < v else (v, u)
            if u == v or key in seen:
                continue
            seen.add(key)
            out.append(key)
    return out


def synthesize_edges(nodes: Sequence[Node], triangulator: Triangulator) -> EditResult:
    """Replace the way set with the edges of a triangulation over all nodes."""
    if len(nodes) < 3:
        return EditResult(
            ok=False, message=f"Triangulation needs at least 3 nodes, got {len(nodes)}"
        )
    try:
        tris = triangulator.triangles([(n.x, n.y) for n in nodes])
    except ValueError as exc:
        logger.warning("Triangulation rejected: %s", exc)
        return EditResult(ok=False, message=str(exc))

    ways = tuple(Way((u, v), oneway=False) for u, v in triangle_edges(tris))
    return EditResult(
        ok=True,
        message=f"Synthesized {len(ways)} edges from {len(tris)} triangles",
        ways=ways,
        added=len(ways),
    )
