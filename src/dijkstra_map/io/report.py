# io/report.py
from dijkstra_map.domain.entities.geography import Node, RoadGraph
from dijkstra_map.domain.entities.results import PathError, PathOutcome
from dijkstra_map.domain.graph.builder import expected_arc_count

RULE = "-" * 33

SOURCE_LABELS = {"osm": ".osm file", "poly": ".poly file", "generated": "Generated graph"}


def map_stats(graph: RoadGraph, source: str = "") -> str:
    label = SOURCE_LABELS.get(source, "Graph")
    return (
        f"{label} converted and graph built.\n"
        f"Nodes: {len(graph.nodes)}\n"
        f"Arcs: {expected_arc_count(graph.ways)}"
    )


def _geo(n: Node) -> str:
    if n.lat is None or n.lon is None:
        return f"x: {n.x:.3f}, y: {n.y:.3f}"
    return f"Lat: {n.lat:.5f}, Lon: {n.lon:.5f}"


def path_report(graph: RoadGraph, start: int, end: int, outcome: PathOutcome) -> str:
    if isinstance(outcome, PathError):
        return outcome.message
    nodes = graph.nodes
    a, b = nodes[start], nodes[end]
    chain = " -> ".join(nodes[i].id for i in outcome.path)
    coords = "\n".join(f"Node {nodes[i].id} ({_geo(nodes[i])})" for i in outcome.path)
    return (
        "Shortest path:\n"
        f"Origin: Node {a.id} ({_geo(a)})\n"
        f"Destination: Node {b.id} ({_geo(b)})\n"
        f"{RULE}\n"
        f"Distance: {outcome.distance:.3f} units ({outcome.distance_m:.2f} m)\n"
        f"Processing time: {outcome.elapsed_ms:.2f} ms\n"
        f"Visited nodes: {outcome.visited_count}\n"
        f"{RULE}\n"
        f"Path (IDs):\n{chain}\n"
        f"{RULE}\n"
        f"Coordinates:\n{coords}"
    )
