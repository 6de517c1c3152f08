# app/session.py
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from dijkstra_map.app.hooks import NoopHooks, SessionHooks
from dijkstra_map.app.protocols import GraphImporter, PathFinder, SpatialIndex, Triangulator
from dijkstra_map.app.selection import NodeSelection, SelectionChange
from dijkstra_map.app.viewport import ScalingParams, pick_node
from dijkstra_map.config.models import SessionModel
from dijkstra_map.domain.entities.geography import Node, RoadGraph, Way
from dijkstra_map.domain.entities.results import (
    EditResult,
    LoadReport,
    Nearest,
    PathError,
    PathErrorKind,
    PathOutcome,
)
from dijkstra_map.domain.graph.builder import build_graph
from dijkstra_map.domain.graph.connectivity import check_connectivity
from dijkstra_map.domain.graph.editor import remove_edge, synthesize_edges
from dijkstra_map.domain.graph.generation import generate_nodes
from dijkstra_map.domain.graph.pathfinder import shortest_path
from dijkstra_map.io.importers.parsed import GraphImportError
from dijkstra_map.io.report import map_stats, path_report
from dijkstra_map.runtime.rng import RNGRegistry

SUFFIX_FORMATS = {".osm": "osm", ".xml": "osm", ".poly": "poly"}


@dataclass
class Click:
    index: int | None
    change: SelectionChange | None = None
    outcome: PathOutcome | None = None


class GraphSession:
    """
    Owns the current graph snapshot and is its only mutator.

    Every load, generation or edit builds a fresh RoadGraph and swaps it in
    whole; queries always read a single snapshot. Not thread-safe: callers run
    one operation at a time.
    """

    def __init__(
        self,
        cfg: SessionModel,
        *,
        importers: dict[str, GraphImporter],
        make_index: Callable[[Sequence[Node]], SpatialIndex],
        triangulator: Triangulator,
        rng: RNGRegistry,
        hooks: SessionHooks | None = None,
        finder: PathFinder = shortest_path,
    ):
        self.cfg = cfg
        self.importers = importers
        self.make_index = make_index
        self.triangulator = triangulator
        self.rng = rng
        self.hooks = hooks or NoopHooks()
        self.finder = finder

        self.graph = RoadGraph()
        self.source = ""
        self.index: SpatialIndex = make_index(())
        self.scaling: ScalingParams | None = None
        self.selection = NodeSelection()
        self.last_outcome: PathOutcome | None = None
        self.last_query: tuple[int, int] | None = None
        self._generation_round = 0

    # ---------------- snapshot management -----------------

    def _install(self, nodes: Sequence[Node], ways: Sequence[Way], *, reason: str) -> RoadGraph:
        graph = build_graph(nodes, ways)
        self.graph = graph
        self.index = self.make_index(graph.nodes)
        self.scaling = ScalingParams.fit(graph.nodes, self.cfg.viewport)
        self.selection.clear()
        self.last_outcome = self.last_query = None
        self.hooks.graph_rebuilt(graph, reason=reason)
        return graph

    def reset(self) -> None:
        self.source = ""
        self._install((), (), reason="reset")

    # ---------------- loading -----------------

    def load(self, text: str, fmt: str) -> LoadReport:
        importer = self.importers.get(fmt)
        if importer is None:
            report = LoadReport(ok=False, message=f"Unsupported map format {fmt!r}", source=fmt)
            self.hooks.load_failed(report)
            return report
        try:
            parsed = importer.parse(text)
        except GraphImportError as exc:
            report = LoadReport(ok=False, message=str(exc), source=fmt)
            self.hooks.load_failed(report)
            return report

        graph = self._install(parsed.nodes, parsed.ways, reason=f"load:{fmt}")
        self.source = parsed.source
        skipped = dict(parsed.skipped)
        if graph.skipped_segments:
            skipped["segment_out_of_range"] = graph.skipped_segments
        report = LoadReport(
            ok=True,
            message=map_stats(graph, parsed.source),
            source=parsed.source,
            nodes=len(graph.nodes),
            ways=len(graph.ways),
            arcs=graph.arc_count,
            skipped=skipped,
        )
        self.hooks.graph_loaded(report, graph)
        return report

    def load_file(self, path: str | Path, fmt: str | None = None) -> LoadReport:
        path = Path(path)
        fmt = fmt or SUFFIX_FORMATS.get(path.suffix.lower())
        if fmt is None:
            report = LoadReport(
                ok=False, message=f"Cannot tell map format of {path.name!r}", source=""
            )
            self.hooks.load_failed(report)
            return report
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            report = LoadReport(ok=False, message=f"Could not read {path}: {exc}", source=fmt)
            self.hooks.load_failed(report)
            return report
        return self.load(text, fmt)

    def generate(self, count: int | None = None) -> EditResult:
        """Random nodes in the configured box, connected by triangulation."""
        g = self.cfg.generation
        count = g.count if count is None else count
        if count < 3:
            result = EditResult(ok=False, message=f"Generation needs at least 3 nodes, got {count}")
            self.hooks.graph_edited("generate", result)
            return result
        self._generation_round += 1
        rng = self.rng.substream("generation", self._generation_round)
        nodes = generate_nodes(count, g.width, g.height, rng, margin=g.margin)
        result = synthesize_edges(nodes, self.triangulator)
        if result.ok:
            self._install(nodes, result.ways, reason="generate")
            self.source = "generated"
        self.hooks.graph_edited("generate", result)
        return result

    # ---------------- queries -----------------

    def shortest_path(self, start: int, end: int) -> PathOutcome:
        outcome = self.finder(
            start, end, self.graph, meters_per_unit=self.cfg.projection.meters_per_unit
        )
        self.last_outcome, self.last_query = outcome, (start, end)
        self.hooks.path_searched(start, end, outcome)
        return outcome

    def route(self, from_id: str, to_id: str) -> PathOutcome:
        a, b = self.graph.index_of(from_id), self.graph.index_of(to_id)
        if a is None or b is None:
            missing = ", ".join(i for i, idx in ((from_id, a), (to_id, b)) if idx is None)
            outcome = PathError(
                PathErrorKind.INVALID_NODES,
                "Invalid nodes or empty graph",
                f"Unknown node id(s): {missing}",
            )
            self.last_outcome, self.last_query = outcome, None
            self.hooks.path_searched(-1 if a is None else a, -1 if b is None else b, outcome)
            return outcome
        return self.shortest_path(a, b)

    def nearest(self, x: float, y: float, max_distance: float | None = None) -> Nearest | None:
        return self.index.nearest(x, y, max_distance=max_distance)

    def pick(self, px: float, py: float, display_scale=(1.0, 1.0)) -> int | None:
        return pick_node(
            self.index, self.scaling, px, py, display_scale=display_scale, cfg=self.cfg.viewport
        )

    def select(self, index: int) -> Click:
        change = self.selection.toggle(index)
        self.last_outcome = self.last_query = None
        outcome = None
        if self.selection.complete:
            outcome = self.shortest_path(self.selection.origin, self.selection.destination)
        return Click(index=index, change=change, outcome=outcome)

    def click(self, px: float, py: float, display_scale=(1.0, 1.0)) -> Click:
        """Canvas click: pick the nearest node and advance the selection."""
        index = self.pick(px, py, display_scale)
        if index is None:
            return Click(index=None)
        return self.select(index)

    def connectivity(self) -> PathError | None:
        return check_connectivity(self.graph)

    # ---------------- edits -----------------

    def remove_edge(self, a: int, b: int) -> EditResult:
        result = remove_edge(self.graph.ways, a, b)
        if result.ok:
            self._install(self.graph.nodes, result.ways, reason="remove_edge")
        self.hooks.graph_edited("remove_edge", result)
        return result

    def synthesize_edges(self) -> EditResult:
        result = synthesize_edges(self.graph.nodes, self.triangulator)
        if result.ok:
            self._install(self.graph.nodes, result.ways, reason="synthesize")
        self.hooks.graph_edited("synthesize", result)
        return result

    # ---------------- presentation helpers -----------------

    def stats(self) -> str:
        return map_stats(self.graph, self.source)

    def report(self) -> str | None:
        if self.last_outcome is None:
            return None
        if self.last_query is None:
            return self.last_outcome.message
        start, end = self.last_query
        return path_report(self.graph, start, end, self.last_outcome)
