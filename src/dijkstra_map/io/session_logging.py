# io/session_logging.py
import json
import logging
import sys

from dijkstra_map.app.hooks import NoopHooks
from dijkstra_map.domain.entities.results import PathError
from dijkstra_map.io.recorder import Recorder
from dijkstra_map.io.session_events import GraphEditedEvent, GraphLoadedEvent, PathSearchedEvent

_EDIT_MESSAGES = {
    "remove_edge": "edge_removed",
    "synthesize": "edges_synthesized",
    "generate": "graph_generated",
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload)


def default_json_logger(name="dijkstra_map", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


class SessionLogging(NoopHooks):
    """
    One place to shape and emit structured logs and analytics events for a session.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or default_json_logger(level="DEBUG" if debug else level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def _record(self, ev):
        if self.recorder:
            self.recorder.emit(ev)

    # --------------------------------------------------------

    def graph_loaded(self, report, graph):
        skipped = sum(report.skipped.values())
        self._emit(
            "INFO",
            "graph_loaded",
            source=report.source,
            nodes=report.nodes,
            ways=report.ways,
            arcs=report.arcs,
            directed=graph.graph_type.is_directed,
            weighted=graph.graph_type.is_weighted,
            skipped=skipped,
        )
        self._record(
            GraphLoadedEvent(
                run_id=self.run_id,
                seq=self._next_seq(),
                name="graph_loaded",
                source=report.source,
                nodes=report.nodes,
                ways=report.ways,
                arcs=report.arcs,
                directed=graph.graph_type.is_directed,
                weighted=graph.graph_type.is_weighted,
                skipped=skipped,
            )
        )

    def load_failed(self, report):
        self._emit("ERROR", "load_failed", source=report.source, error=report.message)

    def graph_rebuilt(self, graph, *, reason):
        if self.debug:
            self._emit(
                "DEBUG",
                "graph_rebuilt",
                reason=reason,
                nodes=len(graph.nodes),
                arcs=graph.arc_count,
                skipped_segments=graph.skipped_segments,
            )

    def path_searched(self, start, end, outcome):
        if isinstance(outcome, PathError):
            self._emit(
                "WARNING",
                "path_failed",
                start=start,
                end=end,
                kind=outcome.kind.value,
                error=outcome.message,
            )
            ev = PathSearchedEvent(
                run_id=self.run_id,
                seq=self._next_seq(),
                name="path_failed",
                start=start,
                end=end,
                ok=False,
                error_kind=outcome.kind.value,
            )
        else:
            self._emit(
                "INFO",
                "path_found",
                start=start,
                end=end,
                distance=outcome.distance,
                hops=len(outcome.path) - 1,
                visited=outcome.visited_count,
                ms=round(outcome.elapsed_ms, 3),
            )
            ev = PathSearchedEvent(
                run_id=self.run_id,
                seq=self._next_seq(),
                name="path_found",
                start=start,
                end=end,
                ok=True,
                distance=outcome.distance,
                hops=len(outcome.path) - 1,
                visited=outcome.visited_count,
                elapsed_ms=outcome.elapsed_ms,
            )
        self._record(ev)

    def graph_edited(self, op, result):
        if result.ok:
            self._emit("INFO", _EDIT_MESSAGES[op], op=op, ways=len(result.ways), detail=result.message)
        else:
            self._emit("WARNING", "edit_rejected", op=op, error=result.message)
        self._record(
            GraphEditedEvent(
                run_id=self.run_id,
                seq=self._next_seq(),
                name="graph_edited",
                op=op,
                ok=result.ok,
                ways=len(result.ways),
                message=result.message,
            )
        )
