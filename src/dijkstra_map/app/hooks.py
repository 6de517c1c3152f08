# app/hooks.py
from typing import Protocol

from dijkstra_map.domain.entities.geography import RoadGraph
from dijkstra_map.domain.entities.results import EditResult, LoadReport, PathOutcome


class SessionHooks(Protocol):
    def graph_loaded(self, report: LoadReport, graph: RoadGraph): ...
    def load_failed(self, report: LoadReport): ...
    def graph_rebuilt(self, graph: RoadGraph, *, reason: str): ...
    def path_searched(self, start: int, end: int, outcome: PathOutcome): ...
    def graph_edited(self, op: str, result: EditResult): ...


class NoopHooks:
    def graph_loaded(self, *_, **__):
        pass

    def load_failed(self, *_, **__):
        pass

    def graph_rebuilt(self, *_, **__):
        pass

    def path_searched(self, *_, **__):
        pass

    def graph_edited(self, *_, **__):
        pass
