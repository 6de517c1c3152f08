# dijkstra_map/io/session_events.py

from dataclasses import dataclass
from typing import Literal


# Base type for analytics events emitted by a session
@dataclass
class SessionEvent:
    run_id: str
    seq: int  # per-session sequence (for total ordering)
    name: str  # stable event name


@dataclass
class GraphLoadedEvent(SessionEvent):
    source: str
    nodes: int
    ways: int
    arcs: int
    directed: bool
    weighted: bool = True
    skipped: int = 0


@dataclass
class PathSearchedEvent(SessionEvent):
    start: int
    end: int
    ok: bool
    distance: float | None = None
    hops: int | None = None
    visited: int | None = None
    elapsed_ms: float | None = None
    error_kind: str | None = None


@dataclass
class GraphEditedEvent(SessionEvent):
    op: Literal["remove_edge", "synthesize", "generate"]
    ok: bool
    ways: int
    message: str = ""
