from dataclasses import dataclass, field
from enum import Enum

from dijkstra_map.domain.entities.geography import Way


class PathErrorKind(Enum):
    INVALID_NODES = "InvalidNodes"
    NO_PATH = "NoPath"
    ONE_WAY_BLOCKED = "OneWayBlocked"
    DISCONNECTED_GRAPH = "DisconnectedGraph"


@dataclass(frozen=True)
class PathSuccess:
    distance: float  # model units
    distance_m: float
    path: list[int]
    visited_count: int
    elapsed_ms: float

    ok = True


@dataclass(frozen=True)
class PathError:
    kind: PathErrorKind
    message: str
    details: str = ""

    ok = False


PathOutcome = PathSuccess | PathError


@dataclass(frozen=True)
class Nearest:
    index: int
    distance: float  # model units


@dataclass(frozen=True)
class EditResult:
    ok: bool
    message: str
    ways: tuple[Way, ...] = ()  # the resulting way set when ok
    removed: Way | None = None
    added: int = 0


@dataclass(frozen=True)
class LoadReport:
    ok: bool
    message: str
    source: str = ""
    nodes: int = 0
    ways: int = 0
    arcs: int = 0
    skipped: dict[str, int] = field(default_factory=dict)
