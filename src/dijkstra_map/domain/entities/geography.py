from dataclasses import dataclass, field


# Core graph types shared by builder, search and editor
@dataclass(frozen=True)
class Node:
    id: str  # external identifier, display only
    x: float  # model units in the normalized plane
    y: float
    lat: float | None = None  # original geography, kept for reports
    lon: float | None = None


@dataclass(frozen=True)
class Way:
    nodes: tuple[int, ...]  # node indices, len >= 2
    oneway: bool = False

    @property
    def endpoints(self) -> tuple[int, int]:
        return self.nodes[0], self.nodes[-1]

    def segments(self):
        yield from zip(self.nodes, self.nodes[1:])


@dataclass(frozen=True)
class Arc:
    target: int
    weight: float  # euclidean length in model units


@dataclass(frozen=True)
class GraphType:
    is_directed: bool = False
    is_weighted: bool = True
    has_one_way_streets: bool = False


Adjacency = tuple[tuple[Arc, ...], ...]


@dataclass(frozen=True)
class RoadGraph:
    """Immutable snapshot of nodes + ways and the adjacency derived from them."""

    nodes: tuple[Node, ...] = ()
    ways: tuple[Way, ...] = ()
    adjacency: Adjacency = ()
    graph_type: GraphType = field(default_factory=GraphType)
    skipped_segments: int = 0

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes or not self.adjacency

    @property
    def arc_count(self) -> int:
        return sum(len(row) for row in self.adjacency)

    def has_index(self, i: int) -> bool:
        return 0 <= i < len(self.nodes)

    def index_of(self, node_id: str) -> int | None:
        for i, n in enumerate(self.nodes):
            if n.id == node_id:
                return i
        return None
