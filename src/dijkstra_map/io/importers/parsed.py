from collections import Counter
from dataclasses import dataclass, field

from dijkstra_map.domain.entities.geography import Node, Way


class GraphImportError(ValueError):
    """The document could not be parsed at all."""


@dataclass
class ParsedNetwork:
    nodes: list[Node]
    ways: list[Way]
    source: str = ""  # "osm" | "poly" | "generated"
    skipped: Counter = field(default_factory=Counter)  # record kind -> count
