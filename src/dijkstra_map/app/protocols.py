from typing import Protocol, runtime_checkable

import numpy as np

from dijkstra_map.domain.entities.geography import RoadGraph
from dijkstra_map.domain.entities.results import Nearest, PathOutcome


# ------------- Engine --------------------
@runtime_checkable
class SpatialIndex(Protocol):
    """
    Responsibilities:
    • Answer "nearest node to (x, y)" in model units.
    • Reject points whose nearest node is not strictly closer than max_distance
      (a node at distance 0 is always accepted).
    Implementations must agree on the result for the same node set.
    """

    def nearest(self, x: float, y: float, max_distance: float | None = None) -> Nearest | None: ...


@runtime_checkable
class Triangulator(Protocol):
    """
    Planar triangulation over 2-D points.
    Returns an (m, 3) int array of point indices, one row per triangle.
    Raises ValueError when the points admit no triangulation (e.g. collinear).
    """

    def triangles(self, points: np.ndarray) -> np.ndarray: ...


@runtime_checkable
class PathFinder(Protocol):
    def __call__(
        self, start: int, end: int, graph: RoadGraph, *, meters_per_unit: float = 2.0
    ) -> PathOutcome: ...


# ------------- Collaborators --------------------
@runtime_checkable
class GraphImporter(Protocol):
    """
    Parse a textual map document into nodes + ways for the graph builder.
    Malformed records are skipped (and counted); an unparsable document raises
    GraphImportError.
    """

    def parse(self, text: str): ...

