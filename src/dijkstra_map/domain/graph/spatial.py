import math
from collections.abc import Sequence

import numpy as np
from scipy.spatial import cKDTree

from dijkstra_map.app.protocols import SpatialIndex
from dijkstra_map.domain.entities.geography import Node
from dijkstra_map.domain.entities.results import Nearest


def _coords(nodes: Sequence[Node]) -> np.ndarray:
    if not nodes:
        return np.empty((0, 2), dtype=np.float64)
    return np.array([(n.x, n.y) for n in nodes], dtype=np.float64)


def _within(d: float, max_distance: float | None) -> bool:
    # exact hits always count, otherwise strictly inside the radius
    return max_distance is None or d == 0.0 or d < max_distance


class LinearScanIndex(SpatialIndex):
    """Brute force over every node; fine up to tens of thousands of nodes."""

    def __init__(self, nodes: Sequence[Node]):
        self.xy = _coords(nodes)

    def __len__(self):
        return len(self.xy)

    def nearest(self, x, y, max_distance=None):
        if len(self.xy) == 0:
            return None
        d2 = (self.xy[:, 0] - x) ** 2 + (self.xy[:, 1] - y) ** 2
        i = int(np.argmin(d2))  # first minimum wins on ties
        d = math.sqrt(float(d2[i]))
        return Nearest(i, d) if _within(d, max_distance) else None


class KDTreeIndex(SpatialIndex):
    """Same contract as LinearScanIndex, backed by scipy's cKDTree."""

    def __init__(self, nodes: Sequence[Node], *, leafsize: int = 16):
        self.xy = _coords(nodes)
        self.tree = cKDTree(self.xy, leafsize=leafsize) if len(self.xy) else None

    def __len__(self):
        return len(self.xy)

    def nearest(self, x, y, max_distance=None):
        if self.tree is None:
            return None
        d, i = self.tree.query((x, y), k=1)
        d = float(d)
        return Nearest(int(i), d) if _within(d, max_distance) else None
