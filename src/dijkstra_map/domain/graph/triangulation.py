import numpy as np
from scipy.spatial import Delaunay, QhullError

from dijkstra_map.app.protocols import Triangulator


class DelaunayTriangulator(Triangulator):
    """Delaunay triangulation through scipy (Qhull)."""

    def __init__(self, qhull_options: str | None = None):
        self.qhull_options = qhull_options

    def triangles(self, points):
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"expected (n, 2) points, got shape {pts.shape}")
        if len(pts) < 3:
            raise ValueError("at least 3 points are required")
        try:
            tri = Delaunay(pts, qhull_options=self.qhull_options)
        except QhullError as exc:
            # collinear / fully coincident inputs
            raise ValueError(f"points cannot be triangulated: {exc}") from exc
        return np.asarray(tri.simplices, dtype=np.int64)
