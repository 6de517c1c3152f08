import numpy as np

from dijkstra_map.domain.entities.geography import Node


def generate_nodes(
    count: int, width: float, height: float, rng: np.random.Generator, *, margin: float = 0.0
) -> list[Node]:
    """Uniform random nodes inside [margin, width - margin] x [margin, height - margin]."""
    if count < 0:
        raise ValueError("count must be >= 0")
    x0, x1 = margin, width - margin
    y0, y1 = margin, height - margin
    if x1 <= x0 or y1 <= y0:
        raise ValueError("margin leaves no room for nodes")
    xs = rng.uniform(x0, x1, size=count)
    ys = rng.uniform(y0, y1, size=count)
    return [Node(id=str(i), x=float(x), y=float(y)) for i, (x, y) in enumerate(zip(xs, ys))]
