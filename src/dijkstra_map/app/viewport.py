# app/viewport.py
from collections.abc import Sequence
from dataclasses import dataclass

from dijkstra_map.app.protocols import SpatialIndex
from dijkstra_map.config.models import ViewportModel
from dijkstra_map.domain.entities.geography import Node


@dataclass(frozen=True)
class ScalingParams:
    """Plane <-> canvas mapping, recomputed once per graph; read-only for callers."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    scale_x: float
    scale_y: float
    padding: float
    canvas_width: int
    canvas_height: int

    @classmethod
    def fit(cls, nodes: Sequence[Node], cfg: ViewportModel | None = None) -> "ScalingParams | None":
        cfg = cfg or ViewportModel()
        if not nodes:
            return None
        xs = [n.x for n in nodes]
        ys = [n.y for n in nodes]
        min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
        dx, dy = max_x - min_x, max_y - min_y
        return cls(
            min_x=min_x,
            max_x=max_x,
            min_y=min_y,
            max_y=max_y,
            scale_x=1.0 if dx == 0 else (cfg.canvas_width - 2 * cfg.padding) / dx,
            scale_y=1.0 if dy == 0 else (cfg.canvas_height - 2 * cfg.padding) / dy,
            padding=cfg.padding,
            canvas_width=cfg.canvas_width,
            canvas_height=cfg.canvas_height,
        )

    @property
    def degenerate(self) -> bool:
        return self.max_x == self.min_x and self.max_y == self.min_y

    def to_device(self, x: float, y: float) -> tuple[float, float]:
        if self.degenerate:
            return self.canvas_width / 2, self.canvas_height / 2
        return (
            self.padding + (x - self.min_x) * self.scale_x,
            self.padding + (y - self.min_y) * self.scale_y,
        )

    def to_model(
        self, px: float, py: float, display_scale: tuple[float, float] = (1.0, 1.0)
    ) -> tuple[float, float]:
        """Displayed pixel (px, py) -> model units.

        display_scale is (shown width / canvas width, shown height / canvas height).
        """
        sx, sy = display_scale
        ix, iy = px / sx, py / sy
        # coincident nodes are drawn at the canvas centre, not at the padding corner
        ox, oy = (
            (self.canvas_width / 2, self.canvas_height / 2)
            if self.degenerate
            else (self.padding, self.padding)
        )
        return (
            (ix - ox) / self.scale_x + self.min_x,
            (iy - oy) / self.scale_y + self.min_y,
        )

    def pick_radius(
        self, display_scale: tuple[float, float] = (1.0, 1.0), cfg: ViewportModel | None = None
    ) -> float:
        """Largest model-unit distance that still counts as clicking a node."""
        cfg = cfg or ViewportModel()
        s = min(display_scale)
        threshold_px = max(cfg.pick_radius_px / s, cfg.min_threshold_px) * cfg.slack
        px_per_unit = min(abs(self.scale_x), abs(self.scale_y)) * s
        return threshold_px / px_per_unit


def pick_node(
    index: SpatialIndex,
    params: ScalingParams | None,
    px: float,
    py: float,
    *,
    display_scale: tuple[float, float] = (1.0, 1.0),
    cfg: ViewportModel | None = None,
) -> int | None:
    if params is None:
        return None
    x, y = params.to_model(px, py, display_scale)
    hit = index.nearest(x, y, max_distance=params.pick_radius(display_scale, cfg))
    return None if hit is None else hit.index
