# runtime/registries.py
from collections.abc import Callable, Sequence

from dijkstra_map.app.protocols import GraphImporter, SpatialIndex, Triangulator
from dijkstra_map.config.models import (
    ProjectionModel,
    SpatialIndexKDTreeModel,
    SpatialIndexLinearModel,
    SpatialIndexUnion,
    TriangulatorDelaunayModel,
    TriangulatorUnion,
)
from dijkstra_map.domain.entities.geography import Node
from dijkstra_map.domain.graph.spatial import KDTreeIndex, LinearScanIndex
from dijkstra_map.domain.graph.triangulation import DelaunayTriangulator
from dijkstra_map.io.importers.osm_xml import OsmXmlImporter
from dijkstra_map.io.importers.poly_text import PolyTextImporter

# a spatial index is rebuilt per graph, so the registry hands out a factory over nodes
SpatialIndexBuilder = Callable[[Sequence[Node]], SpatialIndex]
SpatialIndexFactory = Callable[[SpatialIndexUnion, dict], SpatialIndexBuilder]
TriangulatorFactory = Callable[[TriangulatorUnion, dict], Triangulator]
ImporterFactory = Callable[[ProjectionModel], GraphImporter]

_spatial_registry: dict[str, SpatialIndexFactory] = {}
_triangulator_registry: dict[str, TriangulatorFactory] = {}
_importer_registry: dict[str, ImporterFactory] = {}


# ------------------- Spatial indexes ---------------------------


def register_spatial_index(kind: str):
    def deco(fn: SpatialIndexFactory):
        _spatial_registry[kind] = fn
        return fn

    return deco


def make_spatial_index(cfg: SpatialIndexUnion, *, deps: dict | None = None) -> SpatialIndexBuilder:
    try:
        factory = _spatial_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown spatial index kind {cfg.kind!r}")
    return factory(cfg, deps or {})


@register_spatial_index("linear")
def _make_linear(cfg: SpatialIndexLinearModel, deps):
    return LinearScanIndex


@register_spatial_index("kdtree")
def _make_kdtree(cfg: SpatialIndexKDTreeModel, deps):
    return lambda nodes: KDTreeIndex(nodes, leafsize=cfg.leafsize)


# ------------------- Triangulators ---------------------------


def register_triangulator(kind: str):
    def deco(fn: TriangulatorFactory):
        _triangulator_registry[kind] = fn
        return fn

    return deco


def make_triangulator(cfg: TriangulatorUnion, *, deps: dict | None = None) -> Triangulator:
    try:
        factory = _triangulator_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown triangulator kind {cfg.kind!r}")
    return factory(cfg, deps or {})


@register_triangulator("delaunay")
def _make_delaunay(cfg: TriangulatorDelaunayModel, deps):
    return DelaunayTriangulator(qhull_options=cfg.qhull_options)


# ------------------- Importers ---------------------------


def register_importer(fmt: str):
    def deco(fn: ImporterFactory):
        _importer_registry[fmt] = fn
        return fn

    return deco


def make_importer(fmt: str, projection: ProjectionModel | None = None) -> GraphImporter:
    try:
        factory = _importer_registry[fmt]
    except KeyError:
        raise ValueError(f"Unknown map format {fmt!r}; expected one of {sorted(_importer_registry)}")
    return factory(projection or ProjectionModel())


def importer_formats() -> list[str]:
    return sorted(_importer_registry)


@register_importer("osm")
def _make_osm(projection: ProjectionModel) -> GraphImporter:
    return OsmXmlImporter(
        radius_m=projection.earth_radius_m, meters_per_unit=projection.meters_per_unit
    )


@register_importer("poly")
def _make_poly(projection: ProjectionModel) -> GraphImporter:
    return PolyTextImporter()
