import pytest

from dijkstra_map.config.models import (
    ProjectionModel,
    SpatialIndexKDTreeModel,
    SpatialIndexLinearModel,
    TriangulatorDelaunayModel,
)
from dijkstra_map.domain.graph.spatial import KDTreeIndex, LinearScanIndex
from dijkstra_map.domain.graph.triangulation import DelaunayTriangulator
from dijkstra_map.io.importers.osm_xml import OsmXmlImporter
from dijkstra_map.io.importers.poly_text import PolyTextImporter
from dijkstra_map.runtime.registries import (
    importer_formats,
    make_importer,
    make_spatial_index,
    make_triangulator,
)


def test_spatial_index_kinds(square_nodes):
    assert isinstance(make_spatial_index(SpatialIndexLinearModel())(square_nodes), LinearScanIndex)
    kd = make_spatial_index(SpatialIndexKDTreeModel(leafsize=2))(square_nodes)
    assert isinstance(kd, KDTreeIndex)
    assert kd.tree.leafsize == 2


def test_triangulator_kind():
    tri = make_triangulator(TriangulatorDelaunayModel(qhull_options="QJ"))
    assert isinstance(tri, DelaunayTriangulator)
    assert tri.qhull_options == "QJ"


def test_importers_follow_projection_settings():
    assert importer_formats() == ["osm", "poly"]
    osm = make_importer("osm", ProjectionModel(meters_per_unit=4.0))
    assert isinstance(osm, OsmXmlImporter)
    assert osm.meters_per_unit == 4.0
    assert isinstance(make_importer("poly"), PolyTextImporter)


def test_unknown_format_raises():
    with pytest.raises(ValueError, match="Unknown map format"):
        make_importer("geojson")
