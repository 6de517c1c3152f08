import math

import pytest

from dijkstra_map.domain.graph.builder import build_graph
from dijkstra_map.io.importers.osm_xml import OsmXmlImporter
from dijkstra_map.io.importers.parsed import GraphImportError
from dijkstra_map.io.importers.poly_text import PolyTextImporter

# ---------- OSM XML


def test_osm_nodes_and_ways(osm_text):
    net = OsmXmlImporter().parse(osm_text)
    assert net.source == "osm"
    assert [n.id for n in net.nodes] == ["101", "102", "103", "104"]
    assert [(w.nodes, w.oneway) for w in net.ways] == [((0, 1, 2), False), ((2, 3), True)]
    assert not net.skipped


def test_osm_coordinates_are_normalized_and_flipped(osm_text):
    nodes = OsmXmlImporter().parse(osm_text).nodes
    assert min(n.x for n in nodes) == 0.0
    assert min(n.y for n in nodes) == 0.0
    # northern nodes (103, 104) end up at the top of the plane
    assert nodes[3].y == pytest.approx(0.0)
    assert nodes[0].y > nodes[3].y
    assert nodes[0].lat == pytest.approx(-23.55)
    assert nodes[0].lon == pytest.approx(-46.63)


def test_osm_meters_per_unit_scales_coordinates(osm_text):
    a = OsmXmlImporter(meters_per_unit=2.0).parse(osm_text).nodes
    b = OsmXmlImporter(meters_per_unit=1.0).parse(osm_text).nodes
    assert b[1].x == pytest.approx(2 * a[1].x)
    # 0.001 deg of longitude at the equator radius, in 2 m units
    assert a[1].x == pytest.approx(6_378_137.0 * math.radians(0.001) / 2.0)


def test_osm_bad_records_are_skipped_and_counted():
    text = """<osm>
      <node id="1" lat="0" lon="0"/>
      <node id="2" lat="0.001" lon="0.001"/>
      <node lat="1" lon="1"/>
      <node id="3" lat="abc" lon="0"/>
      <node id="4" lon="0.002"/>
      <way id="10"><nd ref="1"/><nd ref="99"/><nd ref="2"/></way>
      <way id="11"><nd ref="3"/><nd ref="1"/></way>
      <way id="12"><nd ref="4"/><nd ref="2"/><tag k="oneway" v="no"/></way>
    </osm>"""
    net = OsmXmlImporter().parse(text)
    assert [n.id for n in net.nodes] == ["1", "2", "4"]
    assert net.nodes[2].lat == 0.0  # missing lat reads as 0
    assert net.skipped == {
        "node_without_id": 1,
        "node_bad_coords": 1,
        "unknown_ref": 2,
        "short_way": 1,
    }
    assert [(w.nodes, w.oneway) for w in net.ways] == [((0, 1), False), ((2, 1), False)]


def test_osm_malformed_document_raises():
    with pytest.raises(GraphImportError):
        OsmXmlImporter().parse("<osm><node id='1'")


def test_osm_without_nodes_is_an_empty_network():
    net = OsmXmlImporter().parse("<osm/>")
    assert net.nodes == [] and net.ways == []


# ---------- POLY text


def test_poly_vertices_and_edges(poly_text):
    net = PolyTextImporter().parse(poly_text)
    assert net.source == "poly"
    assert [(n.id, n.x, n.y) for n in net.nodes] == [
        ("A", 0.0, 0.0),
        ("B", 3.0, 0.0),
        ("C", 3.0, 4.0),
        ("D", 0.0, 4.0),
    ]
    assert [w.nodes for w in net.ways] == [(0, 1), (1, 2), (2, 3), (3, 0)]
    assert all(not w.oneway for w in net.ways)
    # the trailing terminator line is not an edge
    assert len(net.ways) == 4


def test_poly_edges_become_two_way_arcs(poly_text):
    net = PolyTextImporter().parse(poly_text)
    g = build_graph(net.nodes, net.ways)
    assert g.arc_count == 8
    assert not g.graph_type.is_directed


def test_poly_malformed_vertex_is_dropped_and_renumbered():
    text = "\n".join(
        ["4", "A 0 0", "B x 0", "C 3 4", "D 0 4", "3 0 1", "0 0 2", "1 1 2", "2 2 3", "0"]
    )
    net = PolyTextImporter().parse(text)
    assert [n.id for n in net.nodes] == ["A", "C", "D"]
    assert [w.nodes for w in net.ways] == [(0, 1), (1, 2)]
    assert net.skipped == {"vertex": 1, "edge_ref": 1}


def test_poly_short_edge_line_is_skipped(poly_text):
    text = poly_text.replace("1 1 2", "oops")
    net = PolyTextImporter().parse(text)
    assert len(net.ways) == 3
    assert net.skipped == {"edge": 1}


def test_poly_vertices_only():
    net = PolyTextImporter().parse("2\nA 0 0\nB 1 1")
    assert len(net.nodes) == 2
    assert net.ways == []


@pytest.mark.parametrize("text", ["", "3", "abc\nA 0 0", "-1\nA 0 0"])
def test_poly_unusable_documents_raise(text):
    with pytest.raises(GraphImportError):
        PolyTextImporter().parse(text)
