# tests/conftest.py
import pytest

from dijkstra_map.app.build import build
from dijkstra_map.domain.entities.geography import Node, Way
from dijkstra_map.domain.graph.builder import build_graph


# ---------- Small synthetic graphs


@pytest.fixture
def square_nodes() -> list[Node]:
    return [
        Node("a", 0.0, 0.0),
        Node("b", 10.0, 0.0),
        Node("c", 10.0, 10.0),
        Node("d", 0.0, 10.0),
    ]


@pytest.fixture
def square_path_graph(square_nodes):
    # path graph a-b-c-d, weights 10, 10, 10
    return build_graph(square_nodes, [Way((0, 1, 2, 3), oneway=False)])


@pytest.fixture
def osm_text() -> str:
    return """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="101" lat="-23.5500" lon="-46.6300"/>
  <node id="102" lat="-23.5500" lon="-46.6290"/>
  <node id="103" lat="-23.5490" lon="-46.6290"/>
  <node id="104" lat="-23.5490" lon="-46.6300"/>
  <way id="1">
    <nd ref="101"/>
    <nd ref="102"/>
    <nd ref="103"/>
    <tag k="highway" v="residential"/>
  </way>
  <way id="2">
    <nd ref="103"/>
    <nd ref="104"/>
    <tag k="oneway" v="yes"/>
  </way>
</osm>
"""


@pytest.fixture
def poly_text() -> str:
    return "\n".join(
        [
            "4",
            "A 0 0",
            "B 3 0",
            "C 3 4",
            "D 0 4",
            "4 0 1",
            "0 0 1",
            "1 1 2",
            "2 2 3",
            "3 3 0",
            "0",
        ]
    )


@pytest.fixture
def session():
    return build(use_logging=False)
