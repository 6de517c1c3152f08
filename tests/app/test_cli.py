import json

import pytest

from dijkstra_map.cli import main


@pytest.fixture
def poly_file(tmp_path, poly_text):
    p = tmp_path / "grid.poly"
    p.write_text(poly_text)
    return p


def test_stats(poly_file, capsys):
    assert main(["--quiet", "stats", str(poly_file)]) == 0
    out = capsys.readouterr().out
    assert out.startswith(".poly file converted and graph built.\nNodes: 4\nArcs: 8")


def test_stats_warns_about_split_graph(tmp_path, capsys):
    p = tmp_path / "split.poly"
    p.write_text("3\nA 0 0\nB 1 0\nC 5 5\n1\n0 0 1\n0")
    assert main(["--quiet", "stats", str(p)]) == 0
    assert "The graph is not connected" in capsys.readouterr().out


def test_route(poly_file, capsys):
    assert main(["--quiet", "route", str(poly_file), "A", "C"]) == 0
    out = capsys.readouterr().out
    assert "Distance: 7.000 units (14.00 m)" in out


def test_route_failure_exit_code(tmp_path, osm_text, capsys):
    p = tmp_path / "city.osm"
    p.write_text(osm_text)
    assert main(["--quiet", "route", str(p), "104", "101"]) == 2
    captured = capsys.readouterr()
    assert "Path blocked by one-way streets" in captured.out
    assert "street direction" in captured.err


def test_missing_map_file(tmp_path, capsys):
    assert main(["--quiet", "stats", str(tmp_path / "nope.poly")]) == 1
    assert capsys.readouterr().err.startswith("error: Could not read")


def test_generate_with_config(tmp_path, capsys):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"generation": {"width": 200, "height": 200, "margin": 10}}))
    assert main(["--quiet", "--config", str(cfg), "generate", "12", "--seed", "5"]) == 0
    assert "Nodes: 12" in capsys.readouterr().out


def test_generate_too_few_nodes(capsys):
    assert main(["--quiet", "generate", "2"]) == 1
    assert "at least 3" in capsys.readouterr().err


def test_events_file_collects_session_events(poly_file, tmp_path):
    events = tmp_path / "events.jsonl"
    assert main(["--quiet", "--events", str(events), "route", str(poly_file), "A", "B"]) == 0
    rows = [json.loads(ln) for ln in events.read_text().splitlines()]
    assert [r["name"] for r in rows] == ["graph_loaded", "path_found"]
    assert rows[0]["type"] == "GraphLoadedEvent"
    assert rows[1]["distance"] == 3.0
