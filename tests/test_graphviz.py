"""Tests for Graphviz export and re-import."""

from __future__ import annotations

import pytest

from osm_simple_nav.adapters.loader import GraphvizMapLoader, OSMMapLoader
from osm_simple_nav.adapters.process_log import NullProcessLog, RecordingProcessLog
from osm_simple_nav.adapters.rendering import GraphvizExporter
from osm_simple_nav.domain.errors import (
    MalformedValueError,
    MapLoadError,
    MissingElementError,
    UnsupportedFormatError,
)
from osm_simple_nav.domain.models import BoundingBox, Edge

from conftest import make_graphs

DESCRIPTION = """digraph G {
  bb="14.0,50.0,14.5,50.5";
  node [shape=point];
  "1" [comment="50.1,14.1!", pos="14.1,50.1!"];
  "2" [comment="50.2,14.2!", pos="14.2,50.2!"];
  "3" [comment="50.3,14.3", pos="14.3,50.3"];
  "1" -> "2" [speed=30, oneway=true, distance=12.5];
  "2" -> "3";
}
"""


def load_description(tmp_path, text, name="map.dot", **kwargs):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    kwargs.setdefault("process_log", NullProcessLog())
    return GraphvizMapLoader(path=path, **kwargs).load()


def test_description_vertices_and_coordinates(tmp_path):
    graph, visual_graph = load_description(tmp_path, DESCRIPTION)

    assert list(graph.vertices) == ["1", "2", "3"]
    first = visual_graph.visual_vertices["1"]
    assert (first.lat, first.lon) == (50.1, 14.1)
    assert (first.x, first.y) == (14.1, 50.1)
    assert visual_graph.visual_vertices["3"].lat == 50.3


def test_description_edge_attributes_and_defaults(tmp_path):
    graph, _ = load_description(tmp_path, DESCRIPTION)

    assert graph.edges == (
        Edge("1", "2", speed=30.0, one_way=True, distance=12.5),
        Edge("2", "3", speed=50.0, one_way=False, distance=None),
    )


def test_description_bounds_and_directedness(tmp_path):
    _, visual_graph = load_description(tmp_path, DESCRIPTION)

    assert visual_graph.bounds == BoundingBox(14.0, 50.0, 14.5, 50.5)
    assert visual_graph.directed is True


def test_bounding_box_in_graph_statement(tmp_path):
    text = """graph G {
  graph [bb="14.0,50.0,14.5,50.5"];
  a [comment="50.1,14.1", pos="14.1,50.1"];
  b [comment="50.2,14.2", pos="14.2,50.2"];
  a -- b;
}
"""
    graph, visual_graph = load_description(tmp_path, text, name="map.gv")

    assert visual_graph.bounds.maxlat == 50.5
    assert visual_graph.directed is False
    assert [(e.source, e.target) for e in graph.edges] == [("a", "b")]


def test_missing_bounding_box_fails(tmp_path):
    text = DESCRIPTION.replace('  bb="14.0,50.0,14.5,50.5";\n', "")

    with pytest.raises(MissingElementError) as exc_info:
        load_description(tmp_path, text)

    assert exc_info.value.element == "bb"


def test_node_without_position_fails(tmp_path):
    text = DESCRIPTION.replace(', pos="14.2,50.2!"', "")

    with pytest.raises(MissingElementError) as exc_info:
        load_description(tmp_path, text)

    assert exc_info.value.element == "node 2/@pos"


def test_malformed_position_fails(tmp_path):
    text = DESCRIPTION.replace('pos="14.2,50.2!"', 'pos="east,north"')

    with pytest.raises(MalformedValueError):
        load_description(tmp_path, text)


def test_malformed_speed_fails(tmp_path):
    text = DESCRIPTION.replace("speed=30", 'speed="fast"')

    with pytest.raises(MalformedValueError):
        load_description(tmp_path, text)


def test_edge_to_undeclared_node_fails(tmp_path):
    text = DESCRIPTION.replace('"2" -> "3";', '"2" -> "9";')

    with pytest.raises(MissingElementError):
        load_description(tmp_path, text)


def test_missing_description_file_fails(tmp_path):
    with pytest.raises(MapLoadError):
        GraphvizMapLoader(path=tmp_path / "absent.dot").load()


def test_process_log_lines(tmp_path):
    process_log = RecordingProcessLog()

    load_description(tmp_path, DESCRIPTION, process_log=process_log)

    assert "Processing vertices" in process_log.lines
    assert "\t Vertex 3 loaded" in process_log.lines


def test_to_dot_attributes():
    _, visual_graph = make_graphs(
        [Edge("a", "b", speed=30.0, one_way=True, distance=2.0), Edge("b", "c")]
    )

    text = GraphvizExporter().to_dot(visual_graph).to_string()

    assert text.startswith("graph G {")
    assert '"14.0,50.0,14.5,50.5"' in text
    assert 'pos="14.0,50.0!"' in text
    assert 'comment="50.0,14.0!"' in text
    assert "oneway" in text
    assert "arrowhead=none" in text


def test_export_rejects_unknown_suffix(tmp_path):
    _, visual_graph = make_graphs([Edge("a", "b")])

    with pytest.raises(UnsupportedFormatError):
        GraphvizExporter().export(visual_graph, tmp_path / "graph.svgz")


@pytest.mark.parametrize("directed", [False, True])
def test_osm_export_round_trip(write_osm, tmp_path, directed):
    path = write_osm(
        {"1": (50.1, 14.1), "2": (50.2, 14.2), "3": (50.25, 14.35)},
        [
            (["1", "2"], [("highway", "residential"), ("maxspeed", "30")]),
            (["2", "3"], [("highway", "primary"), ("oneway", "yes")]),
        ],
    )
    graph, visual_graph = OSMMapLoader(path=path, process_log=NullProcessLog()).load(
        directed=directed
    )

    output = GraphvizExporter().export(visual_graph, tmp_path / "out" / "map.dot")
    reloaded, reloaded_visual = GraphvizMapLoader(
        path=output, process_log=NullProcessLog()
    ).load()

    assert output.is_file()
    assert list(reloaded.vertices) == list(graph.vertices)
    assert reloaded.edges == graph.edges
    assert reloaded_visual.bounds == visual_graph.bounds
    assert reloaded_visual.directed is directed
    for vid, vv in visual_graph.visual_vertices.items():
        again = reloaded_visual.visual_vertices[vid]
        assert (again.lat, again.lon, again.x, again.y) == (vv.lat, vv.lon, vv.x, vv.y)


def test_keyword_vertex_ids_round_trip(write_osm, tmp_path):
    path = write_osm(
        {"node": (50.1, 14.1), "graph": (50.2, 14.2), "edge": (50.3, 14.3)},
        [(["node", "graph", "edge"], [("highway", "residential")])],
    )
    graph, visual_graph = OSMMapLoader(path=path, process_log=NullProcessLog()).load()

    output = GraphvizExporter().export(visual_graph, tmp_path / "keywords.dot")
    reloaded, _ = GraphvizMapLoader(path=output, process_log=NullProcessLog()).load()

    assert list(reloaded.vertices) == ["node", "graph", "edge"]
    assert reloaded.edges == graph.edges


def test_quoted_vertex_ids_round_trip(tmp_path):
    _, visual_graph = make_graphs([Edge('say "hi"', "plain"), Edge("plain", 'x"')])

    output = GraphvizExporter().export(visual_graph, tmp_path / "quotes.gv")
    reloaded, _ = GraphvizMapLoader(path=output, process_log=NullProcessLog()).load()

    assert list(reloaded.vertices) == ['say "hi"', "plain", 'x"']
    assert [(e.source, e.target) for e in reloaded.edges] == [
        ('say "hi"', "plain"),
        ("plain", 'x"'),
    ]
