"""Shared fixtures: small OSM documents and hand-built graphs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest

from osm_simple_nav.config import reset_config
from osm_simple_nav.container import reset_container
from osm_simple_nav.domain.models import (
    BoundingBox,
    Edge,
    GeoPoint,
    Graph,
    PlotPoint,
    Vertex,
    VisualGraph,
    VisualVertex,
    build_visual_edges,
)

BOUNDS = (14.0, 50.0, 14.5, 50.5)  # minlon, minlat, maxlon, maxlat

Way = Tuple[Sequence[str], Sequence[Tuple[str, str]]]


def osm_document(
    nodes: Dict[str, Tuple[float, float]],
    ways: Iterable[Way],
    bounds: Optional[Tuple[float, float, float, float]] = BOUNDS,
) -> str:
    """Render an OSM XML document. Nodes map id -> (lat, lon)."""
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', '<osm version="0.6">']
    if bounds is not None:
        minlon, minlat, maxlon, maxlat = bounds
        lines.append(
            f'  <bounds minlat="{minlat}" minlon="{minlon}" '
            f'maxlat="{maxlat}" maxlon="{maxlon}"/>'
        )
    for nid, (lat, lon) in nodes.items():
        lines.append(f'  <node id="{nid}" lat="{lat}" lon="{lon}"/>')
    for index, (refs, tags) in enumerate(ways, start=1):
        lines.append(f'  <way id="{100 + index}">')
        lines.extend(f'    <nd ref="{ref}"/>' for ref in refs)
        lines.extend(f'    <tag k="{k}" v="{v}"/>' for k, v in tags)
        lines.append("  </way>")
    lines.append("</osm>")
    return "\n".join(lines)


@pytest.fixture
def write_osm(tmp_path):
    """Write an OSM document into tmp_path and return its path."""

    def _write(nodes, ways, bounds=BOUNDS, name="map.osm") -> Path:
        path = tmp_path / name
        path.write_text(osm_document(nodes, ways, bounds), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def two_node_osm(write_osm):
    """Nodes 1 (50.1, 14.1) and 2 (50.2, 14.2) joined by a residential way."""

    def _write(extra_tags: Sequence[Tuple[str, str]] = ()) -> Path:
        return write_osm(
            {"1": (50.1, 14.1), "2": (50.2, 14.2)},
            [(["1", "2"], [("highway", "residential"), *extra_tags])],
        )

    return _write


def make_graphs(
    edges: Sequence[Edge],
    vertex_ids: Iterable[str] = (),
    directed: bool = False,
) -> Tuple[Graph, VisualGraph]:
    """Build a graph pair from edges, with made-up coordinates."""
    ids: List[str] = list(dict.fromkeys(vertex_ids))
    for edge in edges:
        for vid in (edge.source, edge.target):
            if vid not in ids:
                ids.append(vid)

    vertices = {vid: Vertex(vid) for vid in ids}
    visual_vertices = {}
    for index, vid in enumerate(ids):
        geo = GeoPoint(lat=50.0 + index * 0.125, lon=14.0 + index * 0.125)
        visual_vertices[vid] = VisualVertex(
            vertex=vertices[vid], geo=geo, plot=PlotPoint.from_geo(geo)
        )

    graph = Graph(vertices=vertices, edges=tuple(edges))
    visual_graph = VisualGraph(
        graph=graph,
        visual_vertices=visual_vertices,
        visual_edges=build_visual_edges(edges, visual_vertices),
        bounds=BoundingBox(*BOUNDS),
        directed=directed,
    )
    return graph, visual_graph


@dataclass
class StaticLoader:
    """Map loader returning prebuilt graphs and recording its calls."""

    graph: Graph
    visual_graph: VisualGraph
    calls: List[bool] = field(default_factory=list)

    def load(self, directed: bool = False) -> Tuple[Graph, VisualGraph]:
        self.calls.append(directed)
        return self.graph, self.visual_graph


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Fresh configuration and container per test; logs go to tmp_path."""
    monkeypatch.setenv("OSN_LOG_FILE", str(tmp_path / "log" / "logfile.log"))
    reset_config()
    reset_container()
    yield
    package_logger = logging.getLogger("osm_simple_nav")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    reset_config()
    reset_container()
