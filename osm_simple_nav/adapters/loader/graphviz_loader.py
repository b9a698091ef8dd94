"""Graphviz description loader adapter.

Reads back a ``.dot``/``.gv`` file previously written by
GraphvizExporter. The file must contain:

1) for every node its id, ``pos`` ("x,y", plotting position) and
   ``comment`` ("lat,lon", geographic position); either may carry the
   trailing ``!`` pin marker Graphviz uses;
2) for every edge, optionally ``speed``, ``oneway`` and ``distance``;
3) a graph-level ``bb`` attribute "minlon,minlat,maxlon,maxlat".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import pydot

from ...config import LoaderConfig, get_config
from ...domain.errors import MalformedValueError, MapLoadError, MissingElementError
from ...domain.models import (
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
from ...ports.process_log import ProcessLogPort
from ..process_log import LoggingProcessLog

# Bare names pydot gives default-attribute statements
_DEFAULT_STATEMENTS = frozenset({"node", "edge", "graph"})


def _unquote(value: str) -> str:
    return str(value).strip().strip('"').strip()


def _identifier(name: str) -> str:
    """Vertex id from a DOT node name, undoing ``\\"`` escapes."""
    name = str(name).strip()
    if len(name) >= 2 and name[0] == name[-1] == '"':
        return name[1:-1].replace('\\"', '"')
    return name


def _pair(value: str) -> Tuple[str, str]:
    """Split an "a,b" literal, dropping quotes and the ``!`` pin marker."""
    parts = _unquote(value).rstrip("!").split(",")
    if len(parts) < 2:
        raise ValueError(f"Expected two comma-separated fields, got {value!r}")
    return parts[0].strip(), parts[1].strip().rstrip("!")


@dataclass
class GraphvizMapLoader:
    """Map loader for Graphviz descriptions written by this application.

    This adapter implements MapLoaderPort. Directedness comes from the
    file itself (``digraph`` or ``graph``).

    Attributes:
        path: Description file to read
        config: Loader configuration (default speed)
        process_log: Sink for per-vertex diagnostic lines
    """

    path: Path
    config: LoaderConfig = field(default_factory=lambda: get_config().loader)
    process_log: ProcessLogPort = field(default_factory=LoggingProcessLog)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def load(self, directed: bool = False) -> Tuple[Graph, VisualGraph]:
        """Load the description file.

        Args:
            directed: Ignored, the file states its own directedness.

        Returns:
            The logical graph and its visual counterpart.

        Raises:
            MapLoadError: If the file cannot be read or parsed.
            MissingElementError: If ``bb``, ``pos`` or ``comment`` is absent.
            MalformedValueError: If a numeric field is not a number.
        """
        self._logger.info("Loading Graphviz map", extra={"path": str(self.path)})
        self.process_log.log(f"Loading graph from GraphViz file {self.path}.")

        dot = self._read_document()

        vertices: Dict[str, Vertex] = {}
        visual_vertices: Dict[str, VisualVertex] = {}

        self.process_log.log("Processing vertices")
        for node in dot.get_nodes():
            name = node.get_name()
            if name in _DEFAULT_STATEMENTS:
                continue
            vid = _identifier(name)
            if vid in vertices:
                continue
            visual = self._visual_vertex(vid, node.get_attributes())
            vertices[vid] = visual.vertex
            visual_vertices[vid] = visual
            self.process_log.log(f"\t Vertex {vid} loaded")

        edges: List[Edge] = []
        for link in dot.get_edges():
            source = _identifier(link.get_source())
            target = _identifier(link.get_destination())
            for vid in (source, target):
                if vid not in vertices:
                    raise MissingElementError(
                        f"Edge {source}->{target} references undeclared node {vid}",
                        file_path=str(self.path),
                        element=f"node {vid}",
                    )
            edges.append(self._edge(source, target, link.get_attributes()))

        graph = Graph(vertices=vertices, edges=tuple(edges))
        visual_graph = VisualGraph(
            graph=graph,
            visual_vertices=visual_vertices,
            visual_edges=build_visual_edges(edges, visual_vertices),
            bounds=self._bounds(dot),
            directed=dot.get_type() == "digraph",
        )

        self._logger.info(
            "Graphviz map loaded",
            extra={"vertices": graph.vertex_count, "edges": graph.edge_count},
        )
        return graph, visual_graph

    def _read_document(self) -> pydot.Dot:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MapLoadError(
                f"Cannot read Graphviz file {self.path}",
                file_path=str(self.path),
                cause=e,
            )
        try:
            graphs = pydot.graph_from_dot_data(text)
        except Exception as e:
            raise MapLoadError(
                f"Invalid Graphviz description in {self.path}",
                file_path=str(self.path),
                cause=e,
            )
        if not graphs:
            raise MapLoadError(
                f"No graph found in {self.path}", file_path=str(self.path)
            )
        return graphs[0]

    def _visual_vertex(self, vid: str, attributes: Mapping[str, str]) -> VisualVertex:
        comment = attributes.get("comment")
        pos = attributes.get("pos")
        for name, value in (("comment", comment), ("pos", pos)):
            if value is None:
                raise MissingElementError(
                    f"Node {vid} has no {name} attribute",
                    file_path=str(self.path),
                    element=f"node {vid}/@{name}",
                )
        try:
            lat, lon = _pair(comment)
            x, y = _pair(pos)
            geo = GeoPoint(lat=float(lat), lon=float(lon))
            plot = PlotPoint(x=float(x), y=float(y))
        except ValueError as e:
            raise MalformedValueError(
                f"Node {vid} has invalid coordinates",
                file_path=str(self.path),
                value=f"comment={comment} pos={pos}",
                cause=e,
            )
        return VisualVertex(vertex=Vertex(vid), geo=geo, plot=plot)

    def _edge(self, source: str, target: str, attributes: Mapping[str, str]) -> Edge:
        speed = self.config.default_speed
        one_way = False
        distance: Optional[float] = None
        if "speed" in attributes:
            speed = self._number(attributes["speed"])
        if "oneway" in attributes:
            one_way = True
        if "distance" in attributes:
            distance = self._number(attributes["distance"])
        return Edge(
            source=source,
            target=target,
            speed=speed,
            one_way=one_way,
            distance=distance,
        )

    def _bounds(self, dot: pydot.Dot) -> BoundingBox:
        raw = dot.get_attributes().get("bb")
        if raw is None:
            # bb given as a "graph [bb=...]" statement
            for statement in dot.get_node("graph"):
                raw = statement.get_attributes().get("bb", raw)
        if raw is None:
            raise MissingElementError(
                "Graphviz description has no bb attribute",
                file_path=str(self.path),
                element="bb",
            )
        try:
            return BoundingBox.parse(_unquote(raw))
        except ValueError as e:
            raise MalformedValueError(
                "Invalid bounding box",
                file_path=str(self.path),
                value=str(raw),
                cause=e,
            )

    def _number(self, raw: str) -> float:
        try:
            return float(_unquote(raw))
        except ValueError as e:
            raise MalformedValueError(
                f"Not a number: {raw!r}",
                file_path=str(self.path),
                value=str(raw),
                cause=e,
            )
