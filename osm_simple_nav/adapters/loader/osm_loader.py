"""OpenStreetMap XML loader adapter.

Builds a road graph from the ``bounds``, ``node`` and ``way`` elements
of an OSM extract. Only ways tagged with a whitelisted ``highway`` value
become edges; every consecutive pair of node references in such a way
is one road segment.
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

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
from ...ports.distance import DistanceCalculatorPort
from ...ports.process_log import ProcessLogPort
from ..distance import GeodesicDistanceCalculator
from ..process_log import LoggingProcessLog

_SPEED_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)")


@dataclass(frozen=True)
class WayAttributes:
    """Road metadata read from the ``tag`` children of a way.

    Attributes:
        highways: Every ``highway`` value carried by the way
        maxspeed: Raw ``maxspeed`` value, None when absent
        one_way: True when a ``oneway`` tag is present, whatever its value
    """

    highways: Tuple[str, ...] = ()
    maxspeed: Optional[str] = None
    one_way: bool = False

    @classmethod
    def from_way(cls, way: ET.Element) -> WayAttributes:
        highways: List[str] = []
        maxspeed = None
        one_way = False
        for tag in way.findall("tag"):
            key = tag.get("k")
            if key == "highway":
                highways.append(tag.get("v", ""))
            elif key == "maxspeed":
                maxspeed = tag.get("v")
            elif key == "oneway":
                one_way = True
        return cls(highways=tuple(highways), maxspeed=maxspeed, one_way=one_way)

    def is_road(self, accepted: frozenset[str]) -> bool:
        return any(value in accepted for value in self.highways)


@dataclass
class OSMMapLoader:
    """Map loader for raw OpenStreetMap XML.

    This adapter implements MapLoaderPort.

    Attributes:
        path: OSM document to read
        distance_calculator: Computes segment lengths in kilometers
        config: Loader configuration (highway whitelist, default speed)
        process_log: Sink for per-vertex diagnostic lines
    """

    path: Path
    distance_calculator: DistanceCalculatorPort = field(
        default_factory=GeodesicDistanceCalculator
    )
    config: LoaderConfig = field(default_factory=lambda: get_config().loader)
    process_log: ProcessLogPort = field(default_factory=LoggingProcessLog)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def load(self, directed: bool = False) -> Tuple[Graph, VisualGraph]:
        """Load the OSM document.

        Args:
            directed: When True, every segment that is not one-way is
                also emitted in the reverse direction.

        Returns:
            The logical graph and its visual counterpart.

        Raises:
            MapLoadError: If the file cannot be read or parsed.
            MissingElementError: If ``bounds`` or a referenced node is absent.
            MalformedValueError: If a coordinate is not a valid number.
        """
        self._logger.info(
            "Loading OSM map",
            extra={"path": str(self.path), "directed": directed},
        )
        self.process_log.log(f"Loading graph from OSM file {self.path}.")

        root = self._read_document()
        bounds = self._read_bounds(root)
        nodes = {node.get("id"): node for node in root.findall("node")}
        accepted = frozenset(self.config.highway_attributes)

        vertices: Dict[str, Vertex] = {}
        visual_vertices: Dict[str, VisualVertex] = {}
        edges: List[Edge] = []

        for way in root.findall("way"):
            attributes = WayAttributes.from_way(way)
            if not attributes.is_road(accepted):
                continue

            refs = self._node_refs(way)
            for ref in refs:
                if ref not in vertices:
                    visual = self._visual_vertex(ref, nodes)
                    vertices[ref] = visual.vertex
                    visual_vertices[ref] = visual
                    self.process_log.log(f"\t Vertex {ref} loaded")

            speed = self._speed(attributes.maxspeed, way.get("id", ""))
            for source, target in zip(refs, refs[1:]):
                edge = Edge(
                    source=source,
                    target=target,
                    speed=speed,
                    one_way=attributes.one_way,
                    distance=self.distance_calculator.distance(
                        visual_vertices[source].geo, visual_vertices[target].geo
                    ),
                )
                edges.append(edge)
                if directed and not edge.one_way:
                    edges.append(edge.reversed())

        graph = Graph(vertices=vertices, edges=tuple(edges))
        visual_graph = VisualGraph(
            graph=graph,
            visual_vertices=visual_vertices,
            visual_edges=build_visual_edges(edges, visual_vertices),
            bounds=bounds,
            directed=directed,
        )

        self._logger.info(
            "OSM map loaded",
            extra={"vertices": graph.vertex_count, "edges": graph.edge_count},
        )
        return graph, visual_graph

    def _read_document(self) -> ET.Element:
        try:
            with self.path.open("rb") as f:
                return ET.parse(f).getroot()
        except OSError as e:
            raise MapLoadError(
                f"Cannot read OSM file {self.path}", file_path=str(self.path), cause=e
            )
        except ET.ParseError as e:
            raise MapLoadError(
                f"Invalid OSM XML in {self.path}", file_path=str(self.path), cause=e
            )

    def _read_bounds(self, root: ET.Element) -> BoundingBox:
        element = root.find("bounds")
        if element is None:
            raise MissingElementError(
                "OSM document has no bounds element",
                file_path=str(self.path),
                element="bounds",
            )
        values = {}
        for name in ("minlon", "minlat", "maxlon", "maxlat"):
            raw = element.get(name)
            if raw is None:
                raise MissingElementError(
                    f"bounds element has no {name} attribute",
                    file_path=str(self.path),
                    element=f"bounds/@{name}",
                )
            values[name] = self._number(raw)
        return BoundingBox(**values)

    def _node_refs(self, way: ET.Element) -> List[str]:
        refs = []
        for nd in way.findall("nd"):
            ref = nd.get("ref")
            if ref is None:
                raise MissingElementError(
                    f"Way {way.get('id')} has an nd element without ref",
                    file_path=str(self.path),
                    element="nd/@ref",
                )
            refs.append(ref)
        return refs

    def _visual_vertex(
        self, ref: str, nodes: Mapping[Optional[str], ET.Element]
    ) -> VisualVertex:
        node = nodes.get(ref)
        if node is None:
            raise MissingElementError(
                f"Referenced node {ref} not found",
                file_path=str(self.path),
                element=f"node {ref}",
            )
        lat, lon = node.get("lat"), node.get("lon")
        if lat is None or lon is None:
            raise MissingElementError(
                f"Node {ref} has no lat/lon",
                file_path=str(self.path),
                element=f"node {ref}/@lat,@lon",
            )
        try:
            geo = GeoPoint(lat=self._number(lat), lon=self._number(lon))
        except ValueError as e:
            raise MalformedValueError(
                f"Node {ref} has invalid coordinates",
                file_path=str(self.path),
                value=f"{lat},{lon}",
                cause=e,
            )
        return VisualVertex(vertex=Vertex(ref), geo=geo, plot=PlotPoint.from_geo(geo))

    def _number(self, raw: str) -> float:
        try:
            return float(raw)
        except ValueError as e:
            raise MalformedValueError(
                f"Not a number: {raw!r}",
                file_path=str(self.path),
                value=raw,
                cause=e,
            )

    def _speed(self, maxspeed: Optional[str], way_id: str) -> float:
        if maxspeed is None:
            return self.config.default_speed
        match = _SPEED_RE.match(maxspeed)
        if match is None:
            # e.g. "none", "walk", "signals"
            self._logger.warning(
                "Unrecognized maxspeed, using default",
                extra={"way": way_id, "maxspeed": maxspeed},
            )
            return self.config.default_speed
        return float(match.group(1))
