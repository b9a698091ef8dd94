"""Immutable domain models for OSM Simple Nav.

All models are frozen dataclasses with slots. The logical graph
(Vertex, Edge, Graph) describes topology and weights; the visual graph
(VisualVertex, VisualEdge, VisualGraph) pairs it with geographic and
plotting coordinates for rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Sequence

from .errors import GraphError

DEFAULT_SPEED = 50.0


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Geographic coordinates in degrees."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude must be between -90 and 90, got {self.lat}")
        if not -180 <= self.lon <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.lon}"
            )

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lon)


@dataclass(frozen=True, slots=True)
class PlotPoint:
    """Planar plotting coordinates (x grows eastward, y northward)."""

    x: float
    y: float

    @classmethod
    def from_geo(cls, point: GeoPoint) -> PlotPoint:
        """Plotting point sitting exactly on a geographic point."""
        return cls(x=point.lon, y=point.lat)


@dataclass(frozen=True, slots=True)
class Vertex:
    """A road-network node identified by its source-system id."""

    id: str


@dataclass(frozen=True, slots=True)
class Edge:
    """A road segment between two vertices.

    Attributes:
        source: Identifier of the start vertex
        target: Identifier of the end vertex
        speed: Speed limit, 50 when the input does not say otherwise
        one_way: Whether the segment may only be travelled source -> target
        distance: Length in kilometers, None when the input carries none
    """

    source: str
    target: str
    speed: float = DEFAULT_SPEED
    one_way: bool = False
    distance: Optional[float] = None

    def reversed(self) -> Edge:
        """Same segment travelled target -> source, other fields unchanged."""
        return Edge(
            source=self.target,
            target=self.source,
            speed=self.speed,
            one_way=self.one_way,
            distance=self.distance,
        )


@dataclass(frozen=True, slots=True)
class Graph:
    """Logical graph: vertices keyed by id and an ordered edge sequence.

    Raises:
        GraphError: If an edge references a vertex that is not present.
    """

    vertices: Mapping[str, Vertex]
    edges: tuple[Edge, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for edge in self.edges:
            for vid in (edge.source, edge.target):
                if vid not in self.vertices:
                    raise GraphError(
                        f"Edge {edge.source}->{edge.target} references "
                        f"unknown vertex {vid}",
                        vertex_id=vid,
                    )

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)


@dataclass(frozen=True, slots=True)
class VisualVertex:
    """A vertex with its geographic and plotting positions."""

    vertex: Vertex
    geo: GeoPoint
    plot: PlotPoint

    @property
    def id(self) -> str:
        return self.vertex.id

    @property
    def lat(self) -> float:
        return self.geo.lat

    @property
    def lon(self) -> float:
        return self.geo.lon

    @property
    def x(self) -> float:
        return self.plot.x

    @property
    def y(self) -> float:
        return self.plot.y


@dataclass(frozen=True, slots=True)
class VisualEdge:
    """An edge paired with its two visual endpoints."""

    edge: Edge
    source: VisualVertex
    target: VisualVertex


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Geographic extent of a map, in degrees."""

    minlon: float
    minlat: float
    maxlon: float
    maxlat: float

    @classmethod
    def parse(cls, text: str) -> BoundingBox:
        """Parse a ``"minlon,minlat,maxlon,maxlat"`` literal.

        Surrounding quotes and whitespace around each field are ignored.

        Raises:
            ValueError: If there are not exactly four numeric fields.
        """
        parts = [part.strip() for part in text.strip().strip('"').split(",")]
        if len(parts) != 4:
            raise ValueError(f"Expected 4 comma-separated fields, got {text!r}")
        minlon, minlat, maxlon, maxlat = (float(part) for part in parts)
        return cls(minlon=minlon, minlat=minlat, maxlon=maxlon, maxlat=maxlat)

    @property
    def lon_span(self) -> float:
        return self.maxlon - self.minlon

    @property
    def lat_span(self) -> float:
        return self.maxlat - self.minlat

    def center(self) -> GeoPoint:
        return GeoPoint(
            lat=(self.minlat + self.maxlat) / 2.0,
            lon=(self.minlon + self.maxlon) / 2.0,
        )

    def to_literal(self) -> str:
        return f"{self.minlon},{self.minlat},{self.maxlon},{self.maxlat}"


@dataclass(frozen=True, slots=True)
class VisualGraph:
    """A graph prepared for plotting.

    Attributes:
        graph: The underlying logical graph
        visual_vertices: Visual vertex for every vertex id
        visual_edges: One visual edge per edge, in the same order
        bounds: Geographic extent of the map
        directed: Whether edges are to be read as directed
    """

    graph: Graph
    visual_vertices: Mapping[str, VisualVertex]
    visual_edges: tuple[VisualEdge, ...]
    bounds: BoundingBox
    directed: bool = False

    @property
    def scale(self) -> float:
        """Display scale for the renderer.

        A zero span yields a zero scale.
        """
        return abs(min(self.bounds.lon_span, self.bounds.lat_span)) / 10.0

    def __iter__(self) -> Iterator[VisualVertex]:
        return iter(self.visual_vertices.values())


def build_visual_edges(
    edges: Sequence[Edge], visual_vertices: Mapping[str, VisualVertex]
) -> tuple[VisualEdge, ...]:
    """Resolve the endpoints of every edge through the visual vertex map.

    Raises:
        GraphError: If an endpoint has no visual vertex.
    """
    visual_edges = []
    for edge in edges:
        try:
            source = visual_vertices[edge.source]
            target = visual_vertices[edge.target]
        except KeyError as e:
            raise GraphError(
                f"No visual vertex for {e.args[0]}", vertex_id=str(e.args[0])
            )
        visual_edges.append(VisualEdge(edge=edge, source=source, target=target))
    return tuple(visual_edges)
