"""Domain layer - Core graph models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ExportError,
    GraphError,
    MalformedValueError,
    MapLoadError,
    MissingElementError,
    OSMNavError,
    UnsupportedFormatError,
)
from .models import (
    DEFAULT_SPEED,
    BoundingBox,
    Edge,
    GeoPoint,
    Graph,
    PlotPoint,
    Vertex,
    VisualEdge,
    VisualGraph,
    VisualVertex,
    build_visual_edges,
)

__all__ = [
    # Models
    "DEFAULT_SPEED",
    "GeoPoint",
    "PlotPoint",
    "Vertex",
    "Edge",
    "Graph",
    "VisualVertex",
    "VisualEdge",
    "BoundingBox",
    "VisualGraph",
    "build_visual_edges",
    # Errors
    "OSMNavError",
    "MapLoadError",
    "MissingElementError",
    "MalformedValueError",
    "UnsupportedFormatError",
    "GraphError",
    "ExportError",
]
