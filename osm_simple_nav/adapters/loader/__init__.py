"""Loader adapters - Implementations of MapLoaderPort.

Available implementations:
- OSMMapLoader: Builds the graph from raw OpenStreetMap XML
- GraphvizMapLoader: Reads back a previously exported Graphviz file
"""

from .graphviz_loader import GraphvizMapLoader
from .osm_loader import OSMMapLoader, WayAttributes

__all__ = ["OSMMapLoader", "GraphvizMapLoader", "WayAttributes"]
