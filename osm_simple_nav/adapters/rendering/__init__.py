"""Rendering adapters - Implementations of GraphExporterPort.

Available implementations:
- GraphvizExporter: Graphviz descriptions and images (dot, gv, pdf, png)
- FoliumMapExporter: Folium-based interactive map (html)
"""

from .folium_adapter import FoliumMapExporter
from .graphviz_exporter import GraphvizExporter

__all__ = ["GraphvizExporter", "FoliumMapExporter"]
