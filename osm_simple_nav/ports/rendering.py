"""Rendering port - Abstraction for exporting a visual graph.

This protocol defines the contract for graph export, allowing
different implementations (Graphviz, Folium, etc.) to be used.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import VisualGraph


class GraphExporterPort(Protocol):
    """Port for graph export.

    Implementations:
    - adapters/rendering/graphviz_exporter.py (dot, gv, pdf, png)
    - adapters/rendering/folium_adapter.py (html)
    """

    def export(self, visual_graph: VisualGraph, output_path: Path) -> Path:
        """Render ``visual_graph`` and save it to ``output_path``.

        Args:
            visual_graph: The graph to render.
            output_path: Destination file; its suffix selects the format.

        Returns:
            Path to the generated file.

        Raises:
            ExportError: If rendering fails.
        """
        ...
