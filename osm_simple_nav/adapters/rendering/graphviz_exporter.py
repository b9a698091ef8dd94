"""Graphviz exporter adapter.

Writes a visual graph as a Graphviz description that GraphvizMapLoader
can read back, or lets Graphviz render it to an image. ``.dot``/``.gv``
files are produced by pydot alone; ``.pdf``/``.png`` need the Graphviz
binaries on PATH.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pydot

from ...config import ExportConfig, get_config
from ...domain.errors import ExportError, UnsupportedFormatError
from ...domain.models import VisualGraph

# file suffix -> pydot output format
FORMATS = {
    "dot": "raw",
    "gv": "raw",
    "pdf": "pdf",
    "png": "png",
}


def quote_id(vid: str) -> str:
    """Render a vertex id as a DOT quoted string.

    Always quoted, so ids such as ``node`` or ``graph`` are never read
    back as keywords.
    """
    return '"' + vid.replace('"', '\\"') + '"'


@dataclass
class GraphvizExporter:
    """Graphviz-based exporter.

    This adapter implements GraphExporterPort.

    Attributes:
        config: Export configuration (layout program, node shape)
    """

    config: ExportConfig = field(default_factory=lambda: get_config().export)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def to_dot(self, visual_graph: VisualGraph) -> pydot.Dot:
        """Build the pydot representation of ``visual_graph``.

        Plotting positions are pinned (``pos="x,y!"``) and geographic
        positions kept in the node comment (``"lat,lon!"``).
        """
        dot = pydot.Dot(
            "G",
            graph_type="digraph" if visual_graph.directed else "graph",
            layout=self.config.layout_program,
            truecolor="true",
            inputscale=str(visual_graph.scale),
            margin="0",
            bb=f'"{visual_graph.bounds.to_literal()}"',
            outputorder="nodesfirst",
        )

        for vv in visual_graph:
            dot.add_node(
                pydot.Node(
                    quote_id(vv.id),
                    shape=self.config.node_shape,
                    comment=f'"{vv.lat},{vv.lon}!"',
                    pos=f'"{vv.x},{vv.y}!"',
                )
            )

        for ve in visual_graph.visual_edges:
            attributes = {"arrowhead": "none", "speed": str(ve.edge.speed)}
            if ve.edge.one_way:
                attributes["oneway"] = "true"
            if ve.edge.distance is not None:
                attributes["distance"] = str(ve.edge.distance)
            dot.add_edge(
                pydot.Edge(quote_id(ve.source.id), quote_id(ve.target.id), **attributes)
            )

        return dot

    def export(self, visual_graph: VisualGraph, output_path: Path) -> Path:
        """Export ``visual_graph`` in the format named by the file suffix.

        Args:
            visual_graph: The graph to export.
            output_path: Destination ``.dot``, ``.gv``, ``.pdf`` or ``.png``.

        Returns:
            Path to the generated file.

        Raises:
            UnsupportedFormatError: If the suffix is not supported.
            ExportError: If writing or rendering fails.
        """
        output_path = Path(output_path)
        suffix = output_path.suffix.lstrip(".").lower()
        if suffix not in FORMATS:
            raise UnsupportedFormatError(
                f"Cannot export to {output_path.name}",
                file_path=str(output_path),
                suffix=suffix,
            )

        self._logger.info(
            "Exporting graph",
            extra={
                "output_path": str(output_path),
                "vertices": len(visual_graph.visual_vertices),
                "edges": len(visual_graph.visual_edges),
            },
        )

        try:
            dot = self.to_dot(visual_graph)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            dot.write(
                str(output_path),
                prog=self.config.layout_program,
                format=FORMATS[suffix],
            )
        except Exception as e:
            self._logger.error(
                "Graphviz export failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise ExportError(
                f"Graphviz export failed: {e}",
                output_path=str(output_path),
                exporter_type="graphviz",
                cause=e,
            )

        return output_path
