"""Folium map exporter adapter.

Draws every road segment of a visual graph as a polyline on an
interactive HTML map fitted to the graph's bounding box.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ...config import ExportConfig, get_config
from ...domain.errors import ExportError, UnsupportedFormatError
from ...domain.models import VisualGraph


@dataclass
class FoliumMapExporter:
    """Folium-based interactive map exporter.

    This adapter implements GraphExporterPort using Folium for
    generating interactive HTML maps.
    """

    config: ExportConfig = field(default_factory=lambda: get_config().export)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def export(self, visual_graph: VisualGraph, output_path: Path) -> Path:
        """Render the road network on a map and save it to file.

        Args:
            visual_graph: The graph to render.
            output_path: Where to save the ``.html`` map.

        Returns:
            Path to the generated map file.

        Raises:
            UnsupportedFormatError: If ``output_path`` is not an html file.
            ExportError: If rendering fails.
        """
        output_path = Path(output_path)
        if output_path.suffix.lower() not in {".html", ".htm"}:
            raise UnsupportedFormatError(
                f"Cannot export to {output_path.name}",
                file_path=str(output_path),
                suffix=output_path.suffix.lstrip("."),
            )

        self._logger.info(
            "Rendering road map",
            extra={
                "edges": len(visual_graph.visual_edges),
                "output_path": str(output_path),
            },
        )

        try:
            import folium

            bounds = visual_graph.bounds
            center = bounds.center()
            m = folium.Map(
                location=[center.lat, center.lon],
                tiles=self.config.map_tiles,
                control_scale=True,
            )

            for ve in visual_graph.visual_edges:
                folium.PolyLine(
                    [[ve.source.lat, ve.source.lon], [ve.target.lat, ve.target.lon]],
                    color=self.config.line_color,
                    weight=self.config.line_weight,
                    opacity=0.8,
                    tooltip=f"{ve.edge.source} -> {ve.edge.target} ({ve.edge.speed:g} km/h)",
                ).add_to(m)

            m.fit_bounds([[bounds.minlat, bounds.minlon], [bounds.maxlat, bounds.maxlon]])

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )

            return output_path

        except ImportError as e:
            raise ExportError(
                "Folium not installed",
                output_path=str(output_path),
                exporter_type="folium",
                cause=e,
            )
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise ExportError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                exporter_type="folium",
                cause=e,
            )
