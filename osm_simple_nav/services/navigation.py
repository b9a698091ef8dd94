"""Navigation service - Main orchestrator.

Picks the loader matching the input file, loads the graph (whole or
restricted to its largest connected component) and hands it to the
exporter matching the output file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Mapping, Tuple

from ..adapters.loader import GraphvizMapLoader, OSMMapLoader
from ..config import LoaderConfig, get_config
from ..domain.errors import UnsupportedFormatError
from ..domain.models import Graph, VisualGraph
from ..graph.components import extract_largest_component
from ..ports.distance import DistanceCalculatorPort
from ..ports.loader import MapLoaderPort
from ..ports.process_log import ProcessLogPort
from ..ports.rendering import GraphExporterPort

OSM_SUFFIXES = frozenset({"osm", "xml"})
GRAPHVIZ_SUFFIXES = frozenset({"dot", "gv"})


def file_type(path: Path) -> str:
    """Lower-case suffix of ``path`` without the dot."""
    return Path(path).suffix.lstrip(".").lower()


@dataclass
class NavigationService:
    """Main service for loading, filtering and exporting road graphs.

    Attributes:
        distance_calculator: Segment length function for OSM input
        process_log: Sink for loader diagnostics
        exporters: Exporter for each supported output suffix
        config: Loader configuration
    """

    distance_calculator: DistanceCalculatorPort
    process_log: ProcessLogPort
    exporters: Mapping[str, GraphExporterPort]
    config: LoaderConfig = field(default_factory=lambda: get_config().loader)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def loader_for(self, path: Path) -> MapLoaderPort:
        """Return the loader able to read ``path``.

        Raises:
            UnsupportedFormatError: If the suffix is neither OSM nor Graphviz.
        """
        kind = file_type(path)
        if kind in OSM_SUFFIXES:
            return OSMMapLoader(
                path=Path(path),
                distance_calculator=self.distance_calculator,
                config=self.config,
                process_log=self.process_log,
            )
        if kind in GRAPHVIZ_SUFFIXES:
            return GraphvizMapLoader(
                path=Path(path), config=self.config, process_log=self.process_log
            )
        raise UnsupportedFormatError(
            f"Input file type not recognized: {path}",
            file_path=str(path),
            suffix=kind,
        )

    def load(self, path: Path, directed: bool = False) -> Tuple[Graph, VisualGraph]:
        """Load the whole map stored in ``path``."""
        return self.loader_for(path).load(directed)

    def load_largest_component(
        self, path: Path, directed: bool = False
    ) -> Tuple[Graph, VisualGraph]:
        """Load ``path`` and keep only its largest connected component."""
        return extract_largest_component(self.loader_for(path), directed)

    def export(self, visual_graph: VisualGraph, output_path: Path) -> Path:
        """Export ``visual_graph`` with the exporter for the output suffix.

        Raises:
            UnsupportedFormatError: If no exporter handles the suffix.
            ExportError: If the exporter fails.
        """
        kind = file_type(output_path)
        exporter = self.exporters.get(kind)
        if exporter is None:
            raise UnsupportedFormatError(
                f"Output file type not recognized: {output_path}",
                file_path=str(output_path),
                suffix=kind,
            )
        self._logger.info(
            "Exporting graph", extra={"output_path": str(output_path), "format": kind}
        )
        return exporter.export(visual_graph, Path(output_path))

    def describe_vertices(self, visual_graph: VisualGraph) -> Iterator[str]:
        """One line per vertex with its id and geographic position."""
        for vv in visual_graph:
            yield f"Vertex id:({vv.id}) LAT: {vv.lat}, LON: {vv.lon}"
