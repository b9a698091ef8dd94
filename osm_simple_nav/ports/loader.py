"""Loader port - Abstraction for turning a map document into graphs.

Implementations:
- adapters/loader/osm_loader.py (OSMMapLoader) - raw OpenStreetMap XML
- adapters/loader/graphviz_loader.py (GraphvizMapLoader) - prior exports
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple

if TYPE_CHECKING:
    from ..domain.models import Graph, VisualGraph


class MapLoaderPort(Protocol):
    """Port for map loading.

    A loader reads its whole document on every call and builds fresh,
    independent Graph and VisualGraph instances.
    """

    def load(self, directed: bool = False) -> Tuple[Graph, VisualGraph]:
        """Load the map.

        Args:
            directed: Whether to build a directed graph. Loaders whose
                document already states its directedness ignore this.

        Returns:
            The logical graph and its visual counterpart.

        Raises:
            MapLoadError: If the document is missing data or malformed.
        """
        ...
