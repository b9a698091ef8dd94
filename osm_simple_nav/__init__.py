"""Top-level package for OSM Simple Nav.

The package turns a road-network description (an OpenStreetMap XML
extract or a previously exported Graphviz file) into an in-memory
weighted graph of road segments, optionally restricted to its largest
connected component, and exports it for rendering.
"""

__version__ = "0.1.0"
