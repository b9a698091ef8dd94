"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Map documents (OpenStreetMap XML, Graphviz descriptions)
- Distance computation (geopy)
- Rendering engines (Graphviz via pydot, Folium)
- Diagnostic sinks (standard logging, null)
"""
