"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.
"""

from .distance import DistanceCalculatorPort
from .loader import MapLoaderPort
from .process_log import ProcessLogPort
from .rendering import GraphExporterPort

__all__ = [
    "MapLoaderPort",
    "DistanceCalculatorPort",
    "GraphExporterPort",
    "ProcessLogPort",
]
