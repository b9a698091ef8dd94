"""Distance adapters - Implementations of DistanceCalculatorPort.

Available implementations:
- GeodesicDistanceCalculator: geopy geodesic distance in kilometers
"""

from .geodesic import GeodesicDistanceCalculator

__all__ = ["GeodesicDistanceCalculator"]
