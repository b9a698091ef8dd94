"""Geodesic distance adapter backed by geopy."""

from __future__ import annotations

from dataclasses import dataclass

from geopy.distance import geodesic

from ...domain.models import GeoPoint


@dataclass(frozen=True)
class GeodesicDistanceCalculator:
    """Distance on the WGS-84 ellipsoid.

    This adapter implements DistanceCalculatorPort.
    """

    def distance(self, a: GeoPoint, b: GeoPoint) -> float:
        return geodesic(a.as_tuple(), b.as_tuple()).km
