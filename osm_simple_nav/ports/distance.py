"""Distance port - Abstraction for geodesic distance computation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeoPoint


class DistanceCalculatorPort(Protocol):
    """Port for distance between two geographic points.

    Implementation: adapters/distance/geodesic.py
    """

    def distance(self, a: GeoPoint, b: GeoPoint) -> float:
        """Return the distance between ``a`` and ``b`` in kilometers."""
        ...
