"""Greedy marker clustering for the network map.

Markers are assigned in a single forward pass to the first existing
cluster whose centroid lies within the radius threshold (first-fit, not
nearest-fit).  Cluster order is creation order.

Distances use a flat-earth approximation that is good enough at map
zoom levels: one degree of latitude is ~111 km and longitude degrees are
scaled by the cosine of the marker's latitude.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

KM_PER_DEGREE = 111.0

# Pixel radius -> km threshold
PIXEL_TO_KM = 0.01

DEFAULT_RADIUS = 40.0


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def marker_coordinates(marker: Any) -> tuple[float, float]:
    """Return ``(lat, lng)`` from ``marker.location``.

    Works for mappings and attribute-style records alike.  Missing or
    non-numeric coordinates come back as NaN.
    """
    location = _field(marker, "location")
    if location is None:
        return math.nan, math.nan
    return _as_float(_field(location, "lat")), _as_float(_field(location, "lng"))


def planar_distance_km(lat: float, lng: float, other_lat: float, other_lng: float) -> float:
    """Approximate distance in km between a marker and a reference point."""
    dx = (lat - other_lat) * KM_PER_DEGREE
    # math.cos rejects infinities; treat them like NaN
    scale = math.cos(math.radians(lat)) if math.isfinite(lat) else math.nan
    dy = (lng - other_lng) * KM_PER_DEGREE * scale
    return math.sqrt(dx * dx + dy * dy)


@dataclass
class ClusteredMarker:
    """A group of markers drawn as a single pin.

    Attributes:
        lat: Mean latitude of all points.
        lng: Mean longitude of all points.
        points: The input marker records, in assignment order.
    """

    lat: float
    lng: float
    points: list[Any] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.points)

    def add(self, marker: Any) -> None:
        """Append a marker and recompute the centroid over all points."""
        self.points.append(marker)
        coords = [marker_coordinates(p) for p in self.points]
        self.lat = sum(c[0] for c in coords) / len(coords)
        self.lng = sum(c[1] for c in coords) / len(coords)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lat": self.lat,
            "lng": self.lng,
            "count": self.size,
            "points": [p.to_dict() if hasattr(p, "to_dict") else p for p in self.points],
        }


def cluster_markers(markers: Iterable[Any], radius: float = DEFAULT_RADIUS) -> list[ClusteredMarker]:
    """Group markers whose positions fall within ``radius`` of a cluster.

    Args:
        markers: Records exposing ``location.lat`` / ``location.lng``
            (mappings or objects).
        radius: Pixel-equivalent radius; the distance threshold is
            ``radius * PIXEL_TO_KM`` kilometres.

    Returns:
        Clusters in creation order.  Every input marker appears in exactly
        one cluster.  Markers with NaN coordinates never satisfy the
        threshold and end up as singletons.
    """
    threshold = radius * PIXEL_TO_KM
    clusters: list[ClusteredMarker] = []

    for marker in markers:
        lat, lng = marker_coordinates(marker)

        for cluster in clusters:
            if planar_distance_km(lat, lng, cluster.lat, cluster.lng) < threshold:
                cluster.add(marker)
                break
        else:
            clusters.append(ClusteredMarker(lat=lat, lng=lng, points=[marker]))

    return clusters
