"""Lookup tables for location resolution.

Tech-hub coordinates and the fallback region boxes can be overridden via
``config/geo.yaml``.  If the file does not exist, built-in defaults are used.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator


class Region(BaseModel):
    """A latitude/longitude rectangle approximating a populated area."""

    name: str
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @model_validator(mode="after")
    def check_bounds(self) -> "Region":
        """Reject boxes whose minimum exceeds their maximum."""
        if self.min_lat > self.max_lat:
            raise ValueError(f"region {self.name!r}: min_lat > max_lat")
        if self.min_lng > self.max_lng:
            raise ValueError(f"region {self.name!r}: min_lng > max_lng")
        return self

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


DEFAULT_TECH_HUBS: dict[str, tuple[float, float]] = {
    "San Francisco": (37.7749, -122.4194),
    "New York": (40.7128, -74.0060),
    "London": (51.5074, -0.1278),
    "Berlin": (52.5200, 13.4050),
    "Singapore": (1.3521, 103.8198),
    "Tokyo": (35.6762, 139.6503),
    "Dubai": (25.2048, 55.2708),
}

DEFAULT_REGIONS: list[Region] = [
    Region(name="North America", min_lat=25, max_lat=50, min_lng=-130, max_lng=-70),
    Region(name="Europe", min_lat=35, max_lat=60, min_lng=-10, max_lng=30),
    Region(name="Asia", min_lat=10, max_lat=40, min_lng=70, max_lng=140),
    Region(name="Australia", min_lat=-40, max_lat=-10, min_lng=110, max_lng=155),
]


class GeoConfig(BaseModel):
    """Top-level geo lookup configuration."""

    tech_hubs: dict[str, tuple[float, float]] = Field(
        default_factory=lambda: dict(DEFAULT_TECH_HUBS)
    )
    regions: list[Region] = Field(
        default_factory=lambda: list(DEFAULT_REGIONS), min_length=1
    )

    def hub_index(self) -> dict[str, tuple[float, float]]:
        """Return the hub table keyed by lowercased city name."""
        return {name.lower(): coords for name, coords in self.tech_hubs.items()}


def load_geo_config(path: Path) -> GeoConfig:
    """Load geo lookup tables from a YAML file.

    Returns a ``GeoConfig`` with all default values if the file does not
    exist or is empty.  Only the top-level keys present in the file
    override defaults, so a file listing just ``tech_hubs`` keeps the
    default regions.
    """
    if not path.exists():
        return GeoConfig()

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GeoConfig(**data)
