"""Free-text location resolution for profile locations.

Turns whatever a user typed into the location field ("san francisco, usa",
"Berlin / Germany", "Atlantis", "") into a point that can be drawn on the
network map.  Resolution never fails:

1. Known tech hubs resolve to their exact coordinates.
2. Anything else lands on a random point inside one of the populated
   region boxes, keeping the parsed city/country labels.
3. Empty input gets a random regional point and no labels.

Pass a seeded ``random.Random`` to ``LocationResolver`` when the fallback
placement must be reproducible.
"""

from __future__ import annotations

import json
import math
import random
from dataclasses import asdict, dataclass
from typing import Any

import structlog

from web3_netmap.geo.config import GeoConfig

logger = structlog.get_logger()

# Separators tried in priority order; the first one present splits the input
LOCATION_SEPARATORS = (",", "-", "/")

UNSPECIFIED_LOCATION_LABEL = "Location not specified"


@dataclass(frozen=True)
class ParsedLocation:
    """A resolved map point with optional human-readable labels."""

    lat: float
    lng: float
    city: str | None = None
    country: str | None = None
    display_name: str | None = None

    @property
    def label(self) -> str:
        return format_location_label(self)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["display_name"] is None:
            del data["display_name"]
        return data


def to_title_case(text: str) -> str:
    """Uppercase the first character of every space-separated word.

    The remainder of each word is lowercased.  Words are split on single
    spaces so runs of spaces are preserved as-is.
    """
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def split_location(text: str) -> list[str]:
    """Split a location string into trimmed, non-empty parts.

    Only the first separator (in ``LOCATION_SEPARATORS`` order) found in the
    text is used, so "Winston-Salem, USA" splits on the comma and keeps the
    hyphenated city intact.
    """
    text = text.strip()
    for separator in LOCATION_SEPARATORS:
        if separator in text:
            parts = [part.strip() for part in text.split(separator)]
            return [part for part in parts if part]
    return [text] if text else []


def format_location_label(location: Any) -> str:
    """Render "City, Country", or whichever half exists."""
    city = getattr(location, "city", None)
    country = getattr(location, "country", None)
    if city and country:
        return f"{city}, {country}"
    return city or country or UNSPECIFIED_LOCATION_LABEL


class LocationResolver:
    """Resolve free-text locations against a hub table and region boxes."""

    def __init__(self, config: GeoConfig | None = None, rng: random.Random | None = None):
        self.config = config if config is not None else GeoConfig()
        self._hubs = self.config.hub_index()
        self._rng = rng if rng is not None else random.Random()

    def random_point(self) -> tuple[float, float]:
        """Pick a region uniformly, then a uniform point inside it."""
        region = self._rng.choice(self.config.regions)
        lat = region.min_lat + self._rng.random() * (region.max_lat - region.min_lat)
        lng = region.min_lng + self._rng.random() * (region.max_lng - region.min_lng)
        return lat, lng

    def parse(self, raw: str | None) -> ParsedLocation:
        """Resolve ``raw`` to a ``ParsedLocation``.  Never raises."""
        text = "" if raw is None else str(raw)
        if not text.strip():
            lat, lng = self.random_point()
            return ParsedLocation(lat=lat, lng=lng)

        parts = split_location(text.lower())
        city = parts[0] if parts else None
        country = parts[-1] if len(parts) >= 2 else None

        city_label = to_title_case(city) if city else None
        country_label = to_title_case(country) if country else None

        if city is not None and city in self._hubs:
            lat, lng = self._hubs[city]
            return ParsedLocation(lat=lat, lng=lng, city=city_label, country=country_label)

        lat, lng = self.random_point()
        logger.debug("location_fallback", raw=text, city=city_label, country=country_label)
        return ParsedLocation(lat=lat, lng=lng, city=city_label, country=country_label)

    def parse_stored(self, raw: str | None) -> ParsedLocation | None:
        """Decode a stored location blob, or resolve plain text.

        Profiles persist geocoded locations as JSON objects of the form
        ``{"display_name", "lat", "lng", "city", "country"}``.  Missing or
        non-numeric coordinates decode as ``0``.  Text that is not a JSON
        object is handed to ``parse``.  Returns ``None`` for empty input.
        """
        if not raw:
            return None

        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            data = None

        if not isinstance(data, dict):
            return self.parse(raw)

        return ParsedLocation(
            lat=_stored_coordinate(data.get("lat")),
            lng=_stored_coordinate(data.get("lng")),
            city=_optional_str(data.get("city")),
            country=_optional_str(data.get("country")),
            display_name=_optional_str(data.get("display_name")),
        )


def _stored_coordinate(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_location(raw: str | None, rng: random.Random | None = None) -> ParsedLocation:
    """Resolve a free-text location using the built-in lookup tables."""
    return LocationResolver(rng=rng).parse(raw)


def parse_stored_location(
    raw: str | None, rng: random.Random | None = None
) -> ParsedLocation | None:
    """Decode a stored JSON location, falling back to free-text parsing."""
    return LocationResolver(rng=rng).parse_stored(raw)
