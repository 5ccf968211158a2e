"""Tests for free-text location resolution."""

import json
import math
import random

import pytest

from web3_netmap.geo.config import DEFAULT_REGIONS, GeoConfig
from web3_netmap.geo.locations import (
    LocationResolver,
    ParsedLocation,
    format_location_label,
    parse_location,
    parse_stored_location,
    split_location,
    to_title_case,
)


def _in_any_region(location: ParsedLocation) -> bool:
    return any(region.contains(location.lat, location.lng) for region in DEFAULT_REGIONS)


# ===========================================================================
# to_title_case / split_location
# ===========================================================================

class TestTitleCase:
    """Tests for word-wise title casing."""

    def test_mixed_case(self) -> None:
        assert to_title_case("hELLO wORLD") == "Hello World"

    def test_hyphenated_word_only_capitalises_first_letter(self) -> None:
        assert to_title_case("winston-salem") == "Winston-salem"

    def test_empty_string(self) -> None:
        assert to_title_case("") == ""

    def test_double_space_preserved(self) -> None:
        assert to_title_case("new  york") == "New  York"

    @pytest.mark.parametrize(
        "text", ["san francisco", "USA", "  leading", "ümlaut stadt", "a b c", "x"]
    )
    def test_idempotent(self, text: str) -> None:
        once = to_title_case(text)
        assert to_title_case(once) == once


class TestSplitLocation:
    """Tests for separator handling."""

    def test_comma(self) -> None:
        assert split_location("berlin, germany") == ["berlin", "germany"]

    def test_hyphen(self) -> None:
        assert split_location("berlin - germany") == ["berlin", "germany"]

    def test_slash(self) -> None:
        assert split_location("london/uk") == ["london", "uk"]

    def test_comma_wins_over_hyphen(self) -> None:
        """Only the first separator present in priority order is used."""
        assert split_location("winston-salem, usa") == ["winston-salem", "usa"]

    def test_empty_parts_dropped(self) -> None:
        assert split_location(", berlin,, ") == ["berlin"]

    def test_no_separator(self) -> None:
        assert split_location("  tokyo ") == ["tokyo"]

    def test_blank(self) -> None:
        assert split_location("   ") == []


# ===========================================================================
# parse_location
# ===========================================================================

class TestHubLookup:
    """Known tech hubs resolve to their exact coordinates."""

    def test_san_francisco_with_country(self) -> None:
        result = parse_location("San Francisco, USA")
        assert result == ParsedLocation(
            lat=37.7749, lng=-122.4194, city="San Francisco", country="Usa"
        )

    def test_case_and_whitespace_insensitive(self) -> None:
        result = parse_location("   NEW york   ")
        assert (result.lat, result.lng) == (40.7128, -74.0060)
        assert result.city == "New York"
        assert result.country is None

    def test_slash_separator(self) -> None:
        result = parse_location("LONDON/uk")
        assert (result.lat, result.lng) == (51.5074, -0.1278)
        assert result.city == "London"
        assert result.country == "Uk"

    def test_last_part_is_country(self) -> None:
        result = parse_location("Berlin, Brandenburg, Germany")
        assert (result.lat, result.lng) == (52.5200, 13.4050)
        assert result.country == "Germany"

    def test_custom_hub_table(self) -> None:
        config = GeoConfig(tech_hubs={"Lisbon": (38.7223, -9.1393)})
        resolver = LocationResolver(config=config)
        result = resolver.parse("lisbon, portugal")
        assert (result.lat, result.lng) == (38.7223, -9.1393)
        assert result.city == "Lisbon"


class TestFallback:
    """Unknown or empty locations land inside a populated region."""

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_input(self, raw) -> None:
        result = parse_location(raw)
        assert _in_any_region(result)
        assert result.city is None
        assert result.country is None

    def test_unknown_city_keeps_label(self) -> None:
        result = parse_location("Atlantis")
        assert result.city == "Atlantis"
        assert result.country is None
        assert _in_any_region(result)

    def test_unknown_city_with_country(self) -> None:
        result = parse_location("winston-salem, usa")
        assert result.city == "Winston-salem"
        assert result.country == "Usa"
        assert _in_any_region(result)

    def test_only_separators(self) -> None:
        result = parse_location(" ,, ")
        assert result.city is None
        assert result.country is None
        assert _in_any_region(result)

    def test_custom_hub_table_misses_default_hub(self) -> None:
        config = GeoConfig(tech_hubs={"Lisbon": (38.7223, -9.1393)})
        result = LocationResolver(config=config).parse("London")
        assert result.city == "London"
        assert _in_any_region(result)

    @pytest.mark.parametrize(
        "raw",
        ["Atlantis", "x", "-", "///", "12345", "São Paulo, Brasil", "\t\n", "a,b,c,d"],
    )
    def test_coordinates_always_finite(self, raw: str) -> None:
        result = parse_location(raw)
        assert math.isfinite(result.lat)
        assert math.isfinite(result.lng)

    def test_seeded_resolver_is_reproducible(self) -> None:
        first = LocationResolver(rng=random.Random(7)).parse("Atlantis")
        second = LocationResolver(rng=random.Random(7)).parse("Atlantis")
        assert first == second

    def test_every_region_is_used(self) -> None:
        resolver = LocationResolver(rng=random.Random(1))
        hits = {region.name: 0 for region in DEFAULT_REGIONS}
        for _ in range(400):
            lat, lng = resolver.random_point()
            for region in DEFAULT_REGIONS:
                if region.contains(lat, lng):
                    hits[region.name] += 1
        assert all(count > 0 for count in hits.values())

    def test_single_region_config(self) -> None:
        config = GeoConfig(
            regions=[{"name": "Box", "min_lat": 1, "max_lat": 2, "min_lng": 3, "max_lng": 4}]
        )
        result = LocationResolver(config=config, rng=random.Random(3)).parse("")
        assert 1 <= result.lat <= 2
        assert 3 <= result.lng <= 4


# ===========================================================================
# parse_stored_location
# ===========================================================================

class TestStoredLocation:
    """Tests for decoding persisted location blobs."""

    def test_full_blob(self) -> None:
        raw = json.dumps(
            {
                "display_name": "Lisboa, Portugal",
                "lat": 38.7,
                "lng": -9.1,
                "city": "Lisboa",
                "country": "Portugal",
            }
        )
        result = parse_stored_location(raw)
        assert result == ParsedLocation(
            lat=38.7, lng=-9.1, city="Lisboa", country="Portugal", display_name="Lisboa, Portugal"
        )

    def test_missing_coordinates_default_to_zero(self) -> None:
        result = parse_stored_location(json.dumps({"display_name": "Somewhere"}))
        assert (result.lat, result.lng) == (0.0, 0.0)
        assert result.city is None

    def test_non_numeric_coordinates_default_to_zero(self) -> None:
        result = parse_stored_location(json.dumps({"lat": "north", "lng": None}))
        assert (result.lat, result.lng) == (0.0, 0.0)

    def test_numeric_string_coordinates(self) -> None:
        result = parse_stored_location(json.dumps({"lat": "48.1", "lng": "7.8"}))
        assert result.lat == pytest.approx(48.1)
        assert result.lng == pytest.approx(7.8)

    def test_plain_text_falls_back_to_parsing(self) -> None:
        result = parse_stored_location("Tokyo, Japan")
        assert (result.lat, result.lng) == (35.6762, 139.6503)
        assert result.country == "Japan"
        assert result.display_name is None

    def test_json_scalar_falls_back_to_parsing(self) -> None:
        result = parse_stored_location("42")
        assert result.city == "42"

    def test_integer_too_large_for_float_defaults_to_zero(self) -> None:
        raw = '{"lat": 1' + "0" * 400 + ', "lng": 7.8}'
        result = parse_stored_location(raw)
        assert (result.lat, result.lng) == (0.0, 7.8)

    def test_infinite_coordinate_defaults_to_zero(self) -> None:
        result = parse_stored_location('{"lat": 1e999, "lng": 2.0}')
        assert (result.lat, result.lng) == (0.0, 2.0)

    def test_deeply_nested_text_falls_back_to_parsing(self) -> None:
        raw = "[" * 100000
        result = parse_stored_location(raw)
        assert result.city == raw
        assert result.country is None
        assert math.isfinite(result.lat)
        assert math.isfinite(result.lng)

    @pytest.mark.parametrize("raw", [None, ""])
    def test_empty_returns_none(self, raw) -> None:
        assert parse_stored_location(raw) is None


# ===========================================================================
# Labels and serialisation
# ===========================================================================

class TestLabels:
    def test_city_and_country(self) -> None:
        assert format_location_label(ParsedLocation(0, 0, "Berlin", "Germany")) == "Berlin, Germany"

    def test_city_only(self) -> None:
        assert format_location_label(ParsedLocation(0, 0, city="Berlin")) == "Berlin"

    def test_country_only(self) -> None:
        assert format_location_label(ParsedLocation(0, 0, country="Germany")) == "Germany"

    def test_nothing(self) -> None:
        assert ParsedLocation(0, 0).label == "Location not specified"

    def test_to_dict_omits_missing_display_name(self) -> None:
        data = ParsedLocation(1.0, 2.0, city="A").to_dict()
        assert data == {"lat": 1.0, "lng": 2.0, "city": "A", "country": None}

    def test_parsed_location_is_immutable(self) -> None:
        location = ParsedLocation(1.0, 2.0)
        with pytest.raises(AttributeError):
            location.lat = 3.0  # type: ignore[misc]
