"""Location resolution and marker clustering for the network map."""

from web3_netmap.geo.clustering import ClusteredMarker, cluster_markers, marker_coordinates
from web3_netmap.geo.config import GeoConfig, Region, load_geo_config
from web3_netmap.geo.locations import (
    LocationResolver,
    ParsedLocation,
    format_location_label,
    parse_location,
    parse_stored_location,
    to_title_case,
)

__all__ = [
    "cluster_markers",
    "ClusteredMarker",
    "format_location_label",
    "GeoConfig",
    "load_geo_config",
    "LocationResolver",
    "marker_coordinates",
    "parse_location",
    "parse_stored_location",
    "ParsedLocation",
    "Region",
    "to_title_case",
]
