"""Build the dashboard network map from developer profiles.

Each profile's stored location (a geocoded JSON blob or free text) is
resolved to a point, then all points are clustered so nearby developers
share one pin.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from web3_netmap.geo.clustering import DEFAULT_RADIUS, cluster_markers
from web3_netmap.geo.locations import LocationResolver, ParsedLocation
from web3_netmap.network.models import DeveloperNode, DeveloperProfile, NetworkMap

logger = structlog.get_logger()


def _as_profile(record: DeveloperProfile | Mapping[str, Any]) -> DeveloperProfile:
    if isinstance(record, DeveloperProfile):
        return record
    return DeveloperProfile.model_validate(record)


def build_developer_nodes(
    profiles: Iterable[DeveloperProfile | Mapping[str, Any]],
    resolver: LocationResolver,
) -> list[DeveloperNode]:
    """Resolve every profile's location into a map node.

    Profiles without any location still get a node, placed at a random
    regional point with no labels.

    Raises:
        pydantic.ValidationError: If a mapping is not a valid profile.
    """
    nodes: list[DeveloperNode] = []
    for record in profiles:
        profile = _as_profile(record)
        location: ParsedLocation | None = resolver.parse_stored(profile.location)
        if location is None:
            location = resolver.parse(None)
        nodes.append(
            DeveloperNode(
                id=profile.id,
                full_name=profile.full_name,
                location=location,
                title=profile.title,
                avatar_url=profile.avatar_url,
                skills=list(profile.skills),
            )
        )
    return nodes


def build_network_map(
    profiles: Iterable[DeveloperProfile | Mapping[str, Any]],
    resolver: LocationResolver | None = None,
    radius: float = DEFAULT_RADIUS,
) -> NetworkMap:
    """Resolve and cluster developer profiles for the map view."""
    if resolver is None:
        resolver = LocationResolver()

    nodes = build_developer_nodes(profiles, resolver)
    clusters = cluster_markers(nodes, radius=radius)

    logger.info(
        "network_map_built",
        node_count=len(nodes),
        cluster_count=len(clusters),
        radius=radius,
    )
    return NetworkMap(nodes=nodes, clusters=clusters, radius=radius)
