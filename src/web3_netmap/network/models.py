"""Developer profile and map node schemas."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict

from web3_netmap.geo.clustering import ClusteredMarker
from web3_netmap.geo.locations import ParsedLocation


def _coerce_location(v: object) -> str:
    """Accept already-decoded location objects by re-encoding them as JSON."""
    if v is None:
        return ""
    if isinstance(v, dict):
        return json.dumps(v)
    return str(v)


LocationStr = Annotated[str, BeforeValidator(_coerce_location)]


class DeveloperProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    title: str | None = None
    avatar_url: str | None = None
    location: LocationStr = ""
    skills: list[str] = []


@dataclass
class DeveloperNode:
    """A developer placed on the map."""

    id: str
    full_name: str
    location: ParsedLocation
    title: str | None = None
    avatar_url: str | None = None
    skills: list[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.location.label

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "title": self.title,
            "avatar_url": self.avatar_url,
            "skills": list(self.skills),
            "location": self.location.to_dict(),
            "label": self.label,
        }


@dataclass
class NetworkMap:
    """Nodes and their clusters, ready for the map renderer.

    Attributes:
        nodes: One node per input profile, in input order.
        clusters: Marker clusters over ``nodes`` in creation order.
        radius: Pixel radius the clusters were built with.
    """

    nodes: list[DeveloperNode] = field(default_factory=list)
    clusters: list[ClusteredMarker] = field(default_factory=list)
    radius: float = 40.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "radius": self.radius,
            "node_count": len(self.nodes),
            "cluster_count": len(self.clusters),
            "nodes": [n.to_dict() for n in self.nodes],
            "clusters": [c.to_dict() for c in self.clusters],
        }
