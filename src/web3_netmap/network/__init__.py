"""Developer network map assembly."""

from web3_netmap.network.builder import build_developer_nodes, build_network_map
from web3_netmap.network.models import DeveloperNode, DeveloperProfile, NetworkMap

__all__ = [
    "build_developer_nodes",
    "build_network_map",
    "DeveloperNode",
    "DeveloperProfile",
    "NetworkMap",
]
