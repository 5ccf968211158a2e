"""CLI entry point: python -m web3_netmap.cli {resolve,cluster,map}"""

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any

import structlog

from web3_netmap.config.settings import get_settings
from web3_netmap.geo.clustering import cluster_markers
from web3_netmap.geo.config import load_geo_config
from web3_netmap.geo.locations import LocationResolver
from web3_netmap.logging_config import configure_from_settings
from web3_netmap.network.builder import build_network_map


def _make_resolver(geo_config_path: Path, seed: int | None) -> LocationResolver:
    rng = random.Random(seed) if seed is not None else None
    return LocationResolver(config=load_geo_config(geo_config_path), rng=rng)


def _load_json_list(path: Path) -> list[Any]:
    """Read a JSON array from ``path``.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON or not an array.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array in {path}, got {type(data).__name__}")
    return data


def run_resolve(location: str, geo_config_path: Path, seed: int | None = None) -> dict:
    """Resolve a single location string."""
    resolver = _make_resolver(geo_config_path, seed)
    return resolver.parse(location).to_dict()


def run_cluster(path: Path, radius: float) -> list[dict]:
    """Cluster the markers stored in a JSON file."""
    log = structlog.get_logger()
    markers = _load_json_list(path)
    clusters = cluster_markers(markers, radius=radius)
    log.info("markers_clustered", markers=len(markers), clusters=len(clusters), radius=radius)
    return [c.to_dict() for c in clusters]


def run_map(path: Path, radius: float, geo_config_path: Path, seed: int | None = None) -> dict:
    """Build the network map for the developer profiles in a JSON file."""
    profiles = _load_json_list(path)
    resolver = _make_resolver(geo_config_path, seed)
    return build_network_map(profiles, resolver=resolver, radius=radius).to_dict()


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="web3_netmap.cli",
        description="Web3 network map CLI",
    )
    subparsers = parser.add_subparsers(dest="command")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a location string")
    resolve_parser.add_argument("location", help='Free-text location, e.g. "Berlin, Germany"')
    resolve_parser.add_argument(
        "--seed",
        type=int,
        default=settings.random_seed,
        help="Seed for fallback placement (default: random)",
    )

    cluster_parser = subparsers.add_parser("cluster", help="Cluster markers from a JSON file")
    cluster_parser.add_argument("file", type=Path, help="JSON array of {location: {lat, lng}}")
    cluster_parser.add_argument(
        "--radius",
        type=float,
        default=settings.cluster_radius,
        help=f"Cluster radius in pixels (default: {settings.cluster_radius})",
    )

    map_parser = subparsers.add_parser("map", help="Build the network map from profiles")
    map_parser.add_argument("file", type=Path, help="JSON array of developer profiles")
    map_parser.add_argument(
        "--radius",
        type=float,
        default=settings.cluster_radius,
        help=f"Cluster radius in pixels (default: {settings.cluster_radius})",
    )
    map_parser.add_argument(
        "--seed",
        type=int,
        default=settings.random_seed,
        help="Seed for fallback placement (default: random)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    configure_from_settings(settings)
    log = structlog.get_logger()

    try:
        if args.command == "resolve":
            result: Any = run_resolve(args.location, settings.geo_config_path, args.seed)
        elif args.command == "cluster":
            result = run_cluster(args.file, args.radius)
        else:
            result = run_map(args.file, args.radius, settings.geo_config_path, args.seed)
    except (OSError, ValueError) as exc:
        log.error("input_error", command=args.command, error=str(exc))
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
