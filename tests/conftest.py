"""Shared test fixtures."""

import json
import logging
import random
from pathlib import Path

import pytest
import structlog

from web3_netmap.config.settings import get_settings
from web3_netmap.geo.locations import LocationResolver


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Isolate cached settings and logging configuration between tests."""
    get_settings.cache_clear()
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def seeded_resolver() -> LocationResolver:
    """Return a resolver whose fallback placement is reproducible."""
    return LocationResolver(rng=random.Random(42))


@pytest.fixture
def sample_profiles() -> list[dict]:
    """Return a small set of developer profile records."""
    return [
        {
            "id": "dev-1",
            "full_name": "Ada Example",
            "title": "Solidity Engineer",
            "location": "San Francisco, USA",
            "skills": ["Solidity", "Rust"],
        },
        {
            "id": "dev-2",
            "full_name": "Grace Example",
            "location": "san francisco",
            "skills": ["TypeScript"],
        },
        {
            "id": "dev-3",
            "full_name": "Ken Example",
            "location": "Tokyo, Japan",
            "skills": [],
        },
    ]


@pytest.fixture
def profiles_file(tmp_path: Path, sample_profiles: list[dict]) -> Path:
    """Write ``sample_profiles`` to a JSON file and return its path."""
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps(sample_profiles), encoding="utf-8")
    return path
