"""Selectable options for the onboarding form.

Users may add their own platform or blockchain when the defaults do not
cover it.  Additions live on an ``OptionRegistry`` instance created per
request (or per form session); the module-level defaults are immutable
tuples and are never extended.
"""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_PLATFORMS: tuple[str, ...] = (
    "Twitter",
    "GitHub",
    "LinkedIn",
    "Discord",
    "Telegram",
    "Medium",
)

DEFAULT_BLOCKCHAINS: tuple[str, ...] = (
    "Ethereum",
    "Polygon",
    "Solana",
    "Bitcoin",
    "Arbitrum",
    "Optimism",
)

# Select values carrying this prefix denote a user-entered option
NEW_OPTION_PREFIX = "new-"


class OptionRegistry:
    """An extendable, per-request list of option names."""

    def __init__(self, defaults: Iterable[str] = ()):
        self._options: list[str] = []
        for name in defaults:
            self.add(name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._find(name) is not None

    def __len__(self) -> int:
        return len(self._options)

    def _find(self, name: str) -> str | None:
        key = name.strip().lower()
        for existing in self._options:
            if existing.lower() == key:
                return existing
        return None

    def add(self, name: str) -> str | None:
        """Add ``name`` unless a case-insensitive equal already exists.

        Returns the stored spelling, or ``None`` for blank names.
        """
        name = name.strip()
        if not name:
            return None
        existing = self._find(name)
        if existing is not None:
            return existing
        self._options.append(name)
        return name

    def select(self, value: str) -> str:
        """Handle a select-box value, registering ``new-<name>`` entries.

        Plain values are returned unchanged.
        """
        if value.startswith(NEW_OPTION_PREFIX):
            added = self.add(value[len(NEW_OPTION_PREFIX):])
            if added is not None:
                return added
        return value

    def options(self) -> tuple[str, ...]:
        return tuple(self._options)

    def choices(self) -> list[tuple[str, str]]:
        """Return ``(value, label)`` pairs with lowercased values."""
        return [(name.lower(), name) for name in self._options]


def platform_registry() -> OptionRegistry:
    return OptionRegistry(DEFAULT_PLATFORMS)


def blockchain_registry() -> OptionRegistry:
    return OptionRegistry(DEFAULT_BLOCKCHAINS)
