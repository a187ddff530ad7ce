"""
Native Bus Library module.

Provides the table of standard buses that get hand-written generators,
loaded from the bundled native_buses.yml, and the registry override that
swaps their schema-derived abstraction definitions for those generators.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ipxgen.model.base import VLNV
from ipxgen.model.registry import Definition, DefinitionRegistry
from ipxgen.utils import NATIVE_BUSES_PATH

from .native import NATIVE_GENERATORS

logger = logging.getLogger(__name__)

# Default path to native bus definitions
DEFAULT_NATIVE_BUSES_PATH = NATIVE_BUSES_PATH


@dataclass
class NativeBusEntry:
    """One standard bus and the generator that replaces it."""

    key: str  # e.g., "AXI4"
    vendor: str
    library: str
    name: str
    generator: str
    description: str = ""

    def matches(self, vlnv: VLNV) -> bool:
        """Match on vendor/library/name, any version."""
        return vlnv.matches(self.vendor, self.library, self.name)

    def create(self) -> Definition:
        """Instantiate the native generator for this bus."""
        return NATIVE_GENERATORS[self.generator]()


class NativeBusLibrary:
    """
    Access the native bus override table.

    Loads entries from YAML and builds registry overrides.
    """

    def __init__(self, entries: Dict[str, NativeBusEntry]):
        """Initialize with pre-loaded entries."""
        self._entries = entries

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "NativeBusLibrary":
        """
        Load native bus entries from YAML file.

        Args:
            path: Path to native_buses.yml (defaults to the bundled table)

        Returns:
            NativeBusLibrary instance
        """
        path = Path(path or DEFAULT_NATIVE_BUSES_PATH)

        if not path.exists():
            raise FileNotFoundError(f"Native bus table not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f) or {}

        entries = {}
        for key, data in raw_data.items():
            match = data.get("match", {})
            generator = data.get("generator", "")
            if generator not in NATIVE_GENERATORS:
                raise ValueError(
                    f"Native bus '{key}' uses unknown generator '{generator}'. "
                    f"Available: {', '.join(NATIVE_GENERATORS)}"
                )
            entries[key] = NativeBusEntry(
                key=key,
                vendor=match.get("vendor", ""),
                library=match.get("library", ""),
                name=match.get("name", ""),
                generator=generator,
                description=data.get("description", ""),
            )

        return cls(entries)

    def list_native_buses(self) -> List[str]:
        """Get list of native bus keys (e.g., ['AXI4', 'AXIS', ...])."""
        return list(self._entries.keys())

    def get_entry(self, key: str) -> Optional[NativeBusEntry]:
        """Get a native bus entry by key."""
        return self._entries.get(key)

    def find(self, vlnv: VLNV) -> Optional[NativeBusEntry]:
        """Get the entry matching an identifier, if any."""
        return next((e for e in self._entries.values() if e.matches(vlnv)), None)

    def overrides(self, registry: DefinitionRegistry) -> Dict[VLNV, Definition]:
        """
        Build the override mapping for a registry.

        Only identifiers already registered are listed, so every version of
        a standard bus present in the corpus is replaced.
        """
        mapping: Dict[VLNV, Definition] = {}
        for vlnv in registry:
            entry = self.find(vlnv)
            if entry is not None:
                mapping[vlnv] = entry.create()
        return mapping

    def apply(self, registry: DefinitionRegistry) -> DefinitionRegistry:
        """Return a registry with the standard buses replaced by native generators."""
        mapping = self.overrides(registry)
        for vlnv, replacement in mapping.items():
            logger.debug("Using native %s for %s", type(replacement).__name__, vlnv)
        return registry.override(mapping)


# Singleton instance for convenience
_library_instance: Optional[NativeBusLibrary] = None


def get_native_bus_library() -> NativeBusLibrary:
    """Get or create the global NativeBusLibrary instance."""
    global _library_instance
    if _library_instance is None:
        _library_instance = NativeBusLibrary.load()
    return _library_instance


def native_overrides(registry: DefinitionRegistry) -> Dict[VLNV, Definition]:
    """Override mapping for ``registry`` from the bundled table."""
    return get_native_bus_library().overrides(registry)


def apply_native_overrides(registry: DefinitionRegistry) -> DefinitionRegistry:
    """Apply the bundled native bus table to ``registry``."""
    return get_native_bus_library().apply(registry)
