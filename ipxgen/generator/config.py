"""
Bus interface configuration handling.

A component instance carries one flat set of configurable element values
for all of its bus interfaces, keyed by vendor reference ids such as
``BUSIFPARAM_VALUE.M_AXI_HPM0_FPD.DATA_WIDTH``. ``BusConfig`` scopes that
set down to one interface and merges it with catalog defaults. Keys are
matched case-insensitively; values are kept verbatim.
"""

from typing import Dict, Iterator, Mapping, Optional, Tuple

BUS_PARAM_PREFIX = "BUSIFPARAM_VALUE"


class BusConfig(Mapping[str, str]):
    """Case-insensitive, insertion-ordered mapping of parameter key to value.

    Lookups ignore case. Iteration yields the keys as last written, so
    callers that need lower-case keys use ``lowered()``.
    """

    def __init__(self, data: Optional[Mapping[str, str]] = None):
        self._store: Dict[str, Tuple[str, str]] = {}
        for key, value in (data or {}).items():
            self._store[key.lower()] = (key, value)

    @classmethod
    def coerce(cls, config: Optional[Mapping[str, str]]) -> "BusConfig":
        """Return ``config`` unchanged if already a BusConfig, else wrap it."""
        if isinstance(config, BusConfig):
            return config
        return cls(config)

    @classmethod
    def merged(
        cls, defaults: Mapping[str, str], overrides: Mapping[str, str]
    ) -> "BusConfig":
        """Overlay ``overrides`` on ``defaults``; override values always win."""
        result = cls(defaults)
        for key, value in overrides.items():
            result._store[key.lower()] = (key, value)
        return result

    @classmethod
    def for_interface(cls, config: Mapping[str, str], interface_name: str) -> "BusConfig":
        """Extract the configuration belonging to one bus interface.

        Keeps keys of the form ``BUSIFPARAM_VALUE.<interface_name>.<rest>``
        (case-insensitive) and returns them as ``<rest>``. The match runs up
        to the dot after the interface name, so ``M_AXI`` never picks up the
        keys of ``M_AXI_HP0``.
        """
        prefix = f"{BUS_PARAM_PREFIX}.{interface_name}.".lower()
        scoped = cls()
        for key, value in config.items():
            if not key.lower().startswith(prefix):
                continue
            remainder = key[len(prefix):]
            if remainder:
                scoped._store[remainder.lower()] = (remainder, value)
        return scoped

    def lowered(self) -> Dict[str, str]:
        """Return a plain dict with lower-cased keys."""
        return {lower: value for lower, (_, value) in self._store.items()}

    def __getitem__(self, key: str) -> str:
        return self._store[key.lower()][1]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._store

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BusConfig):
            return self.lowered() == other.lowered()
        if isinstance(other, Mapping):
            return self.lowered() == {str(k).lower(): v for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"BusConfig({dict(self.items())!r})"
