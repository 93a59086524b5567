"""
Opcode Table — version → (packet name → OpcodeEntry).

Built once by the loader and read-only afterwards, so a single instance
can be shared across threads without locking.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from .entries import OpcodeEntry


class OpcodeTable:
    """Immutable nested mapping of client version to named opcode entries."""

    def __init__(self, versions: Mapping[str, Mapping[str, OpcodeEntry]] | None = None):
        # Copy on the way in; callers keep no handle on our dicts
        self._versions: Mapping[str, Mapping[str, OpcodeEntry]] = MappingProxyType({
            version: MappingProxyType(dict(entries))
            for version, entries in (versions or {}).items()
        })

    @classmethod
    def empty(cls) -> OpcodeTable:
        return cls()

    def get(self, version: str, name: str) -> OpcodeEntry | None:
        """Entry for (version, name), or None if either level is missing."""
        entries = self._versions.get(version)
        if entries is None:
            return None
        return entries.get(name)

    def has_version(self, version: str) -> bool:
        return version in self._versions

    def versions(self) -> list[str]:
        return list(self._versions)

    def names(self, version: str) -> list[str]:
        """Packet names mapped for a version (empty if version unknown)."""
        return list(self._versions.get(version, {}))

    def entries(self, version: str) -> Mapping[str, OpcodeEntry]:
        return self._versions.get(version, MappingProxyType({}))

    def to_dict(self) -> dict:
        return {
            version: {name: entry.to_dict() for name, entry in entries.items()}
            for version, entries in self._versions.items()
        }

    def __contains__(self, version: object) -> bool:
        return version in self._versions

    def __iter__(self) -> Iterator[str]:
        return iter(self._versions)

    def __len__(self) -> int:
        return len(self._versions)

    def __repr__(self) -> str:
        total = sum(len(e) for e in self._versions.values())
        return f"OpcodeTable({len(self._versions)} versions, {total} entries)"
