"""
Opcode Resolver — logical packet name → opcode entry for the running client.

    OpcodeResolver.lookup(name)
        → VersionProbe.current_version()
        → OpcodeTable.get(version, name)
        → LookupResult (entry, or NoVersion / UnknownVersion / UnknownOpcode)

Every failure path makes exactly one DiagnosticThrottle.try_emit call.
The table and probe are shared and never mutated here; the throttle is
owned by the resolver, so a fresh resolver gets a fresh budget.
"""

from __future__ import annotations

import logging
from pathlib import Path

from overlay_opcodes.config import ResolverConfig
from overlay_opcodes.protocol.entries import (
    LookupResult, NoVersion, OpcodeEntry, OpcodeLookupError, UnknownOpcode, UnknownVersion,
)
from overlay_opcodes.protocol.loader import LoadResult, load_opcode_file
from overlay_opcodes.protocol.table import OpcodeTable
from overlay_opcodes.resolver.throttle import DEFAULT_CEILING, DiagnosticThrottle
from overlay_opcodes.version.probe import UNKNOWN_VERSION, VersionId, VersionProbe

log = logging.getLogger(__name__)


class OpcodeResolver:
    """Resolves packet names to opcodes for the detected client version."""

    def __init__(
        self,
        table: OpcodeTable,
        probe: VersionProbe,
        throttle: DiagnosticThrottle | None = None,
    ):
        self.table = table
        self.probe = probe
        self.throttle = throttle or DiagnosticThrottle()
        self.load_result: LoadResult | None = None

    # ---- Construction ----

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        probe: VersionProbe,
        logger: logging.Logger | None = None,
        ceiling: int = DEFAULT_CEILING,
    ) -> OpcodeResolver:
        """Load the mapping file eagerly and build a resolver over it.

        A file that fails to load leaves an empty table; the failure is
        reported through the throttle and counts against its budget.
        """
        result = load_opcode_file(path)
        resolver = cls(result.table, probe, DiagnosticThrottle(logger, ceiling))
        resolver.load_result = result
        if result.failure is not None:
            resolver.throttle.try_emit(result.failure.message())
        return resolver

    @classmethod
    def from_config(cls, config: ResolverConfig, logger: logging.Logger | None = None) -> OpcodeResolver:
        return cls.from_file(
            config.resolved_opcodes_path(),
            config.make_probe(),
            logger=logger,
            ceiling=config.diagnostic_ceiling,
        )

    # ---- Lookup ----

    def current_version(self) -> VersionId:
        try:
            version = self.probe.current_version()
        except Exception as e:
            log.debug("Version probe %r failed: %s", self.probe, e)
            return UNKNOWN_VERSION
        return UNKNOWN_VERSION if version is None else version

    def lookup(self, name: str) -> LookupResult:
        """Resolve `name` for the current client version. Never raises."""
        version = self.current_version()
        if version is UNKNOWN_VERSION:
            return self._fail(NoVersion())

        if not self.table.has_version(version):
            return self._fail(UnknownVersion(version))

        entry = self.table.get(version, name)
        if entry is None:
            return self._fail(UnknownOpcode(version, name))
        return LookupResult.success(entry)

    def _fail(self, error: OpcodeLookupError) -> LookupResult:
        self.throttle.try_emit(error.message())
        return LookupResult.failure(error)

    def __getitem__(self, name: str) -> OpcodeEntry | None:
        """Indexer form: the entry, or None on any failure."""
        return self.lookup(name).entry

    def __repr__(self) -> str:
        return f"OpcodeResolver({self.table!r}, probe={self.probe!r}, {self.throttle!r})"
