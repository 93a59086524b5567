"""
Overlay Opcodes — versioned opcode configuration for network-derived overlays.

Maps (client version, packet name) to the opcode and payload size the
running game client uses, from a hand-maintained opcodes.jsonc.
"""

from .protocol import (
    OpcodeEntry, OpcodeLookupError, NoVersion, UnknownVersion, UnknownOpcode, LookupResult,
    OpcodeTable, LoadFailure, LoadResult, SkippedEntry, load_opcode_table, load_opcode_file,
    OpcodeMatcher,
)
from .version import UNKNOWN_VERSION, VersionProbe, StaticVersionProbe, GameVersionFileProbe, PeVersionProbe
from .resolver import DiagnosticThrottle, OpcodeResolver
from .config import ResolverConfig

__all__ = [
    "OpcodeEntry", "OpcodeLookupError", "NoVersion", "UnknownVersion", "UnknownOpcode",
    "LookupResult", "OpcodeTable", "LoadFailure", "LoadResult", "SkippedEntry",
    "load_opcode_table", "load_opcode_file", "OpcodeMatcher",
    "UNKNOWN_VERSION", "VersionProbe", "StaticVersionProbe", "GameVersionFileProbe",
    "PeVersionProbe", "DiagnosticThrottle", "OpcodeResolver", "ResolverConfig",
]
