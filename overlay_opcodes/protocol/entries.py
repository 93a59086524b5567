"""
Opcode Entries — value types for resolved opcodes and lookup failures.

An OpcodeEntry is what the mapping file records for one packet kind
under one client version: the wire opcode and the expected payload size.
Lookups never raise; they hand back a LookupResult holding either the
entry or one of the OpcodeLookupError variants.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

U32_MAX = 0xFFFFFFFF


def _check_u32(field_name: str, value: object) -> int:
    # bool is an int subclass; `true` in the file is not an opcode
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {type(value).__name__}")
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{field_name} out of u32 range: {value}")
    return value


@dataclass(frozen=True)
class OpcodeEntry:
    """Wire opcode + expected payload size for one packet kind."""
    opcode: int
    size: int

    def __post_init__(self) -> None:
        _check_u32("opcode", self.opcode)
        _check_u32("size", self.size)

    @property
    def opcode_hex(self) -> str:
        return f"0x{self.opcode:04x}"

    def to_dict(self) -> dict:
        return {"opcode": self.opcode, "size": self.size}


# ---- Lookup failures ----

class OpcodeLookupError(ABC):
    """Base for the typed lookup failures. Not an exception."""

    @abstractmethod
    def message(self) -> str: ...


@dataclass(frozen=True)
class NoVersion(OpcodeLookupError):
    """Client version could not be detected."""

    def message(self) -> str:
        return "Could not detect game version"


@dataclass(frozen=True)
class UnknownVersion(OpcodeLookupError):
    """Mapping file has no opcodes for the detected version."""
    version: str

    def message(self) -> str:
        return f"No opcodes for game version {self.version}"


@dataclass(frozen=True)
class UnknownOpcode(OpcodeLookupError):
    """Version is mapped, but this packet name is not."""
    version: str
    name: str

    def message(self) -> str:
        return f"No opcode for game version {self.version}, opcode name {self.name}"


@dataclass(frozen=True)
class LookupResult:
    """Either a resolved entry or a typed failure, never both."""
    entry: OpcodeEntry | None = None
    error: OpcodeLookupError | None = None

    def __post_init__(self) -> None:
        if (self.entry is None) == (self.error is None):
            raise ValueError("LookupResult needs exactly one of entry or error")

    @classmethod
    def success(cls, entry: OpcodeEntry) -> LookupResult:
        return cls(entry=entry)

    @classmethod
    def failure(cls, error: OpcodeLookupError) -> LookupResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.entry is not None

    def unwrap_or(self, default: OpcodeEntry | None = None) -> OpcodeEntry | None:
        return self.entry if self.entry is not None else default
