"""
Opcode Matcher — decide whether a framed message is a given packet kind.

Line processors (map effects, FATE control, CE director, ...) each care
about one logical packet name. The packet collaborator hands over the
message's opcode and payload length; the matcher resolves the entry for
the running client version and compares.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .entries import OpcodeEntry

if TYPE_CHECKING:
    from overlay_opcodes.resolver.resolver import OpcodeResolver


class OpcodeMatcher:
    """Matches (opcode, payload length) against one named opcode entry."""

    def __init__(self, resolver: OpcodeResolver, name: str, exact_size: bool = False):
        self.resolver = resolver
        self.name = name
        # False: payload may be longer than the recorded size (trailing padding)
        self.exact_size = exact_size

    def entry(self) -> OpcodeEntry | None:
        return self.resolver[self.name]

    def matches(self, opcode: int, payload_len: int) -> bool:
        entry = self.entry()
        if entry is None or opcode != entry.opcode:
            return False
        if self.exact_size:
            return payload_len == entry.size
        return payload_len >= entry.size

    def __repr__(self) -> str:
        return f"OpcodeMatcher({self.name!r}, exact_size={self.exact_size})"
