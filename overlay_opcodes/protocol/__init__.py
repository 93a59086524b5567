from .entries import (
    OpcodeEntry, OpcodeLookupError, NoVersion, UnknownVersion, UnknownOpcode, LookupResult,
)
from .table import OpcodeTable
from .loader import LoadFailure, LoadResult, SkippedEntry, load_opcode_table, load_opcode_file
from .matcher import OpcodeMatcher

__all__ = [
    "OpcodeEntry", "OpcodeLookupError", "NoVersion", "UnknownVersion", "UnknownOpcode",
    "LookupResult", "OpcodeTable",
    "LoadFailure", "LoadResult", "SkippedEntry", "load_opcode_table", "load_opcode_file",
    "OpcodeMatcher",
]
