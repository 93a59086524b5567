"""
Opcode Loader — parse a hand-maintained opcodes.jsonc into an OpcodeTable.

The mapping file is JSON plus `//` and `/* */` comments and trailing
commas. It is maintained out-of-band and is often stale or hand-edited,
so loading never raises: a broken file yields an empty table and a
LoadFailure, a broken entry is skipped and recorded as a SkippedEntry.

Expected shape:
    {
      "<version>": {
        "<packet name>": {"opcode": <u32>, "size": <u32>},
        ...
      },
      ...
    }

Duplicate keys at any level: the last one in the file wins.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .entries import OpcodeEntry
from .table import OpcodeTable

log = logging.getLogger(__name__)

ENTRY_KEYS = frozenset({"opcode", "size"})


@dataclass(frozen=True)
class LoadFailure:
    """Whole-document failure: unreadable, unparsable, or wrong top-level shape."""
    reason: str
    source: str | None = None

    def message(self) -> str:
        where = f" from {self.source}" if self.source else ""
        return f"Could not load opcodes{where}: {self.reason}"


@dataclass(frozen=True)
class SkippedEntry:
    """One version block or entry dropped during validation."""
    version: str
    name: str | None
    reason: str


@dataclass
class LoadResult:
    table: OpcodeTable
    failure: LoadFailure | None = None
    skipped: list[SkippedEntry] = field(default_factory=list)
    source: str | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


# ---- Comment / trailing comma handling ----

def strip_comments(text: str) -> str:
    """Blank out // and /* */ comments outside string literals.

    Comment characters become spaces (newlines kept) so JSON error
    positions still point at the right line and column of the file.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            if end == -1:
                end = n
            out.append(" " * (end - i))
            i = end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise ValueError("unterminated block comment")
            end += 2
            out.append("".join(c if c == "\n" else " " for c in text[i:end]))
            i = end
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def strip_trailing_commas(text: str) -> str:
    """Drop commas directly followed (after whitespace) by } or ]."""
    out: list[str] = []
    n = len(text)
    in_string = False
    # index in `out` of a comma seen since the last non-whitespace char
    pending: int | None = None
    i = 0
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch in " \t\r\n":
            out.append(ch)
        else:
            if pending is not None and ch in "}]":
                out[pending] = " "
            pending = None
            if ch == '"':
                in_string = True
            elif ch == ",":
                pending = len(out)
            out.append(ch)
        i += 1
    return "".join(out)


def _warn_duplicates(pairs: list[tuple[str, object]]) -> dict:
    result: dict = {}
    for key, value in pairs:
        if key in result:
            log.debug("Duplicate key %r in opcodes file, last one wins", key)
        result[key] = value
    return result


# ---- Validation ----

def _validate_entry(version: str, name: str, raw: object) -> OpcodeEntry | SkippedEntry:
    if not isinstance(raw, dict):
        return SkippedEntry(version, name, f"entry is {type(raw).__name__}, expected object")
    missing = ENTRY_KEYS - raw.keys()
    if missing:
        return SkippedEntry(version, name, f"missing {', '.join(sorted(missing))}")
    extra = raw.keys() - ENTRY_KEYS
    if extra:
        return SkippedEntry(version, name, f"unexpected keys {', '.join(sorted(extra))}")
    try:
        return OpcodeEntry(opcode=raw["opcode"], size=raw["size"])
    except ValueError as e:
        return SkippedEntry(version, name, str(e))


def _build_table(doc: dict, skipped: list[SkippedEntry]) -> OpcodeTable:
    versions: dict[str, dict[str, OpcodeEntry]] = {}
    for version, block in doc.items():
        if not isinstance(block, dict):
            skipped.append(SkippedEntry(
                version, None, f"version block is {type(block).__name__}, expected object",
            ))
            continue
        entries: dict[str, OpcodeEntry] = {}
        for name, raw in block.items():
            checked = _validate_entry(version, name, raw)
            if isinstance(checked, SkippedEntry):
                skipped.append(checked)
            else:
                entries[name] = checked
        versions[version] = entries
    return OpcodeTable(versions)


# ---- Public API ----

def load_opcode_table(source_text: str | bytes | None, source: str | None = None) -> LoadResult:
    """Parse opcodes.jsonc text. Never raises; check `result.failure`."""

    def fail(reason: str) -> LoadResult:
        failure = LoadFailure(reason, source)
        log.debug(failure.message())
        return LoadResult(OpcodeTable.empty(), failure=failure, source=source)

    if source_text is None:
        return fail("no source text")
    if isinstance(source_text, bytes):
        try:
            source_text = source_text.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            return fail(f"not valid UTF-8 ({e})")
    source_text = source_text.lstrip("\ufeff")
    if not source_text.strip():
        return fail("empty document")

    try:
        cleaned = strip_trailing_commas(strip_comments(source_text))
        doc = json.loads(cleaned, object_pairs_hook=_warn_duplicates)
    except json.JSONDecodeError as e:
        return fail(f"parse error at line {e.lineno} column {e.colno}: {e.msg}")
    except (ValueError, RecursionError) as e:
        return fail(str(e) or type(e).__name__)

    if not isinstance(doc, dict):
        return fail(f"top level is {type(doc).__name__}, expected object")

    skipped: list[SkippedEntry] = []
    table = _build_table(doc, skipped)
    for s in skipped:
        log.debug("Skipped opcode entry %s/%s: %s", s.version, s.name or "*", s.reason)
    log.info("Loaded %r%s (%d skipped)", table, f" from {source}" if source else "", len(skipped))
    return LoadResult(table, skipped=skipped, source=source)


def load_opcode_file(path: str | Path) -> LoadResult:
    """Read and parse an opcodes file. Never raises; check `result.failure`."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        failure = LoadFailure(f"{type(e).__name__}: {e.strerror or e}", str(path))
        log.debug(failure.message())
        return LoadResult(OpcodeTable.empty(), failure=failure, source=str(path))
    return load_opcode_table(data, source=str(path))
