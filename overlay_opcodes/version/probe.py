"""
Version Probes — where the running game client's version comes from.

The resolver only needs `current_version()`: an opaque version string,
or UNKNOWN_VERSION when detection failed. UNKNOWN_VERSION is a distinct
sentinel so an empty string read from a file is never mistaken for it
(an empty version is reported as unknown, see the file probes below).

Probes that touch the disk read once on construction and cache the
answer; call refresh() after the client is patched or restarted.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import pefile

log = logging.getLogger(__name__)

GAME_VERSION_FILE = "ffxivgame.ver"


class _UnknownVersion:
    """Sentinel type for an undetectable client version."""
    _instance: _UnknownVersion | None = None

    def __new__(cls) -> _UnknownVersion:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNKNOWN_VERSION"


UNKNOWN_VERSION = _UnknownVersion()

VersionId = str | _UnknownVersion


def is_unknown(version: object) -> bool:
    return version is UNKNOWN_VERSION


class VersionProbe(Protocol):
    def current_version(self) -> VersionId: ...


class StaticVersionProbe:
    """Fixed version, e.g. from a --game-version override or in tests."""

    def __init__(self, version: str | None = None):
        self.version: VersionId = version if version else UNKNOWN_VERSION

    def current_version(self) -> VersionId:
        return self.version

    def __repr__(self) -> str:
        return f"StaticVersionProbe({self.version!r})"


class GameVersionFileProbe:
    """Reads the version string the game ships in ffxivgame.ver.

    Accepts either the `game/` directory itself or the install root
    that contains it.
    """

    def __init__(self, game_dir: str | Path):
        self.game_dir = Path(game_dir)
        self._version: VersionId = UNKNOWN_VERSION
        self.refresh()

    def _candidates(self) -> list[Path]:
        return [
            self.game_dir / GAME_VERSION_FILE,
            self.game_dir / "game" / GAME_VERSION_FILE,
        ]

    def refresh(self) -> VersionId:
        self._version = UNKNOWN_VERSION
        for path in self._candidates():
            if not path.is_file():
                continue
            try:
                text = path.read_text(encoding="utf-8-sig").strip()
            except (OSError, UnicodeDecodeError) as e:
                log.debug("Could not read %s: %s", path, e)
                continue
            if text:
                self._version = text
                log.debug("Game version %s from %s", text, path)
                break
        return self._version

    def current_version(self) -> VersionId:
        return self._version


class PeVersionProbe:
    """Reads FileVersion from the client executable's version resource."""

    def __init__(self, exe_path: str | Path):
        self.exe_path = Path(exe_path)
        self._version: VersionId = UNKNOWN_VERSION
        self.refresh()

    @staticmethod
    def _string_file_version(pe: pefile.PE) -> str | None:
        for fileinfo in getattr(pe, "FileInfo", None) or []:
            for info in fileinfo:
                if getattr(info, "Key", b"") != b"StringFileInfo":
                    continue
                for table in info.StringTable:
                    value = table.entries.get(b"FileVersion")
                    if value:
                        return value.decode("utf-8", errors="replace").strip()
        return None

    @staticmethod
    def _fixed_file_version(pe: pefile.PE) -> str | None:
        fixed = getattr(pe, "VS_FIXEDFILEINFO", None)
        if not fixed:
            return None
        ms, ls = fixed[0].FileVersionMS, fixed[0].FileVersionLS
        return f"{ms >> 16}.{ms & 0xFFFF}.{ls >> 16}.{ls & 0xFFFF}"

    def refresh(self) -> VersionId:
        self._version = UNKNOWN_VERSION
        try:
            pe = pefile.PE(str(self.exe_path), fast_load=True)
        except (OSError, pefile.PEFormatError) as e:
            log.debug("Could not open %s: %s", self.exe_path, e)
            return self._version
        try:
            pe.parse_data_directories(
                directories=[pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_RESOURCE"]]
            )
            version = self._string_file_version(pe) or self._fixed_file_version(pe)
        except pefile.PEFormatError as e:
            log.debug("Could not read version resource of %s: %s", self.exe_path, e)
            version = None
        finally:
            pe.close()
        if version:
            self._version = version
            log.debug("Game version %s from %s", version, self.exe_path)
        return self._version

    def current_version(self) -> VersionId:
        return self._version
