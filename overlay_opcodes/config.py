"""
Resolver configuration.

Where the opcodes file lives, how many diagnostics to allow, and how the
client version is detected. Version source precedence:
    game_version (static override) > game_exe (PE version) > game_dir (ffxivgame.ver)
With none of them set, the version is always unknown.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from overlay_opcodes.version.probe import (
    GameVersionFileProbe, PeVersionProbe, StaticVersionProbe, VersionProbe,
)

DEFAULT_OPCODES_PATH = Path("resources") / "opcodes.jsonc"


@dataclass
class ResolverConfig:
    """Resolver configuration."""
    # Opcodes file; relative paths are taken from plugin_dir
    opcodes_path: Path = DEFAULT_OPCODES_PATH
    plugin_dir: Path = Path(".")
    # Max error diagnostics per resolver lifetime
    diagnostic_ceiling: int = 3
    # Static version override
    game_version: str | None = None
    # Client executable to read FileVersion from
    game_exe: Path | None = None
    # Game directory containing ffxivgame.ver
    game_dir: Path | None = None

    def __post_init__(self) -> None:
        if self.diagnostic_ceiling < 0:
            raise ValueError(f"diagnostic_ceiling must be >= 0, got {self.diagnostic_ceiling}")
        self.opcodes_path = Path(self.opcodes_path)
        self.plugin_dir = Path(self.plugin_dir)

    def resolved_opcodes_path(self) -> Path:
        if self.opcodes_path.is_absolute():
            return self.opcodes_path
        return self.plugin_dir / self.opcodes_path

    def make_probe(self) -> VersionProbe:
        if self.game_version:
            return StaticVersionProbe(self.game_version)
        if self.game_exe is not None:
            return PeVersionProbe(self.game_exe)
        if self.game_dir is not None:
            return GameVersionFileProbe(self.game_dir)
        return StaticVersionProbe(None)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> ResolverConfig:
        def opt_path(value: str | None) -> Path | None:
            return Path(value) if value else None

        return cls(
            opcodes_path=Path(args.opcodes),
            diagnostic_ceiling=args.ceiling,
            game_version=args.game_version,
            game_exe=opt_path(args.game_exe),
            game_dir=opt_path(args.game_dir),
        )
