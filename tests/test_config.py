"""Tests for ResolverConfig."""

from pathlib import Path

import pytest

from overlay_opcodes.cli import build_parser
from overlay_opcodes.config import ResolverConfig, DEFAULT_OPCODES_PATH
from overlay_opcodes.protocol.entries import OpcodeEntry, NoVersion
from overlay_opcodes.resolver.resolver import OpcodeResolver
from overlay_opcodes.version.probe import (
    UNKNOWN_VERSION, StaticVersionProbe, GameVersionFileProbe, PeVersionProbe,
)


def test_defaults():
    config = ResolverConfig()
    assert config.opcodes_path == DEFAULT_OPCODES_PATH
    assert config.diagnostic_ceiling == 3
    assert config.resolved_opcodes_path() == Path(".") / "resources" / "opcodes.jsonc"


def test_negative_ceiling_rejected():
    with pytest.raises(ValueError):
        ResolverConfig(diagnostic_ceiling=-1)


def test_relative_path_under_plugin_dir(tmp_path):
    config = ResolverConfig(plugin_dir=tmp_path)
    assert config.resolved_opcodes_path() == tmp_path / "resources" / "opcodes.jsonc"


def test_absolute_path_wins(tmp_path):
    config = ResolverConfig(opcodes_path=tmp_path / "o.jsonc", plugin_dir="/elsewhere")
    assert config.resolved_opcodes_path() == tmp_path / "o.jsonc"


class TestMakeProbe:

    def test_no_source_is_unknown(self):
        probe = ResolverConfig().make_probe()
        assert probe.current_version() is UNKNOWN_VERSION

    def test_static_override_wins(self, tmp_path):
        probe = ResolverConfig(game_version="7.05", game_dir=tmp_path).make_probe()
        assert isinstance(probe, StaticVersionProbe)
        assert probe.current_version() == "7.05"

    def test_game_exe(self, tmp_path):
        probe = ResolverConfig(game_exe=tmp_path / "ffxiv_dx11.exe").make_probe()
        assert isinstance(probe, PeVersionProbe)

    def test_game_dir(self, tmp_path):
        (tmp_path / "ffxivgame.ver").write_text("2024.07.06.0000.0000", encoding="utf-8")
        probe = ResolverConfig(game_dir=tmp_path).make_probe()
        assert isinstance(probe, GameVersionFileProbe)
        assert probe.current_version() == "2024.07.06.0000.0000"


def test_from_args():
    args = build_parser().parse_args(
        ["o.jsonc", "--game-version", "7.05", "--ceiling", "5"]
    )
    config = ResolverConfig.from_args(args)
    assert config.opcodes_path == Path("o.jsonc")
    assert config.game_version == "7.05"
    assert config.diagnostic_ceiling == 5
    assert config.game_dir is None and config.game_exe is None


def test_resolver_from_config(opcodes_file, tmp_path):
    (tmp_path / "ffxivgame.ver").write_text("2024.04.23.0000.0000", encoding="utf-8")
    config = ResolverConfig(opcodes_path=opcodes_file, game_dir=tmp_path, diagnostic_ceiling=1)
    resolver = OpcodeResolver.from_config(config)
    assert resolver["FateControl"] == OpcodeEntry(142, 16)
    assert resolver.throttle.ceiling == 1


def test_resolver_from_config_without_version_source(opcodes_file):
    resolver = OpcodeResolver.from_config(ResolverConfig(opcodes_path=opcodes_file))
    assert resolver.lookup("FateControl").error == NoVersion()
