"""
Overlay Opcodes — mapping file inspector

Loads an opcodes.jsonc file the same way the plugin does and shows what
it resolves to.

Usage:
    python -m overlay_opcodes resources/opcodes.jsonc                      # dump table
    python -m overlay_opcodes opcodes.jsonc --game-version 7.05 --name ActorControl
    python -m overlay_opcodes opcodes.jsonc --game-dir "C:/Games/FINAL FANTASY XIV/game"
"""

from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.table import Table

from overlay_opcodes.config import ResolverConfig
from overlay_opcodes.protocol.table import OpcodeTable
from overlay_opcodes.resolver.resolver import OpcodeResolver
from overlay_opcodes.resolver.throttle import DEFAULT_CEILING
from overlay_opcodes.version.probe import UNKNOWN_VERSION

log = logging.getLogger("overlay_opcodes.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="overlay-opcodes",
        description="Inspect a versioned opcodes mapping file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("opcodes", help="Path to opcodes.jsonc")
    parser.add_argument("--name", type=str, default=None,
                        help="Resolve this packet name for the detected version")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--game-version", type=str, default=None,
                        help="Use this client version instead of detecting it")
    source.add_argument("--game-exe", type=str, default=None,
                        help="Read the client version from this executable")
    source.add_argument("--game-dir", type=str, default=None,
                        help="Read the client version from ffxivgame.ver in this directory")
    parser.add_argument("--ceiling", type=int, default=DEFAULT_CEILING,
                        help=f"Max error diagnostics to log (default: {DEFAULT_CEILING})")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def render_table(table: OpcodeTable, version: str | None = None) -> Table:
    view = Table(title=f"Opcodes ({version})" if version else "Opcodes")
    view.add_column("Version", style="cyan")
    view.add_column("Name", style="bold")
    view.add_column("Opcode", justify="right", style="yellow")
    view.add_column("Size", justify="right")
    versions = [version] if version else table.versions()
    for v in versions:
        for name, entry in sorted(table.entries(v).items()):
            view.add_row(v, name, entry.opcode_hex, str(entry.size))
    return view


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = ResolverConfig.from_args(args)
    except ValueError as e:
        log.error("%s", e)
        return 2

    resolver = OpcodeResolver.from_config(config, logger=log)
    result = resolver.load_result
    if result is not None and result.failure is not None:
        console.print(f"[red]{result.failure.message()}[/red]")
        return 1

    if result is not None:
        for s in result.skipped:
            console.print(f"[yellow]skipped[/yellow] {s.version}/{s.name or '*'}: {s.reason}")

    version = resolver.current_version()
    if args.name is None:
        shown = version if version is not UNKNOWN_VERSION and version in resolver.table else None
        console.print(render_table(resolver.table, shown))
        return 0

    lookup = resolver.lookup(args.name)
    if not lookup.ok:
        console.print(f"[red]{lookup.error.message()}[/red]")
        return 1
    entry = lookup.entry
    console.print(f"{args.name} @ {version}: opcode={entry.opcode_hex} ({entry.opcode}) size={entry.size}")
    return 0
