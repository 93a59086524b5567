"""Shared fixtures for overlay_opcodes tests."""

import logging
from pathlib import Path

import pytest

from overlay_opcodes.protocol.loader import load_opcode_table
from overlay_opcodes.protocol.table import OpcodeTable


SCENARIO_DOC = '{"7.05": {"ActorControl": {"opcode": 306, "size": 48}}}'

MULTI_VERSION_DOC = """\
{
  // 6.58
  "2024.04.23.0000.0000": {
    "MapEffect": { "opcode": 735, "size": 11 },
    "FateControl": { "opcode": 142, "size": 16 },
  },
  /* 7.0 moved everything */
  "2024.07.06.0000.0000": {
    "MapEffect": { "opcode": 596, "size": 11 },
    "FateControl": { "opcode": 820, "size": 16 },
    "CEDirector": { "opcode": 265, "size": 16 },
  },
}
"""


class ListHandler(logging.Handler):
    """Collects emitted records; thread-safe via Handler's own lock."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> list[str]:
        return [r.getMessage() for r in self.records]


@pytest.fixture
def list_logger(request):
    """A private logger + ListHandler pair, detached from root."""
    logger = logging.getLogger(f"test.{request.node.name}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    logger.addHandler(handler)
    yield logger, handler
    logger.removeHandler(handler)


@pytest.fixture
def scenario_table() -> OpcodeTable:
    result = load_opcode_table(SCENARIO_DOC)
    assert result.ok
    return result.table


@pytest.fixture
def multi_version_table() -> OpcodeTable:
    result = load_opcode_table(MULTI_VERSION_DOC)
    assert result.ok
    return result.table


@pytest.fixture
def opcodes_file(tmp_path) -> Path:
    path = tmp_path / "opcodes.jsonc"
    path.write_text(MULTI_VERSION_DOC, encoding="utf-8")
    return path
