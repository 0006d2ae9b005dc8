"""Unit tests configuration file."""

import pytest


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def words():
    """Build expected encodings from a list of 32-byte words.

    Integers become big-endian words; bytes are right-padded to 32 bytes.
    """

    def build(*items):
        out = b""
        for item in items:
            if isinstance(item, int):
                out += item.to_bytes(32, "big")
            else:
                out += item.ljust(32, b"\x00")
        return out

    return build
