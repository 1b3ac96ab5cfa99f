"""
Pytest configuration and shared fixtures for the ASCII timer tests.

Markers:
- @pytest.mark.unit: pure functions and single classes, no threads
- @pytest.mark.integration: the render loop with a real input thread
"""

import os
import sys

import pytest


# Make the top-level modules importable from the tests directory
_repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _repo_root not in sys.path:
    sys.path.insert(0, _repo_root)

from raw_terminal import TerminalMode, TerminalModeError  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast, isolated unit tests")
    config.addinivalue_line("markers", "integration: Render loop with live input thread")


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingTerminalMode(TerminalMode):
    """TerminalMode that counts calls and can be told to fail."""

    def __init__(self, fail_enter=False, fail_restore=False):
        self.fail_enter = fail_enter
        self.fail_restore = fail_restore
        self.enter_calls = 0
        self.restored = []

    def enter_raw_mode(self):
        self.enter_calls += 1
        if self.fail_enter:
            raise TerminalModeError("cannot configure terminal: not a tty")
        return {"lflag": "original"}

    def restore_mode(self, snapshot):
        self.restored.append(snapshot)
        if self.fail_restore:
            raise TerminalModeError("cannot restore terminal: device gone")


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_mode():
    return RecordingTerminalMode()


@pytest.fixture
def key_pipe():
    """(read_fd, write_fd) pair standing in for the keyboard."""
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def mode_factory():
    """Build RecordingTerminalModes with failure switches."""
    return RecordingTerminalMode
