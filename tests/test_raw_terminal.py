"""
Tests for raw_terminal: the scoped raw-mode guard and the termios backend.
"""

import os

import pytest

from raw_terminal import (
    NullTerminalMode,
    PosixTerminalMode,
    RawTerminal,
    TerminalModeError,
    default_terminal_mode,
)


pytestmark = pytest.mark.unit

posix_only = pytest.mark.skipif(os.name == 'nt', reason="termios is POSIX only")


class TestRawTerminal:
    """Tests for the RawTerminal context manager."""

    def test_restores_snapshot_on_exit(self, recording_mode):
        with RawTerminal(recording_mode) as raw:
            assert raw.active
            assert raw.snapshot == {"lflag": "original"}
        assert recording_mode.restored == [{"lflag": "original"}]
        assert raw.snapshot is None

    def test_restores_when_body_raises(self, recording_mode):
        with pytest.raises(RuntimeError):
            with RawTerminal(recording_mode):
                raise RuntimeError("boom")
        assert len(recording_mode.restored) == 1

    def test_restore_happens_once(self, recording_mode):
        """An early restore() makes the exit-time restore a no-op."""
        with RawTerminal(recording_mode) as raw:
            assert raw.restore() is True
            assert raw.restore() is False
        assert len(recording_mode.restored) == 1

    def test_enter_failure_propagates(self, mode_factory):
        mode = mode_factory(fail_enter=True)
        with pytest.raises(TerminalModeError):
            with RawTerminal(mode):
                pytest.fail("body must not run")
        assert mode.restored == []

    def test_restore_failure_is_recorded_not_raised(self, mode_factory):
        mode = mode_factory(fail_restore=True)
        with RawTerminal(mode) as raw:
            pass
        assert isinstance(raw.restore_error, TerminalModeError)
        assert len(mode.restored) == 1


class TestNullTerminalMode:
    """Tests for the no-op backend."""

    def test_round_trip(self):
        mode = NullTerminalMode()
        with RawTerminal(mode) as raw:
            assert raw.snapshot is None
        assert raw.restore_error is None


@posix_only
class TestPosixTerminalMode:
    """Tests for the termios backend against non-terminal descriptors."""

    def test_pipe_is_not_a_terminal(self, key_pipe):
        read_fd, _ = key_pipe
        with pytest.raises(TerminalModeError, match="cannot configure terminal"):
            PosixTerminalMode(read_fd).enter_raw_mode()

    def test_restore_on_pipe_fails(self, key_pipe):
        pty = pytest.importorskip("pty")
        import termios

        leader, follower = pty.openpty()
        try:
            snapshot = termios.tcgetattr(follower)
        finally:
            os.close(leader)
            os.close(follower)

        read_fd, _ = key_pipe
        with pytest.raises(TerminalModeError, match="cannot restore terminal"):
            PosixTerminalMode(read_fd).restore_mode(snapshot)

    def test_default_mode_uses_stream_fd(self, key_pipe):
        read_fd, _ = key_pipe

        class Stream:
            def fileno(self):
                return read_fd

        mode = default_terminal_mode(Stream())
        assert isinstance(mode, PosixTerminalMode)
        assert mode.fd == read_fd

    def test_pseudo_terminal_round_trip(self):
        """On a real pty, raw mode clears ICANON/ECHO and restore puts them back."""
        pty = pytest.importorskip("pty")
        import termios

        leader, follower = pty.openpty()
        try:
            before = termios.tcgetattr(follower)
            mode = PosixTerminalMode(follower)
            with RawTerminal(mode):
                during = termios.tcgetattr(follower)
                assert not during[3] & termios.ICANON
                assert not during[3] & termios.ECHO
                assert during[6][termios.VMIN] in (1, b'\x01')
                assert during[6][termios.VTIME] in (0, b'\x00')
            assert termios.tcgetattr(follower)[3] == before[3]
        finally:
            os.close(leader)
            os.close(follower)
