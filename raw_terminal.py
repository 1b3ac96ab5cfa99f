"""
Terminal mode control for single-keystroke input.

A TerminalMode switches the controlling terminal into an unbuffered,
non-echoing mode and puts the saved settings back afterwards. RawTerminal
wraps one in a ``with`` block and makes sure restoration happens once.
"""

import logging
import os

if os.name != 'nt':
    import termios
    import tty

logger = logging.getLogger(__name__)


class TerminalModeError(Exception):
    """Querying or changing the terminal line settings failed"""


class TerminalMode:
    """Two-call capability: enter raw mode, restore a saved snapshot."""

    def enter_raw_mode(self):
        """Switch to raw mode and return the settings that were replaced"""
        raise NotImplementedError

    def restore_mode(self, snapshot):
        """Reapply a snapshot returned by enter_raw_mode"""
        raise NotImplementedError


class PosixTerminalMode(TerminalMode):
    """termios-backed mode: canonical mode and echo off, VMIN=1, VTIME=0.

    Signal generation (ISIG) is left on, so Ctrl+C still arrives as SIGINT.
    """

    def __init__(self, fd):
        self.fd = fd

    def enter_raw_mode(self):
        try:
            snapshot = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd, termios.TCSANOW)
        except (termios.error, OSError) as e:
            raise TerminalModeError(f"cannot configure terminal: {e}") from e
        logger.debug("raw mode enabled on fd %d", self.fd)
        return snapshot

    def restore_mode(self, snapshot):
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, snapshot)
        except (termios.error, OSError) as e:
            raise TerminalModeError(f"cannot restore terminal: {e}") from e
        logger.debug("terminal settings restored on fd %d", self.fd)


class NullTerminalMode(TerminalMode):
    """For platforms without termios: nothing to change, nothing to restore."""

    def enter_raw_mode(self):
        return None

    def restore_mode(self, snapshot):
        pass


def default_terminal_mode(stream):
    """Pick the terminal mode implementation for this platform"""
    if os.name == 'nt':
        return NullTerminalMode()
    return PosixTerminalMode(stream.fileno())


class RawTerminal:
    """Hold a terminal in raw mode for the duration of a ``with`` block.

    restore() may be called early from any exit path; only the first call
    touches the terminal. A failed restore is logged and kept on
    ``restore_error`` rather than raised, since it happens while exiting.
    """

    def __init__(self, mode):
        self.mode = mode
        self.snapshot = None
        self.active = False
        self.restore_error = None

    def __enter__(self):
        self.snapshot = self.mode.enter_raw_mode()
        self.active = True
        return self

    def __exit__(self, exc_type, exc, tb):
        self.restore()
        return False

    def restore(self):
        """Put the saved settings back; returns True if this call did it"""
        if not self.active:
            return False
        self.active = False
        snapshot, self.snapshot = self.snapshot, None
        try:
            self.mode.restore_mode(snapshot)
        except TerminalModeError as e:
            self.restore_error = e
            logger.error("terminal restore failed: %s", e)
            return False
        return True
