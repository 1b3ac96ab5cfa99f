"""
Background keystroke reader for the ASCII timer.

The watcher never touches timer state. Each recognised key is stamped with
the clock and posted as a TimerEvent; the render loop applies it.
"""

import logging
import os
import select
import threading
import time
from collections import namedtuple

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.1

INTERRUPT_BYTE = 3


class EventKind:
    TOGGLE_PAUSE = "toggle_pause"
    QUIT = "quit"


# source is "keystroke", a signal name, or whoever called request_stop
TimerEvent = namedtuple("TimerEvent", ["kind", "at", "source"])


def classify_key(byte):
    """Map one input byte to an EventKind, or None if it means nothing"""
    if byte in (ord('p'), ord('P')):
        return EventKind.TOGGLE_PAUSE
    if byte in (ord('q'), ord('Q'), INTERRUPT_BYTE):
        return EventKind.QUIT
    return None


class InputWatcher:
    """Read stdin one byte at a time on a daemon thread.

    POSIX polls the fd with select(); a Windows console has no selectable
    stdin, so there the watcher polls msvcrt instead.
    The thread ends on a quit key, end of input, a read error, or stop().
    """

    def __init__(self, fd, events, clock=time.monotonic, use_console=None):
        self.fd = fd
        self.events = events
        self.clock = clock
        self.use_console = os.name == 'nt' if use_console is None else use_console
        self.thread = None
        self._stop = threading.Event()

    def start(self):
        self.thread = threading.Thread(target=self.watch, name="input-watcher", daemon=True)
        self.thread.start()

    def stop(self):
        self._stop.set()

    def join(self, timeout=None):
        if self.thread is not None:
            self.thread.join(timeout)

    def is_alive(self):
        return self.thread is not None and self.thread.is_alive()

    def read_fd_byte(self):
        """One byte from the fd, b"" at end of input, None if nothing is ready"""
        if not select.select([self.fd], [], [], POLL_INTERVAL)[0]:
            return None
        return os.read(self.fd, 1)

    def read_console_byte(self):
        """One key from the Windows console, None if no key is waiting"""
        import msvcrt
        if not msvcrt.kbhit():
            self._stop.wait(POLL_INTERVAL)
            return None
        key = msvcrt.getch()
        if key in (b'\x00', b'\xe0'):
            # arrow/function key prefix, drop the scan code that follows
            msvcrt.getch()
            return None
        return key

    def watch(self):
        logger.debug("input watcher started on fd %d", self.fd)
        read_byte = self.read_console_byte if self.use_console else self.read_fd_byte
        while not self._stop.is_set():
            try:
                data = read_byte()
            except (OSError, ValueError) as e:
                logger.debug("input watcher stopping after read error: %s", e)
                break

            if data is None:
                continue
            if not data:
                logger.debug("end of input, input watcher stopping")
                break

            kind = classify_key(data[0])
            if kind is None:
                continue
            self.events.put(TimerEvent(kind, self.clock(), "keystroke"))
            if kind == EventKind.QUIT:
                break
        logger.debug("input watcher finished")
