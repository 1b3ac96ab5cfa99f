#!/usr/bin/env python3
"""
Terminal ASCII Stopwatch
Counts up in large block digits. Press P to pause/resume, Q to quit.
"""

import argparse
import logging
import os
import queue
import signal
import sys
import threading
import time

from colorama import just_fix_windows_console
from rich.console import Console
from rich.markup import escape

from ascii_glyphs import compose_frame, format_timestamp
from key_watcher import EventKind, InputWatcher, TimerEvent
from raw_terminal import RawTerminal, TerminalModeError, default_terminal_mode
from timer_state import TimerState, split_elapsed

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\033[H\033[2J"
CURSOR_HOME = "\033[1;1H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

TICK_INTERVAL = 1.0

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def get_terminal_size():
    """Get terminal dimensions"""
    try:
        columns, rows = os.get_terminal_size()
        return columns, rows
    except OSError:
        return 80, 24  # Default fallback


class AsciiTimer:
    """Render loop: one frame per tick until a quit event arrives.

    Keystrokes (from the InputWatcher) and stop signals are delivered as
    TimerEvents on one queue; waiting on that queue with the time left
    until the next tick is the loop's only blocking point.
    """

    def __init__(self, terminal_mode, input_fd, output=None, clock=time.monotonic,
                 interval=TICK_INTERVAL, use_colors=True, center=False, handle_signals=True):
        self.terminal_mode = terminal_mode
        self.input_fd = input_fd
        self.output = output if output is not None else sys.stdout
        self.clock = clock
        self.interval = interval
        self.use_colors = use_colors
        self.center = center
        self.handle_signals = handle_signals
        self.events = queue.SimpleQueue()
        self.state = None
        self.raw = None
        self.watcher = None
        self.frames_rendered = 0
        self.quit_reason = None

    @property
    def restore_error(self):
        return self.raw.restore_error if self.raw is not None else None

    def request_stop(self, source="request"):
        """Ask the loop to finish; safe to call from any thread or a signal handler"""
        self.events.put(TimerEvent(EventKind.QUIT, self.clock(), source))

    def _handle_signal(self, signum, frame):
        self.request_stop(signal.Signals(signum).name)

    def _install_signal_handlers(self):
        if not self.handle_signals or threading.current_thread() is not threading.main_thread():
            return {}
        previous = {}
        for signum in STOP_SIGNALS:
            previous[signum] = signal.signal(signum, self._handle_signal)
        return previous

    def _restore_signal_handlers(self, previous):
        for signum, handler in previous.items():
            signal.signal(signum, handler)

    def _write(self, text):
        self.output.write(text)
        self.output.flush()

    def _write_quietly(self, text):
        # shutdown path: a dead output must not mask the original error
        try:
            self._write(text)
        except (OSError, ValueError) as e:
            logger.debug("could not write to output on shutdown: %s", e)

    def render_frame(self):
        """Clear the screen and draw the current elapsed time"""
        hours, minutes, seconds = split_elapsed(self.state.elapsed())
        size = get_terminal_size() if self.center else None
        lines = compose_frame(hours, minutes, seconds, paused=self.state.is_paused,
                              use_colors=self.use_colors, size=size)
        self._write(CLEAR_SCREEN + CURSOR_HOME + "\n".join(lines) + "\n")
        self.frames_rendered += 1

    def run(self):
        """Run until quit. Raises TerminalModeError if raw mode can't be entered."""
        self.raw = RawTerminal(self.terminal_mode)
        with self.raw:
            self.state = TimerState(clock=self.clock)
            self.watcher = InputWatcher(self.input_fd, self.events, clock=self.clock)
            previous = self._install_signal_handlers()
            try:
                self.watcher.start()
                self._write(CLEAR_SCREEN + HIDE_CURSOR)
                self._loop()
            finally:
                self.watcher.stop()
                self.watcher.join()
                self._restore_signal_handlers(previous)
                self._write_quietly(CLEAR_SCREEN + SHOW_CURSOR)
        return self.state

    def _loop(self):
        self.render_frame()
        next_tick = self.clock() + self.interval

        while True:
            now = self.clock()
            if now >= next_tick:
                self.render_frame()
                next_tick += self.interval
                if next_tick <= now:
                    # fell behind, don't burst frames to catch up
                    next_tick = now + self.interval
                continue

            try:
                event = self.events.get(timeout=next_tick - now)
            except queue.Empty:
                continue

            if event.kind == EventKind.QUIT:
                self.quit_reason = event.source
                self.state.terminate(event.at)
                logger.info("quit requested by %s", event.source)
                return

            if event.kind == EventKind.TOGGLE_PAUSE:
                self.state.toggle_pause(event.at)


def configure_logging(log_file):
    """Log to a file only; the terminal is busy drawing the timer"""
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def main(argv=None):
    """Entry point for the stopwatch"""
    parser = argparse.ArgumentParser(description="Terminal stopwatch with large ASCII digits. P pauses, Q quits.")
    parser.add_argument("--no-color", action="store_true", help="Draw the PAUSED banner without colour")
    parser.add_argument("--center", action="store_true", help="Center the digits in the terminal")
    parser.add_argument("--log-file", type=str, help="Write debug logging to this file")
    args = parser.parse_args(argv)

    configure_logging(args.log_file)
    just_fix_windows_console()
    console = Console(stderr=True)

    try:
        timer = AsciiTimer(
            default_terminal_mode(sys.stdin),
            sys.stdin.fileno(),
            output=sys.stdout,
            use_colors=not args.no_color,
            center=args.center,
        )
        state = timer.run()
    except (TerminalModeError, OSError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except KeyboardInterrupt:
        # Ctrl+C before the signal handlers were installed
        return 0

    if timer.restore_error is not None:
        console.print(f"[yellow]Warning: {escape(str(timer.restore_error))}[/yellow]")

    hours, minutes, seconds = split_elapsed(state.elapsed())
    console.print(f"[dim]Stopped at {format_timestamp(hours, minutes, seconds)}[/dim]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
