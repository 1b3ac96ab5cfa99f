"""
Elapsed-time accounting for the ASCII timer.

Elapsed time is wall-clock time since start minus everything spent paused.
All instants come from one monotonic clock, which can be swapped out in tests.
"""

import logging
import time

logger = logging.getLogger(__name__)


class TimerPhase:
    RUNNING = "running"
    PAUSED = "paused"
    TERMINATED = "terminated"


def split_elapsed(seconds):
    """Split elapsed seconds into (hours, minutes, seconds), rounding down.

    Hours are not wrapped, so 100+ hours stay 100+.
    """
    total = int(max(0.0, seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return hours, minutes, secs


class TimerState:
    """Start instant, accumulated pause time and the pause in progress.

    Only the render loop mutates this; the input watcher hands it
    timestamped events instead of writing to it directly.
    """

    def __init__(self, clock=time.monotonic, start_time=None):
        self.clock = clock
        self.start_time = clock() if start_time is None else start_time
        self.paused_accumulated = 0.0
        self.pause_started_at = None
        self.stopped_at = None
        self.terminated = False

    @property
    def is_paused(self):
        return self.pause_started_at is not None

    @property
    def phase(self):
        if self.terminated:
            return TimerPhase.TERMINATED
        if self.is_paused:
            return TimerPhase.PAUSED
        return TimerPhase.RUNNING

    def _now(self, at):
        return self.clock() if at is None else at

    def pause(self, at=None):
        """Start a pause at ``at``. Returns False if already paused."""
        if self.is_paused:
            return False
        self.pause_started_at = self._now(at)
        logger.info("paused at %.3f", self.pause_started_at)
        return True

    def resume(self, at=None):
        """End the current pause and bank its duration. Returns False if not paused."""
        if not self.is_paused:
            return False
        now = self._now(at)
        self.paused_accumulated += max(0.0, now - self.pause_started_at)
        self.pause_started_at = None
        logger.info("resumed at %.3f, paused total %.3f", now, self.paused_accumulated)
        return True

    def toggle_pause(self, at=None):
        """Flip between running and paused; returns the new paused flag"""
        if self.is_paused:
            self.resume(at)
        else:
            self.pause(at)
        return self.is_paused

    def terminate(self, at=None):
        """Stop the clock; elapsed() is frozen from here on"""
        self.stopped_at = self._now(at)
        self.terminated = True

    def _frozen(self, now):
        now = self._now(now)
        if self.terminated:
            return min(now, self.stopped_at)
        return now

    def paused_total(self, now=None):
        """Banked pause time plus the pause still in progress, if any"""
        now = self._frozen(now)
        in_progress = 0.0
        if self.is_paused:
            in_progress = max(0.0, now - self.pause_started_at)
        return self.paused_accumulated + in_progress

    def elapsed(self, now=None):
        """Seconds spent running; frozen while paused"""
        now = self._frozen(now)
        return max(0.0, now - self.start_time - self.paused_total(now))
