"""
Host scheduling for the stepper.

The stepper never sleeps or spins. It asks a Scheduler for a timer tick
(throttled mode) or a frame tick (burst mode) and is called back later.
Every scheduled callback is paired with a CancelToken so that pausing or
resetting guarantees a stale tick does nothing.
"""

import asyncio
import heapq
import itertools
import time

from .settings import FRAME_INTERVAL


class CancelToken:
    __slots__ = ("cancelled",)

    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class Handle:
    __slots__ = ("due", "seq", "callback", "cancelled")

    def __init__(self, due, seq, callback):
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def __lt__(self, other):
        return (self.due, self.seq) < (other.due, other.seq)


class Scheduler:
    """Interface: both methods return an object with ``cancel()``."""

    def call_later(self, delay, callback):
        raise NotImplementedError

    def request_frame(self, callback):
        raise NotImplementedError


class AsyncioScheduler(Scheduler):
    def __init__(self, loop=None, frame_interval=FRAME_INTERVAL):
        self._loop = loop
        self.frame_interval = frame_interval

    @classmethod
    def from_settings(cls, settings, loop=None):
        return cls(loop, settings.frame_interval)

    @property
    def loop(self):
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay, callback):
        return self.loop.call_later(delay, callback)

    def request_frame(self, callback):
        return self.loop.call_later(self.frame_interval, callback)


class FrameScheduler(Scheduler):
    """Pull-based scheduler: the host calls ``pump()`` once per frame.

    Frame requests run on the next pump. Timers run on the first pump at
    or after their due time. Callbacks scheduled during a pump never run
    in that same pump.
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self._queue = []
        self._seq = itertools.count()

    def _push(self, due, callback):
        h = Handle(due, next(self._seq), callback)
        heapq.heappush(self._queue, h)
        return h

    def call_later(self, delay, callback):
        return self._push(self.clock() + delay, callback)

    def request_frame(self, callback):
        return self._push(self.clock(), callback)

    @property
    def pending(self):
        return sum(1 for h in self._queue if not h.cancelled)

    def pump(self, now=None):
        """Run every callback due at ``now``; returns how many ran."""
        now = self.clock() if now is None else now
        ready = []
        while self._queue and self._queue[0].due <= now:
            h = heapq.heappop(self._queue)
            if not h.cancelled:
                ready.append(h)
        ran = 0
        for h in ready:
            # an earlier callback in this batch may have cancelled it
            if h.cancelled:
                continue
            h.cancelled = True
            h.callback()
            ran += 1
        return ran
