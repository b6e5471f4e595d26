"""
Session controller.

A SortMachine is one instrumented sort as an explicit object: the working
array, the suspended computation and the final Step once it is done.
``step()`` performs exactly one unit of work.

SessionController owns at most one running machine for the current
source array, plus the comparison/swap counters and the step history.
"""

import logging
import time
from typing import NamedTuple, Optional

from .catalog import get_algorithm
from .dataset import validate_sequence
from .errors import InvalidInputError, InvalidTransitionError
from .steps import Step, ready_step

logger = logging.getLogger(__name__)


class SortMachine:
    def __init__(self, algorithm, values):
        self.info = get_algorithm(algorithm)
        self.array = list(values)
        self._gen = self.info.instrumented(self.array)
        self.finished = False
        self.final_step: Optional[Step] = None

    def step(self):
        """Resume once. Returns ``(step, finished)``."""
        if self.finished:
            return self.final_step, True
        try:
            return next(self._gen), False
        except StopIteration as stop:
            self.finished = True
            self.final_step = stop.value
            self._gen = None
            return stop.value, True

    def run(self):
        """Drive to completion and return every Step, the final one included."""
        steps = []
        while True:
            step, finished = self.step()
            steps.append(step)
            if finished:
                return steps


def trace(algorithm, values):
    return SortMachine(algorithm, values).run()


class Advance(NamedTuple):
    step: Step
    finished: bool


class RunningStats(NamedTuple):
    comparisons: int
    swaps: int
    elapsed: float


class Session:
    __slots__ = ("machine", "comparisons", "swaps", "started", "ended")

    def __init__(self, machine, started):
        self.machine = machine
        self.comparisons = 0
        self.swaps = 0
        self.started = started
        self.ended = None

    @property
    def finished(self):
        return self.machine.finished


class SessionController:
    def __init__(self, algorithm="bubble", source=(), clock=time.monotonic):
        self.algorithm = get_algorithm(algorithm)
        self.source = validate_sequence(source, allow_empty=True)
        self.session: Optional[Session] = None
        self.current = ready_step(self.source)
        self._clock = clock
        self._history = []

    @property
    def active(self):
        """True while a session exists and has not finished."""
        return self.session is not None and not self.session.finished

    @property
    def finished(self):
        return self.session is not None and self.session.finished

    def select(self, algorithm):
        if self.active:
            raise InvalidTransitionError(
                f"Cannot switch to {algorithm!r} while {self.algorithm.key} is mid-sort; reset first")
        self.algorithm = get_algorithm(algorithm)
        if self.session is not None:
            self.reset()

    def start(self, algorithm=None, source=None):
        if self.active:
            raise InvalidTransitionError("A sort is already in progress; reset first")
        if algorithm is not None:
            self.algorithm = get_algorithm(algorithm)
        if source is not None:
            self.source = validate_sequence(source)
        if not self.source:
            raise InvalidInputError("Dataset is empty")
        self.session = Session(SortMachine(self.algorithm, self.source), self._clock())
        self.current = ready_step(self.source)
        self._history = []
        logger.info("Started %s on %d values", self.algorithm.name, len(self.source))
        return self.session

    def advance_one(self) -> Advance:
        s = self.session
        if s is None:
            raise InvalidTransitionError("No session to advance; start() first")
        if s.finished:
            return Advance(self.current, True)
        step, finished = s.machine.step()
        # one resume is at most one comparison and one swap
        if step.comparing:
            s.comparisons += 1
        if step.swapping:
            s.swaps += 1
        self._history.append(step)
        self.current = step
        if finished:
            s.ended = self._clock()
            logger.info("%s finished: %d comparisons, %d swaps in %d steps",
                        self.algorithm.name, s.comparisons, s.swaps, len(self._history))
        return Advance(step, finished)

    def reset(self, source=None):
        if source is not None:
            self.source = validate_sequence(source, allow_empty=True)
        if self.session is not None:
            logger.debug("Discarding %s session", self.algorithm.key)
        self.session = None
        self.current = ready_step(self.source)
        self._history = []

    def elapsed(self):
        s = self.session
        if s is None:
            return 0.0
        end = s.ended if s.ended is not None else self._clock()
        return end - s.started

    def stats(self) -> RunningStats:
        s = self.session
        if s is None:
            return RunningStats(0, 0, 0.0)
        return RunningStats(s.comparisons, s.swaps, self.elapsed())

    def history(self, every=1):
        """Emitted steps in order; with ``every > 1`` keep each k-th and the last."""
        steps = self._history
        if every <= 1 or not steps:
            return list(steps)
        last = len(steps) - 1
        return [st for i, st in enumerate(steps) if i % every == 0 or i == last]
