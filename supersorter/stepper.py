"""
Cooperative stepper.

Drives a SessionController from host ticks. Two policies:

  throttled  delay >= burst threshold: one ``advance_one()`` per timer tick
             whose period is the delay.
  burst      delay below the threshold: on each frame tick, advance as many
             times as fit in the frame budget and surface only the last Step.

Counters are kept by the controller, so both policies end with identical
totals; only the number of surfaced Steps differs.
"""

import enum
import logging
import time

from .dataset import validate_sequence
from .errors import InvalidTransitionError
from .scheduling import CancelToken
from .settings import ANIMATION_SPEED_DEFAULT, BURST_THRESHOLD_MS, FRAME_BUDGET_MS

logger = logging.getLogger(__name__)


class StepperState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class Stepper:
    def __init__(self, controller, scheduler, delay_ms=ANIMATION_SPEED_DEFAULT,
                 clock=time.perf_counter, burst_threshold_ms=BURST_THRESHOLD_MS,
                 frame_budget_ms=FRAME_BUDGET_MS):
        self.controller = controller
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self.burst_threshold_ms = burst_threshold_ms
        self.frame_budget_ms = frame_budget_ms
        self.clock = clock
        self.state = StepperState.IDLE
        self.ticks = 0
        self.surfaced = 0
        self._token = None
        self._handle = None
        self._observers = []

    @property
    def burst(self):
        return self.delay_ms < self.burst_threshold_ms

    def subscribe(self, callback):
        """``callback(step, stats)`` for every surfaced Step. Returns an unsubscribe function."""
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)
        return unsubscribe

    # ---------------------------------------------------------- transitions

    def play(self):
        if self.state is StepperState.RUNNING:
            return
        if self.state is StepperState.FINISHED:
            raise InvalidTransitionError("Sort already finished; reset first")
        if self.controller.session is None:
            self.controller.start()
        self._set_state(StepperState.RUNNING)
        self._schedule()

    def pause(self):
        if self.state is not StepperState.RUNNING:
            return
        self._cancel()
        self._set_state(StepperState.PAUSED)

    def step(self):
        """Advance exactly once outside the tick loop."""
        if self.state is StepperState.RUNNING:
            raise InvalidTransitionError("Cannot single-step while running; pause first")
        if self.state is StepperState.FINISHED:
            return None
        if self.controller.session is None:
            self.controller.start()
        adv = self.controller.advance_one()
        self._surface(adv.step)
        self._set_state(StepperState.FINISHED if adv.finished else StepperState.PAUSED)
        return adv.step

    def reset(self, source=None):
        if source is not None:
            # reject bad input before touching the running tick
            source = validate_sequence(source, allow_empty=True)
        self._cancel()
        self.controller.reset(source)
        self.ticks = 0
        self._set_state(StepperState.IDLE)
        self._surface(self.controller.current)

    def select(self, algorithm):
        self.controller.select(algorithm)
        self._cancel()
        self._set_state(StepperState.IDLE)
        self._surface(self.controller.current)

    def set_delay(self, delay_ms):
        self.delay_ms = delay_ms
        if self.state is StepperState.RUNNING:
            # re-plan under the (possibly different) policy
            self._cancel()
            self._schedule()

    # -------------------------------------------------------------- ticking

    def _set_state(self, state):
        if state is not self.state:
            logger.debug("Stepper %s -> %s", self.state.value, state.value)
            self.state = state

    def _schedule(self):
        token = self._token = CancelToken()

        def tick():
            self._tick(token)

        if self.burst:
            self._handle = self.scheduler.request_frame(tick)
        else:
            self._handle = self.scheduler.call_later(self.delay_ms / 1000.0, tick)

    def _cancel(self):
        if self._token is not None:
            self._token.cancel()
            self._token = None
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self, token):
        if token.cancelled or self.state is not StepperState.RUNNING:
            return
        self._handle = None
        self.ticks += 1
        if self.burst:
            budget = self.frame_budget_ms / 1000.0
            start = self.clock()
            while True:
                adv = self.controller.advance_one()
                if adv.finished or self.clock() - start >= budget:
                    break
        else:
            adv = self.controller.advance_one()

        if adv.finished:
            self._cancel()
            self._set_state(StepperState.FINISHED)
        self._surface(adv.step)
        # an observer may have paused or reset us
        if not adv.finished and token is self._token and self.state is StepperState.RUNNING:
            self._schedule()

    def _surface(self, step):
        self.surfaced += 1
        stats = self.controller.stats()
        for cb in list(self._observers):
            cb(step, stats)
