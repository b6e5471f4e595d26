import asyncio

import pytest

from supersorter.errors import InvalidInputError, InvalidTransitionError
from supersorter.scheduling import AsyncioScheduler, FrameScheduler
from supersorter.session import SessionController
from supersorter.settings import Settings
from supersorter.stepper import Stepper, StepperState

DATA = [(i * 37) % 101 for i in range(24)]


def make_stepper(make_clock, algorithm="shell", delay_ms=50, values=DATA):
    controller = SessionController(algorithm, values)
    sched = FrameScheduler(make_clock())
    # every clock read inside a burst costs 1 ms, so a 12 ms budget is ~12 steps
    stepper = Stepper(controller, sched, delay_ms=delay_ms, clock=make_clock(step=0.001))
    seen = []
    stepper.subscribe(lambda step, stats: seen.append((step, stats)))
    return stepper, sched, seen


def run_until_done(stepper, sched, dt=0.05, limit=100000):
    now = 0.0
    for _ in range(limit):
        if stepper.state is StepperState.FINISHED:
            return
        now += dt
        sched.pump(now)
    raise AssertionError("stepper did not finish")


def test_throttled_surfaces_every_step(make_clock):
    stepper, sched, seen = make_stepper(make_clock, delay_ms=50)
    stepper.play()
    assert stepper.state is StepperState.RUNNING
    run_until_done(stepper, sched)
    history = stepper.controller.history()
    assert [s for s, _ in seen] == history
    assert stepper.ticks == len(history)
    assert list(history[-1].sequence) == sorted(DATA)


def test_throttled_waits_for_the_delay(make_clock):
    stepper, sched, _ = make_stepper(make_clock, delay_ms=100)
    stepper.play()
    sched.pump(0.05)
    assert stepper.ticks == 0
    sched.pump(0.1)
    assert stepper.ticks == 1


def test_burst_batches_and_matches_throttled_totals(make_clock):
    slow, slow_sched, slow_seen = make_stepper(make_clock, delay_ms=50)
    slow.play()
    run_until_done(slow, slow_sched)

    fast, fast_sched, fast_seen = make_stepper(make_clock, delay_ms=0)
    assert fast.burst and not slow.burst
    fast.play()
    run_until_done(fast, fast_sched, dt=1 / 60)

    assert len(fast_seen) < len(slow_seen)
    assert fast_seen[-1][0] == slow_seen[-1][0]
    assert fast.controller.stats()[:2] == slow.controller.stats()[:2]
    assert fast.controller.history() == slow.controller.history()


def test_burst_respects_frame_budget(make_clock):
    stepper, sched, seen = make_stepper(make_clock, algorithm="bubble", delay_ms=0)
    stepper.play()
    sched.pump(1.0)
    assert stepper.ticks == 1
    assert 1 < len(stepper.controller.history()) <= 13
    assert seen[-1][0] == stepper.controller.history()[-1]


def test_pause_cancels_pending_ticks(make_clock):
    stepper, sched, _ = make_stepper(make_clock, delay_ms=50)
    stepper.play()
    sched.pump(0.05)
    stepper.pause()
    assert stepper.state is StepperState.PAUSED
    assert sched.pending == 0
    done = len(stepper.controller.history())
    for t in range(10):
        sched.pump(1 + t)
    assert len(stepper.controller.history()) == done
    stepper.play()
    sched.pump(20)
    assert len(stepper.controller.history()) == done + 1


def test_stale_tick_is_ignored_even_if_it_fires(make_clock):
    stepper, sched, _ = make_stepper(make_clock, delay_ms=50)
    stepper.play()
    token = stepper._token
    stepper.pause()
    stepper._tick(token)
    assert stepper.controller.history() == []


def test_single_step_only_when_not_running(make_clock):
    stepper, sched, seen = make_stepper(make_clock)
    step = stepper.step()
    assert stepper.state is StepperState.PAUSED
    assert seen[-1][0] is step
    assert seen[-1][1].comparisons + seen[-1][1].swaps <= 2
    stepper.play()
    with pytest.raises(InvalidTransitionError):
        stepper.step()


def test_step_after_finish_is_a_no_op(make_clock):
    stepper, sched, _ = make_stepper(make_clock, algorithm="bubble", values=[1])
    while stepper.state is not StepperState.FINISHED:
        stepper.step()
    assert stepper.step() is None
    with pytest.raises(InvalidTransitionError):
        stepper.play()


def test_reset_returns_to_idle_and_shows_ready_step(make_clock):
    stepper, sched, seen = make_stepper(make_clock, delay_ms=50)
    stepper.play()
    sched.pump(0.05)
    stepper.reset([3, 2, 1])
    assert stepper.state is StepperState.IDLE
    assert stepper.controller.session is None
    assert seen[-1][0].sequence == (3, 2, 1)
    assert sched.pending == 0
    stepper.play()
    run_until_done(stepper, sched)
    assert stepper.controller.current.sequence == (1, 2, 3)


def test_bad_reset_source_leaves_the_run_untouched(make_clock):
    stepper, sched, seen = make_stepper(make_clock, delay_ms=50)
    stepper.play()
    sched.pump(0.05)
    with pytest.raises(InvalidInputError):
        stepper.reset([1, "x"])
    assert stepper.state is StepperState.RUNNING
    assert sched.pending == 1
    run_until_done(stepper, sched)
    assert list(stepper.controller.current.sequence) == sorted(DATA)


def test_bad_reset_source_while_paused(make_clock):
    stepper, sched, _ = make_stepper(make_clock)
    stepper.step()
    session = stepper.controller.session
    with pytest.raises(InvalidInputError):
        stepper.reset([-1])
    assert stepper.state is StepperState.PAUSED
    assert stepper.controller.session is session
    assert stepper.step() is not None


def test_select_while_running_is_rejected(make_clock):
    stepper, sched, _ = make_stepper(make_clock)
    stepper.play()
    with pytest.raises(InvalidTransitionError):
        stepper.select("heap")
    assert stepper.state is StepperState.RUNNING
    stepper.reset()
    stepper.select("heap")
    assert stepper.controller.algorithm.key == "heap"


def test_set_delay_switches_policy_while_running(make_clock):
    stepper, sched, seen = make_stepper(make_clock, algorithm="bubble", delay_ms=500)
    stepper.play()
    stepper.set_delay(0)
    sched.pump(0.01)
    assert stepper.ticks == 1
    assert len(stepper.controller.history()) > 1
    assert sched.pending == 1


def test_observer_can_pause_from_inside_a_tick(make_clock):
    stepper, sched, _ = make_stepper(make_clock, delay_ms=50)
    stepper.subscribe(lambda step, stats: stepper.pause())
    stepper.play()
    sched.pump(0.05)
    assert stepper.state is StepperState.PAUSED
    assert sched.pending == 0


def test_unsubscribe(make_clock):
    stepper, sched, seen = make_stepper(make_clock)
    extra = []
    off = stepper.subscribe(lambda step, stats: extra.append(step))
    stepper.step()
    off()
    stepper.step()
    assert len(extra) == 1
    off()
    assert len(extra) == 1


@pytest.mark.asyncio
async def test_runs_on_an_asyncio_loop():
    controller = SessionController("merge", DATA)
    stepper = Stepper(controller, AsyncioScheduler(frame_interval=0.0), delay_ms=0)
    stepper.play()
    for _ in range(1000):
        if stepper.state is StepperState.FINISHED:
            break
        await asyncio.sleep(0.001)
    assert stepper.state is StepperState.FINISHED
    assert list(controller.current.sequence) == sorted(DATA)


@pytest.mark.asyncio
async def test_scheduler_frame_interval_follows_settings():
    sched = AsyncioScheduler.from_settings(Settings(fps=50))
    assert sched.frame_interval == pytest.approx(0.02)
    controller = SessionController("heap", DATA)
    stepper = Stepper(controller, sched, delay_ms=0)
    stepper.play()
    for _ in range(2000):
        if stepper.state is StepperState.FINISHED:
            break
        await asyncio.sleep(0.005)
    assert list(controller.current.sequence) == sorted(DATA)
