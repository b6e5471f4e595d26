import asyncio

import pytest

from supersorter.benchmark import BenchmarkOutcome, BenchmarkRun, format_table
from supersorter.catalog import get_algorithm, keys
from supersorter.errors import InvalidInputError, InvalidTransitionError, UnknownAlgorithmError


def counts(results):
    return {r.algorithm: (r.comparisons, r.swaps) for r in results}


@pytest.mark.asyncio
async def test_full_run_reports_every_algorithm_in_order():
    run = BenchmarkRun(size=300, value_range=(0, 999), seed=7)
    report = await run.run()
    assert report.outcome is BenchmarkOutcome.COMPLETED
    assert [r.algorithm for r in report.results] == keys()
    assert all(r.dataset_size == 300 for r in report.results)
    assert all(r.elapsed_ms >= 0 for r in report.results)
    assert report.fastest is not None and report.slowest is not None
    assert report.total_ms >= report.slowest.elapsed_ms
    assert report.fewest_comparisons.comparisons == min(r.comparisons for r in report.results)
    assert report.fewest_swaps.swaps == min(r.swaps for r in report.results)


@pytest.mark.asyncio
async def test_shared_dataset_is_never_mutated():
    run = BenchmarkRun(size=200, seed=3, algorithms=["quick", "heap"])
    before = run.dataset
    report = await run.run()
    assert run.dataset == before
    for r in report.results:
        assert (r.comparisons, r.swaps) == tuple(get_algorithm(r.algorithm).pure(list(before)))


@pytest.mark.asyncio
async def test_order_does_not_change_counts():
    forward = await BenchmarkRun(size=250, seed=11, algorithms=keys()).run()
    backward = await BenchmarkRun(size=250, seed=11, algorithms=keys()[::-1]).run()
    assert counts(forward.results) == counts(backward.results)


@pytest.mark.asyncio
async def test_results_are_published_incrementally():
    run = BenchmarkRun(size=150, seed=1, algorithms=["bubble", "merge", "counting"])
    progress = []
    run.subscribe(lambda result, done, total: progress.append((result.algorithm, done, total)))
    seen = []
    async for result in run.stream():
        seen.append(result.algorithm)
        assert len(run.results) == len(seen)
    assert progress == [("bubble", 1, 3), ("merge", 2, 3), ("counting", 3, 3)]


@pytest.mark.asyncio
async def test_cancel_keeps_a_strict_prefix():
    full = await BenchmarkRun(size=200, seed=5).run()
    run = BenchmarkRun(size=200, seed=5)
    run.subscribe(lambda result, done, total: run.cancel() if done == 3 else None)
    report = await run.run()
    assert report.outcome is BenchmarkOutcome.ABORTED
    assert len(report.results) == 3
    assert counts(report.results) == counts(full.results[:3])
    assert run.current is None


@pytest.mark.asyncio
async def test_cancel_before_start_runs_nothing():
    run = BenchmarkRun(size=100, seed=2)
    run.cancel()
    report = await run.run()
    assert report.outcome is BenchmarkOutcome.ABORTED
    assert report.results == []
    assert report.fastest is None


@pytest.mark.asyncio
async def test_cancel_while_consuming_the_stream():
    run = BenchmarkRun(size=100, seed=2, algorithms=["bubble", "heap", "shell"])
    got = []
    async for result in run.stream():
        got.append(result.algorithm)
        run.cancel()
    assert got == ["bubble"]
    assert run.outcome is BenchmarkOutcome.ABORTED


@pytest.mark.asyncio
async def test_a_run_cannot_be_replayed():
    run = BenchmarkRun(size=100, seed=2, algorithms=["heap"])
    await run.run()
    with pytest.raises(InvalidTransitionError):
        await run.run()


@pytest.mark.asyncio
async def test_failure_is_reported_and_raised():
    def boom(arr):
        raise RuntimeError("boom")

    run = BenchmarkRun(size=100, seed=2, algorithms=["heap", "bubble"])
    run.algorithms[1] = run.algorithms[1]._replace(pure=boom)
    with pytest.raises(RuntimeError):
        await run.run()
    assert run.outcome is BenchmarkOutcome.FAILED
    assert isinstance(run.report().error, RuntimeError)
    assert [r.algorithm for r in run.results] == ["heap"]


@pytest.mark.asyncio
async def test_clear_results():
    run = BenchmarkRun(size=100, seed=2, algorithms=["heap"])
    await run.run()
    run.clear()
    assert run.results == []


def test_bad_parameters_are_rejected_up_front():
    with pytest.raises(InvalidInputError):
        BenchmarkRun(size=0)
    with pytest.raises(InvalidInputError):
        BenchmarkRun(size=10, algorithms=[])
    with pytest.raises(InvalidInputError):
        BenchmarkRun(size=10, value_range=(10, 1))
    with pytest.raises(UnknownAlgorithmError):
        BenchmarkRun(size=10, algorithms=["bogo"])


@pytest.mark.parametrize("distribution", ["ascending", "descending"])
def test_distributions_reach_the_dataset(distribution):
    run = BenchmarkRun(size=50, distribution=distribution, seed=4)
    data = list(run.dataset)
    assert data == sorted(data, reverse=distribution == "descending")


@pytest.mark.asyncio
async def test_format_table():
    report = await BenchmarkRun(size=100, seed=2, algorithms=["heap"]).run()
    lines = format_table(report.results).splitlines()
    assert lines[0].startswith("Algorithm")
    assert lines[2].startswith("Heap Sort")
    assert str(report.results[0].comparisons) in lines[2]


@pytest.mark.asyncio
async def test_abandoning_the_stream_aborts_the_run():
    run = BenchmarkRun(size=100, seed=2, algorithms=["bubble", "heap", "shell"])
    stream = run.stream()
    async for _ in stream:
        break
    await stream.aclose()
    assert run.outcome is BenchmarkOutcome.ABORTED
    assert run.current is None
    assert [r.algorithm for r in run.results] == ["bubble"]
    run.clear()
    assert run.results == []


@pytest.mark.asyncio
async def test_cancelling_the_consumer_task_aborts_the_run():
    run = BenchmarkRun(size=100, seed=2, algorithms=["heap", "shell"], pause_s=10)
    task = asyncio.create_task(run.run())
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert run.outcome is BenchmarkOutcome.ABORTED
    assert run.results == []
