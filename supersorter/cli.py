import argparse
import asyncio
import logging
import signal
import sys

from . import catalog
from .benchmark import BenchmarkOutcome, BenchmarkRun, format_table
from .dataset import Distribution
from .errors import InvalidInputError, SuperSorterError
from .settings import BENCHMARK_SIZE_MAX, BENCHMARK_SIZE_MIN, load_settings

logger = logging.getLogger(__name__)


def build_parser():
    p = argparse.ArgumentParser(prog="supersorter", description="Step-by-step sorting visualizer and benchmark")
    p.add_argument("--settings", help="JSON settings file (default ~/.supersorter/settings.json)")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="list the available algorithms")

    vis = sub.add_parser("visualize", help="open the step viewer")
    vis.add_argument("-a", "--algorithm", default="bubble", choices=catalog.keys())
    vis.add_argument("-n", "--size", type=int)
    vis.add_argument("-d", "--delay", type=float, help="ms between steps; below 5 runs in burst mode")

    bench = sub.add_parser("benchmark", help="time the pure form of every algorithm")
    bench.add_argument("-n", "--size", type=int)
    bench.add_argument("--min", type=int, default=0)
    bench.add_argument("--max", type=int)
    bench.add_argument("--distribution", default="random", choices=[d.value for d in Distribution])
    bench.add_argument("--seed", type=int)
    bench.add_argument("-a", "--algorithm", action="append", choices=catalog.keys(),
                       help="repeat to pick algorithms (default: all)")
    return p


async def _benchmark(run):
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, run.cancel)
    except (NotImplementedError, RuntimeError):
        pass
    print(format_table([]))
    async for r in run.stream():
        print(format_table([r]).splitlines()[-1], flush=True)
    return run.report()


def cmd_benchmark(args, settings):
    size = args.size or settings.benchmark_size
    if not BENCHMARK_SIZE_MIN <= size <= BENCHMARK_SIZE_MAX:
        raise InvalidInputError(f"--size must be within [{BENCHMARK_SIZE_MIN}, {BENCHMARK_SIZE_MAX}]")
    hi = settings.benchmark_max_value if args.max is None else args.max
    run = BenchmarkRun(size, (args.min, hi), args.distribution, args.algorithm, seed=args.seed)
    report = asyncio.run(_benchmark(run))
    if report.outcome is BenchmarkOutcome.ABORTED:
        print(f"\nAborted: {len(report.results)}/{len(run.algorithms)} algorithms completed")
    elif report.fastest:
        print(f"\nFastest: {report.fastest.name} ({report.fastest.elapsed_ms:.3f} ms), "
              f"total {report.total_ms:.3f} ms")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = load_settings(args.settings)
        if args.command == "list":
            for i, a in enumerate(catalog.ALGORITHMS):
                print(f"{i + 1:02d}  {a.key:<17} {a.name:<28} {a.complexity:<11} {a.space}")
            return 0
        if args.command == "benchmark":
            return cmd_benchmark(args, settings)
        from .viewer import run_visualizer
        run_visualizer(args.algorithm, args.size, args.delay, settings)
        return 0
    except SuperSorterError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
