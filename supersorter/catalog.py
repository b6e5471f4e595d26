from typing import Callable, NamedTuple

from . import instrumented, pure
from .errors import UnknownAlgorithmError


class AlgorithmInfo(NamedTuple):
    key: str
    name: str
    complexity: str
    space: str
    instrumented: Callable
    pure: Callable


ALGORITHMS = [
    AlgorithmInfo("bubble",           "Bubble Sort",                "O(n^2)",     "O(1)",     instrumented.bubble_sort,           pure.bubble),
    AlgorithmInfo("selection",        "Selection Sort",             "O(n^2)",     "O(1)",     instrumented.selection_sort,        pure.selection),
    AlgorithmInfo("insertion",        "Insertion Sort",             "O(n^2)",     "O(1)",     instrumented.insertion_sort,        pure.insertion),
    AlgorithmInfo("binary_insertion", "Binary Insertion Sort",      "O(n^2)",     "O(1)",     instrumented.binary_insertion_sort, pure.binary_insertion),
    AlgorithmInfo("shell",            "Shell Sort",                 "O(n log n)", "O(1)",     instrumented.shell_sort,            pure.shell),
    AlgorithmInfo("counting",         "Counting Sort",              "O(n + k)",   "O(k)",     instrumented.counting_sort,         pure.counting),
    AlgorithmInfo("lsd_radix",        "Radix Sort (LSD)",           "O(nk)",      "O(n + k)", instrumented.lsd_radix_sort,        pure.lsd_radix),
    AlgorithmInfo("msd_radix",        "Radix Sort (MSD recursive)", "O(nk)",      "O(n + k)", instrumented.msd_radix_sort,        pure.msd_radix),
    AlgorithmInfo("quick",            "Quick Sort (recursive)",     "O(n log n)", "O(log n)", instrumented.quick_sort,            pure.quick),
    AlgorithmInfo("quick_iter",       "Quick Sort (iterative)",     "O(n log n)", "O(log n)", instrumented.quick_sort_iterative,  pure.quick_iterative),
    AlgorithmInfo("merge",            "Merge Sort (recursive)",     "O(n log n)", "O(n)",     instrumented.merge_sort,            pure.merge),
    AlgorithmInfo("merge_iter",       "Merge Sort (bottom-up)",     "O(n log n)", "O(n)",     instrumented.merge_sort_iterative,  pure.merge_iterative),
    AlgorithmInfo("heap",             "Heap Sort",                  "O(n log n)", "O(1)",     instrumented.heap_sort,             pure.heap),
]

_BY_KEY = {a.key: a for a in ALGORITHMS}


def keys():
    return [a.key for a in ALGORITHMS]


def get_algorithm(key) -> AlgorithmInfo:
    if isinstance(key, AlgorithmInfo):
        return key
    try:
        return _BY_KEY[key]
    except KeyError:
        raise UnknownAlgorithmError(key) from None
