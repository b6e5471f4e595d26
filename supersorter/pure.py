"""
Pure sorts for benchmarking: no Steps, no generators.

Each function sorts ``arr`` in place and returns SortCounts. Writes that
are not exchanges (shifts, write-backs, bucket placements) count as swaps.
"""

import time
from typing import List, NamedTuple


class SortCounts(NamedTuple):
    comparisons: int
    swaps: int


class TimedCounts(NamedTuple):
    elapsed_ms: float
    comparisons: int
    swaps: int


def bubble(arr: List[int]) -> SortCounts:
    c = s = 0
    n = len(arr)
    for i in range(n):
        swapped = False
        for j in range(n - i - 1):
            c += 1
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                s += 1
        if not swapped:
            break
    return SortCounts(c, s)


def selection(arr: List[int]) -> SortCounts:
    c = s = 0
    n = len(arr)
    for i in range(n):
        mi = i
        for j in range(i + 1, n):
            c += 1
            if arr[j] < arr[mi]:
                mi = j
        if mi != i:
            arr[i], arr[mi] = arr[mi], arr[i]
            s += 1
    return SortCounts(c, s)


def insertion(arr: List[int]) -> SortCounts:
    c = s = 0
    for i in range(1, len(arr)):
        key = arr[i]
        j = i - 1
        while j >= 0:
            c += 1
            if arr[j] <= key:
                break
            arr[j + 1] = arr[j]
            s += 1
            j -= 1
        arr[j + 1] = key
        s += 1
    return SortCounts(c, s)


def binary_insertion(arr: List[int]) -> SortCounts:
    c = s = 0
    for i in range(1, len(arr)):
        x = arr[i]
        lo, hi = 0, i - 1
        while lo <= hi:
            mid = (lo + hi) // 2
            c += 1
            if x < arr[mid]:
                hi = mid - 1
            else:
                lo = mid + 1
        for j in range(i - 1, lo - 1, -1):
            arr[j + 1] = arr[j]
            s += 1
        arr[lo] = x
        s += 1
    return SortCounts(c, s)


def shell(arr: List[int]) -> SortCounts:
    c = s = 0
    n = len(arr)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            t = arr[i]
            j = i
            while j >= gap:
                c += 1
                if arr[j - gap] <= t:
                    break
                arr[j] = arr[j - gap]
                s += 1
                j -= gap
            arr[j] = t
            if j != i:
                s += 1
        gap //= 2
    return SortCounts(c, s)


def counting(arr: List[int]) -> SortCounts:
    # comparisons here are scan/visit costs, swaps are writes
    c = s = 0
    n = len(arr)
    if not n:
        return SortCounts(c, s)
    mx = arr[0]
    for i in range(1, n):
        c += 1
        if arr[i] > mx:
            mx = arr[i]
    cnt = [0] * (mx + 1)
    for v in arr:
        cnt[v] += 1
        c += 1
    z = 0
    for v in range(mx + 1):
        for _ in range(cnt[v]):
            arr[z] = v
            z += 1
            s += 1
    return SortCounts(c, s)


def lsd_radix(arr: List[int]) -> SortCounts:
    c = s = 0
    mv = max(arr, default=0)
    exp = 1
    while mv // exp > 0:
        bkts = [[] for _ in range(10)]
        for v in arr:
            bkts[(v // exp) % 10].append(v)
            c += 1
        k = 0
        for b in bkts:
            for v in b:
                arr[k] = v
                k += 1
                s += 1
        exp *= 10
    return SortCounts(c, s)


def msd_radix(arr: List[int]) -> SortCounts:
    counts = [0, 0]

    def helper(lo, hi, exp):
        if hi <= lo or exp < 1:
            return
        bkts = [[] for _ in range(10)]
        for i in range(lo, hi + 1):
            bkts[(arr[i] // exp) % 10].append(arr[i])
            counts[0] += 1
        k = lo
        ranges = []
        for b in bkts:
            if len(b) > 1:
                ranges.append((k, k + len(b) - 1))
            for v in b:
                arr[k] = v
                k += 1
                counts[1] += 1
        for r_lo, r_hi in ranges:
            helper(r_lo, r_hi, exp // 10)

    if arr:
        mv, exp = max(arr), 1
        while mv // (exp * 10) > 0:
            exp *= 10
        helper(0, len(arr) - 1, exp)
    return SortCounts(*counts)


def _partition(arr, lo, hi, counts):
    pivot = arr[lo]
    i, j = lo + 1, hi
    while True:
        while i <= j:
            counts[0] += 1
            if arr[i] > pivot:
                break
            i += 1
        while i <= j:
            counts[0] += 1
            if arr[j] <= pivot:
                break
            j -= 1
        if i >= j:
            break
        arr[i], arr[j] = arr[j], arr[i]
        counts[1] += 1
    arr[lo], arr[j] = arr[j], arr[lo]
    counts[1] += 1
    return j


def quick(arr: List[int]) -> SortCounts:
    counts = [0, 0]

    def _q(lo, hi):
        while lo < hi:
            p = _partition(arr, lo, hi, counts)
            if p - lo < hi - p:
                _q(lo, p - 1)
                lo = p + 1
            else:
                _q(p + 1, hi)
                hi = p - 1

    _q(0, len(arr) - 1)
    return SortCounts(*counts)


def quick_iterative(arr: List[int]) -> SortCounts:
    counts = [0, 0]
    stack = [(0, len(arr) - 1)] if len(arr) > 1 else []
    while stack:
        lo, hi = stack.pop()
        p = _partition(arr, lo, hi, counts)
        left, right = (lo, p - 1), (p + 1, hi)
        if p - 1 - lo > hi - (p + 1):
            left, right = right, left
        for r_lo, r_hi in (right, left):
            if r_lo < r_hi:
                stack.append((r_lo, r_hi))
    return SortCounts(*counts)


def _merge(arr, lo, mid, hi, counts):
    tmp = []
    i, j = lo, mid + 1
    while i <= mid and j <= hi:
        counts[0] += 1
        if arr[i] <= arr[j]:
            tmp.append(arr[i])
            i += 1
        else:
            tmp.append(arr[j])
            j += 1
    tmp.extend(arr[i:mid + 1])
    tmp.extend(arr[j:hi + 1])
    arr[lo:hi + 1] = tmp
    counts[1] += len(tmp)


def merge(arr: List[int]) -> SortCounts:
    counts = [0, 0]

    def _ms(lo, hi):
        if lo >= hi:
            return
        mid = (lo + hi) // 2
        _ms(lo, mid)
        _ms(mid + 1, hi)
        _merge(arr, lo, mid, hi, counts)

    _ms(0, len(arr) - 1)
    return SortCounts(*counts)


def merge_iterative(arr: List[int]) -> SortCounts:
    counts = [0, 0]
    n = len(arr)
    width = 1
    while width < n:
        for lo in range(0, n - width, 2 * width):
            _merge(arr, lo, lo + width - 1, min(lo + 2 * width - 1, n - 1), counts)
        width *= 2
    return SortCounts(*counts)


def heap(arr: List[int]) -> SortCounts:
    c = s = 0
    n = len(arr)

    def sift(size, i):
        nonlocal c, s
        while True:
            big = i
            l, r = 2 * i + 1, 2 * i + 2
            if l < size:
                c += 1
                if arr[l] > arr[big]:
                    big = l
            if r < size:
                c += 1
                if arr[r] > arr[big]:
                    big = r
            if big == i:
                return
            arr[i], arr[big] = arr[big], arr[i]
            s += 1
            i = big

    for i in range(n // 2 - 1, -1, -1):
        sift(n, i)
    for i in range(n - 1, 0, -1):
        arr[0], arr[i] = arr[i], arr[0]
        s += 1
        sift(i, 0)
    return SortCounts(c, s)


def time_pure(fn, values) -> TimedCounts:
    """Run ``fn`` on a private copy of ``values`` under a wall-clock timer."""
    arr = list(values)
    t0 = time.perf_counter()
    counts = fn(arr)
    elapsed = (time.perf_counter() - t0) * 1000.0
    return TimedCounts(round(elapsed, 3), counts.comparisons, counts.swaps)
