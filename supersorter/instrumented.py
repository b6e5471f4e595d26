"""
Instrumented sorts.

Every function here is a generator over a working list it mutates in
place. It yields one Step per comparison or write and returns the final
Step (all indices settled). ``SortMachine`` in session.py is the only
thing that drives them.
"""

from collections import deque

from .steps import (BucketAux, CursorAux, HeapAux, RangeAux, named_pointers,
                    done_step, snapshot)

# ============================================================
# ===================== SIMPLE SORTS =========================
# ============================================================


def bubble_sort(arr):
    n = len(arr)
    settled = []
    for i in range(n):
        swapped = False
        for j in range(n - i - 1):
            yield snapshot(arr, (j, j + 1), (), settled, f"Compare {arr[j]} > {arr[j + 1]} ?")
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                yield snapshot(arr, (j, j + 1), (j, j + 1), settled,
                               f"Swap: bubble {arr[j + 1]} towards the end")
        settled.append(n - i - 1)
        if not swapped:
            break
    return done_step(arr)


def selection_sort(arr):
    n = len(arr)
    settled = []
    for i in range(n):
        mi = i
        yield snapshot(arr, (i,), (), settled, f"Round {i + 1}: assume {arr[i]} is the minimum",
                       CursorAux(min_idx=mi))
        for j in range(i + 1, n):
            yield snapshot(arr, (mi, j), (), settled, f"Find minimum: compare {arr[mi]} with {arr[j]}",
                           CursorAux(min_idx=mi))
            if arr[j] < arr[mi]:
                mi = j
                yield snapshot(arr, (j,), (), settled, f"New minimum: {arr[j]}", CursorAux(min_idx=mi))
        if mi != i:
            arr[i], arr[mi] = arr[mi], arr[i]
            yield snapshot(arr, (i, mi), (i, mi), settled, f"Swap minimum {arr[i]} into position {i}",
                           CursorAux(min_idx=i))
        settled.append(i)
    return done_step(arr)


def insertion_sort(arr):
    n = len(arr)
    if n:
        yield snapshot(arr, (), (), (0,), "Index 0 starts as the sorted region")
    for i in range(1, n):
        key = arr[i]
        j = i - 1
        yield snapshot(arr, (i,), (), range(i), f"Take {key} (index {i}) for insertion",
                       CursorAux(key_idx=i))
        while j >= 0 and arr[j] > key:
            yield snapshot(arr, (j,), (), range(i), f"Compare: {arr[j]} > {key}, shift right",
                           CursorAux(key_idx=j + 1))
            arr[j + 1] = arr[j]
            yield snapshot(arr, (), (j + 1,), range(i), f"Shift {arr[j]} to {j + 1}", CursorAux(key_idx=j))
            j -= 1
        arr[j + 1] = key
        yield snapshot(arr, (), (j + 1,), range(i + 1), f"Insert {key} at {j + 1}", CursorAux(key_idx=j + 1))
    return done_step(arr)


def binary_insertion_sort(arr):
    n = len(arr)
    for i in range(1, n):
        x = arr[i]
        lo, hi = 0, i - 1
        yield snapshot(arr, (i,), (), (), f"Take {x} for insertion", CursorAux(key_idx=i))
        while lo <= hi:
            mid = (lo + hi) // 2
            yield snapshot(arr, (mid,), (), (), f"Binary search: compare {x} with {arr[mid]}",
                           CursorAux(key_idx=i))
            if x < arr[mid]:
                hi = mid - 1
            else:
                lo = mid + 1
        for j in range(i - 1, lo - 1, -1):
            arr[j + 1] = arr[j]
            yield snapshot(arr, (), (j + 1, j), (), f"Shift {arr[j]} right", CursorAux(key_idx=lo))
        arr[lo] = x
        yield snapshot(arr, (), (lo,), (), f"Insert {x} at index {lo}", CursorAux(key_idx=lo))
    return done_step(arr)


def shell_sort(arr):
    n = len(arr)
    gap = n // 2
    while gap > 0:
        aux = CursorAux(gap=gap)
        yield snapshot(arr, (), (), (), f"Gap = {gap}", aux)
        for i in range(gap, n):
            t = arr[i]
            yield snapshot(arr, (i,), (), (), f"Gap {gap}: take {t} for insertion", aux)
            j = i
            while j >= gap:
                yield snapshot(arr, (j - gap,), (), (), f"Gap {gap}: compare {t} with {arr[j - gap]}", aux)
                if arr[j - gap] <= t:
                    break
                arr[j] = arr[j - gap]
                yield snapshot(arr, (j, j - gap), (j, j - gap), (), f"Gap {gap}: move {arr[j - gap]} to {j}", aux)
                j -= gap
            arr[j] = t
            yield snapshot(arr, (), (j,), (), f"Gap {gap}: insert {t} at {j}", aux)
        gap //= 2
    return done_step(arr)

# ============================================================
# ===================== BUCKET SORTS =========================
# ============================================================


def counting_sort(arr):
    n = len(arr)
    if not n:
        return done_step(arr)
    mx = arr[0]
    yield snapshot(arr, (0,), (), (), f"Scan for the maximum, current max = {mx}",
                   BucketAux(value=arr[0], max_value=mx))
    for i in range(1, n):
        yield snapshot(arr, (i,), (), (), f"Scan {arr[i]} (current max {mx})",
                       BucketAux(value=arr[i], max_value=mx))
        if arr[i] > mx:
            mx = arr[i]
            yield snapshot(arr, (i,), (), (), f"New max = {mx}", BucketAux(value=arr[i], max_value=mx))
    yield snapshot(arr, (), (), (), f"Scan finished, max = {mx}: {mx + 1} count buckets",
                   BucketAux(max_value=mx))

    cnt = [0] * (mx + 1)
    yield snapshot(arr, (), (), (), f"Initialise {mx + 1} count buckets", BucketAux(max_value=mx, counts=tuple(cnt)))
    for i in range(n):
        v = arr[i]
        yield snapshot(arr, (i,), (), (), f"Count {v} (bucket[{v}])",
                       BucketAux(value=v, max_value=mx, bucket_index=v, counts=tuple(cnt)))
        cnt[v] += 1
        yield snapshot(arr, (i,), (), (), f"bucket[{v}] += 1",
                       BucketAux(value=v, max_value=mx, bucket_index=v, counts=tuple(cnt)))

    z = 0
    for v in range(mx + 1):
        while cnt[v] > 0:
            yield snapshot(arr, (), (z,), range(z), f"Take {v} from bucket[{v}]",
                           BucketAux(value=v, max_value=mx, bucket_index=v, counts=tuple(cnt)))
            arr[z] = v
            cnt[v] -= 1
            yield snapshot(arr, (), (z,), range(z + 1), f"Place {v} at index {z}",
                           BucketAux(value=v, max_value=mx, bucket_index=v, counts=tuple(cnt)))
            z += 1
    return done_step(arr)


def _freeze(bkts):
    return tuple(tuple(b) for b in bkts)


def lsd_radix_sort(arr):
    n = len(arr)
    mv = max(arr, default=0)
    exp = 1
    while mv // exp > 0:
        bkts = [deque() for _ in range(10)]
        cnt = [0] * 10
        yield snapshot(arr, (), (), (), f"Radix (exp={exp}): empty buckets 0-9",
                       BucketAux(counts=tuple(cnt), buckets=_freeze(bkts), exp=exp))
        for i in range(n):
            d = (arr[i] // exp) % 10
            bkts[d].append(arr[i])
            cnt[d] += 1
            yield snapshot(arr, (i,), (), (), f"Radix (exp={exp}): append {arr[i]} to bucket {d}",
                           BucketAux(value=arr[i], bucket_index=d, counts=tuple(cnt),
                                     buckets=_freeze(bkts), exp=exp))
        k = 0
        for d in range(10):
            while bkts[d]:
                v = bkts[d].popleft()
                arr[k] = v
                yield snapshot(arr, (), (k,), (), f"Radix (exp={exp}): bucket {d} gives {v} to index {k}",
                               BucketAux(value=v, bucket_index=d, counts=tuple(cnt),
                                         buckets=_freeze(bkts), exp=exp))
                k += 1
        exp *= 10
    return done_step(arr)


def msd_radix_sort(arr):
    def helper(lo, hi, exp):
        if hi <= lo or exp < 1:
            return
        bkts = [deque() for _ in range(10)]
        span = (lo, hi)
        yield snapshot(arr, (), (), (), f"MSD (exp={exp}) [{lo}, {hi}]: start, empty buckets",
                       BucketAux(buckets=_freeze(bkts), exp=exp, range=span))
        for i in range(lo, hi + 1):
            d = (arr[i] // exp) % 10
            bkts[d].append(arr[i])
            yield snapshot(arr, (i,), (), (), f"MSD (exp={exp}): put {arr[i]} in bucket {d}",
                           BucketAux(value=arr[i], bucket_index=d, buckets=_freeze(bkts), exp=exp, range=span))
        ranges = []
        k = lo
        for d in range(10):
            size = len(bkts[d])
            start = k
            while bkts[d]:
                v = bkts[d].popleft()
                arr[k] = v
                yield snapshot(arr, (), (k,), (), f"MSD (exp={exp}): write {v} back from bucket {d}",
                               BucketAux(value=v, bucket_index=d, buckets=_freeze(bkts), exp=exp, range=span))
                k += 1
            if size > 1:
                ranges.append((start, start + size - 1))
        for r_lo, r_hi in ranges:
            yield from helper(r_lo, r_hi, exp // 10)

    if arr:
        mv, exp = max(arr), 1
        while mv // (exp * 10) > 0:
            exp *= 10
        yield from helper(0, len(arr) - 1, exp)
    return done_step(arr)

# ============================================================
# ==================== DIVIDE AND CONQUER ====================
# ============================================================


def _partition(arr, lo, hi):
    """Leftmost pivot; i advances while <= pivot, j retreats while > pivot.

    Returns the pivot's final index.
    """
    pivot = arr[lo]
    i, j = lo + 1, hi

    def aux(p=lo):
        return RangeAux(lo, hi, pivot=p, pointers=named_pointers(i=i, j=j))

    yield snapshot(arr, (lo,), (), (), f"Pick pivot {pivot}", aux())
    while True:
        while i <= j and arr[i] <= pivot:
            yield snapshot(arr, (i, lo), (), (), f"i moves right: {arr[i]} <= {pivot}", aux())
            i += 1
        while i <= j and arr[j] > pivot:
            yield snapshot(arr, (j, lo), (), (), f"j moves left: {arr[j]} > {pivot}", aux())
            j -= 1
        if i >= j:
            break
        # no comparing indices here: pointer bookkeeping, not a comparison
        yield snapshot(arr, (), (), (), f"About to swap {arr[i]} and {arr[j]}", aux())
        arr[i], arr[j] = arr[j], arr[i]
        yield snapshot(arr, (i, j), (i, j), (), "Swapped", aux())
    yield snapshot(arr, (), (), (), "Move the pivot into place", aux())
    arr[lo], arr[j] = arr[j], arr[lo]
    yield snapshot(arr, (j,), (j,), (), f"Pivot {pivot} settled at {j}", aux(j))
    return j


def quick_sort(arr):
    def _q(lo, hi):
        # recurse into the smaller side, loop on the larger one
        while lo < hi:
            p = yield from _partition(arr, lo, hi)
            if p - lo < hi - p:
                yield from _q(lo, p - 1)
                lo = p + 1
            else:
                yield from _q(p + 1, hi)
                hi = p - 1

    yield from _q(0, len(arr) - 1)
    return done_step(arr)


def quick_sort_iterative(arr):
    stack = [(0, len(arr) - 1)] if len(arr) > 1 else []
    while stack:
        lo, hi = stack.pop()
        p = yield from _partition(arr, lo, hi)
        left, right = (lo, p - 1), (p + 1, hi)
        # larger side goes in first so the smaller one is popped next
        if p - 1 - lo > hi - (p + 1):
            left, right = right, left
        for r_lo, r_hi in (right, left):
            if r_lo < r_hi:
                stack.append((r_lo, r_hi))
    return done_step(arr)


def _merge(arr, lo, mid, hi):
    tmp = []
    i, j = lo, mid + 1
    while i <= mid and j <= hi:
        yield snapshot(arr, (i, j), (), (), f"Merge: compare {arr[i]} vs {arr[j]}",
                       RangeAux(lo, hi, pointers=named_pointers(i=i, j=j), merge_buffer=tuple(tmp)))
        if arr[i] <= arr[j]:
            tmp.append(arr[i])
            i += 1
        else:
            tmp.append(arr[j])
            j += 1
    tmp.extend(arr[i:mid + 1])
    tmp.extend(arr[j:hi + 1])
    for k, v in enumerate(tmp):
        arr[lo + k] = v
        yield snapshot(arr, (), (lo + k,), (), f"Write back {v} to {lo + k}",
                       RangeAux(lo, hi, merge_buffer=tuple(tmp)))


def merge_sort(arr):
    def _ms(lo, hi):
        if lo >= hi:
            return
        mid = (lo + hi) // 2
        yield snapshot(arr, (), (), (), f"Split [{lo}, {hi}] into [{lo}, {mid}] and [{mid + 1}, {hi}]",
                       RangeAux(lo, hi, merge_buffer=()))
        yield from _ms(lo, mid)
        yield from _ms(mid + 1, hi)
        yield from _merge(arr, lo, mid, hi)

    yield from _ms(0, len(arr) - 1)
    return done_step(arr)


def merge_sort_iterative(arr):
    n = len(arr)
    width = 1
    while width < n:
        yield snapshot(arr, (), (), (), f"Bottom-up pass: merge runs of width {width}",
                       RangeAux(0, n - 1, merge_buffer=()))
        for lo in range(0, n - width, 2 * width):
            mid = lo + width - 1
            hi = min(lo + 2 * width - 1, n - 1)
            yield from _merge(arr, lo, mid, hi)
        width *= 2
    return done_step(arr)


def _sift_down(arr, size, i):
    while True:
        big = i
        l, r = 2 * i + 1, 2 * i + 2
        aux = HeapAux(size, named_pointers(parent=i, left=l, right=r))
        settled = range(size, len(arr))
        if l < size:
            yield snapshot(arr, (l, big), (), settled, "Heapify: compare parent with left child", aux)
            if arr[l] > arr[big]:
                big = l
        if r < size:
            yield snapshot(arr, (r, big), (), settled, "Heapify: compare largest so far with right child", aux)
            if arr[r] > arr[big]:
                big = r
        if big == i:
            return
        arr[i], arr[big] = arr[big], arr[i]
        yield snapshot(arr, (i, big), (i, big), settled, "Heapify: swap parent and child", aux)
        i = big


def heap_sort(arr):
    n = len(arr)
    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(arr, n, i)
    for i in range(n - 1, 0, -1):
        arr[0], arr[i] = arr[i], arr[0]
        yield snapshot(arr, (0, i), (0, i), range(i, n), "Swap heap top with the last leaf", HeapAux(i))
        yield from _sift_down(arr, i, 0)
    return done_step(arr)
