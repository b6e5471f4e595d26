import pytest

from supersorter.catalog import keys

EDGE_INPUTS = {
    "empty": [],
    "single": [7],
    "pair": [2, 1],
    "all_equal": [4, 4, 4, 4, 4],
    "sorted": [1, 2, 3, 5, 8, 13, 21],
    "reversed": [90, 71, 64, 33, 20, 9, 5, 0],
    "duplicates": [5, 1, 5, 3, 1, 0, 3, 5],
    "multi_digit": [170, 45, 75, 90, 802, 24, 2, 66, 1000, 7],
    "scrambled": [(i * 37) % 101 for i in range(40)],
}


class FakeClock:
    """Monotonic clock that only moves when told to, or by ``step`` per call."""

    def __init__(self, start=0.0, step=0.0):
        self.t = start
        self.step = step

    def __call__(self):
        now = self.t
        self.t += self.step
        return now

    def advance(self, seconds):
        self.t += seconds


@pytest.fixture(params=keys())
def algorithm(request):
    return request.param


@pytest.fixture(params=sorted(EDGE_INPUTS))
def values(request):
    return list(EDGE_INPUTS[request.param])


@pytest.fixture
def make_clock():
    return FakeClock
