import enum
import logging
import numbers

import numpy as np

from .errors import InvalidInputError
from .settings import MAX_ARRAY_VALUE, MIN_ARRAY_VALUE

logger = logging.getLogger(__name__)


class Distribution(str, enum.Enum):
    RANDOM = "random"
    ASCENDING = "ascending"
    DESCENDING = "descending"


def validate_sequence(values, allow_empty=False):
    """Return ``values`` as a list of plain non-negative ints, or raise.

    Counting and radix sorts index buckets by value, so every algorithm
    here shares that contract.
    """
    out = []
    for i, v in enumerate(values):
        if isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Integral):
            raise InvalidInputError(f"Value at index {i} is not an integer: {v!r}")
        if v < 0:
            raise InvalidInputError(f"Value at index {i} is negative: {v}")
        out.append(int(v))
    if not out and not allow_empty:
        raise InvalidInputError("Dataset is empty")
    return out


def validate_range(value_range):
    lo, hi = value_range
    if lo < 0 or hi < lo:
        raise InvalidInputError(f"Invalid value range [{lo}, {hi}]")
    return int(lo), int(hi)


def generate(size, value_range=(MIN_ARRAY_VALUE, MAX_ARRAY_VALUE),
             distribution=Distribution.RANDOM, seed=None):
    """Draw ``size`` integers in ``[lo, hi]``.

    ASCENDING and DESCENDING are the same uniform draw, pre-sorted.
    """
    if size < 1:
        raise InvalidInputError(f"Dataset size must be positive, got {size}")
    lo, hi = validate_range(value_range)
    distribution = Distribution(distribution)
    rng = np.random.default_rng(seed)
    arr = rng.integers(lo, hi + 1, size=size)
    if distribution is Distribution.ASCENDING:
        arr = np.sort(arr)
    elif distribution is Distribution.DESCENDING:
        arr = np.sort(arr)[::-1]
    logger.debug("Generated %d values in [%d, %d] (%s)", size, lo, hi, distribution.value)
    return arr.tolist()
