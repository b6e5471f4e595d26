"""
Step trace model.

A Step is one observable moment of an instrumented sort. Every Step owns
a copy of the array, so mutating the working array later never changes a
Step that was already emitted.

``aux`` holds algorithm-specific context. It is one of a closed set of
variants, picked by algorithm family. ``None`` means "not applicable",
never "zero".
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

Pointers = Tuple[Tuple[str, int], ...]


def named_pointers(**named) -> Pointers:
    return tuple(named.items())


@dataclass(frozen=True)
class RangeAux:
    """Divide-and-conquer scope (quick sort, merge sort)."""

    start: int
    end: int
    pivot: Optional[int] = None
    pointers: Pointers = ()
    merge_buffer: Optional[Tuple[int, ...]] = None

    def pointer(self, label):
        return dict(self.pointers).get(label)


@dataclass(frozen=True)
class BucketAux:
    """Counting and radix sorts."""

    value: Optional[int] = None
    max_value: Optional[int] = None
    bucket_index: Optional[int] = None
    counts: Optional[Tuple[int, ...]] = None
    buckets: Optional[Tuple[Tuple[int, ...], ...]] = None
    exp: Optional[int] = None
    range: Optional[Tuple[int, int]] = None


@dataclass(frozen=True)
class HeapAux:
    heap_size: int
    pointers: Pointers = ()

    def pointer(self, label):
        return dict(self.pointers).get(label)


@dataclass(frozen=True)
class CursorAux:
    """Selection, insertion and shell sort cursors."""

    gap: Optional[int] = None
    min_idx: Optional[int] = None
    key_idx: Optional[int] = None


Aux = Union[RangeAux, BucketAux, HeapAux, CursorAux]


@dataclass(frozen=True)
class Step:
    sequence: Tuple[int, ...]
    comparing: Tuple[int, ...] = ()
    swapping: Tuple[int, ...] = ()
    sorted_indices: frozenset = field(default_factory=frozenset)
    description: str = ""
    aux: Optional[Aux] = None

    @property
    def is_comparison(self):
        return bool(self.comparing)

    @property
    def is_write(self):
        return bool(self.swapping)

    def as_dict(self):
        """JSON-ready mapping for export collaborators."""
        out = {
            "array": list(self.sequence),
            "comparing": list(self.comparing),
            "swapping": list(self.swapping),
            "sorted": sorted(self.sorted_indices),
            "description": self.description,
        }
        if self.aux is not None:
            out["aux"] = _aux_dict(self.aux)
        return out


def _aux_dict(aux):
    out = {"kind": type(aux).__name__}
    for name in aux.__dataclass_fields__:
        value = getattr(aux, name)
        if value is None or value == ():
            continue
        if name == "pointers":
            value = dict(value)
        elif name == "buckets":
            value = [list(b) for b in value]
        elif isinstance(value, tuple):
            value = list(value)
        out[name] = value
    return out


def snapshot(arr, comparing=(), swapping=(), settled=(), description="", aux=None):
    """Build a Step from the live working array; copies everything it is handed."""
    return Step(
        sequence=tuple(arr),
        comparing=tuple(comparing),
        swapping=tuple(swapping),
        sorted_indices=frozenset(settled),
        description=description,
        aux=aux,
    )


def ready_step(values):
    return snapshot(values, description="Ready to sort")


def done_step(arr):
    return snapshot(arr, settled=range(len(arr)), description="Done")
