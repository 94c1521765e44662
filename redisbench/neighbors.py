"""Neighbor lookup over a remotely stored ordered collection.

Given a target index, the previous and next elements are resolved with a
single bounded range fetch:

    index:   0    1    2    3    4
    value:  10   20   30   40   50
                 └────┴────┘
                 window for target 2 → [1, 3]

At the head the window shrinks to ``[0, 1]`` and at the tail to
``[n - 2, n - 1]``; a single-element collection yields ``[0, 0]``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Sequence

from .errors import MalformedResponseError, OutOfRangeError

__all__ = [
    "IndexedValue",
    "NeighborResult",
    "OrderedCollection",
    "window",
    "lookup",
]


@dataclass(frozen=True, slots=True)
class IndexedValue:
    index: int
    value: Any


@dataclass(frozen=True, slots=True)
class NeighborResult:
    previous: Optional[IndexedValue] = None
    next: Optional[IndexedValue] = None


class OrderedCollection(Protocol):
    """Capabilities the lookup needs from a remote ordered collection."""

    async def length(self) -> int: ...

    async def range_fetch(self, start: int, end: int) -> Sequence[Any]: ...


def window(target_index: int, length: int) -> tuple[int, int]:
    """Return the inclusive ``(start, end)`` fetch window around *target_index*."""
    if target_index < 0 or target_index >= length:
        raise OutOfRangeError(target_index, length)
    start = target_index if target_index == 0 else target_index - 1
    end = target_index if target_index == length - 1 else target_index + 1
    return start, end


async def lookup(collection: OrderedCollection, target_index: int) -> NeighborResult:
    """Resolve the neighbors of *target_index* with exactly one range fetch.

    Raises
    ------
    OutOfRangeError
        *target_index* is negative or ``>= collection.length()``; no range
        fetch is issued.
    MalformedResponseError
        The fetch returned a sequence whose size differs from the window.

    Store failures from ``length()`` or ``range_fetch()`` propagate unchanged.
    """
    if target_index < 0:
        raise OutOfRangeError(target_index)
    length = await collection.length()
    start, end = window(target_index, length)

    items = await collection.range_fetch(start, end)
    expected = end - start + 1
    if items is None or len(items) != expected:
        raise MalformedResponseError(expected, 0 if items is None else len(items))

    previous = None
    nxt = None
    if target_index > 0:
        previous = IndexedValue(target_index - 1, items[0])
    if target_index < length - 1:
        nxt = IndexedValue(target_index + 1, items[-1])
    return NeighborResult(previous=previous, next=nxt)
