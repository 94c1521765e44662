"""redisbench: insertion and neighbor-lookup latency benchmark for Redis lists and sorted sets.

The reusable piece is `redisbench.lookup`, which resolves the previous and next
records around an index of a remotely stored ordered collection with a single
range fetch. The rest of the package (structures, connection scope, dataset
and stopwatch helpers) supports the harness in ``benchmarks/``.
"""

from __future__ import annotations

__all__ = [
    "lookup",
    "IndexedValue",
    "NeighborResult",
    "RedisList",
    "RedisSortedSet",
    "OutOfRangeError",
    "RemoteUnavailableError",
    "MalformedResponseError",
]

from .errors import MalformedResponseError, OutOfRangeError, RemoteUnavailableError
from .neighbors import IndexedValue, NeighborResult, lookup
from .structures import RedisList, RedisSortedSet
