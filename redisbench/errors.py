"""Exception hierarchy shared by the neighbor core and the Redis structures."""
from __future__ import annotations

__all__ = [
    "BenchError",
    "OutOfRangeError",
    "RemoteUnavailableError",
    "MalformedResponseError",
]


class BenchError(Exception):
    """Base class for every error raised by redisbench."""


class OutOfRangeError(BenchError, IndexError):
    """Target index outside ``[0, length - 1]`` of the collection."""

    def __init__(self, index: int, length: int | None = None):
        self.index = index
        self.length = length
        if length is None:
            msg = f"index {index} is negative"
        else:
            msg = f"index {index} out of range for collection of length {length}"
        super().__init__(msg)


class RemoteUnavailableError(BenchError, ConnectionError):
    """The remote store could not be reached or timed out."""


class MalformedResponseError(BenchError, ValueError):
    """A range fetch returned a different number of elements than requested."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"range fetch returned {actual} elements, expected {expected}")
