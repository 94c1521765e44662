"""Tests for the single-fetch neighbor lookup."""
import asyncio

import pytest

from redisbench import IndexedValue, MalformedResponseError, NeighborResult, OutOfRangeError, lookup
from redisbench.neighbors import window

SCENARIO = [10, 20, 30, 40, 50]


async def test_interior(collection_factory):
    """Test an interior index resolves both neighbors from a 3-wide window."""
    coll = collection_factory(SCENARIO)
    res = await lookup(coll, 2)
    assert res == NeighborResult(previous=IndexedValue(1, 20), next=IndexedValue(3, 40))
    assert coll.fetches == [(1, 3)]


async def test_head(collection_factory):
    """Test the first index has no previous neighbor."""
    coll = collection_factory(SCENARIO)
    res = await lookup(coll, 0)
    assert res.previous is None
    assert res.next == IndexedValue(1, 20)
    assert coll.fetches == [(0, 1)]


async def test_tail(collection_factory):
    """Test the last index has no next neighbor."""
    coll = collection_factory(SCENARIO)
    res = await lookup(coll, 4)
    assert res.previous == IndexedValue(3, 40)
    assert res.next is None
    assert coll.fetches == [(3, 4)]


async def test_single_element(collection_factory):
    """Test a one-element collection has no neighbors at all."""
    coll = collection_factory([99])
    res = await lookup(coll, 0)
    assert res.previous is None
    assert res.next is None
    assert coll.fetches == [(0, 0)]


async def test_every_index_uses_one_fetch(collection_factory):
    """Test every valid index costs exactly one range fetch."""
    items = list(range(0, 500, 5))
    for i in range(len(items)):
        coll = collection_factory(items)
        res = await lookup(coll, i)
        assert len(coll.fetches) == 1
        if i > 0:
            assert res.previous == IndexedValue(i - 1, items[i - 1])
        else:
            assert res.previous is None
        if i < len(items) - 1:
            assert res.next == IndexedValue(i + 1, items[i + 1])
        else:
            assert res.next is None


@pytest.mark.parametrize("index", [5, 6, 100])
async def test_past_end_rejected(collection_factory, index):
    """Test indices at or past the length are rejected without fetching."""
    coll = collection_factory(SCENARIO)
    with pytest.raises(OutOfRangeError) as exc_info:
        await lookup(coll, index)
    assert exc_info.value.length == 5
    assert coll.fetches == []


async def test_negative_rejected_without_remote_calls(collection_factory):
    """Test a negative index fails before touching the store."""
    coll = collection_factory(SCENARIO)
    with pytest.raises(OutOfRangeError):
        await lookup(coll, -1)
    assert coll.length_calls == 0
    assert coll.fetches == []


async def test_empty_collection(collection_factory):
    """Test every index of an empty collection is out of range."""
    coll = collection_factory([])
    with pytest.raises(OutOfRangeError):
        await lookup(coll, 0)
    assert coll.fetches == []


async def test_short_response_is_malformed(collection_factory):
    """Test a fetch returning fewer elements than the window is malformed."""
    coll = collection_factory(SCENARIO, response=[20, 30])
    with pytest.raises(MalformedResponseError) as exc_info:
        await lookup(coll, 2)
    assert exc_info.value.expected == 3
    assert exc_info.value.actual == 2


async def test_empty_response_is_malformed(collection_factory):
    """Test an empty fetch result is malformed."""
    coll = collection_factory(SCENARIO, response=[])
    with pytest.raises(MalformedResponseError):
        await lookup(coll, 0)


async def test_none_response_is_malformed(collection_factory):
    """Test a fetch returning None is malformed rather than a TypeError."""
    class NoneFetch(collection_factory):
        async def range_fetch(self, start, end):
            self.fetches.append((start, end))
            return None

    with pytest.raises(MalformedResponseError) as exc_info:
        await lookup(NoneFetch(SCENARIO), 2)
    assert exc_info.value.expected == 3


async def test_store_errors_propagate(collection_factory):
    """Test store errors reach the caller unchanged."""
    class Broken(collection_factory):
        async def range_fetch(self, start, end):
            raise ConnectionResetError("gone")

    with pytest.raises(ConnectionResetError):
        await lookup(Broken(SCENARIO), 1)


async def test_timeout_propagates_without_retry(collection_factory):
    """Test a caller timeout cancels the hanging fetch and is not retried."""
    never = asyncio.Event()

    class Hanging(collection_factory):
        async def range_fetch(self, start, end):
            self.fetches.append((start, end))
            await never.wait()

    coll = Hanging(SCENARIO)
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(lookup(coll, 2), 0.01)
    assert len(coll.fetches) == 1


async def test_cancellation_propagates(collection_factory):
    """Test cancelling the lookup task cancels the in-flight fetch."""
    started = asyncio.Event()
    cancelled = []

    class Hanging(collection_factory):
        async def range_fetch(self, start, end):
            self.fetches.append((start, end))
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.append(True)
                raise

    coll = Hanging(SCENARIO)
    task = asyncio.create_task(lookup(coll, 2))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert cancelled == [True]
    assert len(coll.fetches) == 1


def test_window_bounds():
    """Test window arithmetic at the head, interior and tail."""
    assert window(0, 1) == (0, 0)
    assert window(0, 5) == (0, 1)
    assert window(2, 5) == (1, 3)
    assert window(4, 5) == (3, 4)
    with pytest.raises(OutOfRangeError):
        window(5, 5)


def test_result_is_immutable():
    """Test lookup results cannot be mutated."""
    res = NeighborResult(previous=IndexedValue(0, 1))
    with pytest.raises(AttributeError):
        res.previous = None  # type: ignore[misc]
