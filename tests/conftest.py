"""Shared fixtures: an in-process stand-in for the async Redis client."""
from collections import Counter

import pytest


class FakeRedis:
    """Implements just the commands the structures issue, and counts them."""

    def __init__(self):
        self.lists: dict = {}
        self.zsets: dict = {}
        self.calls = Counter()
        self.fail_with = None

    def _call(self, name):
        self.calls[name] += 1
        if self.fail_with is not None:
            raise self.fail_with

    async def rpush(self, key, *values):
        self._call("rpush")
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    async def llen(self, key):
        self._call("llen")
        return len(self.lists.get(key, []))

    async def lrange(self, key, start, end):
        self._call("lrange")
        return self.lists.get(key, [])[start:end + 1]

    async def lindex(self, key, index):
        self._call("lindex")
        items = self.lists.get(key, [])
        return items[index] if 0 <= index < len(items) else None

    async def zadd(self, key, mapping, nx=False):
        self._call("zadd")
        zset = self.zsets.setdefault(key, {})
        added = 0
        for member, score in mapping.items():
            if member not in zset:
                added += 1
            elif nx:
                continue
            zset[member] = score
        return added

    async def zcard(self, key):
        self._call("zcard")
        return len(self.zsets.get(key, {}))

    async def zrange(self, key, start, end):
        self._call("zrange")
        ranked = sorted(self.zsets.get(key, {}).items(), key=lambda kv: (kv[1], kv[0]))
        return [member for member, _ in ranked[start:end + 1]]

    async def delete(self, key):
        self._call("delete")
        return int(self.lists.pop(key, None) is not None) + int(self.zsets.pop(key, None) is not None)


class ListCollection:
    """Plain in-memory ordered collection that records range fetches."""

    def __init__(self, items, response=None):
        self.items = list(items)
        self.length_calls = 0
        self.fetches = []
        self._response = response

    async def length(self):
        self.length_calls += 1
        return len(self.items)

    async def range_fetch(self, start, end):
        self.fetches.append((start, end))
        if self._response is not None:
            return self._response
        return self.items[start:end + 1]


@pytest.fixture
def fake_redis():
    """Create an empty fake async Redis client."""
    return FakeRedis()


@pytest.fixture
def collection_factory():
    """Provide the in-memory ordered collection class."""
    return ListCollection
