"""Redis-backed ordered structures used by the benchmark.

Both variants expose the same small capability set (``bulk_insert``,
``length``, ``range_fetch``, ``delete``) so the caller picks one explicitly and
the neighbor lookup can run against either.
"""
from __future__ import annotations

import functools
import logging
import uuid
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from .codec import decode_many, decode_record, encode_record
from .errors import RemoteUnavailableError

__all__ = ["RedisList", "RedisSortedSet"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _remote(fn: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """Translate Redis connection/timeout failures into RemoteUnavailableError."""

    @functools.wraps(fn)
    async def wrapper(self, *args, **kwargs):
        try:
            return await fn(self, *args, **kwargs)
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise RemoteUnavailableError(f"{type(self).__name__}.{fn.__name__} on {self.key!r}: {exc}") from exc

    return wrapper


class _Structure:
    def __init__(self, client: Any, key: Optional[str] = None):
        self._redis = client
        self.key = key or str(uuid.uuid4())

    def __repr__(self) -> str:  # pragma: no cover
        return f"{type(self).__name__}<{self.key}>"

    @_remote
    async def delete(self) -> None:
        await self._redis.delete(self.key)


class RedisList(_Structure):
    """Records stored in a Redis list, one ``RPUSH`` per record."""

    @_remote
    async def bulk_insert(self, records: Iterable[int]) -> int:
        count = 0
        for record in records:
            await self._redis.rpush(self.key, encode_record(record))
            count += 1
        logger.debug("pushed %d records into list %s", count, self.key)
        return count

    @_remote
    async def length(self) -> int:
        return int(await self._redis.llen(self.key))

    @_remote
    async def range_fetch(self, start: int, end: int) -> list[int]:
        return decode_many(await self._redis.lrange(self.key, start, end))

    @_remote
    async def lookup_record(self, index: int) -> Optional[int]:
        """Point lookup with ``LINDEX``; ``None`` when the index is past the end."""
        blob = await self._redis.lindex(self.key, index)
        return None if blob is None else decode_record(blob)

    async def lookup_records_sequentially(self, count: int) -> None:
        for i in range(count):
            await self.lookup_record(i)


class RedisSortedSet(_Structure):
    """Records stored in a sorted set scored by insertion position.

    Scores continue from the current cardinality, so rank order equals
    insertion order across repeated ``bulk_insert`` calls, which is what
    ``range_fetch`` addresses. A record already present keeps its original
    position (``ZADD NX``) and is not counted.
    """

    @_remote
    async def bulk_insert(self, records: Iterable[int]) -> int:
        offset = int(await self._redis.zcard(self.key))
        count = 0
        for record in records:
            count += int(await self._redis.zadd(self.key, {encode_record(record): offset + count}, nx=True))
        logger.debug("added %d records into sorted set %s", count, self.key)
        return count

    @_remote
    async def length(self) -> int:
        return int(await self._redis.zcard(self.key))

    @_remote
    async def range_fetch(self, start: int, end: int) -> list[int]:
        return decode_many(await self._redis.zrange(self.key, start, end))
