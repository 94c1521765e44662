"""Scoped Redis connection.

The connection is an explicit resource: callers acquire it with
``async with connect(url)`` and hand the client to the structures they build.
Nothing here is process-global.
"""
from __future__ import annotations

import contextlib
import logging
from typing import AsyncIterator

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from .errors import RemoteUnavailableError

__all__ = ["connect"]

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def connect(url: str, *, flush: bool = False) -> AsyncIterator[redis.Redis]:
    """Open a client for *url*, optionally flushing every database first."""
    client = redis.from_url(url, decode_responses=False)
    try:
        try:
            await client.ping()
            if flush:
                await client.flushall()
                logger.info("flushed all databases on %s", url)
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise RemoteUnavailableError(f"cannot reach Redis at {url}: {exc}") from exc
        logger.info("connected to %s", url)
        yield client
    finally:
        await client.aclose()
        logger.debug("closed connection to %s", url)
