"""Record codec: numeric records travel to Redis as msgpack blobs."""
from __future__ import annotations

from typing import Iterable

import msgpack

__all__ = ["encode_record", "decode_record", "decode_many"]


def encode_record(record: int) -> bytes:
    return msgpack.packb(record, use_bin_type=True)


def decode_record(blob: bytes) -> int:
    return msgpack.unpackb(blob, raw=False)


def decode_many(blobs: Iterable[bytes]) -> list[int]:
    return [decode_record(b) for b in blobs]
