"""Bounded byte accumulator for streamed response bodies."""
from __future__ import annotations

MAX_RESPONSE_BYTES = 5 * 1024 * 1024


class BoundedBuffer:
    """Collects chunks until the running total passes `limit`.

    Once exceeded, further appends are refused and nothing more is stored.
    """

    def __init__(self, limit: int = MAX_RESPONSE_BYTES) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._buf = bytearray()
        self._size = 0
        self._exceeded = False

    @property
    def size(self) -> int:
        return self._size

    @property
    def exceeded(self) -> bool:
        return self._exceeded

    def append(self, chunk: bytes) -> bool:
        if self._exceeded:
            return False
        if not chunk:
            return True
        self._size += len(chunk)
        if self._size > self.limit:
            self._exceeded = True
            self._buf.clear()
            return False
        self._buf.extend(chunk)
        return True

    def finalize(self) -> bytes:
        if self._exceeded:
            raise ValueError("buffer exceeded its limit")
        return bytes(self._buf)
