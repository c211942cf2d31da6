"""Growable byte buffer fed by the transfer engine's output chunks."""

from __future__ import annotations

from typing import Optional

from .exceptions import BufferOverflowError


class BufferAccumulator:
    """Collects streamed response chunks into one contiguous body.

    A buffer belongs to a single transfer. When it cannot hold another chunk,
    either because ``max_size`` would be exceeded or because allocation fails,
    :class:`BufferOverflowError` is raised and nothing from that chunk is kept.
    """

    def __init__(self, max_size: Optional[int] = None) -> None:
        if max_size is not None and max_size < 0:
            raise ValueError("max_size must be non-negative")
        self.max_size = max_size
        self._data = bytearray()

    @property
    def size(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def append(self, chunk: bytes) -> int:
        """Append ``chunk`` and return the number of bytes consumed."""
        chunk_size = len(chunk)
        if not chunk_size:
            return 0

        if self.max_size is not None and self.size + chunk_size > self.max_size:
            raise BufferOverflowError(
                f"Response body exceeds buffer limit of {self.max_size} bytes",
                size=self.size,
                chunk_size=chunk_size,
            )

        try:
            self._data.extend(chunk)
        except MemoryError as exc:
            raise BufferOverflowError(
                f"Out of memory growing buffer from {self.size} by {chunk_size} bytes",
                size=self.size,
                chunk_size=chunk_size,
            ) from exc
        return chunk_size

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def text(self, encoding: Optional[str] = None) -> str:
        """Decode the accumulated bytes, replacing undecodable sequences."""
        return self._data.decode(encoding or "utf-8", errors="replace")

    def release(self) -> None:
        self._data = bytearray()
