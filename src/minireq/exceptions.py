"""Exception hierarchy for minireq."""

from __future__ import annotations

from typing import Optional


class MinireqError(Exception):
    """Base class for all minireq errors."""


class MalformedEscapeError(MinireqError, ValueError):
    """Raised when a percent-encoded string contains an invalid escape."""

    def __init__(self, message: str, *, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class BufferOverflowError(MinireqError):
    """Raised when the response buffer cannot grow to hold another chunk."""

    def __init__(self, message: str, *, size: int = 0, chunk_size: int = 0) -> None:
        super().__init__(message)
        self.size = size
        self.chunk_size = chunk_size


class TransferError(MinireqError):
    """Raised for failures reported by the transfer engine."""


class HTTPStatusError(TransferError):
    """Raised by Response.raise_for_status for 4xx/5xx statuses."""

    def __init__(self, message: str, *, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UnsupportedMethodError(MinireqError, ValueError):
    """Raised when a request uses a method the invoker cannot execute."""
