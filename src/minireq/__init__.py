"""minireq: one-shot blocking HTTP GET with percent-encoding helpers."""

from .buffer import BufferAccumulator
from .codec import DecodeResult, decode, encode, encode_query, try_decode, with_query
from .config import ClientConfig
from .exceptions import (
    BufferOverflowError,
    HTTPStatusError,
    MalformedEscapeError,
    MinireqError,
    TransferError,
    UnsupportedMethodError,
)
from .models import HTTPMethod, Request, Response
from .transfer import build_header_lines, get, send

__version__ = "0.1.0"

__all__ = [
    "BufferAccumulator",
    "BufferOverflowError",
    "ClientConfig",
    "DecodeResult",
    "HTTPMethod",
    "HTTPStatusError",
    "MalformedEscapeError",
    "MinireqError",
    "Request",
    "Response",
    "TransferError",
    "UnsupportedMethodError",
    "build_header_lines",
    "decode",
    "encode",
    "encode_query",
    "get",
    "send",
    "try_decode",
    "with_query",
]
