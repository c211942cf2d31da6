"""Percent-encoding helpers for URL components.

The codec works on the UTF-8 bytes of its input. ASCII alphanumerics and the
characters ``: / ? = - _ . ~`` pass through unchanged, a space becomes ``+``
and every other byte is written as ``%XY`` with uppercase hex digits.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .exceptions import MalformedEscapeError

SAFE_CHARACTERS = frozenset(string.ascii_letters + string.digits + ":/?=-_.~")
QUERY_COMPONENT_UNSAFE = frozenset(":/?=")
HEX_DIGITS = "0123456789ABCDEF"

_SAFE_BYTES = frozenset(ord(char) for char in SAFE_CHARACTERS)
_HEX_VALUES = {char: int(char, 16) for char in "0123456789abcdefABCDEF"}


def _escape_byte(byte: int) -> str:
    return "%" + HEX_DIGITS[byte >> 4] + HEX_DIGITS[byte & 0x0F]


def encode(value: str) -> str:
    """Percent-encode ``value`` using the fixed whitelist."""
    parts = []
    for byte in value.encode("utf-8"):
        if byte in _SAFE_BYTES:
            parts.append(chr(byte))
        elif byte == 0x20:
            parts.append("+")
        else:
            parts.append(_escape_byte(byte))
    return "".join(parts)


def decode(value: str) -> str:
    """Reverse :func:`encode`.

    Raises:
        MalformedEscapeError: if a ``%`` is not followed by two hex digits, or
            the unescaped bytes are not valid UTF-8.
    """
    output = bytearray()
    index = 0
    length = len(value)
    while index < length:
        char = value[index]
        if char == "+":
            output.append(0x20)
            index += 1
        elif char == "%":
            if index + 2 >= length:
                raise MalformedEscapeError(
                    f"Truncated escape sequence at position {index}: {value[index:]!r}",
                    position=index,
                )
            high = _HEX_VALUES.get(value[index + 1])
            low = _HEX_VALUES.get(value[index + 2])
            if high is None or low is None:
                raise MalformedEscapeError(
                    f"Invalid escape sequence at position {index}: {value[index:index + 3]!r}",
                    position=index,
                )
            output.append(high * 16 + low)
            index += 3
        else:
            output.extend(char.encode("utf-8"))
            index += 1

    try:
        return output.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedEscapeError(
            f"Decoded bytes are not valid UTF-8: {exc.reason}",
            position=exc.start,
        ) from exc


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of :func:`try_decode`."""

    value: Optional[str] = None
    error: Optional[MalformedEscapeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def try_decode(value: str) -> DecodeResult:
    """Decode ``value`` without raising on malformed input."""
    try:
        return DecodeResult(value=decode(value))
    except MalformedEscapeError as exc:
        return DecodeResult(error=exc)


def _encode_component(value: Any) -> str:
    encoded = encode(str(value))
    # Query delimiters inside a key or value must not be read as syntax.
    return "".join(
        _escape_byte(ord(char)) if char in QUERY_COMPONENT_UNSAFE else char
        for char in encoded
    )


def encode_query(params: Optional[Mapping[str, Any]]) -> str:
    """Build ``key=value&key=value`` from a mapping, encoding each component.

    List and tuple values expand into repeated keys. ``None`` values are skipped.
    """
    if not params:
        return ""
    pairs = []
    for key, raw in params.items():
        values = raw if isinstance(raw, (list, tuple)) else [raw]
        for item in values:
            if item is None:
                continue
            pairs.append(f"{_encode_component(key)}={_encode_component(item)}")
    return "&".join(pairs)


def with_query(url: str, params: Optional[Mapping[str, Any]]) -> str:
    """Append encoded ``params`` to ``url``; the URL itself is left untouched."""
    query = encode_query(params)
    if not query:
        return url
    base, hash_mark, fragment = url.partition("#")
    if "?" not in base:
        separator = "?"
    elif base.endswith(("?", "&")):
        separator = ""
    else:
        separator = "&"
    return f"{base}{separator}{query}{hash_mark}{fragment}"
