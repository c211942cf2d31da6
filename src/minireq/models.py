"""Request and response data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .exceptions import HTTPStatusError

STATUS_NOT_ATTEMPTED = -1


class HTTPMethod(str, Enum):
    """HTTP methods a Request can describe."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    TRACE = "TRACE"
    OPTIONS = "OPTIONS"
    LOCK = "LOCK"
    MKCOL = "MKCOL"
    COPY = "COPY"
    MOVE = "MOVE"


@dataclass(frozen=True)
class Request:
    """Outbound request description.

    Only GET requests are executed. ``files``, ``data`` and ``auth`` are
    accepted so callers can describe a full request, but the invoker does not
    send them.
    """

    url: str
    method: HTTPMethod = HTTPMethod.GET
    headers: Mapping[str, str] = field(default_factory=dict)
    cookie: Optional[str] = None
    files: Mapping[str, str] = field(default_factory=dict)
    data: Any = None
    params: Mapping[str, Any] = field(default_factory=dict)
    auth: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, HTTPMethod):
            object.__setattr__(self, "method", HTTPMethod(str(self.method).upper()))
        object.__setattr__(self, "headers", dict(self.headers or {}))
        object.__setattr__(self, "files", dict(self.files or {}))
        object.__setattr__(self, "params", dict(self.params or {}))

    @property
    def unused_fields(self) -> list[str]:
        """Names of populated fields the invoker ignores."""
        return [name for name in ("files", "data", "auth") if getattr(self, name)]


@dataclass(frozen=True)
class Response:
    """Result of one transfer.

    ``status_code`` is -1 when no HTTP status was received. ``reason`` is
    empty unless the transfer failed, in which case ``error`` holds the
    underlying exception.
    """

    url: str
    status_code: int = STATUS_NOT_ATTEMPTED
    reason: str = ""
    content: str = ""
    elapsed: float = 0.0
    headers: Dict[str, str] = field(default_factory=dict)
    error: Optional[Exception] = field(default=None, compare=False)

    @property
    def text(self) -> str:
        return self.content

    @property
    def ok(self) -> bool:
        return not self.reason and 200 <= self.status_code < 300

    def raise_for_status(self) -> None:
        """Raise the transfer error, or HTTPStatusError for 4xx/5xx responses."""
        if self.error is not None:
            raise self.error
        if self.status_code >= 400:
            raise HTTPStatusError(
                f"HTTP {self.status_code} for {self.url}",
                status_code=self.status_code,
                url=self.url,
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "url": self.url,
            "status_code": self.status_code,
            "reason": self.reason,
            "content": self.content,
            "elapsed": self.elapsed,
            "headers": dict(self.headers),
        }
